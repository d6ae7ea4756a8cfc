from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol

from .domain import Pageable, Sort
from .pageable import PageableArgumentResolver
from .parameters import ParameterSpec
from .templates import TemplateVariables
from .uri import UriBuilder

VariablesFn = Callable[[Optional[ParameterSpec], "UriBuilder | str | None"], TemplateVariables]


class UriContributor(Protocol):
    def enhance(self, builder: UriBuilder, parameter: ParameterSpec | None, value: Any) -> None:
        ...


@dataclass(frozen=True)
class _Registration:
    value_type: type
    contributor: UriContributor
    variables: Optional[VariablesFn] = None


class UriContributors:
    """Typed set of URI contributors.

    ``enhance`` only calls the contributors registered for the value's type,
    so a link-building pass can hand over any handler argument.
    """

    def __init__(self):
        self._registrations: List[_Registration] = []

    @classmethod
    def defaults(cls, pageable_resolver: PageableArgumentResolver) -> "UriContributors":
        contributors = cls()
        contributors.register(Pageable, pageable_resolver, pageable_resolver.get_pagination_template_variables)
        sort_resolver = pageable_resolver.sort_resolver
        contributors.register(Sort, sort_resolver, sort_resolver.get_sort_template_variables)
        return contributors

    def register(self, value_type: type, contributor: UriContributor, variables: VariablesFn | None = None) -> "UriContributors":
        self._registrations.append(_Registration(value_type, contributor, variables))
        return self

    def contributors_for(self, value: Any) -> List[UriContributor]:
        return [r.contributor for r in self._registrations if isinstance(value, r.value_type)]

    def enhance(self, builder: UriBuilder, parameter: ParameterSpec | None, value: Any) -> UriBuilder:
        for contributor in self.contributors_for(value):
            contributor.enhance(builder, parameter, value)
        return builder

    def template_variables(self, value_type: type, parameter: ParameterSpec | None, template: "UriBuilder | str | None") -> TemplateVariables:
        for registration in self._registrations:
            if registration.variables is not None and issubclass(value_type, registration.value_type):
                return registration.variables(parameter, template)
        return TemplateVariables.NONE

    def __len__(self) -> int:
        return len(self._registrations)
