from __future__ import annotations

import sys
from typing import Any, Iterable, Optional

from .domain import Pageable, PageRequest
from .exceptions import AmbiguousPageableError
from .logging_config import get_logger
from .parameters import PageableDefault, ParameterSpec, as_args, parameter_name, setting
from .sort import SortArgumentResolver
from .templates import TemplateVariable, TemplateVariables, VariableType
from .uri import UriBuilder, as_builder

logger = get_logger(__name__)

DEFAULT_PAGE_PARAMETER = "page"
DEFAULT_SIZE_PARAMETER = "size"
DEFAULT_MAX_PAGE_SIZE = 2000
DEFAULT_PAGE_REQUEST = PageRequest(0, 20)


def _has_text(value: str | None) -> bool:
    return value is not None and value.strip() != ""


class PageableArgumentResolver:
    """Translates between request query parameters and :class:`Pageable` values.

    Inbound, ``resolve_argument`` reads the page and size parameters (and lets
    the sort resolver read ``sort``). Outbound, ``enhance`` writes a pageable
    back onto a :class:`UriBuilder` and ``get_pagination_template_variables``
    advertises the parameters a link accepts.

    Both directions apply the same index shift (one-indexed mode) and the same
    ``max_page_size`` cap.
    """

    page_parameter_name = setting("page_parameter_name")
    size_parameter_name = setting("size_parameter_name")
    one_indexed_parameters = setting("one_indexed_parameters")
    max_page_size = setting("max_page_size")
    fallback_pageable = setting("fallback_pageable")
    prefix = setting("prefix")
    qualifier_delimiter = setting("qualifier_delimiter")

    def __init__(self, sort_resolver: SortArgumentResolver | None = None):
        self._frozen = False
        self._sort_resolver = sort_resolver if sort_resolver is not None else SortArgumentResolver()
        self.page_parameter_name = DEFAULT_PAGE_PARAMETER
        self.size_parameter_name = DEFAULT_SIZE_PARAMETER
        self.one_indexed_parameters = False
        self.max_page_size = DEFAULT_MAX_PAGE_SIZE
        self.fallback_pageable = DEFAULT_PAGE_REQUEST
        self.prefix = ""
        self.qualifier_delimiter = "_"

    @property
    def sort_resolver(self) -> SortArgumentResolver:
        return self._sort_resolver

    def freeze(self) -> "PageableArgumentResolver":
        """Make this resolver and its sort resolver read-only."""
        self._sort_resolver.freeze()
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def is_fallback_pageable(self, pageable: Pageable | None) -> bool:
        return self.fallback_pageable is not None and self.fallback_pageable == pageable

    def parameter_name_to_use(self, base: str, parameter: ParameterSpec | None = None) -> str:
        return parameter_name(base, parameter, self.prefix, self.qualifier_delimiter)

    # -------- inbound --------

    def resolve_argument(self, args, parameter: ParameterSpec | None = None) -> Optional[Pageable]:
        args = as_args(args)
        default = self._default_or_fallback(parameter)

        page_name = self.parameter_name_to_use(self.page_parameter_name, parameter)
        size_name = self.parameter_name_to_use(self.size_parameter_name, parameter)
        page_text = args.get(page_name)
        size_text = args.get(size_name)

        page_and_size_given = _has_text(page_text) and _has_text(size_text)
        if not page_and_size_given and default is None:
            return None

        page = (
            self._parse_and_apply_boundaries(page_text, sys.maxsize, shift_index=True)
            if _has_text(page_text)
            else default.page_number
        )
        size = (
            self._parse_and_apply_boundaries(size_text, self.max_page_size, shift_index=False)
            if _has_text(size_text)
            else default.page_size
        )

        # lower bound falls back, upper bound caps
        if size < 1:
            size = default.page_size if default is not None else 1
        size = min(size, self.max_page_size)

        sort = self._sort_resolver.resolve_argument(args, parameter)
        if sort is None and default is not None:
            sort = default.sort

        pageable = PageRequest(page, size, sort)
        logger.debug(
            "pageable.resolved",
            page_parameter=page_name,
            page=pageable.page_number,
            size=pageable.page_size,
            sort=str(sort) if sort else None,
        )
        return pageable

    def _default_or_fallback(self, parameter: ParameterSpec | None) -> Optional[Pageable]:
        if parameter is not None and isinstance(parameter.default, PageableDefault):
            return parameter.default.to_pageable()
        return self.fallback_pageable

    def _parse_and_apply_boundaries(self, text: str, upper: int, shift_index: bool) -> int:
        try:
            parsed = int(text.strip()) - (1 if self.one_indexed_parameters and shift_index else 0)
        except ValueError:
            return 0
        if parsed < 0:
            return 0
        return min(parsed, upper)

    @staticmethod
    def assert_unique(parameters: Iterable[ParameterSpec], handler: str = "handler") -> None:
        """Several pageables on one handler need a distinct qualifier each."""
        seen = set()
        parameters = list(parameters)
        if len(parameters) < 2:
            return
        for parameter in parameters:
            if not parameter.qualifier or parameter.qualifier in seen:
                raise AmbiguousPageableError(handler, parameter.qualifier)
            seen.add(parameter.qualifier)

    # -------- outbound --------

    def get_pagination_template_variables(self, parameter: ParameterSpec | None, template: "UriBuilder | str | None") -> TemplateVariables:
        page_name = self.parameter_name_to_use(self.page_parameter_name, parameter)
        size_name = self.parameter_name_to_use(self.size_parameter_name, parameter)

        query = as_builder(template).query_params
        variable_type = VariableType.for_query(append=len(query) > 0)

        names = [
            TemplateVariable(name, variable_type, f"pagination.{name}.description")
            for name in (page_name, size_name)
            if name not in query
        ]

        paging = TemplateVariables(tuple(names))
        return paging.concat(self._sort_resolver.get_sort_template_variables(parameter, template))

    resolve_template_variables = get_pagination_template_variables

    def enhance(self, builder: UriBuilder, parameter: ParameterSpec | None, value: Any) -> None:
        if not isinstance(value, Pageable):
            return

        page_name = self.parameter_name_to_use(self.page_parameter_name, parameter)
        size_name = self.parameter_name_to_use(self.size_parameter_name, parameter)

        page_number = value.page_number
        builder.replace_query_param(page_name, page_number + 1 if self.one_indexed_parameters else page_number)
        builder.replace_query_param(size_name, min(value.page_size, self.max_page_size))

        self._sort_resolver.enhance(builder, parameter, value.sort)


def build_legacy_resolver() -> PageableArgumentResolver:
    """Resolver matching the old ``page.page``/``page.size`` one-indexed setup.

    The fallback ``PageRequest(1, 10)`` is the historical value and is kept
    as-is even though it reads as the second page internally.
    """
    legacy_sort = SortArgumentResolver(sort_parameter="page.sort", legacy_mode=True)

    resolver = PageableArgumentResolver(legacy_sort)
    resolver.page_parameter_name = "page.page"
    resolver.size_parameter_name = "page.size"
    resolver.fallback_pageable = PageRequest(1, 10)
    resolver.one_indexed_parameters = True
    return resolver.freeze()


LEGACY = build_legacy_resolver()
