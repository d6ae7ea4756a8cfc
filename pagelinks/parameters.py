from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from werkzeug.datastructures import MultiDict

from .domain import Direction, PageRequest, Sort
from .exceptions import ResolverFrozenError


@dataclass(frozen=True)
class SortDefault:
    """Per call-site default sort used when the request carries none."""

    properties: Tuple[str, ...] = ()
    direction: Direction = Direction.ASC

    def to_sort(self) -> Optional[Sort]:
        if not self.properties:
            return None
        return Sort.by(*self.properties, direction=self.direction)


@dataclass(frozen=True)
class PageableDefault:
    """Per call-site default page, the counterpart of ``fallback_pageable``."""

    page: int = 0
    size: int = 10
    sort: Tuple[str, ...] = ()
    direction: Direction = Direction.ASC

    def to_pageable(self) -> PageRequest:
        sort = Sort.by(*self.sort, direction=self.direction) if self.sort else None
        return PageRequest(self.page, self.size, sort)


@dataclass(frozen=True)
class ParameterSpec:
    """What a handler declares about one pageable or sort argument.

    ``qualifier`` namespaces the query parameters (``<qualifier>_page``) so a
    single handler can take more than one pageable.
    """

    name: str = "pageable"
    qualifier: Optional[str] = None
    default: Union[PageableDefault, SortDefault, None] = None


def parameter_name(base: str, parameter: ParameterSpec | None, prefix: str = "", delimiter: str = "_") -> str:
    parts = [prefix]
    if parameter is not None and parameter.qualifier:
        parts.append(parameter.qualifier)
        parts.append(delimiter)
    parts.append(base)
    return "".join(parts)


def as_args(args) -> MultiDict:
    """Accept ``request.args`` as-is; wrap plain mappings for tests and scripts."""
    if args is None:
        return MultiDict()
    if isinstance(args, MultiDict):
        return args
    return MultiDict(args)


def setting(attr: str) -> property:
    """A resolver setting that refuses writes once the owner is frozen."""
    private = "_" + attr

    def getter(self):
        return getattr(self, private)

    def setter(self, value):
        if getattr(self, "_frozen", False):
            raise ResolverFrozenError(type(self).__name__, attr)
        setattr(self, private, value)

    return property(getter, setter)
