from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Optional

from flask import Flask, current_app, request, url_for

from .contributors import UriContributors
from .domain import Pageable
from .exceptions import AmbiguousPageableError
from .logging_config import get_logger
from .pageable import PageableArgumentResolver
from .parameters import PageableDefault, ParameterSpec, SortDefault
from .sort import SortArgumentResolver
from .uri import UriBuilder, expand_template

logger = get_logger(__name__)

EXTENSION_KEY = "pagelinks"


@dataclass
class PagingState:
    pageable_resolver: PageableArgumentResolver
    contributors: UriContributors

    @property
    def sort_resolver(self) -> SortArgumentResolver:
        return self.pageable_resolver.sort_resolver


def init_app(app: Flask, pageable_resolver: PageableArgumentResolver | None = None) -> PagingState:
    resolver = pageable_resolver if pageable_resolver is not None else PageableArgumentResolver()
    state = PagingState(resolver, UriContributors.defaults(resolver))
    app.extensions[EXTENSION_KEY] = state
    return state


def get_state() -> PagingState:
    try:
        return current_app.extensions[EXTENSION_KEY]
    except KeyError:
        raise RuntimeError("pagelinks is not initialised on this app; call init_app() first") from None


def pageable_argument(
    name: str = "pageable",
    qualifier: Optional[str] = None,
    default: Optional[PageableDefault] = None,
    resolver: Optional[PageableArgumentResolver] = None,
) -> Callable:
    """
    Inject a resolved Pageable into the view as keyword ``name``.
      @pageable_argument()                              -> ?page=&size=&sort=
      @pageable_argument("left", qualifier="left")      -> ?left_page=&left_size=
    Stacking several on one view requires distinct qualifiers.
    """
    spec = ParameterSpec(name, qualifier, default)

    def decorator(fn: Callable) -> Callable:
        specs = tuple(getattr(fn, "__pageable_parameters__", ())) + (spec,)
        try:
            PageableArgumentResolver.assert_unique(specs, fn.__name__)
        except AmbiguousPageableError:
            logger.warning("pageable.ambiguous", handler=fn.__name__, qualifier=qualifier)
            raise

        @wraps(fn)
        def wrapper(*args, **kwargs):
            active = resolver if resolver is not None else get_state().pageable_resolver
            kwargs[name] = active.resolve_argument(request.args, spec)
            return fn(*args, **kwargs)

        wrapper.__pageable_parameters__ = specs
        return wrapper
    return decorator


def sort_argument(
    name: str = "sort",
    qualifier: Optional[str] = None,
    default: Optional[SortDefault] = None,
    resolver: Optional[SortArgumentResolver] = None,
) -> Callable:
    spec = ParameterSpec(name, qualifier, default)

    def decorator(fn: Callable) -> Callable:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            active = resolver if resolver is not None else get_state().sort_resolver
            kwargs[name] = active.resolve_argument(request.args, spec)
            return fn(*args, **kwargs)
        return wrapper
    return decorator


def build_link(endpoint: str, value: Any, qualifier: Optional[str] = None, **values: Any) -> str:
    """Absolute URL for ``endpoint`` with ``value`` written onto its query string."""
    builder = UriBuilder.from_url(url_for(endpoint, _external=True, **values))
    get_state().contributors.enhance(builder, ParameterSpec(qualifier=qualifier), value)
    return builder.build()


def current_link(value: Any, qualifier: Optional[str] = None) -> str:
    """The current request URL with ``value`` written over its own parameters only."""
    builder = UriBuilder.from_url(request.url)
    get_state().contributors.enhance(builder, ParameterSpec(qualifier=qualifier), value)
    return builder.build()


def template_variables(endpoint: str, qualifier: Optional[str] = None, value_type: type = Pageable, **values: Any) -> str:
    """Absolute URL for ``endpoint`` followed by its paging template, e.g. ``{?page,size,sort}``."""
    url = url_for(endpoint, _external=True, **values)
    variables = get_state().contributors.template_variables(value_type, ParameterSpec(qualifier=qualifier), url)
    return expand_template(url, variables)
