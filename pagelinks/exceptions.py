from __future__ import annotations


class PagingError(Exception):
    """Base class for configuration-time paging errors.

    Carries the error code and HTTP status used by ``error_response``.
    """

    def __init__(self, message: str = "", *, code: str = "PAGING_ERROR", status_code: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class ResolverFrozenError(PagingError):
    def __init__(self, resolver: str = "", attribute: str = "") -> None:
        self.resolver = resolver
        self.attribute = attribute
        super().__init__(
            f"{resolver} is frozen; cannot change '{attribute}'",
            code="RESOLVER_FROZEN",
        )


class AmbiguousPageableError(PagingError):
    def __init__(self, handler: str = "", qualifier: str | None = None) -> None:
        self.handler = handler
        self.qualifier = qualifier
        super().__init__(
            f"Invalid pageable parameters on {handler}: multiple pageable arguments "
            f"need a distinct qualifier each (duplicate: {qualifier!r})",
            code="AMBIGUOUS_PAGEABLE",
        )
