from __future__ import annotations

from typing import Any, List, Optional, Tuple
from urllib.parse import quote_plus, unquote_plus, urlsplit, urlunsplit

from werkzeug.datastructures import MultiDict


def parse_query(query: str) -> List[Tuple[str, Optional[str]]]:
    """Split a query string into pairs; a key without ``=`` gets ``None``."""
    pairs: List[Tuple[str, Optional[str]]] = []
    for part in query.split("&"):
        if not part:
            continue
        if "=" in part:
            key, value = part.split("=", 1)
            pairs.append((unquote_plus(key), unquote_plus(value)))
        else:
            pairs.append((unquote_plus(part), None))
    return pairs


def encode_query(pairs) -> str:
    encoded = []
    for key, value in pairs:
        if value is None:
            encoded.append(quote_plus(key))
        else:
            encoded.append(quote_plus(key) + "=" + quote_plus(value, safe=","))
    return "&".join(encoded)


def expand_template(url: str, variables: Any) -> str:
    """Append rendered template variables to ``url``, ahead of any fragment."""
    base, hash_sign, fragment = url.partition("#")
    return base + str(variables) + hash_sign + fragment


class UriBuilder:
    """Mutable URL builder with multi-valued query parameters.

    Query values are stringified on insertion and keep their insertion order.
    Valueless keys (``?expand``) hold ``None`` and are written back without ``=``.
    """

    def __init__(self, scheme: str = "", netloc: str = "", path: str = "", query: MultiDict | None = None, fragment: str = ""):
        self.scheme = scheme
        self.netloc = netloc
        self.path = path
        self._query: MultiDict = MultiDict(query) if query is not None else MultiDict()
        self.fragment = fragment

    @classmethod
    def from_url(cls, url: str) -> "UriBuilder":
        parts = urlsplit(url)
        query = MultiDict(parse_query(parts.query))
        return cls(parts.scheme, parts.netloc, parts.path, query, parts.fragment)

    def copy(self) -> "UriBuilder":
        return UriBuilder(self.scheme, self.netloc, self.path, self._query, self.fragment)

    def query_param(self, name: str, *values: Any) -> "UriBuilder":
        if not values:
            self._query.add(name, None)
        for value in values:
            self._query.add(name, "" if value is None else str(value))
        return self

    def replace_query_param(self, name: str, *values: Any) -> "UriBuilder":
        self._query.poplist(name)
        for value in values:
            self._query.add(name, "" if value is None else str(value))
        return self

    @property
    def query_params(self) -> MultiDict:
        return self._query.copy()

    @property
    def has_query_params(self) -> bool:
        return len(self._query) > 0

    def build(self) -> str:
        query = encode_query(self._query.items(multi=True))
        return urlunsplit((self.scheme, self.netloc, self.path, query, self.fragment))

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        return f"UriBuilder({self.build()!r})"


def as_builder(template: "UriBuilder | str | None") -> UriBuilder:
    if template is None:
        return UriBuilder()
    if isinstance(template, UriBuilder):
        return template
    return UriBuilder.from_url(template)
