from __future__ import annotations

import math
from typing import Any, Dict, Optional

from .domain import Pageable, PageRequest
from .pageable import PageableArgumentResolver
from .parameters import ParameterSpec
from .uri import UriBuilder, expand_template
from .validators import LinkSchema, PageMetadataSchema


def total_pages(page_size: int, total_elements: int) -> int:
    if page_size < 1:
        return 0
    return math.ceil(total_elements / page_size)


class PageLinksAssembler:
    """Builds HAL-style navigation links for one page of a collection.

    Every link goes through the resolver's ``enhance`` so the hrefs use the
    same parameter names, index convention and size cap as inbound requests.
    """

    def __init__(self, resolver: PageableArgumentResolver | None = None):
        self.resolver = resolver if resolver is not None else PageableArgumentResolver()
        self._link_schema = LinkSchema()
        self._metadata_schema = PageMetadataSchema()

    def page_metadata(self, pageable: Pageable, total_elements: int) -> Dict[str, Any]:
        return self._metadata_schema.dump({
            "size": pageable.page_size,
            "number": pageable.page_number,
            "total_elements": total_elements,
            "total_pages": total_pages(pageable.page_size, total_elements),
        })

    def links(
        self,
        base_url: str,
        pageable: Pageable,
        total_elements: int,
        parameter: Optional[ParameterSpec] = None,
    ) -> Dict[str, Dict[str, Any]]:
        pages = total_pages(pageable.page_size, total_elements)
        current = PageRequest(pageable.page_number, pageable.page_size, pageable.sort)
        last = PageRequest(max(pages - 1, 0), pageable.page_size, pageable.sort)

        links: Dict[str, Dict[str, Any]] = {"first": self._link(base_url, current.first(), parameter)}
        if current.has_previous:
            links["prev"] = self._link(base_url, current.previous_or_first(), parameter)
        links["self"] = self._link(base_url, current, parameter)
        if current.page_number + 1 < pages:
            links["next"] = self._link(base_url, current.next(), parameter)
        links["last"] = self._link(base_url, last, parameter)
        return links

    def template(self, base_url: str, parameter: Optional[ParameterSpec] = None) -> Dict[str, Any]:
        variables = self.resolver.get_pagination_template_variables(parameter, base_url)
        return self._link_schema.dump({"href": expand_template(base_url, variables), "templated": len(variables) > 0})

    def _link(self, base_url: str, pageable: Pageable, parameter: Optional[ParameterSpec]) -> Dict[str, Any]:
        builder = UriBuilder.from_url(base_url)
        self.resolver.enhance(builder, parameter, pageable)
        return self._link_schema.dump({"href": builder.build(), "templated": False})
