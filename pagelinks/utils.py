from __future__ import annotations

from typing import Any, Optional

from flask import jsonify

from .domain import Pageable, Sort
from .validators import PageableSchema


def error_response(code: str, message: str, status: int, details: Optional[list[dict[str, Any]]] = None):
    payload: dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
        }
    }
    if details:
        payload["error"]["details"] = details
    return jsonify(payload), status


def sort_to_list(sort: Sort | None) -> list[str]:
    if not sort:
        return []
    return [f"{o.property},{o.direction.value}" for o in sort]


def pageable_to_dict(pageable: Pageable | None) -> dict | None:
    """JSON-safe view of a pageable (internal, zero-based numbering)."""
    if pageable is None:
        return None
    return PageableSchema().dump({
        "page": pageable.page_number,
        "size": pageable.page_size,
        "sort": sort_to_list(pageable.sort),
    })
