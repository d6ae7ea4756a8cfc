# pagelinks/routes/pages.py
from __future__ import annotations

from flask import Blueprint, jsonify, request

from ..binding import current_link, get_state, pageable_argument, template_variables
from ..links import PageLinksAssembler
from ..utils import pageable_to_dict
from ..validators import PageQuerySchema

pages_bp = Blueprint("pages", __name__, url_prefix="/api/v1/pages")
pages_bp.strict_slashes = False

# -------- routes --------

@pages_bp.get("/")
@pageable_argument()
def describe_page(pageable):
    """Echo the resolved pageable with navigation links for ``?total=N`` items."""
    resolver = get_state().pageable_resolver
    total = PageQuerySchema().load(request.args)["total"]
    base_url = request.base_url

    assembler = PageLinksAssembler(resolver)
    return jsonify({
        "pageable": pageable_to_dict(pageable),
        "defaulted": resolver.is_fallback_pageable(pageable),
        "page": assembler.page_metadata(pageable, total),
        "_links": assembler.links(base_url, pageable, total),
        "_templates": {"default": assembler.template(base_url)},
    }), 200


@pages_bp.get("/compare")
@pageable_argument("left", qualifier="left")
@pageable_argument("right", qualifier="right")
def compare_pages(left, right):
    """Two independently paged lists on one handler, e.g. ``?left_page=1&right_page=3``."""
    return jsonify({
        "left": pageable_to_dict(left),
        "right": pageable_to_dict(right),
        "_links": {
            "left_next": {"href": current_link(left.next(), qualifier="left")},
            "right_next": {"href": current_link(right.next(), qualifier="right")},
        },
        "_templates": {
            "left": template_variables("pages.compare_pages", qualifier="left"),
            "right": template_variables("pages.compare_pages", qualifier="right"),
        },
    }), 200


@pages_bp.get("/parameters")
def list_parameters():
    """Parameter names the default resolver currently reads."""
    resolver = get_state().pageable_resolver
    return jsonify({
        "page": resolver.parameter_name_to_use(resolver.page_parameter_name),
        "size": resolver.parameter_name_to_use(resolver.size_parameter_name),
        "sort": resolver.sort_resolver.sort_parameter_name(),
    }), 200
