from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import Flask
from marshmallow import ValidationError

from .binding import init_app
from .config import config
from .domain import Direction, Order, Pageable, PageRequest, Sort
from .exceptions import PagingError
from .logging_config import get_logger, setup_logging
from .pageable import LEGACY, PageableArgumentResolver, build_legacy_resolver
from .parameters import PageableDefault, ParameterSpec, SortDefault
from .routes.pages import pages_bp
from .sort import SortArgumentResolver
from .utils import error_response
from .validators import PagingSettingsSchema

logger = get_logger(__name__)


def resolver_from_config(settings: Mapping[str, Any] | None = None) -> PageableArgumentResolver:
    """Build the default resolver pair from (validated) paging settings."""
    data = PagingSettingsSchema().load(dict(settings) if settings is not None else config.paging_settings())

    sort_resolver = SortArgumentResolver(sort_parameter=data["sort_parameter"])
    sort_resolver.prefix = data["prefix"]
    sort_resolver.qualifier_delimiter = data["qualifier_delimiter"]

    resolver = PageableArgumentResolver(sort_resolver)
    resolver.page_parameter_name = data["page_parameter"]
    resolver.size_parameter_name = data["size_parameter"]
    resolver.one_indexed_parameters = data["one_indexed_parameters"]
    resolver.max_page_size = data["max_page_size"]
    resolver.fallback_pageable = PageRequest(0, min(data["default_page_size"], data["max_page_size"]))
    resolver.prefix = data["prefix"]
    resolver.qualifier_delimiter = data["qualifier_delimiter"]
    return resolver


def create_app(settings: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)

    setup_logging(config.LOG_LEVEL)

    # Resolvers are configured once here and frozen before serving requests.
    resolver = resolver_from_config(settings).freeze()
    app.config.from_mapping(
        PAGING=config.paging_settings() if settings is None else dict(settings),
    )
    init_app(app, resolver)
    logger.info(
        "pagelinks.configured",
        page_parameter=resolver.page_parameter_name,
        size_parameter=resolver.size_parameter_name,
        max_page_size=resolver.max_page_size,
        one_indexed=resolver.one_indexed_parameters,
    )

    app.register_blueprint(pages_bp)

    # Provide consistent API responses for common error cases.
    @app.errorhandler(ValidationError)
    def handle_validation(error: ValidationError):
        messages = error.messages if isinstance(error.messages, dict) else {"_schema": error.messages}
        details = [
            {"field": key, "issue": ", ".join(map(str, value))}
            for key, value in messages.items()
        ]
        return error_response("VALIDATION_ERROR", "Invalid request parameters", 422, details)

    @app.errorhandler(PagingError)
    def handle_paging_error(error: PagingError):
        return error_response(error.code, error.message, error.status_code)

    @app.errorhandler(404)
    def handle_not_found(_: Exception):
        return error_response("NOT_FOUND", "Resource not found", 404)

    @app.errorhandler(500)
    def handle_server_error(_: Exception):
        return error_response("SERVER_ERROR", "An unexpected error occurred", 500)

    return app


def main():
    app = create_app()
    app.run(debug=config.DEBUG)


__all__ = [
    "Direction",
    "LEGACY",
    "Order",
    "Pageable",
    "PageableArgumentResolver",
    "PageableDefault",
    "PageRequest",
    "ParameterSpec",
    "Sort",
    "SortArgumentResolver",
    "SortDefault",
    "build_legacy_resolver",
    "create_app",
    "resolver_from_config",
]


if __name__ == "__main__":
    main()
