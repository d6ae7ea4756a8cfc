"""Shared fixtures."""

from __future__ import annotations

import pytest

from pagelinks import create_app
from pagelinks.pageable import PageableArgumentResolver
from pagelinks.sort import SortArgumentResolver
from pagelinks.uri import UriBuilder

SETTINGS = {
    "page_parameter": "page",
    "size_parameter": "size",
    "sort_parameter": "sort",
    "one_indexed_parameters": False,
    "max_page_size": 2000,
    "default_page_size": 20,
    "prefix": "",
    "qualifier_delimiter": "_",
}


@pytest.fixture
def settings() -> dict:
    return dict(SETTINGS)


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def resolver() -> PageableArgumentResolver:
    return PageableArgumentResolver()


@pytest.fixture
def sort_resolver() -> SortArgumentResolver:
    return SortArgumentResolver()


@pytest.fixture
def builder() -> UriBuilder:
    return UriBuilder()
