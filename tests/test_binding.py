"""Tests for the Flask binding and the demo blueprint."""

from __future__ import annotations

import pytest
from flask import Flask

from pagelinks import create_app
from pagelinks.binding import build_link, get_state, init_app, pageable_argument, sort_argument, template_variables
from pagelinks.domain import Direction, PageRequest, Sort
from pagelinks.exceptions import AmbiguousPageableError
from pagelinks.parameters import PageableDefault, SortDefault


@pytest.fixture
def bare_app() -> Flask:
    app = Flask(__name__)
    app.config.update(TESTING=True, SERVER_NAME="api.test")
    init_app(app)

    @app.get("/items")
    @pageable_argument(default=PageableDefault(size=5))
    def items(pageable):
        return {"page": pageable.page_number, "size": pageable.page_size}

    @app.get("/sorted")
    @sort_argument(default=SortDefault(("name",), Direction.DESC))
    def sorted_items(sort):
        return {"sort": [f"{o.property},{o.direction.value}" for o in sort]}

    return app


class TestDecorators:
    def test_injects_pageable(self, bare_app: Flask) -> None:
        response = bare_app.test_client().get("/items?page=3&size=8")
        assert response.get_json() == {"page": 3, "size": 8}

    def test_call_site_default(self, bare_app: Flask) -> None:
        response = bare_app.test_client().get("/items")
        assert response.get_json() == {"page": 0, "size": 5}

    def test_injects_sort(self, bare_app: Flask) -> None:
        client = bare_app.test_client()
        assert client.get("/sorted?sort=id").get_json() == {"sort": ["id,asc"]}
        assert client.get("/sorted").get_json() == {"sort": ["name,desc"]}

    def test_duplicate_pageables_rejected_at_decoration(self) -> None:
        with pytest.raises(AmbiguousPageableError):
            @pageable_argument("a")
            @pageable_argument("b")
            def view(a, b):
                return None

    def test_records_parameters_on_view(self) -> None:
        @pageable_argument("a", qualifier="a")
        @pageable_argument("b", qualifier="b")
        def view(a, b):
            return None

        assert [p.qualifier for p in view.__pageable_parameters__] == ["b", "a"]

    def test_get_state_requires_init(self) -> None:
        app = Flask(__name__)
        with app.app_context():
            with pytest.raises(RuntimeError, match="init_app"):
                get_state()


class TestLinks:
    def test_build_link(self, bare_app: Flask) -> None:
        with bare_app.app_context():
            href = build_link("items", PageRequest(2, 10, Sort.by("name")))
        assert href == "http://api.test/items?page=2&size=10&sort=name,asc"

    def test_build_link_with_qualifier(self, bare_app: Flask) -> None:
        with bare_app.app_context():
            href = build_link("items", PageRequest(1, 10), qualifier="left")
        assert href == "http://api.test/items?left_page=1&left_size=10"

    def test_build_link_ignores_unrelated_values(self, bare_app: Flask) -> None:
        with bare_app.app_context():
            assert build_link("items", object()) == "http://api.test/items"

    def test_template_variables(self, bare_app: Flask) -> None:
        with bare_app.app_context():
            assert template_variables("items") == "http://api.test/items{?page,size,sort}"
            assert template_variables("items", value_type=Sort) == "http://api.test/items{?sort}"


class TestPagesBlueprint:
    def test_describe_page(self, client) -> None:
        body = client.get("/api/v1/pages/?page=2&size=5&total=23").get_json()
        assert body["pageable"] == {"page": 2, "size": 5, "sort": []}
        assert body["defaulted"] is False
        assert body["page"] == {"size": 5, "number": 2, "total_elements": 23, "total_pages": 5}
        links = body["_links"]
        assert links["first"]["href"] == "http://localhost/api/v1/pages/?page=0&size=5"
        assert links["prev"]["href"] == "http://localhost/api/v1/pages/?page=1&size=5"
        assert links["self"]["href"] == "http://localhost/api/v1/pages/?page=2&size=5"
        assert links["next"]["href"] == "http://localhost/api/v1/pages/?page=3&size=5"
        assert links["last"]["href"] == "http://localhost/api/v1/pages/?page=4&size=5"
        assert body["_templates"]["default"] == {
            "href": "http://localhost/api/v1/pages/{?page,size,sort}",
            "templated": True,
        }

    def test_describe_page_defaults(self, client) -> None:
        body = client.get("/api/v1/pages/").get_json()
        assert body["pageable"] == {"page": 0, "size": 20, "sort": []}
        assert body["defaulted"] is True

    def test_size_capped(self, client) -> None:
        body = client.get("/api/v1/pages/?page=0&size=999999").get_json()
        assert body["pageable"]["size"] == 2000

    def test_compare_uses_qualified_parameters(self, client) -> None:
        body = client.get("/api/v1/pages/compare?left_page=1&left_size=5&right_sort=name,desc").get_json()
        assert body["left"] == {"page": 1, "size": 5, "sort": []}
        assert body["right"] == {"page": 0, "size": 20, "sort": ["name,desc"]}
        links = body["_links"]
        assert links["left_next"]["href"] == "http://localhost/api/v1/pages/compare?right_sort=name,desc&left_page=2&left_size=5"
        assert links["right_next"]["href"] == (
            "http://localhost/api/v1/pages/compare?left_page=1&left_size=5&right_page=1&right_size=20&right_sort=name,desc"
        )
        assert body["_templates"]["left"] == "http://localhost/api/v1/pages/compare{?left_page,left_size,left_sort}"

    def test_parameters(self, client) -> None:
        assert client.get("/api/v1/pages/parameters").get_json() == {"page": "page", "size": "size", "sort": "sort"}

    def test_negative_total_is_rejected(self, client) -> None:
        response = client.get("/api/v1/pages/?total=-1")
        assert response.status_code == 422
        error = response.get_json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"][0]["field"] == "total"

    def test_unknown_route_uses_error_envelope(self, client) -> None:
        response = client.get("/api/v1/nope")
        assert response.status_code == 404
        assert response.get_json()["error"]["code"] == "NOT_FOUND"


def test_one_indexed_app(settings) -> None:
    settings.update(one_indexed_parameters=True, page_parameter="p", size_parameter="n")
    client = create_app(settings).test_client()
    body = client.get("/api/v1/pages/?p=1&n=10&total=30").get_json()
    assert body["pageable"]["page"] == 0
    assert body["_links"]["next"]["href"] == "http://localhost/api/v1/pages/?p=2&n=10"
