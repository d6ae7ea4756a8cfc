"""Tests for configuration loading and resolver construction."""

from __future__ import annotations

import pytest
from marshmallow import ValidationError

from pagelinks import resolver_from_config
from pagelinks.binding import get_state
from pagelinks.config import Config, _bool_env, _int_env
from pagelinks.domain import PageRequest
from pagelinks.exceptions import ResolverFrozenError


def test_int_env_falls_back_on_garbage(monkeypatch) -> None:
    monkeypatch.setenv("MAX_PAGE_SIZE", "lots")
    assert _int_env("MAX_PAGE_SIZE", 2000) == 2000


@pytest.mark.parametrize("raw, expected", [("1", True), ("true", True), ("YES", True), ("0", False), ("off", False)])
def test_bool_env(monkeypatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("ONE_INDEXED_PARAMETERS", raw)
    assert _bool_env("ONE_INDEXED_PARAMETERS") is expected


def test_default_paging_settings_are_valid() -> None:
    resolver = resolver_from_config(Config().paging_settings())
    assert resolver.max_page_size >= 1


def test_resolver_from_settings(settings) -> None:
    settings.update(max_page_size=100, default_page_size=250, prefix="x_", one_indexed_parameters=True)
    resolver = resolver_from_config(settings)
    assert resolver.max_page_size == 100
    assert resolver.fallback_pageable == PageRequest(0, 100)
    assert resolver.one_indexed_parameters is True
    assert resolver.parameter_name_to_use(resolver.page_parameter_name) == "x_page"
    assert resolver.sort_resolver.sort_parameter_name() == "x_sort"


def test_invalid_max_page_size(settings) -> None:
    settings["max_page_size"] = 0
    with pytest.raises(ValidationError) as exc:
        resolver_from_config(settings)
    assert "max_page_size" in exc.value.messages


def test_parameter_names_must_be_distinct(settings) -> None:
    settings["size_parameter"] = "page"
    with pytest.raises(ValidationError):
        resolver_from_config(settings)


def test_app_resolver_is_frozen(app) -> None:
    with app.app_context():
        resolver = get_state().pageable_resolver
    assert resolver.frozen
    with pytest.raises(ResolverFrozenError):
        resolver.max_page_size = 1
