"""Tests for pagelinks.templates."""

from __future__ import annotations

import pytest

from pagelinks.templates import TemplateVariable, TemplateVariables, VariableType

PAGE = TemplateVariable("page", VariableType.REQUEST_PARAM)
SIZE = TemplateVariable("size", VariableType.REQUEST_PARAM)
SORT_CONTINUED = TemplateVariable("sort", VariableType.REQUEST_PARAM_CONTINUED)


class TestTemplateVariable:
    def test_renders_single_expression(self) -> None:
        assert str(PAGE) == "{?page}"
        assert str(SORT_CONTINUED) == "{&sort}"

    def test_requires_name(self) -> None:
        with pytest.raises(ValueError):
            TemplateVariable("", VariableType.REQUEST_PARAM)


class TestTemplateVariables:
    def test_groups_consecutive_variables_of_same_type(self) -> None:
        assert str(TemplateVariables.of(PAGE, SIZE)) == "{?page,size}"

    def test_starts_new_expression_on_type_change(self) -> None:
        assert str(TemplateVariables.of(PAGE, SORT_CONTINUED)) == "{?page}{&sort}"

    def test_none_is_empty(self) -> None:
        assert len(TemplateVariables.NONE) == 0
        assert str(TemplateVariables.NONE) == ""

    def test_concat_keeps_order_and_does_not_mutate(self) -> None:
        first = TemplateVariables.of(PAGE)
        combined = first.concat(TemplateVariables.of(SIZE), [SORT_CONTINUED])
        assert combined.names() == ["page", "size", "sort"]
        assert first.names() == ["page"]

    def test_for_query(self) -> None:
        assert VariableType.for_query(append=False) is VariableType.REQUEST_PARAM
        assert VariableType.for_query(append=True) is VariableType.REQUEST_PARAM_CONTINUED
