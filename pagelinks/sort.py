from __future__ import annotations

from typing import Any, List, Optional

from .domain import Direction, Order, Sort
from .logging_config import get_logger
from .parameters import ParameterSpec, SortDefault, as_args, parameter_name, setting
from .templates import TemplateVariable, TemplateVariables, VariableType
from .uri import UriBuilder, as_builder

logger = get_logger(__name__)


class SortArgumentResolver:
    """Reads ``?sort=`` from a request and writes a :class:`Sort` back onto links.

    Modern format: one value per direction run, ``?sort=name,created,desc&sort=id``.
    Legacy format: ``?page.sort=name,created&page.sort.dir=desc``.
    """

    sort_parameter = setting("sort_parameter")
    property_delimiter = setting("property_delimiter")
    legacy_mode = setting("legacy_mode")
    fallback_sort = setting("fallback_sort")
    prefix = setting("prefix")
    qualifier_delimiter = setting("qualifier_delimiter")

    def __init__(self, sort_parameter: str = "sort", legacy_mode: bool = False, fallback_sort: Sort | None = None):
        self._frozen = False
        self.sort_parameter = sort_parameter
        self.property_delimiter = ","
        self.legacy_mode = legacy_mode
        self.fallback_sort = fallback_sort
        self.prefix = ""
        self.qualifier_delimiter = "_"

    def freeze(self) -> "SortArgumentResolver":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def sort_parameter_name(self, parameter: ParameterSpec | None = None) -> str:
        return parameter_name(self.sort_parameter, parameter, self.prefix, self.qualifier_delimiter)

    # -------- inbound --------

    def resolve_argument(self, args, parameter: ParameterSpec | None = None) -> Optional[Sort]:
        args = as_args(args)
        name = self.sort_parameter_name(parameter)
        values = args.getlist(name)

        if not values:
            return self._default_or_fallback(parameter)

        if self.legacy_mode:
            sort = self._parse_legacy(args, name)
        else:
            sort = self._parse(values)
        logger.debug("sort.resolved", parameter=name, sort=str(sort) if sort else None)
        return sort

    def _default_or_fallback(self, parameter: ParameterSpec | None) -> Optional[Sort]:
        if parameter is not None and isinstance(parameter.default, SortDefault):
            return parameter.default.to_sort()
        return self.fallback_sort

    def _parse(self, values: List[str]) -> Optional[Sort]:
        orders: List[Order] = []
        for part in values:
            if part is None:
                continue
            elements = part.split(self.property_delimiter)
            direction = Direction.from_string_or_none(elements[-1])
            properties = elements[:-1] if direction is not None else elements
            for prop in properties:
                if not prop.strip():
                    continue
                orders.append(Order(prop.strip(), direction or Direction.ASC))
        if not orders:
            return None
        return Sort(tuple(orders))

    def _parse_legacy(self, args, name: str) -> Optional[Sort]:
        properties = [p.strip() for p in (args.get(name) or "").split(",") if p.strip()]
        if not properties:
            return None
        direction = Direction.from_string_or_none(args.get(self._legacy_direction_name(name))) or Direction.ASC
        return Sort.by(*properties, direction=direction)

    @staticmethod
    def _legacy_direction_name(name: str) -> str:
        return name + ".dir"

    # -------- outbound --------

    def get_sort_template_variables(self, parameter: ParameterSpec | None, template: "UriBuilder | str | None") -> TemplateVariables:
        name = self.sort_parameter_name(parameter)
        query = as_builder(template).query_params

        if name in query:
            return TemplateVariables.NONE

        variable = TemplateVariable(
            name,
            VariableType.for_query(append=len(query) > 0),
            f"pagination.{name}.description",
        )
        return TemplateVariables.of(variable)

    def enhance(self, builder: UriBuilder, parameter: ParameterSpec | None, value: Any) -> None:
        if not isinstance(value, Sort):
            return

        name = self.sort_parameter_name(parameter)
        builder.replace_query_param(name)

        if self.legacy_mode:
            direction_name = self._legacy_direction_name(name)
            builder.replace_query_param(direction_name)
            properties, direction = self.legacy_fold(value)
            if properties:
                builder.query_param(name, self.property_delimiter.join(properties))
                builder.query_param(direction_name, direction.value)
            return

        for expression in self.fold_into_expressions(value):
            builder.query_param(name, expression)

    def fold_into_expressions(self, sort: Sort) -> List[str]:
        """Collapse consecutive orders sharing a direction into ``a,b,asc``."""
        expressions: List[str] = []
        run: List[str] = []
        direction: Direction | None = None

        for order in sort:
            if run and order.direction is not direction:
                expressions.append(self._expression(run, direction))
                run = []
            direction = order.direction
            run.append(order.property)

        if run:
            expressions.append(self._expression(run, direction))
        return expressions

    def legacy_fold(self, sort: Sort) -> tuple[List[str], Direction]:
        properties: List[str] = []
        direction: Direction | None = None
        for order in sort:
            if direction is not None and order.direction is not direction:
                raise ValueError(
                    f"{type(self).__name__} in legacy configuration only supports a single direction to sort by"
                )
            direction = order.direction
            properties.append(order.property)
        return properties, direction or Direction.ASC

    def _expression(self, properties: List[str], direction: Direction | None) -> str:
        return self.property_delimiter.join(properties + [(direction or Direction.ASC).value])
