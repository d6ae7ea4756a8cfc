"""URI template variable descriptors.

These are pure metadata used to advertise which query parameters a link
accepts, rendered the RFC 6570 way (``{?page,size,sort}``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterable, Iterator, List, Tuple


class VariableType(Enum):
    PATH_VARIABLE = ""
    REQUEST_PARAM = "?"
    REQUEST_PARAM_CONTINUED = "&"
    SEGMENT = "/"
    FRAGMENT = "#"

    @property
    def key(self) -> str:
        return self.value

    @classmethod
    def for_query(cls, append: bool) -> "VariableType":
        return cls.REQUEST_PARAM_CONTINUED if append else cls.REQUEST_PARAM


@dataclass(frozen=True)
class TemplateVariable:
    name: str
    type: VariableType
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Variable name must not be empty")

    def __str__(self) -> str:
        return "{" + self.type.key + self.name + "}"


@dataclass(frozen=True)
class TemplateVariables:
    variables: Tuple[TemplateVariable, ...] = ()

    NONE: ClassVar["TemplateVariables"]

    @classmethod
    def of(cls, *variables: TemplateVariable) -> "TemplateVariables":
        return cls(tuple(variables))

    def concat(self, *others: "TemplateVariables | Iterable[TemplateVariable]") -> "TemplateVariables":
        merged: List[TemplateVariable] = list(self.variables)
        for other in others:
            merged.extend(other)
        return TemplateVariables(tuple(merged))

    def names(self) -> List[str]:
        return [v.name for v in self.variables]

    def __iter__(self) -> Iterator[TemplateVariable]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)

    def __str__(self) -> str:
        # Consecutive variables of the same type share one expression.
        parts: List[str] = []
        previous = None
        for variable in self.variables:
            if previous is variable.type:
                parts.append("," + variable.name)
                continue
            if previous is not None:
                parts.append("}")
            parts.append("{" + variable.type.key + variable.name)
            previous = variable.type
        if previous is not None:
            parts.append("}")
        return "".join(parts)


TemplateVariables.NONE = TemplateVariables()
