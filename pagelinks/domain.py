from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_string(cls, value: str) -> "Direction":
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            raise ValueError(
                f"Invalid value '{value}' for orders given; has to be either 'desc' or 'asc' (case insensitive)"
            ) from None

    @classmethod
    def from_string_or_none(cls, value: str | None) -> Optional["Direction"]:
        if value is None:
            return None
        try:
            return cls.from_string(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Order:
    property: str
    direction: Direction = Direction.ASC

    def __post_init__(self) -> None:
        if not self.property or not self.property.strip():
            raise ValueError("Property must not be empty")

    @property
    def is_ascending(self) -> bool:
        return self.direction is Direction.ASC


@dataclass(frozen=True)
class Sort:
    """Ordered collection of :class:`Order` values."""

    orders: Tuple[Order, ...] = ()

    @classmethod
    def by(cls, *properties: str, direction: Direction = Direction.ASC) -> "Sort":
        if not properties:
            raise ValueError("You have to provide at least one property to sort by")
        return cls(tuple(Order(p, direction) for p in properties))

    @classmethod
    def unsorted(cls) -> "Sort":
        return cls()

    def and_(self, other: "Sort | None") -> "Sort":
        if not other:
            return self
        return Sort(self.orders + other.orders)

    def order_for(self, prop: str) -> Optional[Order]:
        for order in self.orders:
            if order.property == prop:
                return order
        return None

    def __iter__(self) -> Iterator[Order]:
        return iter(self.orders)

    def __len__(self) -> int:
        return len(self.orders)

    def __str__(self) -> str:
        if not self.orders:
            return "UNSORTED"
        return ", ".join(f"{o.property}: {o.direction.name}" for o in self.orders)


class Pageable:
    """Abstract description of a requested page.

    ``page_number`` is zero-based. Only :class:`PageRequest` implements it here;
    the base class exists so contributors can dispatch on it.
    """

    page_number: int
    page_size: int
    sort: Optional[Sort]

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size

    @property
    def has_previous(self) -> bool:
        return self.page_number > 0


@dataclass(frozen=True)
class PageRequest(Pageable):
    page_number: int = 0
    page_size: int = 20
    sort: Optional[Sort] = field(default=None)

    def __post_init__(self) -> None:
        if self.page_number < 0:
            raise ValueError("Page index must not be less than zero!")
        if self.page_size < 1:
            raise ValueError("Page size must not be less than one!")

    def next(self) -> "PageRequest":
        return PageRequest(self.page_number + 1, self.page_size, self.sort)

    def previous_or_first(self) -> "PageRequest":
        if not self.has_previous:
            return self.first()
        return PageRequest(self.page_number - 1, self.page_size, self.sort)

    def first(self) -> "PageRequest":
        return PageRequest(0, self.page_size, self.sort)
