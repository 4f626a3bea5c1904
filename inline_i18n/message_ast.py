"""Element types produced by :mod:`inline_i18n.parser`.

A parsed message is a tuple of elements. Plural and select elements own
their branches as tuples of elements, so a message is a tree whose leaves
are literals, arguments, pounds and formatted values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class NumberOptions:
    """Formatting options derived from a ``::`` number skeleton."""

    style: str = "decimal"
    currency: str | None = None
    compact_display: str | None = None
    minimum_fraction_digits: int | None = None
    maximum_fraction_digits: int | None = None
    use_grouping: bool = True


@dataclass(frozen=True, slots=True)
class LiteralElement:
    value: str


@dataclass(frozen=True, slots=True)
class ArgumentElement:
    name: str


@dataclass(frozen=True, slots=True)
class PoundElement:
    pass


@dataclass(frozen=True, slots=True)
class PluralElement:
    name: str
    options: Mapping[str, tuple[MessageElement, ...]]
    offset: int = 0
    plural_type: str = "cardinal"


@dataclass(frozen=True, slots=True)
class SelectElement:
    name: str
    options: Mapping[str, tuple[MessageElement, ...]]


@dataclass(frozen=True, slots=True)
class NumberElement:
    name: str
    style: str | None = None
    options: NumberOptions | None = None


@dataclass(frozen=True, slots=True)
class DateElement:
    name: str
    style: str | None = None
    skeleton: str | None = None


@dataclass(frozen=True, slots=True)
class TimeElement:
    name: str
    style: str | None = None
    skeleton: str | None = None


MessageElement: TypeAlias = (
    LiteralElement
    | ArgumentElement
    | PoundElement
    | PluralElement
    | SelectElement
    | NumberElement
    | DateElement
    | TimeElement
)

__all__ = [
    "ArgumentElement",
    "DateElement",
    "LiteralElement",
    "MessageElement",
    "NumberElement",
    "NumberOptions",
    "PluralElement",
    "PoundElement",
    "SelectElement",
    "TimeElement",
]
