"""Type definitions for :mod:`inline_i18n`."""

from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import TypeAlias

Locale: TypeAlias = str

DictionaryValue: TypeAlias = "str | Dictionary"
Dictionary: TypeAlias = dict[str, DictionaryValue]
Dictionaries: TypeAlias = dict[Locale, Dictionary]
Translations: TypeAlias = Mapping[Locale, str]

FormatValue: TypeAlias = bool | int | float | Decimal | str | datetime | date | Sequence[str]
FormatParam: TypeAlias = Mapping[str, FormatValue | None]

MissingVarHandler: TypeAlias = Callable[[str, Locale], str]
CustomFormatter: TypeAlias = Callable[..., str]

__all__ = [
    "CustomFormatter",
    "Dictionaries",
    "Dictionary",
    "DictionaryValue",
    "FormatParam",
    "FormatValue",
    "Locale",
    "MissingVarHandler",
    "Translations",
]
