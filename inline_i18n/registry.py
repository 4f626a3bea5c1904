"""Registry of user-defined ``{var, name[, style]}`` formatters."""

from __future__ import annotations

import re
import threading

from inline_i18n.types import CustomFormatter, Locale

RESERVED_FORMATTER_NAMES = frozenset({
    "plural",
    "select",
    "selectordinal",
    "number",
    "date",
    "time",
    "relativeTime",
    "list",
    "currency",
    "compact",
    "compactLong",
    "p",
})

_FORMATTER_NAME = re.compile(r"^\w+$")


class FormatterRegistry:
    """
    Named custom formatters.

    A formatter is called as ``formatter(value, locale)``, or
    ``formatter(value, locale, style)`` when the template supplies a style.
    """

    __slots__ = ("_formatters", "_lock")

    def __init__(self):
        self._formatters: dict[str, CustomFormatter] = {}
        self._lock = threading.Lock()

    def __contains__(self, name: object) -> bool:
        return name in self._formatters

    def __len__(self) -> int:
        return len(self._formatters)

    def names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._formatters)

    def get(self, name: str) -> CustomFormatter | None:
        return self._formatters.get(name)

    def register(self, name: str, formatter: CustomFormatter):
        """
        Register ``formatter`` under ``name``.

        Raises:
            ValueError: If the name is a reserved ICU keyword or not an identifier
            TypeError: If the formatter is not callable
        """
        if name in RESERVED_FORMATTER_NAMES:
            raise ValueError(f"'{name}' is a reserved ICU keyword and cannot be used as a formatter name")
        if not _FORMATTER_NAME.match(name):
            raise ValueError(f"Invalid formatter name: {name!r}")
        if not callable(formatter):
            raise TypeError(f"Formatter '{name}' must be callable")

        with self._lock:
            self._formatters[name] = formatter

    def unregister(self, name: str) -> bool:
        with self._lock:
            return self._formatters.pop(name, None) is not None

    def clear(self):
        with self._lock:
            self._formatters.clear()

    def format(self, name: str, value: object, locale: Locale, style: str | None = None) -> str:
        formatter = self._formatters.get(name)
        if formatter is None:
            raise KeyError(f"Formatter '{name}' is not registered")
        if style is None:
            return str(formatter(value, locale))
        return str(formatter(value, locale, style))


__all__ = ["FormatterRegistry", "RESERVED_FORMATTER_NAMES"]
