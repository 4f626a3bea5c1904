"""Evaluator for parsed ICU messages.

Walks the element tree produced by :mod:`inline_i18n.parser` and renders it
with a set of values, resolving plural and select branches and formatting
numbers, dates, times and extension placeholders for the locale.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from inline_i18n import formatters
from inline_i18n.formatters import FormattingError, Number
from inline_i18n.message_ast import (
    ArgumentElement,
    DateElement,
    LiteralElement,
    MessageElement,
    NumberElement,
    PluralElement,
    PoundElement,
    SelectElement,
    TimeElement,
)
from inline_i18n.preprocess import COMPACT, CURRENCY, CUSTOM, LIST, RELATIVE_TIME, PendingSubstitution, is_placeholder
from inline_i18n.registry import FormatterRegistry
from inline_i18n.types import FormatParam, Locale


def placeholder_for(name: str, locale: Locale) -> str:
    return "{" + name + "}"


class MessageEvaluator:
    """
    Renders message elements for one set of values and one locale.

    Args:
        values: Variables referenced by the message
        locale: Locale used for plural rules and formatting
        pending: Extension placeholders recorded by the pre-processor
        formatters: Registry used for custom formatter placeholders
        resolve_missing: ``(name, locale) -> str`` called for unresolved values
    """

    __slots__ = ("_values", "_locale", "_pending", "_formatters", "_resolve_missing")

    def __init__(
            self,
            values: FormatParam,
            locale: Locale,
            *,
            pending: Mapping[str, PendingSubstitution] | None = None,
            formatters: FormatterRegistry | None = None,
            resolve_missing: Callable[[str, Locale], str] = placeholder_for,
    ):
        self._values = values
        self._locale = locale
        self._pending = pending or {}
        self._formatters = formatters
        self._resolve_missing = resolve_missing

    def evaluate(self, elements: Sequence[MessageElement], current_plural_value: Number | None = None) -> str:
        """
        Render a sequence of elements.

        Args:
            elements: Parsed message or plural/select branch
            current_plural_value: Offset-adjusted value of the enclosing plural, read by ``#``

        Returns:
            Concatenated text of all elements
        """
        return "".join(self._evaluate_node(element, current_plural_value) for element in elements)

    def _missing(self, name: str) -> str:
        return self._resolve_missing(name, self._locale)

    def _evaluate_node(self, node: MessageElement, current_plural_value: Number | None) -> str:
        """
        Render a single element.

        Raises:
            ValueError: If node type is unsupported
        """
        if isinstance(node, LiteralElement):
            return node.value

        if isinstance(node, ArgumentElement):
            return self._evaluate_argument(node)

        if isinstance(node, PoundElement):
            if current_plural_value is None:
                return "#"
            return formatters.stringify(current_plural_value)

        if isinstance(node, PluralElement):
            return self._evaluate_plural(node)

        if isinstance(node, SelectElement):
            return self._evaluate_select(node)

        if isinstance(node, NumberElement):
            return self._evaluate_number(node)

        if isinstance(node, (DateElement, TimeElement)):
            return self._evaluate_datetime(node)

        raise ValueError(f"Unsupported node type: {type(node)}")

    def _evaluate_argument(self, node: ArgumentElement) -> str:
        substitution = self._pending.get(node.name)
        if substitution is not None:
            return self._evaluate_extension(substitution)

        value = self._values.get(node.name)
        if value is not None:
            return formatters.stringify(value)

        # Placeholder-shaped names nobody registered are echoed untouched
        if is_placeholder(node.name):
            return "{" + node.name + "}"
        return self._missing(node.name)

    def _evaluate_plural(self, node: PluralElement) -> str:
        value = self._values.get(node.name)
        if not formatters.is_number(value):
            return self._missing(node.name)

        adjusted = value - node.offset  # type: ignore[operator]
        branch = _exact_branch(node.options, value)  # type: ignore[arg-type]
        if branch is None:
            category = formatters.plural_category(adjusted, self._locale, node.plural_type)
            branch = node.options.get(category, node.options.get("other"))
        if branch is None:
            return self._missing(node.name)
        return self.evaluate(branch, adjusted)

    def _evaluate_select(self, node: SelectElement) -> str:
        value = self._values.get(node.name)
        branch = None
        if value is not None:
            branch = node.options.get(formatters.stringify(value))
        if branch is None:
            branch = node.options.get("other")
        if branch is None:
            return self._missing(node.name)
        return self.evaluate(branch)

    def _evaluate_number(self, node: NumberElement) -> str:
        number = formatters.coerce_number(self._values.get(node.name))
        if number is None:
            return self._missing(node.name)
        try:
            return formatters.format_number(number, self._locale, node.style, node.options)
        except FormattingError as error:
            return error.fallback_value

    def _evaluate_datetime(self, node: DateElement | TimeElement) -> str:
        value = formatters.coerce_datetime(self._values.get(node.name))
        if value is None:
            return self._missing(node.name)
        format_value = formatters.format_date if isinstance(node, DateElement) else formatters.format_time
        try:
            return format_value(value, self._locale, node.style, node.skeleton)
        except FormattingError as error:
            return error.fallback_value

    def _evaluate_extension(self, substitution: PendingSubstitution) -> str:
        value = self._values.get(substitution.variable)
        kind = substitution.kind

        try:
            if kind == CUSTOM:
                return self._evaluate_custom(substitution, value)

            if kind in (CURRENCY, COMPACT):
                number = formatters.coerce_number(value)
                if number is None:
                    return self._missing(substitution.variable)
                if kind == CURRENCY:
                    return formatters.format_currency(number, substitution.currency or formatters.DEFAULT_CURRENCY,
                                                      self._locale)
                return formatters.format_compact(number, self._locale, substitution.style or "short")

            if kind == RELATIVE_TIME:
                moment = formatters.coerce_datetime(value)
                if moment is None:
                    return self._missing(substitution.variable)
                return formatters.format_relative_time(moment, self._locale, substitution.style or "long")

            if kind == LIST:
                if not isinstance(value, (list, tuple)):
                    return self._missing(substitution.variable)
                return formatters.format_list(value, self._locale, substitution.list_type or "conjunction",
                                              substitution.style or "long")
        except FormattingError as error:
            return error.fallback_value

        raise ValueError(f"Unsupported substitution kind: {kind}")

    def _evaluate_custom(self, substitution: PendingSubstitution, value: object) -> str:
        if value is None or self._formatters is None or substitution.formatter not in self._formatters:
            return self._missing(substitution.variable)
        try:
            return self._formatters.format(substitution.formatter, value, self._locale, substitution.style)
        except Exception as error:
            logging.warning("Error: formatter '%s' failed for '%s' - %s",
                            substitution.formatter, substitution.variable, error)
            return self._missing(substitution.variable)


def _exact_branch(options: Mapping[str, tuple[MessageElement, ...]], value: Number) -> tuple[MessageElement, ...] | None:
    for selector, branch in options.items():
        if not selector.startswith("="):
            continue
        try:
            if float(selector[1:]) == value:
                return branch
        except ValueError:
            continue
    return None


__all__ = ["MessageEvaluator", "placeholder_for"]
