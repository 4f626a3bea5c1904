"""Rewrites this library's syntax extensions into plain ICU arguments.

ICU has no ``currency``, ``compact``, ``relativeTime`` or ``list`` argument
types and knows nothing of custom formatters. Before parsing, each such
argument is replaced with a ``{__KIND_N__}`` placeholder argument and the
original request is recorded as a :class:`PendingSubstitution`. The
evaluator resolves placeholders when it meets them in the parsed tree.
"""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import dataclass

from inline_i18n.formatters import DEFAULT_CURRENCY

PLACEHOLDER_PATTERN = re.compile(r"^__[A-Z]+_\d+__$")

ICU_PATTERN = re.compile(
    r"\{\s*[^\s{},]+\s*,\s*"
    r"(?:plural|select|selectordinal|number|date|time|relativeTime|list|currency|compact|compactLong)"
    r"\s*[,}]"
)
PLURAL_SHORTHAND_PATTERN = re.compile(
    r"\{\s*(\w+)\s*,\s*p\s*,\s*([^{}|]*)\|([^{}|]*)(?:\|([^{}|]*))?\}"
)
_CURRENCY_PATTERN = re.compile(r"\{\s*(\w+)\s*,\s*currency\s*(?:,\s*([A-Za-z]{3})\s*)?\}")
_COMPACT_PATTERN = re.compile(r"\{\s*(\w+)\s*,\s*(compactLong|compact)\s*\}")
_RELATIVE_TIME_PATTERN = re.compile(r"\{\s*(\w+)\s*,\s*relativeTime\s*(?:,\s*(long|short|narrow)\s*)?\}")
_LIST_PATTERN = re.compile(
    r"\{\s*(\w+)\s*,\s*list\s*"
    r"(?:,\s*(conjunction|disjunction|unit)\s*)?"
    r"(?:,\s*(long|short|narrow)\s*)?\}"
)

CUSTOM = "custom"
CURRENCY = "currency"
COMPACT = "compact"
RELATIVE_TIME = "relativeTime"
LIST = "list"

_TOKEN_PREFIXES = {
    CUSTOM: "CUSTOM",
    CURRENCY: "CURRENCY",
    COMPACT: "COMPACT",
    RELATIVE_TIME: "RELTIME",
    LIST: "LIST",
}


@dataclass(frozen=True, slots=True)
class PendingSubstitution:
    """An extension argument waiting to be formatted."""

    kind: str
    variable: str
    formatter: str | None = None
    style: str | None = None
    list_type: str | None = None
    currency: str | None = None


def _custom_formatter_pattern(names: Collection[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(name) for name in sorted(names, key=len, reverse=True))
    return re.compile(rf"\{{\s*(\w+)\s*,\s*({alternatives})\s*(?:,\s*([^{{}}]*?)\s*)?\}}")


def has_icu_pattern(template: str) -> bool:
    return ICU_PATTERN.search(template) is not None


def has_plural_shorthand(template: str) -> bool:
    return PLURAL_SHORTHAND_PATTERN.search(template) is not None


def has_custom_formatter(template: str, names: Collection[str]) -> bool:
    if not names:
        return False
    return _custom_formatter_pattern(names).search(template) is not None


def is_placeholder(name: str) -> bool:
    return PLACEHOLDER_PATTERN.match(name) is not None


def expand_plural_shorthand(template: str) -> str:
    """
    Expand ``{n, p, item|items}`` into a full plural argument.

    A third leading form is used for zero:

    >>> expand_plural_shorthand("{n, p, none|item|items}")
    '{n, plural, =0 {none} one {# item} other {# items}}'
    """
    def expand(match: re.Match[str]) -> str:
        name = match.group(1)
        parts = [part.strip() for part in match.groups()[1:] if part is not None]
        if len(parts) == 3:
            zero, singular, plural = parts
            return f"{{{name}, plural, =0 {{{zero}}} one {{# {singular}}} other {{# {plural}}}}}"
        singular, plural = parts
        return f"{{{name}, plural, one {{# {singular}}} other {{# {plural}}}}}"

    return PLURAL_SHORTHAND_PATTERN.sub(expand, template)


def preprocess(template: str, formatter_names: Collection[str] = ()) -> tuple[str, dict[str, PendingSubstitution]]:
    """
    Replace extension arguments with placeholder arguments.

    Passes run in a fixed order (custom formatters, currency, compact,
    relative time, list), each over the output of the previous one.

    Args:
        template: Message template
        formatter_names: Names of registered custom formatters

    Returns:
        The rewritten template and the pending substitutions keyed by
        placeholder, in registration order
    """
    pending: dict[str, PendingSubstitution] = {}
    counters = dict.fromkeys(_TOKEN_PREFIXES, 0)

    def record(substitution: PendingSubstitution) -> str:
        index = counters[substitution.kind]
        counters[substitution.kind] = index + 1
        token = f"__{_TOKEN_PREFIXES[substitution.kind]}_{index}__"
        pending[token] = substitution
        return "{" + token + "}"

    if formatter_names:
        template = _custom_formatter_pattern(formatter_names).sub(
            lambda m: record(PendingSubstitution(CUSTOM, m.group(1), formatter=m.group(2), style=m.group(3) or None)),
            template,
        )

    template = _CURRENCY_PATTERN.sub(
        lambda m: record(PendingSubstitution(
            CURRENCY, m.group(1), currency=(m.group(2) or DEFAULT_CURRENCY).upper()
        )),
        template,
    )
    template = _COMPACT_PATTERN.sub(
        lambda m: record(PendingSubstitution(
            COMPACT, m.group(1), style="long" if m.group(2) == "compactLong" else "short"
        )),
        template,
    )
    template = _RELATIVE_TIME_PATTERN.sub(
        lambda m: record(PendingSubstitution(RELATIVE_TIME, m.group(1), style=m.group(2) or "long")),
        template,
    )
    template = _LIST_PATTERN.sub(
        lambda m: record(PendingSubstitution(
            LIST, m.group(1), list_type=m.group(2) or "conjunction", style=m.group(3) or "long"
        )),
        template,
    )
    return template, pending


__all__ = [
    "COMPACT",
    "CURRENCY",
    "CUSTOM",
    "ICU_PATTERN",
    "LIST",
    "PLACEHOLDER_PATTERN",
    "PLURAL_SHORTHAND_PATTERN",
    "PendingSubstitution",
    "RELATIVE_TIME",
    "expand_plural_shorthand",
    "has_custom_formatter",
    "has_icu_pattern",
    "has_plural_shorthand",
    "is_placeholder",
    "preprocess",
]
