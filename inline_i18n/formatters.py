"""Locale-aware value formatting backed by Babel's CLDR data.

Every ``format_*`` function raises :class:`FormattingError` when Babel
rejects the locale or the value; the error carries a fallback string so the
caller can keep rendering.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import lists as babel_lists
from babel import numbers as babel_numbers

from inline_i18n.message_ast import NumberOptions

DEFAULT_CURRENCY = "USD"

_LIST_TYPES = {"conjunction": "standard", "disjunction": "or", "unit": "unit"}
_LIST_STYLE_SUFFIXES = {"long": "", "short": "-short", "narrow": "-narrow"}
_UNIT_SECONDS = {
    "second": 1,
    "minute": 60,
    "hour": 3600,
    "day": 86400,
    "week": 604800,
    "month": 2592000,
    "year": 31536000,
}
_FORMAT_ERRORS = (
    UnknownLocaleError, ValueError, TypeError, InvalidOperation, KeyError, AttributeError, OverflowError,
)

Number = int | float | Decimal


class FormattingError(ValueError):
    """Raised when a value cannot be formatted for a locale."""

    def __init__(self, message: str, fallback_value: str):
        super().__init__(message)
        self.fallback_value = fallback_value


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale: str) -> Locale:
    """Parse a BCP 47 tag (``zh-TW``) into a cached Babel locale."""
    return Locale.parse(locale.replace("-", "_"))


def stringify(value: object) -> str:
    """Plain, locale-independent text for a value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def is_number(value: object) -> bool:
    """True for real numbers that plural rules can select on."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    if isinstance(value, Decimal):
        return not value.is_nan()
    return not (isinstance(value, float) and math.isnan(value))


def coerce_number(value: object) -> Number | None:
    """
    Convert a value to a number.

    Returns:
        The number, or None when the value has no numeric reading
    """
    if is_number(value):
        return value  # type: ignore[return-value]
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def coerce_datetime(value: object) -> datetime | None:
    """
    Convert a value to a datetime.

    Accepts datetimes, dates, epoch milliseconds and ISO 8601 strings.
    Epoch values are interpreted in UTC.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if is_number(value):
        try:
            return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)  # type: ignore[arg-type]
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def plural_category(number: Number, locale: str, plural_type: str = "cardinal") -> str:
    """
    Select the CLDR plural category of ``number``.

    >>> plural_category(1, "en")
    'one'
    >>> plural_category(2, "en", "ordinal")
    'two'
    """
    # CLDR operands are undefined for infinities
    if not math.isfinite(number):
        return "other"
    if isinstance(number, float) and number.is_integer():
        number = int(number)
    try:
        babel_locale = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        if plural_type == "ordinal":
            return "other"
        return "one" if abs(number) == 1 else "other"

    if plural_type == "ordinal":
        return babel_locale.ordinal_form(number)
    return babel_locale.plural_form(number)


def _maximum_fraction_digits(options: NumberOptions, default_maximum: int) -> int:
    minimum = options.minimum_fraction_digits or 0
    if options.maximum_fraction_digits is None:
        return max(minimum, default_maximum)
    return options.maximum_fraction_digits


def _decimal_pattern(options: NumberOptions, default_maximum: int) -> str:
    integer_part = "#,##0" if options.use_grouping else "0"
    minimum = options.minimum_fraction_digits or 0
    maximum = _maximum_fraction_digits(options, default_maximum)
    if maximum == 0:
        return integer_part
    return f"{integer_part}.{'0' * minimum}{'#' * (maximum - minimum)}"


def _round_fraction(value: Number, digits: int) -> Number:
    """Round half away from zero to ``digits`` fraction digits."""
    number = Decimal(str(value))
    if not number.is_finite():
        return value
    with localcontext() as context:
        context.prec = max(context.prec, number.adjusted() + digits + 2)
        return number.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)


def _compact_rounding(value: Number) -> tuple[Number, int]:
    """
    Round a value the way compact notation displays it.

    Returns the rounded value and the fraction digits to show: one while the
    compacted integer part is a single digit ("1.5K" but "12K"). Rounding can
    carry into the next unit (999999 shows as "1M"), so the unit is picked
    again afterwards.
    """
    number = Decimal(str(value))
    if abs(number) < 1000:
        return value, 1 if abs(number) < 10 else 0

    digits = 0
    for _ in range(2):
        exponent = len(str(int(abs(number)))) - 1
        digits = 1 if exponent % 3 == 0 else 0
        step = Decimal(1).scaleb(exponent - exponent % 3 - digits)
        number = (number / step).quantize(Decimal(1), rounding=ROUND_HALF_UP) * step
    return number, digits


def format_number(value: Number, locale: str, style: str | None = None, options: NumberOptions | None = None) -> str:
    """
    Format a number for ``{var, number, style}``.

    Args:
        value: Number to format
        locale: BCP 47 locale
        style: ``decimal``, ``integer``, ``percent``, ``currency`` or a Babel pattern
        options: Options parsed from a number skeleton, used instead of ``style``
    """
    try:
        babel_locale = get_babel_locale(locale)
        if options is not None:
            if options.style == "compact":
                return _format_compact(value, babel_locale, options.compact_display or "short")
            if options.style == "currency":
                return babel_numbers.format_currency(
                    value, options.currency or DEFAULT_CURRENCY, locale=babel_locale
                )
            if options.style == "percent":
                pattern = _decimal_pattern(options, 0) + "%"
                rounded = _round_fraction(value, _maximum_fraction_digits(options, 0) + 2)
                return babel_numbers.format_percent(rounded, format=pattern, locale=babel_locale)
            rounded = _round_fraction(value, _maximum_fraction_digits(options, 3))
            return babel_numbers.format_decimal(rounded, format=_decimal_pattern(options, 3), locale=babel_locale)

        if style in (None, "", "decimal"):
            return babel_numbers.format_decimal(_round_fraction(value, 3), locale=babel_locale)
        if style == "integer":
            return babel_numbers.format_decimal(_round_fraction(value, 0), format="#,##0", locale=babel_locale)
        if style == "percent":
            return babel_numbers.format_percent(_round_fraction(value, 2), locale=babel_locale)
        if style == "currency":
            return babel_numbers.format_currency(value, DEFAULT_CURRENCY, locale=babel_locale)
        return babel_numbers.format_decimal(value, format=style, locale=babel_locale)
    except _FORMAT_ERRORS as e:
        raise FormattingError(f"Number formatting failed for '{value}': {e}", stringify(value)) from e


def format_currency(value: Number, currency: str, locale: str) -> str:
    """
    Format a monetary amount.

    >>> format_currency(100, "USD", "en-US")
    '$100.00'
    """
    try:
        return babel_numbers.format_currency(value, currency, locale=get_babel_locale(locale))
    except _FORMAT_ERRORS as e:
        raise FormattingError(f"Currency formatting failed for '{currency} {value}': {e}", stringify(value)) from e


def _format_compact(value: Number, babel_locale: Locale, display: str) -> str:
    rounded, fraction_digits = _compact_rounding(value)
    return babel_numbers.format_compact_decimal(
        rounded,
        format_type="long" if display == "long" else "short",
        fraction_digits=fraction_digits,
        locale=babel_locale,
    )


def format_compact(value: Number, locale: str, display: str = "short") -> str:
    """
    Format a number in compact notation (``1.5K``, ``2 million``).

    Args:
        value: Number to format
        locale: BCP 47 locale
        display: ``short`` or ``long``
    """
    try:
        return _format_compact(value, get_babel_locale(locale), display)
    except _FORMAT_ERRORS as e:
        raise FormattingError(f"Compact formatting failed for '{value}': {e}", stringify(value)) from e


def format_date(value: datetime, locale: str, style: str | None = None, skeleton: str | None = None) -> str:
    try:
        babel_locale = get_babel_locale(locale)
        if skeleton:
            return babel_dates.format_skeleton(skeleton, value, locale=babel_locale)
        return babel_dates.format_date(value, format=style or "medium", locale=babel_locale)
    except _FORMAT_ERRORS as e:
        raise FormattingError(f"Date formatting failed for '{value}': {e}", stringify(value)) from e


def format_time(value: datetime, locale: str, style: str | None = None, skeleton: str | None = None) -> str:
    try:
        babel_locale = get_babel_locale(locale)
        if skeleton:
            return babel_dates.format_skeleton(skeleton, value, locale=babel_locale)
        return babel_dates.format_time(value, format=style or "medium", locale=babel_locale)
    except _FORMAT_ERRORS as e:
        raise FormattingError(f"Time formatting failed for '{value}': {e}", stringify(value)) from e


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def select_relative_time_unit(seconds: float) -> tuple[int, str]:
    """
    Pick the largest unit for a signed difference in seconds.

    >>> select_relative_time_unit(-3 * 86400)
    (-3, 'day')
    """
    seconds = _round_half_up(seconds)
    if abs(seconds) < 60:
        return seconds, "second"
    minutes = _round_half_up(seconds / 60)
    if abs(minutes) < 60:
        return minutes, "minute"
    hours = _round_half_up(minutes / 60)
    if abs(hours) < 24:
        return hours, "hour"
    days = _round_half_up(hours / 24)
    if abs(days) < 7:
        return days, "day"
    weeks = _round_half_up(days / 7)
    if abs(weeks) < 4:
        return weeks, "week"
    months = _round_half_up(days / 30)
    if abs(months) < 12:
        return months, "month"
    return _round_half_up(days / 365), "year"


def format_relative_time(value: datetime, locale: str, style: str = "long", *, now: datetime | None = None) -> str:
    """
    Describe ``value`` relative to ``now`` ("3 days ago", "in 2 hours").

    Naive datetimes are compared with the local wall clock, aware ones with
    the current time in their own zone.
    """
    if now is None:
        now = datetime.now(value.tzinfo) if value.tzinfo else datetime.now()
    try:
        amount, unit = select_relative_time_unit((value - now).total_seconds())
        return babel_dates.format_timedelta(
            timedelta(seconds=amount * _UNIT_SECONDS[unit]),
            granularity=unit,
            threshold=math.inf,
            add_direction=True,
            format=style,
            locale=get_babel_locale(locale),
        )
    except _FORMAT_ERRORS as e:
        raise FormattingError(f"Relative time formatting failed for '{value}': {e}", stringify(value)) from e


def format_list(items: Sequence[object], locale: str, list_type: str = "conjunction", style: str = "long") -> str:
    """
    Join items the way the locale writes lists.

    >>> format_list(["Alice", "Bob"], "en-US")
    'Alice and Bob'
    """
    babel_style = _LIST_TYPES.get(list_type, "standard") + _LIST_STYLE_SUFFIXES.get(style, "")
    try:
        return babel_lists.format_list([stringify(item) for item in items], style=babel_style,
                                       locale=get_babel_locale(locale))
    except _FORMAT_ERRORS as e:
        raise FormattingError(f"List formatting failed for '{items}': {e}", stringify(items)) from e


__all__ = [
    "DEFAULT_CURRENCY",
    "FormattingError",
    "coerce_datetime",
    "coerce_number",
    "format_compact",
    "format_currency",
    "format_date",
    "format_list",
    "format_number",
    "format_relative_time",
    "format_time",
    "get_babel_locale",
    "is_number",
    "plural_category",
    "select_relative_time_unit",
    "stringify",
]
