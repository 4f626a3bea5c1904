import pytest

from inline_i18n.preprocess import (
    PendingSubstitution,
    expand_plural_shorthand,
    has_custom_formatter,
    has_icu_pattern,
    has_plural_shorthand,
    is_placeholder,
    preprocess,
)


# --- probes ---

class TestHasIcuPattern:
    @pytest.mark.parametrize("template", [
        "{count, plural, one {# item} other {# items}}",
        "{gender, select, male {He} female {She} other {They}}",
        "{rank, selectordinal, one {#st} two {#nd} other {#th}}",
        "{price, number}",
        "{d, date, short}",
        "{time, relativeTime}",
        "{time, relativeTime, short}",
        "{names, list}",
        "{names, list, conjunction}",
        "{price, currency}",
        "{n, compactLong}",
    ])
    def test_detected(self, template):
        assert has_icu_pattern(template)

    @pytest.mark.parametrize("template", ["Hello {name}", "Hello world", "{count, p, item|items}"])
    def test_not_detected(self, template):
        assert not has_icu_pattern(template)


class TestHasPluralShorthand:
    def test_two_part(self):
        assert has_plural_shorthand("{count, p, item|items}")

    def test_three_part(self):
        assert has_plural_shorthand("{count, p, none|item|items}")

    def test_plain_variable(self):
        assert not has_plural_shorthand("{count}")


class TestHasCustomFormatter:
    def test_requires_registered_name(self):
        assert has_custom_formatter("Call {num, phone}", ["phone"])
        assert not has_custom_formatter("Call {num, phone}", ["email"])

    def test_empty_registry(self):
        assert not has_custom_formatter("Call {num, phone}", [])

    def test_with_style(self):
        assert has_custom_formatter("{num, phone, intl}", ["phone"])


# --- expand_plural_shorthand ---

class TestExpandPluralShorthand:
    def test_two_part(self):
        assert expand_plural_shorthand("{count, p, item|items}") == \
            "{count, plural, one {# item} other {# items}}"

    def test_three_part(self):
        assert expand_plural_shorthand("{count, p, none|item|items}") == \
            "{count, plural, =0 {none} one {# item} other {# items}}"

    def test_surrounding_text_kept(self):
        assert expand_plural_shorthand("You have {n, p, file|files}.") == \
            "You have {n, plural, one {# file} other {# files}}."


# --- preprocess ---

class TestPreprocess:
    def test_currency_defaults_to_usd(self):
        rewritten, pending = preprocess("Total: {price, currency}")
        assert rewritten == "Total: {__CURRENCY_0__}"
        assert pending == {"__CURRENCY_0__": PendingSubstitution("currency", "price", currency="USD")}

    def test_currency_code(self):
        _, pending = preprocess("{price, currency, eur}")
        assert pending["__CURRENCY_0__"].currency == "EUR"

    def test_compact(self):
        rewritten, pending = preprocess("{a, compact} {b, compactLong}")
        assert rewritten == "{__COMPACT_0__} {__COMPACT_1__}"
        assert pending["__COMPACT_0__"].style == "short"
        assert pending["__COMPACT_1__"].style == "long"

    def test_relative_time_style(self):
        _, pending = preprocess("{t, relativeTime} {u, relativeTime, narrow}")
        assert pending["__RELTIME_0__"].style == "long"
        assert pending["__RELTIME_1__"].style == "narrow"

    def test_list_defaults_and_options(self):
        _, pending = preprocess("{a, list} {b, list, disjunction, short}")
        assert pending["__LIST_0__"] == PendingSubstitution("list", "a", style="long", list_type="conjunction")
        assert pending["__LIST_1__"] == PendingSubstitution("list", "b", style="short", list_type="disjunction")

    def test_custom_formatters_first(self):
        rewritten, pending = preprocess("{n, phone} {p, currency}", ["phone"])
        assert rewritten == "{__CUSTOM_0__} {__CURRENCY_0__}"
        assert list(pending) == ["__CUSTOM_0__", "__CURRENCY_0__"]
        assert pending["__CUSTOM_0__"].formatter == "phone"

    def test_custom_formatter_style(self):
        _, pending = preprocess("{n, phone, intl}", ["phone"])
        assert pending["__CUSTOM_0__"].style == "intl"

    def test_native_arguments_untouched(self):
        template = "{n, number, currency} {count, plural, other {#}}"
        assert preprocess(template) == (template, {})

    def test_nested_inside_plural_branch(self):
        rewritten, _ = preprocess("{n, plural, other {{price, currency}}}")
        assert rewritten == "{n, plural, other {{__CURRENCY_0__}}}"

    def test_counters_restart_per_call(self):
        assert preprocess("{a, list}")[0] == preprocess("{a, list}")[0] == "{__LIST_0__}"


class TestIsPlaceholder:
    def test_tokens(self):
        assert is_placeholder("__LIST_0__")
        assert is_placeholder("__RELTIME_12__")

    def test_regular_names(self):
        assert not is_placeholder("name")
        assert not is_placeholder("__private")
