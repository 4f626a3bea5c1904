import pytest

from inline_i18n.message_ast import (
    ArgumentElement,
    DateElement,
    LiteralElement,
    NumberElement,
    PluralElement,
    PoundElement,
    SelectElement,
    TimeElement,
)
from inline_i18n.parser import MessageSyntaxError, ParseCache, parse_message, parse_number_skeleton


# --- parse_message ---

class TestParseMessage:
    def test_plain_text(self):
        assert parse_message("Hello world") == (LiteralElement("Hello world"),)

    def test_empty_template(self):
        assert parse_message("") == ()

    def test_argument(self):
        assert parse_message("Hello {name}!") == (
            LiteralElement("Hello "),
            ArgumentElement("name"),
            LiteralElement("!"),
        )

    def test_argument_with_whitespace(self):
        assert parse_message("{ name }") == (ArgumentElement("name"),)

    def test_plural_with_offset(self):
        (element,) = parse_message("{count, plural, offset:1 =0 {Nobody} other {# others}}")
        assert isinstance(element, PluralElement)
        assert element.name == "count"
        assert element.offset == 1
        assert element.plural_type == "cardinal"
        assert list(element.options) == ["=0", "other"]
        assert element.options["other"] == (PoundElement(), LiteralElement(" others"))

    def test_selectordinal(self):
        (element,) = parse_message("{rank, selectordinal, one {#st} two {#nd} other {#th}}")
        assert element.plural_type == "ordinal"
        assert element.options["two"] == (PoundElement(), LiteralElement("nd"))

    def test_select(self):
        (element,) = parse_message("{gender, select, male {He} other {They}}")
        assert element == SelectElement("gender", {"male": (LiteralElement("He"),),
                                                   "other": (LiteralElement("They"),)})

    def test_pound_is_literal_outside_plural(self):
        assert parse_message("Item #1") == (LiteralElement("Item #1"),)

    def test_pound_is_literal_inside_select(self):
        (element,) = parse_message("{kind, select, other {#tag}}")
        assert element.options["other"] == (LiteralElement("#tag"),)

    def test_nested_plural_in_select(self):
        (element,) = parse_message("{g, select, other {{n, plural, other {# cars}}}}")
        (nested,) = element.options["other"]
        assert isinstance(nested, PluralElement)

    def test_number_date_time(self):
        assert parse_message("{n, number, percent}") == (NumberElement("n", "percent"),)
        assert parse_message("{d, date, short}") == (DateElement("d", "short"),)
        assert parse_message("{t, time}") == (TimeElement("t"),)

    def test_number_skeleton(self):
        (element,) = parse_message("{n, number, ::currency/EUR}")
        assert element.style is None
        assert element.options.style == "currency"
        assert element.options.currency == "EUR"

    def test_date_skeleton(self):
        assert parse_message("{d, date, ::yMMMd}") == (DateElement("d", None, "yMMMd"),)

    def test_tags_are_plain_text(self):
        assert parse_message("<b>{name}</b>") == (
            LiteralElement("<b>"),
            ArgumentElement("name"),
            LiteralElement("</b>"),
        )


class TestApostropheQuoting:
    def test_doubled_apostrophe(self):
        assert parse_message("It''s") == (LiteralElement("It's"),)

    def test_lone_apostrophe_is_literal(self):
        assert parse_message("It's") == (LiteralElement("It's"),)

    def test_quoted_braces(self):
        assert parse_message("Use '{name}' here") == (LiteralElement("Use {name} here"),)

    def test_quoted_pound_in_plural(self):
        (element,) = parse_message("{n, plural, other {'#' is #}}")
        assert element.options["other"] == (LiteralElement("# is "), PoundElement())

    def test_unterminated_quote_runs_to_end(self):
        assert parse_message("a '{b") == (LiteralElement("a {b"),)


class TestSyntaxErrors:
    @pytest.mark.parametrize("template", [
        "{count, plural, one {# item}",
        "Hello {name",
        "Hello }",
        "{}",
        "{n, plural, }",
        "{n, spellout}",
        "{n, select, a {x} a {y}}",
        "{n, plural, offset:x other {y}}",
        "{n, number, }",
    ])
    def test_rejected(self, template):
        with pytest.raises(MessageSyntaxError):
            parse_message(template)

    def test_is_value_error_with_position(self):
        with pytest.raises(ValueError) as info:
            parse_message("Hello }")
        assert info.value.position == 6
        assert info.value.template == "Hello }"


class TestNumberSkeleton:
    def test_fraction_digits(self):
        options = parse_number_skeleton(".00")
        assert options.minimum_fraction_digits == 2
        assert options.maximum_fraction_digits == 2

    def test_optional_fraction_digits(self):
        options = parse_number_skeleton(".0##")
        assert options.minimum_fraction_digits == 1
        assert options.maximum_fraction_digits == 3

    def test_compact(self):
        assert parse_number_skeleton("compact-long").compact_display == "long"

    def test_percent_and_grouping(self):
        options = parse_number_skeleton("percent group-off")
        assert options.style == "percent"
        assert options.use_grouping is False

    def test_unknown_tokens_ignored(self):
        assert parse_number_skeleton("scale/100").style == "decimal"


# --- ParseCache ---

class TestParseCache:
    def test_caches_parsed_message(self):
        cache = ParseCache(10)
        first = cache.get_or_parse("Hello {name}")
        assert cache.get_or_parse("Hello {name}") is first
        assert len(cache) == 1

    def test_fifo_eviction(self):
        cache = ParseCache(2)
        cache.get_or_parse("a")
        cache.get_or_parse("b")
        cache.get_or_parse("a")
        cache.get_or_parse("c")
        assert "a" not in cache
        assert "b" in cache
        assert "c" in cache

    def test_zero_size_disables_cache(self):
        cache = ParseCache(0)
        cache.get_or_parse("a")
        assert len(cache) == 0

    def test_clear(self):
        cache = ParseCache(5)
        cache.get_or_parse("a")
        cache.clear()
        assert len(cache) == 0

    def test_resize_evicts_oldest(self):
        cache = ParseCache(5)
        for template in ("a", "b", "c"):
            cache.get_or_parse(template)
        cache.resize(1)
        assert "c" in cache
        assert len(cache) == 1

    def test_syntax_errors_are_not_cached(self):
        cache = ParseCache(5)
        with pytest.raises(MessageSyntaxError):
            cache.get_or_parse("{broken")
        assert len(cache) == 0
