"""
inline_i18n: inline and dictionary translations with ICU Message Format.

The module-level functions use one shared :class:`Interpolator` and
:class:`Translator`. Create your own instances to keep configuration,
custom formatters and caches isolated.
"""
from inline_i18n.config import I18nConfig, TranslationWarning, get_parent_locale
from inline_i18n.formatters import FormattingError
from inline_i18n.i18n import Translator
from inline_i18n.interpolator import Interpolator
from inline_i18n.parser import MessageSyntaxError, parse_message
from inline_i18n.registry import RESERVED_FORMATTER_NAMES, FormatterRegistry
from inline_i18n.richtext import RichTextSegment, parse_rich_text
from inline_i18n.types import CustomFormatter, Dictionaries, FormatParam, Locale, Translations

default_interpolator = Interpolator()
default_translator = Translator(interpolator=default_interpolator)


def render(template: str, values: FormatParam | None = None, locale: Locale | None = None) -> str:
    return default_interpolator.render(template, values, locale)


def interpolate(template: str, values: FormatParam | None = None, locale: Locale | None = None) -> str:
    return default_interpolator.interpolate(template, values, locale)


def register_formatter(name: str, formatter: CustomFormatter):
    default_interpolator.register_formatter(name, formatter)


def clear_formatters():
    default_interpolator.clear_formatters()


def clear_parse_cache():
    default_interpolator.clear_parse_cache()


def build_fallback_chain(locale: Locale) -> list[Locale]:
    return default_interpolator.build_fallback_chain(locale)


def has_icu_pattern(template: str) -> bool:
    return default_interpolator.has_icu_pattern(template)


def has_custom_formatter(template: str) -> bool:
    return default_interpolator.has_custom_formatter(template)


def has_plural_shorthand(template: str) -> bool:
    return default_interpolator.has_plural_shorthand(template)


def configure(**changes) -> I18nConfig:
    return default_interpolator.configure(**changes)


def get_config() -> I18nConfig:
    return default_interpolator.config


def reset_config():
    default_interpolator.reset_config()


def t(key: str, values: FormatParam | None = None, locale: Locale | None = None) -> str:
    return default_translator.t(key, values, locale)


def it(translations: Translations | str, *args, locale: Locale | None = None) -> str:
    """
    Translate inline.

    Called as ``it({"ko": "안녕", "en": "Hello"}, values=None, locale=None)``, or
    as the Korean/English shorthand ``it("안녕", "Hello", values=None, locale=None)``.

    Raises:
        TypeError: If the shorthand is missing the English text
        KeyError: If the translation map is empty
    """
    if isinstance(translations, str):
        if not args:
            raise TypeError("it() shorthand needs both the Korean and the English text")
        english, *args = args
        translations = {"ko": translations, "en": english}
    values = args[0] if args else None
    if len(args) > 1:
        locale = args[1]
    return default_translator.inline(translations, values, locale)


def set_locale(locale: Locale | None):
    default_translator.set_locale(locale)


def get_locale() -> Locale:
    return default_translator.get_locale()


it_ja = default_translator.pair("ko", "ja")
it_zh = default_translator.pair("ko", "zh")
it_es = default_translator.pair("ko", "es")
it_fr = default_translator.pair("ko", "fr")
it_de = default_translator.pair("ko", "de")
en_ja = default_translator.pair("en", "ja")
en_zh = default_translator.pair("en", "zh")
en_es = default_translator.pair("en", "es")
en_fr = default_translator.pair("en", "fr")
en_de = default_translator.pair("en", "de")
ja_zh = default_translator.pair("ja", "zh")
ja_es = default_translator.pair("ja", "es")
zh_es = default_translator.pair("zh", "es")


def load_dictionaries(dictionaries: Dictionaries):
    default_translator.load_dictionaries(dictionaries)


def clear_dictionaries():
    default_translator.clear()


__all__ = [
    "FormatterRegistry",
    "FormattingError",
    "I18nConfig",
    "Interpolator",
    "MessageSyntaxError",
    "RESERVED_FORMATTER_NAMES",
    "RichTextSegment",
    "TranslationWarning",
    "Translator",
    "build_fallback_chain",
    "clear_dictionaries",
    "clear_formatters",
    "clear_parse_cache",
    "configure",
    "default_interpolator",
    "default_translator",
    "en_de",
    "en_es",
    "en_fr",
    "en_ja",
    "en_zh",
    "get_config",
    "get_locale",
    "get_parent_locale",
    "has_custom_formatter",
    "has_icu_pattern",
    "has_plural_shorthand",
    "interpolate",
    "it",
    "it_de",
    "it_es",
    "it_fr",
    "it_ja",
    "it_zh",
    "ja_es",
    "ja_zh",
    "load_dictionaries",
    "parse_message",
    "parse_rich_text",
    "register_formatter",
    "render",
    "reset_config",
    "set_locale",
    "t",
    "zh_es",
]
