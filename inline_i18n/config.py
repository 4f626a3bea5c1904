"""Configuration and locale fallback chains."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from inline_i18n.types import Locale, MissingVarHandler


@dataclass(frozen=True, slots=True)
class TranslationWarning:
    """Details of a translation that could not be served in the requested locale."""

    requested_locale: Locale
    available_locales: tuple[Locale, ...]
    key: str | None = None
    fallback_used: Locale | None = None
    type: str = "missing_translation"


def default_warning_handler(warning: TranslationWarning) -> None:
    parts = [f'Missing translation for locale "{warning.requested_locale}"']
    if warning.key:
        parts.append(f'key: "{warning.key}"')
    parts.append(f"Available: [{', '.join(warning.available_locales)}]")
    if warning.fallback_used:
        parts.append(f'Using fallback: "{warning.fallback_used}"')
    logging.warning(" | ".join(parts))


def default_missing_prefix(locale: Locale) -> str:
    return f"[MISSING: {locale}] "


def default_fallback_prefix(requested: Locale, used: Locale) -> str:
    return f"[{requested} -> {used}] "


@dataclass(frozen=True, slots=True)
class I18nConfig:
    """
    Settings shared by an interpolator and the translators built on it.

    Args:
        default_locale: Locale used when a call does not name one
        fallback_locale: Last entry of every derived fallback chain
        auto_parent_locale: Derive BCP 47 parents (``zh-TW`` -> ``zh``)
        fallback_chain: Explicit chains per locale, replacing derivation
        missing_var_handler: ``(name, locale) -> str`` used for unresolved values
        parse_cache_size: Number of parsed templates kept, 0 disables the cache
        debug: Prefix fallback and missing translations
        warn_on_missing: Report missing translations to ``on_missing_translation``
    """

    default_locale: Locale = "en"
    fallback_locale: Locale | None = "en"
    auto_parent_locale: bool = True
    fallback_chain: Mapping[Locale, list[Locale]] = field(default_factory=dict)
    missing_var_handler: MissingVarHandler | None = None
    parse_cache_size: int = 500
    debug: bool = False
    debug_missing_prefix: Callable[[Locale], str] = default_missing_prefix
    debug_fallback_prefix: Callable[[Locale, Locale], str] = default_fallback_prefix
    warn_on_missing: bool = True
    on_missing_translation: Callable[[TranslationWarning], None] | None = default_warning_handler

    def __post_init__(self):
        if self.parse_cache_size < 0:
            raise ValueError("parse_cache_size must be zero or a positive integer")

    def build_fallback_chain(self, locale: Locale) -> list[Locale]:
        return build_fallback_chain(locale, self)


def get_parent_locale(locale: Locale) -> Locale | None:
    """
    Derive the parent of a BCP 47 tag.

    >>> get_parent_locale("zh-Hant-TW")
    'zh'
    >>> get_parent_locale("en") is None
    True
    """
    dash_index = locale.find("-")
    if dash_index > 0:
        return locale[:dash_index]
    return None


def build_fallback_chain(locale: Locale, config: I18nConfig | None = None) -> list[Locale]:
    """
    Build the ordered list of locales to try for ``locale``.

    Args:
        locale: Requested locale
        config: Settings to use, defaults to :class:`I18nConfig`

    Returns:
        The requested locale followed by its fallbacks, most specific first
    """
    config = config or I18nConfig()

    custom = config.fallback_chain.get(locale)
    if custom is not None:
        return [locale, *custom]

    chain = [locale]

    if config.auto_parent_locale:
        current = locale
        while True:
            parent = get_parent_locale(current)
            if parent is None or parent in chain:
                break
            chain.append(parent)
            current = parent

    if config.fallback_locale and config.fallback_locale not in chain:
        chain.append(config.fallback_locale)

    return chain


__all__ = [
    "I18nConfig",
    "TranslationWarning",
    "build_fallback_chain",
    "default_fallback_prefix",
    "default_missing_prefix",
    "default_warning_handler",
    "get_parent_locale",
]
