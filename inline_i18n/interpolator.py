"""Interpolation entry point combining pre-processing, parsing and evaluation."""
import dataclasses
import logging
import re

from inline_i18n import preprocess as extensions
from inline_i18n.config import I18nConfig, build_fallback_chain
from inline_i18n.evaluator import MessageEvaluator
from inline_i18n.formatters import stringify
from inline_i18n.parser import Message, MessageSyntaxError, ParseCache
from inline_i18n.registry import FormatterRegistry
from inline_i18n.types import CustomFormatter, FormatParam, Locale

VARIABLE_PATTERN = re.compile(r"\{(\w+)\}")


class Interpolator:
    """
    Renders message templates with values for a locale.

    Owns the configuration, the custom formatter registry and the parse
    cache, so separate instances never share state.

    Args:
        config: Settings, defaults to :class:`I18nConfig`
        formatters: Custom formatter registry, a new empty one by default
    """

    __slots__ = (
        "_config",
        "_formatters",
        "_parse_cache",
    )

    def __init__(
            self,
            config: I18nConfig | None = None,
            *,
            formatters: FormatterRegistry | None = None
    ):
        self._config: I18nConfig = config or I18nConfig()
        self._formatters: FormatterRegistry = formatters if formatters is not None else FormatterRegistry()
        self._parse_cache: ParseCache = ParseCache(self._config.parse_cache_size)

    @property
    def config(self) -> I18nConfig:
        """Get the current configuration."""
        return self._config

    @property
    def formatters(self) -> FormatterRegistry:
        return self._formatters

    @property
    def parse_cache(self) -> ParseCache:
        return self._parse_cache

    def configure(self, **changes) -> I18nConfig:
        """
        Update configuration values, keeping the ones not given.

        Args:
            **changes: Any :class:`I18nConfig` field

        Returns:
            The new configuration
        """
        self._config = dataclasses.replace(self._config, **changes)
        if self._config.parse_cache_size != self._parse_cache.max_size:
            self._parse_cache.resize(self._config.parse_cache_size)
        return self._config

    def reset_config(self):
        self._config = I18nConfig()
        self._parse_cache.resize(self._config.parse_cache_size)

    def register_formatter(self, name: str, formatter: CustomFormatter):
        """
        Register a custom formatter usable as ``{var, name}`` or ``{var, name, style}``.

        Raises:
            ValueError: If the name is reserved
        """
        self._formatters.register(name, formatter)

    def clear_formatters(self):
        self._formatters.clear()

    def clear_parse_cache(self):
        self._parse_cache.clear()

    def build_fallback_chain(self, locale: Locale) -> list[Locale]:
        return build_fallback_chain(locale, self._config)

    def has_icu_pattern(self, template: str) -> bool:
        return extensions.has_icu_pattern(template)

    def has_custom_formatter(self, template: str) -> bool:
        return extensions.has_custom_formatter(template, self._formatters.names())

    def has_plural_shorthand(self, template: str) -> bool:
        return extensions.has_plural_shorthand(template)

    def resolve_missing(self, name: str, locale: Locale) -> str:
        """
        Text rendered for a value that could not be resolved.

        Returns:
            The configured handler's result, or ``{name}``
        """
        handler = self._config.missing_var_handler
        if handler is not None:
            return handler(name, locale)
        return "{" + name + "}"

    def parse(self, template: str) -> Message:
        return self._parse_cache.get_or_parse(template)

    def interpolate(self, template: str, values: FormatParam | None = None, locale: Locale | None = None) -> str:
        """
        Render a template.

        Args:
            template: Plain ``{var}`` template or ICU message
            values: Variables referenced by the template
            locale: Locale for plural rules and formatting, defaults to the configured default

        Returns:
            Rendered text

        Raises:
            MessageSyntaxError: If the template is not valid ICU Message Format
        """
        values = values or {}
        locale = locale or self._config.default_locale
        formatter_names = self._formatters.names()

        if not (
                extensions.has_icu_pattern(template)
                or extensions.has_custom_formatter(template, formatter_names)
                or extensions.has_plural_shorthand(template)
        ):
            return self._interpolate_plain(template, values, locale)

        expanded = extensions.expand_plural_shorthand(template)
        rewritten, pending = extensions.preprocess(expanded, formatter_names)
        message = self.parse(rewritten)

        evaluator = MessageEvaluator(
            values,
            locale,
            pending=pending,
            formatters=self._formatters,
            resolve_missing=self.resolve_missing,
        )
        return evaluator.evaluate(message)

    def _interpolate_plain(self, template: str, values: FormatParam, locale: Locale) -> str:
        def replace(match: re.Match) -> str:
            value = values.get(match.group(1))
            if value is None:
                return self.resolve_missing(match.group(1), locale)
            return stringify(value)

        return VARIABLE_PATTERN.sub(replace, template)

    def render(self, template: str, values: FormatParam | None = None, locale: Locale | None = None) -> str:
        """
        Render a template without raising on malformed ICU syntax.

        A template that fails to parse is logged and returned unchanged.
        """
        try:
            return self.interpolate(template, values, locale)
        except MessageSyntaxError as error:
            logging.warning("Error: the template '%s' is not valid ICU Message Format - %s", template, error)
            return template


__all__ = ["Interpolator", "VARIABLE_PATTERN"]
