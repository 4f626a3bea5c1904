"""
Dictionary and inline translations rendered through an :class:`Interpolator`.

Translations are looked up along the locale fallback chain, so a ``zh-TW``
request is served from ``zh`` and then the fallback locale when needed.
"""
import json
import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import cast

from inline_i18n.config import TranslationWarning
from inline_i18n.formatters import is_number, plural_category
from inline_i18n.helpers import get_deep_value, merge_deep
from inline_i18n.interpolator import Interpolator
from inline_i18n.types import Dictionaries, Dictionary, FormatParam, Locale, Translations

try:
    import yaml
except ImportError:
    yaml = None

try:
    import tomli
except ImportError:
    tomli = None


def _load_path(path: Path) -> Dictionary:
    """Load a single dictionary file (JSON, YAML, or TOML)."""
    suffix = path.suffix.lower()
    if suffix == ".json":
        with open(path, "r", encoding="utf-8") as f:
            return cast(Dictionary, json.load(f))
    if suffix in [".yaml", ".yml"]:
        if yaml is None:
            raise ImportError("PyYAML is required for YAML support. Install with: pip install pyyaml")
        with open(path, "r", encoding="utf-8") as f:
            return cast(Dictionary, yaml.safe_load(f) or {})
    if suffix == ".toml":
        if tomli is None:
            raise ImportError("tomli is required for TOML support. Install with: pip install tomli")
        with open(path, "rb") as f:
            return cast(Dictionary, tomli.load(f))
    raise ValueError(f"Unsupported file format: {suffix}. Supported formats: .json, .yaml, .yml, .toml")


class Translator:
    """
    Gets translations from per-locale dictionaries.

    Args:
        default_locale: Locale used when a call does not name one
        locales: Dictionary for the default locale, or path to a dictionary file
        interpolator: Interpolator used for rendering and fallback chains
    """

    __slots__ = (
        "_dictionaries",
        "_default_locale",
        "_interpolator",
    )

    def __init__(
            self,
            default_locale: Locale | None = None,
            locales: Dictionary | str | Path | None = None,
            *,
            interpolator: Interpolator | None = None
    ):
        self._interpolator: Interpolator = interpolator or Interpolator()
        self._dictionaries: Dictionaries = {}
        self._default_locale: Locale | None = default_locale

        if isinstance(locales, str | Path):
            self.load_from_file(Path(locales), self.default_locale)
        elif isinstance(locales, dict):
            self.load_from_value(locales, self.default_locale)

    @property
    def default_locale(self) -> Locale:
        """Get the default locale, following the interpolator's configuration when unset."""
        return self._default_locale or self._interpolator.config.default_locale

    @default_locale.setter
    def default_locale(self, value: Locale | None):
        """Set the default locale, None follows the configuration again."""
        self._default_locale = value

    def get_locale(self) -> Locale:
        return self.default_locale

    def set_locale(self, locale: Locale | None):
        """Switch the locale used by calls that do not name one."""
        self.default_locale = locale

    @property
    def interpolator(self) -> Interpolator:
        return self._interpolator

    @property
    def loaded_locales(self) -> list[Locale]:
        return list(self._dictionaries)

    def get_dictionary(self, locale: Locale) -> Dictionary | None:
        return self._dictionaries.get(locale)

    def load_from_file(self, file_path: str | Path, locale: Locale):
        """
        Load a dictionary from a file (JSON, YAML, or TOML).

        Args:
            file_path: Path to the dictionary file
            locale: Locale the dictionary belongs to
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Locale file not found: {file_path}")
        self._update_locale(locale, _load_path(path))

    def _task_load_locale(self, file_path: str | Path, locale: Locale) -> tuple[Locale, Dictionary]:
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Locale file not found: {file_path}")
        return locale, _load_path(path)

    def load_many(self, files: Iterable[tuple[str | Path, Locale]], max_workers: int | None = None):
        """
        Load multiple dictionary files concurrently.

        Args:
            files: Iterable of ``(file_path, locale)`` tuples
            max_workers: Optional maximum number of worker threads
        """
        results: list[tuple[Locale, Dictionary]] = []
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(self._task_load_locale, fp, loc) for fp, loc in files]
            for fut in as_completed(futures):
                results.append(fut.result())

        # Merge on the calling thread once every file is read
        for locale, data in results:
            self._update_locale(locale, data)

    def load_from_value(self, dictionary: Dictionary, locale: Locale):
        """
        Merge a dictionary into the translations of ``locale``.

        Args:
            dictionary: Nested translations
            locale: Locale the dictionary belongs to
        """
        self._update_locale(locale, dictionary)

    def load_dictionaries(self, dictionaries: Dictionaries):
        for locale, dictionary in dictionaries.items():
            self._update_locale(locale, dictionary)

    def clear(self):
        self._dictionaries.clear()

    def _update_locale(self, locale: Locale, data: Dictionary):
        self._dictionaries[locale] = merge_deep(self._dictionaries.get(locale), data)

    def has_translation(self, key: str, locale: Locale | None = None) -> bool:
        dictionary = self._dictionaries.get(locale or self.default_locale)
        return isinstance(get_deep_value(dictionary, key), str)

    def _lookup(self, dictionary: Dictionary, key: str, values: FormatParam | None, locale: Locale) -> str | None:
        count = values.get("count") if values else None
        if is_number(count):
            plural_key = f"{key}_{plural_category(count, locale)}"  # type: ignore[arg-type]
            plural_template = get_deep_value(dictionary, plural_key)
            if isinstance(plural_template, str):
                return plural_template

        template = get_deep_value(dictionary, key)
        return template if isinstance(template, str) else None

    def t(self, key: str, values: FormatParam | None = None, locale: Locale | None = None) -> str:
        """
        Get a translation by key.

        Args:
            key: Translation key (supports dot notation)
            values: Optional values for the template
            locale: Optional locale override

        Returns:
            Rendered translation, or the key when no locale in the fallback chain has it
        """
        locale = locale or self.default_locale
        config = self._interpolator.config

        for candidate in self._interpolator.build_fallback_chain(locale):
            dictionary = self._dictionaries.get(candidate)
            if dictionary is None:
                continue
            template = self._lookup(dictionary, key, values, candidate)
            if template is None:
                continue

            text = self._interpolator.render(template, values, candidate)
            if candidate == locale:
                return text
            self._warn(TranslationWarning(locale, tuple(self._dictionaries), key=key, fallback_used=candidate))
            if config.debug:
                return config.debug_fallback_prefix(locale, candidate) + text
            return text

        self._warn(TranslationWarning(locale, tuple(self._dictionaries), key=key))
        if config.debug:
            return config.debug_missing_prefix(locale) + key
        return key

    def inline(self, translations: Translations, values: FormatParam | None = None,
               locale: Locale | None = None) -> str:
        """
        Pick a translation from an inline ``{locale: template}`` map.

        Args:
            translations: Templates keyed by locale
            values: Optional values for the template
            locale: Optional locale override

        Returns:
            Rendered translation

        Raises:
            KeyError: If ``translations`` is empty
        """
        if not translations:
            raise KeyError(f"No translation found for locale '{locale or self.default_locale}'")

        locale = locale or self.default_locale
        config = self._interpolator.config

        for candidate in self._interpolator.build_fallback_chain(locale):
            template = translations.get(candidate)
            if template:
                break
        else:
            candidate, template = next(iter(translations.items()))

        text = self._interpolator.render(template, values, candidate)
        if candidate == locale:
            return text
        self._warn(TranslationWarning(locale, tuple(translations), fallback_used=candidate))
        if config.debug:
            return config.debug_fallback_prefix(locale, candidate) + text
        return text

    def pair(self, first_locale: Locale, second_locale: Locale) -> Callable[..., str]:
        """
        Build a two-language shorthand around :meth:`inline`.

        >>> ko_ja = Translator("ja").pair("ko", "ja")
        >>> ko_ja("안녕하세요", "こんにちは")
        'こんにちは'

        Returns:
            ``(first_text, second_text, values=None, locale=None) -> str``
        """
        def translate(first_text: str, second_text: str, values: FormatParam | None = None,
                      locale: Locale | None = None) -> str:
            return self.inline({first_locale: first_text, second_locale: second_text}, values, locale)

        translate.__name__ = f"{first_locale}_{second_locale}"
        return translate

    def _warn(self, warning: TranslationWarning):
        config = self._interpolator.config
        if config.warn_on_missing and config.on_missing_translation is not None:
            try:
                config.on_missing_translation(warning)
            except Exception as error:
                logging.warning("Error: missing translation handler failed - %s", error)
