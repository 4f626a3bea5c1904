import pytest

from inline_i18n import I18nConfig, Interpolator
from inline_i18n.config import build_fallback_chain, get_parent_locale


# --- get_parent_locale ---

class TestGetParentLocale:
    def test_region_subtag(self):
        assert get_parent_locale("zh-TW") == "zh"

    def test_en_us(self):
        assert get_parent_locale("en-US") == "en"

    def test_multiple_subtags_use_primary_language(self):
        assert get_parent_locale("zh-Hant-TW") == "zh"

    def test_simple_locale_has_no_parent(self):
        assert get_parent_locale("en") is None
        assert get_parent_locale("ko") is None


# --- build_fallback_chain ---

class TestBuildFallbackChain:
    def test_parent_then_fallback(self):
        assert build_fallback_chain("zh-TW") == ["zh-TW", "zh", "en"]

    def test_en_us(self):
        assert build_fallback_chain("en-US") == ["en-US", "en"]

    def test_simple_locale(self):
        assert build_fallback_chain("ko") == ["ko", "en"]

    def test_does_not_duplicate_fallback_locale(self):
        assert build_fallback_chain("en") == ["en"]

    def test_custom_chain(self):
        config = I18nConfig(fallback_chain={"pt-BR": ["pt", "es", "en"]})
        assert build_fallback_chain("pt-BR", config) == ["pt-BR", "pt", "es", "en"]

    def test_custom_chain_overrides_parent_derivation(self):
        config = I18nConfig(fallback_chain={"zh-TW": ["zh-CN", "zh", "en"]})
        assert build_fallback_chain("zh-TW", config) == ["zh-TW", "zh-CN", "zh", "en"]

    def test_custom_chain_is_taken_verbatim(self):
        config = I18nConfig(fallback_chain={"de-AT": ["de-AT", "de"]})
        assert build_fallback_chain("de-AT", config) == ["de-AT", "de-AT", "de"]

    def test_empty_custom_chain_stops_at_locale(self):
        config = I18nConfig(fallback_chain={"pt-BR": []})
        assert build_fallback_chain("pt-BR", config) == ["pt-BR"]

    def test_custom_fallback_locale(self):
        config = I18nConfig(fallback_locale="ko")
        assert build_fallback_chain("ja", config) == ["ja", "ko"]

    def test_auto_parent_disabled(self):
        config = I18nConfig(auto_parent_locale=False)
        assert build_fallback_chain("zh-TW", config) == ["zh-TW", "en"]

    def test_no_fallback_locale(self):
        config = I18nConfig(fallback_locale=None)
        assert build_fallback_chain("fr-CA", config) == ["fr-CA", "fr"]

    @pytest.mark.parametrize("locale", ["en", "en-US", "zh-Hant-TW", "pt-BR", "ko", "sr-Latn-RS", "x"])
    def test_chain_starts_with_locale_and_has_no_duplicates(self, locale):
        chain = build_fallback_chain(locale)
        assert chain[0] == locale
        assert len(chain) == len(set(chain))


# --- Interpolator configuration ---

class TestInterpolatorConfig:
    def test_defaults(self):
        config = Interpolator().config
        assert config.fallback_locale == "en"
        assert config.auto_parent_locale is True
        assert config.parse_cache_size == 500
        assert config.missing_var_handler is None

    def test_configure_keeps_previous_values(self):
        interpolator = Interpolator()
        interpolator.configure(fallback_locale="ko")
        interpolator.configure(debug=True)
        assert interpolator.config.fallback_locale == "ko"
        assert interpolator.config.debug is True

    def test_configure_changes_chain(self):
        interpolator = Interpolator()
        interpolator.configure(fallback_chain={"pt-BR": ["pt", "es"]})
        assert interpolator.build_fallback_chain("pt-BR") == ["pt-BR", "pt", "es"]

    def test_reset_config(self):
        interpolator = Interpolator()
        interpolator.configure(fallback_locale="ko", parse_cache_size=3)
        interpolator.reset_config()
        assert interpolator.config.fallback_locale == "en"
        assert interpolator.parse_cache.max_size == 500

    def test_configure_resizes_parse_cache(self):
        interpolator = Interpolator()
        interpolator.configure(parse_cache_size=2)
        assert interpolator.parse_cache.max_size == 2

    def test_negative_cache_size_rejected(self):
        with pytest.raises(ValueError):
            I18nConfig(parse_cache_size=-1)

    def test_instances_do_not_share_config(self):
        first, second = Interpolator(), Interpolator()
        first.configure(fallback_locale="ja")
        assert second.config.fallback_locale == "en"
