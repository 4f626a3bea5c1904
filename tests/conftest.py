import pytest

from inline_i18n import Interpolator, Translator


def format_phone(value, locale):
    digits = "".join(ch for ch in str(value) if ch.isdigit())
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


@pytest.fixture
def interpolator():
    return Interpolator()


@pytest.fixture
def translator(interpolator):
    return Translator("en", interpolator=interpolator)


@pytest.fixture
def render(interpolator):
    return interpolator.render
