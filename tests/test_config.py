import argparse

import pytest

from config import (Config, ConfigurationError, DEFAULT_WORD_LIMITS, WordLimits, apply_preset,
                    configure_multiple_word_limits, configure_word_limits, get_word_limits,
                    validate_word_limits)


def test_defaults():
    config = Config()
    assert (config.rows, config.cols) == (11, 12)
    assert config.language == "haw"
    assert config.max_words == 12
    assert config.word_limits == WordLimits(3, 5)
    assert config.foundation_length == 5
    config.validate()


def test_overrides_and_unknown_option():
    config = Config(language="mao", max_words=8, seed=3)
    assert config.language == "mao"
    assert config.max_words == 8
    assert config.seed == 3
    with pytest.raises(ConfigurationError):
        Config(grid_size=15)


def test_custom_limits_and_foundation_length():
    config = Config(min_word_length=2, max_word_length=4)
    assert config.word_limits == WordLimits(2, 4)
    assert config.foundation_length == 4
    # only one bound overridden
    assert Config(max_word_length=8).word_limits == WordLimits(3, 8)
    assert Config(max_word_length=8).foundation_length == 5


@pytest.mark.parametrize("limits, valid", [
    (WordLimits(3, 5), True),
    (WordLimits(1, 1), True),
    (WordLimits(1, 15), True),
    (WordLimits(0, 5), False),
    (WordLimits(5, 4), False),
    (WordLimits(3, 16), False),
])
def test_validate_word_limits(limits, valid):
    assert validate_word_limits(limits) is valid


@pytest.mark.parametrize("overrides", [
    {"max_word_length": 20},
    {"min_word_length": 6, "max_word_length": 5},
    {"rows": 0},
    {"max_words": -1},
    {"max_attempts": 0},
    {"max_short_words": -1},
    {"language": "xx"},
    {"rows": 3, "cols": 4},
    {"max_quality_attempts": 0},
    {"min_quality_score": 101},
])
def test_validate_rejects_bad_settings(overrides):
    with pytest.raises(ConfigurationError):
        Config(**overrides).validate()


def test_get_word_limits():
    assert get_word_limits("tah") == WordLimits(3, 5)
    with pytest.raises(ConfigurationError):
        get_word_limits("fr")


def test_configure_word_limits_returns_copy():
    updated = configure_word_limits("mao", 4, 7)
    assert updated["mao"] == WordLimits(4, 7)
    assert updated["haw"] == WordLimits(3, 5)
    assert DEFAULT_WORD_LIMITS["mao"] == WordLimits(3, 5)


def test_configure_word_limits_rejects_invalid():
    with pytest.raises(ConfigurationError, match="Invalid word limits"):
        configure_word_limits("haw", 5, 3)
    with pytest.raises(ConfigurationError):
        configure_word_limits("klingon", 3, 5)


def test_configure_multiple_word_limits():
    result = configure_multiple_word_limits([
        {"language": "haw", "min_word_length": 2, "max_word_length": 4},
        {"language": "tah", "min_word_length": 4, "max_word_length": 6},
    ])
    assert result["haw"] == WordLimits(2, 4)
    assert result["tah"] == WordLimits(4, 6)
    assert result["mao"] == WordLimits(3, 5)


def test_apply_preset():
    assert apply_preset("en", "LONG")["en"] == WordLimits(4, 8)
    with pytest.raises(ConfigurationError):
        apply_preset("en", "HUGE")


def test_update_from_args():
    args = argparse.Namespace(language="tah", rows=9, cols=10, words_file="words.txt",
                              min_length=None, max_length=4, max_words=6,
                              max_attempts=50, seed=11, prefer_middle=True,
                              quality_validation=False)
    config = Config()
    config.update_from_args(args)
    assert config.language == "tah"
    assert (config.rows, config.cols) == (9, 10)
    assert config.words_file == "words.txt"
    assert config.word_limits == WordLimits(3, 4)
    assert config.max_words == 6
    assert config.max_attempts == 50
    assert config.seed == 11
    assert config.prefer_middle_intersections
    assert not config.quality_validation


def test_quality_options_default_off():
    config = Config()
    assert not config.prefer_middle_intersections
    assert not config.quality_validation
    assert config.max_quality_attempts == 50
    assert config.min_quality_score == 60


@pytest.mark.parametrize("name, code", [("maori", "mao"), ("Māori", "mao"), ("Hawaiian", "haw"), ("tah", "tah")])
def test_validate_accepts_language_names(name, code):
    config = Config(language=name)
    config.validate()
    assert config.language == code
    assert get_word_limits(name) == WordLimits(3, 5)
    assert configure_word_limits(name, 4, 6)[code] == WordLimits(4, 6)
