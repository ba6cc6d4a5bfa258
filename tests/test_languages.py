import pytest

from config import ConfigurationError
from languages import (ENGLISH, ETA, HAWAIIAN, MAORI, OKINA, TAHITIAN, available_languages, get_profile,
                       normalize_word, normalize_words, resolve_language)


def test_registry():
    assert available_languages() == ["hawaiian", "maori", "tahitian", "english"]
    assert resolve_language("Maori") == "mao"
    assert resolve_language(" haw ") == "haw"
    assert get_profile("tahitian") is TAHITIAN
    with pytest.raises(ConfigurationError, match="Unknown language"):
        resolve_language("klingon")


@pytest.mark.parametrize("word, expected", [
    ("whenua", ["wh", "e", "n", "u", "a"]),
    ("tangata", ["t", "a", "ng", "a", "t", "a"]),
    ("ngā", ["ng", "ā"]),
    ("kai", ["k", "a", "i"]),
])
def test_maori_tokenize(word, expected):
    assert MAORI.tokenize(word) == expected


def test_tokenize_without_digraphs():
    assert HAWAIIAN.tokenize("whale") == ["w", "h", "a", "l", "e"]
    assert not HAWAIIAN.is_digraph_word("whale")
    assert MAORI.is_digraph_word("whare")
    assert not MAORI.is_digraph_word("kai")


def test_plain_consonants():
    assert "ng" not in MAORI.plain_consonants()
    assert "wh" not in MAORI.plain_consonants()
    assert ETA not in TAHITIAN.plain_consonants()
    assert OKINA in HAWAIIAN.plain_consonants()


def test_macron_probability():
    assert MAORI.macron_probability == pytest.approx(0.3275)
    assert ENGLISH.macron_probability == 0


@pytest.mark.parametrize("profile, raw, expected", [
    (HAWAIIAN, "Hawai'i", "hawai" + OKINA + "i"),
    (HAWAIIAN, "Hawai’i", "hawai" + OKINA + "i"),
    (TAHITIAN, "'ava", ETA + "ava"),
    (TAHITIAN, "ta" + OKINA + "ata", "ta" + ETA + "ata"),
    (MAORI, "  MĀORI ", "māori"),
    (MAORI, "māori", "māori"),
    (MAORI, "o'clock", "oclock"),
])
def test_normalize_word(profile, raw, expected):
    assert normalize_word(raw, profile) == expected


def test_normalize_words_drops_blanks_and_duplicates():
    assert normalize_words(["Kai", "", "  ", "kai", "Wai", "KAI"], "mao") == ["kai", "wai"]
