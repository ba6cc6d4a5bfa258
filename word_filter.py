"""Reduces a word list to the words buildable from a letter set."""

from typing import Iterable, List, Sequence

from config import MAX_VOWELS_PER_WORD, WordLimits
from languages import LanguageProfile


def count_vowels(word: str, profile: LanguageProfile) -> int:
    """Counts plain and macron vowels together."""
    vowels = set(profile.all_vowels)
    return sum(1 for ch in word if ch in vowels)


def is_buildable(word: str, letters: Iterable[str], limits: WordLimits, profile: LanguageProfile) -> bool:
    if not limits.min_word_length <= len(word) <= limits.max_word_length:
        return False
    if profile.vowel_cap and count_vowels(word, profile) > MAX_VOWELS_PER_WORD:
        return False
    allowed = set(letters)
    return all(token in allowed for token in profile.tokenize(word))


def filter_words(words: Sequence[str], letters: Iterable[str], limits: WordLimits,
                 profile: LanguageProfile) -> List[str]:
    """Returns every word whose tokens all belong to the letter set, in input order."""
    allowed = frozenset(letters)
    return [w for w in words if is_buildable(w, allowed, limits, profile)]


def words_of_length(words: Iterable[str], length: int) -> List[str]:
    return [w for w in words if len(w) == length]
