"""Weighted random selection of the 7-letter set a puzzle is built from."""

import logging
import random
from typing import List, Sequence, Tuple

from config import LETTERS_PER_PUZZLE
from languages import LanguageProfile

MIN_VOWELS = 3
MAX_VOWELS = 5
GENERIC_MACRON_FLOOR = 0.4
GENERIC_MACRON_SCALE = 0.9


def macron_proportion(words: Sequence[str], profile: LanguageProfile) -> float:
    """Fraction of words containing at least one macron vowel."""
    if not words or not profile.macron_vowels:
        return 0.0
    marked = set(profile.macron_vowels)
    with_macrons = sum(1 for w in words if marked.intersection(w))
    return with_macrons / len(words)


def _draw_macron_vowels(profile: LanguageProfile, words: Sequence[str], rng: random.Random) -> List[str]:
    if profile.macron_weights:
        if rng.random() >= profile.macron_probability:
            return []
        vowels = list(profile.macron_weights)
        return rng.choices(vowels, weights=[profile.macron_weights[v] for v in vowels], k=1)

    if not profile.macron_vowels:
        return []
    proportion = macron_proportion(words, profile)
    chance = max(GENERIC_MACRON_FLOOR, proportion * GENERIC_MACRON_SCALE)
    if rng.random() >= chance:
        return []
    count = 2 if proportion > 0.5 else 1
    logging.debug(f"Macron proportion {proportion:.1%}, chance {chance:.1%}, up to {count} vowels")
    return rng.sample(list(profile.macron_vowels), count)


def _draw_digraphs(profile: LanguageProfile, rng: random.Random) -> List[str]:
    if not profile.digraphs or rng.random() >= profile.digraph_probability:
        return []
    # Shares are thresholds on one roll, not cumulative
    roll = rng.random()
    if roll < profile.digraph_shares.get("both", 0.0):
        return list(profile.digraphs)
    for digraph in profile.digraphs[:-1]:
        if roll < profile.digraph_shares.get(digraph, 0.0):
            return [digraph]
    return [profile.digraphs[-1]]


def select_letters(profile: LanguageProfile, words: Sequence[str], rng: random.Random) -> Tuple[str, ...]:
    """Picks LETTERS_PER_PUZZLE distinct letters using the language's corpus statistics."""
    macrons = _draw_macron_vowels(profile, words, rng)
    digraphs = _draw_digraphs(profile, rng)
    include_glottal = (
        profile.glottal is not None
        and not profile.glottal_as_consonant
        and rng.random() < profile.glottal_probability
    )

    vowel_budget = rng.randint(MIN_VOWELS, MAX_VOWELS)
    macrons = macrons[:vowel_budget]
    letters = rng.sample(list(profile.vowels), vowel_budget - len(macrons)) + macrons
    letters.extend(digraphs)
    if include_glottal:
        letters.append(profile.glottal)

    remaining = max(0, LETTERS_PER_PUZZLE - len(letters))
    pool = [c for c in profile.plain_consonants() if c not in letters]
    letters.extend(rng.sample(pool, min(remaining, len(pool))))

    letters = letters[:LETTERS_PER_PUZZLE]
    rng.shuffle(letters)
    logging.debug(
        f"Selected letters for {profile.code}: {letters} "
        f"(macrons: {macrons or 'none'}, digraphs: {digraphs or 'none'}, glottal: {include_glottal})"
    )
    return tuple(letters)


def select_letters_simple(profile: LanguageProfile, rng: random.Random) -> Tuple[str, ...]:
    """Fallback selection: 3 plain vowels and 4 consonants, no frequency weighting."""
    vowels = rng.sample(list(profile.vowels), 3)
    consonants = rng.sample(list(profile.fallback_consonants), LETTERS_PER_PUZZLE - 3)
    return tuple(vowels + consonants)
