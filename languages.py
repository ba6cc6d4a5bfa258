"""Per-language alphabets, corpus frequency tables and word tokenization."""

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from config import resolve_language

OKINA = "ʻ"  # Hawaiian ʻokina
ETA = "‘"  # Tahitian 'eta
APOSTROPHE_VARIANTS = ("'", "`", "‘", "’", "ʻ")
APOSTROPHE_RE = re.compile("[" + re.escape("".join(APOSTROPHE_VARIANTS)) + "]")

VOWELS = ("a", "e", "i", "o", "u")
MACRON_VOWELS = ("ā", "ē", "ī", "ō", "ū")


@dataclass(frozen=True)
class LanguageProfile:
    """Alphabet and letter-selection statistics for one language.

    ``macron_weights`` are the share of corpus words containing each macron
    vowel. When it is empty the generic proportion rule is used instead.
    """
    code: str
    name: str
    vowels: Tuple[str, ...]
    macron_vowels: Tuple[str, ...]
    consonants: Tuple[str, ...]
    fallback_consonants: Tuple[str, ...]
    digraphs: Tuple[str, ...] = ()
    glottal: Optional[str] = None  # Symbol normalized into words; None strips apostrophes
    glottal_as_consonant: bool = True  # False: drawn separately with glottal_probability
    glottal_probability: float = 0.0
    macron_weights: Dict[str, float] = field(default_factory=dict)
    digraph_probability: float = 0.0
    digraph_shares: Dict[str, float] = field(default_factory=dict)  # keys: digraphs and "both"
    vowel_cap: bool = True

    @property
    def macron_probability(self) -> float:
        return sum(self.macron_weights.values())

    @property
    def all_vowels(self) -> Tuple[str, ...]:
        return self.vowels + self.macron_vowels

    def plain_consonants(self) -> List[str]:
        """Consonants that are neither digraphs nor a separately drawn glottal."""
        excluded = set(self.digraphs)
        if self.glottal and not self.glottal_as_consonant:
            excluded.add(self.glottal)
        return [c for c in self.consonants if c not in excluded]

    def tokenize(self, word: str) -> List[str]:
        """Splits a word into letters, matching digraphs before single characters."""
        letters = []
        i = 0
        while i < len(word):
            pair = word[i:i + 2]
            if len(pair) == 2 and pair in self.digraphs:
                letters.append(pair)
                i += 2
            else:
                letters.append(word[i])
                i += 1
        return letters

    def is_digraph_word(self, word: str) -> bool:
        return bool(self.digraphs) and any(len(token) > 1 for token in self.tokenize(word))


HAWAIIAN = LanguageProfile(
    code="haw",
    name="hawaiian",
    vowels=VOWELS,
    macron_vowels=MACRON_VOWELS,
    consonants=("h", "k", "l", "m", "n", "p", "w", OKINA),
    fallback_consonants=("h", "k", "l", "m", "n", "p", "w"),
    glottal=OKINA,
    # ā 12%, ō 4%, ū 3.74%, ī 1.5%, ē 1%
    macron_weights={"ā": 0.12, "ō": 0.04, "ū": 0.0374, "ī": 0.015, "ē": 0.01},
)

MAORI = LanguageProfile(
    code="mao",
    name="maori",
    vowels=VOWELS,
    macron_vowels=MACRON_VOWELS,
    consonants=("h", "k", "m", "n", "ng", "p", "r", "t", "w", "wh"),
    fallback_consonants=("h", "k", "m", "n", "p", "r", "t", "w"),
    digraphs=("ng", "wh"),
    # ā 18%, ō 5%, ē 3.5%, ū 3.5%, ī 2.75%
    macron_weights={"ā": 0.18, "ō": 0.05, "ē": 0.035, "ū": 0.035, "ī": 0.0275},
    # 22% of words carry a digraph: ng 12.41%, wh 10.89%, both 1.12%
    digraph_probability=0.22,
    digraph_shares={"both": 1.12 / 22, "ng": 12.41 / 22, "wh": 10.89 / 22},
)

TAHITIAN = LanguageProfile(
    code="tah",
    name="tahitian",
    vowels=VOWELS,
    macron_vowels=MACRON_VOWELS,
    consonants=("f", "h", "m", "n", "p", "r", "t", "v", ETA),
    fallback_consonants=("f", "h", "m", "n", "p", "r", "t", "v"),
    glottal=ETA,
    glottal_as_consonant=False,
    glottal_probability=0.44,
    # ā 10%, ō 2.5%, ū 2%, ē 0.2%, ī never
    macron_weights={"ā": 0.10, "ō": 0.025, "ū": 0.02, "ē": 0.002},
)

ENGLISH = LanguageProfile(
    code="en",
    name="english",
    vowels=VOWELS,
    macron_vowels=(),
    consonants=tuple("bcdfghjklmnpqrstvwxyz"),
    fallback_consonants=("d", "h", "l", "n", "r", "s", "t"),
    vowel_cap=False,
)

PROFILES: Dict[str, LanguageProfile] = {p.code: p for p in (HAWAIIAN, MAORI, TAHITIAN, ENGLISH)}


def available_languages() -> List[str]:
    return [p.name for p in PROFILES.values()]


def get_profile(language: str) -> LanguageProfile:
    return PROFILES[resolve_language(language)]


def normalize_word(word: str, profile: LanguageProfile) -> str:
    """Lowercases, recomposes diacritics and maps apostrophes to the glottal symbol."""
    word = unicodedata.normalize("NFC", word.strip().lower())
    return APOSTROPHE_RE.sub(profile.glottal or "", word)


def normalize_words(words: Iterable[str], language: str) -> List[str]:
    """Normalizes a raw word list, dropping blanks and duplicates."""
    profile = get_profile(language)
    normalized = (normalize_word(w, profile) for w in words)
    return list(dict.fromkeys(w for w in normalized if w))
