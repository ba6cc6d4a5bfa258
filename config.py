# config.py

from typing import Dict, Iterable, NamedTuple, Optional

# --- Constants ---
DEFAULT_GRID_ROWS = 11
DEFAULT_GRID_COLS = 12
DEFAULT_LANGUAGE = "haw"  # haw, mao, tah or en
DEFAULT_MAX_WORDS = 12  # Target word count for an accepted layout
DEFAULT_MAX_MEDIUM_WORDS = 8
DEFAULT_MAX_SHORT_WORDS = 6
DEFAULT_MAX_ATTEMPTS = 1000  # Grid build attempts per letter set
DEFAULT_WORDS_FILE = "data/words.txt"
LETTERS_PER_PUZZLE = 7
MAX_LETTER_ATTEMPTS = 10
POST_PROCESSING_PASSES = 3
MAX_FOUNDATION_LENGTH = 5
MIN_FOUNDATION_WORDS = 2
MAX_VOWELS_PER_WORD = 5
DIGRAPH_WORD_RATIO = 0.5  # Share of the target a digraph language may spend on digraph words
FALLBACK_MIN_WORDS = 5
WORD_LIMIT_UPPER_BOUND = 15
DEFAULT_MAX_QUALITY_ATTEMPTS = 50  # Scored layouts per letter set when quality validation is on
DEFAULT_MIN_QUALITY_SCORE = 60
SUPPORTED_LANGUAGES = ("haw", "mao", "tah", "en")
LANGUAGE_NAMES: Dict[str, str] = {
    "hawaiian": "haw",
    "maori": "mao",
    "māori": "mao",
    "tahitian": "tah",
    "english": "en",
}


class ConfigurationError(ValueError):
    """Raised for input that is rejected before generation begins."""


class WordLimits(NamedTuple):
    min_word_length: int
    max_word_length: int


DEFAULT_WORD_LIMITS: Dict[str, WordLimits] = {
    "haw": WordLimits(3, 5),
    "mao": WordLimits(3, 5),
    "tah": WordLimits(3, 5),
    "en": WordLimits(3, 5),
}

WORD_LIMIT_PRESETS: Dict[str, WordLimits] = {
    "SHORT": WordLimits(3, 4),
    "STANDARD": WordLimits(3, 5),
    "MEDIUM": WordLimits(3, 6),
    "LONG": WordLimits(4, 8),
    "FLEXIBLE": WordLimits(2, 10),
}


def validate_word_limits(limits: WordLimits) -> bool:
    """True when 1 <= min <= max <= 15."""
    return (
        limits.min_word_length >= 1
        and limits.max_word_length >= limits.min_word_length
        and limits.max_word_length <= WORD_LIMIT_UPPER_BOUND
    )


def resolve_language(name_or_code: str) -> str:
    """Accepts a language code ('mao') or name ('maori') and returns the code."""
    key = str(name_or_code).strip().lower()
    if key in SUPPORTED_LANGUAGES:
        return key
    if key in LANGUAGE_NAMES:
        return LANGUAGE_NAMES[key]
    raise ConfigurationError(f"Unknown language: {name_or_code!r}")


def get_word_limits(language: str) -> WordLimits:
    return DEFAULT_WORD_LIMITS[resolve_language(language)]


def configure_word_limits(language: str, min_word_length: int, max_word_length: int,
                          base: Optional[Dict[str, WordLimits]] = None) -> Dict[str, WordLimits]:
    """Returns a copy of the per-language limits with one language overridden."""
    language = resolve_language(language)
    limits = WordLimits(min_word_length, max_word_length)
    if not validate_word_limits(limits):
        raise ConfigurationError(
            f"Invalid word limits for {language}: "
            f"minWordLength ({min_word_length}) must be >= 1 and "
            f"maxWordLength ({max_word_length}) must be >= minWordLength and <= {WORD_LIMIT_UPPER_BOUND}"
        )
    updated = dict(DEFAULT_WORD_LIMITS if base is None else base)
    updated[language] = limits
    return updated


def configure_multiple_word_limits(configs: Iterable[Dict]) -> Dict[str, WordLimits]:
    """Applies several {language, min_word_length, max_word_length} overrides in order."""
    result = dict(DEFAULT_WORD_LIMITS)
    for entry in configs:
        result = configure_word_limits(entry["language"], entry["min_word_length"],
                                       entry["max_word_length"], base=result)
    return result


def apply_preset(language: str, preset: str) -> Dict[str, WordLimits]:
    if preset not in WORD_LIMIT_PRESETS:
        raise ConfigurationError(f"Unknown word limit preset: {preset!r}")
    limits = WORD_LIMIT_PRESETS[preset]
    return configure_word_limits(language, limits.min_word_length, limits.max_word_length)


class Config:
    """Configuration class for crossword generation."""

    def __init__(self, language: str = DEFAULT_LANGUAGE, **overrides):
        # Grid settings
        self.rows = DEFAULT_GRID_ROWS
        self.cols = DEFAULT_GRID_COLS

        # Language and word limits
        self.language = language
        self.min_word_length: Optional[int] = None  # None -> language default
        self.max_word_length: Optional[int] = None

        # Word list and output
        self.words_file = DEFAULT_WORDS_FILE

        # Algorithm settings
        self.max_words = DEFAULT_MAX_WORDS
        self.max_medium_words = DEFAULT_MAX_MEDIUM_WORDS
        self.max_short_words = DEFAULT_MAX_SHORT_WORDS
        self.max_attempts = DEFAULT_MAX_ATTEMPTS
        self.max_letter_attempts = MAX_LETTER_ATTEMPTS
        self.post_processing_passes = POST_PROCESSING_PASSES
        self.prefer_plain_foundation = True
        self.seed: Optional[int] = None

        # Quality settings (off by default)
        self.prefer_middle_intersections = False  # Rank placements by crossing position before compactness
        self.quality_validation = False  # Score layouts and keep the best per letter set
        self.max_quality_attempts = DEFAULT_MAX_QUALITY_ATTEMPTS
        self.min_quality_score = DEFAULT_MIN_QUALITY_SCORE

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise ConfigurationError(f"Unknown configuration option: {key}")
            setattr(self, key, value)

    @property
    def word_limits(self) -> WordLimits:
        defaults = get_word_limits(self.language)
        return WordLimits(
            self.min_word_length if self.min_word_length is not None else defaults.min_word_length,
            self.max_word_length if self.max_word_length is not None else defaults.max_word_length,
        )

    @property
    def foundation_length(self) -> int:
        return min(MAX_FOUNDATION_LENGTH, self.word_limits.max_word_length)

    def validate(self) -> None:
        """Raises ConfigurationError for settings generation cannot run with."""
        self.language = resolve_language(self.language)
        limits = self.word_limits
        if not validate_word_limits(limits):
            raise ConfigurationError(
                f"Invalid word limits for {self.language}: {limits.min_word_length}-{limits.max_word_length}"
            )
        for name in ("rows", "cols", "max_words", "max_attempts", "max_letter_attempts", "max_quality_attempts"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        for name in ("max_medium_words", "max_short_words", "post_processing_passes"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
        if not isinstance(self.min_quality_score, int) or not 0 <= self.min_quality_score <= 100:
            raise ConfigurationError(f"min_quality_score must be between 0 and 100, got {self.min_quality_score!r}")
        if limits.max_word_length > max(self.rows, self.cols):
            raise ConfigurationError(
                f"maxWordLength {limits.max_word_length} does not fit a {self.rows}x{self.cols} grid"
            )

    def update_from_args(self, args):
        """Updates configuration from argparse arguments."""
        self.language = args.language
        self.rows = args.rows
        self.cols = args.cols
        self.words_file = args.words_file
        self.min_word_length = args.min_length
        self.max_word_length = args.max_length
        self.max_words = args.max_words
        self.max_attempts = args.max_attempts
        self.seed = args.seed
        self.prefer_middle_intersections = args.prefer_middle
        self.quality_validation = args.quality_validation
