import argparse
import json
import logging
import math
import random
import sys
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from rich.console import Console
from rich.table import Table

# --- Import config ---
from config import (Config, ConfigurationError, DEFAULT_GRID_COLS, DEFAULT_GRID_ROWS, DEFAULT_LANGUAGE,
                    DEFAULT_MAX_ATTEMPTS, DEFAULT_MAX_WORDS, DEFAULT_WORDS_FILE, DIGRAPH_WORD_RATIO,
                    FALLBACK_MIN_WORDS, MIN_FOUNDATION_WORDS)
from languages import LanguageProfile, available_languages, get_profile, normalize_words, resolve_language
from letters import select_letters, select_letters_simple
from quality import QualityMetrics, assess_quality, intersection_score, meets_quality_standards, quality_report
from word_filter import filter_words, words_of_length

# --- Logging Setup ---
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

ACROSS = "across"
DOWN = "down"
EMPTY = ""

Grid = List[List[str]]
Cell = Tuple[int, int]


# --- Data Types ---

def _word_cell(row: int, col: int, direction: str, index: int) -> Cell:
    return (row, col + index) if direction == ACROSS else (row + index, col)


@dataclass
class PlacedWord:
    """A word committed to the grid. ``number`` only orders words for display."""
    text: str
    row: int
    col: int
    direction: str  # 'across' or 'down'
    number: int

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def id(self) -> str:
        return f"{self.direction.upper()}_{self.row}-{self.col}_{self.length}_{self.number}"

    @property
    def end(self) -> Cell:
        return _word_cell(self.row, self.col, self.direction, self.length - 1)

    def cells(self) -> List[Cell]:
        return [_word_cell(self.row, self.col, self.direction, i) for i in range(self.length)]

    def contains_cell(self, row: int, col: int) -> bool:
        return (row, col) in self.cells()

    def letter_at(self, row: int, col: int) -> Optional[str]:
        """Uppercase letter this word puts in the cell, or None outside the word."""
        cells = self.cells()
        if (row, col) not in cells:
            return None
        return self.text[cells.index((row, col))].upper()

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "word": self.text,
            "row": self.row,
            "col": self.col,
            "direction": self.direction,
            "number": self.number,
        }


@dataclass
class CrosswordLayout:
    words: List[PlacedWord]
    grid: Grid
    selected_letters: Tuple[str, ...]
    language: str
    quality: Optional[QualityMetrics] = None  # Set when quality validation scored the layout

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def to_dict(self) -> Dict:
        data = {
            "words": [w.to_dict() for w in self.words],
            "grid": [row[:] for row in self.grid],
            "gridSize": max(self.rows, self.cols),
            "rows": self.rows,
            "cols": self.cols,
            "selectedLetters": list(self.selected_letters),
            "language": self.language,
        }
        if self.quality is not None:
            data["qualityScore"] = self.quality.quality_score
        return data


class GenerationStats:
    """Tracks crossword generation statistics."""
    def __init__(self):
        self.letter_draws = 0
        self.skipped_draws = 0
        self.build_attempts = 0
        self.successful_placements = 0
        self.failed_placements = 0
        self.quality_checks = 0
        self.fallback_used = False
        self.time_spent = 0.0
        self.start_time = time.time()

    def update_time(self):
        self.time_spent = time.time() - self.start_time

    def get_summary(self) -> str:
        self.update_time()
        tried = self.successful_placements + self.failed_placements
        return (
            "Crossword Generation Stats:\n"
            f"├── Letter Draws: {self.letter_draws}\n"
            f"├── Skipped Draws: {self.skipped_draws}\n"
            f"├── Build Attempts: {self.build_attempts}\n"
            f"├── Successful Placements: {self.successful_placements}\n"
            f"├── Failed Placements: {self.failed_placements}\n"
            f"├── Success Rate: {self.successful_placements / max(1, tried) * 100:.2f}%\n"
            f"├── Quality Checks: {self.quality_checks}\n"
            f"├── Fallback Used: {self.fallback_used}\n"
            f"└── Time Spent: {self.time_spent:.2f}s"
        )


# --- Utility Functions ---

def print_grid(grid: Grid, placed_words: Optional[List[PlacedWord]] = None,
               console: Optional[Console] = None) -> None:
    """Prints the grid, highlighting cells where two words cross."""
    if console is None:
        console = Console()

    table = Table(show_header=False, show_edge=False, padding=0)

    crossings: Set[Cell] = set()
    if placed_words is not None:
        usage: Dict[Cell, int] = defaultdict(int)
        for word in placed_words:
            for cell in word.cells():
                usage[cell] += 1
        crossings = {cell for cell, count in usage.items() if count > 1}

    for r_idx, row in enumerate(grid):
        row_display = []
        for c_idx, cell in enumerate(row):
            if cell == EMPTY:
                row_display.append("[white on black]  [/]")
            elif (r_idx, c_idx) in crossings:
                row_display.append(f"[black on green]{cell.center(2)}[/]")
            else:
                row_display.append(f"[black on white]{cell.center(2)}[/]")
        table.add_row(*row_display)

    console.print(table)


def print_words(placed_words: List[PlacedWord], console: Optional[Console] = None) -> None:
    if console is None:
        console = Console()
    table = Table(title="Placed words")
    table.add_column("#", justify="right")
    table.add_column("Word")
    table.add_column("Direction")
    table.add_column("Row", justify="right")
    table.add_column("Col", justify="right")
    for word in sorted(placed_words, key=lambda w: w.number):
        table.add_row(str(word.number), word.text.upper(), word.direction, str(word.row), str(word.col))
    console.print(table)


def load_words(filepath: str) -> List[str]:
    """Reads one word per line, skipping blanks and '#' comments."""
    try:
        with open(filepath, "r", encoding="utf-8") as file:
            stripped = (line.strip() for line in file)
            return [word for word in stripped if word and not word.startswith("#")]
    except FileNotFoundError:
        logging.error(f"Word file not found: {filepath}")
        sys.exit(1)
    except UnicodeDecodeError as e:
        logging.error(f"Error loading words: {e}")
        sys.exit(1)


def compactness_score(placed_words: Sequence[PlacedWord], word: str, row: int, col: int,
                      direction: str, rows: int, cols: int) -> int:
    """Bounding-box area of all words plus the candidate, times 1000, plus the
    candidate centre's Manhattan distance from the grid centre. Lower is better."""
    min_row, min_col = row, col
    max_row, max_col = _word_cell(row, col, direction, len(word) - 1)
    for placed in placed_words:
        end_row, end_col = placed.end
        min_row = min(min_row, placed.row)
        min_col = min(min_col, placed.col)
        max_row = max(max_row, end_row)
        max_col = max(max_col, end_col)
    area = (max_row - min_row + 1) * (max_col - min_col + 1)

    centre_row, centre_col = _word_cell(row, col, direction, len(word) // 2)
    distance = abs(centre_row - rows // 2) + abs(centre_col - cols // 2)
    return area * 1000 + distance


# --- Grid Building ---

class GridBuilder:
    """Owns the grid and placed words for a single generation attempt."""

    def __init__(self, rows: int, cols: int, profile: LanguageProfile, rng: random.Random,
                 max_words: int, stats: Optional[GenerationStats] = None,
                 prefer_middle_intersections: bool = False):
        self.rows = rows
        self.cols = cols
        self.profile = profile
        self.rng = rng
        self.max_words = max_words
        self.stats = stats
        self.prefer_middle_intersections = prefer_middle_intersections
        self.grid: Grid = [[EMPTY for _ in range(cols)] for _ in range(rows)]
        self.placed_words: List[PlacedWord] = []
        self.used_words: Set[str] = set()
        self.digraph_words = 0
        self.max_digraph_words = math.ceil(max_words * DIGRAPH_WORD_RATIO) if profile.digraphs else 0

    @property
    def target_reached(self) -> bool:
        return len(self.placed_words) >= self.max_words

    def digraph_cap_reached(self, word: str) -> bool:
        return (bool(self.profile.digraphs)
                and self.profile.is_digraph_word(word)
                and self.digraph_words >= self.max_digraph_words)

    def in_bounds(self, word: str, row: int, col: int, direction: str) -> bool:
        end_row, end_col = _word_cell(row, col, direction, len(word) - 1)
        return 0 <= row and 0 <= col and end_row < self.rows and end_col < self.cols

    def _occupied(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols and self.grid[row][col] != EMPTY

    def has_word_boundaries(self, word: str, row: int, col: int, direction: str) -> bool:
        """The cells just before the start and just after the end are free."""
        before = _word_cell(row, col, direction, -1)
        after = _word_cell(row, col, direction, len(word))
        return not self._occupied(*before) and not self._occupied(*after)

    def has_proper_spacing(self, row: int, col: int, direction: str) -> bool:
        """No letter touches the cell from the sides perpendicular to the word."""
        if direction == ACROSS:
            return not self._occupied(row - 1, col) and not self._occupied(row + 1, col)
        return not self._occupied(row, col - 1) and not self._occupied(row, col + 1)

    def can_place_word(self, word: str, row: int, col: int, direction: str, first_word: bool = False) -> bool:
        """Check if word can be placed at position with exactly one crossing."""
        if not self.in_bounds(word, row, col, direction):
            return False
        if not self.has_word_boundaries(word, row, col, direction):
            return False

        crossings = 0
        for i, letter in enumerate(word):
            r, c = _word_cell(row, col, direction, i)
            current = self.grid[r][c]
            if current != EMPTY:
                if current != letter.upper():
                    return False
                crossings += 1
            elif not self.has_proper_spacing(r, c, direction):
                return False

        return crossings == 0 if first_word else crossings == 1

    def place_word(self, word: str, row: int, col: int, direction: str) -> PlacedWord:
        for i, letter in enumerate(word):
            r, c = _word_cell(row, col, direction, i)
            self.grid[r][c] = letter.upper()

        placed = PlacedWord(word, row, col, direction, len(self.placed_words) + 1)
        self.placed_words.append(placed)
        self.used_words.add(word)
        if self.profile.is_digraph_word(word):
            self.digraph_words += 1
        if self.stats is not None:
            self.stats.successful_placements += 1
        return placed

    def find_intersections(self, word: str) -> List[Tuple[int, int, str]]:
        """Anchors crossing a placed word at a shared letter, perpendicular to it."""
        intersections = []
        for placed in self.placed_words:
            new_direction = DOWN if placed.direction == ACROSS else ACROSS
            for i, letter1 in enumerate(word):
                for j, letter2 in enumerate(placed.text):
                    if letter1 != letter2:
                        continue
                    if new_direction == DOWN:
                        intersections.append((placed.row - i, placed.col + j, DOWN))
                    else:
                        intersections.append((placed.row + j, placed.col - i, ACROSS))
        return intersections

    def crossing_position(self, word: str, row: int, col: int, direction: str) -> int:
        """1-based position in the word of its first already occupied cell."""
        for i in range(len(word)):
            r, c = _word_cell(row, col, direction, i)
            if self.grid[r][c] != EMPTY:
                return i + 1
        return 0

    def try_place_intersecting(self, word: str) -> bool:
        """Places the word at its best valid crossing, if it has one.

        Candidates are ranked by compactness. With ``prefer_middle_intersections``
        a crossing nearer the middle of the word ranks first and compactness
        only breaks ties.
        """
        best = None
        for row, col, direction in self.find_intersections(word):
            if not self.can_place_word(word, row, col, direction):
                continue
            score = compactness_score(self.placed_words, word, row, col, direction, self.rows, self.cols)
            if self.prefer_middle_intersections:
                position = self.crossing_position(word, row, col, direction)
                key = (-intersection_score(position, len(word)), score)
            else:
                key = (0, score)
            if best is None or key < best[0]:
                best = (key, row, col, direction)

        if best is None:
            if self.stats is not None:
                self.stats.failed_placements += 1
            return False
        _, row, col, direction = best
        self.place_word(word, row, col, direction)
        return True

    def place_foundation(self, first: str, second: str) -> bool:
        row = self.rows // 2
        col = (self.cols - len(first)) // 2
        if not self.can_place_word(first, row, col, ACROSS, first_word=True):
            return False
        self.place_word(first, row, col, ACROSS)
        logging.debug(f"Placed foundation word 1: {first}")
        if not self.try_place_intersecting(second):
            logging.debug(f"Foundation word 2 does not cross {first}: {second}")
            return False
        logging.debug(f"Placed foundation word 2: {second}")
        return True

    def add_words(self, words: Sequence[str], limit: int) -> int:
        """Greedy pass over candidate words, stopping at ``limit`` additions or the target."""
        added = 0
        for word in words:
            if added >= limit or self.target_reached:
                break
            if word in self.used_words or self.digraph_cap_reached(word):
                continue
            if self.try_place_intersecting(word):
                added += 1
                logging.debug(f"Placed {word} ({len(self.placed_words)} words)")
        return added

    def _place_through_cell(self, word: str, row: int, col: int) -> bool:
        letter = self.grid[row][col]
        for index, ch in enumerate(word):
            if ch.upper() != letter:
                continue
            for direction in (ACROSS, DOWN):
                if direction == ACROSS:
                    r, c = row, col - index
                else:
                    r, c = row - index, col
                if self.can_place_word(word, r, c, direction):
                    self.place_word(word, r, c, direction)
                    logging.debug(f"Post-processing: added {word} using letter {letter} at ({row},{col})")
                    return True
        return False

    def add_words_using_existing_letters(self, words: Sequence[str]) -> int:
        """One post-processing pass: anchor unused words on letters already in the grid."""
        available = [w for w in words if w not in self.used_words]
        self.rng.shuffle(available)
        added = 0
        for row in range(self.rows):
            for col in range(self.cols):
                if added >= self.max_words:
                    return added
                if self.grid[row][col] == EMPTY:
                    continue
                for word in available:
                    if self.digraph_cap_reached(word):
                        continue
                    if self._place_through_cell(word, row, col):
                        available.remove(word)
                        added += 1
                        break
        return added

    def to_layout(self, letters: Sequence[str]) -> CrosswordLayout:
        return CrosswordLayout(
            words=list(self.placed_words),
            grid=[row[:] for row in self.grid],
            selected_letters=tuple(letters),
            language=self.profile.code,
        )


def _pick_foundation(candidates: List[str], profile: LanguageProfile, rng: random.Random,
                     prefer_plain: bool) -> Tuple[str, str]:
    plain = [w for w in candidates if not profile.is_digraph_word(w)]
    if prefer_plain and plain:
        first = rng.choice(plain)
        second = rng.choice([w for w in candidates if w != first])
        return first, second
    first, second = rng.sample(candidates, 2)
    return first, second


def build_grid(filtered: Sequence[str], letters: Sequence[str], config: Config, rng: random.Random,
               profile: Optional[LanguageProfile] = None,
               stats: Optional[GenerationStats] = None) -> Optional[CrosswordLayout]:
    """One layout attempt. Returns None when fewer than ``config.max_words`` words fit."""
    profile = profile or get_profile(config.language)
    limits = config.word_limits
    filtered = list(dict.fromkeys(filtered))

    foundation = words_of_length(filtered, config.foundation_length)
    if len(foundation) < MIN_FOUNDATION_WORDS:
        logging.debug(f"Not enough {config.foundation_length}-letter foundation words: {len(foundation)}")
        return None

    builder = GridBuilder(config.rows, config.cols, profile, rng, config.max_words, stats,
                          config.prefer_middle_intersections)
    first, second = _pick_foundation(foundation, profile, rng, config.prefer_plain_foundation)
    if not builder.place_foundation(first, second):
        return None

    medium = [w for w in filtered
              if limits.min_word_length <= len(w) <= limits.max_word_length and w not in builder.used_words]
    rng.shuffle(medium)
    medium_added = builder.add_words(medium, config.max_medium_words)

    short = [w for w in words_of_length(filtered, limits.min_word_length) if w not in builder.used_words]
    rng.shuffle(short)
    short_added = builder.add_words(short, config.max_short_words)

    logging.debug(f"Foundation 2, medium {medium_added}, short {short_added}: "
                  f"{[w.text for w in builder.placed_words]}")

    for pass_number in range(1, config.post_processing_passes + 1):
        if builder.target_reached:
            break
        added = builder.add_words_using_existing_letters(filtered)
        logging.debug(f"Post-processing pass {pass_number} added {added} words")
        if added == 0:
            break

    if not builder.target_reached:
        return None
    return builder.to_layout(letters)


def layout_for_letters(words: Sequence[str], letters: Sequence[str], config: Config,
                       rng: Optional[random.Random] = None, profile: Optional[LanguageProfile] = None,
                       stats: Optional[GenerationStats] = None) -> Optional[CrosswordLayout]:
    """Filters normalized words by a fixed letter set and runs the build attempt loop.

    With ``config.quality_validation`` every finished layout is scored: the first
    one meeting the quality standards wins, otherwise the best of
    ``config.max_quality_attempts`` scored layouts is returned.
    """
    profile = profile or get_profile(config.language)
    rng = rng or random.Random(config.seed)
    stats = stats if stats is not None else GenerationStats()

    filtered = filter_words(words, letters, config.word_limits, profile)
    logging.debug(f"Filtered words: {len(filtered)} {filtered[:10]}")
    if len(filtered) < config.max_words:
        logging.debug(f"Not enough words for a {config.max_words}-word puzzle with letters {letters}")
        stats.skipped_draws += 1
        return None
    if len(words_of_length(filtered, config.foundation_length)) < MIN_FOUNDATION_WORDS:
        logging.debug(f"Not enough {config.foundation_length}-letter words with letters {letters}")
        stats.skipped_draws += 1
        return None

    best = None
    scored = 0
    for attempt in range(config.max_attempts):
        if attempt % 100 == 0:
            logging.debug(f"Crossword attempt {attempt}/{config.max_attempts}")
        stats.build_attempts += 1
        layout = build_grid(filtered, letters, config, rng, profile, stats)
        if layout is None:
            continue
        if not config.quality_validation:
            return layout

        layout.quality = assess_quality(layout.words)
        stats.quality_checks += 1
        scored += 1
        logging.debug(f"Layout {scored}/{config.max_quality_attempts} quality: {layout.quality.quality_score}")
        if best is None or layout.quality.quality_score > best.quality.quality_score:
            best = layout
        if meets_quality_standards(layout.quality, config.min_quality_score):
            logging.info(f"Layout meets quality standards (score {layout.quality.quality_score})")
            return layout
        if scored >= config.max_quality_attempts:
            break

    if best is not None:
        logging.info(f"Returning best layout found (quality: {best.quality.quality_score})")
    return best


def generate_crossword(words: Sequence[str], config: Optional[Config] = None,
                       rng: Optional[random.Random] = None,
                       stats: Optional[GenerationStats] = None) -> Optional[CrosswordLayout]:
    """Generates a layout from a raw word list, or returns None when no layout is found.

    Raises ConfigurationError for an empty word list or invalid settings.
    """
    config = config or Config()
    config.validate()
    if not words:
        raise ConfigurationError("Word list is empty")

    profile = get_profile(config.language)
    rng = rng or random.Random(config.seed)
    stats = stats if stats is not None else GenerationStats()
    normalized = normalize_words(words, profile.code)
    if not normalized:
        raise ConfigurationError("Word list has no usable words after normalization")

    logging.info(f"Generating {profile.name} crossword from {len(normalized)} words, "
                 f"limits {tuple(config.word_limits)}, target {config.max_words}")

    for draw in range(config.max_letter_attempts):
        stats.letter_draws += 1
        letters = select_letters(profile, normalized, rng)
        logging.info(f"Letter draw {draw + 1}/{config.max_letter_attempts}: {' '.join(letters)}")
        layout = layout_for_letters(normalized, letters, config, rng, profile, stats)
        if layout is not None:
            stats.update_time()
            logging.info(f"Crossword generated with {len(layout.words)} words in {stats.time_spent:.2f}s")
            return layout
        logging.info(f"Letter set {draw + 1} failed to produce {config.max_words}+ words. Trying new letters...")

    stats.fallback_used = True
    letters = select_letters_simple(profile, rng)
    filtered = filter_words(normalized, letters, config.word_limits, profile)
    logging.info(f"Fallback letters: {' '.join(letters)} ({len(filtered)} words)")
    layout = None
    if len(filtered) >= FALLBACK_MIN_WORDS:
        stats.build_attempts += 1
        layout = build_grid(filtered, letters, config, rng, profile, stats)

    stats.update_time()
    if layout is None:
        logging.warning(f"Crossword generation failed: no layout with {config.max_words} words")
    return layout


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to parse arguments and run."""
    parser = argparse.ArgumentParser(description="Generates a crossword layout from a word list.")
    parser.add_argument("--words_file", type=str, default=DEFAULT_WORDS_FILE)
    parser.add_argument("--language", type=str, default=DEFAULT_LANGUAGE,
                        help=f"Language code or name ({', '.join(available_languages())})")
    parser.add_argument("--rows", type=int, default=DEFAULT_GRID_ROWS)
    parser.add_argument("--cols", type=int, default=DEFAULT_GRID_COLS)
    parser.add_argument("--min_length", type=int, default=None)
    parser.add_argument("--max_length", type=int, default=None)
    parser.add_argument("--max_words", type=int, default=DEFAULT_MAX_WORDS)
    parser.add_argument("--max_attempts", type=int, default=DEFAULT_MAX_ATTEMPTS)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--prefer_middle", action="store_true",
                        help="Prefer crossings near the middle of words")
    parser.add_argument("--quality_validation", action="store_true",
                        help="Score layouts and keep the best per letter set")
    parser.add_argument("--json", action="store_true", help="Print the layout as JSON")
    parser.add_argument("--verbose", action="store_true")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not all(isinstance(arg, int) and arg > 0 for arg in [args.rows, args.cols, args.max_words, args.max_attempts]):
        logging.error("Positive integers required for numeric arguments.")
        return 1

    # --- Configuration Initialization ---
    config = Config()
    try:
        args.language = resolve_language(args.language)
        config.update_from_args(args)
        config.validate()
    except ConfigurationError as e:
        logging.error(str(e))
        return 1

    words = load_words(config.words_file)
    if not words:
        logging.error(f"No words found in {config.words_file}")
        return 1

    console = Console()
    stats = GenerationStats()
    layout = generate_crossword(words, config, stats=stats)

    if layout is None:
        console.print("[red]Failed to generate crossword.[/]")
        console.print(stats.get_summary())
        return 1

    if args.json:
        print(json.dumps(layout.to_dict(), ensure_ascii=False, indent=2))
        return 0

    console.print(f"[green]Crossword with {len(layout.words)} words[/]")
    console.print(f"Letters: {' '.join(letter.upper() for letter in layout.selected_letters)}")
    print_grid(layout.grid, layout.words, console)
    print_words(layout.words, console)
    console.print(quality_report(layout.quality or assess_quality(layout.words)))
    console.print(stats.get_summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
