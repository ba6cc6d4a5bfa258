"""Scores how well the words of a finished layout cross each other.

Crossings near the middle of a word make a stronger puzzle than crossings on
its first or last letter, so every intersection gets a position score and the
whole layout gets a 0-100 rating.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

MIN_QUALITY_SCORE = 60
MAX_EDGE_ONLY_WORDS = 3
MIN_MIDDLE_INTERSECTION_WORDS = 4
MIN_AVERAGE_INTERSECTIONS = 1.2


@dataclass
class IntersectionQuality:
    position: int  # 1-based position in the word
    word_length: int
    quality_score: int
    is_edge_position: bool
    is_middle_position: bool


@dataclass
class QualityMetrics:
    total_words: int
    edge_only_words: int
    middle_intersection_words: int
    multiple_intersection_words: int
    average_intersections_per_word: float
    quality_score: int


def intersection_score(position: int, word_length: int) -> int:
    """Higher when the crossing sits further from both ends of the word."""
    score = 15 * min(position - 1, word_length - position)
    if position == math.ceil(word_length / 2):
        score += 10
    if position == 1 or position == word_length:
        score -= 20
    return max(0, score)


def find_intersection_point(word, other) -> Optional[int]:
    """1-based position in ``word`` where ``other`` crosses it, if they cross."""
    if word.direction == other.direction:
        return None
    other_cells = other.cells()
    for i, cell in enumerate(word.cells()):
        if cell in other_cells:
            j = other_cells.index(cell)
            if word.text[i] == other.text[j]:
                return i + 1
    return None


def find_intersections(word, words: Sequence) -> List[IntersectionQuality]:
    results = []
    length = len(word.text)
    for other in words:
        if other is word:
            continue
        position = find_intersection_point(word, other)
        if position is None:
            continue
        results.append(IntersectionQuality(
            position=position,
            word_length=length,
            quality_score=intersection_score(position, length),
            is_edge_position=position in (1, length),
            is_middle_position=1 < position < length,
        ))
    return results


def assess_quality(words: Sequence) -> QualityMetrics:
    """Rates a list of placed words (anything with text, direction and cells())."""
    if not words:
        return QualityMetrics(0, 0, 0, 0, 0.0, 0)

    edge_only = 0
    middle = 0
    multiple = 0
    total_intersections = 0
    for word in words:
        intersections = find_intersections(word, words)
        total_intersections += len(intersections)
        if intersections and all(i.is_edge_position for i in intersections):
            edge_only += 1
        if any(i.is_middle_position for i in intersections):
            middle += 1
        if len(intersections) > 1:
            multiple += 1

    average = total_intersections / len(words)
    score = 100
    score -= edge_only * 15
    if average < 1.5:
        score -= 25
    score += min(middle * 5, 30)
    score += min(multiple * 8, 40)

    return QualityMetrics(
        total_words=len(words),
        edge_only_words=edge_only,
        middle_intersection_words=middle,
        multiple_intersection_words=multiple,
        average_intersections_per_word=average,
        quality_score=max(0, min(100, score)),
    )


def meets_quality_standards(metrics: QualityMetrics, min_score: int = MIN_QUALITY_SCORE) -> bool:
    return (
        metrics.quality_score >= min_score
        and metrics.edge_only_words <= MAX_EDGE_ONLY_WORDS
        and metrics.middle_intersection_words >= MIN_MIDDLE_INTERSECTION_WORDS
        and metrics.average_intersections_per_word >= MIN_AVERAGE_INTERSECTIONS
    )


def rating(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 65:
        return "Good"
    if score >= 50:
        return "Fair"
    return "Poor"


def quality_report(metrics: QualityMetrics) -> str:
    lines = [
        f"Crossword Quality: {rating(metrics.quality_score)} (Score: {metrics.quality_score}/100)",
        f"├── Words: {metrics.total_words}",
        f"├── Edge-only Intersections: {metrics.edge_only_words}",
        f"├── Middle Intersections: {metrics.middle_intersection_words}",
        f"├── Multiple Intersections: {metrics.multiple_intersection_words}",
        f"├── Average Intersections per Word: {metrics.average_intersections_per_word:.1f}",
        f"└── Meets Standards: {'yes' if meets_quality_standards(metrics) else 'no'}",
    ]
    return "\n".join(lines)
