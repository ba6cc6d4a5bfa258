import pytest

from crossword import ACROSS, DOWN, PlacedWord
from quality import (QualityMetrics, assess_quality, find_intersection_point, find_intersections,
                     intersection_score, meets_quality_standards, quality_report, rating)

KAHEA = PlacedWord("kahea", 5, 3, ACROSS, 1)
PALI = PlacedWord("pali", 4, 4, DOWN, 2)


@pytest.mark.parametrize("position, length, expected", [
    (1, 5, 0),
    (2, 5, 15),
    (3, 5, 40),
    (5, 5, 0),
    (2, 4, 25),
    (3, 4, 15),
    (1, 1, 0),
])
def test_intersection_score(position, length, expected):
    assert intersection_score(position, length) == expected


def test_find_intersection_point():
    assert find_intersection_point(KAHEA, PALI) == 2
    assert find_intersection_point(PALI, KAHEA) == 2
    assert find_intersection_point(KAHEA, PlacedWord("lei", 0, 0, ACROSS, 3)) is None
    assert find_intersection_point(KAHEA, PlacedWord("lei", 0, 0, DOWN, 3)) is None


def test_find_intersections():
    [crossing] = find_intersections(PALI, [KAHEA, PALI])
    assert crossing.position == 2
    assert crossing.word_length == 4
    assert crossing.quality_score == 25
    assert crossing.is_middle_position
    assert not crossing.is_edge_position


def test_assess_quality():
    metrics = assess_quality([KAHEA, PALI])
    assert metrics.total_words == 2
    assert metrics.edge_only_words == 0
    assert metrics.middle_intersection_words == 2
    assert metrics.multiple_intersection_words == 0
    assert metrics.average_intersections_per_word == 1.0
    assert metrics.quality_score == 100 - 25 + 10
    assert not meets_quality_standards(metrics)


def test_edge_only_words_lower_the_score():
    first = PlacedWord("kahea", 5, 3, ACROSS, 1)
    edge = PlacedWord("kai", 5, 3, DOWN, 2)
    metrics = assess_quality([first, edge])
    assert metrics.edge_only_words == 2
    assert metrics.quality_score == 100 - 30 - 25


def test_assess_quality_empty():
    assert assess_quality([]) == QualityMetrics(0, 0, 0, 0, 0.0, 0)


def test_meets_quality_standards():
    assert meets_quality_standards(QualityMetrics(12, 1, 6, 4, 1.5, 90))
    assert not meets_quality_standards(QualityMetrics(12, 4, 6, 4, 1.5, 90))
    assert not meets_quality_standards(QualityMetrics(12, 1, 6, 4, 1.1, 90))


def test_meets_quality_standards_custom_threshold():
    metrics = QualityMetrics(12, 1, 6, 4, 1.5, 70)
    assert meets_quality_standards(metrics)
    assert not meets_quality_standards(metrics, min_score=80)
    assert meets_quality_standards(metrics, min_score=70)


@pytest.mark.parametrize("score, expected", [(95, "Excellent"), (80, "Excellent"), (70, "Good"),
                                             (50, "Fair"), (10, "Poor")])
def test_rating(score, expected):
    assert rating(score) == expected


def test_quality_report():
    report = quality_report(assess_quality([KAHEA, PALI]))
    assert report.startswith("Crossword Quality: Excellent (Score: 85/100)")
    assert "Meets Standards: no" in report
