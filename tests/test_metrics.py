import pytest

from code_duplicate_detector.metrics import (
    SUGGEST_PARAMETERIZED,
    SUGGEST_REVIEW,
    SUGGEST_SHARED_UTILITY,
    Severity,
    classify_severity,
    compute_metrics,
    recommendations_for,
    suggest_refactoring,
)
from code_duplicate_detector.models import DuplicationCluster


@pytest.mark.parametrize("lines, severity", [
    (101, Severity.HIGH),
    (100, Severity.MODERATE),
    (51, Severity.MODERATE),
    (50, Severity.LOW),
    (1, Severity.LOW),
    (0, Severity.NONE),
])
def test_classify_severity(lines, severity):
    assert classify_severity(lines) is severity


def test_three_instances_suggest_shared_utility(make_block):
    cluster = DuplicationCluster(
        instances=[make_block(f"{name}.js", 1, 5) for name in "abc"],
        similarity=0.5,
    )

    assert suggest_refactoring(cluster) == SUGGEST_SHARED_UTILITY


@pytest.mark.parametrize("similarity, expected", [
    (1.0, SUGGEST_PARAMETERIZED),
    (0.9, SUGGEST_PARAMETERIZED),
    (0.89, SUGGEST_REVIEW),
])
def test_pair_suggestion_depends_on_similarity(make_block, similarity, expected):
    cluster = DuplicationCluster(
        instances=[make_block("a.js", 1, 5), make_block("b.js", 1, 5)],
        similarity=similarity,
    )

    assert cluster.suggestion == expected


def test_compute_metrics(make_block):
    first = DuplicationCluster(
        instances=[
            make_block("a.js", 1, 10),
            make_block("b.js", 1, 10),
            make_block("c.js", 1, 12),
        ],
        similarity=1.0,
    )
    second = DuplicationCluster(
        instances=[make_block("a.js", 20, 25), make_block("d.js", 1, 5)],
        similarity=0.85,
    )

    metrics = compute_metrics([first, second])

    # floor(32 / 3) * 2 + floor(11 / 2) * 1
    assert first.potential_lines_reduced == 20
    assert second.potential_lines_reduced == 5
    assert metrics.duplicate_blocks == 2
    assert metrics.affected_files == 4
    assert metrics.potential_lines_reduced == 25
    assert metrics.severity is Severity.LOW


def test_compute_metrics_without_clusters():
    metrics = compute_metrics([])

    assert metrics.to_dict() == {
        "duplicate_blocks": 0,
        "affected_files": 0,
        "potential_lines_reduced": 0,
    }
    assert metrics.severity is Severity.NONE


def test_recommendations_are_copies():
    recommendations = recommendations_for(Severity.HIGH)
    recommendations.append("extra")

    assert "extra" not in recommendations_for(Severity.HIGH)
    assert recommendations_for(Severity.NONE)[0].startswith("✓ NO DUPLICATION")
