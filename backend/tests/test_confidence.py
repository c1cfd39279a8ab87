"""Confidence score tests."""
from decimal import Decimal

from reqplan.engine.aggregator import prepare_requirements_with_estimates
from reqplan.engine.confidence import calculate_confidence, coefficient_of_variation, confidence_level
from reqplan.schemas.dashboard import ConfidenceLevel


def test_level_thresholds():
    assert confidence_level(80) == ConfidenceLevel.HIGH
    assert confidence_level(79) == ConfidenceLevel.MEDIUM
    assert confidence_level(50) == ConfidenceLevel.MEDIUM
    assert confidence_level(49) == ConfidenceLevel.LOW


def test_coefficient_of_variation():
    assert coefficient_of_variation([Decimal(2), Decimal(2)]) == Decimal(0)
    assert coefficient_of_variation([Decimal(1), Decimal(3)]) == Decimal("0.5")
    assert coefficient_of_variation([Decimal(7)]) == Decimal(0)


def test_empty_portfolio_scores_zero():
    result = calculate_confidence([])
    assert result.score == 0
    assert result.level == ConfidenceLevel.LOW


def test_complete_uniform_portfolio_scores_full(make_req, make_est):
    requirements = [make_req(f"R{i}", labels="core") for i in range(10)]
    estimates = {r.req_id: make_est(r.req_id, 2) for r in requirements}
    result = calculate_confidence(prepare_requirements_with_estimates(requirements, estimates))
    assert result.score == 100
    assert result.level == ConfidenceLevel.HIGH
    assert result.breakdown.consistency == Decimal("30.0")


def test_partial_portfolio(make_req, make_est):
    requirements = [make_req("A", labels="x"), make_req("B"), make_req("C"), make_req("D")]
    estimates = {"A": make_est("A", 1), "B": make_est("B", 3)}
    result = calculate_confidence(prepare_requirements_with_estimates(requirements, estimates))
    assert result.breakdown.completeness == Decimal("20.0")
    assert result.breakdown.consistency == Decimal("15.0")
    assert result.breakdown.volume == Decimal("8.0")
    assert result.breakdown.categorization == Decimal("2.5")
    # 45.5 rounds half up
    assert result.score == 46
    assert result.level == ConfidenceLevel.LOW


def test_unestimated_portfolio_only_scores_volume(make_req):
    requirements = [make_req(f"R{i}") for i in range(5)]
    result = calculate_confidence(prepare_requirements_with_estimates(requirements, {}))
    assert result.breakdown.completeness == Decimal(0)
    assert result.breakdown.consistency == Decimal(0)
    assert result.score == 10
