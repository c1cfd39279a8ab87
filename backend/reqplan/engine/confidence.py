"""Reliability score (0-100) for the current filtered portfolio."""
from decimal import Decimal

from reqplan.engine.calculator import round_half_up
from reqplan.models.requirement import RequirementWithEstimate
from reqplan.schemas.dashboard import ConfidenceBreakdown, ConfidenceLevel, ConfidenceScore

COMPLETENESS_MAX = Decimal(40)
CONSISTENCY_MAX = Decimal(30)
VOLUME_MAX = Decimal(20)
CATEGORIZATION_MAX = Decimal(10)

# Item count at which the volume sub-score saturates
VOLUME_SATURATION = 10

HIGH_THRESHOLD = 80
MEDIUM_THRESHOLD = 50

SUBSCORE_DECIMALS = 1


def confidence_level(score: int) -> ConfidenceLevel:
    if score >= HIGH_THRESHOLD:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_THRESHOLD:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def coefficient_of_variation(values: list[Decimal]) -> Decimal:
    """Population standard deviation over mean; 0 for fewer than two values."""
    if len(values) < 2:
        return Decimal(0)
    mean = sum(values, Decimal(0)) / len(values)
    if mean <= 0:
        return Decimal(0)
    variance = sum(((v - mean) ** 2 for v in values), Decimal(0)) / len(values)
    return variance.sqrt() / mean


def calculate_confidence(items: list[RequirementWithEstimate]) -> ConfidenceScore:
    """
    Four weighted sub-scores:
    completeness (share of items with an estimate, max 40),
    consistency (1 - coefficient of variation of estimate days, max 30),
    volume (item count, saturating at VOLUME_SATURATION, max 20),
    categorization (share of items with at least one tag, max 10).
    """
    n = len(items)
    if n == 0:
        return ConfidenceScore(score=0, level=ConfidenceLevel.LOW, breakdown=ConfidenceBreakdown())

    estimated = [i.estimation_days for i in items if i.estimation_days > 0]
    tagged = sum(1 for i in items if i.tags)

    completeness = COMPLETENESS_MAX * len(estimated) / n
    if estimated:
        consistency = CONSISTENCY_MAX * max(Decimal(0), 1 - coefficient_of_variation(estimated))
    else:
        consistency = Decimal(0)
    volume = VOLUME_MAX * min(Decimal(1), Decimal(n) / VOLUME_SATURATION)
    categorization = CATEGORIZATION_MAX * tagged / n

    breakdown = ConfidenceBreakdown(
        completeness=round_half_up(completeness, SUBSCORE_DECIMALS),
        consistency=round_half_up(consistency, SUBSCORE_DECIMALS),
        volume=round_half_up(volume, SUBSCORE_DECIMALS),
        categorization=round_half_up(categorization, SUBSCORE_DECIMALS),
    )
    total = (
        breakdown.completeness
        + breakdown.consistency
        + breakdown.volume
        + breakdown.categorization
    )
    score = min(100, int(round_half_up(total, 0)))
    return ConfidenceScore(score=score, level=confidence_level(score), breakdown=breakdown)
