"""Estimate calculation engine - all formulas deterministic, Decimal only. Effort is in days."""
import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from reqplan.models.catalog import Activity, Catalog, DriverDimension
from reqplan.models.defaults import FieldDefault
from reqplan.models.estimate import Estimate

logger = logging.getLogger(__name__)

DAYS_DECIMALS = 3
MAX_CONTINGENCY_PCT = Decimal("0.50")


class DriverMappingError(Exception):
    """The catalog has no multiplier for a chosen driver option."""

    def __init__(self, missing: dict[str, str]) -> None:
        self.missing = missing
        details = ", ".join(f"{dim}={opt!r}" for dim, opt in missing.items())
        super().__init__(f"Missing driver mapping: {details}")


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Decimal | float | int, decimals: int = 0) -> Decimal:
    """Round half away from zero: 2.5 -> 3, 2.555 (2dp) -> 2.56. Never banker's rounding."""
    quantize = Decimal(10) ** -decimals
    return to_decimal(value).quantize(quantize, rounding=ROUND_HALF_UP)


class EstimateCalculator:
    """Deterministic estimate engine over an injected reference catalog."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    def driver_multiplier(
        self,
        complexity: str,
        environments: str,
        reuse: str,
        stakeholders: str,
    ) -> Decimal:
        """Exact product of the four driver multipliers. Raises DriverMappingError on any miss."""
        choices = {
            DriverDimension.COMPLEXITY: complexity,
            DriverDimension.ENVIRONMENTS: environments,
            DriverDimension.REUSE: reuse,
            DriverDimension.STAKEHOLDERS: stakeholders,
        }
        product = Decimal(1)
        missing: dict[str, str] = {}
        for dimension, option in choices.items():
            multiplier = self.catalog.get_multiplier(dimension, option)
            if multiplier is None:
                missing[dimension.value] = option
                continue
            product *= multiplier
        if missing:
            raise DriverMappingError(missing)
        return product

    def risk_score(self, selected_risk_ids: Iterable[str]) -> Decimal:
        """Sum of weights of the selected risks. Unknown ids weigh 0."""
        total = Decimal(0)
        for risk_id in dict.fromkeys(selected_risk_ids):
            weight = self.catalog.get_risk_weight(risk_id)
            if weight is None:
                logger.debug("Ignoring unknown risk id %r", risk_id)
                continue
            total += weight
        return total

    def contingency_percentage(self, risk_score: Decimal | float | int) -> Decimal:
        """Band lookup on the risk score, monotonic non-decreasing, capped at 50%."""
        score = to_decimal(risk_score)
        if score <= 0:
            return Decimal(0)
        pct = Decimal(0)
        for band in self.catalog.contingency_bands:
            # Running maximum keeps the step function monotonic for any band order
            pct = max(pct, band.contingency_pct)
            if band.max_score is None or score <= band.max_score:
                break
        return min(pct, MAX_CONTINGENCY_PCT)

    def calculate_estimate(
        self,
        activities: list[Activity],
        complexity: str,
        environments: str,
        reuse: str,
        stakeholders: str,
        selected_risk_ids: Iterable[str] = (),
        *,
        req_id: str | None = None,
        scenario: str = "A",
        created_on: datetime | None = None,
        default_sources: Iterable[FieldDefault] = (),
    ) -> Estimate:
        """
        Estimate for one requirement scenario:
        subtotal = base × drivers, contingency = subtotal × band(risk), total = subtotal + contingency.
        Pure: identical inputs always give an identical Estimate.
        """
        risk_ids = tuple(dict.fromkeys(selected_risk_ids))
        base_days = sum((a.base_days for a in activities), Decimal(0))
        multiplier = self.driver_multiplier(complexity, environments, reuse, stakeholders)
        subtotal = round_half_up(base_days * multiplier, DAYS_DECIMALS)

        score = self.risk_score(risk_ids)
        pct = self.contingency_percentage(score)
        contingency = round_half_up(subtotal * pct, DAYS_DECIMALS)
        total = round_half_up(subtotal + contingency, DAYS_DECIMALS)

        return Estimate(
            req_id=req_id,
            scenario=scenario,
            complexity=complexity,
            environments=environments,
            reuse=reuse,
            stakeholders=stakeholders,
            included_activities=tuple(a.activity_code for a in activities),
            selected_risks=risk_ids,
            activities_base_days=base_days,
            driver_multiplier=multiplier,
            subtotal_days=subtotal,
            risk_score=score,
            contingency_pct=pct,
            contingency_days=contingency,
            total_days=total,
            catalog_version=self.catalog.catalog_version,
            drivers_version=self.catalog.drivers_version,
            riskmap_version=self.catalog.riskmap_version,
            created_on=created_on,
            default_sources=tuple(default_sources),
        )
