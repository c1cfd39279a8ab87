"""Reference catalog models: activities, drivers, risks, contingency bands."""
from decimal import Decimal
from enum import Enum as PyEnum

from pydantic import BaseModel, Field

from reqplan.models.estimate import ActivityOverride


class DriverDimension(str, PyEnum):
    COMPLEXITY = "complexity"
    ENVIRONMENTS = "environments"
    REUSE = "reuse"
    STAKEHOLDERS = "stakeholders"


class Activity(BaseModel):
    """Catalog unit of base effort."""

    activity_code: str
    display_name: str = ""
    driver_group: str
    base_days: Decimal = Field(..., ge=0)
    status: str = "Active"

    class Config:
        frozen = True


class Driver(BaseModel):
    driver: DriverDimension
    option: str
    multiplier: Decimal = Field(..., gt=0)
    explanation: str = ""

    class Config:
        frozen = True


class Risk(BaseModel):
    risk_id: str
    risk_item: str = ""
    category: str = ""
    weight: Decimal = Field(..., ge=0)

    class Config:
        frozen = True


class ContingencyBand(BaseModel):
    """Contingency applied to risk scores up to max_score (None = open-ended)."""

    band: str
    max_score: Decimal | None = None
    contingency_pct: Decimal = Field(..., ge=0)

    class Config:
        frozen = True


class Catalog(BaseModel):
    """Immutable reference data consumed by the estimate calculator."""

    activities: tuple[Activity, ...] = ()
    drivers: tuple[Driver, ...] = ()
    risks: tuple[Risk, ...] = ()
    contingency_bands: tuple[ContingencyBand, ...] = ()
    catalog_version: str = "v1.0"
    drivers_version: str = "v1.0"
    riskmap_version: str = "v1.0"
    # Options offered by the estimate form; None offers every priced option
    driver_options: dict[DriverDimension, tuple[str, ...]] | None = None

    class Config:
        frozen = True

    def form_options(self) -> dict[DriverDimension, tuple[str, ...]]:
        """Selectable options per driver dimension, in catalog order."""
        if self.driver_options is not None:
            return {dim: tuple(self.driver_options.get(dim, ())) for dim in DriverDimension}
        options: dict[DriverDimension, list[str]] = {dim: [] for dim in DriverDimension}
        for driver in self.drivers:
            if driver.option not in options[driver.driver]:
                options[driver.driver].append(driver.option)
        return {dim: tuple(opts) for dim, opts in options.items()}

    def get_activity(self, activity_code: str) -> Activity | None:
        return next((a for a in self.activities if a.activity_code == activity_code), None)

    def get_multiplier(self, dimension: DriverDimension | str, option: str) -> Decimal | None:
        """Multiplier for one driver option, or None when the catalog has no mapping."""
        dim = DriverDimension(dimension)
        match = next((d for d in self.drivers if d.driver == dim and d.option == option), None)
        return match.multiplier if match else None

    def get_risk_weight(self, risk_id: str) -> Decimal | None:
        match = next((r for r in self.risks if r.risk_id == risk_id), None)
        return match.weight if match else None

    def resolve_activities(
        self,
        activity_codes: list[str],
        overrides: list[ActivityOverride] | None = None,
    ) -> list[Activity]:
        """
        Activities ready for calculation, with per-estimate overrides applied.
        Codes missing from the catalog become placeholders in the Custom group
        with 0 base days unless an override supplies them.
        """
        override_map = {o.activity_code: o for o in (overrides or [])}
        result: list[Activity] = []
        for code in activity_codes:
            base = self.get_activity(code)
            override = override_map.get(code)
            if base is None:
                result.append(Activity(
                    activity_code=code,
                    display_name=(override.override_name if override and override.override_name else code),
                    driver_group=(override.override_group if override and override.override_group else "Custom"),
                    base_days=(override.override_days if override and override.override_days is not None else Decimal(0)),
                ))
                continue
            if override is None:
                result.append(base)
                continue
            changes = {}
            if override.override_name:
                changes["display_name"] = override.override_name
            if override.override_group:
                changes["driver_group"] = override.override_group
            if override.override_days is not None:
                changes["base_days"] = override.override_days
            result.append(base.model_copy(update=changes))
        return result
