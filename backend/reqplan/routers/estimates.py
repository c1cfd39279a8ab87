"""Estimate and catalog API routes."""
import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from reqplan.config import Settings, get_settings
from reqplan.deps import get_calculator, get_catalog
from reqplan.engine.calculator import DriverMappingError, EstimateCalculator
from reqplan.engine.validation import validate_estimate_inputs
from reqplan.models.catalog import Catalog
from reqplan.models.estimate import Estimate
from reqplan.schemas.estimate import EstimateRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["estimates"])


@router.get("/catalog", response_model=Catalog)
def get_reference_catalog(catalog: Annotated[Catalog, Depends(get_catalog)]):
    return catalog


@router.post("/estimates/calculate", response_model=Estimate)
def calculate_estimate(
    data: EstimateRequest,
    calculator: Annotated[EstimateCalculator, Depends(get_calculator)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    activities = calculator.catalog.resolve_activities(data.activity_codes, data.activity_overrides)
    errors = validate_estimate_inputs(
        data.complexity,
        data.environments,
        data.reuse,
        data.stakeholders,
        activities,
        strict=True,
        options=calculator.catalog.form_options(),
    )
    if errors:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=errors)
    try:
        estimate = calculator.calculate_estimate(
            activities,
            data.complexity,
            data.environments,
            data.reuse,
            data.stakeholders,
            data.selected_risks,
            req_id=data.req_id,
            scenario=data.scenario or settings.default_scenario,
            created_on=datetime.now(timezone.utc),
            default_sources=data.default_sources,
        )
    except DriverMappingError as exc:
        logger.error("Catalog is inconsistent: %s", exc, extra={"req_id": data.req_id})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return estimate
