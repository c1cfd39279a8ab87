"""FastAPI dependencies."""
from typing import Annotated

from fastapi import Depends

from reqplan.data.catalog import default_catalog
from reqplan.engine.calculator import EstimateCalculator
from reqplan.models.catalog import Catalog


def get_catalog() -> Catalog:
    return default_catalog()


def get_calculator(catalog: Annotated[Catalog, Depends(get_catalog)]) -> EstimateCalculator:
    return EstimateCalculator(catalog)
