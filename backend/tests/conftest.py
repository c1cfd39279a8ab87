"""
Shared fixtures for the reqplan test suite.

Fixtures:
    catalog      - the default reference catalog
    calculator   - EstimateCalculator over the default catalog
    make_req     - factory for Requirement objects
    make_est     - factory for an Estimate with a given total
    client       - FastAPI TestClient with the catalog dependency overridable
"""
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from reqplan.data.catalog import default_catalog
from reqplan.deps import get_catalog
from reqplan.engine.calculator import EstimateCalculator
from reqplan.main import app
from reqplan.models.estimate import Estimate
from reqplan.models.requirement import Requirement


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def calculator(catalog):
    return EstimateCalculator(catalog)


@pytest.fixture
def make_req():
    def _make(req_id, parent=None, priority="Med", labels=None, title=None, **kwargs):
        return Requirement(
            req_id=req_id,
            parent_req_id=parent,
            title=title if title is not None else f"Requirement {req_id}",
            priority=priority,
            labels=labels,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_est():
    def _make(req_id, total, complexity="Medium"):
        total = Decimal(str(total))
        return Estimate(
            req_id=req_id,
            complexity=complexity,
            environments="2 env",
            reuse="Medium",
            stakeholders="2-3 team",
            activities_base_days=total,
            driver_multiplier=Decimal("1.000"),
            subtotal_days=total,
            risk_score=Decimal(0),
            contingency_pct=Decimal(0),
            contingency_days=Decimal(0),
            total_days=total,
            catalog_version="v1.0",
            drivers_version="v1.0",
            riskmap_version="v1.0",
            created_on=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
    return _make


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_catalog, None)
