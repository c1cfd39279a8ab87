"""Requirement filtering and hierarchical listing tests."""
from decimal import Decimal

import pytest

from reqplan.engine.aggregator import prepare_requirements_with_estimates
from reqplan.engine.filtering import (
    annotate_requirements,
    count_active_filters,
    filter_requirements,
    has_active_filters,
    normalize_search_string,
)
from reqplan.engine.hierarchy import SortOption
from reqplan.schemas.requirement import EstimateFilter, RequirementFilters


@pytest.fixture
def portfolio(make_req, make_est):
    requirements = [
        make_req("EPIC", title="Customer portal", priority="High", labels="portal"),
        make_req("LOGIN", parent="EPIC", title="Login page", priority="High", labels="portal, auth"),
        make_req("RESET", parent="LOGIN", title="Password reset", priority="Low", labels="auth"),
        make_req("REPORT", title="Monthly report", priority="Med", business_owner="finance"),
    ]
    estimates = {"LOGIN": make_est("LOGIN", 3), "REPORT": make_est("REPORT", 5)}
    return prepare_requirements_with_estimates(requirements, estimates)


def _ids(items):
    return [i.requirement.req_id for i in items]


class TestFilterCounting:

    def test_search_string_normalized(self):
        assert normalize_search_string("  Login PAGE ") == "login page"

    def test_count_excludes_search(self):
        filters = RequirementFilters(search="x", priorities=["High", "Low"], estimate=EstimateFilter.MISSING)
        assert count_active_filters(filters) == 3
        assert has_active_filters(filters)

    def test_blank_search_is_inactive(self):
        assert not has_active_filters(RequirementFilters(search="   "))


class TestFilterRequirements:

    def test_no_filters_keeps_everything(self, portfolio):
        assert _ids(filter_requirements(portfolio, RequirementFilters())) == ["EPIC", "LOGIN", "RESET", "REPORT"]

    def test_match_keeps_its_ancestors(self, portfolio):
        kept = filter_requirements(portfolio, RequirementFilters(search="password"))
        assert _ids(kept) == ["EPIC", "LOGIN", "RESET"]

    def test_without_ancestor_reinclusion(self, portfolio):
        kept = filter_requirements(portfolio, RequirementFilters(search="password"), include_ancestors=False)
        assert _ids(kept) == ["RESET"]

    def test_missing_estimate_filter(self, portfolio):
        kept = filter_requirements(portfolio, RequirementFilters(estimate="missing"), include_ancestors=False)
        assert _ids(kept) == ["EPIC", "RESET"]

    def test_label_and_owner_filters(self, portfolio):
        by_label = filter_requirements(portfolio, RequirementFilters(labels=["auth"]), include_ancestors=False)
        assert _ids(by_label) == ["LOGIN", "RESET"]
        by_owner = filter_requirements(portfolio, RequirementFilters(owners=["finance"]))
        assert _ids(by_owner) == ["REPORT"]

    def test_no_match_returns_empty(self, portfolio):
        assert filter_requirements(portfolio, RequirementFilters(search="nothing like this")) == []


class TestAnnotateRequirements:

    def test_context_rows_marked(self, portfolio):
        rows = annotate_requirements(portfolio, RequirementFilters(search="password"))
        assert [(r.requirement.req_id, r.depth, r.is_context) for r in rows] == [
            ("EPIC", 0, True),
            ("LOGIN", 1, True),
            ("RESET", 2, False),
        ]
        assert rows[2].path == ["EPIC", "LOGIN", "RESET"]
        assert rows[2].parent_id == "LOGIN"

    def test_estimate_sort_orders_siblings(self, portfolio):
        rows = annotate_requirements(portfolio, sort=SortOption.ESTIMATE_DESC)
        # roots: REPORT (5) before EPIC (0); children keep hierarchy
        assert [r.requirement.req_id for r in rows] == ["REPORT", "EPIC", "LOGIN", "RESET"]
        assert rows[0].has_estimate
        assert rows[0].estimation_days == Decimal(5)
        assert not rows[1].has_estimate
