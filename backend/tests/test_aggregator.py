"""Portfolio KPI aggregation tests."""
from decimal import Decimal

from reqplan.engine.aggregator import (
    calculate_critical_path_days,
    calculate_dashboard_kpis,
    difficulty_from_complexity,
    median,
    percentile_nearest_rank,
    prepare_requirements_with_estimates,
    top_tag_by_effort,
)


def _d(*values):
    return [Decimal(str(v)) for v in values]


class TestStatistics:

    def test_median_odd_and_even(self):
        assert median(_d(5, 1, 3)) == Decimal(3)
        assert median(_d(4, 1, 3, 2)) == Decimal("2.5")
        assert median([]) == Decimal(0)

    def test_p80_nearest_rank(self):
        # ceil(0.8 x 10) = rank 8
        assert percentile_nearest_rank(_d(*range(1, 11)), Decimal("0.8")) == Decimal(8)
        # ceil(0.8 x 3) = rank 3
        assert percentile_nearest_rank(_d(1, 2, 3), Decimal("0.8")) == Decimal(3)
        assert percentile_nearest_rank([], Decimal("0.8")) == Decimal(0)

    def test_difficulty_mapping(self):
        assert difficulty_from_complexity("Low") == 2
        assert difficulty_from_complexity("High") == 5
        assert difficulty_from_complexity(None) == 3


class TestPrepare:

    def test_missing_estimate_counts_as_zero(self, make_req, make_est):
        items = prepare_requirements_with_estimates(
            [make_req("A", labels="x, y"), make_req("B")],
            {"A": make_est("A", "2.5", complexity="High")},
        )
        assert items[0].estimation_days == Decimal("2.5")
        assert items[0].difficulty == 5
        assert items[0].tags == ["x", "y"]
        assert items[1].estimation_days == Decimal(0)
        assert items[1].estimate is None


class TestDashboardKpis:

    def test_empty_portfolio(self):
        kpis = calculate_dashboard_kpis([])
        assert kpis.total_days == Decimal(0)
        assert kpis.top_tag_by_effort is None

    def test_totals_and_breakdowns(self, make_req, make_est):
        requirements = [
            make_req("A", priority="High", labels="core"),
            make_req("B", priority="High", labels="core, ui"),
            make_req("C", priority="Low", labels="ui"),
            make_req("D", priority="Med"),
        ]
        estimates = {
            "A": make_est("A", 6, complexity="High"),
            "B": make_est("B", 2, complexity="Low"),
            "C": make_est("C", 2),
        }
        kpis = calculate_dashboard_kpis(prepare_requirements_with_estimates(requirements, estimates))

        assert kpis.total_days == Decimal("10.000")
        # statistics only over estimated items: 6, 2, 2
        assert kpis.avg_days == Decimal("3.333")
        assert kpis.median_days == Decimal("2.000")
        assert kpis.p80_days == Decimal("6.000")
        assert kpis.effort_by_priority.High == Decimal("8.000")
        assert kpis.effort_by_priority.Med == Decimal("0.000")
        assert kpis.effort_by_priority_pct.High == Decimal("80.0")
        assert kpis.effort_by_priority_pct.Low == Decimal("20.0")
        assert kpis.priority_mix.High == 2
        assert kpis.priority_mix_pct.Med == Decimal("25.0")
        # D has no estimate and falls back to medium difficulty
        assert (kpis.difficulty_mix.low, kpis.difficulty_mix.medium, kpis.difficulty_mix.high) == (1, 2, 1)
        assert kpis.top_tag_by_effort.tag == "core"
        assert kpis.top_tag_by_effort.effort == Decimal("8.000")

    def test_critical_path_follows_hierarchy(self, make_req, make_est):
        requirements = [make_req("P"), make_req("C1", parent="P"), make_req("C2", parent="P"), make_req("S")]
        estimates = {
            "P": make_est("P", 1),
            "C1": make_est("C1", 4),
            "C2": make_est("C2", 2),
            "S": make_est("S", 3),
        }
        items = prepare_requirements_with_estimates(requirements, estimates)
        assert calculate_critical_path_days(items) == Decimal(5)
        assert calculate_dashboard_kpis(items).critical_path_days == Decimal("5.000")

    def test_critical_path_never_exceeds_total(self, make_req, make_est):
        requirements = [make_req("A"), make_req("B", parent="A"), make_req("C", parent="B")]
        estimates = {r.req_id: make_est(r.req_id, 2) for r in requirements}
        kpis = calculate_dashboard_kpis(prepare_requirements_with_estimates(requirements, estimates))
        assert kpis.critical_path_days <= kpis.total_days


class TestTopTag:

    def test_tie_goes_to_first_tag_seen(self, make_req, make_est):
        requirements = [make_req("A", labels="alpha"), make_req("B", labels="beta")]
        estimates = {"A": make_est("A", 2), "B": make_est("B", 2)}
        top = top_tag_by_effort(prepare_requirements_with_estimates(requirements, estimates))
        assert top.tag == "alpha"
        assert top.effort == Decimal(2)

    def test_tie_within_one_requirement_follows_label_order(self, make_req, make_est):
        items = prepare_requirements_with_estimates([make_req("A", labels="beta, alpha")], {"A": make_est("A", 3)})
        assert top_tag_by_effort(items).tag == "beta"

    def test_unestimated_items_carry_no_tag_effort(self, make_req):
        items = prepare_requirements_with_estimates([make_req("A", labels="alpha")], {})
        assert top_tag_by_effort(items) is None
