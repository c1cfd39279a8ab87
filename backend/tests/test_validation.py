"""Estimate input validation tests."""
from decimal import Decimal

from reqplan.engine.validation import validate_estimate_inputs
from reqplan.models.catalog import Activity, Catalog, Driver, DriverDimension

ACTIVITY = [Activity(activity_code="A", driver_group="G", base_days=Decimal(1))]


class TestValidateEstimateInputs:

    def test_valid_inputs(self):
        assert validate_estimate_inputs("Medium", "2 env", "Medium", "2-3 team", ACTIVITY) == []

    def test_missing_fields(self):
        errors = validate_estimate_inputs("", "", "", "", [])
        assert errors == [
            "Select complexity",
            "Select environments",
            "Select reuse level",
            "Select at least one activity",
        ]

    def test_stakeholders_required_when_strict(self):
        errors = validate_estimate_inputs("Low", "1 env", "High", "", ACTIVITY, strict=True)
        assert errors == ["Select number of stakeholders"]

    def test_invalid_option_lenient_message(self):
        errors = validate_estimate_inputs("Huge", "2 env", "Medium", "", ACTIVITY)
        assert errors == ["Complexity not valid"]

    def test_invalid_option_strict_lists_choices(self):
        errors = validate_estimate_inputs("Medium", "5 env", "Medium", "1 team", ACTIVITY, strict=True)
        assert errors == ["Invalid environments: must be one of 1 env, 2 env, 3 env"]

    def test_activities_check_can_be_skipped(self):
        assert validate_estimate_inputs("Low", "1 env", "Low", "1 team", None, validate_activities=False) == []

    def test_option_values_are_case_sensitive(self):
        assert validate_estimate_inputs("medium", "2 env", "Medium", "", ACTIVITY) == ["Complexity not valid"]


class TestCatalogVocabulary:

    def test_default_catalog_offers_priced_options(self, catalog):
        options = catalog.form_options()
        assert options[DriverDimension.COMPLEXITY] == ("Low", "Medium", "High")
        assert options[DriverDimension.STAKEHOLDERS] == ("1 team", "2-3 team", "4+ team")

    def test_extra_priced_option_becomes_valid(self, catalog):
        extended = catalog.model_copy(update={
            "drivers": catalog.drivers + (Driver(driver="complexity", option="Very High", multiplier="1.6"),),
        })
        errors = validate_estimate_inputs(
            "Very High", "2 env", "Medium", "1 team", ACTIVITY, strict=True, options=extended.form_options(),
        )
        assert errors == []

    def test_declared_options_take_precedence(self):
        catalog = Catalog(
            drivers=(Driver(driver="complexity", option="Low", multiplier="0.8"),),
            driver_options={DriverDimension.COMPLEXITY: ("Low", "Medium")},
        )
        options = catalog.form_options()
        assert options[DriverDimension.COMPLEXITY] == ("Low", "Medium")
        assert options[DriverDimension.REUSE] == ()
        assert validate_estimate_inputs("Medium", "", "", "", ACTIVITY, options=options)[0] == "Select environments"
