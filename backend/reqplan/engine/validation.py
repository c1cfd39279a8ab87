"""
Estimate input validation. Returns messages; never raises.

Options are checked against the form vocabulary carried by the injected
catalog (`Catalog.form_options`). A declared option that the catalog cannot
price is a configuration error raised later by the calculator.
"""
from typing import Mapping, Sequence

from reqplan.models.catalog import Activity, DriverDimension

# Vocabulary of the standard estimate form, used when no catalog is given
VALID_OPTIONS: dict[DriverDimension, tuple[str, ...]] = {
    DriverDimension.COMPLEXITY: ("Low", "Medium", "High"),
    DriverDimension.ENVIRONMENTS: ("1 env", "2 env", "3 env"),
    DriverDimension.REUSE: ("Low", "Medium", "High"),
    DriverDimension.STAKEHOLDERS: ("1 team", "2-3 team", "4+ team"),
}

MISSING_MESSAGES: dict[DriverDimension, str] = {
    DriverDimension.COMPLEXITY: "Select complexity",
    DriverDimension.ENVIRONMENTS: "Select environments",
    DriverDimension.REUSE: "Select reuse level",
    DriverDimension.STAKEHOLDERS: "Select number of stakeholders",
}

DriverOptions = Mapping[DriverDimension, Sequence[str]]


def is_valid_option(dimension: DriverDimension, value: str, options: DriverOptions | None = None) -> bool:
    return value in (options or VALID_OPTIONS).get(dimension, ())


def _check_option(dimension: DriverDimension, value: str, strict: bool, options: DriverOptions) -> list[str]:
    if not value:
        return [MISSING_MESSAGES[dimension]]
    if not is_valid_option(dimension, value, options):
        if strict:
            return [f"Invalid {dimension.value}: must be one of {', '.join(options.get(dimension, ()))}"]
        return [f"{dimension.value.capitalize()} not valid"]
    return []


def validate_estimate_inputs(
    complexity: str,
    environments: str,
    reuse: str,
    stakeholders: str,
    activities: list[Activity] | None = None,
    *,
    strict: bool = False,
    validate_activities: bool = True,
    options: DriverOptions | None = None,
) -> list[str]:
    """
    Check driver choices and activity selection before calculating.

    Stakeholders may be left empty unless strict; an empty list means valid.
    """
    options = options or VALID_OPTIONS
    errors: list[str] = []
    errors += _check_option(DriverDimension.COMPLEXITY, complexity, strict, options)
    errors += _check_option(DriverDimension.ENVIRONMENTS, environments, strict, options)
    errors += _check_option(DriverDimension.REUSE, reuse, strict, options)
    if strict or stakeholders:
        errors += _check_option(DriverDimension.STAKEHOLDERS, stakeholders, strict, options)
    if validate_activities and not activities:
        errors.append("Select at least one activity")
    return errors
