"""Domain models."""
from reqplan.models.catalog import Activity, Catalog, ContingencyBand, Driver, DriverDimension, Risk
from reqplan.models.defaults import DefaultSource, DefaultSourceKind, FieldDefault
from reqplan.models.estimate import ActivityOverride, Estimate
from reqplan.models.requirement import (
    Priority,
    Requirement,
    RequirementState,
    RequirementWithEstimate,
    parse_labels,
)

__all__ = [
    "Activity",
    "ActivityOverride",
    "Catalog",
    "ContingencyBand",
    "DefaultSource",
    "DefaultSourceKind",
    "Driver",
    "DriverDimension",
    "Estimate",
    "FieldDefault",
    "Priority",
    "Requirement",
    "RequirementState",
    "RequirementWithEstimate",
    "Risk",
    "parse_labels",
]
