"""Requirement hierarchy API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from reqplan.config import Settings, get_settings
from reqplan.engine.aggregator import calculate_critical_path_days, prepare_requirements_with_estimates
from reqplan.engine.filtering import annotate_requirements
from reqplan.engine.hierarchy import SortOption, build_tree_from_requirements, validate_parent_change
from reqplan.schemas.hierarchy import (
    CriticalPathResult,
    HierarchyRequest,
    ParentChangeRequest,
    ParentChangeResult,
)
from reqplan.schemas.requirement import AnnotatedRequirement, RequirementListRequest

router = APIRouter(prefix="/hierarchy", tags=["hierarchy"])


@router.post("/validate-parent", response_model=ParentChangeResult)
def validate_parent(
    data: ParentChangeRequest,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Check a parent-link edit before it is committed by the caller."""
    tree = build_tree_from_requirements(data.requirements)
    message = validate_parent_change(tree, data.node_id, data.proposed_parent_id, settings.max_hierarchy_depth)
    return ParentChangeResult(allowed=message is None, message=message)


@router.post("/critical-path", response_model=CriticalPathResult)
def critical_path(data: HierarchyRequest):
    items = prepare_requirements_with_estimates(data.requirements, data.estimates)
    tree = build_tree_from_requirements(data.requirements)
    return CriticalPathResult(
        critical_path_days=calculate_critical_path_days(items),
        roots=len(tree.roots),
        requirements=len(tree),
    )


@router.post("/list", response_model=list[AnnotatedRequirement])
def list_requirements(data: RequirementListRequest):
    try:
        sort = SortOption(data.sort)
    except ValueError:
        allowed = ", ".join(o.value for o in SortOption)
        raise HTTPException(status_code=400, detail=f"Unknown sort option {data.sort!r}; use one of {allowed}")
    items = prepare_requirements_with_estimates(data.requirements, data.estimates)
    return annotate_requirements(items, data.filters, sort)
