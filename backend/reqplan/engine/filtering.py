"""Requirement filtering with ancestor re-inclusion and hierarchical listing."""
import logging

from reqplan.engine.hierarchy import SortOption, build_requirement_tree, requirement_sort_key
from reqplan.models.requirement import RequirementWithEstimate
from reqplan.schemas.requirement import AnnotatedRequirement, EstimateFilter, RequirementFilters

logger = logging.getLogger(__name__)


def normalize_search_string(value: str) -> str:
    return value.strip().lower()


def count_active_filters(filters: RequirementFilters) -> int:
    """Active filters excluding free-text search."""
    return (
        len(filters.priorities)
        + len(filters.states)
        + len(filters.owners)
        + len(filters.labels)
        + (1 if filters.estimate != EstimateFilter.ALL else 0)
    )


def has_active_filters(filters: RequirementFilters) -> bool:
    return bool(filters.search.strip()) or count_active_filters(filters) > 0


def matches_filters(item: RequirementWithEstimate, filters: RequirementFilters) -> bool:
    req = item.requirement
    if filters.priorities and req.priority not in filters.priorities:
        return False
    if filters.states and req.state not in filters.states:
        return False
    if filters.owners and req.business_owner not in filters.owners:
        return False
    if filters.labels and not any(tag in filters.labels for tag in item.tags):
        return False
    if filters.estimate == EstimateFilter.ESTIMATED and item.estimate is None:
        return False
    if filters.estimate == EstimateFilter.MISSING and item.estimate is not None:
        return False
    term = normalize_search_string(filters.search)
    if term:
        haystack = " ".join([req.req_id, req.title, req.description, req.labels or ""]).lower()
        if term not in haystack:
            return False
    return True


def filter_requirements(
    items: list[RequirementWithEstimate],
    filters: RequirementFilters,
    include_ancestors: bool = True,
) -> list[RequirementWithEstimate]:
    """
    Items matching the filters, in input order. With include_ancestors, every
    ancestor of a match is kept too so the filtered view keeps its hierarchy.
    """
    matched_ids = {i.requirement.req_id for i in items if matches_filters(i, filters)}
    keep = set(matched_ids)
    if include_ancestors and matched_ids:
        tree = build_requirement_tree(
            items,
            get_id=lambda i: i.requirement.req_id,
            get_parent_id=lambda i: i.requirement.parent_req_id,
        )
        for req_id in matched_ids:
            keep.update(tree.ancestor_ids(req_id))
    logger.debug("Filter kept %d of %d requirements (%d direct matches)", len(keep), len(items), len(matched_ids))
    return [i for i in items if i.requirement.req_id in keep]


def annotate_requirements(
    items: list[RequirementWithEstimate],
    filters: RequirementFilters | None = None,
    sort: SortOption = SortOption.CREATED_DESC,
) -> list[AnnotatedRequirement]:
    """Filtered, hierarchically ordered listing with depth and parent metadata."""
    filters = filters or RequirementFilters()
    kept = filter_requirements(items, filters)
    direct = {i.requirement.req_id for i in kept if matches_filters(i, filters)}
    days_by_id = {i.requirement.req_id: i.estimation_days for i in kept}

    tree = build_requirement_tree(
        kept,
        get_id=lambda i: i.requirement.req_id,
        get_parent_id=lambda i: i.requirement.parent_req_id,
    )
    key, reverse = requirement_sort_key(sort, lambda r: days_by_id.get(r.req_id, 0))
    tree.sort(key=lambda i: key(i.requirement), reverse=reverse)

    return [
        AnnotatedRequirement(
            requirement=node.item.requirement,
            estimation_days=node.item.estimation_days,
            has_estimate=node.item.estimate is not None,
            tags=node.item.tags,
            depth=node.depth,
            parent_id=node.parent_id,
            path=node.path,
            is_context=node.item.requirement.req_id not in direct,
        )
        for node in tree.flatten()
    ]
