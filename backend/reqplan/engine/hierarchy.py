"""
Requirement hierarchy: a forest built from single-parent links.

Traversals use explicit stacks so deep chains never hit the interpreter's
recursion limit. Cyclic edits are rejected at the edit boundary through
`would_create_cycle` / `validate_parent_change`; the tree itself never raises.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum as PyEnum
from typing import Any, Callable, Generic, Iterable, TypeVar

from reqplan.models.requirement import Priority, Requirement

T = TypeVar("T")

PRIORITY_ORDER: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MED: 1,
    Priority.LOW: 2,
}


@dataclass
class RequirementTreeNode(Generic[T]):
    item: T
    children: list["RequirementTreeNode[T]"] = field(default_factory=list)


@dataclass
class FlattenedNode(Generic[T]):
    item: T
    depth: int
    parent_id: str | None
    path: list[str]


class RequirementTree(Generic[T]):
    """Forest of items keyed by id."""

    def __init__(
        self,
        roots: list[RequirementTreeNode[T]],
        node_map: dict[str, RequirementTreeNode[T]],
        get_id: Callable[[T], str],
        get_parent_id: Callable[[T], str | None],
    ) -> None:
        self.roots = roots
        self.node_map = node_map
        self.get_id = get_id
        self.get_parent_id = get_parent_id

    def __len__(self) -> int:
        return len(self.node_map)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.node_map

    def parent_of(self, node_id: str) -> str | None:
        """Effective parent id: None for roots, including promoted orphans."""
        node = self.node_map.get(node_id)
        if node is None:
            return None
        parent_id = self.get_parent_id(node.item)
        return parent_id if parent_id and parent_id in self.node_map else None

    def descendant_ids(self, node_id: str) -> set[str]:
        descendants: set[str] = set()
        node = self.node_map.get(node_id)
        if node is None:
            return descendants
        stack = list(node.children)
        while stack:
            current = stack.pop()
            current_id = self.get_id(current.item)
            if current_id in descendants:
                continue
            descendants.add(current_id)
            stack.extend(current.children)
        return descendants

    def ancestor_ids(self, node_id: str) -> list[str]:
        """Ancestors from the immediate parent up to the root."""
        ancestors: list[str] = []
        seen = {node_id}
        parent_id = self.parent_of(node_id)
        while parent_id and parent_id not in seen:
            ancestors.append(parent_id)
            seen.add(parent_id)
            parent_id = self.parent_of(parent_id)
        return ancestors

    def depth(self, node_id: str) -> int:
        """0 for roots."""
        return len(self.ancestor_ids(node_id))

    def subtree_height(self, node_id: str) -> int:
        """Number of levels below node_id (0 for a leaf)."""
        node = self.node_map.get(node_id)
        if node is None:
            return 0
        height = 0
        stack = [(child, 1) for child in node.children]
        seen: set[str] = set()
        while stack:
            current, level = stack.pop()
            current_id = self.get_id(current.item)
            if current_id in seen:
                continue
            seen.add(current_id)
            height = max(height, level)
            stack.extend((child, level + 1) for child in current.children)
        return height

    def would_create_cycle(self, node_id: str, proposed_parent_id: str | None) -> bool:
        """True iff the parent is the node itself or one of its descendants."""
        if not proposed_parent_id:
            return False
        if proposed_parent_id == node_id:
            return True
        return proposed_parent_id in self.descendant_ids(node_id)

    def critical_path_length(self, weight_fn: Callable[[T], Any]) -> Decimal:
        """
        Longest cumulative weight from any root to any leaf.

        Post-order over an explicit stack; each node is valued once (memo by id):
        own weight (negatives count as 0) + max of its children's values.
        """
        memo: dict[str, Decimal] = {}
        best = Decimal(0)
        for root in self.roots:
            stack: list[tuple[RequirementTreeNode[T], bool]] = [(root, False)]
            while stack:
                node, expanded = stack.pop()
                node_id = self.get_id(node.item)
                if node_id in memo:
                    continue
                if not expanded:
                    stack.append((node, True))
                    stack.extend((child, False) for child in node.children)
                    continue
                own = max(Decimal(0), Decimal(str(weight_fn(node.item) or 0)))
                max_child = max(
                    (memo.get(self.get_id(child.item), Decimal(0)) for child in node.children),
                    default=Decimal(0),
                )
                memo[node_id] = own + max_child
            best = max(best, memo.get(self.get_id(root.item), Decimal(0)))
        return best

    def sort(self, key: Callable[[T], Any], reverse: bool = False) -> None:
        """Stable in-place sort of every sibling group, level by level."""
        self.roots.sort(key=lambda n: key(n.item), reverse=reverse)
        stack = list(self.roots)
        while stack:
            node = stack.pop()
            node.children.sort(key=lambda n: key(n.item), reverse=reverse)
            stack.extend(node.children)

    def flatten(self) -> list[FlattenedNode[T]]:
        """Pre-order depth-first listing with depth, parent and path metadata."""
        flat: list[FlattenedNode[T]] = []
        stack: list[tuple[RequirementTreeNode[T], int, str | None, list[str]]] = [
            (root, 0, None, []) for root in reversed(self.roots)
        ]
        while stack:
            node, depth, parent_id, path = stack.pop()
            node_id = self.get_id(node.item)
            node_path = path + [node_id]
            flat.append(FlattenedNode(item=node.item, depth=depth, parent_id=parent_id, path=node_path))
            stack.extend((child, depth + 1, node_id, node_path) for child in reversed(node.children))
        return flat


def build_requirement_tree(
    items: Iterable[T],
    get_id: Callable[[T], str],
    get_parent_id: Callable[[T], str | None],
) -> RequirementTree[T]:
    """
    Forest from a flat collection. Items whose parent is missing from the
    collection are promoted to roots; a repeated id keeps the last item.
    """
    node_map: dict[str, RequirementTreeNode[T]] = {}
    for item in items:
        node_map[get_id(item)] = RequirementTreeNode(item=item)

    roots: list[RequirementTreeNode[T]] = []
    for node in node_map.values():
        parent_id = get_parent_id(node.item)
        if parent_id and parent_id in node_map:
            node_map[parent_id].children.append(node)
        else:
            roots.append(node)
    return RequirementTree(roots, node_map, get_id, get_parent_id)


def build_tree_from_requirements(requirements: Iterable[Requirement]) -> RequirementTree[Requirement]:
    return build_requirement_tree(
        requirements,
        get_id=lambda r: r.req_id,
        get_parent_id=lambda r: r.parent_req_id,
    )


def validate_parent_change(
    tree: RequirementTree[Any],
    node_id: str,
    proposed_parent_id: str | None,
    max_depth: int,
) -> str | None:
    """
    Gate for a parent-link edit. Returns None when the edit may be committed,
    otherwise a message explaining why it must be rejected.
    """
    if not proposed_parent_id:
        return None
    if node_id not in tree:
        return f"Requirement {node_id} does not exist"
    if proposed_parent_id not in tree:
        return f"Parent requirement {proposed_parent_id} does not exist"
    if tree.would_create_cycle(node_id, proposed_parent_id):
        return f"Setting {proposed_parent_id} as parent of {node_id} would create a cycle"
    # levels = parent's depth + the node itself + everything below it
    levels = tree.depth(proposed_parent_id) + 2 + tree.subtree_height(node_id)
    if levels > max_depth:
        return f"Hierarchy would exceed the maximum depth of {max_depth} levels"
    return None


class SortOption(str, PyEnum):
    CREATED_DESC = "created-desc"
    CREATED_ASC = "created-asc"
    PRIORITY = "priority"
    TITLE = "title"
    ESTIMATE_DESC = "estimate-desc"
    ESTIMATE_ASC = "estimate-asc"


def requirement_sort_key(
    option: SortOption | str,
    estimate_days: Callable[[Requirement], Decimal],
) -> tuple[Callable[[Requirement], Any], bool]:
    """(key, reverse) for sorting sibling requirements."""
    option = SortOption(option)
    if option in (SortOption.CREATED_DESC, SortOption.CREATED_ASC):
        # Undated items sort as oldest
        def created_key(r: Requirement) -> float:
            return r.created_on.timestamp() if r.created_on else float("-inf")
        return created_key, option == SortOption.CREATED_DESC
    if option == SortOption.PRIORITY:
        return (lambda r: PRIORITY_ORDER.get(Priority(r.priority), len(PRIORITY_ORDER))), False
    if option == SortOption.TITLE:
        return (lambda r: r.title.casefold()), False
    return estimate_days, option == SortOption.ESTIMATE_DESC
