"""
Drag-to-reorder resolution.

A drag gesture arrives as ``(old_index, new_index)`` on the projected row
sequence. When the row moves down, ``new_index`` is decremented and read in
the sequence with the dragged row already removed, so dragging row 1 onto
row 2 targets the node shown at row 2. Resolution turns that pair into a
``ReorderPlan`` without touching the tree; application then moves the node
in the real structure, so an abandoned gesture leaves no trace.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
from loguru import logger

from flextree.core.errors import InvalidIndexError
from flextree.tree.forest import TreeForest
from flextree.tree.node import TreeNode

CanMove = Callable[[TreeNode, TreeNode], bool]


@dataclass(frozen=True)
class ReorderPlan:
    """
    Resolved reorder gesture.

    Attributes:
        order_node: The dragged node
        current_node: The node it was dropped on
        upper: True when the gesture moved downwards; a cross-parent move
            then lands after ``current_node`` instead of before it
        old_index: Row of ``order_node`` in the projection
        new_index: Adjusted drop index, read without the dragged row
    """
    order_node: TreeNode
    current_node: TreeNode
    upper: bool
    old_index: int
    new_index: int

    @property
    def same_parent(self) -> bool:
        return self.order_node.parent is self.current_node.parent


def resolve_reorder(
    visible: Sequence[TreeNode],
    old_index: int,
    new_index: int,
    can_move: Optional[CanMove] = None,
) -> Optional[ReorderPlan]:
    """
    Map a gesture on the visible rows back to the two nodes involved.

    Args:
        visible: The projection the gesture was made on
        old_index: Row the drag started from (0..len-1)
        new_index: Drop slot (0..len)
        can_move: Policy predicate; a missing predicate vetoes every move

    Returns:
        The plan, or None when the move is vetoed or would change nothing

    Raises:
        InvalidIndexError: If either index is out of range
    """
    size = len(visible)
    if not 0 <= old_index < size:
        raise InvalidIndexError(old_index, size, "old index")
    if not 0 <= new_index <= size:
        raise InvalidIndexError(new_index, size + 1, "new index")

    if old_index == new_index or size < 2:
        return None

    upper = False
    if old_index < new_index:
        new_index -= 1
        upper = True

    order_node = visible[old_index]
    remaining = [node for index, node in enumerate(visible) if index != old_index]
    # Dropping past the last row targets the last remaining row.
    current_node = remaining[min(new_index, len(remaining) - 1)]

    if not order_node.reorderable:
        logger.debug(f"Reorder skipped: {order_node.id} is not reorderable")
        return None
    if can_move is None or not can_move(order_node, current_node):
        logger.debug(f"Reorder vetoed: {order_node.id} -> {current_node.id}")
        return None
    if order_node.is_ancestor_of(current_node):
        logger.warning(f"Reorder rejected: {current_node.id} is inside the subtree of {order_node.id}")
        return None

    return ReorderPlan(order_node, current_node, upper, old_index, new_index)


def apply_reorder(plan: ReorderPlan, forest: Optional[TreeForest] = None) -> bool:
    """
    Apply a plan to the real tree without emitting any notification.

    ``forest`` is needed whenever a root is involved. A node that is no
    longer where the plan expects it makes the move a silent no-op.

    Returns:
        True if the structure changed
    """
    order_node, current_node = plan.order_node, plan.current_node
    if order_node is current_node or order_node.is_ancestor_of(current_node):
        return False

    if plan.same_parent:
        parent = current_node.parent
        if parent is not None:
            siblings = parent._children
        elif forest is not None:
            siblings = forest._roots
        else:
            return False
        return _move_next_to(siblings, current_node, order_node)

    target_parent = current_node.parent
    if target_parent is not None:
        siblings = target_parent._children
    elif forest is not None and current_node in forest:
        siblings = forest._roots
    else:
        logger.debug(f"Reorder skipped: {current_node.id} is not in the forest")
        return False

    # Different parents, so detaching cannot shift the target's index.
    order_node._detach()
    index = _index_in(siblings, current_node)
    if plan.upper:
        index += 1
    if target_parent is not None:
        target_parent._link(index, order_node)
    else:
        forest._link_root(index, order_node)
    logger.debug(f"Moved {order_node.id} next to {current_node.id} at index {index}")
    return True


def _move_next_to(siblings: List[TreeNode], current_node: TreeNode, order_node: TreeNode) -> bool:
    """
    Move ``order_node`` beside ``current_node`` inside one sibling list.

    A node dragged upwards lands before the target, a node dragged
    downwards lands after it.
    """
    current_index = _index_in(siblings, current_node)
    if current_index < 0:
        return False
    order_index = _index_in(siblings, order_node)
    if order_index < 0:
        return False

    del siblings[order_index]
    index = _index_in(siblings, current_node)
    if current_index < order_index:
        siblings.insert(index, order_node)
    else:
        siblings.insert(index + 1, order_node)
    logger.debug(f"Moved {order_node.id} beside sibling {current_node.id}")
    return True


def _index_in(nodes: List[TreeNode], node: TreeNode) -> int:
    for index, candidate in enumerate(nodes):
        if candidate is node:
            return index
    return -1
