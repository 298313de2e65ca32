"""
Flattening a forest into the visible, depth-aware row sequence.

A node is visible when every ancestor is expanded. The walk is depth-first
pre-order and keeps sibling order, so row ``i + 1`` is either the first
child of row ``i`` or a later node at the same or a shallower depth.
"""
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional, Tuple

from flextree.tree.node import TreeNode, TreeObserver


class Projection(NamedTuple):
    """Visible nodes in display order and the deepest visible depth."""
    nodes: List[TreeNode]
    max_depth: int


@dataclass(frozen=True)
class FlatRow:
    """
    Everything a renderer needs for one visible row.

    Attributes:
        index: Row position in the projection
        node: The node itself (payload is ``node.data``)
        depth: Indentation level
        expanded: Current expansion state
        has_children: Whether an expand affordance makes sense
        reorderable: Whether a drag handle should be offered
        indent: Left offset of the row content (depth * indent)
        guides: X offsets of the vertical connector lines
        elbow: X offset of the horizontal connector, or None
    """
    index: int
    node: TreeNode
    depth: int
    expanded: bool
    has_children: bool
    reorderable: bool
    indent: float
    guides: Tuple[float, ...] = ()
    elbow: Optional[float] = None


def project(roots: Iterable[TreeNode], observer: Optional[TreeObserver] = None) -> Projection:
    """
    Flatten ``roots`` into the visible sequence.

    Children of collapsed nodes are never visited, so their depth does not
    count towards ``max_depth``. When ``observer`` is given, every visited
    node gets it attached so later edits can request a rebuild; without one
    the nodes keep whatever observer they already have.
    """
    visible: List[TreeNode] = []
    max_depth = 0

    def flatten(nodes):
        nonlocal max_depth
        for node in nodes:
            if observer is not None:
                node.attach_observer(observer)
            visible.append(node)
            if node.depth > max_depth:
                max_depth = node.depth
            if node.expanded and node.has_children:
                flatten(node.children)

    flatten(roots)
    return Projection(visible, max_depth)


def connector_guides(node: TreeNode, indent: float) -> Tuple[Tuple[float, ...], Optional[float]]:
    """
    Connector line offsets for ``node``.

    A vertical guide is drawn at ``ancestor.depth * indent`` for every
    ancestor with more than one child; the elbow joins the node to its
    parent's guide when the parent has more than one child.
    """
    guides = tuple(
        ancestor.depth * indent for ancestor in node.ancestors() if ancestor.child_count > 1
    )
    elbow = None
    if node.depth > 0 and node.parent is not None and node.parent.child_count > 1:
        elbow = (node.depth - 1) * indent
    return guides, elbow


def make_row(index: int, node: TreeNode, indent: float = 16.0, show_lines: bool = False) -> FlatRow:
    guides, elbow = connector_guides(node, indent) if show_lines else ((), None)
    return FlatRow(
        index=index,
        node=node,
        depth=node.depth,
        expanded=node.expanded,
        has_children=node.has_children,
        reorderable=node.reorderable,
        indent=node.depth * indent,
        guides=guides,
        elbow=elbow,
    )
