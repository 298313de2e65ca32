from .flat_tree import FlatRow, Projection, connector_guides, make_row, project
from .reorder import ReorderPlan, apply_reorder, resolve_reorder
from .tree_view import TreeViewModel

__all__ = [
    "FlatRow",
    "Projection",
    "connector_guides",
    "make_row",
    "project",
    "ReorderPlan",
    "apply_reorder",
    "resolve_reorder",
    "TreeViewModel",
]
