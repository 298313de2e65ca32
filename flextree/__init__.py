"""
flextree - Tree model for hierarchical list widgets

Toolkit-independent node model, projection of a partially collapsed forest
into visible rows, and drag-to-reorder resolution.
"""

# Core systems
from flextree.core.config import ConfigManager, FlexTreeConfig, TreeViewSettings, LoggingSettings
from flextree.core.errors import TreeError, InvalidIndexError, CycleError
from flextree.core.events import Signal
from flextree.core.logging import setup_logging

# Tree
from flextree.tree.node import TreeNode, TreeObserver
from flextree.tree.forest import TreeForest

# Models
from flextree.models.flat_tree import FlatRow, Projection, project
from flextree.models.reorder import ReorderPlan, apply_reorder, resolve_reorder
from flextree.models.tree_view import TreeViewModel

__version__ = "0.1.0"

__all__ = [
    # Core
    "ConfigManager",
    "FlexTreeConfig",
    "TreeViewSettings",
    "LoggingSettings",
    "TreeError",
    "InvalidIndexError",
    "CycleError",
    "Signal",
    "setup_logging",
    # Tree
    "TreeNode",
    "TreeObserver",
    "TreeForest",
    # Models
    "FlatRow",
    "Projection",
    "project",
    "ReorderPlan",
    "apply_reorder",
    "resolve_reorder",
    "TreeViewModel",
]
