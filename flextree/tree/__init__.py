from .node import TreeNode, TreeObserver
from .forest import TreeForest

__all__ = ["TreeNode", "TreeObserver", "TreeForest"]
