import pytest

from flextree.tree.forest import TreeForest
from flextree.tree.node import TreeNode, TreeObserver


class RecordingObserver(TreeObserver):
    """Counts rebuild requests instead of re-projecting."""

    def __init__(self):
        self.rebuilds = 0

    def rebuild(self):
        self.rebuilds += 1


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def siblings():
    """Expanded Root{A, B, C}, everything reorderable."""
    a = TreeNode("A", node_id="A", reorderable=True)
    b = TreeNode("B", node_id="B", reorderable=True)
    c = TreeNode("C", node_id="C", reorderable=True)
    root = TreeNode("Root", node_id="Root", expanded=True, reorderable=True, children=[a, b, c])
    return root, a, b, c


@pytest.fixture
def two_parents():
    """
    Forest [P1{X, X2}, P2{Y, Y2}], parents expanded, everything reorderable.

    Visible rows: P1, X, X2, P2, Y, Y2
    """
    x = TreeNode("X", node_id="X", reorderable=True)
    x2 = TreeNode("X2", node_id="X2", reorderable=True)
    y = TreeNode("Y", node_id="Y", reorderable=True)
    y2 = TreeNode("Y2", node_id="Y2", reorderable=True)
    p1 = TreeNode("P1", node_id="P1", expanded=True, reorderable=True, children=[x, x2])
    p2 = TreeNode("P2", node_id="P2", expanded=True, reorderable=True, children=[y, y2])
    forest = TreeForest([p1, p2])
    return forest, {"P1": p1, "P2": p2, "X": x, "X2": x2, "Y": y, "Y2": y2}
