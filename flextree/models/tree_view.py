"""
TreeViewModel - stateful owner of a forest and its visible projection.

Renderers read rows from the model, forward expand clicks through
``toggle`` and finished drag gestures through ``reorder``, and redraw when
``rebuilt`` fires.
"""
from typing import Any, Callable, Iterable, List, Optional, Union
from loguru import logger

from flextree.core.config import ConfigManager, TreeViewSettings
from flextree.core.errors import InvalidIndexError
from flextree.core.events import Signal
from flextree.tree.forest import TreeForest
from flextree.tree.node import TreeNode, TreeObserver
from .flat_tree import FlatRow, make_row, project
from .reorder import CanMove, apply_reorder, resolve_reorder

OnReorder = Callable[[TreeNode, TreeNode], None]
NodeItemBuilder = Callable[[TreeNode], Any]


class TreeViewModel(TreeObserver):
    """
    Flat, depth-aware view over a forest.

    Usage:
        model = TreeViewModel(roots, will_reorder=lambda a, b: True)
        model.rebuilt.connect(redraw)
        model.toggle(0)
        model.reorder(1, 3)

    Attributes:
        forest: The owned TreeForest
        settings: Pass-through TreeViewSettings
        will_reorder: Policy predicate asked once per gesture
        rebuilt: Signal(model) emitted after every re-projection
        reordered: Signal(order_node, current_node) emitted per committed move
    """

    def __init__(
        self,
        nodes: Union[TreeForest, Iterable[TreeNode], None] = None,
        settings: Optional[TreeViewSettings] = None,
        will_reorder: Optional[CanMove] = None,
        on_reorder: Optional[OnReorder] = None,
        node_item_builder: Optional[NodeItemBuilder] = None,
    ):
        self.settings = settings or TreeViewSettings()
        self.will_reorder = will_reorder
        self.node_item_builder = node_item_builder
        self.rebuilt = Signal("TreeRebuilt")
        self.reordered = Signal("TreeReordered")
        if on_reorder is not None:
            self.reordered.connect(on_reorder)

        self._items: List[TreeNode] = []
        self._max_depth = 0
        self.forest = self._as_forest(nodes)
        self.forest.attach_observer(self)
        self._update_show_nodes()

    # =========================================================================
    # Projection
    # =========================================================================

    def rebuild(self) -> None:
        """Re-project the forest and tell listeners to redraw."""
        self._update_show_nodes()
        logger.debug(f"Rebuilt tree view: {len(self._items)} rows, max depth {self._max_depth}")
        self.rebuilt.emit(self)

    def set_forest(self, nodes: Union[TreeForest, Iterable[TreeNode]]) -> None:
        """Replace the displayed forest."""
        self.forest.attach_observer(None)
        for node in self.forest.walk():
            node.attach_observer(None)
        self.forest = self._as_forest(nodes)
        self.forest.attach_observer(self)
        self.rebuild()

    def _update_show_nodes(self) -> None:
        projection = project(self.forest.roots, observer=self)
        self._items = projection.nodes
        self._max_depth = projection.max_depth

    @staticmethod
    def _as_forest(nodes) -> TreeForest:
        if isinstance(nodes, TreeForest):
            return nodes
        return TreeForest(nodes or ())

    # =========================================================================
    # Row access
    # =========================================================================

    @property
    def items(self) -> tuple:
        return tuple(self._items)

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def content_width(self) -> Optional[float]:
        """Width needed by the deepest visible row; None means fill the parent."""
        if not self.settings.scrollable:
            return None
        return self._max_depth * self.settings.indent + self.settings.node_width

    def row_count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def node_at(self, row: int) -> TreeNode:
        if not 0 <= row < len(self._items):
            raise InvalidIndexError(row, len(self._items), "row")
        return self._items[row]

    def index_of(self, node: TreeNode) -> int:
        """Row of a visible node (-1 if hidden or unknown)."""
        for index, item in enumerate(self._items):
            if item is node:
                return index
        return -1

    def row(self, index: int) -> FlatRow:
        return make_row(index, self.node_at(index), self.settings.indent, self.settings.show_lines)

    def rows(self) -> List[FlatRow]:
        return [
            make_row(index, node, self.settings.indent, self.settings.show_lines)
            for index, node in enumerate(self._items)
        ]

    def is_item_reorderable(self, row: int) -> bool:
        return self.node_at(row).reorderable

    def build_item(self, row: int) -> Any:
        """Run the caller's item builder for a row; the result is opaque."""
        if self.node_item_builder is None:
            return None
        return self.node_item_builder(self.node_at(row))

    # =========================================================================
    # User intents
    # =========================================================================

    def toggle(self, row: int) -> bool:
        """Toggle expansion of the node at ``row``; returns the new state."""
        node = self.node_at(row)
        node.set_expanded(not node.expanded)
        return node.expanded

    def reorder(self, old_index: int, new_index: int) -> bool:
        """
        Apply a finished drag gesture.

        Returns:
            True if the tree changed. Vetoed and no-op gestures return False
            without rebuilding or emitting ``reordered``.

        Raises:
            InvalidIndexError: If either index is out of range
        """
        plan = resolve_reorder(self._items, old_index, new_index, self.will_reorder)
        if plan is None:
            return False
        if not apply_reorder(plan, self.forest):
            return False
        logger.info(f"Reordered {plan.order_node.id} onto {plan.current_node.id}")
        self.rebuild()
        self.reordered.emit(plan.order_node, plan.current_node)
        return True

    # =========================================================================
    # Configuration
    # =========================================================================

    def bind_config(self, config: ConfigManager) -> None:
        """Follow the ``view`` section of a ConfigManager."""
        self.settings = config.data.view
        config.on_changed.connect(self._on_config_change)

    def _on_config_change(self, section, key, value):
        if section == "view":
            # Settings only affect presentation; redraw without re-projecting.
            self.rebuilt.emit(self)
