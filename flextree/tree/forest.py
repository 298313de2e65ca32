"""
TreeForest - the ordered root list of a tree.

Roots remember the forest they belong to so that moving a root under
another node (or removing it) takes it out of the root list as well.
"""
from typing import Any, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar
from loguru import logger

from flextree.core.errors import InvalidIndexError
from .node import TreeNode, TreeObserver

T = TypeVar("T")


class TreeForest(Generic[T]):
    """
    Ordered sequence of root nodes plus the tree-level observer.

    Usage:
        forest = TreeForest([TreeNode("a"), TreeNode("b")])
        forest.add_root(TreeNode("c"))
        forest.find(node_id)
    """

    def __init__(self, roots: Optional[Iterable[TreeNode[T]]] = None):
        self._roots: List[TreeNode[T]] = []
        self._observer: Optional[TreeObserver] = None
        for node in roots or ():
            node._detach()
            self._link_root(len(self._roots), node)

    @property
    def roots(self) -> tuple:
        return tuple(self._roots)

    @property
    def observer(self) -> Optional[TreeObserver]:
        return self._observer

    def attach_observer(self, observer: Optional[TreeObserver]) -> None:
        self._observer = observer

    def __len__(self) -> int:
        return len(self._roots)

    def __iter__(self) -> Iterator[TreeNode[T]]:
        return iter(tuple(self._roots))

    def __contains__(self, node: object) -> bool:
        return any(root is node for root in self._roots)

    def index_of(self, node: TreeNode[T]) -> int:
        """Get index of a root (-1 if not found)."""
        for index, root in enumerate(self._roots):
            if root is node:
                return index
        return -1

    def walk(self) -> Iterator[TreeNode[T]]:
        """Pre-order walk over every node, ignoring expansion."""
        for root in tuple(self._roots):
            yield from root.walk()

    def find(self, node_id: str) -> Optional[TreeNode[T]]:
        """Get a node anywhere in the forest by ID."""
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    # =========================================================================
    # Root edits
    # =========================================================================

    def add_root(self, node: TreeNode[T]) -> TreeNode[T]:
        """Append a root, detaching it from its previous location first."""
        node._detach()
        self._link_root(len(self._roots), node)
        logger.debug(f"Added root {node.id}")
        self._request_rebuild()
        return node

    def insert_root(self, index: int, node: TreeNode[T]) -> TreeNode[T]:
        """
        Insert a root at ``index`` (0..len), detaching it first.

        Raises:
            InvalidIndexError: If the index is out of range
        """
        size = len(self._roots) - (1 if node in self else 0)
        if not 0 <= index <= size:
            raise InvalidIndexError(index, size, "insert index")
        node._detach()
        self._link_root(index, node)
        logger.debug(f"Inserted root {node.id} at {index}")
        self._request_rebuild()
        return node

    def remove_root(self, node: TreeNode[T]) -> bool:
        """Remove a root (returns True if it was a root of this forest)."""
        if node not in self:
            return False
        node._forest = None
        self._discard(node)
        node._release()
        logger.debug(f"Removed root {node.id}")
        self._request_rebuild()
        return True

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_list(self) -> List[Dict[str, Any]]:
        return [root.to_dict() for root in self._roots]

    @classmethod
    def from_list(cls, data: List[Dict[str, Any]]) -> "TreeForest":
        return cls(TreeNode.from_dict(item) for item in data)

    # =========================================================================
    # Internals (shared with TreeNode and the reorder engine)
    # =========================================================================

    def _link_root(self, index: int, node: TreeNode[T]) -> None:
        """Insert an already detached node without notifying."""
        node._set_parent(None)
        node._forest = self
        self._roots.insert(index, node)

    def _discard(self, node: TreeNode[T]) -> bool:
        index = self.index_of(node)
        if index < 0:
            return False
        del self._roots[index]
        return True

    def _request_rebuild(self) -> None:
        if self._observer is not None:
            self._observer.rebuild()
