# -*- coding: utf-8 -*-
"""
TreeNode - Mutable node of a labeled forest.

Provides:
- Payload, expansion state and a fixed reorderable flag
- Parent/children bookkeeping with recursive depth propagation
- Per-node change notification (``changed`` signal)
- Tree-level rebuild requests through an attached TreeObserver

Example:
    root = TreeNode("root", expanded=True, children=[TreeNode("a"), TreeNode("b")])
    root.add_child(TreeNode("c"))
    root.children[0].depth   # 1
"""
from abc import ABC, abstractmethod
from typing import (
    Any, Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar, TYPE_CHECKING
)
from uuid import uuid4
from loguru import logger

from flextree.core.errors import CycleError, InvalidIndexError
from flextree.core.events import Signal

if TYPE_CHECKING:
    from .forest import TreeForest

T = TypeVar("T")

_MISSING = object()


class TreeObserver(ABC):
    """
    Tree-level observer.

    Attached to every visible node by the projection walk. Structural edits
    and expansion changes call ``rebuild()`` so the owner can re-project.
    """

    @abstractmethod
    def rebuild(self) -> None:
        pass


class TreeNode(Generic[T]):
    """
    One element of a forest.

    The children list is private: ``children`` returns a tuple snapshot and
    every edit goes through the methods below so that the parent reference
    and ``depth`` never drift from the actual structure.

    Attributes:
        id: Stable identifier (uuid4 string unless supplied)
        changed: Signal emitted with the node on data, expansion and
            structural changes
    """

    def __init__(
        self,
        data: T,
        node_id: Optional[str] = None,
        expanded: bool = False,
        reorderable: bool = False,
        parent: Optional["TreeNode[T]"] = None,
        children: Optional[Iterable["TreeNode[T]"]] = None,
    ):
        """
        Create a node.

        Args:
            data: Caller payload
            node_id: Optional unique ID (generated if not provided)
            expanded: Whether children are included in the projection
            reorderable: Whether the node may be dragged
            parent: Optional parent; the node is appended to its children
            children: Initial children, adopted by this node
        """
        self.id = node_id or str(uuid4())
        self._data = data
        self._expanded = bool(expanded)
        self._reorderable = bool(reorderable)
        self._parent: Optional[TreeNode[T]] = None
        self._depth = 0
        self._children: List[TreeNode[T]] = []
        self._forest: Optional["TreeForest[T]"] = None
        self._observer: Optional[TreeObserver] = None
        self.changed = Signal("NodeChanged")

        if children:
            nodes = list(children)
            self._check_adoptable(nodes)
            if parent is not None:
                for child in nodes:
                    if child is parent or child.is_ancestor_of(parent):
                        raise CycleError(f"Cannot adopt {child.id}: it is {parent.id} or one of its ancestors")
            for child in nodes:
                child._detach()
                self._link(len(self._children), child)

        if parent is not None:
            parent.add_child(self)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def data(self) -> T:
        return self._data

    @data.setter
    def data(self, value: T) -> None:
        self.set_data(value)

    @property
    def expanded(self) -> bool:
        return self._expanded

    @expanded.setter
    def expanded(self, value: bool) -> None:
        self.set_expanded(value)

    @property
    def reorderable(self) -> bool:
        return self._reorderable

    @property
    def depth(self) -> int:
        """Distance from the nearest root (roots are 0)."""
        return self._depth

    @property
    def parent(self) -> Optional["TreeNode[T]"]:
        return self._parent

    @property
    def forest(self) -> Optional["TreeForest[T]"]:
        """The forest this node is a root of, if any."""
        return self._forest

    @property
    def children(self) -> tuple:
        return tuple(self._children)

    @property
    def has_children(self) -> bool:
        return bool(self._children)

    @property
    def child_count(self) -> int:
        return len(self._children)

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def observer(self) -> Optional[TreeObserver]:
        return self._observer

    def attach_observer(self, observer: Optional[TreeObserver]) -> None:
        """Set the tree-level observer that receives rebuild requests."""
        self._observer = observer

    # =========================================================================
    # Queries
    # =========================================================================

    def index_of(self, node: "TreeNode[T]") -> int:
        """Get index of a child in order (-1 if not found)."""
        for index, child in enumerate(self._children):
            if child is node:
                return index
        return -1

    def ancestors(self) -> Iterator["TreeNode[T]"]:
        """Yield parent, grandparent, ... up to the root."""
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def is_ancestor_of(self, node: "TreeNode[T]") -> bool:
        return any(ancestor is self for ancestor in node.ancestors())

    def walk(self) -> Iterator["TreeNode[T]"]:
        """Pre-order walk over this node and every descendant, ignoring expansion."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    # =========================================================================
    # Payload & expansion
    # =========================================================================

    def set_data(self, value: T) -> None:
        """Replace the payload. Only the node's own listeners are notified."""
        self._data = value
        self.changed.emit(self)

    def set_expanded(self, expanded: bool) -> None:
        """Show or hide the children in the projection."""
        self._expanded = bool(expanded)
        self.changed.emit(self)
        self._request_rebuild()

    # =========================================================================
    # Structural edits
    # =========================================================================

    def add_child(self, node: "TreeNode[T]") -> "TreeNode[T]":
        """
        Append a child, detaching it from its previous location first.

        Returns:
            The added node (for chaining)

        Raises:
            CycleError: If ``node`` is this node or one of its ancestors
        """
        self._check_adoptable([node])
        node._detach()
        self._link(len(self._children), node)
        logger.debug(f"Added child {node.id} to {self.id}")
        self._notify_structure()
        return node

    def insert_child_at(self, index: int, node: "TreeNode[T]") -> "TreeNode[T]":
        """
        Insert a child at ``index`` (0..child_count), detaching it first.

        The index is interpreted in the list without ``node``, so moving an
        existing child behaves like remove-then-insert.

        Raises:
            InvalidIndexError: If the index is out of range
            CycleError: If ``node`` is this node or one of its ancestors
        """
        self._check_adoptable([node])
        size = len(self._children) - (1 if node._parent is self else 0)
        if not 0 <= index <= size:
            raise InvalidIndexError(index, size, "insert index")
        node._detach()
        self._link(index, node)
        logger.debug(f"Inserted child {node.id} into {self.id} at {index}")
        self._notify_structure()
        return node

    def add_children(self, nodes: Iterable["TreeNode[T]"]) -> None:
        """Append several children with a single rebuild request."""
        nodes = list(nodes)
        if not nodes:
            return
        self._check_adoptable(nodes)
        for node in nodes:
            node._detach()
            self._link(len(self._children), node)
        logger.debug(f"Added {len(nodes)} children to {self.id}")
        self._notify_structure()

    def remove_child(self, node: "TreeNode[T]") -> bool:
        """Remove a child (returns True if it was a child of this node)."""
        if node._parent is not self:
            return False
        self._children.remove(node)
        node._set_parent(None)
        node._release()
        logger.debug(f"Removed child {node.id} from {self.id}")
        self._notify_structure()
        return True

    def remove_children(self, nodes: Iterable["TreeNode[T]"]) -> List["TreeNode[T]"]:
        """Remove every given node that is a child of this node."""
        removed = []
        for node in nodes:
            if node._parent is self:
                self._children.remove(node)
                node._set_parent(None)
                node._release()
                removed.append(node)
        return self._finish_removal(removed)

    def remove_child_at(self, index: int) -> "TreeNode[T]":
        """
        Remove and return the child at ``index``.

        Raises:
            InvalidIndexError: If the index is out of range
        """
        if not 0 <= index < len(self._children):
            raise InvalidIndexError(index, len(self._children), "child index")
        node = self._children.pop(index)
        node._set_parent(None)
        node._release()
        self._finish_removal([node])
        return node

    def remove_range(self, start: int, end: int) -> List["TreeNode[T]"]:
        """
        Remove the children in the half-open range ``[start, end)``.

        Raises:
            InvalidIndexError: Unless 0 <= start <= end <= child_count
        """
        size = len(self._children)
        if not 0 <= start <= size:
            raise InvalidIndexError(start, size, "range start")
        if not start <= end <= size:
            raise InvalidIndexError(end, size, "range end")
        removed = self._children[start:end]
        del self._children[start:end]
        for node in removed:
            node._set_parent(None)
            node._release()
        return self._finish_removal(removed)

    def remove_where(self, predicate: Callable[["TreeNode[T]"], bool]) -> List["TreeNode[T]"]:
        """Remove every child for which ``predicate`` returns True."""
        kept, removed = [], []
        for child in self._children:
            (removed if predicate(child) else kept).append(child)
        self._children = kept
        for node in removed:
            node._set_parent(None)
            node._release()
        return self._finish_removal(removed)

    def clear_children(self) -> List["TreeNode[T]"]:
        """Remove all children."""
        removed, self._children = self._children, []
        for node in removed:
            node._set_parent(None)
            node._release()
        return self._finish_removal(removed)

    def remove_self(self) -> None:
        """
        Detach this node from its parent (or forest) and release its children.

        The released children become detached roots. Only ``changed`` is
        emitted; callers that need a re-projection must request it. The whole
        former subtree loses its tree-level observer.
        """
        self._detach()
        self._release()
        released, self._children = self._children, []
        for child in released:
            child._set_parent(None)
        logger.debug(f"Node {self.id} removed itself, released {len(released)} children")
        self.changed.emit(self)

    def copy_with(
        self,
        node_id: Optional[str] = None,
        data: Any = _MISSING,
        expanded: Optional[bool] = None,
        reorderable: Optional[bool] = None,
        parent: Optional["TreeNode[T]"] = None,
    ) -> "TreeNode[T]":
        """
        Deep structural clone with optional overrides.

        Children are cloned recursively (keeping their ids) and parented to
        the clone. The clone is detached unless ``parent`` is given, in which
        case it is appended to that parent.
        """
        clone = TreeNode(
            data=self._data if data is _MISSING else data,
            node_id=node_id or self.id,
            expanded=self._expanded if expanded is None else expanded,
            reorderable=self._reorderable if reorderable is None else reorderable,
        )
        for child in self._children:
            clone._link(len(clone._children), child.copy_with())
        if parent is not None:
            parent.add_child(clone)
        return clone

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the subtree to a JSON-compatible dict (payload as-is)."""
        return {
            "id": self.id,
            "data": self._data,
            "expanded": self._expanded,
            "reorderable": self._reorderable,
            "children": [child.to_dict() for child in self._children],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TreeNode":
        """Deserialize a subtree produced by ``to_dict``."""
        return cls(
            data=data.get("data"),
            node_id=data.get("id"),
            expanded=data.get("expanded", False),
            reorderable=data.get("reorderable", False),
            children=[cls.from_dict(child) for child in data.get("children", [])],
        )

    def __repr__(self) -> str:
        return f"TreeNode(id={self.id!r}, data={self._data!r}, depth={self._depth})"

    # =========================================================================
    # Internals (shared with TreeForest and the reorder engine)
    # =========================================================================

    def _check_adoptable(self, nodes: List["TreeNode[T]"]) -> None:
        for node in nodes:
            if node is self or node.is_ancestor_of(self):
                raise CycleError(f"Cannot add {node.id} under {self.id}: it would become its own ancestor")

    def _set_parent(self, parent: Optional["TreeNode[T]"]) -> None:
        self._parent = parent
        self._set_depth(parent._depth + 1 if parent is not None else 0)

    def _set_depth(self, depth: int) -> None:
        self._depth = depth
        for child in self._children:
            child._set_depth(depth + 1)

    def _link(self, index: int, node: "TreeNode[T]") -> None:
        """Insert an already detached node without notifying."""
        node._forest = None
        node._set_parent(self)
        self._children.insert(index, node)

    def _detach(self) -> bool:
        """Remove this node from its parent or forest, keeping its subtree."""
        if self._parent is not None:
            self._parent._children.remove(self)
            self._set_parent(None)
            return True
        if self._forest is not None:
            forest, self._forest = self._forest, None
            return forest._discard(self)
        return False

    def _release(self) -> None:
        """Drop the tree-level observer from this subtree once it leaves the tree."""
        for node in self.walk():
            node._observer = None

    def _finish_removal(self, removed: List["TreeNode[T]"]) -> List["TreeNode[T]"]:
        if removed:
            logger.debug(f"Removed {len(removed)} children from {self.id}")
            self._notify_structure()
        return removed

    def _request_rebuild(self) -> None:
        if self._observer is not None:
            self._observer.rebuild()

    def _notify_structure(self) -> None:
        self.changed.emit(self)
        self._request_rebuild()
