"""
Event primitives for the tree model.

Provides:
- Signal: synchronous observer used by nodes (``changed``), the view model
  (``rebuilt``, ``reordered``) and the config manager (``on_changed``)

Usage:
    from flextree.core.events import Signal

    node.changed.connect(on_node_changed)
"""
from .observer import Signal


__all__ = ["Signal"]
