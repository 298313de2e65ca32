"""
Sample forests and a plain-text renderer, used by ``main.py``.
"""
import random
from typing import List, Optional

from flextree.tree.node import TreeNode
from flextree.models.tree_view import TreeViewModel

_SYLLABLES = ["ka", "lo", "mi", "ra", "su", "te", "vo", "ne", "di", "pa"]


def _mock_name(rng: random.Random) -> str:
    return "".join(rng.choice(_SYLLABLES) for _ in range(3)).capitalize()


def generate_forest(
    root_count: int = 5,
    max_depth: int = 4,
    seed: Optional[int] = None,
    reorderable: bool = True,
) -> List[TreeNode]:
    """
    Build expanded sample roots with generated names.

    Each root gets three children; deeper levels get five children, except
    between a third and a half of ``max_depth`` where they get one, which
    yields a mix of bushy and narrow branches.
    """
    rng = random.Random(seed)

    def children_for(count: int, depth: int) -> List[TreeNode]:
        if depth >= max_depth:
            return []
        narrow = max_depth // 3 < depth <= max_depth // 2
        return [
            TreeNode(
                _mock_name(rng),
                expanded=True,
                reorderable=reorderable,
                children=children_for(1 if narrow else 5, depth + 1),
            )
            for _ in range(count)
        ]

    return [
        TreeNode(
            f"Root {index + 1}",
            expanded=True,
            reorderable=reorderable,
            children=children_for(3, 1),
        )
        for index in range(root_count)
    ]


def render_text(model: TreeViewModel, indent: str = "  ") -> str:
    """One line per visible row: indentation, expand marker, payload."""
    lines = []
    for row in model.rows():
        if row.has_children:
            marker = "-" if row.expanded else "+"
        else:
            marker = " "
        lines.append(f"{indent * row.depth}{marker} {row.node.data}")
    return "\n".join(lines)
