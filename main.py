import sys

from flextree.core.config import ConfigManager
from flextree.core.logging import setup_logging
from flextree.demo import generate_forest, render_text
from flextree.models.tree_view import TreeViewModel


def main(config_path: str = None):
    print("--- 1. Initialize Config & Logging ---")
    config = ConfigManager(config_path)
    setup_logging(config.data.logging.debug_mode, config.data.logging.log_dir)

    print("--- 2. Build Sample Forest ---")
    roots = generate_forest(root_count=2, max_depth=3, seed=7)

    def on_reorder(order_node, current_node):
        print(f"[Event] Moved '{order_node.data}' next to '{current_node.data}'")

    model = TreeViewModel(
        roots,
        will_reorder=lambda order_node, current_node: True,
        on_reorder=on_reorder,
    )
    model.bind_config(config)
    model.rebuilt.connect(lambda m: print(f"[Event] Rebuilt: {m.row_count()} rows"))
    print(render_text(model))
    print(f"Content width: {model.content_width}")

    print("--- 3. Collapse First Child ---")
    model.toggle(1)
    print(render_text(model))

    print("--- 4. Drag Row 1 Below Row 2 ---")
    model.reorder(1, 2)
    print(render_text(model))


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
