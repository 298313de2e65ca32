from flextree.demo import generate_forest, render_text
from flextree.models.tree_view import TreeViewModel
from flextree.tree.node import TreeNode


class TestGenerateForest:

    def test_shape(self):
        roots = generate_forest(root_count=2, max_depth=2, seed=1)

        assert [root.data for root in roots] == ["Root 1", "Root 2"]
        for root in roots:
            assert root.child_count == 3
            assert root.expanded and root.reorderable
            for child in root.children:
                assert child.depth == 1
                assert child.child_count == 0

    def test_deeper_levels(self):
        roots = generate_forest(root_count=1, max_depth=4, seed=1)
        root = roots[0]
        child = root.children[0]
        grandchild = child.children[0]

        # depth 2 sits in the narrow band for max_depth 4
        assert child.child_count == 5
        assert grandchild.child_count == 1
        assert all(node.depth <= 3 for node in root.walk())

    def test_seed_is_deterministic(self):
        first = [node.data for root in generate_forest(seed=42) for node in root.walk()]
        second = [node.data for root in generate_forest(seed=42) for node in root.walk()]
        assert first == second

    def test_not_reorderable(self):
        roots = generate_forest(root_count=1, max_depth=2, seed=3, reorderable=False)
        assert not any(node.reorderable for node in roots[0].walk())


class TestWalkthrough:

    def test_collapsed_child_dragged_below_its_sibling(self):
        roots = generate_forest(root_count=2, max_depth=3, seed=7)
        model = TreeViewModel(roots, will_reorder=lambda order_node, current_node: True)
        first, second = roots[0].children[:2]

        model.toggle(1)
        assert model.reorder(1, 2) is True

        assert roots[0].children[:2] == (second, first)
        assert first.parent is roots[0]
        assert first.depth == 1
        assert model.index_of(first) == 2 + second.child_count


class TestRenderText:

    def test_markers_and_indentation(self):
        leaf = TreeNode("leaf")
        closed = TreeNode("closed", children=[TreeNode("hidden")])
        root = TreeNode("root", expanded=True, children=[leaf, closed])
        model = TreeViewModel([root])

        assert render_text(model) == "- root\n    leaf\n  + closed"

    def test_empty_model(self):
        assert render_text(TreeViewModel()) == ""
