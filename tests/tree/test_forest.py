import pytest

from flextree.core.errors import InvalidIndexError
from flextree.tree.forest import TreeForest
from flextree.tree.node import TreeNode


def data_of(nodes):
    return [node.data for node in nodes]


class TestTreeForest:

    def test_roots_are_owned(self):
        a, b = TreeNode("a"), TreeNode("b")
        forest = TreeForest([a, b])

        assert forest.roots == (a, b)
        assert a.forest is forest
        assert len(forest) == 2
        assert list(forest) == [a, b]

    def test_child_becomes_root(self):
        parent = TreeNode("p")
        child = TreeNode("c", parent=parent, children=[TreeNode("gc")])
        forest = TreeForest()

        forest.add_root(child)

        assert parent.children == ()
        assert child.parent is None
        assert child.depth == 0
        assert child.children[0].depth == 1
        assert child in forest

    def test_add_root_requests_rebuild(self, observer):
        forest = TreeForest()
        forest.attach_observer(observer)

        forest.add_root(TreeNode("a"))

        assert observer.rebuilds == 1

    def test_insert_root(self):
        a, b = TreeNode("a"), TreeNode("b")
        forest = TreeForest([a, b])

        forest.insert_root(1, TreeNode("x"))

        assert data_of(forest) == ["a", "x", "b"]

    def test_insert_existing_root_moves_it(self):
        a, b, c = TreeNode("a"), TreeNode("b"), TreeNode("c")
        forest = TreeForest([a, b, c])

        forest.insert_root(2, a)

        assert data_of(forest) == ["b", "c", "a"]

    def test_insert_root_invalid_index(self):
        forest = TreeForest([TreeNode("a")])
        with pytest.raises(InvalidIndexError):
            forest.insert_root(3, TreeNode("x"))
        assert len(forest) == 1

    def test_remove_root(self, observer):
        a, b = TreeNode("a"), TreeNode("b")
        forest = TreeForest([a, b])
        forest.attach_observer(observer)

        assert forest.remove_root(a) is True
        assert forest.remove_root(a) is False

        assert a.forest is None
        assert forest.roots == (b,)
        assert observer.rebuilds == 1

    def test_root_moved_under_another_root(self):
        a, b = TreeNode("a"), TreeNode("b")
        forest = TreeForest([a, b])

        a.add_child(b)

        assert forest.roots == (a,)
        assert b.depth == 1

    def test_find_and_index_of(self, two_parents):
        forest, nodes = two_parents
        assert forest.find("Y2") is nodes["Y2"]
        assert forest.find("missing") is None
        assert forest.index_of(nodes["P2"]) == 1
        assert forest.index_of(nodes["X"]) == -1

    def test_walk_covers_collapsed_nodes(self):
        hidden = TreeNode("hidden")
        forest = TreeForest([TreeNode("root", expanded=False, children=[hidden])])
        assert data_of(forest.walk()) == ["root", "hidden"]

    def test_list_round_trip(self, two_parents):
        forest, nodes = two_parents
        restored = TreeForest.from_list(forest.to_list())

        assert restored.to_list() == forest.to_list()
        assert restored.find("Y").depth == 1
        assert restored.find("P1").forest is restored
