"""Tests for ComponentArena ownership and reclamation."""

import sys
from pathlib import Path
import logging

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from composetree import ComponentArena, CycleError, ForeignNodeError, StaleNodeError
from composetree.core.arena import NodeKind


@pytest.fixture
def scenario():
    """Branch(Branch(Leaf+Leaf)+Branch(Leaf)) plus a detached leaf."""
    arena = ComponentArena()
    simple = arena.leaf()
    tree = arena.composite()
    branch1 = arena.composite()
    branch1.add(arena.leaf())
    branch1.add(arena.leaf())
    branch2 = arena.composite()
    branch2.add(arena.leaf())
    tree.add(branch1)
    tree.add(branch2)
    return arena, tree, branch1, branch2, simple


def test_slots_record_relations(scenario):
    arena, tree, branch1, branch2, _ = scenario
    assert arena.child_indices(tree.index) == (branch1.index, branch2.index)
    assert arena.parent_index(branch2.index) == tree.index
    assert arena.slot(tree.index).kind is NodeKind.COMPOSITE


def test_ancestors_and_depth(scenario):
    arena, tree, branch1, _, _ = scenario
    leaf = branch1.children()[0]
    assert list(arena.ancestors(leaf.index)) == [branch1.index, tree.index]
    assert arena.depth(leaf.index) == 2
    assert arena.depth(tree.index) == 0


def test_roots(scenario):
    arena, tree, _, _, simple = scenario
    assert arena.roots() == [simple, tree]


def test_subtree_is_preorder(scenario):
    arena, tree, branch1, branch2, _ = scenario
    leaf1, leaf2 = branch1.children()
    (leaf3,) = branch2.children()
    assert arena.subtree(tree.index) == [
        tree.index, branch1.index, leaf1.index, leaf2.index, branch2.index, leaf3.index
    ]


def test_attach_under_leaf_is_ignored():
    arena = ComponentArena()
    leaf = arena.leaf()
    other = arena.leaf()
    assert arena.attach(leaf.index, other.index) is False
    assert arena.parent_index(other.index) is None


def test_attach_cycle_raises():
    arena = ComponentArena()
    a = arena.composite()
    b = arena.composite()
    a.add(b)
    with pytest.raises(CycleError):
        arena.attach(b.index, a.index)


def test_detach_reports_membership(scenario):
    arena, tree, branch1, _, simple = scenario
    assert arena.detach(tree.index, simple.index) is False
    assert arena.detach(tree.index, branch1.index) is True
    assert arena.detach(tree.index, branch1.index) is False


def test_discard_frees_subtree_and_detaches(scenario):
    arena, tree, branch1, branch2, simple = scenario
    before = len(arena)

    freed = arena.discard(branch2)

    assert freed == 2
    assert len(arena) == before - 2
    assert tree.operation() == "Branch(Branch(Leaf+Leaf))"
    assert not branch2.alive
    assert branch2 not in arena
    assert branch1 in arena


def test_discard_stale_raises(scenario):
    arena, _, _, branch2, _ = scenario
    arena.discard(branch2)
    with pytest.raises(StaleNodeError):
        arena.discard(branch2)


def test_sweep_reclaims_every_detached_node(scenario):
    arena, tree, _, branch2, simple = scenario
    tree.add(simple)
    tree.remove(simple)
    tree.remove(branch2)

    reclaimed = arena.sweep(tree)

    # simple, branch2 and branch2's leaf
    assert reclaimed == 3
    assert len(arena) == len(arena.subtree(tree.index)) == 4
    assert tree.operation() == "Branch(Branch(Leaf+Leaf))"
    assert not simple.alive


def test_sweep_logs_summary(scenario, caplog):
    arena, tree, _, _, _ = scenario
    with caplog.at_level(logging.INFO, logger="composetree"):
        arena.sweep(tree)
    assert "1 slots reclaimed" in caplog.text


def test_indices_are_never_reused():
    arena = ComponentArena()
    first = arena.leaf()
    arena.discard(first)
    second = arena.leaf()
    assert second.index != first.index
    assert not first.alive


def test_contains_rejects_foreign_and_non_nodes():
    arena = ComponentArena()
    other = ComponentArena()
    leaf = other.leaf()
    assert leaf not in arena
    assert "leaf#0" not in arena


def test_discard_rejects_node_from_another_arena():
    arena = ComponentArena()
    root = arena.composite()
    root.add(arena.leaf())
    other = ComponentArena()
    stranger = other.leaf()

    with pytest.raises(ForeignNodeError):
        arena.discard(stranger)

    assert len(arena) == 2
    assert root.operation() == "Branch(Leaf)"
    assert stranger.alive


def test_sweep_rejects_foreign_keep_before_reclaiming():
    arena = ComponentArena()
    arena.composite()
    arena.leaf()
    other = ComponentArena()

    with pytest.raises(ForeignNodeError):
        arena.sweep(other.composite())

    assert len(arena) == 2
