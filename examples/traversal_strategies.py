#!/usr/bin/env python3
"""
Traversal strategies example for ComposeTree.

Walks the same component tree breadth-first, pre-order and post-order,
then walks a flat collection with forward and backward cursors.
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from composetree import Aggregate, ComponentArena, get_tree_stats, traverse_tree


def build_tree(arena):
    root = arena.composite()
    for width in (2, 1, 3):
        branch = arena.composite()
        for _ in range(width):
            branch.add(arena.leaf())
        root.add(branch)
    return root


def main():
    arena = ComponentArena()
    root = build_tree(arena)

    for strategy in ("bfs", "dfs_pre", "dfs_post"):
        names = [node.identifier() for node in traverse_tree(root, strategy=strategy)]
        print(f"{strategy:>8}: {' '.join(names)}")

    stats = get_tree_stats(root)
    print(f"\nNodes: {stats['total_nodes']}, leaves: {stats['leaf_nodes']}, "
          f"max depth: {stats['max_depth']}")

    words = Aggregate(["alpha", "beta", "gamma"])
    cursor = words.create_backward_iterator()
    backwards = []
    while cursor.has_next():
        backwards.append(cursor.get_current())
    print(f"\nForward:  {list(words)}")
    print(f"Backward: {backwards}")


if __name__ == "__main__":
    print("ComposeTree - Traversal Strategies Example")
    print("=" * 50)
    main()
