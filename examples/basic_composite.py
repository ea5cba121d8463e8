#!/usr/bin/env python3
"""
Basic composite example for ComposeTree.

This example demonstrates:
- Building a tree out of leaves and composites
- Moving a subtree between parents
- Reclaiming detached nodes from the arena
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from composetree import ComponentArena, LeafCountVisitor, RenderConfig


def main():
    arena = ComponentArena(RenderConfig(separator=" + ", branch_label="Dir", leaf_label="file"))

    root = arena.composite("root")
    src = arena.composite("src")
    docs = arena.composite("docs")
    for _ in range(3):
        src.add(arena.leaf())
    docs.add(arena.leaf("README"))
    root.add(src)
    root.add(docs)

    print(f"Tree:   {root.operation()}")
    print(f"Leaves: {root.accept(LeafCountVisitor())}")

    # Moving docs under src detaches it from root first
    src.add(docs)
    print(f"Moved:  {root.operation()}")

    stray = arena.leaf("tmp")
    print(f"Live nodes before sweep: {len(arena)}")
    arena.sweep(root)
    print(f"Live nodes after sweep:  {len(arena)} (stray alive: {stray.alive})")


if __name__ == "__main__":
    print("ComposeTree - Basic Composite Example")
    print("=" * 50)
    main()
