"""Core abstractions for ComposeTree.

This package holds the node handles, the arena that owns node storage,
and the adapter/traverser/collector trio used to walk component trees.
"""

from .node import Component, Leaf, Composite
from .arena import ComponentArena, NodeKind
from .adapter import TreeAdapter, ComponentAdapter
from .traverser import (
    TreeTraverser,
    BreadthFirstTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    LevelOrderTraverser,
    create_traverser,
)
from .collector import (
    DataCollector,
    IdentifierCollector,
    MetadataCollector,
    OperationCollector,
    FullNodeCollector,
    ChildCountCollector,
    PathCollector,
    CustomCollector,
)

__all__ = [
    "Component",
    "Leaf",
    "Composite",
    "ComponentArena",
    "NodeKind",
    "TreeAdapter",
    "ComponentAdapter",
    "TreeTraverser",
    "BreadthFirstTraverser",
    "DepthFirstPreOrderTraverser",
    "DepthFirstPostOrderTraverser",
    "LevelOrderTraverser",
    "create_traverser",
    "DataCollector",
    "IdentifierCollector",
    "MetadataCollector",
    "OperationCollector",
    "FullNodeCollector",
    "ChildCountCollector",
    "PathCollector",
    "CustomCollector",
]
