"""ComposeTree - Composite Object Trees with Cursors and Visitors.

ComposeTree models trees of leaf and composite nodes that client code can
treat uniformly. An arena owns every node, so parent back-references never
keep anything alive. On top of that sit cursors for flat collections,
visitors for operations that live outside the node classes, and
traversers for walking a tree in several orders.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from composetree import ComponentArena

    arena = ComponentArena()
    tree = arena.composite()
    tree.add(arena.leaf())
    print(tree.operation())        # Branch(Leaf)
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

# Core components
from .core.node import Component, Leaf, Composite
from .core.arena import ComponentArena, NodeKind
from .core.adapter import TreeAdapter, ComponentAdapter
from .core.traverser import (
    TreeTraverser,
    BreadthFirstTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    LevelOrderTraverser,
    create_traverser,
)
from .core.collector import (
    DataCollector,
    IdentifierCollector,
    MetadataCollector,
    OperationCollector,
    FullNodeCollector,
    ChildCountCollector,
    PathCollector,
    CustomCollector,
)

# Cursors and visitors
from .iteration import Aggregate, Cursor, ForwardCursor, BackwardCursor
from .visitor import (
    ElementKind,
    Element,
    ElementA,
    ElementB,
    Visitor,
    ConcreteVisitorX,
    ConcreteVisitorY,
    ComponentVisitor,
    RenderVisitor,
    LeafCountVisitor,
    create_element,
    create_visitor,
)

# Configuration and planning
from .config import (
    TraversalConfig,
    TraversalStrategy,
    DataRequirement,
    DepthConfig,
    FilterConfig,
    RenderConfig,
)
from .planning import ExecutionPlan
from .errors import (
    ComposeTreeError,
    CycleError,
    ForeignNodeError,
    StaleNodeError,
    CursorBoundsError,
    UnknownKindError,
    CapabilityMismatchError,
)

# High-level API
from .api import (
    traverse_tree,
    collect_tree_data,
    count_nodes,
    find_nodes,
    get_tree_paths,
    get_leaf_nodes,
    get_tree_stats,
)
from .logging_config import setup_logging

__all__ = [
    "__version__",
    # Core
    'Component',
    'Leaf',
    'Composite',
    'ComponentArena',
    'NodeKind',
    'TreeAdapter',
    'ComponentAdapter',
    'TreeTraverser',
    'BreadthFirstTraverser',
    'DepthFirstPreOrderTraverser',
    'DepthFirstPostOrderTraverser',
    'LevelOrderTraverser',
    'create_traverser',
    'DataCollector',
    'IdentifierCollector',
    'MetadataCollector',
    'OperationCollector',
    'FullNodeCollector',
    'ChildCountCollector',
    'PathCollector',
    'CustomCollector',
    # Cursors and visitors
    'Aggregate',
    'Cursor',
    'ForwardCursor',
    'BackwardCursor',
    'ElementKind',
    'Element',
    'ElementA',
    'ElementB',
    'Visitor',
    'ConcreteVisitorX',
    'ConcreteVisitorY',
    'ComponentVisitor',
    'RenderVisitor',
    'LeafCountVisitor',
    'create_element',
    'create_visitor',
    # Config
    'TraversalConfig',
    'TraversalStrategy',
    'DataRequirement',
    'DepthConfig',
    'FilterConfig',
    'RenderConfig',
    'ExecutionPlan',
    # Errors
    'ComposeTreeError',
    'CycleError',
    'ForeignNodeError',
    'StaleNodeError',
    'CursorBoundsError',
    'UnknownKindError',
    'CapabilityMismatchError',
    # API
    'traverse_tree',
    'collect_tree_data',
    'count_nodes',
    'find_nodes',
    'get_tree_paths',
    'get_leaf_nodes',
    'get_tree_stats',
    'setup_logging',
]
