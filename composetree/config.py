"""Configuration system for ComposeTree.

This module defines how users describe what they want from a traversal of a
component tree (what data to collect, how to filter nodes, how deep to go)
and how composite nodes render themselves.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Callable, Set, Any, List


class DataRequirement(Enum):
    """Specifies what data is collected from each visited node."""
    IDENTIFIER_ONLY = "identifier"      # Just node IDs (most efficient)
    METADATA = "metadata"                # Basic metadata dict
    OPERATION = "operation"              # Result of node.operation()
    CHILDREN_COUNT = "children_count"   # Number of immediate children
    FULL_NODE = "full"                  # The node handle itself
    PATH = "path"                        # Identifiers from root to node
    CUSTOM = "custom"                    # User-defined collection


class TraversalStrategy(Enum):
    """How to walk the tree."""
    BREADTH_FIRST = "bfs"           # Level by level
    DEPTH_FIRST_PRE = "dfs_pre"     # Parent before children
    DEPTH_FIRST_POST = "dfs_post"   # Children before parent
    LEVEL_ORDER = "level"           # Grouped by level


@dataclass(frozen=True)
class RenderConfig:
    """How composite and leaf nodes describe themselves in operation().

    The defaults produce strings such as ``Branch(Branch(Leaf+Leaf)+Leaf)``.
    """

    separator: str = "+"
    branch_label: str = "Branch"
    leaf_label: str = "Leaf"
    open_bracket: str = "("
    close_bracket: str = ")"

    def wrap(self, parts: List[str], label: Optional[str] = None) -> str:
        """Join rendered children and wrap them in the branch format.

        Args:
            parts: Already-rendered child descriptions, in order
            label: Overrides ``branch_label`` for this one branch
        """
        joined = self.separator.join(parts)
        head = self.branch_label if label is None else label
        return f"{head}{self.open_bracket}{joined}{self.close_bracket}"


@dataclass
class FilterConfig:
    """Configuration for filtering nodes during traversal."""

    include_filter: Optional[Callable[[Any], bool]] = None  # Include predicate
    exclude_filter: Optional[Callable[[Any], bool]] = None  # Exclude predicate

    # Pruning behavior
    prune_on_exclude: bool = True  # Don't traverse excluded branches

    def should_include(self, node) -> bool:
        """Check if a node passes the configured filters.

        Exclusion takes precedence over inclusion.
        """
        if self.exclude_filter and self.exclude_filter(node):
            return False

        if self.include_filter:
            return self.include_filter(node)

        return True

    def should_explore_children(self, node) -> bool:
        """Check if the walk should descend below ``node``.

        Only exclusion prunes. A node that merely fails ``include_filter``
        is skipped but its descendants are still visited.
        """
        if not self.prune_on_exclude or self.exclude_filter is None:
            return True
        return not self.exclude_filter(node)


@dataclass
class DepthConfig:
    """Configuration for depth-based filtering."""

    min_depth: int = 0                          # Minimum depth to yield
    max_depth: Optional[int] = None            # Maximum depth to traverse
    specific_depths: Optional[Set[int]] = None  # Only these specific depths

    def should_yield(self, depth: int) -> bool:
        """Check if nodes at this depth should be yielded."""
        if self.specific_depths is not None:
            return depth in self.specific_depths

        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False

        return True

    def should_explore(self, depth: int) -> bool:
        """Check if children below this depth should be explored."""
        if self.specific_depths is not None:
            return any(d > depth for d in self.specific_depths)

        if self.max_depth is not None:
            return depth < self.max_depth

        return True


@dataclass
class TraversalConfig:
    """Complete configuration for a component tree traversal.

    The ExecutionPlan validates this configuration before any node
    is visited.
    """

    # Traversal algorithm
    strategy: TraversalStrategy = TraversalStrategy.DEPTH_FIRST_PRE

    # Depth control
    depth: DepthConfig = field(default_factory=DepthConfig)

    # Node filtering
    filter: FilterConfig = field(default_factory=FilterConfig)

    # Data collection
    data_requirements: DataRequirement = DataRequirement.OPERATION
    custom_collector: Optional[Any] = None  # Custom collector instance

    # Limits
    max_nodes: Optional[int] = None

    # Error handling
    on_error: Optional[Callable[[Any, Exception], None]] = None
    skip_errors: bool = False  # Fail fast unless told otherwise

    @classmethod
    def shallow_scan(cls, max_depth: int = 1) -> 'TraversalConfig':
        """Create config for looking at a node and its immediate children."""
        return cls(
            strategy=TraversalStrategy.BREADTH_FIRST,
            depth=DepthConfig(max_depth=max_depth),
            data_requirements=DataRequirement.METADATA,
        )

    @classmethod
    def deep_scan(cls, data_requirement: DataRequirement = DataRequirement.OPERATION) -> 'TraversalConfig':
        """Create config for a full post-order walk (children before parent)."""
        return cls(
            strategy=TraversalStrategy.DEPTH_FIRST_POST,
            data_requirements=data_requirement,
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.depth.min_depth < 0:
            errors.append("min_depth cannot be negative")

        if self.depth.max_depth is not None:
            if self.depth.max_depth < 0:
                errors.append("max_depth cannot be negative")
            if self.depth.max_depth < self.depth.min_depth:
                errors.append("max_depth cannot be less than min_depth")

        if self.max_nodes is not None and self.max_nodes <= 0:
            errors.append("max_nodes must be positive")

        if self.data_requirements == DataRequirement.CUSTOM and self.custom_collector is None:
            errors.append("custom_collector required when data_requirements is CUSTOM")

        return errors
