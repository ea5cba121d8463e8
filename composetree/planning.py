"""Execution planning for ComposeTree.

The ExecutionPlan validates a TraversalConfig and assembles the traverser
and collector that carry it out.
"""

import logging
from typing import Any, Dict, Iterator, List, Tuple

from .config import DataRequirement, TraversalConfig
from .core.adapter import TreeAdapter
from .core.collector import (
    ChildCountCollector,
    DataCollector,
    FullNodeCollector,
    IdentifierCollector,
    MetadataCollector,
    OperationCollector,
    PathCollector,
)
from .core.node import Component
from .core.traverser import TreeTraverser, create_traverser
from .errors import CapabilityMismatchError

logger = logging.getLogger(__name__)


class ExecutionPlan:
    """Validated execution plan for a component tree traversal.

    The plan is the bridge between user intent (TraversalConfig) and
    execution. Configuration problems surface when the plan is built,
    before any node is visited.
    """

    def __init__(self, config: TraversalConfig, adapter: TreeAdapter):
        """Create and validate an execution plan.

        Args:
            config: User's traversal configuration
            adapter: Tree adapter for the tree being walked

        Raises:
            CapabilityMismatchError: If the configuration is invalid
        """
        self.config = config
        self.adapter = adapter

        config_errors = config.validate()
        if config_errors:
            raise CapabilityMismatchError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        self.traverser = self._select_traverser()
        self.collector = self._select_collector()

        self.nodes_processed = 0
        self.errors_encountered: List[Tuple[str, str]] = []

    def _select_traverser(self) -> TreeTraverser:
        node_filter = self.config.filter
        return create_traverser(
            self.config.strategy,
            self.adapter,
            depth=self.config.depth,
            prune=lambda node: not node_filter.should_explore_children(node),
        )

    def _select_collector(self) -> DataCollector:
        if self.config.data_requirements == DataRequirement.CUSTOM:
            return self.config.custom_collector

        collector_map = {
            DataRequirement.IDENTIFIER_ONLY: IdentifierCollector,
            DataRequirement.METADATA: MetadataCollector,
            DataRequirement.OPERATION: OperationCollector,
            DataRequirement.FULL_NODE: FullNodeCollector,
            DataRequirement.CHILDREN_COUNT: ChildCountCollector,
            DataRequirement.PATH: PathCollector,
        }
        return collector_map[self.config.data_requirements](self.adapter)

    def _handle_error(self, node: Component, error: Exception) -> None:
        """Record an error, notify the callback and re-raise unless skipping."""
        self.errors_encountered.append((node.identifier(), str(error)))
        logger.warning("Error collecting %s: %s", node.identifier(), error)

        if self.config.on_error:
            self.config.on_error(node, error)

        if not self.config.skip_errors:
            raise error

    def execute(self, root: Component) -> Iterator[Tuple[Component, Any]]:
        """Execute the traversal plan.

        Args:
            root: Root node to start traversal from

        Yields:
            Tuples of (node, collected_data)
        """
        self.nodes_processed = 0
        self.errors_encountered = []

        max_nodes = self.config.max_nodes

        # The traverser applies the depth window and pruning
        for node, depth in self.traverser.traverse(root):
            if not self.config.filter.should_include(node):
                continue

            try:
                data = self.collector.collect(node, depth)
            except Exception as e:
                self._handle_error(node, e)
                continue

            self.nodes_processed += 1
            yield (node, data)

            if max_nodes is not None and self.nodes_processed >= max_nodes:
                logger.debug("Node limit %d reached, stopping traversal", max_nodes)
                break

    def estimate_work(self, root: Component) -> Dict[str, Any]:
        """Estimate how many nodes a full traversal from ``root`` would visit."""
        return {
            'estimated_nodes': self.adapter.estimated_size(root),
            'can_complete': True,
        }

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of execution plan.

        Returns:
            Dictionary with plan details
        """
        return {
            'strategy': self.config.strategy.value,
            'data_requirements': self.config.data_requirements.value,
            'max_depth': self.config.depth.max_depth,
            'min_depth': self.config.depth.min_depth,
            'max_nodes': self.config.max_nodes,
            'adapter': self.adapter.__class__.__name__,
            'traverser': self.traverser.__class__.__name__,
            'collector': self.collector.__class__.__name__,
        }
