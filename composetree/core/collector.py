"""Data collection strategies for ComposeTree.

DataCollectors define what information to extract from nodes during
traversal, so one walk over a component tree can serve different purposes.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List

from .adapter import TreeAdapter
from .node import Component


class DataCollector(ABC):
    """Abstract base class for data collection strategies."""

    def __init__(self, adapter: TreeAdapter):
        """Initialize collector with an adapter.

        Args:
            adapter: TreeAdapter for additional node operations
        """
        self.adapter = adapter

    @abstractmethod
    def collect(self, node: Component, depth: int) -> Any:
        """Collect data from a node.

        Args:
            node: The node to collect data from
            depth: Current depth in traversal

        Returns:
            Collected data (type depends on collector)
        """
        pass


class IdentifierCollector(DataCollector):
    """Collects only node identifiers."""

    def collect(self, node: Component, depth: int) -> str:
        return node.identifier()


class MetadataCollector(DataCollector):
    """Collects the metadata dict of each node."""

    def collect(self, node: Component, depth: int) -> Dict[str, Any]:
        return node.metadata()


class OperationCollector(DataCollector):
    """Collects the rendered operation() string of each node."""

    def collect(self, node: Component, depth: int) -> str:
        return node.operation()


class FullNodeCollector(DataCollector):
    """Collects the node handle itself."""

    def collect(self, node: Component, depth: int) -> Component:
        return node


class ChildCountCollector(DataCollector):
    """Collects node identity together with its number of immediate children."""

    def collect(self, node: Component, depth: int) -> Dict[str, Any]:
        child_count = 0
        if not node.is_leaf():
            for _ in self.adapter.get_children(node):
                child_count += 1

        return {
            'id': node.identifier(),
            'depth': depth,
            'child_count': child_count,
            'is_leaf': node.is_leaf()
        }


class PathCollector(DataCollector):
    """Collects the identifiers from the tree root down to each node.

    Paths are read from the live parent links on every call, so a node
    that has moved since the last walk reports where it is now.
    """

    def collect(self, node: Component, depth: int) -> List[str]:
        path = [node.identifier()]
        parent = self.adapter.get_parent(node)
        while parent is not None:
            path.append(parent.identifier())
            parent = self.adapter.get_parent(parent)
        path.reverse()
        return path


class CustomCollector(DataCollector):
    """Collector that uses a user-provided function.

    Allows custom data collection logic without subclassing.
    """

    def __init__(self,
                 adapter: TreeAdapter,
                 collect_func: Callable[[Component, int], Any]):
        """Initialize with custom collection function.

        Args:
            adapter: TreeAdapter for tree navigation
            collect_func: Function(node, depth) -> Any
        """
        super().__init__(adapter)
        self.collect_func = collect_func

    def collect(self, node: Component, depth: int) -> Any:
        return self.collect_func(node, depth)
