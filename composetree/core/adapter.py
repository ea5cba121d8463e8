"""TreeAdapter abstraction for ComposeTree.

The TreeAdapter provides the navigation logic for a tree, decoupling the
node representation from the traversal mechanism. Traversers and
collectors only ever talk to an adapter, so the same algorithms work for
any tree shape that can answer "who are your children" and "who is your
parent".
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterator, Optional

from .arena import ComponentArena
from .node import Component

logger = logging.getLogger(__name__)


class TreeAdapter(ABC):
    """Abstract adapter for navigating a tree structure."""

    @abstractmethod
    def get_children(self, node: Component) -> Iterator[Component]:
        """Get an iterator of child nodes for the given node.

        Args:
            node: The parent node

        Returns:
            Iterator yielding child nodes in order
        """
        pass

    @abstractmethod
    def get_parent(self, node: Component) -> Optional[Component]:
        """Get the parent node of the given node.

        Args:
            node: The child node

        Returns:
            Parent node or None if node is a root
        """
        pass

    def get_depth(self, node: Component) -> int:
        """Calculate the depth of a node in the tree.

        Default implementation walks up to root.
        Adapters can override for more efficient implementations.

        Returns:
            Depth where root = 0
        """
        depth = 0
        current = node
        while True:
            parent = self.get_parent(current)
            if parent is None:
                break
            depth += 1
            current = parent
        return depth

    def get_siblings(self, node: Component) -> Iterator[Component]:
        """Get siblings of the given node (excluding the node itself)."""
        parent = self.get_parent(node)
        if parent is None:
            return

        node_id = node.identifier()
        for child in self.get_children(parent):
            if child.identifier() != node_id:
                yield child

    # Capability flags - adapters declare what they support

    def supports_modification(self) -> bool:
        """Check if adapter supports modifying the tree structure."""
        return False

    def estimated_size(self, node: Component) -> Optional[int]:
        """Estimate the number of nodes in the subtree, or None if unknown."""
        return None

    # Tree modification methods - only required if supports_modification() returns True

    def add_child(self, parent: Component, child: Component) -> None:
        """Add a child node to a parent.

        Raises:
            NotImplementedError: If modification not supported
        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support modification")

    def remove_child(self, parent: Component, child: Component) -> None:
        """Remove a child node from a parent.

        Raises:
            NotImplementedError: If modification not supported
        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support modification")

    def move_node(self, node: Component, new_parent: Component) -> None:
        """Move a node to a new parent.

        Raises:
            NotImplementedError: If modification not supported
        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support modification")


class ComponentAdapter(TreeAdapter):
    """Adapter over the nodes of a single ComponentArena."""

    def __init__(self, arena: ComponentArena):
        """Initialize the adapter.

        Args:
            arena: Arena whose nodes will be navigated
        """
        self.arena = arena

    def get_children(self, node: Component) -> Iterator[Component]:
        for index in self.arena.child_indices(node.index):
            yield self.arena.node(index)

    def get_parent(self, node: Component) -> Optional[Component]:
        return node.parent

    def get_depth(self, node: Component) -> int:
        return self.arena.depth(node.index)

    def supports_modification(self) -> bool:
        return True

    def estimated_size(self, node: Component) -> Optional[int]:
        """Exact subtree size; the arena knows every slot."""
        return len(self.arena.subtree(node.index))

    def add_child(self, parent: Component, child: Component) -> None:
        parent.add(child)

    def remove_child(self, parent: Component, child: Component) -> None:
        parent.remove(child)

    def move_node(self, node: Component, new_parent: Component) -> None:
        """Move ``node`` under ``new_parent``; attaching detaches it from the old parent."""
        logger.debug("Moving %s under %s", node.identifier(), new_parent.identifier())
        new_parent.add(node)
