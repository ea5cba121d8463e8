"""Node storage for ComposeTree.

The ComponentArena is the single owner of every node in a tree. Nodes are
addressed by integer indices that are never reused, and both directions of
the parent/child relation are plain index fields on a slot record. Client
code never holds a slot directly: it works with lightweight Leaf and
Composite handles that carry only ``(arena, index)``. Because the arena
never stores handles, there is no reference cycle between parents and
children, and a detached subtree is reclaimed as soon as the arena forgets
its slots.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ..config import RenderConfig
from ..errors import CycleError, ForeignNodeError, StaleNodeError
from .node import Component, Composite, Leaf

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """The two shapes a node can take."""
    LEAF = "leaf"
    COMPOSITE = "composite"


@dataclass
class _Slot:
    """Storage record for one node."""
    kind: NodeKind
    label: Optional[str] = None
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)


class ComponentArena:
    """Owns node storage and the parent/child relations between nodes.

    Example:
        >>> arena = ComponentArena()
        >>> root = arena.composite()
        >>> root.add(arena.leaf())
        >>> root.operation()
        'Branch(Leaf)'
    """

    def __init__(self, render: Optional[RenderConfig] = None):
        """Create an empty arena.

        Args:
            render: How nodes in this arena describe themselves
        """
        self.render = render or RenderConfig()
        self._slots: Dict[int, _Slot] = {}
        self._next_index = 0

    # Creation

    def leaf(self, label: Optional[str] = None) -> Leaf:
        """Create a detached leaf node."""
        return self._allocate(NodeKind.LEAF, label)

    def composite(self, label: Optional[str] = None) -> Composite:
        """Create a detached, empty composite node."""
        return self._allocate(NodeKind.COMPOSITE, label)

    def _allocate(self, kind: NodeKind, label: Optional[str]) -> Component:
        index = self._next_index
        self._next_index += 1
        self._slots[index] = _Slot(kind=kind, label=label)
        return self._handle(index, kind)

    def _handle(self, index: int, kind: NodeKind) -> Component:
        if kind is NodeKind.COMPOSITE:
            return Composite(self, index)
        return Leaf(self, index)

    # Lookup

    def node(self, index: int) -> Component:
        """Return a handle for the node stored at ``index``.

        Raises:
            StaleNodeError: If no live node has that index
        """
        return self._handle(index, self.slot(index).kind)

    def slot(self, index: int) -> _Slot:
        """Return the storage record for ``index``.

        Raises:
            StaleNodeError: If the slot has been discarded
        """
        try:
            return self._slots[index]
        except KeyError:
            raise StaleNodeError(f"Node #{index} no longer exists in this arena") from None

    def is_live(self, index: int) -> bool:
        """Check whether ``index`` refers to a slot that still exists."""
        return index in self._slots

    def __contains__(self, node: object) -> bool:
        if not isinstance(node, Component):
            return False
        return node.arena is self and self.is_live(node.index)

    def __len__(self) -> int:
        return len(self._slots)

    def indices(self) -> List[int]:
        """Return the indices of all live slots in allocation order."""
        return sorted(self._slots)

    def roots(self) -> List[Component]:
        """Return every live node that has no parent."""
        return [self._handle(i, s.kind) for i, s in sorted(self._slots.items())
                if self.parent_index(i) is None]

    # Relations

    def parent_index(self, index: int) -> Optional[int]:
        """Resolve the parent of ``index``.

        A parent that no longer exists resolves to None rather than
        raising; back-references are observational only.
        """
        parent = self.slot(index).parent
        if parent is None or parent not in self._slots:
            return None
        return parent

    def child_indices(self, index: int) -> Tuple[int, ...]:
        """Return the live children of ``index`` in insertion order."""
        return tuple(c for c in self.slot(index).children if c in self._slots)

    def ancestors(self, index: int) -> Iterator[int]:
        """Yield the indices of each ancestor, nearest first."""
        current = self.parent_index(index)
        while current is not None:
            yield current
            current = self.parent_index(current)

    def depth(self, index: int) -> int:
        """Return the number of ancestors above ``index`` (root = 0)."""
        return sum(1 for _ in self.ancestors(index))

    def attach(self, parent: int, child: int) -> bool:
        """Make ``child`` the last child of ``parent``.

        A child that already hangs under another parent is moved, keeping
        the at-most-one-parent invariant. Attaching under a leaf is ignored.

        Returns:
            True if the tree changed

        Raises:
            CycleError: If ``child`` is ``parent`` or one of its ancestors
        """
        parent_slot = self.slot(parent)
        child_slot = self.slot(child)

        if parent_slot.kind is not NodeKind.COMPOSITE:
            return False

        if child == parent or child in self.ancestors(parent):
            raise CycleError(
                f"Cannot add node #{child} under node #{parent}: "
                f"it would become its own ancestor"
            )

        current = self.parent_index(child)
        if current == parent:
            return False
        if current is not None:
            self.detach(current, child)

        parent_slot.children.append(child)
        child_slot.parent = parent
        logger.debug("Attached node #%d under node #%d", child, parent)
        return True

    def detach(self, parent: int, child: int) -> bool:
        """Remove ``child`` from ``parent`` and clear its back-reference.

        Returns:
            True if ``child`` was a child of ``parent``
        """
        parent_slot = self.slot(parent)
        if child not in parent_slot.children:
            return False

        parent_slot.children.remove(child)
        child_slot = self._slots.get(child)
        if child_slot is not None and child_slot.parent == parent:
            child_slot.parent = None
        logger.debug("Detached node #%d from node #%d", child, parent)
        return True

    # Reclamation

    def subtree(self, index: int) -> List[int]:
        """Return ``index`` and all of its descendants in pre-order."""
        result = []
        stack = [index]
        while stack:
            current = stack.pop()
            result.append(current)
            stack.extend(reversed(self.child_indices(current)))
        return result

    def discard(self, node: Component) -> int:
        """Free ``node`` and its whole subtree.

        The node is detached from its parent first, so no live composite is
        ever left pointing at a freed slot.

        Raises:
            ForeignNodeError: If ``node`` belongs to another arena
            StaleNodeError: If ``node`` has already been freed

        Returns:
            Number of slots reclaimed
        """
        self._check_owned(node)
        index = node.index
        parent = self.parent_index(index)
        if parent is not None:
            self.detach(parent, index)

        doomed = self.subtree(index)
        for i in doomed:
            del self._slots[i]
        logger.debug("Discarded node #%d (%d slots reclaimed)", index, len(doomed))
        return len(doomed)

    def sweep(self, *keep: Component) -> int:
        """Free every slot that is not reachable from one of ``keep``.

        Returns:
            Number of slots reclaimed

        Raises:
            ForeignNodeError: If any of ``keep`` belongs to another arena
        """
        for root in keep:
            self._check_owned(root)

        reachable: Set[int] = set()
        for root in keep:
            reachable.update(self.subtree(root.index))

        doomed = [i for i in self._slots if i not in reachable]
        for i in doomed:
            del self._slots[i]
        for slot in self._slots.values():
            slot.children = [c for c in slot.children if c in self._slots]

        logger.info("Swept arena: %d slots reclaimed, %d live", len(doomed), len(self._slots))
        return len(doomed)

    def _check_owned(self, node: Component) -> None:
        if node.arena is not self:
            raise ForeignNodeError(f"{node!r} belongs to a different arena than {self!r}")

    def __repr__(self) -> str:
        return f"ComponentArena(live={len(self._slots)})"
