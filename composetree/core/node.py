"""Component abstraction for ComposeTree.

Leaf and Composite are the two node shapes clients work with. Both are
thin handles: the node's storage (label, parent index, child indices) lives
in the ComponentArena that created it, and a handle only remembers which
arena and which index it refers to. Handles are cheap to create, compare
equal when they point at the same slot, and never keep other nodes alive.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..errors import ForeignNodeError

if TYPE_CHECKING:
    from .arena import ComponentArena


class Component(ABC):
    """Abstract base class for every node in a component tree.

    Defines the interface shared by leaves and composites so that client
    code can treat both uniformly. Structural operations (add/remove) are
    declared here with no-op defaults; only composites give them meaning.
    """

    def __init__(self, arena: 'ComponentArena', index: int):
        """Bind a handle to a slot. Use ComponentArena.leaf()/composite() instead."""
        self._arena = arena
        self._index = index

    @property
    def arena(self) -> 'ComponentArena':
        """The arena that owns this node."""
        return self._arena

    @property
    def index(self) -> int:
        """Stable integer address of this node inside its arena."""
        return self._index

    @property
    def alive(self) -> bool:
        """False once the node's slot has been discarded."""
        return self._arena.is_live(self._index)

    @property
    def label(self) -> Optional[str]:
        """Per-node label override, or None to use the arena's RenderConfig."""
        return self._arena.slot(self._index).label

    @property
    def parent(self) -> Optional['Component']:
        """The parent node, or None for a root or a node whose parent is gone."""
        parent = self._arena.parent_index(self._index)
        if parent is None:
            return None
        return self._arena.node(parent)

    def identifier(self) -> str:
        """Return a unique identifier for this node within its arena."""
        kind = "composite" if self.is_composite() else "leaf"
        return f"{kind}#{self._index}"

    def is_leaf(self) -> bool:
        """Check if this node can never have children."""
        return not self.is_composite()

    @abstractmethod
    def is_composite(self) -> bool:
        """Check if this node can hold children."""
        pass

    @abstractmethod
    def operation(self) -> str:
        """Describe this node (and, for composites, its whole subtree)."""
        pass

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Hand this node to the visitor method matching its kind."""
        pass

    def children(self) -> List['Component']:
        """Return the live children of this node, in order."""
        return []

    def add(self, component: 'Component') -> None:
        """Attach a child. Ignored by nodes that cannot hold children."""
        pass

    def remove(self, component: 'Component') -> None:
        """Detach a child. Ignored by nodes that cannot hold children."""
        pass

    def metadata(self) -> Dict[str, Any]:
        """Return lightweight facts about this node.

        Returns:
            Dict with name, kind, index, child_count and depth
        """
        return {
            'name': self.label or self.identifier(),
            'kind': "composite" if self.is_composite() else "leaf",
            'index': self._index,
            'child_count': len(self._arena.child_indices(self._index)),
            'depth': self._arena.depth(self._index),
        }

    def __str__(self) -> str:
        """String representation defaults to identifier."""
        return self.identifier()

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}(index={self._index})"

    def __eq__(self, other: object) -> bool:
        """Handles are equal when they address the same slot of the same arena."""
        if not isinstance(other, Component):
            return NotImplemented
        return self._arena is other._arena and self._index == other._index

    def __hash__(self) -> int:
        return hash((id(self._arena), self._index))


class Leaf(Component):
    """A terminal node. It has no children; add/remove are silently ignored."""

    def is_composite(self) -> bool:
        return False

    def operation(self) -> str:
        label = self.label
        return self._arena.render.leaf_label if label is None else label

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_leaf(self)


class Composite(Component):
    """A node that holds an ordered list of children and aggregates them."""

    def is_composite(self) -> bool:
        return True

    def children(self) -> List[Component]:
        return [self._arena.node(i) for i in self._arena.child_indices(self._index)]

    def add(self, component: Component) -> None:
        """Attach ``component`` as the last child and set its parent.

        A component that already has a different parent is moved here.

        Raises:
            ForeignNodeError: If ``component`` belongs to another arena
            CycleError: If ``component`` is this node or one of its ancestors
        """
        self._check_same_arena(component)
        self._arena.attach(self._index, component.index)

    def remove(self, component: Component) -> None:
        """Detach ``component`` and clear its parent. Non-members are ignored."""
        if component.arena is not self._arena:
            return
        self._arena.detach(self._index, component.index)

    def operation(self) -> str:
        parts = [child.operation() for child in self.children()]
        return self._arena.render.wrap(parts, label=self.label)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_composite(self)

    def _check_same_arena(self, component: Component) -> None:
        if component.arena is not self._arena:
            raise ForeignNodeError(
                f"{component!r} belongs to a different arena than {self!r}"
            )
