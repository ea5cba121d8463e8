"""Walk orders for component trees.

Every traverser yields ``(component, depth)`` pairs with depth measured from
the starting node. Two things decide how far a walk goes below a node:

* a DepthConfig, which controls both which depths are yielded and which
  depths are expanded, and
* an optional ``prune`` predicate. A composite for which it returns True
  is still yielded (subject to depth), but its children are never visited.

The arena forbids cycles, so a walk never has to remember where it has been.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, Iterator, List, Optional, Tuple, Union

from ..config import DepthConfig, TraversalStrategy
from ..errors import UnknownKindError
from .adapter import TreeAdapter
from .node import Component

Step = Tuple[Component, int]
PrunePredicate = Callable[[Component], bool]


class TreeTraverser(ABC):
    """Base class for walk orders over a TreeAdapter."""

    def __init__(self,
                 adapter: TreeAdapter,
                 depth: Optional[DepthConfig] = None,
                 prune: Optional[PrunePredicate] = None):
        """
        Args:
            adapter: Navigation over the tree being walked
            depth: Depth window applied to every walk (default: unlimited)
            prune: Returns True for composites whose children must be skipped
        """
        self.adapter = adapter
        self.depth = depth or DepthConfig()
        self.prune = prune

    def traverse(self,
                 root: Component,
                 max_depth: Optional[int] = None,
                 min_depth: Optional[int] = None) -> Iterator[Step]:
        """Walk the tree below ``root``.

        ``max_depth`` and ``min_depth`` narrow the traverser's own depth
        window for this one call.
        """
        return self._walk(root, self._window(max_depth, min_depth))

    @abstractmethod
    def _walk(self, root: Component, window: DepthConfig) -> Iterator[Step]:
        pass

    def _window(self, max_depth: Optional[int], min_depth: Optional[int]) -> DepthConfig:
        if max_depth is None and min_depth is None:
            return self.depth
        return DepthConfig(
            min_depth=self.depth.min_depth if min_depth is None else min_depth,
            max_depth=self.depth.max_depth if max_depth is None else max_depth,
            specific_depths=self.depth.specific_depths,
        )

    def _expand(self, node: Component, depth: int, window: DepthConfig) -> List[Component]:
        """Children of ``node`` that the walk should descend into, in order."""
        if not node.is_composite() or not window.should_explore(depth):
            return []
        if self.prune is not None and self.prune(node):
            return []
        return list(self.adapter.get_children(node))


class BreadthFirstTraverser(TreeTraverser):
    """All components at depth N before any at depth N+1."""

    def _walk(self, root: Component, window: DepthConfig) -> Iterator[Step]:
        queue: Deque[Step] = deque([(root, 0)])
        while queue:
            node, depth = queue.popleft()
            if window.should_yield(depth):
                yield node, depth
            queue.extend((child, depth + 1) for child in self._expand(node, depth, window))


class DepthFirstPreOrderTraverser(TreeTraverser):
    """Parent before children, in the order Composite.operation() renders them."""

    def _walk(self, root: Component, window: DepthConfig) -> Iterator[Step]:
        stack: List[Step] = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            if window.should_yield(depth):
                yield node, depth
            children = self._expand(node, depth, window)
            stack.extend((child, depth + 1) for child in reversed(children))


class DepthFirstPostOrderTraverser(TreeTraverser):
    """Children before parent, the order in which a subtree can be torn down."""

    def _walk(self, root: Component, window: DepthConfig) -> Iterator[Step]:
        # Each entry remembers whether its children are already on the stack
        stack: List[Tuple[Component, int, bool]] = [(root, 0, False)]
        while stack:
            node, depth, expanded = stack.pop()
            if expanded:
                if window.should_yield(depth):
                    yield node, depth
                continue
            stack.append((node, depth, True))
            children = self._expand(node, depth, window)
            stack.extend((child, depth + 1, False) for child in reversed(children))


class LevelOrderTraverser(TreeTraverser):
    """Breadth-first, one whole level materialized at a time."""

    def _walk(self, root: Component, window: DepthConfig) -> Iterator[Step]:
        level = [root]
        depth = 0
        while level:
            below: List[Component] = []
            for node in level:
                if window.should_yield(depth):
                    yield node, depth
                below.extend(self._expand(node, depth, window))
            level = below
            depth += 1


_STRATEGIES = {
    TraversalStrategy.BREADTH_FIRST: BreadthFirstTraverser,
    TraversalStrategy.DEPTH_FIRST_PRE: DepthFirstPreOrderTraverser,
    TraversalStrategy.DEPTH_FIRST_POST: DepthFirstPostOrderTraverser,
    TraversalStrategy.LEVEL_ORDER: LevelOrderTraverser,
}

_ALIASES = {
    'breadth_first': TraversalStrategy.BREADTH_FIRST,
    'depth_first_pre': TraversalStrategy.DEPTH_FIRST_PRE,
    'depth_first_post': TraversalStrategy.DEPTH_FIRST_POST,
    'level_order': TraversalStrategy.LEVEL_ORDER,
}


def create_traverser(strategy: Union[str, TraversalStrategy],
                     adapter: TreeAdapter,
                     depth: Optional[DepthConfig] = None,
                     prune: Optional[PrunePredicate] = None) -> TreeTraverser:
    """Build the traverser for a strategy given by enum member or name.

    Names are case-insensitive: ``bfs``, ``dfs_pre``, ``dfs_post`` and
    ``level``, or their long forms such as ``breadth_first``.

    Raises:
        UnknownKindError: If the name matches no strategy
    """
    if not isinstance(strategy, TraversalStrategy):
        name = strategy.lower()
        try:
            strategy = _ALIASES.get(name) or TraversalStrategy(name)
        except ValueError:
            choices = [s.value for s in TraversalStrategy] + list(_ALIASES)
            raise UnknownKindError(
                f"Unknown traversal strategy: {name}. Choose from: {', '.join(choices)}"
            ) from None

    return _STRATEGIES[strategy](adapter, depth=depth, prune=prune)
