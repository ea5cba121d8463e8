"""High-level API for ComposeTree.

Simple functional interfaces for common operations on component trees.
These wrap ExecutionPlan and TraversalConfig for the common cases. When no
adapter is passed, a ComponentAdapter over the root's own arena is used.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from .config import (
    DataRequirement,
    DepthConfig,
    FilterConfig,
    TraversalConfig,
    TraversalStrategy,
)
from .core.adapter import ComponentAdapter, TreeAdapter
from .core.collector import CustomCollector
from .core.node import Component
from .errors import UnknownKindError
from .planning import ExecutionPlan


def traverse_tree(
    root: Component,
    adapter: Optional[TreeAdapter] = None,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST_PRE,
    max_depth: Optional[int] = None,
    min_depth: int = 0,
    include_filter: Optional[Callable[[Component], bool]] = None,
    exclude_filter: Optional[Callable[[Component], bool]] = None,
    on_error: Optional[Callable[[Component, Exception], None]] = None,
    **kwargs
) -> Iterator[Component]:
    """Simple interface for tree traversal.

    Args:
        root: Starting node for traversal
        adapter: Tree adapter (defaults to one over root's arena)
        strategy: Traversal strategy (bfs, dfs_pre, dfs_post, level)
        max_depth: Maximum depth to traverse
        min_depth: Minimum depth before yielding nodes
        include_filter: Function to determine if node should be included
        exclude_filter: Function to determine if node should be excluded
        on_error: Error handler callback; when given, errors are skipped
        **kwargs: Additional TraversalConfig attributes

    Yields:
        Nodes that match the criteria

    Example:
        >>> for node in traverse_tree(tree, strategy="bfs", max_depth=1):
        ...     print(node.identifier())
    """
    config = TraversalConfig(
        strategy=_parse_strategy(strategy),
        depth=DepthConfig(min_depth=min_depth, max_depth=max_depth),
        filter=FilterConfig(include_filter=include_filter, exclude_filter=exclude_filter),
        data_requirements=DataRequirement.FULL_NODE,
        on_error=on_error,
        skip_errors=on_error is not None,
    )

    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)

    plan = ExecutionPlan(config, adapter or _default_adapter(root))
    for node, _ in plan.execute(root):
        yield node


def collect_tree_data(
    root: Component,
    adapter: Optional[TreeAdapter] = None,
    data_requirement: DataRequirement = DataRequirement.OPERATION,
    **kwargs
) -> Iterator[Tuple[Component, Any]]:
    """Traverse tree and collect specified data.

    Args:
        root: Starting node for traversal
        adapter: Tree adapter (defaults to one over root's arena)
        data_requirement: What data to collect
        **kwargs: Additional traversal options (see traverse_tree)

    Yields:
        Tuples of (node, collected_data)
    """
    config = _build_config_from_kwargs(data_requirement=data_requirement, **kwargs)
    plan = ExecutionPlan(config, adapter or _default_adapter(root))
    yield from plan.execute(root)


def count_nodes(root: Component, adapter: Optional[TreeAdapter] = None, **kwargs) -> int:
    """Count nodes in a tree that match criteria."""
    count = 0
    for _ in traverse_tree(root, adapter, **kwargs):
        count += 1
    return count


def find_nodes(
    root: Component,
    predicate: Callable[[Component], bool],
    adapter: Optional[TreeAdapter] = None,
    **kwargs
) -> Iterator[Component]:
    """Find nodes that match a predicate.

    Example:
        >>> branches = list(find_nodes(tree, lambda n: n.is_composite()))
    """
    kwargs['include_filter'] = predicate
    yield from traverse_tree(root, adapter, **kwargs)


def get_tree_paths(root: Component, adapter: Optional[TreeAdapter] = None, **kwargs) -> Iterator[List[str]]:
    """Get identifier paths from the tree root to each node.

    Example:
        >>> for path in get_tree_paths(tree, max_depth=2):
        ...     print(" -> ".join(path))
    """
    kwargs['data_requirement'] = DataRequirement.PATH
    for _, path_data in collect_tree_data(root, adapter, **kwargs):
        yield path_data


def get_leaf_nodes(root: Component, adapter: Optional[TreeAdapter] = None, **kwargs) -> Iterator[Component]:
    """Get all leaf nodes under ``root``."""
    for node in traverse_tree(root, adapter, **kwargs):
        if node.is_leaf():
            yield node


def get_tree_stats(root: Component, adapter: Optional[TreeAdapter] = None, **kwargs) -> Dict[str, Any]:
    """Get statistics about a tree.

    Returns:
        Dictionary with total_nodes, leaf_nodes, internal_nodes, max_depth,
        a per-depth histogram and the average branching factor
    """
    adapter = adapter or _default_adapter(root)
    stats: Dict[str, Any] = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'depths': {}
    }

    depth_collector = CustomCollector(adapter, lambda node, depth: depth)
    for node, depth in collect_tree_data(
        root, adapter,
        data_requirement=DataRequirement.CUSTOM,
        custom_collector=depth_collector,
        **kwargs
    ):
        stats['total_nodes'] += 1
        if node.is_leaf():
            stats['leaf_nodes'] += 1
        stats['max_depth'] = max(stats['max_depth'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    stats['average_branching'] = (
        (stats['total_nodes'] - 1) / stats['internal_nodes']
        if stats['internal_nodes'] > 0 else 0
    )
    return stats


# Helper functions

def _default_adapter(root: Component) -> TreeAdapter:
    return ComponentAdapter(root.arena)


def _parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse strategy from string or enum."""
    if isinstance(strategy, TraversalStrategy):
        return strategy

    strategy_map = {
        'bfs': TraversalStrategy.BREADTH_FIRST,
        'breadth_first': TraversalStrategy.BREADTH_FIRST,
        'dfs': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_pre': TraversalStrategy.DEPTH_FIRST_PRE,
        'depth_first_pre': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_post': TraversalStrategy.DEPTH_FIRST_POST,
        'depth_first_post': TraversalStrategy.DEPTH_FIRST_POST,
        'level': TraversalStrategy.LEVEL_ORDER,
        'level_order': TraversalStrategy.LEVEL_ORDER,
    }

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower in strategy_map:
        return strategy_map[strategy_lower]

    raise UnknownKindError(f"Unknown traversal strategy: {strategy}")


def _build_config_from_kwargs(**kwargs) -> TraversalConfig:
    """Build TraversalConfig from keyword arguments."""
    config = TraversalConfig()

    if 'strategy' in kwargs:
        config.strategy = _parse_strategy(kwargs.pop('strategy'))

    if 'max_depth' in kwargs:
        config.depth.max_depth = kwargs.pop('max_depth')

    if 'min_depth' in kwargs:
        config.depth.min_depth = kwargs.pop('min_depth')

    if 'include_filter' in kwargs:
        config.filter.include_filter = kwargs.pop('include_filter')

    if 'exclude_filter' in kwargs:
        config.filter.exclude_filter = kwargs.pop('exclude_filter')

    if 'data_requirement' in kwargs:
        config.data_requirements = kwargs.pop('data_requirement')

    if 'on_error' in kwargs:
        config.on_error = kwargs.pop('on_error')
        config.skip_errors = True

    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)

    return config
