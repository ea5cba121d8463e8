"""Unit tests for ExecutionPlan, TraversalConfig and the high-level API."""

import sys
from pathlib import Path
import unittest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from composetree import (
    CapabilityMismatchError,
    ComponentAdapter,
    ComponentArena,
    CustomCollector,
    DataRequirement,
    DepthConfig,
    ExecutionPlan,
    FilterConfig,
    TraversalConfig,
    TraversalStrategy,
    UnknownKindError,
    collect_tree_data,
    count_nodes,
    find_nodes,
    get_leaf_nodes,
    get_tree_paths,
    get_tree_stats,
    traverse_tree,
)


def build_tree():
    """root -> (branch1 -> (leaf, leaf), branch2 -> (leaf))"""
    arena = ComponentArena()
    root = arena.composite()
    branch1 = arena.composite()
    branch2 = arena.composite()
    branch1.add(arena.leaf())
    branch1.add(arena.leaf())
    branch2.add(arena.leaf())
    root.add(branch1)
    root.add(branch2)
    return root


class TestTraversalConfig(unittest.TestCase):

    def test_defaults_are_valid(self):
        self.assertEqual(TraversalConfig().validate(), [])

    def test_invalid_depths(self):
        config = TraversalConfig(depth=DepthConfig(min_depth=3, max_depth=1))
        self.assertIn("max_depth cannot be less than min_depth", config.validate())

        config = TraversalConfig(depth=DepthConfig(min_depth=-1))
        self.assertIn("min_depth cannot be negative", config.validate())

    def test_custom_requires_collector(self):
        config = TraversalConfig(data_requirements=DataRequirement.CUSTOM)
        self.assertEqual(
            config.validate(),
            ["custom_collector required when data_requirements is CUSTOM"],
        )

    def test_convenience_constructors(self):
        shallow = TraversalConfig.shallow_scan()
        self.assertEqual(shallow.depth.max_depth, 1)
        self.assertEqual(shallow.strategy, TraversalStrategy.BREADTH_FIRST)

        deep = TraversalConfig.deep_scan()
        self.assertEqual(deep.strategy, TraversalStrategy.DEPTH_FIRST_POST)

    def test_specific_depths(self):
        depth = DepthConfig(specific_depths={1})
        self.assertFalse(depth.should_yield(0))
        self.assertTrue(depth.should_yield(1))
        self.assertTrue(depth.should_explore(0))
        self.assertFalse(depth.should_explore(1))


class TestExecutionPlan(unittest.TestCase):

    def setUp(self):
        self.root = build_tree()
        self.adapter = ComponentAdapter(self.root.arena)

    def test_invalid_config_rejected(self):
        config = TraversalConfig(max_nodes=0)
        with self.assertRaises(CapabilityMismatchError):
            ExecutionPlan(config, self.adapter)

    def test_operation_collection(self):
        plan = ExecutionPlan(TraversalConfig(), self.adapter)
        data = [d for _, d in plan.execute(self.root)]
        self.assertEqual(data, [
            "Branch(Branch(Leaf+Leaf)+Branch(Leaf))",
            "Branch(Leaf+Leaf)",
            "Leaf",
            "Leaf",
            "Branch(Leaf)",
            "Leaf",
        ])
        self.assertEqual(plan.nodes_processed, 6)

    def test_max_nodes(self):
        plan = ExecutionPlan(TraversalConfig(max_nodes=2), self.adapter)
        self.assertEqual(len(list(plan.execute(self.root))), 2)

    def test_errors_fail_fast_by_default(self):
        def explode(node, depth):
            raise RuntimeError("boom")

        config = TraversalConfig(
            data_requirements=DataRequirement.CUSTOM,
            custom_collector=CustomCollector(self.adapter, explode),
        )
        plan = ExecutionPlan(config, self.adapter)
        with self.assertRaises(RuntimeError):
            list(plan.execute(self.root))

    def test_errors_skipped_and_reported(self):
        seen = []

        def leaves_only(node, depth):
            if node.is_composite():
                raise ValueError("composite")
            return node.operation()

        config = TraversalConfig(
            data_requirements=DataRequirement.CUSTOM,
            custom_collector=CustomCollector(self.adapter, leaves_only),
            on_error=lambda node, exc: seen.append(node.identifier()),
            skip_errors=True,
        )
        plan = ExecutionPlan(config, self.adapter)
        results = list(plan.execute(self.root))

        self.assertEqual([d for _, d in results], ["Leaf", "Leaf", "Leaf"])
        self.assertEqual(len(plan.errors_encountered), 3)
        self.assertEqual(seen, ["composite#0", "composite#1", "composite#2"])

    def test_summary(self):
        plan = ExecutionPlan(TraversalConfig.shallow_scan(), self.adapter)
        summary = plan.get_summary()
        self.assertEqual(summary['strategy'], 'bfs')
        self.assertEqual(summary['collector'], 'MetadataCollector')
        self.assertEqual(summary['adapter'], 'ComponentAdapter')
        self.assertEqual(plan.estimate_work(self.root)['estimated_nodes'], 6)

    def test_exclusion_prunes_the_excluded_branch(self):
        branch1 = self.root.children()[0]
        config = TraversalConfig(
            data_requirements=DataRequirement.FULL_NODE,
            filter=FilterConfig(exclude_filter=lambda n: n == branch1),
        )
        visited = [n.index for n, _ in ExecutionPlan(config, self.adapter).execute(self.root)]
        self.assertEqual(visited, [0, 2, 5])

    def test_exclusion_without_pruning_keeps_descendants(self):
        branch1 = self.root.children()[0]
        config = TraversalConfig(
            data_requirements=DataRequirement.FULL_NODE,
            filter=FilterConfig(exclude_filter=lambda n: n == branch1, prune_on_exclude=False),
        )
        visited = [n.index for n, _ in ExecutionPlan(config, self.adapter).execute(self.root)]
        self.assertEqual(visited, [0, 3, 4, 2, 5])

    def test_specific_depths_select_one_level(self):
        config = TraversalConfig(
            strategy=TraversalStrategy.BREADTH_FIRST,
            depth=DepthConfig(specific_depths={1}),
            data_requirements=DataRequirement.IDENTIFIER_ONLY,
        )
        data = [d for _, d in ExecutionPlan(config, self.adapter).execute(self.root)]
        self.assertEqual(data, ["composite#1", "composite#2"])

    def test_paths_follow_moved_nodes_between_runs(self):
        branch1, branch2 = self.root.children()
        leaf = branch1.children()[0]
        plan = ExecutionPlan(
            TraversalConfig(data_requirements=DataRequirement.PATH), self.adapter
        )
        before = dict((n.index, d) for n, d in plan.execute(self.root))
        self.assertEqual(before[leaf.index], ["composite#0", "composite#1", "leaf#3"])

        before[leaf.index].append("scribble")
        branch2.add(leaf)

        after = dict((n.index, d) for n, d in plan.execute(self.root))
        self.assertEqual(after[leaf.index], ["composite#0", "composite#2", "leaf#3"])


class TestHighLevelApi(unittest.TestCase):

    def setUp(self):
        self.root = build_tree()

    def test_traverse_tree_defaults_to_preorder(self):
        indices = [n.index for n in traverse_tree(self.root)]
        self.assertEqual(indices, [0, 1, 3, 4, 2, 5])

    def test_traverse_tree_strategy_name(self):
        indices = [n.index for n in traverse_tree(self.root, strategy="bfs", max_depth=1)]
        self.assertEqual(indices, [0, 1, 2])

    def test_unknown_strategy_name(self):
        with self.assertRaises(UnknownKindError):
            list(traverse_tree(self.root, strategy="sideways"))

    def test_count_and_find(self):
        self.assertEqual(count_nodes(self.root), 6)
        branches = list(find_nodes(self.root, lambda n: n.is_composite()))
        self.assertEqual([b.index for b in branches], [0, 1, 2])

    def test_leaf_nodes(self):
        self.assertEqual([n.index for n in get_leaf_nodes(self.root)], [3, 4, 5])

    def test_exclude_filter_prunes_subtree(self):
        branch1 = self.root.children()[0]
        got = list(traverse_tree(self.root, exclude_filter=lambda n: n == branch1))
        self.assertEqual([n.index for n in got], [0, 2, 5])

    def test_include_filter_does_not_prune(self):
        leaves = list(find_nodes(self.root, lambda n: n.is_leaf()))
        self.assertEqual([n.index for n in leaves], [3, 4, 5])

    def test_paths(self):
        paths = list(get_tree_paths(self.root, max_depth=1))
        self.assertEqual(paths, [
            ["composite#0"],
            ["composite#0", "composite#1"],
            ["composite#0", "composite#2"],
        ])

    def test_collect_tree_data(self):
        pairs = list(collect_tree_data(self.root, data_requirement=DataRequirement.CHILDREN_COUNT))
        counts = [d['child_count'] for _, d in pairs]
        self.assertEqual(counts, [2, 2, 0, 0, 1, 0])

    def test_stats(self):
        stats = get_tree_stats(self.root)
        self.assertEqual(stats['total_nodes'], 6)
        self.assertEqual(stats['leaf_nodes'], 3)
        self.assertEqual(stats['internal_nodes'], 3)
        self.assertEqual(stats['max_depth'], 2)
        self.assertEqual(stats['depths'], {0: 1, 1: 2, 2: 3})
        self.assertAlmostEqual(stats['average_branching'], 5 / 3)


if __name__ == "__main__":
    unittest.main()
