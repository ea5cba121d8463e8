"""Demonstration driver for ComposeTree.

Builds a small component tree and changes it step by step. It also walks a
collection in both directions and runs two visitors over a pair of
elements. Every step prints a fixed line to stdout, so the output is
reproducible; log records go to stderr.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .core.arena import ComponentArena
from .errors import UnknownKindError
from .iteration import Aggregate
from .logging_config import setup_logging
from .visitor import ConcreteVisitorX, ConcreteVisitorY, ElementA, ElementB, create_element

logger = logging.getLogger(__name__)


def run_composite_demo() -> List[str]:
    """Assemble, grow and prune a tree, returning one line per state."""
    lines = []
    arena = ComponentArena()

    simple = arena.leaf()
    lines.append(f"Result: {simple.operation()}")

    tree = arena.composite()
    branch1 = arena.composite()
    branch1.add(arena.leaf())
    branch1.add(arena.leaf())
    branch2 = arena.composite()
    branch2.add(arena.leaf())
    tree.add(branch1)
    tree.add(branch2)
    lines.append(f"Result: {tree.operation()}")

    if tree.is_composite():
        tree.add(simple)
    lines.append(f"Result: {tree.operation()}")

    tree.remove(simple)
    tree.remove(branch2)
    lines.append(f"Result: {tree.operation()}")

    reclaimed = arena.sweep(tree)
    logger.info("Reclaimed %d detached nodes, %d remain", reclaimed, len(arena))
    return lines


def run_iterator_demo() -> List[str]:
    """Walk the digits 0-9 forwards and then backwards."""
    digits = Aggregate(range(10))

    forward = digits.create_forward_iterator()
    backward = digits.create_backward_iterator()

    out = []
    while forward.has_next():
        out.append(str(forward.get_current()))
    first = "".join(out)

    out = []
    while backward.has_next():
        out.append(str(backward.get_current()))
    return [first, "".join(out)]


def run_visitor_demo() -> List[str]:
    """Send two visitors over one element of each kind."""
    elements = [ElementA(), ElementB()]
    lines = []
    for visitor in (ConcreteVisitorX(), ConcreteVisitorY()):
        for element in elements:
            lines.append(element.accept(visitor))
    return lines


def run_lookup_demo() -> List[str]:
    """Show a failed factory lookup being reported without stopping the run."""
    try:
        create_element("C")
    except UnknownKindError as e:
        return [f"Error: {e}"]
    return []


def main(argv: Optional[List[str]] = None) -> int:
    """Run every demo and print its lines.

    Returns:
        Process exit code (0 on success)
    """
    parser = argparse.ArgumentParser(
        prog="composetree-demo",
        description="Print a walkthrough of composite, iterator and visitor behavior.",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug details to stderr")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    for demo in (run_composite_demo, run_iterator_demo, run_visitor_demo, run_lookup_demo):
        for line in demo():
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
