"""Tests for the demonstration driver and logging setup."""

import sys
from pathlib import Path
import logging

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from composetree import setup_logging
from composetree.demo import main, run_composite_demo, run_lookup_demo

EXPECTED_OUTPUT = [
    "Result: Leaf",
    "Result: Branch(Branch(Leaf+Leaf)+Branch(Leaf))",
    "Result: Branch(Branch(Leaf+Leaf)+Branch(Leaf)+Leaf)",
    "Result: Branch(Branch(Leaf+Leaf))",
    "0123456789",
    "9876543210",
    "A + ConcreteVisitorX",
    "B + ConcreteVisitorX",
    "A + ConcreteVisitorY",
    "B + ConcreteVisitorY",
    "Error: Unknown element kind: 'C'. Choose from: a, b",
]


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Keep handlers installed by main() from leaking into other tests."""
    logger = logging.getLogger("composetree")
    handlers, level = logger.handlers[:], logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_main_prints_deterministic_output(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == EXPECTED_OUTPUT


def test_output_is_reproducible(capsys):
    main([])
    first = capsys.readouterr().out
    main([])
    second = capsys.readouterr().out
    assert first == second


def test_verbose_logs_to_stderr_only(capsys):
    assert main(["--verbose"]) == 0
    captured = capsys.readouterr()
    assert captured.out.splitlines() == EXPECTED_OUTPUT
    assert "Reclaimed 3 detached nodes, 4 remain" in captured.err


def test_composite_demo_lines():
    assert run_composite_demo() == EXPECTED_OUTPUT[:4]


def test_lookup_failure_is_reported_not_raised():
    assert run_lookup_demo() == [EXPECTED_OUTPUT[-1]]


def test_setup_logging_does_not_duplicate_handlers(tmp_path):
    log_file = tmp_path / "composetree.log"
    setup_logging(logging.INFO)
    logger = setup_logging(logging.INFO, log_file=str(log_file))

    assert logger.name == "composetree"
    assert len(logger.handlers) == 2

    logging.getLogger("composetree.core.arena").info("hello from the arena")
    for handler in logger.handlers:
        handler.close()
    assert "hello from the arena" in log_file.read_text(encoding="utf-8")


def test_setup_logging_leaves_ancestor_handlers_alone():
    root = logging.getLogger()
    sentinel = logging.NullHandler()
    root.addHandler(sentinel)
    try:
        logger = setup_logging(logging.DEBUG)
        assert len(logger.handlers) == 1
        assert sentinel in root.handlers
    finally:
        root.removeHandler(sentinel)
