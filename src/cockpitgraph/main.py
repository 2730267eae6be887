#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from functools import partial
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from cockpitgraph.adapters.memory import InMemoryNodeRepository, InMemoryNodeUnitOfWork
from cockpitgraph.app import sync_cockpit_content
from cockpitgraph.common.logging import configure_logging
from cockpitgraph.config.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch Cockpit content and store it as a linked node graph"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort when any collection or tree fails to fetch",
    )
    parser.add_argument(
        "--in-memory",
        action="store_true",
        help="Keep nodes in memory instead of the database (dry run)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""

    load_dotenv()
    signal(SIGINT, sigint_handler)
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    unit_of_work_factory: Callable[[], InMemoryNodeUnitOfWork] | None = None
    if args.in_memory:
        unit_of_work_factory = partial(InMemoryNodeUnitOfWork, InMemoryNodeRepository())

    try:
        result = sync_cockpit_content(
            unit_of_work_factory=unit_of_work_factory,
            strict=args.strict,
        )
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:  # noqa: BLE001
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(
        f"Stored {result.content_nodes} content nodes and "
        f"{result.counters.nodes_materialized} resource nodes from {result.sources} sources"
    )


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    main()
