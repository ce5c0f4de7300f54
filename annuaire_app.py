#!/usr/bin/env python3
"""
Annuaire

Keeps contacts (phone and e-mail) in a prefix tree keyed by name and
exports them to a flat CSV file. Runs a short demo by default, or an
interactive prompt with --interactive.
"""

from __future__ import annotations

import argparse
import logging
import sys

from annuaire.cli import run_demo, run_interactive
from annuaire.constants import DEFAULT_EXPORT_PATH
from annuaire.trie import PrefixDirectory

log = logging.getLogger("annuaire")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Annuaire -- trie-backed contact directory",
    )
    parser.add_argument("--interactive", "-i", action="store_true",
                        help="Enter contacts from a terminal prompt instead of the demo")
    parser.add_argument("--output", "-o", type=str, default=DEFAULT_EXPORT_PATH,
                        help=f"CSV export destination (default: {DEFAULT_EXPORT_PATH})")
    parser.add_argument("--prune", action="store_true",
                        help="Unlink empty nodes when a contact is deleted")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug-level logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    with PrefixDirectory(prune=args.prune) as directory:
        if args.interactive:
            run_interactive(directory, args.output)
            return 0
        return run_demo(directory, args.output)


if __name__ == "__main__":
    sys.exit(main())
