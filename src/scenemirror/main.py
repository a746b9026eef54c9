"""Subcommand dispatcher for scenemirror.

Usage:
    scenemirror inspect --source composition.yaml [--composition ID]
    scenemirror submit  --source composition.yaml [--config scenemirror.yaml]
"""

import argparse
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="scenemirror",
        description="Inspect and submit video compositions.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("inspect", help="Breadcrumbs and tracks of a composition")
    subparsers.add_parser("submit", help="POST a composition to the persistence endpoint")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    if parsed.command == "inspect":
        from .inspect_cli import main as inspect_main
        inspect_main(remaining)
    elif parsed.command == "submit":
        from .submit_cli import main as submit_main
        submit_main(remaining)


if __name__ == "__main__":
    main()
