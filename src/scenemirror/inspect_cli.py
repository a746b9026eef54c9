"""CLI for inspecting a source document offline.

Loads the document into an in-process engine session, focuses a
composition, and prints its breadcrumbs and per-track timeline view.

Usage:
    # Root composition
    scenemirror inspect --source composition.yaml

    # A nested composition
    scenemirror inspect --source composition.yaml --composition slide-2

    # Validate only
    scenemirror inspect --source composition.yaml --validate
"""

import argparse
import asyncio
import logging

from .config import load_config
from .local_engine import LocalSession
from .paths import walk
from .scene import ROOT_NAME
from .source import load_source
from .store import EditorStore


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Show breadcrumbs and tracks of a composition.",
    )
    parser.add_argument(
        "--source", required=True,
        help="Path to source document (YAML or JSON)",
    )
    parser.add_argument(
        "--composition", default=None,
        help="Id of the nested composition to focus (default: root)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to config YAML",
    )
    parser.add_argument(
        "--validate", action="store_true",
        help="Validate the document and exit",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log engine events and recomputation",
    )
    parsed = parser.parse_args(args)

    if parsed.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if parsed.validate:
        doc = load_source(parsed.source)
        print(f"Source valid: {len(doc['elements'])} top-level elements")
        return

    config = load_config(parsed.config)
    config["source"] = parsed.source
    if not asyncio.run(_inspect(config, parsed.composition)):
        raise SystemExit(f"Composition not found: {parsed.composition}")


async def _inspect(config: dict, composition_id: str | None) -> bool:
    """Print the view of one composition. False when it does not exist."""
    async with EditorStore(LocalSession, config=config) as store:
        await store.initialize(host=None)
        store.set_active_composition(composition_id)

        if composition_id is not None and store.active_parents is None:
            return False

        total = sum(1 for _ in walk(store.state)) - 1
        print(f"Elements: {total}")
        print(f"Path: {format_breadcrumbs(store.active_parents)}")
        print("Tracks:")
        for line in format_tracks(store.tracks):
            print(f"  {line}")
    return True


def format_breadcrumbs(path: list[dict] | None) -> str:
    """Render an ancestor path as "A > B > C" (root alone when None)."""
    if not path:
        return ROOT_NAME
    return " > ".join(entry["name"] or "?" for entry in path)


def format_tracks(tracks: dict) -> list[str]:
    """One line per track, highest track first as a timeline stacks them."""
    lines = []
    for track in sorted(tracks, reverse=True):
        names = ", ".join(
            f"{node.display_name or '?'} @{node.time:g}s" for node in tracks[track]
        )
        lines.append(f"{track}: {names}")
    return lines


if __name__ == "__main__":
    main()
