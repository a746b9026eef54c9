"""CLI for submitting a finished composition to the persistence endpoint.

Usage:
    scenemirror submit --source composition.yaml
    scenemirror submit --source composition.yaml --config scenemirror.yaml
    scenemirror submit --source composition.yaml --url https://api.example.com/api/videos
"""

import argparse
import asyncio
import json
import logging

import httpx

from .config import load_config
from .persistence import submit_video
from .source import load_source


def main(args=None):
    parser = argparse.ArgumentParser(
        description="POST a source document to the persistence endpoint.",
    )
    parser.add_argument(
        "--source", required=True,
        help="Path to source document (YAML or JSON)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to config YAML (persistence.base_url, path, timeout)",
    )
    parser.add_argument(
        "--url", default=None,
        help="Full endpoint URL (overrides config)",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log the request",
    )
    parsed = parser.parse_args(args)

    if parsed.verbose:
        logging.basicConfig(level=logging.DEBUG)

    config = load_config(parsed.config)
    doc = load_source(parsed.source)

    print(f"Submitting {parsed.source} ({len(doc['elements'])} top-level elements)")
    ack = asyncio.run(_submit(doc, config, parsed.url))
    print(json.dumps(ack, indent=2))


async def _submit(doc: dict, config: dict, url: str | None, transport=None) -> dict:
    persistence = config["persistence"]
    async with httpx.AsyncClient(
        base_url=persistence["base_url"],
        timeout=persistence["timeout"],
        transport=transport,
    ) as client:
        return await submit_video(doc, url or persistence["path"], client)


if __name__ == "__main__":
    main()
