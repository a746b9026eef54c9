"""Source document loader — compositions read from disk.

A source document is what the engine accepts in set_source:
  output_format: mp4
  width: 720
  height: 1280
  paths:                      # optional, stripped after substitution
    cdn: "https://cdn.example.com"
  elements:
    - id: slide-1
      type: composition
      track: 1
      elements:
        - id: video-1
          type: video
          track: 1
          source: "${cdn}/clip.mp4"

JSON files (.json) are parsed as JSON, everything else as YAML.
"""

import json
from importlib import resources
from pathlib import Path

import yaml

from .common import resolve_vars_deep


DEFAULT_SOURCE_RESOURCE = "default_source.yaml"


def load_source(source_path: str | Path) -> dict:
    """Load, resolve, and validate a source document.

    Processing pipeline:
      1. Parse JSON or YAML (by extension).
      2. Resolve ${var} in all string values using the top-level ``paths``.
      3. Validate element lists, track numbers and id uniqueness.

    Raises:
        ValueError: Malformed document.
        FileNotFoundError: Missing file.
    """
    path = Path(source_path)
    with open(path) as f:
        if path.suffix.lower() == ".json":
            raw = json.load(f)
        else:
            raw = yaml.safe_load(f)

    return _normalize(raw)


def default_source() -> dict:
    """The sample composition shipped with the package."""
    data_dir = resources.files("scenemirror").joinpath("data")
    text = data_dir.joinpath(DEFAULT_SOURCE_RESOURCE).read_text()
    return _normalize(yaml.safe_load(text))


def _normalize(raw) -> dict:
    if not isinstance(raw, dict):
        raise ValueError("Source: top level must be a mapping")

    paths = raw.get("paths", {})
    if not isinstance(paths, dict):
        raise ValueError("Source: 'paths' must be a mapping")
    doc = {k: v for k, v in raw.items() if k != "paths"}
    doc = resolve_vars_deep(doc, paths)
    doc.setdefault("elements", [])

    validate_source(doc)
    return doc


def validate_source(doc: dict) -> None:
    """Check element lists, tracks and ids across the whole document.

    Raises:
        ValueError: Lists every problem found, one per line.
    """
    errors = []
    seen_ids = {}
    _validate_elements(doc.get("elements"), "elements", seen_ids, errors)

    if errors:
        msg = f"Source: {len(errors)} problem(s):\n"
        for err in errors:
            msg += f"  - {err}\n"
        raise ValueError(msg)


def _validate_elements(elements, where: str, seen_ids: dict, errors: list) -> None:
    if not isinstance(elements, list):
        errors.append(f"{where}: must be a list")
        return

    for i, element in enumerate(elements):
        prefix = f"{where}[{i}]"
        if not isinstance(element, dict):
            errors.append(f"{prefix}: must be a mapping")
            continue

        track = element.get("track")
        if track is not None and (
            not isinstance(track, int) or isinstance(track, bool) or track < 1
        ):
            errors.append(f"{prefix}: track must be a positive integer, got {track!r}")

        element_id = element.get("id")
        if element_id is not None:
            if element_id in seen_ids:
                errors.append(
                    f"{prefix}: duplicate id '{element_id}' (also at {seen_ids[element_id]})"
                )
            else:
                seen_ids[element_id] = prefix

        if "elements" in element:
            _validate_elements(element["elements"], f"{prefix}.elements", seen_ids, errors)
