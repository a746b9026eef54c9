"""scenemirror.common — shared helpers for source documents and config.

Contains: ${var} path substitution (flat and recursive) and duration
parsing for the engine's "N s" time strings.
"""

import re


# ── Path utilities ─────────────────────────────────────────────────

def resolve_path_vars(text: str, paths: dict[str, str]) -> str:
    """Replace ${name} variables in a string using the paths dict."""
    def _replace(match):
        key = match.group(1)
        if key not in paths:
            raise ValueError(f"Unknown path variable: ${{{key}}}")
        return paths[key]
    return re.sub(r"\$\{(\w+)\}", _replace, text)


def resolve_vars_deep(obj, paths: dict[str, str]):
    """Recursively resolve ${var} in all string values of a nested structure."""
    if isinstance(obj, str):
        return resolve_path_vars(obj, paths)
    elif isinstance(obj, dict):
        return {k: resolve_vars_deep(v, paths) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [resolve_vars_deep(item, paths) for item in obj]
    return obj


# ── Time utilities ─────────────────────────────────────────────────

_SECONDS_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*s?\s*$")


def parse_seconds(value, default: float = 0.0) -> float:
    """Convert an engine time value to seconds.

    Accepts plain numbers and strings like "6 s", "0.0302 s" or "12".
    None yields the default. Anything else raises ValueError.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"Invalid time value: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _SECONDS_RE.match(value)
        if match:
            return float(match.group(1))
    raise ValueError(f"Invalid time value: {value!r}")
