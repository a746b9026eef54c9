"""Shared test fixtures for scenemirror tests."""

import pytest
import pytest_asyncio
import yaml

from scenemirror.config import load_config
from scenemirror.local_engine import LocalSession
from scenemirror.store import EditorStore


def _doc():
    """Root with a clip, a nested composition and an audio bed on tracks 1-3."""
    return {
        "output_format": "mp4",
        "width": 720,
        "height": 1280,
        "elements": [
            {"id": "a", "name": "intro", "type": "video", "track": 1,
             "time": "0 s", "duration": "4 s",
             "source": "https://cdn.example.com/intro.mp4"},
            {"id": "b", "name": "slide", "type": "composition", "track": 2,
             "time": "4 s", "duration": "6 s",
             "elements": [
                 {"id": "c", "name": "caption", "type": "text", "track": 1,
                  "time": "1 s", "text": "Hello"},
             ]},
            {"id": "d", "type": "audio", "track": 3, "time": "0 s",
             "source": "https://cdn.example.com/music.mp3", "volume": "30%"},
        ],
    }


@pytest.fixture
def source_doc():
    return _doc()


@pytest.fixture
def source_file(tmp_path, source_doc):
    path = tmp_path / "composition.yaml"
    path.write_text(yaml.dump(source_doc))
    return path


@pytest.fixture
def config(source_file):
    """Default config pointing at the test composition, no env overrides."""
    cfg = load_config(environ={})
    cfg["source"] = str(source_file)
    return cfg


@pytest_asyncio.fixture
async def store(config):
    """Store with an open LocalSession that has loaded the test composition."""
    s = EditorStore(LocalSession, config=config)
    await s.initialize(host="preview")
    yield s
    await s.aclose()
