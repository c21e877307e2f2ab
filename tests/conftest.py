"""Shared fixtures for Project Intel tests."""

import json

import pytest

from project_intel.index import RawIndex


SAMPLE_INDEX = {
    "f": {
        "src/app.ts": ["typescript", ["main:1:::start,render", "start:10::void:loadConfig"]],
        "src/config.ts": ["typescript", ["loadConfig:3:path:Config:readFile"]],
        "src/render.ts": ["typescript", ["render:5:props:string:"]],
        "src/util.ts": ["typescript", ["readFile:1:path:string", "unused:9::"]],
        "src/app.test.ts": ["typescript", ["testMain:1::"]],
        "node_modules/lib/index.js": ["javascript", ["vendored:1::"]],
    },
    "d": {
        "README.md": ["# Demo", "Start with loadConfig."],
        "docs/guide.md": ["# Guide", "Rendering details."],
    },
    "g": [
        ["main", "start"],
        ["main", "render"],
        ["start", "loadConfig"],
        ["loadConfig", "readFile"],
        ["testMain", "main"],
        ["vendored", "readFile"],
    ],
    "deps": {
        "src/app.ts": ["./config", "./render", "react"],
        "src/render.ts": ["react"],
        "node_modules/lib/index.js": ["react"],
    },
    "stats": {"total_files": 6},
}


@pytest.fixture
def sample_data():
    """A fresh copy of the sample index document."""
    return json.loads(json.dumps(SAMPLE_INDEX))


@pytest.fixture
def sample_raw(sample_data):
    """The sample index parsed into a RawIndex."""
    return RawIndex.model_validate(sample_data)


@pytest.fixture
def write_index(tmp_path):
    """Write an index document into the temporary project root."""

    def _write(data, name="PROJECT_INDEX.json"):
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_text(json.dumps(data))
        return path

    return _write
