"""Shared fixtures: a small model written to a temporary data directory."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dfrbrowser.loader import load_model
from dfrbrowser.models import TopicModel

KEYS_CSV = """topic,word,weight,alpha
1,war,30,0.5
1,army,20,0.5
1,peace,20,0.5
2,peace,40,0.25
2,trade,10,0.25
2,war,5,0.25
"""

# Topic 1 proportions: 1.0, 0.2, 0.5, 0 (empty document)
DT_CSV = """10,0
2,8
5,5
0,0
"""

CITES = [
    "Smith, A. On War. Journal 1 (1901).",
    "Jones, B. Trade Routes. Journal 2 (1902).",
    "Brown, C. Peace and War. Journal 3 (1903).",
    "Doe, D. Blank Page. Journal 4 (1904).",
]

URIS = [
    "http://www.jstor.org/stable/1",
    "http://www.jstor.org/stable/2",
    "http://www.jstor.org/stable/3",
    "http://www.jstor.org/stable/4",
]


def write_dataset(data_dir: Path, **overrides: str) -> Path:
    """Write the sample data files; *overrides* replace a file's contents."""
    files = {
        "model_meta.json": json.dumps(
            {"title": "Sample model", "meta_info": "<p>Two topics, four documents.</p>"}
        ),
        "keys.csv": KEYS_CSV,
        "dt.csv": DT_CSV,
        "cites.txt": "\n".join(CITES) + "\n",
        "uris.txt": "\n".join(URIS) + "\n",
    }
    files.update(overrides)
    data_dir.mkdir(parents=True, exist_ok=True)
    for name, text in files.items():
        (data_dir / name).write_text(text, encoding="utf-8")
    return data_dir


@pytest.fixture
def data_dir(tmp_path) -> Path:
    return write_dataset(tmp_path / "data")


@pytest.fixture
def model(data_dir) -> TopicModel:
    return load_model(data_dir)
