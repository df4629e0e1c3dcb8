"""
Model loader for dfr-browser.

Files (all under the data directory)
────────────────────────────────────
model_meta.json  {"title": ..., "meta_info": ...}
keys.csv         header topic,word,weight,alpha; topics numbered from 1
dt.csv           no header; one row per document, one count per topic
cites.txt        one citation per line, aligned with dt.csv rows
uris.txt         one URI per line, aligned with dt.csv rows

The stages run strictly in order because later ones depend on dimensions
established earlier (dt.csv rows must have one column per topic).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

import pandas as pd
from pandas.api.types import is_integer_dtype
from pydantic import ValidationError

from dfrbrowser.errors import LoadError, ParseError
from dfrbrowser.models import Document, ModelMeta, Topic, TopicModel

logger = logging.getLogger(__name__)

META_FILE = "model_meta.json"
KEYS_FILE = "keys.csv"
DT_FILE = "dt.csv"
CITES_FILE = "cites.txt"
URIS_FILE = "uris.txt"

KEYS_COLUMNS = ("topic", "word", "weight", "alpha")

T = TypeVar("T")


# ── Parsers ────────────────────────────────────────────────────────────────

def parse_meta(path: Path) -> ModelMeta:
    """Read ``model_meta.json``.

    Raises:
        ParseError: If the file is not JSON or lacks ``title``/``meta_info``.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ModelMeta.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ParseError(path, str(exc)) from exc


def parse_keys(path: Path) -> list[Topic]:
    """Read the topic-word weights and alphas from ``keys.csv``.

    Topic numbers in the file start at 1; the returned topics are indexed
    from 0. The alpha of a topic is taken from its first row.

    Raises:
        ParseError: On missing columns, non-numeric values, or topic
            numbers that skip a topic.
    """
    try:
        frame = pd.read_csv(path, dtype={"word": str}, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise ParseError(path, str(exc)) from exc

    missing = [c for c in KEYS_COLUMNS if c not in frame.columns]
    if missing:
        raise ParseError(path, f"missing columns {missing}")
    if frame.empty:
        raise ParseError(path, "no topic rows")

    try:
        numbers = pd.to_numeric(frame["topic"], errors="raise")
        weights = pd.to_numeric(frame["weight"], errors="raise")
        alphas = pd.to_numeric(frame["alpha"], errors="raise")
    except (ValueError, TypeError) as exc:
        raise ParseError(path, f"non-numeric value: {exc}") from exc

    if ((numbers % 1) != 0).any() or (numbers < 1).any():
        raise ParseError(path, "topic numbers must be integers starting at 1")
    if (weights < 0).any():
        raise ParseError(path, "word weights must be non-negative")

    words: dict[int, dict[str, float]] = {}
    alpha: dict[int, float] = {}
    for number, word, weight, a in zip(numbers, frame["word"], weights, alphas):
        t = int(number) - 1  # topics indexed from 1 in keys.csv
        words.setdefault(t, {})[word] = float(weight)
        alpha.setdefault(t, float(a))

    n = max(words) + 1
    absent = [t + 1 for t in range(n) if t not in words]
    if absent:
        raise ParseError(path, f"no rows for topics {absent}")

    return [Topic(index=t, alpha=alpha[t], words=words[t]) for t in range(n)]


def parse_doc_topics(path: Path, n_topics: int) -> list[tuple[int, ...]]:
    """Read the document-topic count matrix from ``dt.csv``.

    Raises:
        ParseError: If a row is ragged, holds a non-integer or negative
            count, or does not have one column per topic.
    """
    try:
        frame = pd.read_csv(path, header=None)
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as exc:
        raise ParseError(path, str(exc)) from exc

    if frame.shape[1] != n_topics:
        raise ParseError(
            path, f"expected {n_topics} columns, found {frame.shape[1]}"
        )
    if not all(is_integer_dtype(dtype) for dtype in frame.dtypes):
        raise ParseError(path, "counts must be integers with no blank cells")
    if (frame < 0).any().any():
        raise ParseError(path, "counts must be non-negative")

    return [
        tuple(int(x) for x in row)
        for row in frame.itertuples(index=False, name=None)
    ]


def read_lines(path: Path) -> list[str]:
    """Read a newline-delimited list, ignoring leading/trailing blank space."""
    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return []
    return [line.rstrip("\r") for line in text.split("\n")]


# ── Pipeline ───────────────────────────────────────────────────────────────

def _stage(stage: str, path: Path, step: Callable[[], T]) -> T:
    """Run one load step, re-raising any failure as a ``LoadError``."""
    try:
        return step()
    except (OSError, ParseError, ValueError) as exc:
        raise LoadError(stage, path, str(exc)) from exc


def load_model(data_dir: Path | str) -> TopicModel:
    """Read all model files from *data_dir* into a ``TopicModel``.

    Args:
        data_dir: Directory holding the five data files.

    Returns:
        The fully populated, read-only model.

    Raises:
        LoadError: Naming the first stage that failed. There is no partial
            result.
    """
    data_dir = Path(data_dir)

    meta_path = data_dir / META_FILE
    meta = _stage("model metadata", meta_path, lambda: parse_meta(meta_path))
    logger.info("Read %s", META_FILE)

    keys_path = data_dir / KEYS_FILE
    topics = _stage("topic keys", keys_path, lambda: parse_keys(keys_path))
    logger.info("Read %s: %d topics", KEYS_FILE, len(topics))

    dt_path = data_dir / DT_FILE
    rows = _stage(
        "doc-topic matrix", dt_path, lambda: parse_doc_topics(dt_path, len(topics))
    )
    logger.info("Read %s: %d docs", DT_FILE, len(rows))

    cites_path = data_dir / CITES_FILE
    cites = _stage("citations", cites_path, lambda: read_lines(cites_path))
    logger.info("Read %s: %d citations", CITES_FILE, len(cites))
    if len(cites) != len(rows):
        raise LoadError(
            "citations", cites_path,
            f"{len(cites)} citations for {len(rows)} documents",
        )

    uris_path = data_dir / URIS_FILE
    uris = _stage("URIs", uris_path, lambda: read_lines(uris_path))
    logger.info("Read %s: %d URIs", URIS_FILE, len(uris))
    if len(uris) != len(rows):
        raise LoadError(
            "URIs", uris_path, f"{len(uris)} URIs for {len(rows)} documents"
        )

    documents = [
        Document(index=d, counts=counts, citation=cite, uri=uri)
        for d, (counts, cite, uri) in enumerate(zip(rows, cites, uris))
    ]
    return TopicModel(meta=meta, topics=tuple(topics), documents=tuple(documents))
