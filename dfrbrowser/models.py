"""
Pydantic models shared across the dfr-browser core.

All records are frozen: the model is built once by the loader and only
read afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelMeta(BaseModel):
    """Explanatory information about the model, from ``model_meta.json``."""

    model_config = ConfigDict(frozen=True, extra="allow")

    title: str
    meta_info: str  # trusted HTML, inserted into the page as-is


class Topic(BaseModel):
    """A topic: its prior weight and its (top) word weights."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    alpha: float
    words: dict[str, float]


class Document(BaseModel):
    """A row of the doc-topic matrix plus its citation and URI."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    counts: tuple[int, ...]
    citation: str = ""
    uri: str = ""

    @property
    def length(self) -> int:
        """Total number of words in the document."""
        return sum(self.counts)


class TopicModel(BaseModel):
    """A fitted topic model as read from the data directory."""

    model_config = ConfigDict(frozen=True)

    meta: ModelMeta
    topics: tuple[Topic, ...]
    documents: tuple[Document, ...] = ()

    @property
    def n(self) -> int:
        """Number of topics."""
        return len(self.topics)

    @property
    def n_top_words(self) -> int:
        """Number of words retained per topic (taken from the first topic)."""
        if not self.topics:
            return 0
        return len(self.topics[0].words)

    def topic(self, t: int) -> Topic:
        """Return topic *t* (0-based), raising ``IndexError`` if out of range."""
        if not 0 <= t < self.n:
            raise IndexError(f"no topic {t} in a {self.n}-topic model")
        return self.topics[t]

    def document(self, d: int) -> Document:
        """Return document *d* (0-based), raising ``IndexError`` if out of range."""
        if not 0 <= d < len(self.documents):
            raise IndexError(f"no document {d} among {len(self.documents)}")
        return self.documents[d]
