"""View construction for the browser.

The page holds four mutually exclusive panels:

- OVERVIEW  every topic, labelled by its top words and alpha
- TOPIC     one topic: its words and its top documents
- WORD      one word: every topic it appears in, with its rank there
- DOC       one document: its citation and URI

Entering a view hides every panel and then shows exactly one; there is no
history. A ``BrowserSession`` carries the display parameters and the panel
state for the lifetime of the app. The overview is built once and cached
because the topic list never changes; the other views are rebuilt on every
visit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from dfrbrowser.errors import ViewError
from dfrbrowser.models import TopicModel
from dfrbrowser.ranking import (
    doc_weight,
    format_float,
    format_weight,
    top_docs,
    top_words,
    topic_label,
    word_topics,
)

logger = logging.getLogger(__name__)


# ── Panels ─────────────────────────────────────────────────────────────────────


class Panel(str, Enum):
    """The view panels, named after their element ids in the page."""

    OVERVIEW = "overview"
    TOPIC = "topic_view"
    DOC = "doc_view"
    WORD = "word_view"


# ── View data ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Link:
    """A generated link: its text and the view it leads to.

    ``key`` is a 0-based topic or document index, or a word. ``html`` marks
    text that may carry trusted markup (document citations).
    """

    text: str
    target: Panel
    key: Union[int, str]
    html: bool = False


@dataclass
class OverviewView:
    links: list[Link] = field(default_factory=list)
    panel: Panel = Panel.OVERVIEW


@dataclass
class TopicView:
    topic: int
    heading: str
    remark: str
    words: list[Link] = field(default_factory=list)
    docs: list[Link] = field(default_factory=list)
    panel: Panel = Panel.TOPIC


@dataclass
class WordView:
    word: str
    heading: str
    topics: list[Link] = field(default_factory=list)
    panel: Panel = Panel.WORD


@dataclass
class DocView:
    doc: int
    heading: str
    uri: str
    panel: Panel = Panel.DOC


View = Union[OverviewView, TopicView, WordView, DocView]


# ── Session ────────────────────────────────────────────────────────────────────


@dataclass
class BrowserSession:
    """Display parameters and panel state for one loaded model."""

    model: TopicModel
    #: Number of top words used in topic labels.
    overview_words: int = 15
    #: Number of documents listed in the topic view.
    topic_view_docs: int = 10
    overview_ready: bool = False
    #: The panel currently shown, or ``None`` when all are hidden.
    active: Optional[Panel] = None
    _overview: Optional[OverviewView] = field(default=None, repr=False)

    def hide_views(self) -> None:
        """Hide every panel."""
        self.active = None

    def show(self, panel: Panel) -> None:
        self.active = panel

    def is_hidden(self, panel: Panel) -> bool:
        return self.active is not panel

    def label(self, topic: int) -> str:
        return topic_label(self.model, topic, self.overview_words)


# ── Views ──────────────────────────────────────────────────────────────────────


def overview(session: BrowserSession) -> OverviewView:
    """Show the list of all topics.

    Args:
        session: The browser session.

    Returns:
        The cached ``OverviewView``.
    """
    session.hide_views()
    logger.info("Overview")

    if not session.overview_ready:
        model = session.model
        session._overview = OverviewView(
            links=[
                Link(
                    text=f"{session.label(t)} (α = {format_float(model.topics[t].alpha)})",
                    target=Panel.TOPIC,
                    key=t,
                )
                for t in range(model.n)
            ]
        )
        session.overview_ready = True

    session.show(Panel.OVERVIEW)
    return session._overview


def topic_view(session: BrowserSession, t: int) -> TopicView:
    """Show a topic: its weighted words and its top documents.

    Args:
        session: The browser session.
        t: 0-based topic index.

    Raises:
        ViewError: If the topic does not exist.
    """
    model = session.model
    if not 0 <= t < model.n:
        raise ViewError(f"No topic {t + 1}")

    logger.info("View for topic %d", t + 1)
    session.hide_views()

    topic = model.topics[t]
    words = [
        Link(text=f"{format_weight(topic.words[w])} {w}", target=Panel.WORD, key=w)
        for w in top_words(model, t, model.n_top_words)
    ]

    docs = []
    for d in top_docs(model, t, session.topic_view_docs):
        doc = model.documents[d]
        frac = format_float(doc_weight(doc, t))
        docs.append(
            Link(
                text=f"{doc.counts[t]} ({frac}) {doc.citation}",
                target=Panel.DOC,
                key=d,
                html=True,
            )
        )

    view = TopicView(
        topic=t,
        heading=session.label(t),
        remark=f"α = {format_float(topic.alpha)}",
        words=words,
        docs=docs,
    )
    session.show(Panel.TOPIC)
    return view


def word_view(session: BrowserSession, word: str) -> WordView:
    """Show every topic a word belongs to, best rank first.

    A word found in no topic gives a view with no links.
    """
    logger.info("View for word %s", word)
    session.hide_views()

    ranked = sorted(word_topics(session.model, word), key=lambda pair: pair[1])
    links = [
        Link(
            text=f"Ranked {rank + 1} in {session.label(t)}",  # user-facing rank is 1-based
            target=Panel.TOPIC,
            key=t,
        )
        for t, rank in ranked
    ]

    view = WordView(word=word, heading=word, topics=links)
    session.show(Panel.WORD)
    return view


def doc_view(session: BrowserSession, d: int) -> DocView:
    """Show a document's citation and URI.

    The document's own topic breakdown is not shown.

    Raises:
        ViewError: If the document does not exist.
    """
    model = session.model
    if not 0 <= d < len(model.documents):
        raise ViewError(f"No document {d + 1}")

    logger.info("View for doc %d", d)
    session.hide_views()

    doc = model.documents[d]
    view = DocView(doc=d, heading=doc.citation, uri=doc.uri)
    session.show(Panel.DOC)
    return view
