"""Ranking of words and documents within a topic model.

Responsibilities:
- Top words of a topic, by descending weight
- The topics a word appears in, with its rank among each topic's words
- An approximate list of the top documents for a topic

Everything here is a pure function of a ``TopicModel``; the view layer
formats the results for display.
"""

from __future__ import annotations

import logging
from bisect import bisect_left

from dfrbrowser.models import Document, TopicModel

logger = logging.getLogger(__name__)


# ── Words ──────────────────────────────────────────────────────────────────────


def top_words(model: TopicModel, topic: int, n: int) -> list[str]:
    """Return the *n* most heavily weighted words of *topic*.

    Ties are broken alphabetically so the order is reproducible.

    Args:
        model: The loaded topic model.
        topic: 0-based topic index.
        n: Maximum number of words to return.

    Returns:
        At most ``n`` words, heaviest first.

    Examples:
        >>> top_words(model, 0, 3)
        ['war', 'army', 'peace']
    """
    if n <= 0:
        return []
    words = model.topic(topic).words
    ranked = sorted(words, key=lambda w: (-words[w], w))
    return ranked[:n]


def word_topics(model: TopicModel, word: str) -> list[tuple[int, int]]:
    """Find every topic containing *word* and the word's rank in each.

    The rank is zero-based: the number of words in that topic with a
    strictly greater weight. Equal weights therefore share a rank.

    Args:
        model: The loaded topic model.
        word: The word to look up.

    Returns:
        ``(topic, rank)`` pairs in ascending topic order; empty if the word
        appears in no topic.
    """
    result: list[tuple[int, int]] = []
    for topic in model.topics:
        if word not in topic.words:
            continue
        word_wt = topic.words[word]
        rank = sum(1 for wt in topic.words.values() if wt > word_wt)
        result.append((topic.index, rank))
    return result


# ── Documents ──────────────────────────────────────────────────────────────────


def doc_weight(doc: Document, topic: int) -> float:
    """Proportion of the words in *doc* assigned to *topic*.

    A document with no words has weight 0.
    """
    length = doc.length
    if length == 0:
        return 0.0
    return doc.counts[topic] / length


def top_docs(model: TopicModel, topic: int, n: int) -> list[int]:
    """Return (approximately) the top *n* documents for *topic*.

    This is naive document ranking: documents are ordered by the proportion
    of their words assigned to the topic, which does not necessarily pick
    out the documents where the topic is most salient.

    A window of ``n`` documents sorted by ascending weight is seeded with
    the first ``n`` documents. Every later document is bisected into the
    window; unless it would land at the very front it is inserted and the
    lightest document is dropped. On ties the earlier document is kept.

    Args:
        model: The loaded topic model.
        topic: 0-based topic index.
        n: Size of the window.

    Returns:
        Document indices, heaviest first. When the model has no more than
        ``n`` documents, all of them are returned.
    """
    model.topic(topic)  # IndexError for an unknown topic
    docs = model.documents
    if n <= 0 or not docs:
        return []

    seed = min(n, len(docs))
    seed_wts = [doc_weight(docs[d], topic) for d in range(seed)]
    window = sorted(range(seed), key=lambda d: seed_wts[d])
    wts = [seed_wts[d] for d in window]

    for d in range(seed, len(docs)):
        wt = doc_weight(docs[d], topic)
        insert = bisect_left(wts, wt)
        if insert > 0:
            window.insert(insert, d)
            del window[0]
            wts.insert(insert, wt)
            del wts[0]

    window.reverse()  # biggest first
    return window


# ── Labels ─────────────────────────────────────────────────────────────────────


def topic_label(model: TopicModel, topic: int, n_words: int) -> str:
    """Label a topic with its 1-based number and its top words.

    Examples:
        >>> topic_label(model, 0, 3)
        '001 war army peace'
    """
    label = f"{topic + 1:03d}"  # user-facing index is 1-based
    words = top_words(model, topic, n_words)
    return " ".join([label, *words])


def format_float(x: float) -> str:
    """Round to three decimals and drop trailing zeros.

    Examples:
        >>> format_float(0.12345)
        '0.123'
        >>> format_float(2.0)
        '2'
    """
    text = f"{x:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_weight(x: float) -> str:
    """Show a word weight as an integer when it is whole, else in full."""
    if float(x).is_integer():
        return str(int(x))
    return repr(float(x))
