"""
Flask web server for dfr-browser.

Routes
──────
GET  /                      Overview: every topic
GET  /topic/<n>             Topic view (topics numbered from 1)
GET  /word/<word>           Word view
GET  /doc/<n>               Document view (documents numbered from 1)
GET  /api/model             Model title, description and dimensions (JSON)
GET  /api/topics            Every topic with its label and alpha (JSON)
GET  /api/topic/<n>         Words and top documents of a topic (JSON)
GET  /api/word/<word>       Topics containing a word, with ranks (JSON)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, render_template, url_for

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

from config.settings import Settings
from dfrbrowser import views
from dfrbrowser.errors import ViewError
from dfrbrowser.loader import load_model
from dfrbrowser.models import TopicModel
from dfrbrowser.ranking import doc_weight, top_docs, top_words, word_topics
from dfrbrowser.views import Link, Panel

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

_ENDPOINTS: dict[Panel, str] = {
    Panel.OVERVIEW: "index",
    Panel.TOPIC: "topic",
    Panel.WORD: "word",
    Panel.DOC: "doc",
}


def create_app(
    settings: Optional[Settings] = None,
    model: Optional[TopicModel] = None,
) -> Flask:
    """Build the app around a loaded model.

    Args:
        settings: Configuration; read from the environment if omitted.
        model: An already loaded model. If omitted the model is read from
            ``settings.data_dir`` before the app is returned.

    Raises:
        ValueError: If the data directory is missing.
        LoadError: If the model files cannot be read.
    """
    settings = settings or Settings()
    if model is None:
        settings.validate()
        model = load_model(settings.data_dir)
    logger.info(
        "Model %r ready: %d topics, %d documents",
        model.meta.title, model.n, len(model.documents),
    )

    session = views.BrowserSession(
        model=model,
        overview_words=settings.overview_words,
        topic_view_docs=settings.topic_view_docs,
    )

    app = Flask(__name__)
    app.extensions["dfrbrowser"] = session

    @app.template_global()
    def link_href(link: Link) -> str:
        """URL of the view a generated link leads to."""
        endpoint = _ENDPOINTS[link.target]
        if link.target is Panel.WORD:
            return url_for(endpoint, word=link.key)
        if link.target is Panel.OVERVIEW:
            return url_for(endpoint)
        return url_for(endpoint, number=link.key + 1)

    def render(view: Optional[views.View], status: int = 200, error: str = ""):
        page = render_template(
            "index.html",
            meta=model.meta,
            view=view,
            panels=list(Panel),
            error=error,
        )
        return page, status

    @app.errorhandler(ViewError)
    def view_not_found(exc: ViewError):
        logger.warning("View not found: %s", exc)
        return render(None, status=404, error=str(exc))

    # ── UI ─────────────────────────────────────────────────────────────────

    @app.route("/")
    def index():
        return render(views.overview(session))

    @app.route("/topic/<int:number>")
    def topic(number: int):
        return render(views.topic_view(session, number - 1))

    @app.route("/word/<path:word>")
    def word(word: str):
        return render(views.word_view(session, word))

    @app.route("/doc/<int:number>")
    def doc(number: int):
        return render(views.doc_view(session, number - 1))

    # ── JSON API ───────────────────────────────────────────────────────────

    @app.route("/api/model")
    def api_model():
        """Return the model description and its dimensions."""
        return jsonify(
            {
                "title": model.meta.title,
                "meta_info": model.meta.meta_info,
                "n_topics": model.n,
                "n_top_words": model.n_top_words,
                "n_docs": len(model.documents),
            }
        )

    @app.route("/api/topics")
    def api_topics():
        """Return every topic with its label words and alpha."""
        return jsonify(
            [
                {
                    "topic": t.index + 1,
                    "alpha": t.alpha,
                    "label": session.label(t.index),
                    "words": top_words(model, t.index, session.overview_words),
                }
                for t in model.topics
            ]
        )

    @app.route("/api/topic/<int:number>")
    def api_topic(number: int):
        """Return a topic's weighted words and its top documents."""
        t = number - 1
        if not 0 <= t < model.n:
            return jsonify({"error": "Not found"}), 404
        topic_ = model.topics[t]
        docs = []
        for d in top_docs(model, t, session.topic_view_docs):
            document = model.documents[d]
            docs.append(
                {
                    "doc": d + 1,
                    "count": document.counts[t],
                    "weight": doc_weight(document, t),
                    "citation": document.citation,
                    "uri": document.uri,
                }
            )
        return jsonify(
            {
                "topic": number,
                "alpha": topic_.alpha,
                "label": session.label(t),
                "words": [
                    {"word": w, "weight": topic_.words[w]}
                    for w in top_words(model, t, model.n_top_words)
                ],
                "docs": docs,
            }
        )

    @app.route("/api/word/<path:word>")
    def api_word(word: str):
        """Return the topics containing a word, best rank first.

        A word found in no topic gives an empty ``topics`` list.
        """
        ranked = sorted(word_topics(model, word), key=lambda pair: pair[1])
        return jsonify(
            {
                "word": word,
                "topics": [{"topic": t + 1, "rank": rank + 1} for t, rank in ranked],
            }
        )

    return app


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    settings = Settings()
    create_app(settings).run(debug=settings.debug, host="0.0.0.0", port=settings.port)
