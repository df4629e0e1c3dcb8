"""Application settings: all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ValueError if DATA_DIR does not exist
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── Data ────────────────────────────────────────────────────────────────
    #: Directory holding model_meta.json, keys.csv, dt.csv, cites.txt, uris.txt.
    data_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("DATA_DIR", "data"))
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "5001"))
    )

    # ── Views ───────────────────────────────────────────────────────────────
    #: Number of top words in each topic label.
    overview_words: int = field(
        default_factory=lambda: int(os.environ.get("OVERVIEW_WORDS", "15"))
    )
    #: Number of documents listed on a topic page.
    topic_view_docs: int = field(
        default_factory=lambda: int(os.environ.get("TOPIC_VIEW_DOCS", "10"))
    )

    def validate(self) -> None:
        """Raise ``ValueError`` if any setting is unusable."""
        if not self.data_dir.is_dir():
            raise ValueError(
                f"Data directory {self.data_dir} does not exist. "
                "Set DATA_DIR to the folder holding the model files."
            )
        if self.overview_words < 0 or self.topic_view_docs < 0:
            raise ValueError("OVERVIEW_WORDS and TOPIC_VIEW_DOCS must be >= 0.")
