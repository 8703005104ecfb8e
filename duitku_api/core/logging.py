from __future__ import annotations

import logging

from duitku_api.core.config import get_settings


def setup_logging() -> None:
    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        force=True,
    )
    # Request/response bodies are logged by the Duitku client itself when enabled.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("duitku_api").setLevel(level)
