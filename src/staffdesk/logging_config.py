from __future__ import annotations

import logging

from staffdesk.config import get_settings

_LOG_CONFIGURED = False

# Third-party loggers that are too chatty at INFO for an interactive CLI.
_QUIET_LOGGERS = ("uvicorn.access", "httpx")


def configure_logging(level: str | None = None) -> None:
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    resolved = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    _LOG_CONFIGURED = True
