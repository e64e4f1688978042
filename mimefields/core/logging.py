from __future__ import annotations

import logging

from mimefields.core.config import Settings

ROOT_LOGGER_NAME = "mimefields"

_HANDLER_MARKER = "_mimefields_handler"


def configure_logging(*, settings: Settings) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(settings.LOG_LEVEL)

    # Safe to call repeatedly: only one handler of ours is ever attached.
    if not any(getattr(h, _HANDLER_MARKER, False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        setattr(handler, _HANDLER_MARKER, True)
        logger.addHandler(handler)

    return logger
