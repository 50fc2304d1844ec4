"""Lightweight logging helpers shared by the API and the worker."""

from __future__ import annotations

import logging
from typing import Any, Optional

_LOGGER = logging.getLogger("opstracker")


def _coerce(parts: tuple[object, ...]) -> str:
    rendered = " ".join(str(part) for part in parts if part is not None)
    return rendered.strip()


def configure_logging(level: Optional[str] = None) -> None:
    """Install a basic handler once; later calls only adjust the level."""

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level or "INFO",
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    if level:
        _LOGGER.setLevel(level)


def log(*parts: object, **metadata: Any) -> None:
    """
    Emit an info-level event message.

    Keyword arguments are appended to the message as a dict so callers can
    attach identifiers (event type, job id, table) without formatting them
    by hand. Never pass payload contents such as names or emails.
    """

    message = _coerce(parts)
    if metadata:
        message = f"{message} | {metadata}"

    if not _LOGGER.handlers and not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO)

    _LOGGER.info(message)


__all__ = ["configure_logging", "log"]
