"""Structured logging setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from typedmap.config import TypedMapSettings


def configure_logging(settings: TypedMapSettings | None = None) -> None:
    """Install a filtering structlog logger at the configured level.

    Args:
        settings: Settings to read the level from (defaults to global settings).
    """
    if settings is None:
        from typedmap.config import get_settings  # noqa: PLC0415

        settings = get_settings()

    level = logging.DEBUG if settings.debug else logging.getLevelName(settings.log_level)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
