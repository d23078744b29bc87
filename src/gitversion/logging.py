"""Centralized logging configuration using loguru."""

import sys

from loguru import logger

from gitversion.config import settings

# stdout is reserved for program output, diagnostics go to stderr
logger.remove()
logger.add(sys.stderr, level=settings.log_level.upper(), colorize=True)

__all__ = ["logger"]
