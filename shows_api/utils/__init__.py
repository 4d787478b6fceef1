"""Shared utilities: logging."""

from shows_api.utils.logger import setup_logger

__all__ = ["setup_logger"]
