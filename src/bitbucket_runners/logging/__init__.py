"""Logging setup for the runner client."""

from .logger import ROOT_LOGGER_NAME, StructuredLogFormatter, configure_logging

__all__ = ["ROOT_LOGGER_NAME", "StructuredLogFormatter", "configure_logging"]
