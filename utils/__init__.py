"""Shared utilities for the todo UI bindings."""

from utils.config import AppConfig, Config, MarkupConventions
from utils.http import SessionManager
from utils.logging import JsonFormatter, configure_logging

__all__ = [
    "AppConfig",
    "Config",
    "MarkupConventions",
    "SessionManager",
    "JsonFormatter",
    "configure_logging",
]
