# Path: cdr_monitor/core/__init__.py
"""Core Module - Configuration and Logging"""

from .config_loader import ConfigLoader
from .logger import get_logger, configure_logging

__all__ = [
    'ConfigLoader',
    'get_logger',
    'configure_logging',
]
