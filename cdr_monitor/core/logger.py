# Path: cdr_monitor/core/logger.py
"""
CDR Monitor Logger

Centralized logging configuration for the monitor.

Architecture:
- Component-based logging (core, engine, client, cli)
- File and console output
- Configurable log levels
- IPO (Input-Process-Output) logging support
"""

import logging
from typing import Optional

from .config_loader import ConfigLoader
from ..constants import (
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_FILE_ACTIVITY,
    LOG_FILE_API,
    LOG_FILE_ERRORS,
    LOGGER_ROOT,
    LOGGER_CORE,
    LOGGER_ENGINE,
    LOGGER_CLIENT,
    LOGGER_CLI,
)

_COMPONENT_LOGGERS: dict[str, str] = {
    'core': LOGGER_CORE,
    'engine': LOGGER_ENGINE,
    'client': LOGGER_CLIENT,
    'cli': LOGGER_CLI,
}


class MonitorLogger:
    """
    Centralized logger for the CDR Monitor.

    Provides component-specific loggers with unified configuration.

    Example:
        logger = get_logger(__name__, 'engine')
        logger.info("[INPUT] Refresh cycle started")
        logger.info("[PROCESS] Verifying 12 records")
        logger.info("[OUTPUT] Published 12 records")
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize monitor logger.

        Args:
            config: Optional ConfigLoader instance. Loaded lazily on configure().
        """
        self.config = config
        self._configured = False

    def configure(self) -> None:
        """Configure logging system for the monitor package."""
        if self._configured:
            return

        if self.config is None:
            self.config = ConfigLoader()

        log_dir = self.config.get('log_dir')
        log_level = getattr(logging, self.config.get('log_level', 'INFO').upper(), logging.INFO)
        console_output = self.config.get('log_console', True)
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        if log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)

        logger = logging.getLogger(LOGGER_ROOT)
        logger.setLevel(log_level)

        # Clear any existing handlers
        logger.handlers.clear()

        if log_dir:
            file_handler = logging.FileHandler(log_dir / LOG_FILE_ACTIVITY)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

            # Backend traffic goes to its own file
            api_handler = logging.FileHandler(log_dir / LOG_FILE_API)
            api_handler.setLevel(logging.DEBUG)
            api_handler.setFormatter(formatter)
            client_logger = logging.getLogger(LOGGER_CLIENT)
            client_logger.handlers.clear()
            client_logger.addHandler(api_handler)

            error_handler = logging.FileHandler(log_dir / LOG_FILE_ERRORS)
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(formatter)
            logger.addHandler(error_handler)

        if console_output:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(log_level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        self._configured = True

    def get_logger(self, name: str, component: str = 'core') -> logging.Logger:
        """
        Get logger for specific component.

        Args:
            name: Module name (typically __name__)
            component: Component type ('core', 'engine', 'client', 'cli')

        Returns:
            Logger instance under the component namespace
        """
        prefix = _COMPONENT_LOGGERS.get(component, LOGGER_ROOT)
        return logging.getLogger(f"{prefix}.{name}")


# Global logger instance
_monitor_logger = MonitorLogger()


def get_logger(name: str, component: str = 'core') -> logging.Logger:
    """
    Get logger for a monitor component.

    Handlers are attached by configure_logging(); until then records
    propagate to whatever the host application has configured.

    Example:
        from cdr_monitor.core.logger import get_logger

        logger = get_logger(__name__, 'engine')
        logger.info("[INPUT] Starting refresh")
    """
    return _monitor_logger.get_logger(name, component)


def configure_logging(config: Optional[ConfigLoader] = None) -> None:
    """
    Configure monitor logging system.

    Call this once at application start.

    Args:
        config: Optional ConfigLoader instance
    """
    global _monitor_logger

    if config:
        _monitor_logger = MonitorLogger(config)

    _monitor_logger.configure()


__all__ = ['get_logger', 'configure_logging', 'MonitorLogger']
