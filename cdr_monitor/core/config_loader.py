# Path: cdr_monitor/core/config_loader.py
"""
Configuration Loader

Centralized configuration management for the CDR Monitor.
Loads and validates environment variables with type safety and defaults.

Reads an optional .env file (python-dotenv) and exposes typed access
to backend endpoints, timing and logging settings.
"""

import os
from pathlib import Path
from typing import Optional, Any
from dotenv import load_dotenv

from ..constants import DEFAULT_REFRESH_INTERVAL, DEFAULT_ERROR_CLEAR_DELAY


# Default Configuration Values
DEFAULT_API_BASE_URL: str = 'http://localhost:8000'
DEFAULT_RECORDS_PATH: str = '/cdrs'
DEFAULT_VERIFY_PATH: str = '/verify'
DEFAULT_HEALTH_PATH: str = '/health'
DEFAULT_API_TIMEOUT: int = 10
DEFAULT_API_RETRY_ATTEMPTS: int = 3
DEFAULT_API_RETRY_DELAY: float = 1.0
DEFAULT_USER_AGENT: str = 'cdr-monitor/1.0'
DEFAULT_MAX_CONCURRENT_VERIFICATIONS: int = 0


class ConfigLoader:
    """
    Configuration loader for the CDR Monitor.

    Loads configuration from environment variables with validation,
    type conversion, and sensible defaults. All configuration access
    should go through this class to ensure consistency.

    Example:
        config = ConfigLoader()
        base_url = config.get('api_base_url')
        interval = config['refresh_interval']
    """

    def __init__(self, env_file: Optional[Path] = None):
        """
        Initialize configuration loader.

        Args:
            env_file: Optional path to .env file. If None, searches default locations.

        Raises:
            ValueError: If a configured value is out of range
        """
        self._load_env(env_file)
        self._config = self._load_configuration()
        self._validate()

    def _load_env(self, env_file: Optional[Path] = None) -> None:
        """
        Load environment variables from .env file.

        Args:
            env_file: Optional explicit path to .env file
        """
        if env_file and env_file.exists():
            load_dotenv(dotenv_path=env_file, interpolate=True)
            return

        # core/ -> cdr_monitor/ -> project root
        package_root = Path(__file__).resolve().parent.parent

        search_paths = [
            package_root / '.env',
            package_root.parent / '.env',
            Path.cwd() / '.env',
        ]

        for env_path in search_paths:
            if env_path.exists():
                load_dotenv(dotenv_path=env_path, interpolate=True)
                return

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # BACKEND API
            # ================================================================
            'api_base_url': self._get_env('CDR_MONITOR_API_BASE_URL', DEFAULT_API_BASE_URL),
            'api_records_path': self._get_env('CDR_MONITOR_API_RECORDS_PATH', DEFAULT_RECORDS_PATH),
            'api_verify_path': self._get_env('CDR_MONITOR_API_VERIFY_PATH', DEFAULT_VERIFY_PATH),
            'api_health_path': self._get_env('CDR_MONITOR_API_HEALTH_PATH', DEFAULT_HEALTH_PATH),
            'api_timeout': self._get_int('CDR_MONITOR_API_TIMEOUT', DEFAULT_API_TIMEOUT),
            'api_retry_attempts': self._get_int('CDR_MONITOR_API_RETRY_ATTEMPTS', DEFAULT_API_RETRY_ATTEMPTS),
            'api_retry_delay': self._get_float('CDR_MONITOR_API_RETRY_DELAY', DEFAULT_API_RETRY_DELAY),
            'user_agent': self._get_env('CDR_MONITOR_USER_AGENT', DEFAULT_USER_AGENT),

            # ================================================================
            # SYNCHRONIZATION
            # ================================================================
            'refresh_interval': self._get_float('CDR_MONITOR_REFRESH_INTERVAL', DEFAULT_REFRESH_INTERVAL),
            'error_clear_delay': self._get_float('CDR_MONITOR_ERROR_CLEAR_DELAY', DEFAULT_ERROR_CLEAR_DELAY),
            'max_concurrent_verifications': self._get_int(
                'CDR_MONITOR_MAX_CONCURRENT_VERIFICATIONS',
                DEFAULT_MAX_CONCURRENT_VERIFICATIONS
            ),

            # ================================================================
            # LOGGING
            # ================================================================
            'log_dir': self._get_path('CDR_MONITOR_LOG_DIR'),
            'log_level': self._get_env('CDR_MONITOR_LOG_LEVEL', 'INFO'),
            'log_console': self._get_bool('CDR_MONITOR_LOG_CONSOLE', True),
        }

        return config

    def _validate(self) -> None:
        """
        Reject values that would break the refresh cycle.

        Raises:
            ValueError: If a timing or retry value is out of range
        """
        if self._config['refresh_interval'] <= 0:
            raise ValueError("CDR_MONITOR_REFRESH_INTERVAL must be positive")
        if self._config['error_clear_delay'] <= 0:
            raise ValueError("CDR_MONITOR_ERROR_CLEAR_DELAY must be positive")
        if self._config['api_retry_attempts'] < 1:
            raise ValueError("CDR_MONITOR_API_RETRY_ATTEMPTS must be at least 1")
        if self._config['max_concurrent_verifications'] < 0:
            raise ValueError("CDR_MONITOR_MAX_CONCURRENT_VERIFICATIONS cannot be negative")

    def _get_env(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get string environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found

        Returns:
            Environment variable value or default
        """
        value = os.getenv(key)

        if value is None:
            return default

        return value.strip()

    def _get_bool(self, key: str, default: bool) -> bool:
        """
        Get boolean environment variable.

        Accepts: true, 1, yes, on (case-insensitive)
        """
        value = os.getenv(key)
        if value is None:
            return default

        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable, falling back to default when invalid."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value.strip())
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable, falling back to default when invalid."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return float(value.strip())
        except ValueError:
            return default

    def _get_path(self, key: str) -> Optional[Path]:
        """Get path environment variable (None when unset or empty)."""
        value = os.getenv(key)

        if value is None or not value.strip():
            return None

        return Path(value.strip())

    def get(self, key: str, default=None):
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def __getitem__(self, key: str):
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        return key in self._config

    def keys(self):
        return self._config.keys()

    def items(self):
        return self._config.items()


__all__ = ['ConfigLoader']
