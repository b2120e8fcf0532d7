"""CLI Module - Console presentation of the monitor state"""

from .monitor_cli import MonitorCLI, display_dashboard, main, run

__all__ = ['MonitorCLI', 'display_dashboard', 'main', 'run']
