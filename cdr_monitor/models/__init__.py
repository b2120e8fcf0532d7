"""Models - Record and Stats data classes"""

from .record import Record, Stats

__all__ = ['Record', 'Stats']
