"""
Grid state store and the record boundary shared by every engine operation.
"""

from .state import GridState, TileStats
from .records import RecordError

__all__ = ["GridState", "TileStats", "RecordError"]
