"""
Audio module - Recording chunk buffering.
"""

from .recorder import ChunkRecorder

__all__ = ["ChunkRecorder"]
