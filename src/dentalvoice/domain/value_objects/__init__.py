"""
Value objects package for domain layer.
"""

from .transcript_input import DEFAULT_LANGUAGE, TranscriptInput

__all__ = [
    "TranscriptInput",
    "DEFAULT_LANGUAGE",
]
