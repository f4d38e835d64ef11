"""
API schemas package.
"""

from .common import ApiResponse, ErrorResponse
from .voice import ProcessGlobalTranscriptResponse

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "ProcessGlobalTranscriptResponse",
]
