"""Models module - Pydantic data models"""

from .diff import (
    DiffEngineOptions,
    DiffLine,
    DiffLineType,
    DiffRequest,
    DiffResponse,
    DiffStats,
    StreamEvent,
)

__all__ = [
    "DiffEngineOptions",
    "DiffLine",
    "DiffLineType",
    "DiffRequest",
    "DiffResponse",
    "DiffStats",
    "StreamEvent",
]
