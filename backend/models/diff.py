"""Diff-related data models"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DiffLineType(str, Enum):
    """Kinds of lines emitted by the diff engine"""

    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"
    MODIFIED = "modified"
    ELLIPSIS = "ellipsis"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DiffLine(_CamelModel):
    """A single line of a classified diff"""

    type: DiffLineType
    pre_line_num: int | None = None  # 1-indexed, None for added/ellipsis
    post_line_num: int | None = None  # 1-indexed, None for removed/ellipsis
    content: str
    original_content: str | None = None  # pre-side text, modified lines only

    @classmethod
    def added(cls, post_line_num: int, content: str) -> "DiffLine":
        return cls(type=DiffLineType.ADDED, post_line_num=post_line_num, content=content)

    @classmethod
    def removed(cls, pre_line_num: int, content: str) -> "DiffLine":
        return cls(type=DiffLineType.REMOVED, pre_line_num=pre_line_num, content=content)

    @classmethod
    def unchanged(cls, pre_line_num: int, post_line_num: int, content: str) -> "DiffLine":
        return cls(
            type=DiffLineType.UNCHANGED,
            pre_line_num=pre_line_num,
            post_line_num=post_line_num,
            content=content,
        )

    @classmethod
    def modified(
        cls, pre_line_num: int, post_line_num: int, content: str, original_content: str
    ) -> "DiffLine":
        return cls(
            type=DiffLineType.MODIFIED,
            pre_line_num=pre_line_num,
            post_line_num=post_line_num,
            content=content,
            original_content=original_content,
        )

    @classmethod
    def ellipsis(cls) -> "DiffLine":
        return cls(type=DiffLineType.ELLIPSIS, content="...")

    @property
    def pre_content(self) -> str | None:
        """Text of this line on the pre side, if it has one"""
        if self.type == DiffLineType.MODIFIED:
            return self.original_content
        if self.type in (DiffLineType.REMOVED, DiffLineType.UNCHANGED):
            return self.content
        return None

    @property
    def post_content(self) -> str | None:
        """Text of this line on the post side, if it has one"""
        if self.type in (DiffLineType.ADDED, DiffLineType.UNCHANGED, DiffLineType.MODIFIED):
            return self.content
        return None


class DiffStats(_CamelModel):
    """Aggregate statistics for a diff"""

    total_lines_pre: int = 0
    total_lines_post: int = 0
    added: int = 0
    removed: int = 0
    unchanged: int = 0
    modified: int = 0
    similarity: int = Field(default=100, ge=0, le=100)  # percentage


class DiffEngineOptions(_CamelModel):
    """Resolved engine options, immutable once the engine is constructed"""

    model_config = ConfigDict(frozen=True)

    ignore_whitespace: bool = True
    ignore_case: bool = False
    ignore_empty_lines: bool = True
    context_lines: int = 3


class DiffRequest(_CamelModel):
    """Request to diff two configuration documents"""

    # Typed loosely so the engine's own validation reports bad input
    pre_config: Any = None
    post_config: Any = None
    options: dict | None = None


class DiffResponse(_CamelModel):
    """Complete diff result for a document pair"""

    lines: list[DiffLine]
    stats: DiffStats
    unified_diff: str  # "--- original" / "+++ modified" rendering


class StreamEvent(_CamelModel):
    """SSE stream event"""

    type: str  # "line", "stats", "done", "error"
    line: DiffLine | None = None
    stats: DiffStats | None = None
    done: bool = False
    error: dict | None = None
