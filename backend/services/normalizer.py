"""
Normalizer - Line-level transformations applied before alignment
"""

from __future__ import annotations

from models.diff import DiffEngineOptions


def split_lines(content: str) -> list[str]:
    """Split a document into lines, treating \\r\\n and \\r as \\n"""
    lines = content.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    # A trailing newline terminates the last line rather than opening a new one
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def normalize_line(line: str, options: DiffEngineOptions) -> str:
    """Apply case folding then whitespace trimming"""
    if options.ignore_case:
        line = line.lower()
    if options.ignore_whitespace:
        line = line.strip()
    return line


def normalize_lines(content: str, options: DiffEngineOptions) -> list[str]:
    """Normalize a document into the line sequence used for matching.

    Lines that are blank after trimming are dropped when ignore_empty_lines is
    set, so they never consume a line number.
    """
    result = []
    for line in split_lines(content):
        if options.ignore_empty_lines and not line.strip():
            continue
        result.append(normalize_line(line, options))
    return result
