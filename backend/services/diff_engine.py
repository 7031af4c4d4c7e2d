"""
Config Diff Engine - Line-oriented comparison of two configuration documents

Pipeline: validation -> normalization -> alignment -> classification, with
statistics, unified-diff rendering and context collapsing derived from the
classified lines on demand.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from models.diff import DiffEngineOptions, DiffLine, DiffLineType, DiffStats
from services.alignment import align
from services.errors import (
    ConfigSide,
    DiffCalculationError,
    DiffError,
    InvalidConfigError,
    ParseError,
)
from services.normalizer import normalize_lines
from services.validation import validate_config_content, validate_diff_options

logger = logging.getLogger(__name__)

UNIFIED_HEADER = ("--- original", "+++ modified")


def classify(pre_lines: list[str], post_lines: list[str]) -> list[DiffLine]:
    """Align two normalized line sequences and classify every line.

    A run of deletions immediately followed by a run of insertions is paired
    position by position into modified lines; leftovers stay removed/added.
    """
    result: list[DiffLine] = []
    opcodes = align(pre_lines, post_lines)

    k = 0
    while k < len(opcodes):
        tag, i1, i2, j1, j2 = opcodes[k]

        if tag == "equal":
            for offset in range(i2 - i1):
                result.append(
                    DiffLine.unchanged(i1 + offset + 1, j1 + offset + 1, pre_lines[i1 + offset])
                )
        elif tag == "delete" and k + 1 < len(opcodes) and opcodes[k + 1][0] == "insert":
            _, _, _, j1, j2 = opcodes[k + 1]
            paired = min(i2 - i1, j2 - j1)
            for offset in range(paired):
                result.append(
                    DiffLine.modified(
                        i1 + offset + 1,
                        j1 + offset + 1,
                        post_lines[j1 + offset],
                        pre_lines[i1 + offset],
                    )
                )
            for i in range(i1 + paired, i2):
                result.append(DiffLine.removed(i + 1, pre_lines[i]))
            for j in range(j1 + paired, j2):
                result.append(DiffLine.added(j + 1, post_lines[j]))
            k += 1
        elif tag == "delete":
            for i in range(i1, i2):
                result.append(DiffLine.removed(i + 1, pre_lines[i]))
        elif tag == "insert":
            for j in range(j1, j2):
                result.append(DiffLine.added(j + 1, post_lines[j]))
        else:
            raise RuntimeError(f"Unknown alignment tag: {tag}")

        k += 1

    return result


def collapse_unchanged(lines: Iterable[DiffLine], context_lines: int) -> list[DiffLine]:
    """Keep only context_lines unchanged lines at each end of long unchanged runs"""
    result: list[DiffLine] = []
    block: list[DiffLine] = []

    def flush() -> None:
        if len(block) <= context_lines * 2:
            result.extend(block)
        else:
            result.extend(block[:context_lines])
            result.append(DiffLine.ellipsis())
            result.extend(block[len(block) - context_lines:])
        block.clear()

    for line in lines:
        if line.type == DiffLineType.UNCHANGED:
            block.append(line)
        else:
            flush()
            result.append(line)
    flush()

    return result


def compute_stats(lines: Iterable[DiffLine]) -> DiffStats:
    """Count each kind of line and derive the similarity percentage"""
    counts = {kind: 0 for kind in DiffLineType}
    for line in lines:
        counts[line.type] += 1

    added = counts[DiffLineType.ADDED]
    removed = counts[DiffLineType.REMOVED]
    unchanged = counts[DiffLineType.UNCHANGED]
    modified = counts[DiffLineType.MODIFIED]
    total_pre = unchanged + modified + removed
    total_post = unchanged + modified + added

    total = max(total_pre, total_post)
    if total == 0:
        # Two empty documents are identical
        similarity = 100
    else:
        # Integer round-half-up of 100 * unchanged / total
        similarity = (200 * unchanged + total) // (2 * total)

    return DiffStats(
        total_lines_pre=total_pre,
        total_lines_post=total_post,
        added=added,
        removed=removed,
        unchanged=unchanged,
        modified=modified,
        similarity=similarity,
    )


def render_unified(lines: Iterable[DiffLine]) -> str:
    """Serialize classified lines as prefix-marked unified-diff text"""
    output = list(UNIFIED_HEADER)
    for line in lines:
        if line.type == DiffLineType.REMOVED:
            output.append(f"-{line.content}")
        elif line.type == DiffLineType.ADDED:
            output.append(f"+{line.content}")
        elif line.type == DiffLineType.MODIFIED:
            output.append(f"-{line.original_content}")
            output.append(f"+{line.content}")
        elif line.type == DiffLineType.UNCHANGED:
            output.append(f" {line.content}")
        else:
            output.append(line.content)
    return "\n".join(output)


class ConfigDiffEngine:
    """Compare a pre and post configuration document line by line.

    Options are validated once at construction. Documents are attached with
    set_configs() and every query re-derives its result from them.
    Instances are not thread-safe; serialize calls per instance.
    """

    def __init__(self, options: dict[str, Any] | None = None):
        validate_diff_options(options)
        options = options or {}
        self.options = DiffEngineOptions(
            ignore_whitespace=options.get("ignoreWhitespace", True),
            ignore_case=options.get("ignoreCase", False),
            ignore_empty_lines=options.get("ignoreEmptyLines", True),
            context_lines=int(options.get("contextLines", 3)),
        )
        self._pre_config: str | None = None
        self._post_config: str | None = None

    def set_configs(self, pre_config: str, post_config: str) -> None:
        """Validate and attach the documents to compare.

        On failure the previously attached pair is left untouched.
        """
        side: ConfigSide = "pre"
        try:
            validate_config_content(pre_config, "pre")
            side = "post"
            validate_config_content(post_config, "post")
        except DiffError as e:
            logger.warning(f"Rejected {side} configuration: {e.message}")
            raise
        except Exception as e:
            raise ParseError("Failed to parse configuration", side, str(e)) from e

        self._pre_config = pre_config
        self._post_config = post_config

    def _require_configs(self) -> tuple[str, str]:
        if self._pre_config is None or self._post_config is None:
            raise InvalidConfigError(
                "Both pre and post configurations must be set before getting diff",
                "preConfig" if self._pre_config is None else "postConfig",
            )
        return self._pre_config, self._post_config

    def get_line_diff(self) -> list[DiffLine]:
        """Get the full classified diff between the pre and post configurations"""
        pre_config, post_config = self._require_configs()

        try:
            pre_lines = normalize_lines(pre_config, self.options)
            post_lines = normalize_lines(post_config, self.options)
            result = classify(pre_lines, post_lines)
        except Exception as e:
            logger.exception("Line diff calculation failed")
            raise DiffCalculationError(f"Failed to calculate line diff: {e}", e) from e

        logger.debug(
            f"Diffed {len(pre_lines)} pre lines against {len(post_lines)} post lines "
            f"into {len(result)} entries"
        )
        return result

    def get_diff_with_context(self) -> list[DiffLine]:
        """Get the diff with long unchanged runs collapsed around an ellipsis"""
        return collapse_unchanged(self.get_line_diff(), self.options.context_lines)

    def get_stats(self) -> DiffStats:
        """Get statistics about the diff"""
        return compute_stats(self.get_line_diff())

    def get_unified_diff(self) -> str:
        """Get the diff rendered as unified-diff text"""
        return render_unified(self.get_line_diff())

    def get_similarity(self) -> int:
        """Get the similarity percentage between the two configurations"""
        return self.get_stats().similarity
