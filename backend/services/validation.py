"""
Validation - Reject malformed documents and engine options before diffing

The structural checks are advisory heuristics over line content, not a full
JSON or YAML parser.
"""

from __future__ import annotations

import json
from typing import Any

from services.errors import ConfigSide, InvalidConfigError, InvalidOptionsError, ValidationError

_BOOL_OPTIONS = ("ignoreWhitespace", "ignoreCase", "ignoreEmptyLines")


def _field_name(side: ConfigSide) -> str:
    return "preConfig" if side == "pre" else "postConfig"


def looks_like_json(content: str) -> bool:
    """True when content opens like a JSON object or array"""
    stripped = content.strip()
    return stripped.startswith(("{", "["))


def looks_like_yaml(lines: list[str]) -> bool:
    """True when any line carries a mapping token or a list marker"""
    for line in lines:
        stripped = line.strip()
        if stripped.startswith("#"):
            continue
        if ":" in line or stripped.startswith("- ") or stripped == "-":
            return True
    return False


def validate_config_content(content: Any, side: ConfigSide = "pre") -> None:
    """Validate one configuration document.

    Raises InvalidConfigError for non-string or blank content and
    ValidationError listing every structural problem found.
    """
    if not isinstance(content, str):
        raise InvalidConfigError(
            f"Configuration must be a string, got {type(content).__name__}",
            _field_name(side),
            {"type": type(content).__name__},
        )

    if not content.strip():
        raise InvalidConfigError(
            "Configuration cannot be empty",
            _field_name(side),
            {"length": len(content)},
        )

    validation_errors: list[str] = []

    if looks_like_json(content):
        try:
            json.loads(content)
        except json.JSONDecodeError as e:
            validation_errors.append(
                f"Invalid JSON format: {e.msg} (line {e.lineno}, column {e.colno})"
            )

    lines = content.split("\n")
    if looks_like_yaml(lines):
        for i, line in enumerate(lines, start=1):
            if "\t" in line:
                validation_errors.append(
                    f"Line {i}: Tabs are not allowed in YAML, use spaces instead"
                )

    if validation_errors:
        raise ValidationError(
            f"{side} configuration validation failed with {len(validation_errors)} error(s)",
            validation_errors,
        )


def validate_diff_options(options: Any) -> None:
    """Validate raw engine options, reporting every bad field at once"""
    if options is None:
        return
    if not isinstance(options, dict):
        raise InvalidOptionsError(
            "Invalid diff options: options must be a mapping",
            ["options must be a mapping"],
        )

    validation_errors: list[str] = []

    if "contextLines" in options:
        context_lines = options["contextLines"]
        # bool is an int subclass but never a valid line count
        if (
            isinstance(context_lines, bool)
            or not isinstance(context_lines, (int, float))
            or (isinstance(context_lines, float) and not context_lines.is_integer())
            or context_lines < 0
        ):
            validation_errors.append("contextLines must be a non-negative number")

    for name in _BOOL_OPTIONS:
        if name in options and not isinstance(options[name], bool):
            validation_errors.append(f"{name} must be a boolean")

    if validation_errors:
        raise InvalidOptionsError(
            f"Invalid diff options: {', '.join(validation_errors)}",
            validation_errors,
        )
