"""
Diff Errors - Structured error taxonomy for the diff engine

Every error carries a stable string code and optional structured details so
the HTTP layer and exporters can report failures without string matching.
"""

from __future__ import annotations

from typing import Any, Literal

ConfigSide = Literal["pre", "post"]


class DiffError(Exception):
    """Base class for all diff engine errors"""

    code = "DIFF_ERROR"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {"code": self.code, "message": self.message, "details": self.details}


class InvalidConfigError(DiffError):
    """Document missing, empty or not a string; also wraps bad engine options"""

    code = "INVALID_CONFIG"

    def __init__(self, message: str, field: str | None = None, details: Any = None):
        super().__init__(message, details)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["field"] = self.field
        return result


class ValidationError(DiffError):
    """One or more structural problems, reported all at once"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, validation_errors: list[str]):
        super().__init__(message, validation_errors)
        self.validation_errors = list(validation_errors)


class InvalidOptionsError(InvalidConfigError, ValidationError):
    """Rejected engine options.

    Both an InvalidConfigError (the engine cannot be configured) and a
    ValidationError (it lists every offending option field).
    """

    code = "INVALID_CONFIG"

    def __init__(self, message: str, validation_errors: list[str]):
        DiffError.__init__(self, message, list(validation_errors))
        self.field = "diffOptions"
        self.validation_errors = list(validation_errors)


class ParseError(DiffError):
    """Content that failed a structural parse attempt"""

    code = "PARSE_ERROR"

    def __init__(self, message: str, config_type: ConfigSide, details: Any = None):
        super().__init__(message, details)
        self.config_type = config_type

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["configType"] = self.config_type
        return result


class DiffCalculationError(DiffError):
    """Unexpected failure inside alignment or classification"""

    code = "DIFF_CALCULATION_ERROR"

    def __init__(self, message: str, cause: BaseException):
        super().__init__(message, {"cause": repr(cause)})
        self.__cause__ = cause

    @property
    def cause(self) -> BaseException:
        return self.__cause__
