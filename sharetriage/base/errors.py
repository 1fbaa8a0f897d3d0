"""Structured error taxonomy for sharetriage."""
#
# ERROR CODE FORMAT:
# - CONFIG_XXX: invalid configuration (raised before any input is read)
# - INPUT_XXX: input acquisition / format detection failures
# - REPORT_XXX: report writing failures
# - SYSTEM_XXX: anything unexpected
#
# USAGE:
#   from sharetriage.base.errors import TriageError, ErrorCode
#
#   raise TriageError(
#       ErrorCode.INPUT_NOT_FOUND,
#       "Input file does not exist",
#       details={"path": "snaffler.log"}
#   )
#
# Per-record parse problems are never errors: unmatched lines and
# malformed nested fields are skipped or left empty by the parsers.
from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    # Config Errors
    CONFIG_INVALID_SORT_KEY = "CONFIG_001"
    CONFIG_INVALID = "CONFIG_002"

    # Input Errors
    INPUT_NOT_FOUND = "INPUT_001"
    INPUT_UNREADABLE = "INPUT_002"
    INPUT_UNPARSEABLE = "INPUT_003"

    # Report Errors
    REPORT_WRITE_FAILED = "REPORT_001"

    # System Errors
    SYSTEM_INTERNAL_ERROR = "SYSTEM_001"


class TriageError(Exception):
    """
    Base exception with structured error information.

    Attributes:
        code: ErrorCode enum value (e.g., "INPUT_001")
        message: Human-readable error message
        details: Optional dictionary with additional context
        exit_code: Process exit status the CLI should return
    """

    EXIT_CODE_MAP: Dict[ErrorCode, int] = {
        ErrorCode.CONFIG_INVALID_SORT_KEY: 2,
        ErrorCode.CONFIG_INVALID: 2,
        ErrorCode.INPUT_NOT_FOUND: 3,
        ErrorCode.INPUT_UNREADABLE: 3,
        ErrorCode.INPUT_UNPARSEABLE: 4,
        ErrorCode.REPORT_WRITE_FAILED: 5,
        ErrorCode.SYSTEM_INTERNAL_ERROR: 1,
    }

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        exit_code: Optional[int] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.exit_code = exit_code or self.EXIT_CODE_MAP.get(code, 1)

        # Build exception message with code for easy debugging
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
            "exit_code": self.exit_code,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TriageError":
        """
        Deserialize error from dictionary.

        Args:
            data: Dictionary with code, message, details, exit_code

        Returns:
            TriageError instance
        """
        code = ErrorCode(data["code"])
        return cls(code, data["message"], data.get("details", {}), data.get("exit_code"))


class ConfigurationError(TriageError):
    """Raised when a setting (sort key, output format, rating floor) is invalid."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(code, message, details)


class InputFormatError(TriageError):
    """Raised when an input matches neither the structured nor the line format."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.INPUT_UNPARSEABLE, message, details)


# ============================================================================
# Convenience Functions
# ============================================================================

def handle_error(error: Exception, context: Optional[str] = None) -> TriageError:
    """
    Convert a generic exception to a TriageError.

    Args:
        error: The original exception
        context: Optional context string (e.g., "while writing report")

    Returns:
        TriageError with appropriate code and message
    """
    if isinstance(error, TriageError):
        return error

    error_type = type(error).__name__

    if isinstance(error, FileNotFoundError):
        code = ErrorCode.INPUT_NOT_FOUND
    elif isinstance(error, (PermissionError, IsADirectoryError)):
        code = ErrorCode.INPUT_UNREADABLE
    else:
        code = ErrorCode.SYSTEM_INTERNAL_ERROR

    message = str(error)
    if context:
        message = f"{context}: {message}"

    return TriageError(
        code=code,
        message=message,
        details={
            "original_type": error_type,
            "original_message": str(error),
        },
    )


__all__ = ["ErrorCode", "TriageError", "ConfigurationError", "InputFormatError", "handle_error"]
