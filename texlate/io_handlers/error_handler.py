"""
Error analysis for texlate's file output.

Classifies filesystem write failures and attaches remediation steps so the
CLI can tell the user what to fix before re-running with their saved answers.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import List


class ErrorType(Enum):
    """Kinds of write failure."""
    PERMISSION_DENIED = "permission_denied"
    DISK_FULL = "disk_full"
    PATH_NOT_FOUND = "path_not_found"
    ENCODING_ERROR = "encoding_error"
    UNKNOWN = "unknown"


@dataclass
class ErrorResult:
    """
    Result of error analysis with remediation suggestions.

    Attributes:
        error_type: The type of error detected
        message: Human-readable error message
        remediation_steps: List of suggested remediation steps
        raw_error: The original error message
    """
    error_type: ErrorType
    message: str
    remediation_steps: List[str]
    raw_error: str = ""


class WriteFailureHandler:
    """Turns write errors into messages with remediation steps."""

    ERROR_PATTERNS = [
        (
            r"permission denied|read-only file system",
            ErrorType.PERMISSION_DENIED,
            [
                "Check permissions of the output directory",
                "Choose an output filename inside a writable directory",
                "Check if the file is open in another program",
            ]
        ),
        (
            r"no space left|disk full|not enough space",
            ErrorType.DISK_FULL,
            [
                "Free up disk space by removing unnecessary files",
                "Check available disk space with 'df -h'",
            ]
        ),
        (
            r"no such file or directory|not a directory|path not found",
            ErrorType.PATH_NOT_FOUND,
            [
                "Check the output filename set by the template for typos",
                "Make sure no file exists where a directory is expected",
            ]
        ),
        (
            r"encoding|codec|decode|encode|unicode",
            ErrorType.ENCODING_ERROR,
            [
                "Check the template and answers for characters that are not valid UTF-8",
            ]
        ),
    ]

    @classmethod
    def analyze_write_error(cls, error_message: str, file_path: str = "") -> ErrorResult:
        """
        Analyze a write error and provide remediation suggestions.

        Args:
            error_message: The error message from the write operation
            file_path: The file path that failed to write

        Returns:
            ErrorResult with analysis and remediation steps
        """
        for pattern, error_type, remediation in cls.ERROR_PATTERNS:
            if re.search(pattern, error_message, re.IGNORECASE):
                return ErrorResult(
                    error_type=error_type,
                    message=cls._format_error_message(error_type, file_path, error_message),
                    remediation_steps=remediation,
                    raw_error=error_message,
                )

        return ErrorResult(
            error_type=ErrorType.UNKNOWN,
            message=f"Failed to write '{file_path}': {error_message}",
            remediation_steps=[
                "Check that the output path is valid",
                "Verify you have write permissions",
            ],
            raw_error=error_message,
        )

    @staticmethod
    def _format_error_message(error_type: ErrorType, file_path: str, raw_error: str) -> str:
        """Format a user-friendly error message."""
        type_messages = {
            ErrorType.PERMISSION_DENIED: f"Permission denied when writing to '{file_path}'",
            ErrorType.DISK_FULL: f"Insufficient disk space to write '{file_path}'",
            ErrorType.PATH_NOT_FOUND: f"Path not found for '{file_path}'",
            ErrorType.ENCODING_ERROR: f"Encoding error when writing '{file_path}'",
        }
        return type_messages.get(error_type, f"Error writing '{file_path}': {raw_error}")

    @staticmethod
    def format_error_with_remediation(message: str, remediation_steps: List[str]) -> str:
        """
        Format an error message with remediation steps for display.

        Args:
            message: The error message
            remediation_steps: Steps to suggest, in order

        Returns:
            Formatted string with error and remediation steps
        """
        lines = [f"Error: {message}"]
        if remediation_steps:
            lines.extend(["", "Suggested remediation steps:"])
            for i, step in enumerate(remediation_steps, 1):
                lines.append(f"  {i}. {step}")

        return "\n".join(lines)
