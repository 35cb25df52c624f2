"""
Custom exceptions for vidcarve.

All vidcarve exceptions inherit from VidcarveError for easy catching.
"""

from __future__ import annotations

from typing import Any


class VidcarveError(Exception):
    """Base exception for all vidcarve errors.

    Attributes:
        message: Human-readable error message
        category: Error classification (e.g., "extraction", "network")
        details: Additional diagnostic information
        suggestion: Recommended remediation steps
    """

    def __init__(
        self,
        message: str,
        *,
        category: str = "unknown",
        details: dict[str, Any] | None = None,
        suggestion: str = "",
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.details = details or {}
        self.suggestion = suggestion

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a structured dict for CLI/JSON output."""
        result: dict[str, Any] = {
            "type": self.__class__.__name__,
            "message": self.message,
            "category": self.category,
        }
        if self.details:
            result["details"] = self.details
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


class ExtractionError(VidcarveError):
    """No usable JSON or representations could be found.

    Recoverable inside the pipeline (it triggers the legacy fallback) and
    surfaced to the caller only when every strategy has failed.
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        strategy: str | None = None,
    ):
        details = details or {}
        if strategy:
            details["strategy"] = strategy

        suggestion = (
            "The page may not contain a public video, or its markup may have "
            "changed. Save the page source and try again."
        )
        super().__init__(
            message,
            category="extraction",
            details=details,
            suggestion=suggestion,
        )
        self.strategy = strategy


class ParseError(VidcarveError):
    """Malformed JSON fragment found while scanning candidates."""

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        offset: int | None = None,
    ):
        details = details or {}
        if offset is not None:
            details["offset"] = offset
        super().__init__(message, category="parse", details=details)
        self.offset = offset


class NetworkError(VidcarveError):
    """Network-related error while fetching a page or stream."""

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        url: str | None = None,
        http_code: int | None = None,
        category: str = "network",
    ):
        details = details or {}
        if url:
            details["url"] = url
        if http_code:
            details["http_code"] = http_code

        suggestion = "Check your internet connection and try again."
        super().__init__(
            message,
            category=category,
            details=details,
            suggestion=suggestion,
        )
        self.url = url
        self.http_code = http_code


class ConfigError(VidcarveError):
    """Invalid configuration file content."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(message, category="config", details=details)
