"""
Custom exceptions for git-sdk-fetch.

This module defines domain-specific exceptions so that callers can tell an
invalid request apart from a failing GitHub API, a failing download or a
failing external process.
"""

from typing import Optional, Sequence


class GitSdkError(Exception):
    """
    Base exception for all git-sdk-fetch errors.

    All custom exceptions should inherit from this class so that callers can
    catch every application-specific error at once.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: The primary error message.
            details: Optional additional context about the error.
        """
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(GitSdkError):
    """Exception raised when configuration is invalid or missing."""

    pass


class ConfigFileError(ConfigurationError):
    """Exception raised when the configuration file cannot be read or parsed."""

    pass


class ConfigValidationError(ConfigurationError):
    """Exception raised when a configuration value has the wrong type."""

    pass


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(GitSdkError):
    """
    Exception raised when a request fails validation before any I/O happens.

    Attributes:
        field: The name of the field that failed validation.
        value: The value that failed validation.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidArchitectureError(ValidationError):
    """Exception raised for an architecture outside the supported set."""

    def __init__(self, architecture: str) -> None:
        super().__init__(
            f"Invalid architecture {architecture} specified",
            field="architecture",
            value=architecture,
        )


# =============================================================================
# API Errors
# =============================================================================


class APIError(GitSdkError):
    """
    Exception raised for GitHub API errors.

    Attributes:
        endpoint: The API endpoint that was accessed.
        status_code: The HTTP status code returned.
    """

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class AuthenticationError(APIError):
    """Exception raised when API authentication fails."""

    pass


class ResourceNotFoundError(APIError):
    """Exception raised when an API resource (branch, release) does not exist."""

    pass


class RateLimitError(APIError):
    """Exception raised when the GitHub API rate limit is exhausted."""

    pass


class ReleaseNotFoundError(APIError):
    """Exception raised when the ci-artifacts release lookup does not return 200."""

    pass


class AssetNotFoundError(APIError):
    """Exception raised when a release carries no usable archive asset."""

    pass


# =============================================================================
# Download Errors
# =============================================================================


class DownloadError(GitSdkError):
    """
    Base exception for download-related errors.

    Attributes:
        url: The URL that was being downloaded when the error occurred.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url


class NetworkError(DownloadError):
    """Exception raised when the transfer fails below the HTTP layer."""

    pass


class DownloadHTTPError(DownloadError):
    """
    Exception raised when a download URL answers with a non-OK status.

    Attributes:
        status_code: The HTTP status code returned by the server.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, url, details)
        self.status_code = status_code


# =============================================================================
# Process Errors
# =============================================================================


class ProcessError(GitSdkError):
    """
    Exception raised when an external process exits with a nonzero code.

    Attributes:
        exit_code: The exit code, or None when the process could not be started.
        command: The command line that was executed.
    """

    def __init__(
        self,
        message: str,
        exit_code: Optional[int] = None,
        command: Optional[Sequence[str]] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.exit_code = exit_code
        self.command = list(command) if command is not None else None
