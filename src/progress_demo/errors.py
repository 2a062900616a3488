"""Application-level exception types for progress-demo."""

from __future__ import annotations


class ProgressDemoError(Exception):
    """Base exception for progress-demo."""


class ConfigurationError(ProgressDemoError):
    """Base exception for configuration and startup validation errors."""


class WorkspaceNotFoundError(ConfigurationError):
    """Raised when the configured workspace path does not exist."""


class ExternalCallError(ProgressDemoError):
    """Raised when an inspection outside the core's authority fails."""


class ToolInputError(ProgressDemoError):
    """Raised when tool input does not match the tool's schema."""
