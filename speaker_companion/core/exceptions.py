"""
Exception hierarchy for the Speaker Companion service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class SpeakerCompanionException(Exception):
    """Base exception for all Speaker Companion application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class AnalysisNotFoundError(SpeakerCompanionException):
    """Raised when an analysis job cannot be found."""

    def __init__(self, analysis_id: Any, details: dict[str, Any] | None = None) -> None:
        """
        Initialize not found error.

        Args:
            analysis_id: ID of the missing analysis
            details: Additional context
        """
        details = details or {}
        details["analysis_id"] = str(analysis_id)
        self.analysis_id = analysis_id
        super().__init__(f"Analysis not found: {analysis_id}", details)


class ValidationError(SpeakerCompanionException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class InvalidConfigError(ValidationError):
    """Raised when a submission's processing options are out of bounds."""

    pass


class InvalidArgumentError(ValidationError):
    """Raised when list/query parameters are malformed."""

    pass


class InvalidTransitionError(SpeakerCompanionException):
    """Raised when a stage change is not legal from the current stage."""

    def __init__(
        self,
        current: Any,
        target: Any,
        reason: str,
        analysis_id: Any = None,
    ) -> None:
        """
        Initialize invalid transition error.

        Args:
            current: Stage the job is in
            target: Stage that was requested
            reason: Why the transition is rejected
            analysis_id: Job the transition was attempted on
        """
        details: dict[str, Any] = {
            "current_stage": str(getattr(current, "value", current)),
            "target_stage": str(getattr(target, "value", target)),
        }
        if analysis_id is not None:
            details["analysis_id"] = str(analysis_id)
        self.current = current
        self.target = target
        super().__init__(f"Invalid transition: {reason}", details)


class IncompleteInputError(SpeakerCompanionException):
    """Raised when raw pipeline output cannot be aggregated into a report."""

    def __init__(
        self,
        message: str,
        missing: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize incomplete input error.

        Args:
            message: Error message
            missing: Names of the absent or malformed sections
            details: Additional context
        """
        details = details or {}
        if missing:
            details["missing"] = missing
        self.missing = missing or []
        super().__init__(message, details)


class RemoteServiceError(SpeakerCompanionException):
    """Raised when a remote analysis API returns an unexpected response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize remote service error.

        Args:
            message: Error message
            status_code: HTTP status code returned by the remote API
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)
