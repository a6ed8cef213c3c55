class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PunchNotAllowedError(ValidationError):
    """Raised when a punch action is not permitted in the current state."""


class UpstreamError(DomainError):
    """Raised when an event, employee or business-hours source fails."""
