"""Typed application errors mapped to HTTP responses."""


class CaloAIError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(CaloAIError):
    """Request input is missing or malformed."""

    status_code = 400


class NotFoundError(CaloAIError):
    """Requested record does not exist."""

    status_code = 404


class UpstreamBlocked(CaloAIError):
    """The AI model refused or returned no content."""

    status_code = 400


class UpstreamMalformed(CaloAIError):
    """The AI model returned content that does not match the expected schema."""

    status_code = 500


class UpstreamError(CaloAIError):
    """The AI model call failed before a response was produced."""

    status_code = 500


class ConfigurationError(CaloAIError):
    """A required setting is missing."""

    status_code = 500


class PersistenceError(CaloAIError):
    """A database read or write failed."""

    status_code = 500
