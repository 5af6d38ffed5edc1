"""Custom exception hierarchy for paydone."""


class PaydoneError(Exception):
    """Base exception for all paydone errors."""


class InvalidDebtError(PaydoneError):
    """Raised when a debt record is explicitly validated and found unusable."""


class StepUpParseError(PaydoneError):
    """Raised when a step-up schedule cannot be decoded."""


class ConfigurationError(PaydoneError):
    """Raised when configuration is invalid or missing."""


class SinkError(PaydoneError):
    """Raised when a sink operation fails."""
