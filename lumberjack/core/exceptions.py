"""Exception hierarchy for the lumberjack package."""


class LumberjackError(Exception):
    """Base exception for all lumberjack errors."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigurationError(LumberjackError):
    """Raised when a logger is misconfigured or a snapshot violates its configuration."""

    pass


class UsageError(LumberjackError):
    """Raised when the logging API is called in an invalid state."""

    pass
