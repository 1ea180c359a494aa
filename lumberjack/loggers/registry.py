"""Logger registry for managing logger factories."""

from typing import Any, Callable, overload

from lumberjack.core.exceptions import ConfigurationError
from lumberjack.loggers.base import Logger

LoggerFactory = Callable[[dict[str, Any]], Logger]

_logger_registry: dict[str, LoggerFactory] = {}


@overload
def register_logger(
    logger_type: str,
) -> Callable[[LoggerFactory], LoggerFactory]: ...


@overload
def register_logger(logger_type: str, factory: LoggerFactory) -> None: ...


def register_logger(
    logger_type: str,
    factory: LoggerFactory | None = None,
) -> Callable[[LoggerFactory], LoggerFactory] | None:
    """Register a logger factory.

    Can be used as a decorator or called directly:

        # As decorator
        @register_logger("cellwise")
        def create_cellwise_logger(config):
            return CellwiseLogger(**config)

        # Direct call
        register_logger("cellwise", create_cellwise_logger)

    Args:
        logger_type: Unique identifier for the logger (e.g., 'cellwise').
        factory: Factory function (optional if used as decorator).

    Raises:
        ConfigurationError: If a logger with the same type is already registered.
    """

    def _register(f: LoggerFactory) -> LoggerFactory:
        if logger_type in _logger_registry:
            raise ConfigurationError(
                f"Logger '{logger_type}' is already registered",
                context={"logger_type": logger_type},
            )
        _logger_registry[logger_type] = f
        return f

    if factory is not None:
        _register(factory)
        return None

    return _register


def get_logger(logger_type: str, config: dict[str, Any] | None = None) -> Logger:
    """Create a logger instance using the registered factory.

    Args:
        logger_type: The logger type to instantiate.
        config: Construction options for the logger.

    Returns:
        A new logger instance.

    Raises:
        ConfigurationError: If the logger type is not registered or the
            options are invalid.
    """
    factory = _logger_registry.get(logger_type)
    if factory is None:
        available = ", ".join(sorted(_logger_registry.keys())) or "(none)"
        raise ConfigurationError(
            f"Unknown logger type: '{logger_type}'",
            context={"logger_type": logger_type, "available_types": available},
        )
    return factory(config or {})


def list_logger_types() -> list[str]:
    """Return a sorted list of all registered logger types."""
    return sorted(_logger_registry.keys())


def clear_registry() -> None:
    """Clear all registered loggers.

    Intended for testing only. Removes all logger registrations.
    """
    _logger_registry.clear()
