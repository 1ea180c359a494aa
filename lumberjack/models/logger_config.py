"""Configuration models for the built-in loggers."""

from typing import Any, Callable, Dict, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lumberjack.core.exceptions import ConfigurationError

CELLWISE_LOG_COLUMNS = frozenset({"step", "column", "old", "new"})


class SimpleLoggerConfig(BaseModel):
    """Configuration for the simple logger."""

    model_config = ConfigDict(extra="forbid")

    verbose: bool = Field(default=True, description="Log a notice naming the sink after each flush")


class CellwiseLoggerConfig(BaseModel):
    """Configuration for the cellwise logger."""

    model_config = ConfigDict(extra="forbid")

    key: str = Field(description="Name of the column holding unique row keys")
    ignore: Set[str] = Field(
        default_factory=set, description="Columns excluded from the diff"
    )
    verbose: bool = Field(default=True, description="Log a notice naming the sink after each flush")

    @field_validator("key")
    @classmethod
    def validate_key(cls, v):
        """Validate key is a non-empty column name distinct from the log columns."""
        if not v.strip():
            raise ValueError("key must be a non-empty column name")
        if v in CELLWISE_LOG_COLUMNS:
            raise ValueError(f"key '{v}' clashes with a log column")
        return v

    @field_validator("ignore", mode="before")
    @classmethod
    def validate_ignore(cls, v):
        """Accept a single column name as well as a collection."""
        if isinstance(v, str):
            return {v}
        return v


class ExpressionLoggerConfig(BaseModel):
    """Configuration for the expression logger."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    expressions: Dict[str, Callable[[Any], Any]] = Field(
        description="Mapping of log column name to a callable evaluated on each step's output"
    )
    verbose: bool = Field(default=True, description="Log a notice naming the sink after each flush")

    @field_validator("expressions")
    @classmethod
    def validate_expressions(cls, v):
        """Validate at least one expression is given and names don't clash."""
        if not v:
            raise ValueError("at least one expression is required")
        reserved = {"step", "timestamp", "expr"}.intersection(v)
        if reserved:
            raise ValueError(f"expression names clash with log columns: {sorted(reserved)}")
        return v


class FileDumpLoggerConfig(BaseModel):
    """Configuration for the file-dump logger."""

    model_config = ConfigDict(extra="forbid")

    dir: str = Field(default=".", description="Directory or fsspec URL receiving snapshot files")
    stem: str = Field(default="step", description="File name prefix for snapshot files")
    verbose: bool = Field(default=True, description="Log a notice after each flush")


class DumpOptions(BaseModel):
    """Options common to every flush.

    Logger-specific options are allowed and forwarded verbatim.
    """

    model_config = ConfigDict(extra="allow")

    file: Optional[str] = Field(default=None, description="Sink path or fsspec URL")
    append: bool = Field(default=False, description="Append to the sink instead of overwriting it")
    verbose: Optional[bool] = Field(
        default=None, description="Override the logger's verbose setting for this flush"
    )


def parse_config(model: type[BaseModel], config: dict[str, Any]) -> Any:
    """Validate a configuration dict against ``model``.

    Raises:
        ConfigurationError: If validation fails
    """
    try:
        return model(**config)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid {model.__name__}: {e}",
            context={"errors": e.error_count()},
        ) from e
