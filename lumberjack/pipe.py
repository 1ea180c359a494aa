"""Pipe operator that threads a dataset and its logger through a chain of steps.

A ``Tracked`` value pairs a dataset with an ``Attachment`` (a logger and its
step counter). Transformations only ever see the dataset itself:

    >>> out = start_log(table, CellwiseLogger(key="id")) >> drop_nulls >> (scale, 2)
    >>> out.value
"""

import ast
import inspect
import linecache
import logging
import sys
from dataclasses import dataclass
from types import FrameType
from typing import Any, Callable, Optional

from lumberjack.core.exceptions import UsageError
from lumberjack.loggers.base import Logger, StepMeta, logger_type

logger = logging.getLogger(__name__)


@dataclass
class Attachment:
    """Association between a logger and the chain it observes.

    The same attachment is shared by every ``Tracked`` value of a chain, so
    the step counter advances across the whole chain.
    """

    logger: Logger
    step: int = 0
    active: bool = True

    def detach(self) -> None:
        self.active = False


class Tracked:
    """A dataset value, optionally carrying an attached logger.

    Use ``>>`` to apply a step. The right-hand side may be:
    - a callable taking the dataset, e.g. ``tracked >> normalize``
    - a callable taking no arguments, e.g. ``tracked >> (lambda: other)``
    - a tuple ``(func, *args)`` calling ``func(dataset, *args)``

    ``pipe`` does the same with keyword arguments and an explicit label.
    """

    __slots__ = ("_value", "_attachment")

    def __init__(self, value: Any, attachment: Optional[Attachment] = None):
        if isinstance(value, Tracked):
            value = value.value
        self._value = value
        self._attachment = attachment

    @property
    def value(self) -> Any:
        """Return the dataset value."""
        return self._value

    @property
    def attachment(self) -> Optional[Attachment]:
        """Return the active attachment, if any."""
        if self._attachment is not None and self._attachment.active:
            return self._attachment
        return None

    @property
    def logger(self) -> Optional[Logger]:
        """Return the attached logger, if any."""
        attachment = self.attachment
        return attachment.logger if attachment else None

    @property
    def step(self) -> int:
        """Return the number of steps recorded by the attached logger."""
        attachment = self.attachment
        return attachment.step if attachment else 0

    def __rshift__(self, rhs: Any) -> "Tracked":
        func, args = _unpack(rhs)
        expr = _capture_rhs_source(sys._getframe(1)) or _describe(func, args, {})
        return self._apply(func, args, {}, expr)

    def pipe(
        self,
        func: Callable[..., Any],
        *args: Any,
        label: Optional[str] = None,
        **kwargs: Any,
    ) -> "Tracked":
        """Apply ``func(dataset, *args, **kwargs)`` as one logged step.

        Args:
            func: Transformation to apply
            *args: Extra positional arguments
            label: Text recorded as the step's expression
            **kwargs: Extra keyword arguments

        Returns:
            Tracked output with the same logger attached
        """
        if not callable(func):
            raise UsageError(
                "pipe() expects a callable",
                context={"type": type(func).__name__},
            )
        return self._apply(func, args, kwargs, label or _describe(func, args, kwargs))

    def _apply(
        self,
        func: Callable[..., Any],
        args: tuple,
        kwargs: dict[str, Any],
        expr: str,
    ) -> "Tracked":
        output = _call(func, self._value, args, kwargs)

        attachment = self.attachment
        if attachment is None:
            return Tracked(output)

        meta = StepMeta(step=attachment.step + 1, expr=expr, func=func)
        attachment.logger.record(meta, self._value, output)
        attachment.step = meta.step

        logger.debug(
            f"Applied {expr}",
            extra={"step": meta.step, "logger_type": logger_type(attachment.logger)},
        )
        return Tracked(output, attachment)

    def __repr__(self) -> str:
        attached = logger_type(self.logger) if self.logger is not None else None
        return f"Tracked(value={self._value!r}, logger={attached}, step={self.step})"


def _unpack(rhs: Any) -> tuple[Callable[..., Any], tuple]:
    if isinstance(rhs, tuple) and rhs and callable(rhs[0]):
        return rhs[0], tuple(rhs[1:])
    if callable(rhs):
        return rhs, ()
    raise UsageError(
        "Right-hand side of >> must be a callable or a (callable, *args) tuple",
        context={"type": type(rhs).__name__},
    )


def _call(func: Callable[..., Any], value: Any, args: tuple, kwargs: dict[str, Any]) -> Any:
    if not args and not kwargs and _takes_no_arguments(func):
        return func()
    return func(value, *args, **kwargs)


def _takes_no_arguments(func: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    return not any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
        for p in signature.parameters.values()
    )


def _capture_rhs_source(frame: FrameType) -> Optional[str]:
    """Return the source text of the right operand of the ``>>`` being executed.

    Relies on instruction positions (Python 3.11+); returns None when the
    source or the positions are unavailable.
    """
    positions = getattr(inspect.getframeinfo(frame, context=0), "positions", None)
    if positions is None or None in positions:
        return None

    lines = linecache.getlines(frame.f_code.co_filename)[positions.lineno - 1 : positions.end_lineno]
    if not lines:
        return None

    # Column offsets are in UTF-8 bytes
    encoded = [line.encode("utf-8") for line in lines]
    if len(encoded) == 1:
        segment = encoded[0][positions.col_offset : positions.end_col_offset]
    else:
        segment = (
            encoded[0][positions.col_offset :]
            + b"".join(encoded[1:-1])
            + encoded[-1][: positions.end_col_offset]
        )
    source = "(" + segment.decode("utf-8") + ")"

    try:
        node = ast.parse(source, mode="eval").body
    except SyntaxError:
        return None
    if not (isinstance(node, ast.BinOp) and isinstance(node.op, ast.RShift)):
        return None

    text = ast.get_source_segment(source, node.right)
    return " ".join(text.split()) if text else None


def _describe(func: Callable[..., Any], args: tuple, kwargs: dict[str, Any]) -> str:
    name = getattr(func, "__qualname__", None) or repr(func)
    arguments = [repr(a) for a in args] + [f"{k}={v!r}" for k, v in kwargs.items()]
    if arguments:
        return f"{name}(., {', '.join(arguments)})"
    return name
