"""Outcome values produced by :meth:`CommandRegistry.execute`."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class CommandError(enum.Enum):
    """Why a command did not run to completion."""

    UNKNOWN_COMMAND = "unknown_command"
    UNMET_PRECONDITION = "unmet_precondition"
    BAD_ARGS = "bad_args"
    EXCEPTION = "exception"
    UNSUCCESSFUL = "unsuccessful"


@dataclass(frozen=True)
class ExecuteResult:
    is_success: bool
    error: Optional[CommandError] = None
    error_reason: str = ""
    exception: Optional[BaseException] = None

    def __post_init__(self) -> None:
        # A failure always carries a kind.
        if not self.is_success and self.error is None:
            object.__setattr__(self, "error", CommandError.UNSUCCESSFUL)

    @classmethod
    def success(cls) -> "ExecuteResult":
        return cls(is_success=True)

    @classmethod
    def failure(cls, error: CommandError, reason: str, exception: Optional[BaseException] = None) -> "ExecuteResult":
        return cls(is_success=False, error=error, error_reason=reason, exception=exception)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExecuteResult":
        return cls.failure(CommandError.EXCEPTION, f"{type(exc).__name__}: {exc}", exc)
