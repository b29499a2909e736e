from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..exceptions import SchemaError, ValidationError


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    SCHEMA_ERROR = "schema_error"
    VALIDATION_ERROR = "validation_error"


@dataclass(frozen=True)
class ValidationOutcome:
    kind: OutcomeKind
    path: Optional[str] = None
    message: str = ""
    # failing rule, e.g. "required", "minimum", "format"
    error_kind: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def valid(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    @classmethod
    def success(cls, path: Optional[str] = None) -> "ValidationOutcome":
        return cls(kind=OutcomeKind.SUCCESS, path=path)

    @classmethod
    def from_error(cls, error: Exception) -> "ValidationOutcome":
        if isinstance(error, SchemaError):
            kind = OutcomeKind.SCHEMA_ERROR
        elif isinstance(error, ValidationError):
            kind = OutcomeKind.VALIDATION_ERROR
        else:
            raise TypeError(f"Unsupported error type: {type(error).__name__}")
        return cls(
            kind=kind,
            path=error.path,
            message=error.message,
            error_kind=error.kind,
            error=error,
        )

    def raise_for_outcome(self) -> None:
        """Re-raise the carried error, if any."""
        if self.error is not None:
            raise self.error

    def __bool__(self) -> bool:
        return self.valid
