"""JSON Schema (draft-03) validator for parsed JSON data trees."""

__version__ = "0.1.0"

from .exceptions import (
    DocumentParseError,
    JsonValidatorError,
    SchemaError,
    SchemaNotFoundError,
    ValidationError,
)
from .schema import SchemaNode, SchemaStore
from .engine import (
    JsonValidator,
    OutcomeKind,
    ValidationEngine,
    ValidationOutcome,
)

__all__ = [
    "DocumentParseError",
    "JsonValidatorError",
    "SchemaError",
    "SchemaNotFoundError",
    "ValidationError",
    "SchemaNode",
    "SchemaStore",
    "JsonValidator",
    "OutcomeKind",
    "ValidationEngine",
    "ValidationOutcome",
]
