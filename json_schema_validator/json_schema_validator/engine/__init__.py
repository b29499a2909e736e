"""Validation engine: type dispatch, constraint checks and format validators."""

from .formats import FORMAT_VALIDATORS, FormatValidator, get_format_validator
from .json_types import JsonType, classify, json_equal
from .outcome import OutcomeKind, ValidationOutcome
from .validator import ROOT_PATH, JsonValidator, ValidationEngine

__all__ = [
    "FORMAT_VALIDATORS",
    "FormatValidator",
    "get_format_validator",
    "JsonType",
    "classify",
    "json_equal",
    "OutcomeKind",
    "ValidationOutcome",
    "ROOT_PATH",
    "JsonValidator",
    "ValidationEngine",
]
