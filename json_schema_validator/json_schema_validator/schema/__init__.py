"""Schema definitions and loading.

This package only turns schema documents into immutable node trees; it does
not depend on the validation engine.
"""

from .node import MISSING, SchemaNode, freeze
from .store import SchemaStore

__all__ = ["MISSING", "SchemaNode", "SchemaStore", "freeze"]
