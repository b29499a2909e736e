# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Immutable in-memory representation of a draft-03 schema node."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict


class _Missing:
    """Marker for a keyword that the schema does not declare."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


# schema keyword -> SchemaNode attribute
KEYWORDS: Dict[str, str] = {
    "type": "type",
    "properties": "properties",
    "patternProperties": "pattern_properties",
    "additionalProperties": "additional_properties",
    "items": "items",
    "additionalItems": "additional_items",
    "required": "required",
    "dependencies": "dependencies",
    "enum": "enum",
    "disallow": "disallow",
    "minimum": "minimum",
    "maximum": "maximum",
    "exclusiveMinimum": "exclusive_minimum",
    "exclusiveMaximum": "exclusive_maximum",
    "divisibleBy": "divisible_by",
    "pattern": "pattern",
    "minLength": "min_length",
    "maxLength": "max_length",
    "minItems": "min_items",
    "maxItems": "max_items",
    "uniqueItems": "unique_items",
    "format": "format",
    "title": "title",
    "description": "description",
    "default": "default",
}


def freeze(value: Any) -> Any:
    """Return a read-only deep copy of a parsed data tree."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def _child(value: Any) -> Any:
    # Mappings become nodes; anything else is kept as-is so the engine can
    # report it when (and only when) the walk reaches it.
    if isinstance(value, Mapping):
        return SchemaNode.from_raw(value)
    return freeze(value)


def _child_sequence(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_child(item) for item in value)
    return _child(value)


def _child_mapping(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _child(item) for key, item in value.items()})
    return freeze(value)


_CONVERTERS = {
    "type": _child_sequence,
    "disallow": _child_sequence,
    "items": _child_sequence,
    "properties": _child_mapping,
    "pattern_properties": _child_mapping,
    "dependencies": _child_mapping,
    "additional_properties": _child,
    "additional_items": _child,
}


@dataclass(frozen=True, eq=False)
class SchemaNode:
    """One schema rule: a struct of optional keyword fields.

    Undeclared keywords hold :data:`MISSING`. Child schemas are SchemaNode
    instances; malformed children are kept verbatim.
    """

    type: Any = MISSING
    properties: Any = MISSING
    pattern_properties: Any = MISSING
    additional_properties: Any = MISSING
    items: Any = MISSING
    additional_items: Any = MISSING
    required: Any = MISSING
    dependencies: Any = MISSING
    enum: Any = MISSING
    disallow: Any = MISSING
    minimum: Any = MISSING
    maximum: Any = MISSING
    exclusive_minimum: Any = MISSING
    exclusive_maximum: Any = MISSING
    divisible_by: Any = MISSING
    pattern: Any = MISSING
    min_length: Any = MISSING
    max_length: Any = MISSING
    min_items: Any = MISSING
    max_items: Any = MISSING
    unique_items: Any = MISSING
    format: Any = MISSING
    title: Any = MISSING
    description: Any = MISSING
    default: Any = MISSING
    extras: Mapping = field(default_factory=lambda: MappingProxyType({}), repr=False)

    @classmethod
    def from_raw(cls, raw: Mapping) -> "SchemaNode":
        """Build a node (and its children) from a parsed schema mapping."""
        values: Dict[str, Any] = {}
        extras: Dict[str, Any] = {}
        for keyword, value in raw.items():
            attr = KEYWORDS.get(keyword)
            if attr is None:
                extras[keyword] = freeze(value)
                continue
            converter = _CONVERTERS.get(attr, freeze)
            values[attr] = converter(value)
        return cls(extras=MappingProxyType(extras), **values)

    def has(self, attr: str) -> bool:
        """Return True when the keyword behind ``attr`` is declared."""
        return getattr(self, attr) is not MISSING

    def declared_keywords(self):
        """Yield the schema keywords this node declares, in keyword order."""
        for keyword, attr in KEYWORDS.items():
            if self.has(attr):
                yield keyword
