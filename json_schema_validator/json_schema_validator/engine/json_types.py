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

"""Classification of JSON-like values and draft-03 simple type matching.

Every value handed to the engine is mapped onto exactly one :class:`JsonType`
tag. Simple type names from a schema (``"number"``, ``"object"``, ...) are
then resolved against that tag through :data:`SIMPLE_TYPES`, so dispatch never
depends on ad-hoc ``isinstance`` chains scattered through the engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional


class JsonType(str, Enum):
    """Closed set of JSON value shapes."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


NUMERIC_TYPES: FrozenSet[JsonType] = frozenset({JsonType.INTEGER, JsonType.NUMBER})

# draft-03 simple type name -> value shapes it accepts
SIMPLE_TYPES: Dict[str, FrozenSet[JsonType]] = {
    "object": frozenset({JsonType.OBJECT}),
    "array": frozenset({JsonType.ARRAY}),
    "string": frozenset({JsonType.STRING}),
    "integer": frozenset({JsonType.INTEGER}),
    "number": NUMERIC_TYPES,
    "boolean": frozenset({JsonType.BOOLEAN}),
    "null": frozenset({JsonType.NULL}),
    "any": frozenset(JsonType),
}


def classify(value: Any) -> Optional[JsonType]:
    """Return the :class:`JsonType` of ``value``, or None for non-JSON values.

    ``bool`` is tested before ``int`` since it subclasses it. Floats with no
    fractional part (``2.0``) are integers, as the JSON text cannot tell them
    apart.
    """
    if value is None:
        return JsonType.NULL
    if isinstance(value, bool):
        return JsonType.BOOLEAN
    if isinstance(value, int):
        return JsonType.INTEGER
    if isinstance(value, float):
        return JsonType.INTEGER if value.is_integer() else JsonType.NUMBER
    if isinstance(value, str):
        return JsonType.STRING
    if isinstance(value, Mapping):
        return JsonType.OBJECT
    if isinstance(value, (list, tuple)):
        return JsonType.ARRAY
    return None


def is_known_type(name: Any) -> bool:
    return isinstance(name, str) and name in SIMPLE_TYPES


def matches_type(name: str, json_type: Optional[JsonType]) -> bool:
    """Check whether a value of ``json_type`` satisfies the simple type ``name``."""
    if json_type is None:
        return False
    return json_type in SIMPLE_TYPES[name]


def is_number(value: Any) -> bool:
    return classify(value) in NUMERIC_TYPES


def json_equal(left: Any, right: Any) -> bool:
    """Structural equality with JSON typing rules.

    Booleans never equal numbers, ``1`` equals ``1.0``, sequences compare
    element-wise and mappings compare by key set and values.
    """
    left_type = classify(left)
    right_type = classify(right)

    if left_type in NUMERIC_TYPES and right_type in NUMERIC_TYPES:
        return left == right
    if left_type != right_type:
        return False

    if left_type == JsonType.OBJECT:
        if set(left.keys()) != set(right.keys()):
            return False
        return all(json_equal(left[key], right[key]) for key in left)

    if left_type == JsonType.ARRAY:
        if len(left) != len(right):
            return False
        return all(json_equal(a, b) for a, b in zip(left, right))

    return left == right
