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

"""Recursive draft-03 validation of a value tree against a SchemaNode tree.

The walk is fail-fast: the first violated rule raises and aborts the walk.
Two error families are kept apart:

* :class:`SchemaError` - the schema node being visited is defective
  (unknown type name, zero ``divisibleBy``, non-array ``enum``, ...).
* :class:`ValidationError` - the value does not satisfy a well-formed rule.

Schema defects are only found on the branch the walk actually visits.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, FrozenSet, Iterable, List, Optional, Tuple, Union

from ..config import validator_config
from ..exceptions import SchemaError, ValidationError
from ..schema.node import MISSING, SchemaNode
from ..schema.store import SchemaStore
from .formats import FORMAT_VALIDATORS, FormatValidator
from .json_types import (
    NUMERIC_TYPES,
    JsonType,
    classify,
    is_known_type,
    is_number,
    json_equal,
    matches_type,
)
from .outcome import ValidationOutcome

logger = logging.getLogger(__name__)

ROOT_PATH = "root"


@lru_cache(maxsize=256)
def _compile_regex(pattern: str) -> "re.Pattern":
    return re.compile(pattern)


def _describe(value: Any) -> str:
    json_type = classify(value)
    return json_type.value if json_type is not None else type(value).__name__


def _option_label(option: Any) -> str:
    if isinstance(option, str):
        return option
    if isinstance(option, SchemaNode):
        return "schema"
    return repr(option)


class ValidationEngine:
    """Validates values against the schema held by a :class:`SchemaStore`.

    The engine keeps no per-call state, so one instance can serve repeated
    and concurrent ``validate`` calls.
    """

    def __init__(
        self,
        store: SchemaStore,
        formats: Optional[Mapping] = None,
        max_depth: Optional[int] = None,
    ):
        self._store = store
        self._formats = MappingProxyType(dict(formats if formats is not None else FORMAT_VALIDATORS))
        self._max_depth = max_depth if max_depth is not None else validator_config.max_depth

    @property
    def store(self) -> SchemaStore:
        return self._store

    @property
    def formats(self) -> Mapping:
        return self._formats

    def register_format(
        self,
        name: str,
        predicate: Callable[[Any], bool],
        applies_to: FrozenSet[JsonType] = frozenset({JsonType.STRING}),
    ) -> None:
        """Add (or replace) a named format validator for this engine only."""
        formats = dict(self._formats)
        formats[name] = FormatValidator(name, predicate, frozenset(applies_to))
        self._formats = MappingProxyType(formats)

    # ---- public entry points ---------------------------------------------------

    def validate(
        self,
        value: Any,
        schema: Union[SchemaNode, Mapping, None] = None,
        path: str = ROOT_PATH,
    ) -> None:
        """Validate ``value``; return None on success.

        Args:
            value: Parsed JSON-like value (dict/list/str/int/float/bool/None)
            schema: Schema node to validate against (default: the store root)
            path: Dotted path label of ``value``

        Raises:
            ValidationError: If the value does not conform
            SchemaError: If a visited schema node is defective
        """
        if schema is None:
            node = self._store.root
        elif isinstance(schema, SchemaNode):
            node = schema
        elif isinstance(schema, Mapping):
            node = SchemaNode.from_raw(schema)
        else:
            raise SchemaError(
                f"Invalid schema for [{path}]: expected object, got {type(schema).__name__}",
                path=path,
                kind="schema",
            )
        self._validate_node(value, node, path or ROOT_PATH, 0)

    def check(
        self,
        value: Any,
        schema: Union[SchemaNode, Mapping, None] = None,
        path: str = ROOT_PATH,
    ) -> ValidationOutcome:
        """Like :meth:`validate` but return a :class:`ValidationOutcome`."""
        try:
            self.validate(value, schema=schema, path=path)
        except (SchemaError, ValidationError) as e:
            return ValidationOutcome.from_error(e)
        return ValidationOutcome.success(path=path)

    def is_valid(self, value: Any) -> bool:
        """Return False on a value defect; schema defects still raise."""
        try:
            self.validate(value)
        except ValidationError:
            return False
        return True

    # ---- node walk -------------------------------------------------------------

    def _validate_node(self, value: Any, node: Any, path: str, depth: int) -> None:
        if not isinstance(node, SchemaNode):
            raise SchemaError(
                f"Invalid schema for [{path}]: expected object, got {node!r}",
                path=path,
                kind="schema",
            )
        if depth > self._max_depth:
            raise SchemaError(
                f"Schema nesting deeper than {self._max_depth} levels at [{path}]",
                path=path,
                kind="depth",
            )

        json_type = classify(value)
        if json_type is None:
            raise ValidationError(
                f"Unsupported value type [{type(value).__name__}] for [{path}]",
                path=path,
                kind="type",
            )

        self._check_type(value, json_type, node, path, depth)
        self._check_disallow(value, json_type, node, path, depth)
        self._check_enum(value, node, path)

        if json_type == JsonType.OBJECT:
            self._check_object(value, node, path, depth)
        elif json_type in NUMERIC_TYPES:
            self._check_number(value, node, path)
        elif json_type == JsonType.STRING:
            self._check_string(value, node, path)
        elif json_type == JsonType.ARRAY:
            self._check_array(value, node, path, depth)

        self._check_format(value, node, path)

    # ---- type / disallow ---------------------------------------------------------

    def _matches_option(self, value: Any, json_type: JsonType, option: Any, path: str, depth: int) -> bool:
        if isinstance(option, str):
            if not is_known_type(option):
                raise SchemaError(f"Unknown type [{option}] in schema for [{path}]", path=path, kind="type")
            return matches_type(option, json_type)
        if isinstance(option, SchemaNode):
            try:
                self._validate_node(value, option, path, depth + 1)
            except ValidationError:
                return False
            return True
        raise SchemaError(f"Invalid type declaration {option!r} in schema for [{path}]", path=path, kind="type")

    def _check_type(self, value: Any, json_type: JsonType, node: SchemaNode, path: str, depth: int) -> None:
        declared = node.type
        if declared is MISSING:
            return

        if isinstance(declared, SchemaNode):
            self._validate_node(value, declared, path, depth + 1)
            return

        if isinstance(declared, tuple):
            if not declared:
                raise SchemaError(f"Empty type list in schema for [{path}]", path=path, kind="type")
            for option in declared:
                if self._matches_option(value, json_type, option, path, depth):
                    return
            names = ", ".join(_option_label(o) for o in declared)
            raise ValidationError(
                f"Expected one of [{names}] for [{path}], got {_describe(value)}",
                path=path,
                kind="type",
            )

        if not self._matches_option(value, json_type, declared, path, depth):
            raise ValidationError(f"Expected {declared} for [{path}]", path=path, kind="type")

    def _check_disallow(self, value: Any, json_type: JsonType, node: SchemaNode, path: str, depth: int) -> None:
        declared = node.disallow
        if declared is MISSING:
            return

        options = declared if isinstance(declared, tuple) else (declared,)
        for option in options:
            if self._matches_option(value, json_type, option, path, depth):
                raise ValidationError(
                    f"Disallowed type [{_option_label(option)}] for [{path}]",
                    path=path,
                    kind="disallow",
                )

    def _check_enum(self, value: Any, node: SchemaNode, path: str) -> None:
        choices = node.enum
        if choices is MISSING:
            return
        if not isinstance(choices, tuple):
            raise SchemaError(
                f"Invalid enum in schema for [{path}]: expected array, got {choices!r}",
                path=path,
                kind="enum",
            )
        if not any(json_equal(value, choice) for choice in choices):
            allowed = ", ".join(repr(c) for c in choices)
            raise ValidationError(
                f"Invalid value for [{path}], must be one of [{allowed}]",
                path=path,
                kind="enum",
            )

    # ---- object ------------------------------------------------------------------

    def _is_required(self, prop: Any, path: str) -> bool:
        if not isinstance(prop, SchemaNode):
            raise SchemaError(
                f"Invalid property schema for [{path}]: expected object, got {prop!r}",
                path=path,
                kind="properties",
            )
        required = prop.required
        if required is MISSING:
            return False
        if not isinstance(required, bool):
            raise SchemaError(
                f"Invalid required flag {required!r} in schema for [{path}]",
                path=path,
                kind="required",
            )
        if required and prop.type is MISSING:
            logger.debug(f"Property [{path}] is required but declares no type")
        return required

    def _pattern_properties(self, node: SchemaNode, path: str) -> List[Tuple["re.Pattern", Any]]:
        declared = node.pattern_properties
        if declared is MISSING:
            return []
        if not isinstance(declared, Mapping):
            raise SchemaError(
                f"Invalid patternProperties in schema for [{path}]: expected object",
                path=path,
                kind="patternProperties",
            )
        return [(self._regex(pattern, path, "patternProperties"), schema) for pattern, schema in declared.items()]

    def _check_object(self, value: Mapping, node: SchemaNode, path: str, depth: int) -> None:
        properties = node.properties
        if properties is MISSING:
            properties = MappingProxyType({})
        elif not isinstance(properties, Mapping):
            raise SchemaError(
                f"Invalid properties in schema for [{path}]: expected object",
                path=path,
                kind="properties",
            )

        for name, prop in properties.items():
            child_path = f"{path}.{name}"
            if name in value:
                self._validate_node(value[name], prop, child_path, depth + 1)
            elif self._is_required(prop, child_path):
                raise ValidationError(
                    f"Missing required property [{name}] for [{path}]",
                    path=child_path,
                    kind="required",
                )

        patterns = self._pattern_properties(node, path)
        restrict_extra = node.has("properties") or bool(patterns)
        additional = node.additional_properties

        for key, item in value.items():
            child_path = f"{path}.{key}"
            matched = False
            for regex, schema in patterns:
                if isinstance(key, str) and regex.search(key):
                    matched = True
                    self._validate_node(item, schema, child_path, depth + 1)
            if key in properties or matched or not restrict_extra:
                continue
            if additional is MISSING or additional is True:
                continue
            if additional is False:
                raise ValidationError(
                    f"Additional property [{key}] not allowed for [{path}]",
                    path=child_path,
                    kind="additionalProperties",
                )
            if isinstance(additional, SchemaNode):
                self._validate_node(item, additional, child_path, depth + 1)
                continue
            raise SchemaError(
                f"Invalid additionalProperties in schema for [{path}]: expected boolean or object",
                path=path,
                kind="additionalProperties",
            )

        self._check_dependencies(value, node, path, depth)

    def _check_dependencies(self, value: Mapping, node: SchemaNode, path: str, depth: int) -> None:
        dependencies = node.dependencies
        if dependencies is MISSING:
            return
        if not isinstance(dependencies, Mapping):
            raise SchemaError(
                f"Invalid dependencies in schema for [{path}]: expected object",
                path=path,
                kind="dependencies",
            )

        for name, dependency in dependencies.items():
            if name not in value:
                continue
            if isinstance(dependency, SchemaNode):
                self._validate_node(value, dependency, path, depth + 1)
                continue
            names: Iterable[Any] = (dependency,) if isinstance(dependency, str) else dependency
            if not isinstance(names, tuple) or not all(isinstance(n, str) for n in names):
                raise SchemaError(
                    f"Invalid dependency for property [{name}] in schema for [{path}]",
                    path=path,
                    kind="dependencies",
                )
            for required_name in names:
                if required_name not in value:
                    raise ValidationError(
                        f"Property [{name}] requires property [{required_name}] for [{path}]",
                        path=f"{path}.{required_name}",
                        kind="dependencies",
                    )

    # ---- number ------------------------------------------------------------------

    def _number_keyword(self, node: SchemaNode, attr: str, keyword: str, path: str) -> Optional[Any]:
        raw = getattr(node, attr)
        if raw is MISSING:
            return None
        if not is_number(raw):
            raise SchemaError(
                f"Invalid {keyword} {raw!r} in schema for [{path}]: expected number",
                path=path,
                kind=keyword,
            )
        return raw

    def _check_number(self, value: Any, node: SchemaNode, path: str) -> None:
        minimum = self._number_keyword(node, "minimum", "minimum", path)
        maximum = self._number_keyword(node, "maximum", "maximum", path)
        exclusive_minimum = node.exclusive_minimum
        exclusive_maximum = node.exclusive_maximum

        # draft-03: a boolean exclusiveMinimum/Maximum makes the paired bound strict
        if minimum is not None:
            strict = exclusive_minimum is True
            if value < minimum or (strict and value == minimum):
                raise ValidationError(
                    f"Invalid value for [{path}], minimum is [{minimum}]" + (" (exclusive)" if strict else ""),
                    path=path,
                    kind="minimum",
                )
        if maximum is not None:
            strict = exclusive_maximum is True
            if value > maximum or (strict and value == maximum):
                raise ValidationError(
                    f"Invalid value for [{path}], maximum is [{maximum}]" + (" (exclusive)" if strict else ""),
                    path=path,
                    kind="maximum",
                )

        if not isinstance(exclusive_minimum, bool):
            bound = self._number_keyword(node, "exclusive_minimum", "exclusiveMinimum", path)
            if bound is not None and value <= bound:
                raise ValidationError(
                    f"Invalid value for [{path}], must be greater than [{bound}]",
                    path=path,
                    kind="exclusiveMinimum",
                )
        if not isinstance(exclusive_maximum, bool):
            bound = self._number_keyword(node, "exclusive_maximum", "exclusiveMaximum", path)
            if bound is not None and value >= bound:
                raise ValidationError(
                    f"Invalid value for [{path}], must be less than [{bound}]",
                    path=path,
                    kind="exclusiveMaximum",
                )

        self._check_divisible_by(value, node, path)

    def _check_divisible_by(self, value: Any, node: SchemaNode, path: str) -> None:
        divisor = node.divisible_by
        if divisor is MISSING:
            return
        if not is_number(divisor) or divisor == 0:
            raise SchemaError(
                f"Invalid divisibleBy [{divisor!r}] in schema for [{path}]: expected non-zero number",
                path=path,
                kind="divisibleBy",
            )

        # str() round-trip keeps 0.3 / 0.1 exact
        try:
            remainder = Decimal(str(value)) % Decimal(str(divisor))
        except InvalidOperation:
            remainder = None
        if remainder is None or remainder != 0:
            raise ValidationError(
                f"Invalid value for [{path}], must be divisible by [{divisor}]",
                path=path,
                kind="divisibleBy",
            )

    # ---- string ------------------------------------------------------------------

    def _regex(self, pattern: Any, path: str, keyword: str) -> "re.Pattern":
        if not isinstance(pattern, str):
            raise SchemaError(f"Invalid {keyword} {pattern!r} in schema for [{path}]", path=path, kind=keyword)
        try:
            return _compile_regex(pattern)
        except re.error as e:
            raise SchemaError(
                f"Invalid {keyword} [{pattern}] in schema for [{path}]: {e}",
                path=path,
                kind=keyword,
            ) from e

    def _count_keyword(self, node: SchemaNode, attr: str, keyword: str, path: str) -> Optional[int]:
        raw = getattr(node, attr)
        if raw is MISSING:
            return None
        if classify(raw) != JsonType.INTEGER or raw < 0:
            raise SchemaError(
                f"Invalid {keyword} {raw!r} in schema for [{path}]: expected non-negative integer",
                path=path,
                kind=keyword,
            )
        return int(raw)

    def _check_string(self, value: str, node: SchemaNode, path: str) -> None:
        if node.pattern is not MISSING:
            regex = self._regex(node.pattern, path, "pattern")
            if not regex.search(value):
                raise ValidationError(f"String does not match pattern for [{path}]", path=path, kind="pattern")

        min_length = self._count_keyword(node, "min_length", "minLength", path)
        if min_length is not None and len(value) < min_length:
            raise ValidationError(
                f"String too short for [{path}], minimum length is [{min_length}]",
                path=path,
                kind="minLength",
            )

        max_length = self._count_keyword(node, "max_length", "maxLength", path)
        if max_length is not None and len(value) > max_length:
            raise ValidationError(
                f"String too long for [{path}], maximum length is [{max_length}]",
                path=path,
                kind="maxLength",
            )

    # ---- array -------------------------------------------------------------------

    def _check_array(self, value: Any, node: SchemaNode, path: str, depth: int) -> None:
        min_items = self._count_keyword(node, "min_items", "minItems", path)
        if min_items is not None and len(value) < min_items:
            raise ValidationError(
                f"Not enough array items for [{path}], minimum is [{min_items}]",
                path=path,
                kind="minItems",
            )

        max_items = self._count_keyword(node, "max_items", "maxItems", path)
        if max_items is not None and len(value) > max_items:
            raise ValidationError(
                f"Too many array items for [{path}], maximum is [{max_items}]",
                path=path,
                kind="maxItems",
            )

        unique_items = node.unique_items
        if unique_items is not MISSING:
            if not isinstance(unique_items, bool):
                raise SchemaError(
                    f"Invalid uniqueItems {unique_items!r} in schema for [{path}]: expected boolean",
                    path=path,
                    kind="uniqueItems",
                )
            if unique_items:
                for i in range(len(value)):
                    for j in range(i + 1, len(value)):
                        if json_equal(value[i], value[j]):
                            raise ValidationError(
                                f"All items in array [{path}] must be unique",
                                path=path,
                                kind="uniqueItems",
                            )

        self._check_items(value, node, path, depth)

    def _check_items(self, value: Any, node: SchemaNode, path: str, depth: int) -> None:
        items = node.items
        if items is MISSING:
            return

        if isinstance(items, SchemaNode):
            for index, item in enumerate(value):
                self._validate_node(item, items, f"{path}.{index}", depth + 1)
            return

        if not isinstance(items, tuple):
            raise SchemaError(
                f"Invalid items in schema for [{path}]: expected object or array of objects",
                path=path,
                kind="items",
            )

        # tuple typing
        for index, item in enumerate(value):
            item_path = f"{path}.{index}"
            if index < len(items):
                entry = items[index]
                if not isinstance(entry, SchemaNode):
                    raise SchemaError(
                        f"Invalid items entry [{index}] in schema for [{path}]: expected object",
                        path=item_path,
                        kind="items",
                    )
                self._validate_node(item, entry, item_path, depth + 1)
                continue

            additional = node.additional_items
            if additional is MISSING or additional is True:
                return
            if additional is False:
                raise ValidationError(
                    f"Too many array items for [{path}], additional items are not allowed",
                    path=item_path,
                    kind="additionalItems",
                )
            if not isinstance(additional, SchemaNode):
                raise SchemaError(
                    f"Invalid additionalItems in schema for [{path}]: expected boolean or object",
                    path=path,
                    kind="additionalItems",
                )
            self._validate_node(item, additional, item_path, depth + 1)

    # ---- format ------------------------------------------------------------------

    def _check_format(self, value: Any, node: SchemaNode, path: str) -> None:
        name = node.format
        if name is MISSING:
            return
        if not isinstance(name, str):
            raise SchemaError(f"Invalid format {name!r} in schema for [{path}]", path=path, kind="format")

        validator = self._formats.get(name)
        if validator is None:
            logger.debug(f"Ignoring unknown format [{name}] for [{path}]")
            return
        if not validator.applies(value):
            return
        if not validator.accepts(value):
            raise ValidationError(f"Invalid {name} format for [{path}]", path=path, kind="format")


class JsonValidator:
    """File-based convenience wrapper: one schema file, many ``validate`` calls.

    ``validate`` returns the validator itself so calls can be chained.
    """

    def __init__(self, schema_file: Union[str, Path], encoding: Optional[str] = None):
        self.store = SchemaStore.from_file(schema_file, encoding=encoding)
        self.engine = ValidationEngine(self.store)

    @classmethod
    def from_string(cls, source: str, name: Optional[str] = None) -> "JsonValidator":
        validator = cls.__new__(cls)
        validator.store = SchemaStore.load(source, name=name)
        validator.engine = ValidationEngine(validator.store)
        return validator

    def validate(self, entity: Any, entity_name: Optional[str] = None) -> "JsonValidator":
        self.engine.validate(entity, path=entity_name or ROOT_PATH)
        return self

    def check(self, entity: Any, entity_name: Optional[str] = None) -> ValidationOutcome:
        return self.engine.check(entity, path=entity_name or ROOT_PATH)
