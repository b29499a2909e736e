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

"""Schema loading: raw text -> immutable SchemaNode tree."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from ..config import validator_config
from ..exceptions import DocumentParseError, SchemaError, SchemaNotFoundError
from ..file_io.loader import parse_document, read_text
from .node import SchemaNode, freeze

logger = logging.getLogger(__name__)


class SchemaStore:
    """Holds one parsed schema document for the lifetime of a validator.

    Construction only checks that the text parses into a mapping. Defects in
    individual keywords are left for the engine to find when it visits them.
    """

    def __init__(self, raw: Mapping, name: str = "<string>"):
        if not isinstance(raw, Mapping):
            raise SchemaError(
                f"Schema root must be an object, got {type(raw).__name__}: {name}",
                kind="malformed",
            )
        self._name = name
        self._raw = freeze(raw)
        self._root = SchemaNode.from_raw(raw)

    @property
    def name(self) -> str:
        return self._name

    @property
    def raw(self) -> Mapping:
        return self._raw

    @property
    def root(self) -> SchemaNode:
        return self._root

    @classmethod
    def load(cls, source: Union[str, bytes], name: Optional[Union[str, Path]] = None) -> "SchemaStore":
        """Parse schema text.

        Args:
            source: Raw schema text (JSON, or YAML when ``name`` ends in .yaml/.yml)
            name: Label used in messages and to pick the parser

        Raises:
            SchemaError: If the text cannot be decoded, is empty, not well-formed
                or not an object
        """
        label = str(name) if name is not None else "<string>"
        if isinstance(source, bytes):
            try:
                source = source.decode(validator_config.encoding)
            except UnicodeDecodeError as e:
                raise SchemaError(
                    f"Unable to decode {label} as {validator_config.encoding}: {e.reason} at byte {e.start}",
                    kind="malformed",
                ) from e

        try:
            raw: Any = parse_document(source, name=name)
        except DocumentParseError as e:
            raise SchemaError(str(e), kind="malformed") from e

        store = cls(raw, name=label)
        logger.debug(f"Loaded schema {label} ({len(raw)} top-level keywords)")
        return store

    @classmethod
    def from_file(cls, schema_file: Union[str, Path], encoding: Optional[str] = None) -> "SchemaStore":
        """Read and parse a schema file.

        Raises:
            SchemaNotFoundError: If the file does not exist
            SchemaError: If the contents are not a well-formed schema object
        """
        try:
            text = read_text(
                schema_file,
                encoding=encoding or validator_config.encoding,
                not_found_error=SchemaNotFoundError,
            )
        except DocumentParseError as e:
            raise SchemaError(str(e), kind="malformed") from e
        return cls.load(text, name=schema_file)

    def __repr__(self) -> str:
        return f"SchemaStore(name={self._name!r})"
