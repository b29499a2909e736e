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

"""Raw text retrieval and document parsing for schema and data files."""

import json
import logging
from pathlib import Path
from typing import Any, Type, Union

import yaml

from ..exceptions import DocumentParseError, JsonValidatorError, SchemaNotFoundError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class JsonLikeLoader(yaml.SafeLoader):
    """SafeLoader that leaves unquoted dates and times as strings.

    JSON has no date type, so a YAML document must resolve to the same tree
    its JSON spelling would.
    """


JsonLikeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def is_yaml_source(name: Union[str, Path, None]) -> bool:
    """Return True when a source name should be parsed as YAML."""
    if name is None:
        return False
    return str(name).lower().endswith(YAML_SUFFIXES)


def read_text(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    not_found_error: Type[JsonValidatorError] = SchemaNotFoundError,
) -> str:
    """Read a text file.

    Args:
        file_path: Path of the file to read
        encoding: Text encoding of the file
        not_found_error: Exception class raised when the path does not exist

    Returns:
        File contents

    Raises:
        not_found_error: If the path does not exist or is not a file
        DocumentParseError: If the contents are not valid in ``encoding``
    """
    path = Path(file_path)

    if not path.exists():
        raise not_found_error(f"File not found: {path}")

    if not path.is_file():
        raise not_found_error(f"Path is not a file: {path}")

    logger.debug(f"Reading {path}")
    try:
        with open(path, "r", encoding=encoding) as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise DocumentParseError(f"Unable to decode {path} as {encoding}: {e.reason} at byte {e.start}") from e


def parse_document(text: str, name: Union[str, Path, None] = None) -> Any:
    """Parse JSON (or YAML, judged by ``name``) text into a generic data tree.

    Raises:
        DocumentParseError: If the text is empty or not well-formed
    """
    label = str(name) if name is not None else "<string>"

    if text is None or not text.strip():
        raise DocumentParseError(f"Empty document: {label}")

    if is_yaml_source(name):
        try:
            return yaml.load(text, Loader=JsonLikeLoader)
        except yaml.YAMLError as e:
            raise DocumentParseError(f"Invalid YAML in {label}: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentParseError(
            f"Unable to parse JSON data in {label} - syntax error? "
            f"({e.msg} at line {e.lineno} column {e.colno})"
        ) from e


def load_document(file_path: Union[str, Path], encoding: str = "utf-8") -> Any:
    """Read and parse a data document.

    Raises:
        DocumentParseError: If the file is missing or not well-formed
    """
    text = read_text(file_path, encoding=encoding, not_found_error=DocumentParseError)
    return parse_document(text, name=file_path)
