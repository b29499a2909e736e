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

"""Command line driver for validating data files against a schema file."""

import logging
from pathlib import Path
from typing import List

from ..config import validator_config
from ..engine.validator import ValidationEngine
from ..exceptions import DocumentParseError, SchemaError, ValidationError
from ..file_io.loader import load_document
from .report import ValidationReport

__all__ = ['validate_files', 'ValidationReport']

logger = logging.getLogger(__name__)


def validate_files(engine: ValidationEngine, file_paths: List[Path]) -> List[ValidationReport]:
    """Validate a list of data files against one loaded schema.

    Args:
        engine: Engine holding the loaded schema
        file_paths: List of data file paths

    Returns:
        List of ValidationReport objects, one per file
    """
    results = []

    for file_path in file_paths:
        result = ValidationReport(file_path)

        try:
            data = load_document(file_path, encoding=validator_config.encoding)
            engine.validate(data)
        except DocumentParseError as e:
            result.add_error(str(e), kind='document')
        except ValidationError as e:
            result.add_error(e.message, path=e.path, kind=e.kind)
        except SchemaError as e:
            result.add_schema_error(e.message, path=e.path, kind=e.kind)

        logger.debug(f"Validated {file_path}: {'OK' if result.ok else 'FAILED'}")
        results.append(result)

    return results
