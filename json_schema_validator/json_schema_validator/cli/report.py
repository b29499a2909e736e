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

"""Result reporting for the validator CLI."""

from pathlib import Path
from typing import List, Dict, Any, Optional


class ValidationReport:
    """Container for the validation result of a single data file."""

    def __init__(self, file_path: Path):
        """Initialize validation report.

        Args:
            file_path: Path to the data file being validated
        """
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []
        self.schema_errors: List[Dict[str, Any]] = []

    @property
    def ok(self) -> bool:
        return not self.errors and not self.schema_errors

    @staticmethod
    def _entry(message: str, path: Optional[str], kind: Optional[str]) -> Dict[str, Any]:
        entry = {'message': message}
        if path is not None:
            entry['path'] = path
        if kind is not None:
            entry['kind'] = kind
        return entry

    def add_error(self, message: str, path: Optional[str] = None, kind: Optional[str] = None):
        """Add a data error (value does not conform, or document unreadable).

        Args:
            message: Error message
            path: Optional dotted path of the offending value
            kind: Optional name of the failed rule
        """
        self.errors.append(self._entry(message, path, kind))

    def add_schema_error(self, message: str, path: Optional[str] = None, kind: Optional[str] = None):
        """Add a schema defect found while validating this file."""
        self.schema_errors.append(self._entry(message, path, kind))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'valid': self.ok,
            'errors': self.errors,
            'schema_errors': self.schema_errors,
        }
