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

"""Custom exceptions for the JSON schema validator."""

from typing import Optional


class JsonValidatorError(Exception):
    """Base exception for validator related errors."""
    pass


class SchemaNotFoundError(JsonValidatorError):
    """Exception raised when a schema source cannot be located."""
    pass


class DocumentParseError(JsonValidatorError):
    """Exception raised when a data document is not well-formed."""
    pass


class _PathError(JsonValidatorError):
    """Error bound to a dotted value path and a machine-readable kind."""

    def __init__(self, message: str, path: Optional[str] = None, kind: str = "generic"):
        super().__init__(message)
        self.message = message
        self.path = path
        self.kind = kind


class SchemaError(_PathError):
    """Exception raised when the schema itself is defective."""
    pass


class ValidationError(_PathError):
    """Exception raised when a value does not conform to the schema."""
    pass
