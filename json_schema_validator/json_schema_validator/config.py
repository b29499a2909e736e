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

"""Configuration management for the JSON schema validator."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_split_stream_logging


@dataclass
class ValidatorConfig:
    """Configuration class for schema loading and validation."""
    log_level: str = "WARNING"
    print_level: str = "ERROR"
    encoding: str = "utf-8"
    # nesting guard; a schema deeper than this is treated as defective
    max_depth: int = 256

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('JSON_SCHEMA_VALIDATOR_LOG_LEVEL', 'WARNING'),
            print_level=os.getenv('JSON_SCHEMA_VALIDATOR_PRINT_LEVEL', 'ERROR'),
            encoding=os.getenv('JSON_SCHEMA_VALIDATOR_ENCODING', 'utf-8'),
            max_depth=int(os.getenv('JSON_SCHEMA_VALIDATOR_MAX_DEPTH', '256')),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
            logger_name='json_schema_validator',
        )


# Global configuration instance
validator_config = ValidatorConfig.from_env()
