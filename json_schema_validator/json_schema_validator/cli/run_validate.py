#!/usr/bin/env python3
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

"""CLI entry point: validate data files against a draft-03 schema file.

Exit codes:
    0  every data file is valid
    1  at least one data file is invalid, unreadable or malformed
    2  the schema file is missing or defective
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from ..config import validator_config
from ..engine.validator import ValidationEngine
from ..exceptions import SchemaError, SchemaNotFoundError
from ..schema.store import SchemaStore
from . import validate_files, ValidationReport

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_SCHEMA_ERROR = 2


def print_human(results: List[ValidationReport]) -> None:
    for result in results:
        if result.ok:
            print(f"{result.file_path}: OK")
            continue
        print(f"{result.file_path}:")
        for error in result.schema_errors:
            path_info = f" [{error['path']}]" if 'path' in error else ""
            print(f"  SCHEMA ERROR{path_info}: {error['message']}")
        for error in result.errors:
            path_info = f" [{error['path']}]" if 'path' in error else ""
            print(f"  ERROR{path_info}: {error['message']}")


def print_json(schema_file: str, results: List[ValidationReport]) -> None:
    output = {
        'schema': schema_file,
        'files': len(results),
        'invalid': sum(1 for r in results if r.errors),
        'schema_errors': sum(len(r.schema_errors) for r in results),
        'results': [r.to_dict() for r in results],
    }
    print(json.dumps(output, indent=2))


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the validator CLI."""
    parser = argparse.ArgumentParser(
        prog='json-schema-validate',
        description='Validate JSON/YAML data files against a JSON Schema (draft-03) file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('schema', help='Schema file (.json, .yaml or .yml)')
    parser.add_argument('data', nargs='+', help='Data files to validate')
    parser.add_argument(
        '--format',
        choices=['human', 'json'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: JSON_SCHEMA_VALIDATOR_LOG_LEVEL or WARNING)',
    )

    args = parser.parse_args(argv)

    if args.log_level:
        validator_config.log_level = args.log_level
    logger = validator_config.set_logging()

    try:
        store = SchemaStore.from_file(args.schema)
    except SchemaNotFoundError as e:
        logger.error(f"Schema not found: {e}")
        sys.exit(EXIT_SCHEMA_ERROR)
    except SchemaError as e:
        logger.error(f"Invalid schema {args.schema}: {e}")
        sys.exit(EXIT_SCHEMA_ERROR)

    engine = ValidationEngine(store)
    results = validate_files(engine, [Path(p) for p in args.data])

    if args.format == 'json':
        print_json(args.schema, results)
    else:
        print_human(results)

    if any(r.schema_errors for r in results):
        sys.exit(EXIT_SCHEMA_ERROR)
    if any(r.errors for r in results):
        sys.exit(EXIT_INVALID)
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    main()
