#!/usr/bin/env python3
# Copyright 2026 TIER IV, inc.
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

"""CLI entry point for validating JSON/YAML documents against a schema."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from ..config import ValidatorConfig, validator_config
from ..exceptions import DocumentLoadError
from ..loader import DocumentLoader
from ..validator import JsonSchemaValidator
from . import check_schema_file, normalize_files, validate_files
from .report import ValidationReport

logger = logging.getLogger(__name__)


def print_reports(reports: List[ValidationReport], output_format: str) -> None:
    """Print reports in the requested format."""
    if output_format == 'json':
        output = {
            'files': len(reports),
            'errors': sum(len(r.errors) for r in reports),
            'results': [r.to_dict() for r in reports],
        }
        print(json.dumps(output, indent=2))
    elif output_format == 'github-actions':
        for report in reports:
            for error in report.errors:
                location = f" at {error['value_path']}" if 'value_path' in error else ""
                print(f"::error file={report.file_path}::{error['message']}{location}")
    else:  # human-readable
        for report in reports:
            if report.errors:
                print(f"\n{report.file_path}:")
                for error in report.errors:
                    print(f"  ERROR: {_describe(error)}")


def _describe(entry: dict) -> str:
    if 'value_path' in entry:
        return (
            f"invalid data for value '{entry['value_path']}', "
            f"validated against '{entry.get('schema_path', 'schema')}': {entry['message']}"
        )
    if entry.get('pointer'):
        return f"{entry['message']} (pointer={entry['pointer']})"
    return entry['message']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='schema-guard',
        description='Validate or normalize JSON/YAML documents against a schema',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='+',
        help='Data files to validate',
    )
    parser.add_argument(
        '--schema',
        required=True,
        help='Schema file (JSON or YAML)',
    )
    parser.add_argument(
        '--check-schema',
        action='store_true',
        help='Check the schema document against the dialect before validating',
    )
    parser.add_argument(
        '--normalize',
        action='store_true',
        help='Print normalized documents as JSON instead of validating',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: SCHEMA_GUARD_LOG_LEVEL or INFO)',
    )
    return parser


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the validator CLI."""
    args = build_parser().parse_args(argv)

    config = validator_config
    if args.log_level:
        config = ValidatorConfig(
            regex_cache_size=config.regex_cache_size,
            log_level=args.log_level,
            print_level=config.print_level,
            cache_enabled=config.cache_enabled,
        )
    config.set_logging()

    loader = DocumentLoader(cache_enabled=config.cache_enabled)
    validator = JsonSchemaValidator(config=config)

    schema_path = Path(args.schema)
    try:
        schema = loader.load(schema_path)
    except DocumentLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.check_schema:
        schema_report = check_schema_file(schema_path, schema)
        if not schema_report.ok:
            print_reports([schema_report], args.format)
            sys.exit(1)
        logger.debug(f"Schema document is well-formed: {schema_path}")

    if not isinstance(schema, dict):
        print(f"Error: Schema document must be a mapping: {schema_path}", file=sys.stderr)
        sys.exit(1)

    file_paths = [Path(p) for p in args.paths]

    if args.normalize:
        try:
            normalized = normalize_files(schema, file_paths, validator=validator, loader=loader)
        except DocumentLoadError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        output = normalized[str(file_paths[0])] if len(file_paths) == 1 else normalized
        # YAML timestamps and dates have no JSON form; print them as text.
        print(json.dumps(output, indent=2, ensure_ascii=False, default=str))
        sys.exit(0)

    reports = validate_files(schema, file_paths, validator=validator, loader=loader)
    print_reports(reports, args.format)

    # Exit with error code if any errors found
    total_errors = sum(len(r.errors) for r in reports)
    if total_errors > 0:
        sys.exit(1)
    if args.format == 'human':
        print("Validation succeeded with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
