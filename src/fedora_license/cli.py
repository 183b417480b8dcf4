# Copyright 2026 Google LLC
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
#
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface: ``fedora-license``.

Parses one Fedora license string and prints its format and licenses::

    $ fedora-license '(GPL+ or Artistic) and Artistic 2.0 and (MIT or GPLv2)'
    Fedora license string: (GPL+ or Artistic) and Artistic 2.0 and (MIT or GPLv2)
    Format: 1
    Contain licenses:
    - Artistic
    - Artistic 2.0
    - GPL+
    - GPLv2
    - MIT

    $ fedora-license --json 'MIT AND FSFAP'
    {"input": "MIT AND FSFAP", "format": 2, "format_name": "SPDX", ...}

Exit codes:
    0  The string was parsed.
    1  The string is malformed.
    2  Bad command line or configuration file.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from fedora_license.config import CONFIG_FILENAME, LoggingConfig, load_config
from fedora_license.errors import ConfigError, MalformedExpressionError
from fedora_license.expr import grammar_for
from fedora_license.license import ParseResult, parse_license_string
from fedora_license.logging import configure_logging, get_logger
from fedora_license.oracle import SpdxLicenseList

__all__ = [
    'build_parser',
    'format_result',
    'main',
    'print_error',
    'result_to_json',
]

log = get_logger('fedora_license.cli')

EXIT_OK = 0
EXIT_MALFORMED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``fedora-license``."""
    parser = argparse.ArgumentParser(
        prog='fedora-license',
        description='Parse the License field of a Fedora RPM spec file.',
    )
    parser.add_argument(
        'license_string',
        help='The License field value, e.g. "MIT AND FSFAP".',
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the result as a JSON object.',
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help=f'Configuration file (default: ./{CONFIG_FILENAME} if present).',
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='Enable debug logging.',
    )
    verbosity.add_argument(
        '-q',
        '--quiet',
        action='store_true',
        help='Only log warnings and errors.',
    )
    parser.add_argument(
        '--json-log',
        action='store_true',
        help='Emit log lines as JSON.',
    )
    return parser


def format_result(result: ParseResult) -> str:
    """Format *result* the way the ``fedora-license`` tool prints it."""
    lines = [
        f'Fedora license string: {result.input}',
        f'Format: {int(result.format)}',
        'Contain licenses:',
    ]
    lines.extend(f'- {name}' for name in result.licenses)
    return '\n'.join(lines)


def result_to_json(result: ParseResult, *, indent: int | None = None) -> str:
    """Serialize *result* to JSON.

    Args:
        result: A successful parse result.
        indent: JSON indentation level, ``None`` for a single line.

    Returns:
        JSON string.
    """
    record = {
        'input': result.input,
        'format': int(result.format),
        'format_name': result.format.name,
        'expression': grammar_for(result.format).render(result.expression),
        'licenses': list(result.licenses),
    }
    return json.dumps(record, indent=indent)


def print_error(exc: MalformedExpressionError, console: Console | None = None) -> None:
    """Print a malformed-string diagnostic with a caret under the problem."""
    if console is None:
        console = Console(stderr=True)
    console.print(f'[bold red]error\\[malformed][/][bold]: {escape(exc.detail)}[/]')
    console.print(f'  [cyan]-->[/] {exc.license_format.name} format, position {exc.position}')
    console.print('   [cyan]|[/]')
    console.print(f'   [cyan]|[/] {escape(exc.expression)}')
    console.print(f'   [cyan]|[/] {" " * exc.position}[bold red]^[/]')


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``fedora-license`` and return the process exit code."""
    args = build_parser().parse_args(argv)
    err_console = Console(stderr=True)

    # Logging goes to stderr from the start; config may raise it later.
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    config_path = args.config
    if config_path is None and Path(CONFIG_FILENAME).is_file():
        config_path = Path(CONFIG_FILENAME)
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        err_console.print(f'[bold red]error\\[config][/]: {escape(str(exc))}')
        if exc.hint:
            err_console.print(f'   [cyan]=[/] [green]help[/]: {escape(exc.hint)}')
        return EXIT_USAGE

    if config.logging != LoggingConfig():
        configure_logging(
            verbose=args.verbose or config.logging.verbose,
            quiet=args.quiet or config.logging.quiet,
            json_log=args.json_log or config.logging.json,
        )

    try:
        result = parse_license_string(args.license_string, SpdxLicenseList(config.extra_licenses))
    except MalformedExpressionError as exc:
        print_error(exc, err_console)
        return EXIT_MALFORMED

    log.debug('cli_result', format=result.format.name, count=len(result.licenses))
    if args.json:
        print(result_to_json(result))
    else:
        print(format_result(result))
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
