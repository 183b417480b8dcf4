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

"""Structured logging for fedora_license.

Library modules log through :func:`get_logger`, which routes structlog
events into the standard :mod:`logging` tree under the
``fedora_license`` logger name.  Until an application configures
logging, those events follow stdlib rules: nothing is printed below
WARNING, and nothing ever goes to stdout.  An application that already
configured structlog keeps its own setup untouched.

The ``fedora-license`` command calls :func:`configure_logging`, which
renders events on stderr either for humans (colored on a TTY) or as
one JSON object per line (``--json-log``).  Stdout carries only the
parse result, so ``fedora-license --json 'MIT AND FSFAP' | jq`` works
at any verbosity.

Events emitted by the library (all at DEBUG level)::

    ┌────────────────────────────┬────────────────────────────────────┐
    │ Event                      │ Fields                             │
    ├────────────────────────────┼────────────────────────────────────┤
    │ single_license_checked     │ token, recognized                  │
    │ license_string_classified  │ input, format                      │
    │ license_string_parsed      │ input, format, licenses            │
    │ license_string_malformed   │ input, format, detail              │
    │ config_loaded              │ path, extra_licenses               │
    └────────────────────────────┴────────────────────────────────────┘
"""

from __future__ import annotations

import logging
import sys

import structlog

_ROOT_LOGGER = 'fedora_license'


def _stdlib_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _ensure_stdlib_routing() -> None:
    """Send structlog events to stdlib logging unless structlog is set up.

    structlog's own default prints every level to stdout, which a
    library must not do.
    """
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            *_stdlib_processors(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Configure structlog and stdlib logging for the command-line tool.

    May be called more than once; the last call wins.

    Args:
        verbose: Enable debug-level output.
        quiet: Only show warnings and errors.  Wins over *verbose*.
        json_log: Render events as JSON instead of console text.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=level,
        force=True,
    )

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    # Loggers stay uncached so a later call (or a test harness) can
    # swap the processor chain.
    structlog.configure(
        processors=[
            *_stdlib_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = _ROOT_LOGGER) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger that writes through stdlib logging.

    Args:
        name: Dotted logger name, normally ``fedora_license.<module>``.
    """
    _ensure_stdlib_routing()
    return structlog.stdlib.get_logger(name)


__all__ = [
    'configure_logging',
    'get_logger',
]
