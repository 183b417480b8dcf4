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

"""Exception hierarchy for fedora_license.

Every error raised on purpose by this package derives from
:class:`FedoraLicenseError`, so callers can catch the whole family
with a single ``except`` clause.
"""

from __future__ import annotations

from fedora_license._types import LicenseFormat

__all__ = [
    'ConfigError',
    'FedoraLicenseError',
    'MalformedExpressionError',
    'NotReadyError',
]


class FedoraLicenseError(Exception):
    """Base class for fedora_license errors.

    Attributes:
        hint: Optional suggestion for how to fix the problem.
    """

    def __init__(self, message: str, *, hint: str = '') -> None:
        """Initialize with a message and an optional hint."""
        self.hint = hint
        super().__init__(message)


class NotReadyError(FedoraLicenseError):
    """Raised when a result is queried before a successful parse."""

    def __init__(self) -> None:
        """Initialize with the fixed not-ready message."""
        super().__init__(
            'No Fedora license string processed.',
            hint='Call parse() with a license string first.',
        )


class MalformedExpressionError(FedoraLicenseError, ValueError):
    """Raised when a license string does not match the selected grammar.

    Attributes:
        expression: The original license string.
        position: Character offset where the error was detected.
        detail: Human-readable description of the problem.
        license_format: The format whose grammar was attempted.
    """

    def __init__(
        self,
        expression: str,
        position: int,
        detail: str,
        license_format: LicenseFormat,
    ) -> None:
        """Initialize with the input, error position, detail and format."""
        self.expression = expression
        self.position = position
        self.detail = detail
        self.license_format = license_format
        marker = ' ' * position + '^'
        super().__init__(
            f'Malformed {license_format.name} license string at position {position}: {detail}\n'
            f'  {expression}\n'
            f'  {marker}',
        )


class ConfigError(FedoraLicenseError):
    """Raised when a configuration file or value is invalid."""
