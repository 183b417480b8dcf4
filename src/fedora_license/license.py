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

"""Fedora license string parser object.

:class:`FedoraLicense` keeps the result of the most recent
:meth:`~FedoraLicense.parse` call.  Each call starts from a clean slate:
a failed parse leaves the object without a result, never with a stale
or half-filled one.

Usage::

    from fedora_license import FedoraLicense, LicenseFormat

    obj = FedoraLicense()
    obj.parse('(GPL+ or Artistic) and Artistic 2.0 and (MIT or GPLv2)')
    assert obj.format() == LicenseFormat.LEGACY
    assert obj.licenses() == ['Artistic', 'Artistic 2.0', 'GPL+', 'GPLv2', 'MIT']

    obj.reset()
    obj.format()  # raises NotReadyError

A :class:`FedoraLicense` instance is not thread-safe.  Use one instance
per thread, or guard a shared one with a lock.
"""

from __future__ import annotations

from dataclasses import dataclass

from fedora_license._types import LicenseFormat
from fedora_license.classify import classify
from fedora_license.errors import MalformedExpressionError, NotReadyError
from fedora_license.expr import ExprNode, grammar_for, license_ids
from fedora_license.logging import get_logger
from fedora_license.oracle import LicenseOracle, SpdxLicenseList

__all__ = [
    'FedoraLicense',
    'ParseResult',
    'parse_license_string',
]

log = get_logger('fedora_license.license')


@dataclass(frozen=True)
class ParseResult:
    """Outcome of one successful parse.

    Attributes:
        input: The license string as given.
        format: The detected format.
        expression: The parsed AST.
        licenses: Distinct identifiers, sorted ascending.
    """

    input: str
    format: LicenseFormat
    expression: ExprNode
    licenses: tuple[str, ...]


def _check_license_string(value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f'license string must be str, got {type(value).__name__}')


def parse_license_string(license_string: str, oracle: LicenseOracle | None = None) -> ParseResult:
    """Classify and parse *license_string* in one step.

    Args:
        license_string: The raw ``License:`` field value.
        oracle: Validity oracle for bare single-license strings.
            Defaults to :class:`SpdxLicenseList`.

    Returns:
        The complete :class:`ParseResult`.

    Raises:
        TypeError: If *license_string* is not a string.
        MalformedExpressionError: If the string does not match the
            grammar of its detected format.
    """
    _check_license_string(license_string)
    if oracle is None:
        oracle = SpdxLicenseList()
    license_format = classify(license_string, oracle)
    log.debug('license_string_classified', input=license_string, format=license_format.name)
    try:
        expression = grammar_for(license_format).parse(license_string)
    except MalformedExpressionError as exc:
        log.debug('license_string_malformed', input=license_string, format=license_format.name, detail=exc.detail)
        raise
    licenses = tuple(license_ids(expression))
    log.debug('license_string_parsed', input=license_string, format=license_format.name, licenses=list(licenses))
    return ParseResult(
        input=license_string,
        format=license_format,
        expression=expression,
        licenses=licenses,
    )


class FedoraLicense:
    """Parser for the ``License:`` field of Fedora RPM spec files.

    Args:
        oracle: Validity oracle for bare single-license strings.
            Defaults to :class:`SpdxLicenseList`.
    """

    def __init__(self, oracle: LicenseOracle | None = None) -> None:
        self._oracle: LicenseOracle = oracle if oracle is not None else SpdxLicenseList()
        self._input: str | None = None
        self._result: ParseResult | None = None

    @property
    def oracle(self) -> LicenseOracle:
        """The validity oracle used by the format classifier."""
        return self._oracle

    @property
    def ready(self) -> bool:
        """``True`` once a parse has succeeded, until the next reset."""
        return self._result is not None

    @property
    def result(self) -> ParseResult | None:
        """The latest successful result, or ``None``."""
        return self._result

    @property
    def input(self) -> str | None:
        """The string passed to the latest :meth:`parse`, even if it failed."""
        return self._input

    def parse(self, license_string: str) -> None:
        """Parse *license_string* and replace any previous result.

        If the string matches both grammars (``MIT`` for example), the
        SPDX format wins when the oracle recognizes it.

        Raises:
            TypeError: If *license_string* is not a string.
            MalformedExpressionError: If the string is not a valid
                expression in its detected format.  The object is left
                without a result.
        """
        self.reset()
        _check_license_string(license_string)
        self._input = license_string
        self._result = parse_license_string(license_string, self._oracle)

    def format(self) -> LicenseFormat:
        """Return the format of the latest parsed string.

        Raises:
            NotReadyError: If no parse has succeeded since construction
                or the last :meth:`reset`.
        """
        return self._require_result().format

    def licenses(self) -> list[str]:
        """Return the licenses of the latest parsed string, sorted.

        Raises:
            NotReadyError: Same condition as :meth:`format`.
        """
        return list(self._require_result().licenses)

    def expression(self) -> ExprNode:
        """Return the AST of the latest parsed string.

        Raises:
            NotReadyError: Same condition as :meth:`format`.
        """
        return self._require_result().expression

    def reset(self) -> None:
        """Forget the latest input and result."""
        self._input = None
        self._result = None

    def _require_result(self) -> ParseResult:
        if self._result is None:
            raise NotReadyError()
        return self._result

    def __repr__(self) -> str:
        """Return a debug representation with the current state."""
        if self._result is None:
            return f'{type(self).__name__}(ready=False)'
        return f'{type(self).__name__}(format={self._result.format.name}, licenses={list(self._result.licenses)!r})'
