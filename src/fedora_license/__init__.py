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

r"""Parse the License field of Fedora RPM spec files.

The ``License:`` value is a boolean expression over license names, and
comes in two formats:

- **Legacy** (format 1): lowercase ``and``/``or`` with Fedora short
  names, e.g. ``GPLv3+ and (ASL 2.0 or MIT)``.
- **SPDX** (format 2): uppercase ``AND``/``OR`` with SPDX identifiers,
  e.g. ``(GPL-1.0-or-later OR Artistic-1.0-Perl) AND MIT``.

Usage::

    from fedora_license import FedoraLicense, LicenseFormat

    obj = FedoraLicense()
    obj.parse('MIT AND FSFAP')
    assert obj.format() == LicenseFormat.SPDX
    assert obj.licenses() == ['FSFAP', 'MIT']
"""

from fedora_license._types import LicenseFormat
from fedora_license.classify import classify
from fedora_license.errors import (
    ConfigError,
    FedoraLicenseError,
    MalformedExpressionError,
    NotReadyError,
)
from fedora_license.expr import (
    LEGACY_GRAMMAR,
    SPDX_GRAMMAR,
    And,
    ExprNode,
    Grammar,
    Identifier,
    Or,
    grammar_for,
    license_ids,
    parse_expression,
)
from fedora_license.license import FedoraLicense, ParseResult, parse_license_string
from fedora_license.oracle import LicenseOracle, SpdxLicenseList

__version__ = '0.1.0'

__all__ = [
    'And',
    'ConfigError',
    'ExprNode',
    'FedoraLicense',
    'FedoraLicenseError',
    'Grammar',
    'Identifier',
    'LEGACY_GRAMMAR',
    'LicenseFormat',
    'LicenseOracle',
    'MalformedExpressionError',
    'NotReadyError',
    'Or',
    'ParseResult',
    'SPDX_GRAMMAR',
    'SpdxLicenseList',
    'classify',
    'grammar_for',
    'license_ids',
    'parse_expression',
    'parse_license_string',
]
