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

"""Format classification for Fedora license strings.

Decides which grammar applies before anything is parsed.  Checked in
this order:

1. ``AND`` or ``OR`` appears anywhere (case-sensitive substring): SPDX.
2. ``and`` or ``or`` appears anywhere: legacy.
3. No keyword at all, so the string is a single license name.  It is
   SPDX if the oracle recognizes it, legacy otherwise.

The substring checks are deliberately unanchored: ``ORACLE`` selects
SPDX and ``Sandbox`` selects legacy, even though the grammars later
read both as plain identifiers.
"""

from __future__ import annotations

from fedora_license._types import LicenseFormat
from fedora_license.logging import get_logger
from fedora_license.oracle import LicenseOracle

__all__ = [
    'classify',
]

log = get_logger('fedora_license.classify')


def classify(license_string: str, oracle: LicenseOracle) -> LicenseFormat:
    """Return the format of *license_string*.

    Args:
        license_string: The raw ``License:`` field value.
        oracle: Consulted only when the string has no keyword.

    Returns:
        :attr:`LicenseFormat.SPDX` or :attr:`LicenseFormat.LEGACY`.
    """
    if 'AND' in license_string or 'OR' in license_string:
        return LicenseFormat.SPDX
    if 'and' in license_string or 'or' in license_string:
        return LicenseFormat.LEGACY
    recognized = oracle.is_recognized(license_string)
    log.debug('single_license_checked', token=license_string, recognized=recognized)
    return LicenseFormat.SPDX if recognized else LicenseFormat.LEGACY
