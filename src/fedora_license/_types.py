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

"""Shared leaf-level types used across fedora_license.

This module must have **zero** imports from other ``fedora_license``
modules to avoid circular-import chains.  It is safe to import from
any module in the project.
"""

from __future__ import annotations

from enum import IntEnum

__all__ = [
    'LicenseFormat',
]


class LicenseFormat(IntEnum):
    """The two textual conventions of the Fedora ``License:`` field.

    The integer values are the historical format numbers and are what
    the command-line tool prints.
    """

    #: Old free-text style: lowercase ``and``/``or``, multi-word names
    #: such as ``ASL 2.0``.
    LEGACY = 1

    #: SPDX style: uppercase ``AND``/``OR`` between SPDX identifiers.
    SPDX = 2
