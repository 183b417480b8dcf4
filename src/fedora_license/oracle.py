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

"""License-validity oracles.

The format classifier asks an oracle one question, and only for a bare
license string with no ``and``/``or`` keyword in it: *is this token a
recognized SPDX identifier?*  A yes means the string is treated as SPDX,
a no means legacy.  The oracle never makes a parse fail.

Built-in implementation:

- :class:`SpdxLicenseList` checks the token against the SPDX license
  list bundled with :mod:`packaging` and a set of extra identifiers
  (usually ``extra_licenses`` from the configuration file).

Any object with an ``is_recognized(token) -> bool`` method satisfies
:class:`LicenseOracle`::

    class FedoraAllowList:
        def __init__(self, ids: set[str]) -> None:
            self._ids = ids

        def is_recognized(self, token: str) -> bool:
            return token in self._ids
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from packaging.licenses import InvalidLicenseExpression, canonicalize_license_expression

__all__ = [
    'LicenseOracle',
    'SpdxLicenseList',
]

# One SPDX idstring, without the "+" suffix or any operator.
_IDSTRING_RE = re.compile(r'[A-Za-z0-9.\-]+')


@runtime_checkable
class LicenseOracle(Protocol):
    """Protocol for license-validity oracles."""

    def is_recognized(self, token: str) -> bool:
        """Return ``True`` if *token* is a recognized license identifier."""
        ...


class SpdxLicenseList:
    """Oracle backed by the SPDX license list shipped with ``packaging``.

    A token is recognized when it is a single SPDX identifier written
    exactly as the list spells it (``MIT`` yes, ``mit`` and ``GPL-2.0+``
    no), or when it is one of *extra*.

    Args:
        extra: Additional identifiers to accept verbatim.
    """

    def __init__(self, extra: Iterable[str] = ()) -> None:
        self._extra = frozenset(extra)

    @property
    def extra(self) -> frozenset[str]:
        """The additional identifiers accepted verbatim."""
        return self._extra

    def is_recognized(self, token: str) -> bool:
        """Return ``True`` if *token* is a known SPDX license identifier."""
        if token in self._extra:
            return True
        if not _IDSTRING_RE.fullmatch(token):
            return False
        try:
            canonical = canonicalize_license_expression(token)
        except InvalidLicenseExpression:
            return False
        return canonical == token
