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

"""Configuration loading for fedora_license.

Settings live in a TOML file, either a standalone ``fedora-license.toml``
or the ``[tool.fedora-license]`` table of a ``pyproject.toml``::

    # Identifiers the SPDX oracle should accept in addition to the
    # official SPDX license list.
    extra_licenses = ["LicenseRef-Fedora-Public-Domain"]

    [logging]
    verbose = false
    quiet = false
    json = false

Every key is optional.  Unknown keys and wrong types raise
:class:`~fedora_license.errors.ConfigError` so typos do not go
unnoticed.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from fedora_license.errors import ConfigError
from fedora_license.logging import get_logger

__all__ = [
    'CONFIG_FILENAME',
    'FedoraLicenseConfig',
    'LoggingConfig',
    'load_config',
]

log = get_logger('fedora_license.config')

#: Default name of the standalone configuration file.
CONFIG_FILENAME = 'fedora-license.toml'

_PYPROJECT_TABLE = 'fedora-license'

_TOP_LEVEL_KEYS = frozenset({'extra_licenses', 'logging'})
_LOGGING_KEYS = frozenset({'verbose', 'quiet', 'json'})


@dataclass(frozen=True)
class LoggingConfig:
    """The ``[logging]`` section.

    Attributes:
        verbose: Enable debug-level output.
        quiet: Only show warnings and errors.
        json: Emit one JSON object per log line.
    """

    verbose: bool = False
    quiet: bool = False
    json: bool = False


@dataclass(frozen=True)
class FedoraLicenseConfig:
    """Top-level configuration.

    Attributes:
        extra_licenses: Identifiers recognized by the SPDX oracle in
            addition to the SPDX license list.
        logging: Logging settings.
    """

    extra_licenses: tuple[str, ...] = ()
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _check_keys(section: dict[str, Any], allowed: frozenset[str], where: str) -> None:
    unknown = sorted(set(section) - allowed)
    if unknown:
        raise ConfigError(
            f"Unknown key {unknown[0]!r} in {where}",
            hint=f'Allowed keys: {", ".join(sorted(allowed))}',
        )


def _parse_extra_licenses(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ConfigError(f'extra_licenses must be a list, got {type(value).__name__}')
    for i, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(f'extra_licenses[{i}] must be a non-empty string')
    return tuple(value)


def _parse_logging(value: object) -> LoggingConfig:
    if not isinstance(value, dict):
        raise ConfigError(f'logging must be a table, got {type(value).__name__}')
    _check_keys(value, _LOGGING_KEYS, '[logging]')
    for key, flag in value.items():
        if not isinstance(flag, bool):
            raise ConfigError(f'logging.{key} must be a boolean')
    return LoggingConfig(**value)


def _parse_config(data: dict[str, Any]) -> FedoraLicenseConfig:
    """Validate a decoded TOML table and build the config."""
    _check_keys(data, _TOP_LEVEL_KEYS, 'config')
    extra = _parse_extra_licenses(data['extra_licenses']) if 'extra_licenses' in data else ()
    logging_cfg = _parse_logging(data['logging']) if 'logging' in data else LoggingConfig()
    return FedoraLicenseConfig(extra_licenses=extra, logging=logging_cfg)


def load_config(path: Path | None = None) -> FedoraLicenseConfig:
    """Load configuration from *path*.

    Args:
        path: A standalone TOML file or a ``pyproject.toml``.  ``None``
            or a missing file yields the defaults.

    Returns:
        The validated :class:`FedoraLicenseConfig`.

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid
            settings.
    """
    if path is None or not path.is_file():
        return FedoraLicenseConfig()
    try:
        with path.open('rb') as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f'{path}: invalid TOML: {exc}') from exc

    if path.name == 'pyproject.toml':
        data = data.get('tool', {}).get(_PYPROJECT_TABLE, {})
        if not isinstance(data, dict):
            raise ConfigError(f'[tool.{_PYPROJECT_TABLE}] must be a table')

    config = _parse_config(data)
    log.debug('config_loaded', path=str(path), extra_licenses=len(config.extra_licenses))
    return config
