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

"""Configuration reader for conch.

Reads ``conch.toml`` from the repository root and returns a validated
:class:`Config`. Repositories without a config file get
:func:`default_config`.

Validation Pipeline::

    conch.toml
    ┌────────────────────┐
    │ [policy.type]      │
    │ tpyes = ["feat"]   │  ← typo!
    └────────┬───────────┘
             │
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 1. Unknown key   │────→│ CONCH-CONFIG-INVALID-KEY:    │
    │    detection     │     │ hint: "Did you mean          │
    └────────┬─────────┘     │       'types'?"              │
             │               └──────────────────────────────┘
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 2. Type check    │────→│ CONCH-CONFIG-INVALID-VALUE:  │
    │    each value    │     │ 'min_length' must be int     │
    └────────┬─────────┘     └──────────────────────────────┘
             │
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 3. version == 1  │────→│ CONCH-CONFIG-UNSUPPORTED-    │
    └────────┬─────────┘     │ VERSION                      │
             │               └──────────────────────────────┘
             ▼
    ┌──────────────────┐
    │ Config()         │  ← frozen dataclass, ready to use
    └──────────────────┘

Supported keys in ``conch.toml``::

    version = 1

    [policy.type]
    types = []              # allowed types; empty accepts anything
    minor = ["feat"]        # types that are at least a minor change
    patch = ["fix"]         # types that are at least a patch

    [policy.scope]
    required = false
    scopes = []             # allowed scopes; empty accepts anything

    [policy.description]
    min_length = 1
    max_length = 0          # 0 disables the check

    [policy.footer]
    required_tokens = []    # e.g. ["Refs"]
    tokens = []             # allowed tokens; empty accepts anything

    [exclude]
    prefixes = []           # e.g. ["Merge pull request", "Revert"]

An empty list means "not configured". Sections that are left out decode
to their zero values, so a file containing only ``version = 1`` turns
every check off.

Usage::

    from conch.config import discover_config, load_config

    cfg = load_config(discover_config(Path('.')))
    print(cfg.policy.minor)
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from conch.errors import E, ConchError
from conch.logging import get_logger
from conch.policy import Policy
from conch.utils.caseset import CaseInsensitiveSet

logger = get_logger(__name__)

# The config file name at the repository root.
CONFIG_FILENAME = 'conch.toml'

SUPPORTED_VERSION = 1

# Recognized keys per table; the empty string is the top level.
VALID_KEYS: dict[str, frozenset[str]] = {
    '': frozenset({'version', 'policy', 'exclude'}),
    'policy': frozenset({'type', 'scope', 'description', 'footer'}),
    'policy.type': frozenset({'types', 'minor', 'patch'}),
    'policy.scope': frozenset({'required', 'scopes'}),
    'policy.description': frozenset({'min_length', 'max_length'}),
    'policy.footer': frozenset({'required_tokens', 'tokens'}),
    'exclude': frozenset({'prefixes'}),
}

_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    'version': int,
    'policy': dict,
    'exclude': dict,
    'policy.type': dict,
    'policy.scope': dict,
    'policy.description': dict,
    'policy.footer': dict,
    'policy.type.types': list,
    'policy.type.minor': list,
    'policy.type.patch': list,
    'policy.scope.required': bool,
    'policy.scope.scopes': list,
    'policy.description.min_length': int,
    'policy.description.max_length': int,
    'policy.footer.required_tokens': list,
    'policy.footer.tokens': list,
    'exclude.prefixes': list,
}


@dataclass(frozen=True)
class Config:
    """Complete conch configuration.

    Attributes:
        version: Configuration format version (always 1).
        policy: The authoring policy.
        exclude_prefixes: Messages whose lowercase text starts with one of
            these prefixes are skipped entirely, or ``None``.
        config_path: File the config was read from, or ``None`` for defaults.
    """

    version: int = SUPPORTED_VERSION
    policy: Policy = field(default_factory=Policy)
    exclude_prefixes: CaseInsensitiveSet | None = None
    config_path: Path | None = None


def default_config() -> Config:
    """Return the configuration used when a repository has no ``conch.toml``."""
    return Config(
        policy=Policy(
            minor=CaseInsensitiveSet(['feat']),
            patch=CaseInsensitiveSet(['fix']),
            min_length=1,
        ),
    )


def _context(path: str) -> str:
    return f'[{path}]' if path else 'conch.toml'


def _check_keys(path: str, raw: dict[str, Any]) -> None:  # noqa: ANN401
    """Raise on keys that are not recognized at this level."""
    valid = VALID_KEYS[path]
    for key in raw:
        if key in valid:
            continue
        suggestion = difflib.get_close_matches(key, valid, n=1, cutoff=0.6)
        hint = f"Did you mean '{suggestion[0]}'?" if suggestion else f'Valid keys: {", ".join(sorted(valid))}.'
        raise ConchError(
            code=E.CONFIG_INVALID_KEY,
            message=f"Unknown key '{key}' in {_context(path)}",
            hint=hint,
        )


def _check_type(dotted: str, value: Any) -> None:  # noqa: ANN401
    """Raise if a value has the wrong type."""
    expected = _TYPE_MAP[dotted]
    # bool is a subclass of int; reject it where a number is expected.
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        type_name = expected.__name__ if isinstance(expected, type) else str(expected)
        raise ConchError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{dotted}' must be {type_name}, got {type(value).__name__}",
            hint=f'Check the value of {dotted} in conch.toml.',
        )


def _table(parent: str, raw: dict[str, Any], key: str) -> dict[str, Any]:  # noqa: ANN401
    """Return a validated sub-table, or an empty dict when absent."""
    dotted = f'{parent}.{key}' if parent else key
    if key not in raw:
        return {}
    value = raw[key]
    _check_type(dotted, value)
    table = dict(value)
    _check_keys(dotted, table)
    return table


def _string_set(parent: str, raw: dict[str, Any], key: str) -> CaseInsensitiveSet | None:  # noqa: ANN401
    """Decode a list of strings; empty or missing lists are ``None``."""
    dotted = f'{parent}.{key}'
    if key not in raw:
        return None
    items = raw[key]
    _check_type(dotted, items)
    for item in items:
        if not isinstance(item, str):
            raise ConchError(
                code=E.CONFIG_INVALID_VALUE,
                message=f"'{dotted}' items must be strings, got {type(item).__name__}: {item!r}",
            )
    return CaseInsensitiveSet(str(item) for item in items) if items else None


def _scalar(parent: str, raw: dict[str, Any], key: str, default: Any) -> Any:  # noqa: ANN401
    dotted = f'{parent}.{key}' if parent else key
    if key not in raw:
        return default
    value = raw[key]
    _check_type(dotted, value)
    return value.unwrap() if hasattr(value, 'unwrap') else value


def parse_config(text: str, *, config_path: Path | None = None) -> Config:
    """Decode and validate TOML text.

    Raises:
        ConchError: On TOML syntax errors, unknown keys, wrong value types
            or an unsupported ``version``.
    """
    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise ConchError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to parse {config_path or CONFIG_FILENAME}: {exc}',
        ) from exc

    raw: dict[str, Any] = doc.unwrap()  # noqa: ANN401
    _check_keys('', raw)

    version = _scalar('', raw, 'version', 0)
    if version != SUPPORTED_VERSION:
        raise ConchError(
            code=E.CONFIG_UNSUPPORTED_VERSION,
            message=f'only version {SUPPORTED_VERSION} is supported, got {version}',
            hint=f'Set "version = {SUPPORTED_VERSION}" at the top of {CONFIG_FILENAME}.',
        )

    policy_raw = _table('', raw, 'policy')
    type_raw = _table('policy', policy_raw, 'type')
    scope_raw = _table('policy', policy_raw, 'scope')
    desc_raw = _table('policy', policy_raw, 'description')
    footer_raw = _table('policy', policy_raw, 'footer')
    exclude_raw = _table('', raw, 'exclude')

    policy = Policy(
        types=_string_set('policy.type', type_raw, 'types'),
        minor=_string_set('policy.type', type_raw, 'minor'),
        patch=_string_set('policy.type', type_raw, 'patch'),
        scope_required=_scalar('policy.scope', scope_raw, 'required', False),
        scopes=_string_set('policy.scope', scope_raw, 'scopes'),
        min_length=_scalar('policy.description', desc_raw, 'min_length', 0),
        max_length=_scalar('policy.description', desc_raw, 'max_length', 0),
        required_footers=_string_set('policy.footer', footer_raw, 'required_tokens'),
        footer_tokens=_string_set('policy.footer', footer_raw, 'tokens'),
    )
    return Config(
        version=version,
        policy=policy,
        exclude_prefixes=_string_set('exclude', exclude_raw, 'prefixes'),
        config_path=config_path,
    )


def discover_config(directory: Path) -> Path | None:
    """Look for ``conch.toml`` in ``directory``.

    Returns:
        The config file path, or ``None`` when the directory has none.

    Raises:
        ConchError: If ``directory`` does not exist or is not a directory.
    """
    if not directory.is_dir():
        raise ConchError(
            code=E.CONFIG_LOCATION,
            message=f'{directory} is not a directory',
            hint='Pass the repository root with --repo.',
        )
    path = directory / CONFIG_FILENAME
    if path.is_file():
        logger.debug('config_discovered', path=str(path))
        return path
    return None


def load_config(path: Path | None) -> Config:
    """Load the config file at ``path``, or the defaults when ``path`` is ``None``.

    Raises:
        ConchError: If the file cannot be read or is invalid.
    """
    if path is None:
        logger.debug('config_default')
        return default_config()

    try:
        text = path.read_text(encoding='utf-8')
    except OSError as exc:
        raise ConchError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Failed to read {path}: {exc}',
        ) from exc

    return parse_config(text, config_path=path)


__all__ = [
    'CONFIG_FILENAME',
    'SUPPORTED_VERSION',
    'VALID_KEYS',
    'Config',
    'default_config',
    'discover_config',
    'load_config',
    'parse_config',
]
