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


"""Tests for conch.config."""

from __future__ import annotations

from pathlib import Path

import pytest
from conch.config import CONFIG_FILENAME, Config, default_config, discover_config, load_config, parse_config
from conch.errors import E, ConchError
from conch.policy import Policy

_FULL = """\
version = 1

[policy.type]
types = ["feat", "fix", "Docs"]
minor = ["feat"]
patch = ["fix"]

[policy.scope]
required = true
scopes = ["api", "cli"]

[policy.description]
min_length = 5
max_length = 72

[policy.footer]
required_tokens = ["Signed-off-by"]
tokens = ["Signed-off-by", "Refs"]

[exclude]
prefixes = ["Merge pull request", "Revert"]
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / CONFIG_FILENAME
    path.write_text(text, encoding='utf-8')
    return path


class TestDefaultConfig:
    """Tests for default_config()."""

    def test_defaults(self) -> None:
        """feat is minor, fix is patch, descriptions need one character."""
        cfg = default_config()
        assert cfg.version == 1
        assert list(cfg.policy.minor or []) == ['feat']
        assert list(cfg.policy.patch or []) == ['fix']
        assert cfg.policy.min_length == 1
        assert cfg.policy.max_length == 0
        assert cfg.policy.types is None
        assert cfg.policy.scopes is None
        assert not cfg.policy.scope_required
        assert cfg.policy.required_footers is None
        assert cfg.policy.footer_tokens is None
        assert cfg.exclude_prefixes is None
        assert cfg.config_path is None

    def test_load_none(self) -> None:
        """load_config(None) returns the defaults."""
        assert load_config(None) == default_config()


class TestParseConfig:
    """Tests for parse_config()."""

    def test_full(self) -> None:
        """Every key is decoded."""
        cfg = parse_config(_FULL)
        p = cfg.policy
        assert list(p.types or []) == ['feat', 'fix', 'Docs']
        assert 'docs' in (p.types or [])
        assert p.scope_required is True
        assert list(p.scopes or []) == ['api', 'cli']
        assert (p.min_length, p.max_length) == (5, 72)
        assert list(p.required_footers or []) == ['Signed-off-by']
        assert list(p.footer_tokens or []) == ['Signed-off-by', 'Refs']
        assert list(cfg.exclude_prefixes or []) == ['Merge pull request', 'Revert']

    def test_version_only(self) -> None:
        """Omitted sections turn every check off."""
        cfg = parse_config('version = 1\n')
        assert cfg == Config(policy=Policy())

    def test_empty_list_is_unconfigured(self) -> None:
        """An empty list means accept anything."""
        cfg = parse_config('version = 1\n[policy.type]\ntypes = []\n')
        assert cfg.policy.types is None

    @pytest.mark.parametrize('text', ['', 'version = 2\n', 'version = 0\n'])
    def test_unsupported_version(self, text: str) -> None:
        """Missing or other versions are rejected."""
        with pytest.raises(ConchError) as exc_info:
            parse_config(text)
        assert exc_info.value.code == E.CONFIG_UNSUPPORTED_VERSION

    def test_unknown_top_level_key(self) -> None:
        """Unknown keys are rejected with a suggestion."""
        with pytest.raises(ConchError) as exc_info:
            parse_config('version = 1\nexlude = 3\n')
        assert exc_info.value.code == E.CONFIG_INVALID_KEY
        assert "'exlude'" in exc_info.value.message
        assert exc_info.value.hint == "Did you mean 'exclude'?"

    def test_unknown_nested_key(self) -> None:
        """Typos inside tables are caught too."""
        with pytest.raises(ConchError) as exc_info:
            parse_config('version = 1\n[policy.type]\ntpyes = ["feat"]\n')
        assert exc_info.value.code == E.CONFIG_INVALID_KEY
        assert '[policy.type]' in exc_info.value.message
        assert exc_info.value.hint == "Did you mean 'types'?"

    def test_unknown_key_without_suggestion(self) -> None:
        """Far-off keys list the valid ones instead."""
        with pytest.raises(ConchError) as exc_info:
            parse_config('version = 1\n[policy.scope]\nzzz = 1\n')
        assert exc_info.value.hint == 'Valid keys: required, scopes.'

    @pytest.mark.parametrize(
        'text',
        [
            'version = "1"\n',
            'version = true\n',
            'version = 1\npolicy = 3\n',
            'version = 1\n[policy.type]\ntypes = "feat"\n',
            'version = 1\n[policy.type]\ntypes = [1, 2]\n',
            'version = 1\n[policy.scope]\nrequired = "yes"\n',
            'version = 1\n[policy.description]\nmin_length = 1.5\n',
            'version = 1\n[policy.description]\nmax_length = false\n',
        ],
    )
    def test_invalid_values(self, text: str) -> None:
        """Wrong value types are rejected."""
        with pytest.raises(ConchError) as exc_info:
            parse_config(text)
        assert exc_info.value.code == E.CONFIG_INVALID_VALUE

    def test_toml_syntax_error(self) -> None:
        """Malformed TOML is a parse error."""
        with pytest.raises(ConchError) as exc_info:
            parse_config('version = = 1\n')
        assert exc_info.value.code == E.CONFIG_PARSE_ERROR


class TestDiscoverAndLoad:
    """Tests for discover_config() and load_config() on disk."""

    def test_discover_found(self, tmp_path: Path) -> None:
        """The file in the directory is returned."""
        path = _write(tmp_path, 'version = 1\n')
        assert discover_config(tmp_path) == path

    def test_discover_missing(self, tmp_path: Path) -> None:
        """A directory without the file gives None."""
        assert discover_config(tmp_path) is None

    def test_discover_not_a_directory(self, tmp_path: Path) -> None:
        """A file or missing path is a location error."""
        path = _write(tmp_path, 'version = 1\n')
        with pytest.raises(ConchError) as exc_info:
            discover_config(path)
        assert exc_info.value.code == E.CONFIG_LOCATION
        with pytest.raises(ConchError):
            discover_config(tmp_path / 'missing')

    def test_load(self, tmp_path: Path) -> None:
        """Loaded configs remember their path."""
        path = _write(tmp_path, _FULL)
        cfg = load_config(path)
        assert cfg.config_path == path
        assert cfg.policy.max_length == 72

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """An unreadable file is an error."""
        with pytest.raises(ConchError) as exc_info:
            load_config(tmp_path / 'nope.toml')
        assert exc_info.value.code == E.CONFIG_NOT_FOUND

    def test_shipped_default_file(self) -> None:
        """conch.default.toml decodes to the built-in defaults."""
        text = (Path(__file__).parent.parent / 'conch.default.toml').read_text(encoding='utf-8')
        assert parse_config(text) == default_config()
