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


"""Tests for conch.logging."""

from __future__ import annotations

import json
import logging

import pytest
from conch.logging import configure_logging, get_logger


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_default_level_is_info(self) -> None:
        """Default level is INFO."""
        configure_logging()
        assert logging.root.level == logging.INFO

    def test_verbose_sets_debug(self) -> None:
        """Verbose enables debug events."""
        configure_logging(verbose=True)
        assert logging.root.level == logging.DEBUG

    def test_quiet_wins_over_verbose(self) -> None:
        """Quiet takes precedence when both flags are given."""
        configure_logging(verbose=True, quiet=True)
        assert logging.root.level == logging.WARNING

    def test_reconfigure(self) -> None:
        """A second call replaces the level."""
        configure_logging(quiet=True)
        configure_logging(verbose=True)
        assert logging.root.level == logging.DEBUG


class TestOutput:
    """Log records go to stderr, never stdout."""

    def test_json_lines_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON mode writes one JSON object per event."""
        configure_logging(json_log=True)
        get_logger('conch.test').warning('commit_rejected', commit='abc1234')
        captured = capsys.readouterr()
        assert captured.out == ''
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record['event'] == 'commit_rejected'
        assert record['commit'] == 'abc1234'
        assert record['level'] == 'warning'

    def test_debug_hidden_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Debug events are filtered at the default level."""
        configure_logging(json_log=True)
        get_logger('conch.test').debug('commit_parsed', commit='abc1234')
        assert 'commit_parsed' not in capsys.readouterr().err


class TestGetLogger:
    """Tests for get_logger()."""

    def test_default_name(self) -> None:
        """The default logger can emit events."""
        configure_logging(quiet=True)
        log = get_logger()
        log.info('hidden', key='value')
        log.warning('shown')
