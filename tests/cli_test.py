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


"""Tests for the conch command line.

History is served by patching GitCLIBackend.log, so no git repository
is needed.
"""

from __future__ import annotations

import io
from collections.abc import Sequence
from pathlib import Path

import pytest
from conch.backends.git import GitCLIBackend
from conch.cli import build_parser, main
from conch.source import RawCommit

_HISTORY = [
    RawCommit(id='1' * 40, short_id='1111111', message='feat(api): add pagination\n'),
    RawCommit(id='2' * 40, short_id='2222222', message='fix(cli): handle empty input\n'),
    RawCommit(id='3' * 40, short_id='3333333', message='docs: explain flags\n'),
    RawCommit(id='4' * 40, short_id='4444444', message='refactor!: drop legacy api\n'),
]


@pytest.fixture()
def history(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    """Serve a fixed history and record the requested revisions."""
    calls: list[list[str]] = []
    records = list(_HISTORY)

    def fake_log(self: GitCLIBackend, revisions: Sequence[str]) -> list[RawCommit]:
        calls.append(list(revisions))
        return records

    monkeypatch.setattr(GitCLIBackend, 'log', fake_log)
    return calls


@pytest.fixture()
def repo(tmp_path: Path) -> Path:
    """An empty repository directory without conch.toml."""
    return tmp_path


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int, str, str]:
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


class TestParser:
    """Tests for build_parser()."""

    def test_defaults(self) -> None:
        """No flags selects nothing."""
        args = build_parser().parse_args(['main..HEAD'])
        assert args.revisions == ['main..HEAD']
        assert args.repo == '.'
        assert not (args.list or args.count or args.impact)
        assert args.format is None

    def test_short_flags(self) -> None:
        """Short options map to the long ones."""
        args = build_parser().parse_args(['-BMPU', '-l', '-n', '-i', '-b', '1.0.0', '-t', 'feat', 'x'])
        assert args.breaking and args.minor and args.patch and args.uncategorized
        assert args.bump_version == '1.0.0'
        assert args.types == 'feat'

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--version prints the version and exits 0."""
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])
        assert exc_info.value.code == 0
        assert 'conch' in capsys.readouterr().out


class TestOutputs:
    """Output flags over a valid history."""

    def test_validate_only(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """Without output flags nothing is printed."""
        code, out, _ = _run(capsys, '-C', str(repo), 'main..HEAD')
        assert code == 0
        assert out == ''
        assert history == [['main..HEAD']]

    def test_list(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """--list prints short id and summary."""
        code, out, _ = _run(capsys, '-C', str(repo), '-l', 'main..HEAD')
        assert code == 0
        assert out.splitlines() == [
            '1111111 feat(api): add pagination',
            '2222222 fix(cli): handle empty input',
            '3333333 docs: explain flags',
            '4444444 refactor!: drop legacy api',
        ]

    def test_format(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """--format applies the template to each commit."""
        code, out, _ = _run(capsys, '-C', str(repo), '-f', '{type}\\t{impact}', 'main..HEAD')
        assert code == 0
        assert out.splitlines() == ['feat\tminor', 'fix\tpatch', 'docs\tuncategorized', 'refactor\tbreaking']

    def test_count_impact_bump(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """Outputs print in a fixed order."""
        code, out, _ = _run(capsys, '-C', str(repo), '-n', '-i', '-b', '1.4.2', 'main..HEAD')
        assert code == 0
        assert out.splitlines() == ['4', 'breaking', '2.0.0']


class TestFilters:
    """Filter flags."""

    def test_types(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """--types keeps matching types, ignoring case."""
        _, out, _ = _run(capsys, '-C', str(repo), '-t', 'FEAT,docs', '-n', 'main..HEAD')
        assert out.strip() == '2'

    def test_scopes(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """--scopes keeps matching scopes."""
        _, out, _ = _run(capsys, '-C', str(repo), '-s', 'cli', '-l', 'main..HEAD')
        assert out.splitlines() == ['2222222 fix(cli): handle empty input']

    def test_selections_are_or(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """Impact selections combine with or."""
        _, out, _ = _run(capsys, '-C', str(repo), '-M', '-P', '-f', '{short_id}', 'main..HEAD')
        assert out.splitlines() == ['1111111', '2222222']

    def test_filters_are_and(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """Types and impact selections combine with and."""
        _, out, _ = _run(capsys, '-C', str(repo), '-t', 'feat,fix', '-P', '-n', 'main..HEAD')
        assert out.strip() == '1'

    def test_filtered_impact(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """The bump uses only the selected commits."""
        _, out, _ = _run(capsys, '-C', str(repo), '-U', '-P', '-b', '1.4.2', 'main..HEAD')
        assert out.strip() == '1.4.3'

    def test_nothing_selected(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """An empty selection is uncategorized and leaves the version alone."""
        _, out, _ = _run(capsys, '-C', str(repo), '-t', 'perf', '-i', '-b', '1.4.2', 'main..HEAD')
        assert out.splitlines() == ['uncategorized', '1.4.2']


class TestFailures:
    """Error reporting and exit codes."""

    def test_partial_results(
        self,
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
        repo: Path,
    ) -> None:
        """Valid commits are printed before errors are reported."""
        records = [
            RawCommit(id='a' * 40, short_id='aaaaaaa', message='feat: ok\n'),
            RawCommit(id='b' * 40, short_id='bbbbbbb', message='not conventional\n'),
            RawCommit(id='c' * 40, short_id='ccccccc', message='fix: fine\n'),
        ]
        monkeypatch.setattr(GitCLIBackend, 'log', lambda self, revisions: records)
        code, out, err = _run(capsys, '-C', str(repo), '-l', 'main..HEAD')
        assert code == 1
        assert out.splitlines() == ['aaaaaaa feat: ok', 'ccccccc fix: fine']
        assert 'error[CONCH-SYNTAX-SUMMARY]: bbbbbbb: syntax error:' in err

    def test_policy_errors(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """Policy violations from conch.toml fail the run."""
        (repo / 'conch.toml').write_text('version = 1\n[policy.type]\ntypes = ["feat", "fix"]\n', encoding='utf-8')
        code, out, err = _run(capsys, '-C', str(repo), '-n', 'main..HEAD')
        assert code == 1
        assert out.strip() == '2'
        assert '3333333: policy error: unrecognized commit type' in err
        assert '4444444: policy error: unrecognized commit type' in err

    def test_explicit_config(
        self,
        capsys: pytest.CaptureFixture[str],
        history: list[list[str]],
        repo: Path,
        tmp_path: Path,
    ) -> None:
        """--config overrides discovery."""
        cfg = tmp_path / 'custom.toml'
        cfg.write_text('version = 1\n[policy.scope]\nrequired = true\n', encoding='utf-8')
        code, _, err = _run(capsys, '-C', str(repo), '-c', str(cfg), 'main..HEAD')
        assert code == 1
        assert err.count('commit must have a scope') == 2

    def test_invalid_version(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """A bad --bump-version fails before history is read."""
        code, out, err = _run(capsys, '-C', str(repo), '-b', 'v1.0', 'main..HEAD')
        assert code == 1
        assert out == ''
        assert 'CONCH-VERSION-INVALID' in err
        assert history == []

    def test_invalid_config(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """A broken conch.toml is fatal."""
        (repo / 'conch.toml').write_text('version = 1\nbogus = 1\n', encoding='utf-8')
        code, _, err = _run(capsys, '-C', str(repo), 'main..HEAD')
        assert code == 1
        assert 'CONCH-CONFIG-INVALID-KEY' in err

    def test_bad_repo_location(
        self,
        capsys: pytest.CaptureFixture[str],
        history: list[list[str]],
        tmp_path: Path,
    ) -> None:
        """A repository path that is not a directory is fatal."""
        code, _, err = _run(capsys, '-C', str(tmp_path / 'missing'), 'main..HEAD')
        assert code == 1
        assert 'CONCH-CONFIG-LOCATION' in err

    def test_no_revisions(self, capsys: pytest.CaptureFixture[str], repo: Path) -> None:
        """Revisions or a message file are required."""
        code, _, err = _run(capsys, '-C', str(repo))
        assert code == 2
        assert 'specify a revision range' in err

    def test_bad_format(self, capsys: pytest.CaptureFixture[str], history: list[list[str]], repo: Path) -> None:
        """An unknown template field is a usage error."""
        code, _, err = _run(capsys, '-C', str(repo), '-f', '{author}', 'main..HEAD')
        assert code == 2
        assert 'invalid --format' in err
        assert history == []

    @pytest.mark.parametrize('template', ['{type.foo}', '{id[x]}'])
    def test_bad_format_field_access(
        self,
        capsys: pytest.CaptureFixture[str],
        history: list[list[str]],
        repo: Path,
        template: str,
    ) -> None:
        """Attribute and key lookups in a template are usage errors."""
        code, _, err = _run(capsys, '-C', str(repo), '-f', template, 'main..HEAD')
        assert code == 2
        assert 'invalid --format' in err
        assert history == []

    def test_unknown_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        """argparse usage errors exit with 2."""
        with pytest.raises(SystemExit) as exc_info:
            main(['--no-such-flag'])
        assert exc_info.value.code == 2


class TestMessageFile:
    """--message-file for commit-msg hooks."""

    def test_valid_file(self, capsys: pytest.CaptureFixture[str], repo: Path, tmp_path: Path) -> None:
        """Comment lines are dropped before parsing."""
        msg = tmp_path / 'COMMIT_EDITMSG'
        msg.write_text('feat: add thing\n\n# Please enter the commit message\n', encoding='utf-8')
        code, out, _ = _run(capsys, '-C', str(repo), '-m', str(msg), '-i')
        assert code == 0
        assert out.strip() == 'minor'

    def test_invalid_file(self, capsys: pytest.CaptureFixture[str], repo: Path, tmp_path: Path) -> None:
        """Errors name the file."""
        msg = tmp_path / 'COMMIT_EDITMSG'
        msg.write_text('added a thing\n', encoding='utf-8')
        code, _, err = _run(capsys, '-C', str(repo), '-m', str(msg))
        assert code == 1
        assert f'{msg}: syntax error:' in err

    def test_stdin(self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch, repo: Path) -> None:
        """'-' reads the message from stdin."""
        monkeypatch.setattr('sys.stdin', io.StringIO('fix: typo\n'))
        code, out, _ = _run(capsys, '-C', str(repo), '-m', '-', '-l')
        assert code == 0
        assert out.strip() == 'stdin fix: typo'

    def test_excluded_message(self, capsys: pytest.CaptureFixture[str], repo: Path, tmp_path: Path) -> None:
        """Excluded messages pass without being parsed."""
        (repo / 'conch.toml').write_text('version = 1\n[exclude]\nprefixes = ["Merge"]\n', encoding='utf-8')
        msg = tmp_path / 'MERGE_MSG'
        msg.write_text("Merge branch 'x'\n", encoding='utf-8')
        code, out, _ = _run(capsys, '-C', str(repo), '-m', str(msg), '-n')
        assert code == 0
        assert out.strip() == '0'

    def test_missing_file(self, capsys: pytest.CaptureFixture[str], repo: Path) -> None:
        """An unreadable file is a usage error."""
        code, _, err = _run(capsys, '-C', str(repo), '-m', str(repo / 'nope'))
        assert code == 2
        assert 'cannot read message file' in err

    def test_with_revisions(self, capsys: pytest.CaptureFixture[str], repo: Path) -> None:
        """A message file and revisions cannot be mixed."""
        code, _, _ = _run(capsys, '-C', str(repo), '-m', '-', 'HEAD')
        assert code == 2


class TestExplain:
    """conch explain CODE."""

    def test_known(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Known codes print their explanation."""
        code, out, _ = _run(capsys, 'explain', 'CONCH-SYNTAX-BLANK-LINE')
        assert code == 0
        assert out.startswith('CONCH-SYNTAX-BLANK-LINE: ')

    def test_unknown(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Unknown codes exit 1."""
        code, out, _ = _run(capsys, 'explain', 'CONCH-NOPE')
        assert code == 1
        assert 'Unknown error code' in out
