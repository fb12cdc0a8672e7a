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

"""Git message source.

The :class:`GitCLIBackend` reads commit messages by delegating to
``git log`` via :func:`run_command`. Records come back NUL-separated
with the full id, short id and raw message split by ``0x1f``, so
messages containing any printable text survive intact.
"""

from __future__ import annotations

import subprocess  # noqa: S404 - for TimeoutExpired
from collections.abc import Callable, Sequence
from pathlib import Path

from conch.backends._run import CommandResult, run_command
from conch.errors import E, ConchError
from conch.logging import get_logger
from conch.source import RawCommit

log = get_logger('conch.backends.git')

# Full hash, abbreviated hash and raw body, unit-separated.
LOG_FORMAT = '%H%x1f%h%x1f%B'

Runner = Callable[..., CommandResult]


def parse_log_output(stdout: str) -> list[RawCommit]:
    """Split ``git log -z`` output into records, newest first."""
    records: list[RawCommit] = []
    for entry in stdout.split('\0'):
        entry = entry.lstrip('\n')
        if not entry:
            continue
        commit_id, short_id, message = entry.split('\x1f', 2)
        records.append(RawCommit(id=commit_id, short_id=short_id, message=message))
    return records


class GitCLIBackend:
    """Message source backed by the ``git`` executable.

    Args:
        repo_root: Path to the git repository (any directory inside it).
        runner: Command runner; tests substitute a fake.
    """

    def __init__(self, repo_root: Path, *, runner: Runner = run_command) -> None:
        """Initialize with the repository path."""
        self._root = repo_root
        self._run = runner

    def _git(self, *args: str) -> CommandResult:
        try:
            return self._run(['git', *args], cwd=self._root)
        except FileNotFoundError as exc:
            raise ConchError(
                code=E.GIT_FAILED,
                message='git executable not found',
                hint='Install git and make sure it is on PATH.',
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ConchError(
                code=E.GIT_FAILED,
                message=f'git timed out after {exc.timeout} seconds',
                hint='Narrow the revision range.',
            ) from exc

    def log(self, revisions: Sequence[str]) -> list[RawCommit]:
        """Return the commits selected by ``revisions``.

        ``revisions`` accepts anything ``git log`` does: ``main..HEAD``,
        ``v1.2.0..``, a list of refs, ``^excluded`` refs.

        Raises:
            ConchError: With ``GIT_FAILED`` if git exits with an error.
        """
        result = self._git('log', '-z', f'--format={LOG_FORMAT}', '--end-of-options', *revisions, '--')
        if not result.ok:
            detail = result.stderr.strip().splitlines()
            raise ConchError(
                code=E.GIT_FAILED,
                message=f'git log failed: {detail[0] if detail else f"exit status {result.return_code}"}',
                hint=f'Check that {self._root} is a git repository and the revisions exist.',
            )
        records = parse_log_output(result.stdout)
        log.debug('git_log', revisions=list(revisions), count=len(records))
        return records


__all__ = [
    'LOG_FORMAT',
    'GitCLIBackend',
    'parse_log_output',
]
