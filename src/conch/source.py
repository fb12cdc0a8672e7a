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

"""Parsing a range of commits from a message source.

A message source is anything that yields :class:`RawCommit` records
(the git backend, a message file, a test fixture). This module turns
those records into :class:`~conch.commit_parsing.Commit` objects::

    RawCommit ──▶ excluded? ──yes──▶ skipped (commit_excluded)
                      │ no
                      ▼
                 parse_message ──error──▶ MultiError (commit_rejected)
                      │
                      ▼
                   Commit (commit_parsed)

Range parsing never stops at the first bad commit: every error is
collected so the user sees them all in one run.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from conch.commit_parsing import Commit, parse_message
from conch.config import Config
from conch.errors import CommitSyntaxError, MultiError
from conch.logging import get_logger
from conch.utils.caseset import CaseInsensitiveSet

logger = get_logger(__name__)


@dataclass(frozen=True)
class RawCommit:
    """A commit as delivered by a message source.

    Attributes:
        id: Full commit identifier.
        short_id: Abbreviated identifier shown in messages.
        message: The raw commit message.
    """

    id: str
    short_id: str
    message: str


def is_excluded(message: str, prefixes: CaseInsensitiveSet | None) -> bool:
    """Return whether a message starts with an excluded prefix, ignoring case."""
    if prefixes is None:
        return False
    lowered = message.lower()
    return any(lowered.startswith(prefix) for prefix in prefixes.keys())


def iter_range(
    records: Iterable[RawCommit],
    config: Config,
) -> Iterator[tuple[RawCommit, Commit | CommitSyntaxError]]:
    """Parse each record that is not excluded.

    Yields:
        ``(record, result)`` pairs in source order, where ``result`` is
        the parsed commit or the syntax error it raised.
    """
    for record in records:
        if is_excluded(record.message, config.exclude_prefixes):
            logger.debug('commit_excluded', commit=record.short_id)
            continue
        try:
            commit = parse_message(record.message, commit_id=record.id, short_id=record.short_id)
        except CommitSyntaxError as exc:
            logger.debug('commit_rejected', commit=record.short_id, code=exc.code.value)
            yield record, exc
        else:
            logger.debug('commit_parsed', commit=record.short_id, type=commit.type)
            yield record, commit


def parse_range(records: Iterable[RawCommit], config: Config) -> tuple[list[Commit], MultiError | None]:
    """Parse every record in a range.

    Returns:
        The commits that parsed, in source order, and a
        :class:`MultiError` holding every syntax error, or ``None``.
    """
    commits: list[Commit] = []
    errors = MultiError()
    for _, result in iter_range(records, config):
        if isinstance(result, CommitSyntaxError):
            errors.append(result)
        else:
            commits.append(result)
    return commits, (errors if errors.has_errors() else None)


__all__ = [
    'RawCommit',
    'is_excluded',
    'iter_range',
    'parse_message',
    'parse_range',
]
