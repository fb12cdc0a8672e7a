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

"""Conventional Commits message parser.

Pure implementation: depends only on ``re`` and the sibling modules.
No I/O, no logging, no side effects.

A message is read in one pass::

    awaiting summary ──(empty input)──────────────→ SYNTAX_EMPTY_MESSAGE
          │ summary matches grammar  (else SYNTAX_SUMMARY)
          ▼
    awaiting blank ──(end of input)───────────────→ done, no body
          │ blank line  (else SYNTAX_BLANK_LINE)
          ▼
    collecting body lines ──(end of input)────────→ split last paragraph
                                                    into footers / body
"""

from __future__ import annotations

from conch.commit_parsing._footer import extract_footers, is_breaking_change
from conch.commit_parsing._summary import match_summary
from conch.commit_parsing._types import Commit, Footer
from conch.errors import E, CommitSyntaxError, FooterFormatError


def split_lines(message: str) -> list[str]:
    """Split a message into lines the way git tools read them.

    A trailing newline does not start an extra empty line, and a
    carriage return before each newline is dropped.
    """
    lines = message.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def strip_comments(message: str) -> str:
    """Remove every line starting with ``#``.

    Git leaves such lines in the message file handed to a ``commit-msg``
    hook; they are not part of the final commit message.
    """
    return ''.join(f'{line}\n' for line in split_lines(message) if not line.startswith('#'))


def _split_body(lines: list[str]) -> tuple[str, tuple[Footer, ...]]:
    """Separate the body from a footer block in the final paragraph."""
    last_paragraph = -1
    in_paragraph = False
    for index, line in enumerate(lines):
        if not line:
            in_paragraph = False
        elif not in_paragraph:
            in_paragraph = True
            last_paragraph = index

    if last_paragraph < 0:
        return '', ()

    footers = extract_footers(lines[last_paragraph:])
    if not footers:
        return '\n'.join(lines), ()
    return '\n'.join(lines[:last_paragraph]).rstrip('\n'), tuple(footers)


class ConventionalCommitParser:
    """Parser for `Conventional Commits <https://www.conventionalcommits.org/>`_.

    Unlike a lenient changelog scanner, this parser is a validator: any
    deviation from the grammar raises :class:`CommitSyntaxError` and no
    partially filled commit is ever returned.
    """

    def parse(self, message: str, commit_id: str = '0', short_id: str | None = None) -> Commit:
        """Parse a complete commit message.

        Args:
            message: The raw commit message (summary, body, footers).
            commit_id: The full commit identifier.
            short_id: The abbreviated identifier used in error text.
                Defaults to ``commit_id``.

        Returns:
            The parsed :class:`Commit`.

        Raises:
            CommitSyntaxError: If the message is empty, the summary does
                not match the grammar, the summary is not followed by a
                blank line, or a ``BREAKING CHANGE`` footer is malformed.
        """
        sid = commit_id if short_id is None else short_id
        lines = split_lines(message)

        if not lines:
            raise CommitSyntaxError(E.SYNTAX_EMPTY_MESSAGE, sid, 'commit message cannot be empty')

        summary = match_summary(lines[0])
        if summary is None:
            raise CommitSyntaxError(
                E.SYNTAX_SUMMARY,
                sid,
                'commit summary must contain a valid type, optional scope, and description',
            )

        body = ''
        footers: tuple[Footer, ...] = ()
        if len(lines) > 1:
            if lines[1]:
                raise CommitSyntaxError(
                    E.SYNTAX_BLANK_LINE,
                    sid,
                    'the commit summary must be followed by a blank line',
                )
            body, footers = _split_body(lines[2:])

        # Every footer is checked, even after a valid breaking marker.
        is_breaking = summary.is_exclaimed
        for footer in footers:
            try:
                if is_breaking_change(footer):
                    is_breaking = True
            except FooterFormatError as exc:
                raise CommitSyntaxError(exc.code, sid, exc.message, exc.hint) from exc

        return Commit(
            id=commit_id,
            short_id=sid,
            type=summary.type,
            scope=summary.scope,
            is_exclaimed=summary.is_exclaimed,
            is_breaking=is_breaking,
            description=summary.description,
            body=body,
            footers=footers,
        )


__all__ = [
    'ConventionalCommitParser',
    'split_lines',
    'strip_comments',
]
