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

"""Commit message parsing.

Components, leaves first:

- :mod:`._summary`: the ``type(scope)!: description`` grammar.
- :mod:`._footer`: footer extraction and ``BREAKING CHANGE`` checks.
- :mod:`._conventional`: assembles a :class:`Commit` from a message.

Usage::

    from conch.commit_parsing import parse_message

    c = parse_message('feat(api)!: remove endpoint')
    assert c.type == 'feat'
    assert c.is_breaking
"""

from conch.commit_parsing._conventional import ConventionalCommitParser, split_lines, strip_comments
from conch.commit_parsing._footer import extract_footers, is_breaking_change
from conch.commit_parsing._summary import Summary, match_summary
from conch.commit_parsing._types import (
    CLASSIFICATION_PRECEDENCE,
    Classification,
    Commit,
    Footer,
    max_classification,
)

# Module-level singleton for convenience.
_DEFAULT_PARSER = ConventionalCommitParser()


def parse_message(message: str, commit_id: str = '0', short_id: str | None = None) -> Commit:
    """Parse a single commit message.

    Convenience wrapper around :meth:`ConventionalCommitParser.parse`.

    Raises:
        CommitSyntaxError: If the message is not a valid Conventional Commit.
    """
    return _DEFAULT_PARSER.parse(message, commit_id=commit_id, short_id=short_id)


__all__ = [
    'CLASSIFICATION_PRECEDENCE',
    'Classification',
    'Commit',
    'ConventionalCommitParser',
    'Footer',
    'Summary',
    'extract_footers',
    'is_breaking_change',
    'match_summary',
    'max_classification',
    'parse_message',
    'split_lines',
    'strip_comments',
]
