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

"""Footer extraction and breaking-change classification.

The final paragraph of a message is either more body text or a block
of footers. Only its *first* line decides which: if that line looks
like ``token: value`` or ``token #value`` the whole paragraph is read as
footers, and any following line that does not start a new footer is a
continuation of the previous footer's value::

    Reviewed-by: Z          <- first line matches: footer block
    Refs #123               <- new footer
    BREAKING CHANGE: the    <- new footer
      config format changed <- continuation of BREAKING CHANGE
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from conch.commit_parsing._summary import TOKEN_WHITESPACE
from conch.commit_parsing._types import SEPARATOR_COLON, Footer
from conch.errors import E, FooterFormatError

BREAKING_TOKENS: frozenset[str] = frozenset({'BREAKING CHANGE', 'BREAKING-CHANGE'})

FOOTER_PATTERN: re.Pattern[str] = re.compile(
    rf'(?P<token>(?:BREAKING CHANGE|[^:{TOKEN_WHITESPACE}]+))'
    r'(?P<separator>: | #)'
    r'(?P<value>.*)',
)


def is_breaking_change(footer: Footer) -> bool:
    """Decide whether a footer declares a breaking change.

    Only the exact uppercase tokens ``BREAKING CHANGE`` and
    ``BREAKING-CHANGE`` followed by ``": "`` count. Near misses are
    errors rather than ordinary footers, so a misspelled breaking-change
    declaration can never slip through unnoticed.

    Raises:
        FooterFormatError: ``SYNTAX_FOOTER_SEPARATOR`` when the token is
            right but the separator is ``" #"``;
            ``SYNTAX_FOOTER_CAPITALIZATION`` when the token matches only
            case-insensitively.
    """
    if footer.token in BREAKING_TOKENS:
        if footer.separator == SEPARATOR_COLON:
            return True
        raise FooterFormatError(
            E.SYNTAX_FOOTER_SEPARATOR,
            'BREAKING CHANGE must be followed by a colon and space (: )',
        )
    if footer.token.lower() in ('breaking change', 'breaking-change'):
        raise FooterFormatError(
            E.SYNTAX_FOOTER_CAPITALIZATION,
            'BREAKING CHANGE token must be capitalized',
        )
    return False


def extract_footers(lines: Sequence[str]) -> list[Footer]:
    """Parse footers from the lines of a message's final paragraph.

    Returns:
        The footers in order, or an empty list when the first line is not
        a footer (the paragraph then belongs to the body).
    """
    footers: list[Footer] = []
    token = ''
    separator = ''
    value: list[str] = []

    for line in lines:
        match = FOOTER_PATTERN.fullmatch(line)
        if match is None:
            if not token:
                return []
            value.append(line)
            continue

        if token:
            footers.append(Footer(token, separator, '\n'.join(value)))
        token = match.group('token')
        separator = match.group('separator')
        value = [match.group('value')]

    if token:
        footers.append(Footer(token, separator, '\n'.join(value)))
    return footers


__all__ = [
    'BREAKING_TOKENS',
    'FOOTER_PATTERN',
    'extract_footers',
    'is_breaking_change',
]
