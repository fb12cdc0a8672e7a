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

"""Grammar for the commit summary line, ``type(scope)!: description``.

Based on the grammar of the reference Conventional Commits parser
(https://github.com/conventional-commits/parser/tree/v0.4.1#the-grammar).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Every code point in the Unicode "Separator" categories (Zs, Zl, Zp).
UNICODE_SEPARATORS = '\u0020\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000'

# Whitespace that may never appear inside a type or footer token:
# Unicode separators, tab through carriage return, and the BOM / ZWNBSP.
TOKEN_WHITESPACE = UNICODE_SEPARATORS + '\t-\r\ufeff'

SUMMARY_PATTERN: re.Pattern[str] = re.compile(
    rf'(?P<type>[^():!{TOKEN_WHITESPACE}]+)'
    r'(?:\((?P<scope>[^()]+)\))?'
    r'(?P<exclaim>!?)'
    r': '
    r'(?P<description>.+)',
)


@dataclass(frozen=True)
class Summary:
    """The fields of a successfully matched summary line."""

    type: str
    scope: str
    is_exclaimed: bool
    description: str


def match_summary(line: str) -> Summary | None:
    """Match a summary line against the grammar.

    The match is all or nothing: either every field is returned or
    ``None`` is.
    """
    match = SUMMARY_PATTERN.fullmatch(line)
    if match is None:
        return None
    return Summary(
        type=match.group('type'),
        scope=match.group('scope') or '',
        is_exclaimed=match.group('exclaim') == '!',
        description=match.group('description'),
    )


__all__ = [
    'SUMMARY_PATTERN',
    'TOKEN_WHITESPACE',
    'UNICODE_SEPARATORS',
    'Summary',
    'match_summary',
]
