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

"""Pure types for commit message parsing.

Everything here is a frozen dataclass or enum: no I/O, no logging, no
side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Footer separators recognized by the grammar.
SEPARATOR_COLON = ': '
SEPARATOR_HASH = ' #'


class Classification(Enum):
    """Release impact of a commit, ordered by severity (most severe first).

    When several commits are released together the most severe
    classification decides the version increment; see
    :func:`max_classification`.
    """

    BREAKING = 'breaking'
    MINOR = 'minor'
    PATCH = 'patch'
    UNCATEGORIZED = 'uncategorized'


# Severity order: lower index = more severe.
CLASSIFICATION_PRECEDENCE: list[Classification] = [
    Classification.BREAKING,
    Classification.MINOR,
    Classification.PATCH,
    Classification.UNCATEGORIZED,
]


def max_classification(a: Classification, b: Classification) -> Classification:
    """Return the more severe of two classifications.

    >>> max_classification(Classification.MINOR, Classification.PATCH)
    <Classification.MINOR: 'minor'>
    >>> max_classification(Classification.UNCATEGORIZED, Classification.BREAKING)
    <Classification.BREAKING: 'breaking'>
    """
    a_idx = CLASSIFICATION_PRECEDENCE.index(a)
    b_idx = CLASSIFICATION_PRECEDENCE.index(b)
    return CLASSIFICATION_PRECEDENCE[min(a_idx, b_idx)]


@dataclass(frozen=True)
class Footer:
    """A ``token: value`` or ``token #value`` trailer.

    Attributes:
        token: A word without whitespace, except for the literal
            ``BREAKING CHANGE`` token.
        separator: Either ``": "`` or ``" #"``. Kept verbatim so that the
            original footer line can be reconstructed.
        value: The footer text. Continuation lines are joined with ``"\\n"``.
    """

    token: str
    separator: str
    value: str

    def __str__(self) -> str:
        return f'{self.token}{self.separator}{self.value}'


@dataclass(frozen=True)
class Commit:
    """A fully parsed Conventional Commit.

    Instances are built once by the parser and never mutated.

    Attributes:
        id: The full commit identifier.
        short_id: The abbreviated identifier used in error messages.
        type: The commit type (e.g. ``"feat"``). Never empty.
        scope: The optional scope, or ``""``.
        is_exclaimed: Whether the summary carried a ``!`` marker.
        is_breaking: Whether the commit is a breaking change, either via
            ``!`` or a ``BREAKING CHANGE`` footer.
        description: The summary text after ``": "``. Never empty.
        body: Free text between the summary and the footers.
        footers: Footers in message order; tokens may repeat.
    """

    id: str
    short_id: str
    type: str
    description: str
    scope: str = ''
    is_exclaimed: bool = False
    is_breaking: bool = False
    body: str = ''
    footers: tuple[Footer, ...] = ()

    def summary(self) -> str:
        """Render the canonical first line, ``type(scope)!: description``.

        The summary does not show footers, so the ``!`` is included for
        every breaking commit, even when the original message declared
        the break only in a footer.
        """
        s = self.type
        if self.scope:
            s += f'({self.scope})'
        if self.is_breaking:
            s += '!'
        return f'{s}: {self.description}'

    def footer_values(self, token: str) -> list[str]:
        """Return the values of every footer whose token matches (case-insensitive)."""
        key = token.lower()
        return [f.value for f in self.footers if f.token.lower() == key]


__all__ = [
    'CLASSIFICATION_PRECEDENCE',
    'SEPARATOR_COLON',
    'SEPARATOR_HASH',
    'Classification',
    'Commit',
    'Footer',
    'max_classification',
]
