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

"""Semantic Versioning 2.0.0: parse, compare and increment.

Pure implementation: depends only on ``re`` and :mod:`conch.errors`.
No I/O, no logging, no side effects.

Precedence rules (https://semver.org/#spec-item-11)::

    1.0.0-alpha < 1.0.0-alpha.1 < 1.0.0-alpha.beta < 1.0.0-beta
        < 1.0.0-beta.2 < 1.0.0-beta.11 < 1.0.0-rc.1 < 1.0.0

Build metadata (``+...``) never takes part in comparison.

Usage::

    v = Semver.parse('1.2.5-rc.1')
    assert str(v.next_minor()) == '1.3.0'
    assert Semver.parse('1.2.3-alpha.1') < Semver.parse('1.2.3')
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

from conch.errors import InvalidVersionError

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
SEMVER_PATTERN: re.Pattern[str] = re.compile(
    r'(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)'
    r'(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)'
    r'(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?'
    r'(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?',
    re.ASCII,
)


def _compare_identifiers(a: str, b: str) -> int:
    """Compare two prerelease identifiers.

    Numeric identifiers compare as integers and always sort before
    alphanumeric ones; alphanumeric identifiers compare by code point.
    """
    a_num = a.isascii() and a.isdigit()
    b_num = b.isascii() and b.isdigit()
    if a_num and b_num:
        x, y = int(a), int(b)
        return (x > y) - (x < y)
    if a_num:
        return -1
    if b_num:
        return 1
    return (a > b) - (a < b)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Semver:
    """An immutable semantic version.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Prerelease identifiers, or ``None`` for a normal
            release. An empty tuple is treated like ``None``.
        build: Build metadata identifiers, or ``None``. Ignored by
            comparisons.
    """

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: tuple[str, ...] | None = None
    build: tuple[str, ...] | None = None

    @classmethod
    def parse(cls, text: str) -> Semver:
        """Parse a version string.

        Raises:
            InvalidVersionError: If ``text`` is not a valid semantic
                version. Nothing is returned for partial matches.
        """
        match = SEMVER_PATTERN.fullmatch(text)
        if match is None:
            raise InvalidVersionError(text)

        prerelease = match.group('prerelease')
        build = match.group('build')
        return cls(
            major=int(match.group('major')),
            minor=int(match.group('minor')),
            patch=int(match.group('patch')),
            prerelease=tuple(prerelease.split('.')) if prerelease else None,
            build=tuple(build.split('.')) if build else None,
        )

    def __str__(self) -> str:
        s = f'{self.major}.{self.minor}.{self.patch}'
        if self.prerelease:
            s += '-' + '.'.join(self.prerelease)
        if self.build:
            s += '+' + '.'.join(self.build)
        return s

    def compare(self, other: Semver) -> int:
        """Return -1, 0 or 1 as this version has lower, equal or higher precedence."""
        mine = (self.major, self.minor, self.patch)
        theirs = (other.major, other.minor, other.patch)
        if mine != theirs:
            return -1 if mine < theirs else 1

        pre_a = self.prerelease or ()
        pre_b = other.prerelease or ()
        if not pre_a and not pre_b:
            return 0
        if not pre_b:
            return -1
        if not pre_a:
            return 1

        for a, b in zip(pre_a, pre_b):
            result = _compare_identifiers(a, b)
            if result:
                return result

        return (len(pre_a) > len(pre_b)) - (len(pre_a) < len(pre_b))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Semver):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Semver) -> bool:
        if not isinstance(other, Semver):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease or ()))

    def next_major(self) -> Semver:
        """Return the next major version, e.g. ``1.2.3-rc.1`` -> ``2.0.0``."""
        return Semver(self.major + 1, 0, 0)

    def next_minor(self) -> Semver:
        """Return the next minor version, e.g. ``1.2.3`` -> ``1.3.0``."""
        return Semver(self.major, self.minor + 1, 0)

    def next_patch(self) -> Semver:
        """Return the next patch version, e.g. ``1.2.3`` -> ``1.2.4``."""
        return Semver(self.major, self.minor, self.patch + 1)

    def next_release(self) -> Semver:
        """Return this version with prerelease and build metadata stripped.

        Promotes a prerelease to its stable release: ``1.3.0-rc.2`` -> ``1.3.0``.
        """
        return Semver(self.major, self.minor, self.patch)

    def is_prerelease(self) -> bool:
        """Whether this version carries prerelease identifiers."""
        return bool(self.prerelease)

    def is_stable(self) -> bool:
        """Whether this is a stable release.

        Major version 0 is reserved for initial development, so ``0.x.y``
        is never stable; neither is any prerelease.
        """
        return self.major > 0 and not self.prerelease


def parse(text: str) -> Semver:
    """Parse a version string. Shorthand for :meth:`Semver.parse`."""
    return Semver.parse(text)


def compare(a: Semver, b: Semver) -> int:
    """Compare two versions. Shorthand for :meth:`Semver.compare`."""
    return a.compare(b)


__all__ = [
    'SEMVER_PATTERN',
    'Semver',
    'compare',
    'parse',
]
