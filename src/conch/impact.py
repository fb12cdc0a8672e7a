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

"""Release impact of commits and the resulting version increment.

Each commit gets a :class:`~conch.commit_parsing.Classification`; a
range of commits gets the most severe one, which then selects how the
current version is incremented::

    ┌───────────────┬──────────────┬──────────────────────────────┐
    │ Aggregate     │ 1.4.2        │ 2.0.0-rc.1 (prerelease)      │
    ├───────────────┼──────────────┼──────────────────────────────┤
    │ BREAKING      │ 2.0.0        │ 2.0.0  (release covers it)   │
    │ MINOR         │ 1.5.0        │ 2.0.0  (release covers it)   │
    │ PATCH         │ 1.4.3        │ 2.0.0  (release covers it)   │
    │ UNCATEGORIZED │ 1.4.2        │ 2.0.0-rc.1                   │
    └───────────────┴──────────────┴──────────────────────────────┘
"""

from __future__ import annotations

from collections.abc import Iterable

from conch.commit_parsing import Classification, Commit, max_classification
from conch.policy import Policy
from conch.semver import Semver


def classify(commit: Commit, policy: Policy) -> Classification:
    """Classify one commit: breaking first, then the minor and patch type lists."""
    if commit.is_breaking:
        return Classification.BREAKING
    if policy.minor is not None and commit.type in policy.minor:
        return Classification.MINOR
    if policy.patch is not None and commit.type in policy.patch:
        return Classification.PATCH
    return Classification.UNCATEGORIZED


def aggregate(classifications: Iterable[Classification]) -> Classification:
    """Reduce classifications to the most severe one.

    An empty input is :attr:`Classification.UNCATEGORIZED`. The reduction
    is commutative and associative, so input order never matters.
    """
    result = Classification.UNCATEGORIZED
    for c in classifications:
        result = max_classification(result, c)
    return result


def aggregate_commits(commits: Iterable[Commit], policy: Policy) -> Classification:
    """Classify every commit and return the aggregate."""
    return aggregate(classify(c, policy) for c in commits)


def bump(version: Semver, impact: Classification) -> Semver:
    """Return the version that follows ``version`` for the given impact.

    A prerelease whose stable release already includes the bump is
    promoted with :meth:`Semver.next_release` instead of skipping ahead,
    e.g. ``1.3.0-rc.1`` plus a minor change is ``1.3.0``.
    """
    pre = version.is_prerelease()
    if impact is Classification.BREAKING:
        if pre and version.minor == 0 and version.patch == 0:
            return version.next_release()
        return version.next_major()
    if impact is Classification.MINOR:
        if pre and version.patch == 0:
            return version.next_release()
        return version.next_minor()
    if impact is Classification.PATCH:
        if pre:
            return version.next_release()
        return version.next_patch()
    return version


def next_version(version: str, impact: Classification) -> str:
    """Parse ``version``, apply :func:`bump` and serialize the result.

    Raises:
        InvalidVersionError: If ``version`` is not a valid semantic version.
    """
    return str(bump(Semver.parse(version), impact))


__all__ = [
    'aggregate',
    'aggregate_commits',
    'bump',
    'classify',
    'next_version',
]
