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

"""Authoring policy: the project rules a well-formed commit must follow.

Checks run in a fixed order and the first violation wins for a given
commit::

    1. type in policy.types                → POLICY_UNRECOGNIZED_TYPE
    2. scope present if required           → POLICY_REQUIRED_SCOPE
       scope in policy.scopes              → POLICY_UNRECOGNIZED_SCOPE
    3. min_length <= len(description)
       and (max_length == 0 or <= max)     → POLICY_DESCRIPTION_LENGTH
    4. every footer token in policy.tokens → POLICY_UNRECOGNIZED_FOOTER
    5. every required token present        → POLICY_REQUIRED_FOOTERS

A set that is ``None`` is "not configured" and accepts anything. Token,
type and scope matches ignore case.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from conch.commit_parsing import Commit
from conch.errors import (
    CommitPolicyError,
    DescriptionLengthError,
    E,
    MultiError,
    RequiredFootersError,
)
from conch.utils.caseset import CaseInsensitiveSet


@dataclass(frozen=True)
class Policy:
    """Immutable authoring policy.

    Attributes:
        types: Allowed commit types, or ``None`` to accept any type.
        minor: Types classified as minor changes.
        patch: Types classified as patches.
        scope_required: Whether every commit needs a scope.
        scopes: Allowed scopes, or ``None`` to accept any scope.
        min_length: Minimum description length in characters.
        max_length: Maximum description length; ``0`` means unbounded.
        required_footers: Footer tokens every commit must carry.
        footer_tokens: Allowed footer tokens, or ``None`` to accept any.
    """

    types: CaseInsensitiveSet | None = None
    minor: CaseInsensitiveSet | None = None
    patch: CaseInsensitiveSet | None = None
    scope_required: bool = False
    scopes: CaseInsensitiveSet | None = None
    min_length: int = 0
    max_length: int = 0
    required_footers: CaseInsensitiveSet | None = None
    footer_tokens: CaseInsensitiveSet | None = None


def apply_policy(commit: Commit, policy: Policy) -> None:
    """Check one commit against the policy.

    Raises:
        CommitPolicyError: For the first violated rule (see module docs).
    """
    sid = commit.short_id

    if policy.types is not None and commit.type not in policy.types:
        raise CommitPolicyError(E.POLICY_UNRECOGNIZED_TYPE, sid, 'unrecognized commit type')

    if not commit.scope:
        if policy.scope_required:
            raise CommitPolicyError(E.POLICY_REQUIRED_SCOPE, sid, 'commit must have a scope')
    elif policy.scopes is not None and commit.scope not in policy.scopes:
        raise CommitPolicyError(E.POLICY_UNRECOGNIZED_SCOPE, sid, 'unrecognized commit scope')

    # Counted in characters, not UTF-8 bytes.
    length = len(commit.description)
    if length < policy.min_length or (policy.max_length > 0 and length > policy.max_length):
        raise DescriptionLengthError(sid, policy.min_length, policy.max_length)

    # Footer tokens may repeat (one Co-authored-by per co-author), so
    # required tokens are ticked off a private copy.
    missing = policy.required_footers.copy() if policy.required_footers is not None else CaseInsensitiveSet()
    for footer in commit.footers:
        if policy.footer_tokens is not None and footer.token not in policy.footer_tokens:
            raise CommitPolicyError(
                E.POLICY_UNRECOGNIZED_FOOTER,
                sid,
                f'unrecognized footer: {footer.token}',
            )
        missing.discard(footer.token)

    if missing:
        raise RequiredFootersError(sid, missing)


def apply_policies(commits: Iterable[Commit], policy: Policy) -> tuple[list[Commit], MultiError | None]:
    """Check every commit of a batch.

    Never stops early: each commit contributes at most one error (its
    first violation) and all errors are returned together.

    Returns:
        The commits that passed, in order, and a :class:`MultiError` with
        every violation, or ``None`` when all commits passed.
    """
    accepted: list[Commit] = []
    errors = MultiError()
    for commit in commits:
        try:
            apply_policy(commit, policy)
        except CommitPolicyError as exc:
            errors.append(exc)
        else:
            accepted.append(commit)
    return accepted, (errors if errors.has_errors() else None)


__all__ = [
    'Policy',
    'apply_policies',
    'apply_policy',
]
