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

"""Structured error system for conch.

Every error has a unique ``CONCH-AREA-KEY`` code, a human-readable
message, and an optional hint with a suggested fix.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ ELI5 Explanation                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ ErrorCode           │ A unique named ID like "CONCH-SYNTAX-SUMMARY"  │
    │                     │ for each error. Readable at a glance.         │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ CommitSyntaxError   │ The message is not a Conventional Commit.     │
    │                     │ Fatal for that one commit only.               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ CommitPolicyError   │ The message parses, but breaks a project rule │
    │                     │ (unknown type, missing footer, ...).          │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ MultiError          │ Every per-commit failure of a batch, reported │
    │                     │ together instead of stopping at the first.    │
    └─────────────────────┴────────────────────────────────────────────────┘

Code categories::

    CONCH-SYNTAX-*    Commit grammar errors (one commit)
    CONCH-POLICY-*    Authoring policy violations (one commit)
    CONCH-VERSION-*   Semantic version errors (fatal)
    CONCH-CONFIG-*    Configuration errors (fatal)
    CONCH-GIT-*       History traversal errors (fatal)

Usage::

    from conch.errors import ConchError, E

    raise ConchError(
        code=E.CONFIG_INVALID_KEY,
        message="Unknown key 'tpyes' in [policy.type]",
        hint="Did you mean 'types'?",
    )
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.console import Console
from rich.markup import escape as rich_escape


class ErrorCode(str, Enum):
    """Enumeration of all conch diagnostic codes."""

    # Commit grammar
    SYNTAX_EMPTY_MESSAGE = 'CONCH-SYNTAX-EMPTY-MESSAGE'
    SYNTAX_SUMMARY = 'CONCH-SYNTAX-SUMMARY'
    SYNTAX_BLANK_LINE = 'CONCH-SYNTAX-BLANK-LINE'
    SYNTAX_FOOTER_SEPARATOR = 'CONCH-SYNTAX-FOOTER-SEPARATOR'
    SYNTAX_FOOTER_CAPITALIZATION = 'CONCH-SYNTAX-FOOTER-CAPITALIZATION'

    # Authoring policy
    POLICY_UNRECOGNIZED_TYPE = 'CONCH-POLICY-UNRECOGNIZED-TYPE'
    POLICY_REQUIRED_SCOPE = 'CONCH-POLICY-REQUIRED-SCOPE'
    POLICY_UNRECOGNIZED_SCOPE = 'CONCH-POLICY-UNRECOGNIZED-SCOPE'
    POLICY_DESCRIPTION_LENGTH = 'CONCH-POLICY-DESCRIPTION-LENGTH'
    POLICY_UNRECOGNIZED_FOOTER = 'CONCH-POLICY-UNRECOGNIZED-FOOTER'
    POLICY_REQUIRED_FOOTERS = 'CONCH-POLICY-REQUIRED-FOOTERS'

    # Versioning
    VERSION_INVALID = 'CONCH-VERSION-INVALID'

    # Configuration
    CONFIG_NOT_FOUND = 'CONCH-CONFIG-NOT-FOUND'
    CONFIG_LOCATION = 'CONCH-CONFIG-LOCATION'
    CONFIG_PARSE_ERROR = 'CONCH-CONFIG-PARSE-ERROR'
    CONFIG_INVALID_KEY = 'CONCH-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'CONCH-CONFIG-INVALID-VALUE'
    CONFIG_UNSUPPORTED_VERSION = 'CONCH-CONFIG-UNSUPPORTED-VERSION'

    # History traversal
    GIT_FAILED = 'CONCH-GIT-FAILED'

    # Aggregate of per-commit errors
    BATCH_FAILED = 'CONCH-BATCH-FAILED'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error code.

    Attributes:
        code: The ``CONCH-AREA-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class ConchError(Exception):
    """Base exception for all conch errors.

    Args:
        code: The error code from :class:`ErrorCode`.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(message)

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def message(self) -> str:
        """The human-readable message."""
        return self.info.message

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


class CommitSyntaxError(ConchError):
    """A commit message does not follow the Conventional Commits grammar.

    The text always has the form ``"<short id>: syntax error: <detail>"``.
    """

    def __init__(self, code: ErrorCode, commit_id: str, detail: str, hint: str = '') -> None:
        """Initialize with the offending commit's short identifier."""
        self.commit_id = commit_id
        self.detail = detail
        super().__init__(code, f'{commit_id}: syntax error: {detail}', hint)


class FooterFormatError(ConchError):
    """A footer is a malformed ``BREAKING CHANGE`` declaration.

    Raised by the breaking-change classifier, which does not know which
    commit the footer belongs to; the assembler re-raises it as a
    :class:`CommitSyntaxError` with the same code.
    """


class CommitPolicyError(ConchError):
    """A well-formed commit violates the configured authoring policy.

    The text always has the form ``"<short id>: policy error: <detail>"``.
    """

    def __init__(self, code: ErrorCode, commit_id: str, detail: str, hint: str = '') -> None:
        """Initialize with the offending commit's short identifier."""
        self.commit_id = commit_id
        self.detail = detail
        super().__init__(code, f'{commit_id}: policy error: {detail}', hint)


class DescriptionLengthError(CommitPolicyError):
    """The description is shorter or longer than the policy allows.

    ``min_length`` and ``max_length`` are the effective bounds: the
    minimum is never below 1 (a parsed commit always has a description)
    and a maximum of 0 means unbounded.
    """

    def __init__(self, commit_id: str, min_length: int, max_length: int) -> None:
        """Initialize with the commit id and the configured bounds."""
        self.min_length = max(min_length, 1)
        self.max_length = max_length
        if self.max_length > 0:
            detail = f'description must be between {self.min_length} and {self.max_length} chars long'
        else:
            detail = f'description must be longer than {self.min_length} chars'
        super().__init__(E.POLICY_DESCRIPTION_LENGTH, commit_id, detail)


class RequiredFootersError(CommitPolicyError):
    """One or more required footer tokens are missing from a commit."""

    def __init__(self, commit_id: str, missing: Iterable[str]) -> None:
        """Initialize with the tokens that were not found (sorted for stable text)."""
        self.missing = sorted(missing, key=str.lower)
        super().__init__(
            E.POLICY_REQUIRED_FOOTERS,
            commit_id,
            f'commit must include footers: {", ".join(self.missing)}',
        )


class InvalidVersionError(ConchError):
    """A version string is not a valid semantic version specifier."""

    def __init__(self, version: str) -> None:
        """Initialize with the rejected version string."""
        self.version = version
        super().__init__(
            E.VERSION_INVALID,
            f'invalid semantic version specifier: {version!r}',
            hint='Use a version like "1.2.3", "1.2.3-rc.1" or "1.2.3+build.5" (see https://semver.org).',
        )


class MultiError(ConchError):
    """Every per-commit error collected from one batch.

    Batches never stop at the first failing commit; the collected errors
    keep the order in which the commits were visited.
    """

    def __init__(self, errors: Iterable[ConchError] = ()) -> None:
        """Initialize with an optional initial list of errors."""
        self.errors: list[ConchError] = list(errors)
        super().__init__(E.BATCH_FAILED, self._text())

    def _text(self) -> str:
        return '\n'.join(str(err) for err in self.errors)

    def append(self, err: ConchError) -> None:
        """Add another error to the aggregate."""
        self.errors.append(err)
        self.info = ErrorInfo(code=E.BATCH_FAILED, message=self._text())
        self.args = (self.info.message,)

    def has_errors(self) -> bool:
        """Whether at least one error was collected."""
        return bool(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.SYNTAX_EMPTY_MESSAGE: ErrorInfo(
        code=E.SYNTAX_EMPTY_MESSAGE,
        message='The commit message is empty.',
        hint='Write a summary line such as "fix: handle missing config".',
    ),
    E.SYNTAX_SUMMARY: ErrorInfo(
        code=E.SYNTAX_SUMMARY,
        message='The first line must look like "type(scope)!: description".',
        hint='The type cannot contain whitespace, and ": " (colon, space) must precede the description.',
    ),
    E.SYNTAX_BLANK_LINE: ErrorInfo(
        code=E.SYNTAX_BLANK_LINE,
        message='The summary line must be followed by a blank line before the body.',
        hint='Insert an empty line after the first line of the message.',
    ),
    E.SYNTAX_FOOTER_SEPARATOR: ErrorInfo(
        code=E.SYNTAX_FOOTER_SEPARATOR,
        message='A BREAKING CHANGE footer must use ": " as its separator.',
        hint='Write "BREAKING CHANGE: <details>" instead of "BREAKING CHANGE #<details>".',
    ),
    E.SYNTAX_FOOTER_CAPITALIZATION: ErrorInfo(
        code=E.SYNTAX_FOOTER_CAPITALIZATION,
        message='The BREAKING CHANGE footer token must be uppercase.',
        hint='Write "BREAKING CHANGE" or "BREAKING-CHANGE" exactly.',
    ),
    E.POLICY_UNRECOGNIZED_TYPE: ErrorInfo(
        code=E.POLICY_UNRECOGNIZED_TYPE,
        message='The commit type is not in policy.type.types.',
        hint='Use one of the configured types, or add the type to conch.toml.',
    ),
    E.POLICY_REQUIRED_SCOPE: ErrorInfo(
        code=E.POLICY_REQUIRED_SCOPE,
        message='policy.scope.required is set but the commit has no scope.',
        hint='Add a scope: "type(scope): description".',
    ),
    E.POLICY_UNRECOGNIZED_SCOPE: ErrorInfo(
        code=E.POLICY_UNRECOGNIZED_SCOPE,
        message='The commit scope is not in policy.scope.scopes.',
        hint='Use one of the configured scopes, or add the scope to conch.toml.',
    ),
    E.POLICY_UNRECOGNIZED_FOOTER: ErrorInfo(
        code=E.POLICY_UNRECOGNIZED_FOOTER,
        message='A footer token is not in policy.footer.tokens.',
        hint='Use one of the configured footer tokens, or add the token to conch.toml.',
    ),
    E.POLICY_DESCRIPTION_LENGTH: ErrorInfo(
        code=E.POLICY_DESCRIPTION_LENGTH,
        message='The description length is outside policy.description bounds.',
    ),
    E.POLICY_REQUIRED_FOOTERS: ErrorInfo(
        code=E.POLICY_REQUIRED_FOOTERS,
        message='The commit is missing footers listed in policy.footer.required_tokens.',
        hint='Add the footers to the last paragraph, e.g. "Refs: #123".',
    ),
    E.VERSION_INVALID: ErrorInfo(
        code=E.VERSION_INVALID,
        message='The version is not a valid semantic version.',
        hint='See https://semver.org for the grammar.',
    ),
    E.CONFIG_NOT_FOUND: ErrorInfo(
        code=E.CONFIG_NOT_FOUND,
        message='The configuration file given with --config could not be read.',
        hint='Check the path, or omit --config to use conch.toml from the repository.',
    ),
    E.CONFIG_LOCATION: ErrorInfo(
        code=E.CONFIG_LOCATION,
        message='The configuration search location is not a directory.',
        hint='Pass a repository directory with -C.',
    ),
    E.CONFIG_PARSE_ERROR: ErrorInfo(
        code=E.CONFIG_PARSE_ERROR,
        message='conch.toml is not valid TOML.',
        hint='Fix the syntax error at the reported line and column.',
    ),
    E.CONFIG_INVALID_VALUE: ErrorInfo(
        code=E.CONFIG_INVALID_VALUE,
        message='A conch.toml value has the wrong type.',
        hint='Lists hold strings, bounds are integers and policy.scope.required is a boolean.',
    ),
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='conch.toml contains a key conch does not know about.',
        hint='Check the spelling; unknown keys are rejected rather than ignored.',
    ),
    E.CONFIG_UNSUPPORTED_VERSION: ErrorInfo(
        code=E.CONFIG_UNSUPPORTED_VERSION,
        message='Only configuration version 1 is supported.',
        hint='Set "version = 1" at the top of conch.toml.',
    ),
    E.GIT_FAILED: ErrorInfo(
        code=E.GIT_FAILED,
        message='Reading commits with git log failed.',
        hint='Check that git is installed, the directory is a repository and the revisions exist.',
    ),
    E.BATCH_FAILED: ErrorInfo(
        code=E.BATCH_FAILED,
        message='One or more commits in the range failed to parse or broke a policy rule.',
        hint='Each failing commit is reported with its own error code.',
    ),
}


def explain(code: str) -> str | None:
    """Return a detailed explanation for an error code.

    Args:
        code: The error code string, e.g. ``"CONCH-SYNTAX-SUMMARY"``.

    Returns:
        A formatted explanation string, or ``None`` if the code is unknown.
    """
    try:
        error_code = ErrorCode(code)
    except ValueError:
        return None

    info = ERRORS.get(error_code)
    if info is None:
        return f'{code}: No detailed explanation available.'

    lines = [f'{code}: {info.message}']
    if info.hint:
        lines.append(f'  Hint: {info.hint}')
    return '\n'.join(lines)


def render_error(exc: ConchError, *, file: TextIO | None = None) -> None:
    """Render an error in compiler style, with color on a terminal.

    Output format::

        error[CONCH-SYNTAX-SUMMARY]: 1a2b3c4: syntax error: ...
          |
          = hint: The type cannot contain whitespace, ...

    A :class:`MultiError` renders each collected error in turn.

    Args:
        exc: The error to render.
        file: Output stream (defaults to ``sys.stderr``).
    """
    if isinstance(exc, MultiError):
        for err in exc.errors:
            render_error(err, file=file)
        return

    out = file or sys.stderr

    if out.isatty():
        console = Console(file=out, highlight=False)
        msg = rich_escape(exc.message)
        console.print(
            f'[bold red]error[/bold red][bold red]\\[{exc.code.value}][/bold red][bold]: {msg}[/bold]',
        )
        if exc.hint:
            console.print('  [dim]|[/dim]')
            console.print(f'  [dim]=[/dim] [cyan]hint[/cyan]: {rich_escape(exc.hint)}')
    else:
        print(f'error[{exc.code.value}]: {exc.message}', file=out)  # noqa: T201 - CLI output
        if exc.hint:
            print('  |', file=out)  # noqa: T201 - CLI output
            print(f'  = hint: {exc.hint}', file=out)  # noqa: T201 - CLI output


__all__ = [
    'E',
    'ERRORS',
    'CommitPolicyError',
    'CommitSyntaxError',
    'ConchError',
    'DescriptionLengthError',
    'ErrorCode',
    'ErrorInfo',
    'FooterFormatError',
    'InvalidVersionError',
    'MultiError',
    'RequiredFootersError',
    'explain',
    'render_error',
]
