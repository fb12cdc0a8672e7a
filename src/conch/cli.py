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

"""Command-line interface for conch.

Checks the commits in a git revision range (or a single message file)
and optionally reports on the ones that pass::

    conch main..HEAD                    # validate only
    conch -l main..HEAD                 # list valid commits
    conch -M -P -n v1.2.0..             # count minor and patch commits
    conch -b 1.2.0 v1.2.0..             # print the next version
    conch -m .git/COMMIT_EDITMSG        # commit-msg hook
    conch explain CONCH-SYNTAX-SUMMARY  # describe an error code

Output from commits that pass is always printed, even when other commits
in the range fail. Exit codes:

    ===== ===========================================================
    Code  Meaning
    ===== ===========================================================
    0     Every commit passed.
    1     At least one commit failed, or a fatal error occurred.
    2     Invalid command line.
    130   Interrupted.
    ===== ===========================================================
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from rich_argparse import RichHelpFormatter

from conch import __version__
from conch.backends.git import GitCLIBackend
from conch.commit_parsing import Classification, Commit, strip_comments
from conch.config import Config, discover_config, load_config
from conch.errors import ConchError, MultiError, explain, render_error
from conch.formatters import LIST_TEMPLATE, format_commit
from conch.impact import aggregate, bump, classify
from conch.logging import configure_logging, get_logger
from conch.policy import apply_policies
from conch.semver import Semver
from conch.source import RawCommit, parse_range
from conch.utils.caseset import CaseInsensitiveSet

logger = get_logger('conch.cli')

# Stand-in used to check a --format template before history is read.
_SAMPLE_COMMIT = Commit(id='0', short_id='0', type='feat', description='sample')


class UsageError(Exception):
    """The command line is inconsistent; reported with exit code 2."""


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    RichHelpFormatter.styles['argparse.groups'] = 'bold yellow'
    parser = argparse.ArgumentParser(
        prog='conch',
        description='Check commit messages against the Conventional Commits standard.',
        epilog='Run "conch explain CODE" for details about an error code.',
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    parser.add_argument(
        'revisions',
        nargs='*',
        metavar='REVISION',
        help='Commits to check, in git log syntax (e.g. main..HEAD).',
    )

    source = parser.add_argument_group('source')
    source.add_argument(
        '--repo',
        '-C',
        metavar='PATH',
        default='.',
        help='Repository to read commits and conch.toml from (default: current directory).',
    )
    source.add_argument(
        '--config',
        '-c',
        metavar='FILE',
        default=None,
        help='Configuration file (default: conch.toml in the repository, if present).',
    )
    source.add_argument(
        '--message-file',
        '-m',
        metavar='FILE',
        default=None,
        help='Check one message from FILE ("-" for stdin) instead of git history. Lines starting with # are ignored.',
    )

    filters = parser.add_argument_group('filters')
    filters.add_argument(
        '--types',
        '-t',
        metavar='CSV',
        default=None,
        help='Only include commits with these types.',
    )
    filters.add_argument(
        '--scopes',
        '-s',
        metavar='CSV',
        default=None,
        help='Only include commits with these scopes.',
    )
    filters.add_argument('--breaking', '-B', action='store_true', help='Include breaking changes.')
    filters.add_argument('--minor', '-M', action='store_true', help='Include minor changes.')
    filters.add_argument('--patch', '-P', action='store_true', help='Include patches.')
    filters.add_argument(
        '--uncategorized',
        '-U',
        action='store_true',
        help='Include commits that are neither breaking, minor nor patch.',
    )

    outputs = parser.add_argument_group('outputs')
    outputs.add_argument('--list', '-l', action='store_true', help='List commits as "short_id summary".')
    outputs.add_argument(
        '--format',
        '-f',
        metavar='TEMPLATE',
        default=None,
        help='Print each commit with a template, e.g. "{short_id}\\t{type}\\t{description}".',
    )
    outputs.add_argument('--count', '-n', action='store_true', help='Print the number of commits.')
    outputs.add_argument('--impact', '-i', action='store_true', help='Print the aggregate release impact.')
    outputs.add_argument(
        '--bump-version',
        '-b',
        metavar='VERSION',
        default=None,
        help='Print the version that follows VERSION given the release impact.',
    )

    logs = parser.add_argument_group('logging')
    logs.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging.')
    logs.add_argument('--quiet', '-q', action='store_true', help='Only log warnings and errors.')
    logs.add_argument('--json-log', action='store_true', help='Log JSON lines instead of console output.')

    return parser


def build_explain_parser() -> argparse.ArgumentParser:
    """Build the parser for ``conch explain CODE``."""
    parser = argparse.ArgumentParser(
        prog='conch explain',
        description='Show a detailed explanation for an error code.',
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument('code', help='Error code (e.g. CONCH-SYNTAX-SUMMARY).')
    return parser


def _cmd_explain(args: argparse.Namespace) -> int:
    """Handle the ``explain`` subcommand."""
    result = explain(args.code)
    if result is None:
        print(f'Unknown error code: {args.code}')  # noqa: T201 - CLI output
        return 1
    print(result)  # noqa: T201 - CLI output
    return 0


def _selected_impacts(args: argparse.Namespace) -> set[Classification]:
    selected: set[Classification] = set()
    if args.breaking:
        selected.add(Classification.BREAKING)
    if args.minor:
        selected.add(Classification.MINOR)
    if args.patch:
        selected.add(Classification.PATCH)
    if args.uncategorized:
        selected.add(Classification.UNCATEGORIZED)
    return selected


def _read_message(name: str) -> RawCommit:
    """Read a message file, dropping ``#`` comment lines like git does."""
    if name == '-':
        text, label = sys.stdin.read(), 'stdin'
    else:
        try:
            text = Path(name).read_text(encoding='utf-8')
        except OSError as exc:
            raise UsageError(f'cannot read message file: {exc}') from exc
        label = name
    return RawCommit(id=label, short_id=label, message=strip_comments(text))


def _load_records(args: argparse.Namespace) -> list[RawCommit]:
    if args.message_file is not None:
        if args.revisions:
            raise UsageError('--message-file cannot be combined with revisions')
        return [_read_message(args.message_file)]
    if not args.revisions:
        raise UsageError('specify a revision range (e.g. main..HEAD) or --message-file')
    return GitCLIBackend(Path(args.repo)).log(args.revisions)


def _load_config(args: argparse.Namespace) -> Config:
    if args.config is not None:
        return load_config(Path(args.config))
    return load_config(discover_config(Path(args.repo)))


def _filter(
    commits: list[Commit],
    impacts: list[Classification],
    args: argparse.Namespace,
) -> list[tuple[Commit, Classification]]:
    """Keep commits that match every given filter.

    Impact selections combine with "or"; types, scopes and impact
    combine with "and".
    """
    types = CaseInsensitiveSet.from_csv(args.types) if args.types is not None else None
    scopes = CaseInsensitiveSet.from_csv(args.scopes) if args.scopes is not None else None
    selected = _selected_impacts(args)

    kept = []
    for commit, impact in zip(commits, impacts):
        if types is not None and commit.type not in types:
            continue
        if scopes is not None and commit.scope not in scopes:
            continue
        if selected and impact not in selected:
            continue
        kept.append((commit, impact))
    return kept


def _cmd_check(args: argparse.Namespace) -> int:
    """Check commits and print the requested outputs."""
    if args.format is not None:
        try:
            format_commit(args.format, _SAMPLE_COMMIT)
        except ValueError as exc:
            raise UsageError(f'invalid --format: {exc}') from exc

    # Validate the version before touching history so a typo fails fast.
    current = Semver.parse(args.bump_version) if args.bump_version is not None else None

    config = _load_config(args)
    records = _load_records(args)

    commits, syntax_errors = parse_range(records, config)
    commits, policy_errors = apply_policies(commits, config.policy)
    impacts = [classify(c, config.policy) for c in commits]
    selected = _filter(commits, impacts, args)
    logger.debug(
        'checked',
        total=len(records),
        valid=len(commits),
        selected=len(selected),
    )

    if args.list:
        for commit, impact in selected:
            print(format_commit(LIST_TEMPLATE, commit, impact))  # noqa: T201 - CLI output
    if args.format is not None:
        for commit, impact in selected:
            print(format_commit(args.format, commit, impact))  # noqa: T201 - CLI output
    if args.count:
        print(len(selected))  # noqa: T201 - CLI output
    overall = aggregate(impact for _, impact in selected)
    if args.impact:
        print(overall.value)  # noqa: T201 - CLI output
    if current is not None:
        print(bump(current, overall))  # noqa: T201 - CLI output

    failures = MultiError()
    for batch in (syntax_errors, policy_errors):
        if batch is not None:
            for err in batch.errors:
                failures.append(err)
    if failures.has_errors():
        render_error(failures)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Arguments without the program name (defaults to ``sys.argv[1:]``).

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv and argv[0] == 'explain':
        return _cmd_explain(build_explain_parser().parse_args(argv[1:]))

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    try:
        return _cmd_check(args)
    except UsageError as exc:
        print(f'{parser.prog}: error: {exc}', file=sys.stderr)  # noqa: T201 - CLI output
        return 2
    except ConchError as exc:
        render_error(exc)
        return 1
    except KeyboardInterrupt:
        logger.info('interrupted')
        return 130


def _main() -> None:
    """Wrapper for pyproject.toml [project.scripts] entry point."""
    sys.exit(main())


__all__ = [
    'build_parser',
    'main',
]
