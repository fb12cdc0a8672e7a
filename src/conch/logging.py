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


"""Structured logging for conch.

Events are emitted through `structlog <https://www.structlog.org/>`_ and
handed to the standard library ``logging`` root handler on stderr. Stdout
only ever carries command output (listings, counts, the next version),
so ``conch -b 1.2.3 main..HEAD`` is safe to capture in a script.

Two renderers are available:

- console (default): short lines, colored on a terminal, no timestamps,
  since conch usually runs inside a git hook or CI step that already
  stamps its output;
- JSON (``--json-log``): one object per line with an ISO timestamp and
  structured tracebacks.

Usage::

    from conch.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger(__name__)
    log.debug('commit_parsed', commit='1a2b3c4', type='feat')
"""

from __future__ import annotations

import logging
import sys

import structlog


def _level(*, verbose: bool, quiet: bool) -> int:
    """Map the CLI flags to a level; ``quiet`` wins over ``verbose``."""
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def _pre_chain(*, json_log: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if json_log:
        processors += [
            structlog.processors.TimeStamper(fmt='iso', utc=True),
            structlog.processors.dict_tracebacks,
        ]
    return processors


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Configure structlog for conch.

    Safe to call more than once; each call replaces the root handler, so
    the CLI can be driven repeatedly from tests.

    Args:
        verbose: Show debug events (``commit_parsed``, ``run_command``...).
        quiet: Show only warnings and errors.
        json_log: Render JSON lines instead of console text.
    """
    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=_level(verbose=verbose, quiet=quiet),
        force=True,
    )

    renderer: structlog.types.Processor
    if json_log:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *_pre_chain(json_log=json_log),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = 'conch') -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


__all__ = [
    'configure_logging',
    'get_logger',
]
