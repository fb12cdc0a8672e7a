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

"""Per-commit output templates for ``conch --format``.

Templates use :meth:`str.format` fields. Because templates usually come
from a shell argument, the escapes ``\\n``, ``\\t`` and ``\\\\`` are
expanded first::

    conch -f '{short_id} {type}\\t{description}' main..HEAD

Available fields:

    =============== ==============================================
    Field           Value
    =============== ==============================================
    ``id``          Full commit id
    ``short_id``    Abbreviated commit id
    ``type``        Commit type
    ``scope``       Scope, or empty
    ``description`` Text after ``": "`` in the summary
    ``body``        Body text, or empty
    ``summary``     Canonical ``type(scope)!: description``
    ``breaking``    ``true`` or ``false``
    ``exclaimed``   ``true`` if the summary carried ``!``
    ``impact``      ``breaking``, ``minor``, ``patch`` or ``uncategorized``
    =============== ==============================================
"""

from __future__ import annotations

import re

from conch.commit_parsing import Classification, Commit

# Default output of ``conch --list``.
LIST_TEMPLATE = '{short_id} {summary}'

FIELDS = ('id', 'short_id', 'type', 'scope', 'description', 'body', 'summary', 'breaking', 'exclaimed', 'impact')

_ESCAPE_RE = re.compile(r'\\([\\tn])')
_ESCAPES = {'\\': '\\', 't': '\t', 'n': '\n'}


def expand_escapes(template: str) -> str:
    r"""Expand ``\n``, ``\t`` and ``\\`` in a single left-to-right pass.

    >>> expand_escapes(r'a\tb\\n')
    'a\tb\\n'
    """
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(1)], template)


def _flag(value: bool) -> str:
    return 'true' if value else 'false'


def format_commit(
    template: str,
    commit: Commit,
    impact: Classification = Classification.UNCATEGORIZED,
) -> str:
    """Render one commit through a ``--format`` template.

    Raises:
        ValueError: If the template is malformed or names an unknown field.
    """
    fields = {
        'id': commit.id,
        'short_id': commit.short_id,
        'type': commit.type,
        'scope': commit.scope,
        'description': commit.description,
        'body': commit.body,
        'summary': commit.summary(),
        'breaking': _flag(commit.is_breaking),
        'exclaimed': _flag(commit.is_exclaimed),
        'impact': impact.value,
    }
    try:
        return expand_escapes(template).format(**fields)
    except KeyError as exc:
        raise ValueError(f'unknown format field {exc.args[0]!r}; available: {", ".join(FIELDS)}') from exc
    except IndexError as exc:
        raise ValueError('positional fields are not supported; use named fields like {summary}') from exc
    except (AttributeError, TypeError) as exc:
        raise ValueError(f'invalid format field: {exc}') from exc


__all__ = [
    'FIELDS',
    'LIST_TEMPLATE',
    'expand_escapes',
    'format_commit',
]
