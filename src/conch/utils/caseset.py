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

"""Case-insensitive string set that remembers the original casing.

Commit types, scopes and footer tokens are matched without regard to
case (``Feat`` is the same type as ``feat``), but error messages and
listings should show the value the way the user wrote it in the
configuration. :class:`CaseInsensitiveSet` stores a mapping from the
lowercased key to the original string.

Usage::

    types = CaseInsensitiveSet(['feat', 'Fix'])
    assert 'FIX' in types
    assert types.value('fix') == 'Fix'
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class CaseInsensitiveSet:
    """A set of strings with case-insensitive membership.

    Iteration yields the original (display) values in insertion order.
    When two items differ only by case, the last one added wins.
    """

    __slots__ = ('_items',)

    def __init__(self, items: Iterable[str] = ()) -> None:
        """Initialize from an iterable of strings."""
        self._items: dict[str, str] = {}
        for item in items:
            self.add(item)

    @classmethod
    def from_csv(cls, text: str) -> CaseInsensitiveSet:
        """Build a set from a comma-separated string (as given on the command line).

        Empty entries are ignored, so ``'feat,,fix,'`` yields two items.
        """
        return cls(part.strip() for part in text.split(',') if part.strip())

    def add(self, item: str) -> None:
        """Add an item, replacing the display value of any case variant."""
        self._items[item.lower()] = item

    def discard(self, item: str) -> None:
        """Remove an item if present, ignoring case."""
        self._items.pop(item.lower(), None)

    def value(self, item: str) -> str | None:
        """Return the original casing of ``item``, or ``None`` if absent."""
        return self._items.get(item.lower())

    def copy(self) -> CaseInsensitiveSet:
        """Return an independent copy that can be mutated freely."""
        clone = CaseInsensitiveSet()
        clone._items = dict(self._items)
        return clone

    def keys(self) -> list[str]:
        """Return the normalized (lowercase) keys."""
        return list(self._items)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, str) and item.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CaseInsensitiveSet):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'CaseInsensitiveSet({list(self._items.values())!r})'

    def __str__(self) -> str:
        return ','.join(self._items.values())


__all__ = [
    'CaseInsensitiveSet',
]
