# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Position paths - sibling-index addresses inside a menu forest.

A position is written as dot-separated non-negative integers::

    '0'      first root node
    '0.1'    second child of the first root node
    '0.1.2'  third child of that child

Resolution indexes into the forest, then into each ``children`` list in turn.
"""

from __future__ import annotations

import re
from typing import Any, Iterator

from .exceptions import InvalidPositionError

_POSITION_RE = re.compile(r'^\d+(\.\d+)*$')


def looks_like_position(value: Any) -> bool:
    """True if value is a Position or a string in dot-path syntax."""
    if isinstance(value, Position):
        return True
    return isinstance(value, str) and _POSITION_RE.match(value.strip()) is not None


class Position:
    """Immutable dot-path address of a node.

    Example:
        >>> pos = Position.parse('0.1.2')
        >>> pos.indexes
        (0, 1, 2)
        >>> str(pos.parent), pos.index, pos.level
        ('0.1', 2, 2)
    """

    __slots__ = ('_indexes',)

    def __init__(self, *indexes: int) -> None:
        for index in indexes:
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise InvalidPositionError(
                    f"Position segments must be non-negative integers, got {index!r}"
                )
        self._indexes: tuple[int, ...] = tuple(indexes)

    @classmethod
    def parse(cls, value: str | int | Position | tuple[int, ...] | list[int]) -> Position:
        """Parse a position from its string form or an index sequence.

        Raises:
            InvalidPositionError: If value is empty or malformed.
        """
        if isinstance(value, Position):
            if not value:
                raise InvalidPositionError("Empty position")
            return value
        if isinstance(value, (tuple, list)):
            if not value:
                raise InvalidPositionError("Empty position")
            return cls(*value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if not isinstance(value, str):
            raise InvalidPositionError(
                f"Position must be a string, not {type(value).__name__}"
            )
        text = value.strip()
        if not text:
            raise InvalidPositionError("Empty position")
        if not _POSITION_RE.match(text):
            raise InvalidPositionError(f"Malformed position '{value}'")
        return cls(*(int(part) for part in text.split('.')))

    @property
    def indexes(self) -> tuple[int, ...]:
        """Sibling indexes from the forest root down."""
        return self._indexes

    @property
    def index(self) -> int:
        """Index among siblings (last segment)."""
        return self._indexes[-1]

    @property
    def level(self) -> int:
        """Depth of the addressed node; root nodes are level 0."""
        return len(self._indexes) - 1

    @property
    def parent(self) -> Position:
        """Position of the owning node; empty for root-level nodes."""
        return Position(*self._indexes[:-1])

    @property
    def is_root_level(self) -> bool:
        """True if the addressed node sits at the top of the forest."""
        return len(self._indexes) == 1

    def child(self, index: int) -> Position:
        """Position of this node's child at index."""
        return Position(*self._indexes, index)

    def __iter__(self) -> Iterator[int]:
        return iter(self._indexes)

    def __len__(self) -> int:
        return len(self._indexes)

    def __bool__(self) -> bool:
        return bool(self._indexes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Position):
            return self._indexes == other._indexes
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._indexes)

    def __str__(self) -> str:
        return '.'.join(str(i) for i in self._indexes)

    def __repr__(self) -> str:
        return f"Position({str(self)!r})"
