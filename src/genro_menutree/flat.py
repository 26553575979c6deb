# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Conversion between nested menu trees and flat, order-annotated rows.

A flat row is a node's own fields (children excluded) plus:
    - parent_id: id of the owning node, None for root-level nodes
    - sort_order: zero-based index among its siblings

For a tree with unique ids, ``to_hierarchy(to_flat(nodes))`` rebuilds the same
tree with sibling order preserved.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .node import MenuNode, as_nodes

logger = logging.getLogger(__name__)

ROOT_PARENT = None
_ROW_KEYS = ('parent_id', 'sort_order', 'children')


def to_flat(nodes: Iterable[MenuNode | Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Flatten a menu forest into rows, in pre-order.

    Example:
        >>> rows = to_flat([{'id': 'a', 'title': 'A', 'url': '/',
        ...                  'children': [{'id': 'b', 'title': 'B', 'url': '/b'}]}])
        >>> [(r['id'], r['parent_id'], r['sort_order']) for r in rows]
        [('a', None, 0), ('b', 'a', 0)]
    """
    rows: list[dict[str, Any]] = []

    def _traverse(siblings: list[MenuNode], parent_id: Any) -> None:
        for index, node in enumerate(siblings):
            row = node.as_dict(children=False)
            row['parent_id'] = parent_id
            row['sort_order'] = index
            rows.append(row)
            if node.children:
                _traverse(node.children, node.id)

    _traverse(as_nodes(nodes), ROOT_PARENT)
    return rows


def _sort_key(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def to_hierarchy(rows: Iterable[Mapping[str, Any]]) -> list[MenuNode]:
    """Rebuild a menu forest from flat rows.

    Rows are attached to their parents in ascending sort_order (ties keep
    input order). Rows that cannot be placed under a parent become extra
    root nodes instead of being dropped:
        - parent_id matching no row (orphans)
        - parent_id equal to the row's own id
        - parent chains that loop back on themselves (the loop is cut at
          the first row reached twice)

    When several rows share an id, the first one receives that id's children.

    Raises:
        TypeError: If a row is not a dict.
    """
    entries: list[tuple[int, int, Any, MenuNode]] = []
    by_id: dict[Any, MenuNode] = {}

    for order, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise TypeError(f"flat row must be a dict, not {type(row).__name__}")
        node = MenuNode.from_dict(
            {k: v for k, v in row.items() if k not in _ROW_KEYS}
        )
        entries.append((_sort_key(row.get('sort_order')), order, row.get('parent_id'), node))
        if node.id is None:
            continue
        if node.id in by_id:
            logger.warning("Duplicate menu item id %r in flat rows", node.id)
        else:
            by_id[node.id] = node

    entries.sort(key=lambda entry: (entry[0], entry[1]))

    parents: dict[int, MenuNode | None] = {}
    for _, _, parent_id, node in entries:
        parent = None
        if parent_id is not ROOT_PARENT:
            parent = by_id.get(parent_id)
            if parent is None:
                logger.warning(
                    "Menu item %r has unknown parent %r, kept as root",
                    node.id, parent_id,
                )
            elif parent is node:
                logger.warning(
                    "Menu item %r is its own parent, kept as root", node.id
                )
                parent = None
        parents[id(node)] = parent

    # cut parent loops
    done: set[int] = set()
    for _, _, _, node in entries:
        chain: set[int] = set()
        current: MenuNode | None = node
        while current is not None and id(current) not in done:
            if id(current) in chain:
                logger.warning(
                    "Menu item %r is part of a parent loop, kept as root",
                    current.id,
                )
                parents[id(current)] = None
                break
            chain.add(id(current))
            current = parents[id(current)]
        done.update(chain)

    roots: list[MenuNode] = []
    for _, _, _, node in entries:
        parent = parents[id(node)]
        if parent is None:
            roots.append(node)
        else:
            parent.children.append(node)
    return roots
