# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Default-filling for menu trees."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .node import MenuNode, as_nodes

DEFAULT_TARGET = '_self'


def _fill_defaults(nodes: list[MenuNode]) -> None:
    for node in nodes:
        if not node.target:
            node.target = DEFAULT_TARGET
        if node.icon is None:
            node.icon = ''
        if node.description is None:
            node.description = ''
        _fill_defaults(node.children)


def normalize_nodes(nodes: list[MenuNode]) -> list[MenuNode]:
    """Fill defaults on nodes the caller already owns, in place."""
    _fill_defaults(nodes)
    return nodes


def normalize(nodes: Iterable[MenuNode | Mapping[str, Any]]) -> list[MenuNode]:
    """Return a deep, default-filled copy of a menu forest.

    target defaults to '_self' when missing or empty, icon and description
    to ''. Every other field passes through unchanged. The input is never
    modified. Idempotent.

    Example:
        >>> normalize([{'title': 'Home', 'url': '/'}])[0].as_dict()
        {'title': 'Home', 'url': '/', 'target': '_self', 'icon': '', 'description': '', 'children': []}
    """
    return normalize_nodes(as_nodes(nodes))
