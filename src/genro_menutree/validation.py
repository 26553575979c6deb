# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Validation of menu trees and menu records.

Validation collects every problem instead of stopping at the first one, so an
editor can show all of them at once.

Rules for items:
    - a node deeper than max_depth yields one depth issue for its whole
      subtree, whose descendants are not inspected
    - title is required (blank strings count as missing)
    - url is required and must pass is_valid_url()
    - target, when set, must be '_self' or '_blank'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from .config import get_config
from .node import MenuNode, as_nodes
from .position import Position

if TYPE_CHECKING:
    from .tree import MenuTree

TARGETS = ('_self', '_blank')
PLATFORMS = ('Web', 'Mobile', 'Both')
STATUSES = ('active', 'inactive')


@dataclass(frozen=True)
class ValidationIssue:
    """One validation finding.

    Attributes:
        field: Offending field ('title', 'url', 'target', 'depth', or a
            menu-level field such as 'platform').
        message: Human-readable description, naming position and level.
        position: Dot path of the offending node, None for menu-level fields.
        level: Depth of the offending node, None for menu-level fields.
    """

    field: str
    message: str
    position: str | None = None
    level: int | None = None


def is_valid_url(url: Any) -> bool:
    """Check a menu link.

    Valid links are site-relative paths ('/...'), in-page anchors ('#...')
    and absolute URLs with both a scheme and an authority. Any scheme is
    accepted.

    Example:
        >>> is_valid_url('/home'), is_valid_url('#top'), is_valid_url('example')
        (True, True, False)
    """
    if not isinstance(url, str) or not url.strip():
        return False
    if url.startswith('/') or url.startswith('#'):
        return True
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _validate_node(
    node: MenuNode,
    position: Position,
    max_depth: int,
    issues: list[ValidationIssue],
) -> None:
    """Check one node, then recurse into its children."""
    level = position.level
    prefix = f"Item {position} at level {level}"

    if level > max_depth:
        issues.append(ValidationIssue(
            'depth',
            f"{prefix}: Menu items can only be nested {max_depth + 1} levels deep",
            str(position), level,
        ))
        return

    if _is_blank(node.title):
        issues.append(ValidationIssue(
            'title', f"{prefix}: Title is required", str(position), level,
        ))

    if _is_blank(node.url):
        issues.append(ValidationIssue(
            'url', f"{prefix}: URL is required", str(position), level,
        ))
    elif not is_valid_url(node.url):
        issues.append(ValidationIssue(
            'url', f"{prefix}: Invalid URL format", str(position), level,
        ))

    if node.target and node.target not in TARGETS:
        issues.append(ValidationIssue(
            'target', f"{prefix}: Target must be _self or _blank",
            str(position), level,
        ))

    for index, child in enumerate(node.children):
        _validate_node(child, position.child(index), max_depth, issues)


def validate_nodes(
    nodes: list[MenuNode], max_depth: int | None = None
) -> list[ValidationIssue]:
    """Validate MenuNode objects in place (no copying).

    Used internally where the nodes are already owned by the caller.
    """
    if max_depth is None:
        max_depth = get_config().max_depth
    issues: list[ValidationIssue] = []
    for index, node in enumerate(nodes):
        _validate_node(node, Position(index), max_depth, issues)
    return issues


def validate(
    nodes: Iterable[MenuNode | Mapping[str, Any]],
    max_depth: int | None = None,
) -> list[ValidationIssue]:
    """Validate a menu forest.

    Args:
        nodes: Root-level nodes, as MenuNode or plain dicts.
        max_depth: Deepest allowed level; None uses the configured value.

    Returns:
        Every issue found, in depth-first order. Empty if the tree is valid.

    Example:
        >>> validate([{'title': '', 'url': '/'}])[0].message
        'Item 0 at level 0: Title is required'
    """
    return validate_nodes(as_nodes(nodes), max_depth)


def validate_menu(
    menu: MenuTree | Mapping[str, Any],
    max_depth: int | None = None,
) -> list[ValidationIssue]:
    """Validate a menu record: its own fields, then all of its items."""
    from .tree import MenuTree

    if not isinstance(menu, MenuTree):
        menu = MenuTree.from_dict(menu)

    issues: list[ValidationIssue] = []
    if _is_blank(menu.title):
        issues.append(ValidationIssue('title', "Menu title is required"))
    if menu.platform is not None and menu.platform not in PLATFORMS:
        issues.append(ValidationIssue(
            'platform', "Platform must be Web, Mobile, or Both",
        ))
    if menu.status is not None and menu.status not in STATUSES:
        issues.append(ValidationIssue(
            'status', "Status must be either active or inactive",
        ))
    sort_order = menu.sort_order
    if sort_order is not None and (
        isinstance(sort_order, bool)
        or not isinstance(sort_order, int)
        or sort_order < 0
    ):
        issues.append(ValidationIssue(
            'sort_order', "Sort order must be a non-negative integer",
        ))

    if max_depth is None:
        max_depth = menu.max_depth
    issues.extend(validate_nodes(menu.root, max_depth))
    return issues
