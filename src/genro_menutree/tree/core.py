# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MenuTree - a named, ordered forest of navigation entries.

This module provides the MenuTree class, the unit the storage layer persists,
together with position-addressed mutation.

Key Features:
    - **Value semantics**: every mutation returns a new MenuTree; the
      original and its nodes are never touched, so older snapshots stay
      usable for undo or diffing
    - **Positional addressing**: dot paths of sibling indexes ('0.1.2')
    - **Id addressing**: update/remove/move also accept a node id
    - **All-or-nothing commits**: the candidate tree is normalized and
      validated before a new value is returned

Addressing:
    A target given as a Position, or as a string in dot-path syntax, is a
    position. Anything else (int ids, 'temp_...' ids, other strings) is an
    id, looked up in pre-order.

Example:
    Basic usage::

        menu = MenuTree([{'title': 'Home', 'url': '/'}], title='Main')
        menu = menu.insert_at({'title': 'News', 'url': '/news'}, '0.0')
        menu = menu.update_at('0.0', {'title': 'Latest news'})
        menu['0.0'].title  # 'Latest news'

        menu = menu.remove_at('0.0')
        menu.count_items()  # 1
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from ..exceptions import InvalidPositionError, NodeNotFoundError, ValidationError
from ..ids import ensure_ids
from ..node import SCALAR_FIELDS, MenuNode, as_nodes
from ..normalize import normalize_nodes
from ..position import Position, looks_like_position
from ..validation import ValidationIssue, validate_nodes

logger = logging.getLogger(__name__)

NodeLike = MenuNode | Mapping[str, Any]


def _item_id(item: Any) -> Any:
    if isinstance(item, MenuNode):
        return item.id
    return item.get('id') if isinstance(item, Mapping) else None


def _item_children(item: Any) -> list[Any]:
    if isinstance(item, MenuNode):
        return item.children
    children = item.get('children') if isinstance(item, Mapping) else None
    return children if isinstance(children, (list, tuple)) else []


def find_by_id(nodes: Iterable[Any], node_id: Any) -> Any:
    """Find the first node with the given id, in pre-order.

    Works on MenuNode lists and on plain nested dicts alike, and returns the
    matching item itself (not a copy). Ids are assumed unique across the
    whole forest; duplicates are not reported.

    Returns:
        The matching node or dict, or None when nothing matches.
    """
    if node_id is None:
        return None
    for item in nodes:
        if _item_id(item) == node_id:
            return item
        found = find_by_id(_item_children(item), node_id)
        if found is not None:
            return found
    return None


def _find_position(
    nodes: list[MenuNode], node_id: Any, prefix: tuple[int, ...] = ()
) -> Position | None:
    if node_id is None:
        return None
    for index, node in enumerate(nodes):
        if node.id == node_id:
            return Position(*prefix, index)
        found = _find_position(node.children, node_id, (*prefix, index))
        if found is not None:
            return found
    return None


def _get_node_by_position(nodes: list[MenuNode], position: Position) -> MenuNode:
    """Resolve a position by indexing into nested children lists.

    Raises:
        NodeNotFoundError: If any segment is out of range.
    """
    current: MenuNode | None = None
    siblings = nodes
    for depth, index in enumerate(position):
        if index >= len(siblings):
            walked = Position(*position.indexes[:depth + 1])
            raise NodeNotFoundError(
                f"Position {walked} out of range (0-{len(siblings) - 1})"
            )
        current = siblings[index]
        siblings = current.children
    if current is None:
        raise NodeNotFoundError("Empty position")
    return current


def _children_at(nodes: list[MenuNode], parent: Position) -> list[MenuNode]:
    """Return the sibling list owned by parent (the forest for an empty one)."""
    if not parent:
        return nodes
    return _get_node_by_position(nodes, parent).children


class MenuTree:
    """A named menu: metadata plus an ordered forest of MenuNode.

    Attributes:
        id: Storage identifier of the menu, if any.
        title: Menu name.
        platform: 'Web', 'Mobile' or 'Both'.
        status: 'active' or 'inactive'.
        sort_order: Display order among menus (owned by the menu list).
        root: Root-level MenuNode list, in display order.
        max_depth: Deepest allowed level; None uses the configured value.

    Example:
        >>> menu = MenuTree([{'id': 1, 'title': 'Home', 'url': '/'}])
        >>> menu.find_by_id(1).title
        'Home'
        >>> menu.get_node('3') is None
        True
    """

    __slots__ = (
        'id', 'title', 'platform', 'status', 'sort_order', 'root', 'max_depth',
    )

    def __init__(
        self,
        root: Iterable[NodeLike] | None = None,
        title: str = '',
        platform: str = 'Web',
        status: str = 'active',
        sort_order: int = 0,
        id: Any = None,
        max_depth: int | None = None,
    ) -> None:
        """Initialize a MenuTree.

        Args:
            root: Root-level items, as MenuNode or plain dicts. They are
                copied; the tree owns its nodes.
            title: Menu name.
            platform: Target platform.
            status: Menu status.
            sort_order: Display order among menus.
            id: Storage identifier.
            max_depth: Per-tree depth cap, overriding the configured one.
        """
        self.id = id
        self.title = title
        self.platform = platform
        self.status = status
        self.sort_order = sort_order
        self.root: list[MenuNode] = as_nodes(root)
        self.max_depth = max_depth

    # ==================== Construction ====================

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], max_depth: int | None = None) -> MenuTree:
        """Build a MenuTree from a stored menu record.

        The item list is read from 'links' (or 'root'); a JSON string is
        accepted, as stored by the persistence layer. A numeric string
        sort_order is converted to int.

        Raises:
            TypeError: If data is not a dict.
            ValueError: If links is a string that is not valid JSON.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"menu must be a dict, not {type(data).__name__}")

        links = data.get('links', data.get('root'))
        if isinstance(links, str):
            links = json.loads(links) if links.strip() else []

        sort_order = data.get('sort_order', 0)
        if isinstance(sort_order, str) and sort_order.strip().isdigit():
            sort_order = int(sort_order)

        return cls(
            root=links,
            title=data.get('title', ''),
            platform=data.get('platform', 'Web'),
            status=data.get('status', 'active'),
            sort_order=sort_order,
            id=data.get('id'),
            max_depth=max_depth,
        )

    @classmethod
    def from_json(cls, text: str, **menu_fields: Any) -> MenuTree:
        """Build a MenuTree from a JSON-serialized item list."""
        return cls(root=json.loads(text) if text else [], **menu_fields)

    @classmethod
    def blank(cls) -> MenuTree:
        """Return the empty menu the editor starts a new menu from."""
        return cls()

    def _replace(self, root: list[MenuNode]) -> MenuTree:
        """New tree with the same metadata and the given (owned) root."""
        tree = MenuTree(
            title=self.title,
            platform=self.platform,
            status=self.status,
            sort_order=self.sort_order,
            id=self.id,
            max_depth=self.max_depth,
        )
        tree.root = root
        return tree

    def copy(self) -> MenuTree:
        """Return a deep copy."""
        return self._replace([node.copy() for node in self.root])

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"MenuTree({self.title!r}, items={self.count_items()})"

    def __len__(self) -> int:
        """Return the number of root-level nodes."""
        return len(self.root)

    def __iter__(self) -> Iterator[MenuNode]:
        """Iterate over root-level nodes in display order."""
        return iter(self.root)

    def __getitem__(self, position: str | Position) -> MenuNode:
        """Get the node at a position.

        Raises:
            NodeNotFoundError: If the position does not resolve.
        """
        return _get_node_by_position(self.root, Position.parse(position))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MenuTree):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    __hash__ = None  # type: ignore[assignment]

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert to a plain menu record, items under 'links'."""
        result: dict[str, Any] = {}
        if self.id is not None:
            result['id'] = self.id
        result.update(
            title=self.title,
            platform=self.platform,
            status=self.status,
            sort_order=self.sort_order,
            links=[node.as_dict() for node in self.root],
        )
        return result

    def to_json(self) -> str:
        """Serialize the item list as the JSON blob storage persists."""
        return json.dumps([node.as_dict() for node in self.root])

    # ==================== Navigation ====================

    def walk(self) -> Iterator[tuple[Position, MenuNode]]:
        """Yield (position, node) pairs in pre-order."""

        def _walk_gen(
            nodes: list[MenuNode], prefix: tuple[int, ...]
        ) -> Iterator[tuple[Position, MenuNode]]:
            for index, node in enumerate(nodes):
                position = Position(*prefix, index)
                yield position, node
                yield from _walk_gen(node.children, position.indexes)

        return _walk_gen(self.root, ())

    @property
    def depth(self) -> int:
        """Deepest level present; -1 for an empty tree."""
        return max((pos.level for pos, _ in self.walk()), default=-1)

    def count_items(self) -> int:
        """Count every node, nested ones included."""
        return count_items(self.root)

    def get_node(self, position: str | Position) -> MenuNode | None:
        """Return the node at a position, or None if it does not resolve.

        Raises:
            InvalidPositionError: If position is malformed.
        """
        try:
            return self[position]
        except NodeNotFoundError:
            return None

    def find_by_id(self, node_id: Any) -> MenuNode | None:
        """Return the first node with the given id in pre-order, or None."""
        return find_by_id(self.root, node_id)

    def position_of(self, node_id: Any) -> Position | None:
        """Return the position of the first node with the given id, or None."""
        return _find_position(self.root, node_id)

    def _locate(self, root: list[MenuNode], target: Any) -> Position:
        """Turn an id or position into a position that resolves in root.

        Raises:
            NodeNotFoundError: If nothing matches.
        """
        if looks_like_position(target):
            position = Position.parse(target)
            _get_node_by_position(root, position)
            return position
        position = _find_position(root, target)
        if position is None:
            raise NodeNotFoundError(f"Menu item with id {target!r} not found")
        return position

    # ==================== Validation ====================

    def validate(self) -> list[ValidationIssue]:
        """Validate the items of this tree; empty list when valid."""
        return validate_nodes(self.root, self.max_depth)

    @property
    def is_valid(self) -> bool:
        """True if the items pass validation."""
        return not self.validate()

    def _commit(self, root: list[MenuNode], action: str) -> MenuTree:
        """Normalize and validate a candidate root, then wrap it in a new tree.

        Raises:
            ValidationError: If the candidate is invalid; nothing is returned
                and self is unchanged.
        """
        normalize_nodes(root)
        issues = validate_nodes(root, self.max_depth)
        if issues:
            logger.warning(
                "Menu %r: %s rejected with %d issue(s)",
                self.title, action, len(issues),
            )
            raise ValidationError(issues)
        tree = self._replace(root)
        logger.debug(
            "Menu %r: %s committed (%d items)",
            self.title, action, tree.count_items(),
        )
        return tree

    # ==================== Mutation ====================

    def insert_at(
        self, node: NodeLike, position: str | Position | None = None
    ) -> MenuTree:
        """Insert a node, returning a new tree.

        Args:
            node: The node to insert (MenuNode or dict). It is copied; nodes
                of its subtree without an id receive a temporary id.
            position: Where to insert. None appends at the top level.
                Otherwise the path minus its last segment addresses the
                parent, and the last segment is the index among its children,
                following siblings shifting right.

        Raises:
            InvalidPositionError: If the parent does not exist or the index
                is beyond the end of its children.
            ValidationError: If the resulting tree would be invalid.
        """
        new_node = ensure_ids([node])[0]
        root = [n.copy() for n in self.root]

        if position is None:
            root.append(new_node)
        else:
            pos = Position.parse(position)
            try:
                siblings = _children_at(root, pos.parent)
            except NodeNotFoundError as e:
                raise InvalidPositionError(
                    f"Cannot insert at {pos}: parent {pos.parent} not found"
                ) from e
            if pos.index > len(siblings):
                raise InvalidPositionError(
                    f"Cannot insert at {pos}: index out of range (0-{len(siblings)})"
                )
            siblings.insert(pos.index, new_node)

        return self._commit(root, 'insert')

    def update_at(
        self, target: Any, patch: NodeLike
    ) -> MenuTree:
        """Update the scalar fields of a node, returning a new tree.

        Keys of patch whose value is None are ignored, as is 'children'.
        Keys other than the node fields are stored in the node's attr.

        Args:
            target: Node id or position.
            patch: Dict (or MenuNode) of new field values.

        Raises:
            NodeNotFoundError: If target does not resolve.
            ValidationError: If the resulting tree would be invalid.
        """
        if isinstance(patch, MenuNode):
            patch = patch.as_dict(children=False)
        root = [n.copy() for n in self.root]
        node = _get_node_by_position(root, self._locate(root, target))

        for key, value in patch.items():
            if value is None or key == 'children':
                continue
            if key in SCALAR_FIELDS:
                setattr(node, key, value)
            else:
                node.attr[key] = value

        return self._commit(root, 'update')

    def remove_at(self, target: Any) -> MenuTree:
        """Remove a node and its whole subtree, returning a new tree.

        Raises:
            NodeNotFoundError: If target does not resolve.
        """
        root = [n.copy() for n in self.root]
        position = self._locate(root, target)
        removed = _children_at(root, position.parent).pop(position.index)
        logger.debug(
            "Menu %r: removed %r at %s", self.title, removed.title, position
        )
        return self._replace(root)

    def move_at(self, source: Any, destination: str | Position) -> MenuTree:
        """Move a node (with its subtree) to another position.

        destination is read against the tree after the node was detached,
        so moving '0' to '2' among three siblings makes it the last one.

        Raises:
            NodeNotFoundError: If source does not resolve.
            InvalidPositionError: If destination cannot host the node.
            ValidationError: If the resulting tree would be invalid.
        """
        root = [n.copy() for n in self.root]
        position = self._locate(root, source)
        moving = _children_at(root, position.parent).pop(position.index)

        dest = Position.parse(destination)
        try:
            siblings = _children_at(root, dest.parent)
        except NodeNotFoundError as e:
            raise InvalidPositionError(
                f"Cannot move to {dest}: parent {dest.parent} not found"
            ) from e
        if dest.index > len(siblings):
            raise InvalidPositionError(
                f"Cannot move to {dest}: index out of range (0-{len(siblings)})"
            )
        siblings.insert(dest.index, moving)

        return self._commit(root, 'move')

    def reorder(self, new_structure: Iterable[NodeLike] | MenuTree) -> MenuTree:
        """Replace the whole forest, as submitted after a drag and drop.

        The structure is copied, normalized and validated; on failure the
        ValidationError lists every issue and self is left as it was.

        Raises:
            ValidationError: If new_structure is invalid.
        """
        if isinstance(new_structure, MenuTree):
            new_structure = new_structure.root
        return self._commit(as_nodes(new_structure), 'reorder')


def count_items(nodes: Iterable[Any]) -> int:
    """Count every node of a forest, nested ones included.

    Accepts MenuNode lists and plain nested dicts.
    """
    return sum(1 + count_items(_item_children(item)) for item in nodes)
