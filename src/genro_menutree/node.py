# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MenuNode - one navigation entry of a menu tree."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from copy import deepcopy
from typing import Any

SCALAR_FIELDS = ('id', 'title', 'url', 'target', 'icon', 'description')


class MenuNode:
    """A navigation entry, possibly with nested child entries.

    Each node has:
    - id: Identifier, persisted or temporary (may be None)
    - title, url: Required display text and link
    - target, icon, description: Optional fields (None until normalized)
    - children: Ordered list of MenuNode; sibling order is display order
    - attr: Any further fields carried by the payload

    A node is owned by exactly one parent list. Operations that return new
    trees copy nodes rather than sharing them.

    Example:
        >>> node = MenuNode('Home', '/', children=[MenuNode('News', '/news')])
        >>> node.children[0].title
        'News'
        >>> node.as_dict()['children'][0]['url']
        '/news'
    """

    __slots__ = (
        'id', 'title', 'url', 'target', 'icon', 'description',
        'children', 'attr',
    )

    def __init__(
        self,
        title: str | None = None,
        url: str | None = None,
        target: str | None = None,
        icon: str | None = None,
        description: str | None = None,
        children: Iterable[MenuNode] | None = None,
        id: Any = None,
        attr: dict[str, Any] | None = None,
    ) -> None:
        self.id = id
        self.title = title
        self.url = url
        self.target = target
        self.icon = icon
        self.description = description
        self.children: list[MenuNode] = list(children) if children else []
        self.attr: dict[str, Any] = deepcopy(attr) if attr else {}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MenuNode:
        """Build a node (and its subtree) from a plain nested record.

        Unknown keys are kept in ``attr``. The input mapping is not modified.

        Raises:
            TypeError: If data is not a mapping or children is not a list.
        """
        if isinstance(data, MenuNode):
            return data.copy()
        if not isinstance(data, Mapping):
            raise TypeError(
                f"menu item must be a dict, not {type(data).__name__}"
            )
        raw_children = data.get('children')
        if raw_children is None:
            raw_children = []
        elif not isinstance(raw_children, (list, tuple)):
            raise TypeError(
                f"children must be a list, not {type(raw_children).__name__}"
            )
        attr = {
            k: v for k, v in data.items()
            if k not in SCALAR_FIELDS and k != 'children'
        }
        return cls(
            title=data.get('title'),
            url=data.get('url'),
            target=data.get('target'),
            icon=data.get('icon'),
            description=data.get('description'),
            children=[cls.from_dict(child) for child in raw_children],
            id=data.get('id'),
            attr=attr,
        )

    @classmethod
    def blank(cls) -> MenuNode:
        """Return the empty item the editor starts a new entry from."""
        return cls(title='', url='', target='_self', icon='', description='')

    def as_dict(self, children: bool = True) -> dict[str, Any]:
        """Convert to a plain nested record.

        Fields that are None are omitted, except title and url.

        Args:
            children: If False, the children key is left out.
        """
        result: dict[str, Any] = {}
        if self.id is not None:
            result['id'] = self.id
        result['title'] = self.title
        result['url'] = self.url
        for name in ('target', 'icon', 'description'):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        result.update(deepcopy(self.attr))
        if children:
            result['children'] = [child.as_dict() for child in self.children]
        return result

    def copy(self) -> MenuNode:
        """Return a deep copy of this node and its subtree."""
        return MenuNode(
            title=self.title,
            url=self.url,
            target=self.target,
            icon=self.icon,
            description=self.description,
            children=[child.copy() for child in self.children],
            id=self.id,
            attr=self.attr,
        )

    @property
    def is_branch(self) -> bool:
        """True if this node has children."""
        return bool(self.children)

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self.children

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MenuNode):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"MenuNode({self.title!r}, url={self.url!r}, "
            f"children={len(self.children)})"
        )


def as_nodes(items: Iterable[MenuNode | Mapping[str, Any]] | None) -> list[MenuNode]:
    """Coerce a sequence of nodes or plain records to fresh MenuNode copies.

    Raises:
        TypeError: If items is not a list or an item is not a node or dict.
    """
    if items is None:
        return []
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Iterable):
        raise TypeError(
            f"menu items must be a list, not {type(items).__name__}"
        )
    return [MenuNode.from_dict(item) for item in items]
