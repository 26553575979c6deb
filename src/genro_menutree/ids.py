# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Temporary identifiers for nodes created before storage assigns one."""

from __future__ import annotations

import secrets
import string
import time
from collections.abc import Iterable, Mapping
from typing import Any

from .config import get_config
from .node import MenuNode, as_nodes

_ALPHABET = string.ascii_lowercase + string.digits
_SUFFIX_LENGTH = 9


def generate_temp_id() -> str:
    """Return a new temporary id: prefix, nanosecond timestamp, random suffix.

    Stateless; uniqueness relies on time plus randomness only.

    Example:
        >>> generate_temp_id()  # doctest: +SKIP
        'temp_1760774400123456789_k3j9x0q2a'
    """
    suffix = ''.join(secrets.choice(_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{get_config().temp_id_prefix}{time.time_ns()}_{suffix}"


def is_temp_id(value: Any) -> bool:
    """True if value was issued by generate_temp_id()."""
    return isinstance(value, str) and value.startswith(get_config().temp_id_prefix)


def _assign_ids(nodes: list[MenuNode]) -> None:
    for node in nodes:
        if node.id is None or node.id == '':
            node.id = generate_temp_id()
        _assign_ids(node.children)


def ensure_ids(nodes: Iterable[MenuNode | Mapping[str, Any]]) -> list[MenuNode]:
    """Return a copy where every node without an id gets a temporary one."""
    result = as_nodes(nodes)
    _assign_ids(result)
    return result
