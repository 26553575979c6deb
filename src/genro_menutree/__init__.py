# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-MenuTree - Hierarchical navigation menus for admin editors.

A lightweight, zero-dependency library that validates, normalizes, flattens
and mutates nested navigation-menu trees (Genro Kyō).
"""

__version__ = "0.1.0"

from .config import MenuTreeConfig, configure_logging, get_config, set_config
from .exceptions import (
    InvalidPositionError,
    MenuTreeError,
    NodeNotFoundError,
    ValidationError,
)
from .flat import to_flat, to_hierarchy
from .ids import ensure_ids, generate_temp_id, is_temp_id
from .node import MenuNode
from .normalize import normalize
from .position import Position
from .tree import MenuTree, count_items, find_by_id
from .validation import ValidationIssue, is_valid_url, validate, validate_menu

__all__ = [
    # Core classes
    "MenuTree",
    "MenuNode",
    "Position",
    # Validation
    "validate",
    "validate_menu",
    "is_valid_url",
    "ValidationIssue",
    # Normalization and conversion
    "normalize",
    "to_flat",
    "to_hierarchy",
    # Lookup and ids
    "find_by_id",
    "count_items",
    "generate_temp_id",
    "is_temp_id",
    "ensure_ids",
    # Configuration
    "MenuTreeConfig",
    "get_config",
    "set_config",
    "configure_logging",
    # Exceptions
    "MenuTreeError",
    "ValidationError",
    "InvalidPositionError",
    "NodeNotFoundError",
]
