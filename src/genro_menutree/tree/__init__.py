# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MenuTree package - the menu container and its position-addressed mutations.

Example:
    >>> from genro_menutree import MenuTree
    >>> menu = MenuTree([{'title': 'Home', 'url': '/'}])
    >>> menu.insert_at({'title': 'About', 'url': '/about'}).count_items()
    2
"""

from .core import MenuTree, count_items, find_by_id

__all__ = ["MenuTree", "count_items", "find_by_id"]
