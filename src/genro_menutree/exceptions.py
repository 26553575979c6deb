# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MenuTree exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .validation import ValidationIssue


class MenuTreeError(Exception):
    """Base exception for MenuTree errors."""

    pass


class ValidationError(MenuTreeError):
    """Raised when a candidate tree fails validation.

    Carries every problem found, not just the first one.

    Attributes:
        issues: List of ValidationIssue, in depth-first order.
    """

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = list(issues)
        super().__init__('; '.join(issue.message for issue in self.issues))

    @property
    def messages(self) -> list[str]:
        """All issue messages."""
        return [issue.message for issue in self.issues]


class InvalidPositionError(MenuTreeError, ValueError):
    """Raised when a position path is malformed or cannot host an insertion."""

    pass


class NodeNotFoundError(MenuTreeError, KeyError):
    """Raised when a mutation target does not resolve to a node."""

    def __str__(self) -> str:
        # KeyError quotes its argument
        return str(self.args[0]) if self.args else ''
