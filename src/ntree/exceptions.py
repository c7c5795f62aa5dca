# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ntree exceptions."""

from __future__ import annotations

from typing import Any


class NTreeError(Exception):
    """Base exception for ntree errors."""

    pass


class BorrowError(NTreeError, RuntimeError):
    """Raised when a node record is mutated while it is being read or written.

    This signals a programming error (e.g. adding children to a node while
    iterating over them) and is never recovered from inside the library.
    """

    pass


class DuplicateValueError(NTreeError, ValueError):
    """Raised when an attach would put the same value twice in one tree.

    Only raised when ``raise_on_error=True`` is passed to ``add_child``
    or ``add_leaf``; by default the attach just returns False.
    """

    def __init__(self, values: list[Any]) -> None:
        self.values = values
        super().__init__(f"values already present in the tree: {values!r}")

    def __reduce__(self) -> tuple[type[DuplicateValueError], tuple[list[Any]]]:
        return type(self), (self.values,)
