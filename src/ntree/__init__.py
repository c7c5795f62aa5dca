# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ntree - Generic n-ary tree with unique values.

A lightweight, zero-dependency library: parents own their children,
children refer back to their parent weakly, and no value appears twice
in the same tree.
"""

__version__ = "0.1.0"

from .exceptions import (
    BorrowError,
    DuplicateValueError,
    NTreeError,
)
from .node import Node

__all__ = [
    # Core classes
    "Node",
    # Exceptions
    "NTreeError",
    "BorrowError",
    "DuplicateValueError",
]
