# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Traversal and mutation algorithms over NodeRecord trees.

These functions hold all the invariant enforcement of the library:
- find / iter_preorder / flatten_values: pre-order searches
- get_root / depth: walks up the weak parent references
- overlapping_values: the uniqueness check used before every attach
- attach / detach: the only functions that change the tree shape

Node handles forward to these functions and wrap the returned records.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Any, Iterator

from .record import NodeRecord

logger = logging.getLogger(__name__)


# ==================== Traversal ====================

def iter_preorder(record: NodeRecord) -> Iterator[NodeRecord]:
    """Yield record and its descendants in pre-order.

    The child list of each record is borrowed for reading while it is
    iterated, so modifying it from the loop body raises BorrowError.
    A record's own list is borrowed only after the record is yielded.
    """
    yield record
    # One (borrow, children iterator) frame per open level.
    frames: list[tuple[ExitStack, Iterator[NodeRecord]]] = []
    try:
        frames.append(_open_frame(record))
        while frames:
            borrow, children = frames[-1]
            child = next(children, None)
            if child is None:
                frames.pop()
                borrow.close()
                continue
            yield child
            frames.append(_open_frame(child))
    finally:
        while frames:
            frames.pop()[0].close()


def _open_frame(record: NodeRecord) -> tuple[ExitStack, Iterator[NodeRecord]]:
    """Borrow record's child list for reading and return it with an iterator."""
    borrow = ExitStack()
    children = borrow.enter_context(record.reading())
    return borrow, iter(children)


def find(record: NodeRecord, value: Any) -> NodeRecord | None:
    """Return the first record equal to value in pre-order, or None.

    The search starts at record (inclusive) and never leaves its subtree.
    """
    # Explicit stack, deep trees exceed the recursion limit.
    stack = [record]
    while stack:
        current = stack.pop()
        if current.value == value:
            return current
        stack.extend(reversed(current.children))
    return None


def flatten_values(record: NodeRecord) -> list[Any]:
    """Return the values of record's subtree in pre-order."""
    values = []
    stack = [record]
    while stack:
        current = stack.pop()
        values.append(current.value)
        stack.extend(reversed(current.children))
    return values


def get_root(record: NodeRecord) -> NodeRecord:
    """Follow parent references up to the record that has none."""
    current = record
    parent = current.parent
    while parent is not None:
        current = parent
        parent = current.parent
    return current


def depth(record: NodeRecord) -> int:
    """Number of parent hops from record to its root (root=0)."""
    count = 0
    parent = record.parent
    while parent is not None:
        count += 1
        parent = parent.parent
    return count


# ==================== Uniqueness ====================

def overlapping_values(tree_values: list[Any], candidate_values: list[Any]) -> list[Any]:
    """Return the candidate values that also appear in tree_values.

    Uses a hash index when every value is hashable and falls back to
    pairwise equality otherwise. Both paths give the same result for
    values whose hash agrees with their equality.

    Args:
        tree_values: Values already present in the destination tree.
        candidate_values: Values of the subtree about to be attached.

    Returns:
        The overlapping candidate values, in candidate order. Empty if
        the two collections are disjoint.
    """
    try:
        index = set(tree_values)
        return [value for value in candidate_values if value in index]
    except TypeError:
        return [value for value in candidate_values if value in tree_values]


# ==================== Mutation ====================

def _remove_record(records: list[NodeRecord], record: NodeRecord) -> None:
    """Remove record from records by identity."""
    for i, item in enumerate(records):
        if item is record:
            del records[i]
            return
    raise ValueError(f"{record!r} is not a child of its parent")


def attach(parent: NodeRecord, child: NodeRecord) -> list[Any]:
    """Attach child's subtree as the last child of parent.

    The attach is refused when any value of child's subtree already
    appears in the tree containing parent. This single check keeps
    values unique and makes cycles impossible, since an ancestor of
    parent (or parent itself) always shares a value with that tree.

    If child is currently attached elsewhere it is moved: it leaves its
    old parent's child list before joining the new one.

    Args:
        parent: The record that receives the new child.
        child: Root of the subtree to attach.

    Returns:
        The values that prevented the attach. An empty list means the
        attach succeeded.

    Raises:
        BorrowError: If a child list involved is being iterated.
    """
    overlap = overlapping_values(flatten_values(get_root(parent)), flatten_values(child))
    if overlap:
        logger.debug("Refused to attach %r under %r: duplicated %r", child, parent, overlap)
        return overlap

    previous = child.parent
    if previous is None:
        with parent.writing() as siblings:
            siblings.append(child)
            child.parent = parent
    else:
        with parent.writing() as siblings, previous.writing() as old_siblings:
            _remove_record(old_siblings, child)
            siblings.append(child)
            child.parent = parent
        logger.debug("Moved %r away from %r", child, previous)

    logger.debug("Attached %r under %r", child, parent)
    return []


def detach(record: NodeRecord) -> bool:
    """Remove record from its parent's child list.

    The subtree below record is left untouched.

    Returns:
        True if record was detached, False if it is a root.

    Raises:
        BorrowError: If the parent's child list is being iterated.
    """
    parent = record.parent
    if parent is None:
        return False
    with parent.writing() as siblings:
        _remove_record(siblings, record)
        record.parent = None
    logger.debug("Detached %r from %r", record, parent)
    return True
