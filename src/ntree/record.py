# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""NodeRecord - the storage unit behind every Node handle."""

from __future__ import annotations

import weakref
from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

from .exceptions import BorrowError

T = TypeVar('T')


class NodeRecord(Generic[T]):
    """Storage for one tree position.

    A record holds:
    - value: the caller's payload, fixed at creation
    - children: ordered list of child records, owned (strong references)
    - parent: weak reference to the parent record, None for a root
    - handles: number of live Node handles wrapping this record

    The record performs no validation. Its child list is guarded by a
    borrow counter: ``reading()`` may nest, ``writing()`` is exclusive.

    Example:
        >>> record = NodeRecord(10)
        >>> record.value
        10
        >>> record.parent is None
        True
    """

    __slots__ = ('_value', 'children', '_parent', 'handles', '_readers', '_writing', '__weakref__')

    def __init__(self, value: T) -> None:
        self._value = value
        self.children: list[NodeRecord[T]] = []
        self._parent: weakref.ref[NodeRecord[T]] | None = None
        self.handles = 0
        self._readers = 0
        self._writing = False

    def __repr__(self) -> str:
        return f"NodeRecord({self._value!r}, children={len(self.children)})"

    @property
    def value(self) -> T:
        """The payload stored in this record."""
        return self._value

    @property
    def parent(self) -> NodeRecord[T] | None:
        """Resolve the parent reference.

        Returns None for a root, and also when the parent record has
        already been released.
        """
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, record: NodeRecord[T] | None) -> None:
        self._parent = weakref.ref(record) if record is not None else None

    def release_handle(self) -> None:
        """Called by a Node handle's finalizer when the handle dies."""
        self.handles -= 1

    # ==================== Borrow guard ====================

    @contextmanager
    def reading(self) -> Iterator[list[NodeRecord[T]]]:
        """Borrow the child list for reading.

        Raises:
            BorrowError: If the child list is being written.
        """
        if self._writing:
            raise BorrowError(f"children of {self!r} are being modified")
        self._readers += 1
        try:
            yield self.children
        finally:
            self._readers -= 1

    @contextmanager
    def writing(self) -> Iterator[list[NodeRecord[T]]]:
        """Borrow the child list for exclusive modification.

        Raises:
            BorrowError: If the child list is being read or written.
        """
        if self._writing:
            raise BorrowError(f"children of {self!r} are already being modified")
        if self._readers:
            raise BorrowError(
                f"children of {self!r} cannot be modified while being iterated"
            )
        self._writing = True
        try:
            yield self.children
        finally:
            self._writing = False

    @property
    def is_borrowed(self) -> bool:
        """True if the child list is currently read or written."""
        return self._writing or self._readers > 0
