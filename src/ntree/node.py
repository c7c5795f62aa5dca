# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Node - the public handle of an ntree tree."""

from __future__ import annotations

import weakref
from typing import Any, Generic, Iterator, TypeVar

from . import traversal
from .exceptions import DuplicateValueError
from .record import NodeRecord

T = TypeVar('T')


class Node(Generic[T]):
    """A shareable handle on one position of an n-ary tree.

    Several handles may refer to the same position; equality compares
    the position, not the value. Values are unique within a tree, so
    attaching a subtree that repeats a value is refused, which also makes
    cycles impossible.

    Parents own their children; a child only keeps a weak reference to
    its parent. A detached subtree lives as long as a handle on it does.

    Example:
        >>> root = Node(10)
        >>> child = Node(20)
        >>> root.add_child(child)
        True
        >>> child.parent == root
        True
        >>> root.add_leaf(20)
        False
        >>> root.find(20) == child
        True
    """

    __slots__ = ('_record', '__weakref__')

    def __init__(self, value: T) -> None:
        """Create a parentless, childless node holding value."""
        self._bind(NodeRecord(value))

    @classmethod
    def _wrap(cls, record: NodeRecord[T]) -> Node[T]:
        """Return a new handle on an existing record."""
        node = cls.__new__(cls)
        node._bind(record)
        return node

    def _bind(self, record: NodeRecord[T]) -> None:
        self._record = record
        record.handles += 1
        finalizer = weakref.finalize(self, record.release_handle)
        finalizer.atexit = False

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"Node({self._record.value!r}, children={len(self._record.children)})"

    def __eq__(self, other: object) -> bool:
        """Two handles are equal when they refer to the same record."""
        if not isinstance(other, Node):
            return NotImplemented
        return self._record is other._record

    def __hash__(self) -> int:
        return id(self._record)

    def __contains__(self, value: Any) -> bool:
        """True if value is held by this node or one of its descendants."""
        return traversal.find(self._record, value) is not None

    # ==================== Accessors ====================

    @property
    def value(self) -> T:
        """The value held by this node."""
        return self._record.value

    @property
    def parent(self) -> Node[T] | None:
        """The parent node, or None for a root."""
        parent = self._record.parent
        if parent is None:
            return None
        return type(self)._wrap(parent)

    @property
    def children(self) -> list[Node[T]]:
        """Snapshot of the children in insertion order.

        The returned list is not updated by later changes to the tree.
        """
        with self._record.reading() as children:
            return [type(self)._wrap(child) for child in children]

    @property
    def is_root(self) -> bool:
        """True if this node has no parent."""
        return self._record.parent is None

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self._record.children

    @property
    def depth(self) -> int:
        """Get the depth of this node in its tree (root=0)."""
        return traversal.depth(self._record)

    @property
    def root(self) -> Node[T]:
        """Get the root node (alias for get_root())."""
        return self.get_root()

    def rc_count(self) -> int:
        """Return the number of strong holders of this node's record.

        Counts the live handles on the record, plus one when a parent
        keeps it in its child list.

        Example:
            >>> root = Node(10)
            >>> child = Node(20)
            >>> root.add_child(child)
            True
            >>> child.rc_count()
            2
        """
        return self._record.handles + (0 if self._record.parent is None else 1)

    # ==================== Core API ====================

    def add_child(self, child: Node[T], raise_on_error: bool = False) -> bool:
        """Attach child's whole subtree as the last child of this node.

        The attach is refused if any value in child's subtree is already
        present anywhere in this node's tree (searched from the root).
        A refused attach changes nothing. If child belongs to another
        tree it is moved out of it.

        Args:
            child: The node to attach, with its descendants.
            raise_on_error: If True, raise DuplicateValueError instead of
                returning False when the attach is refused.

        Returns:
            True if child was attached, False otherwise.

        Raises:
            DuplicateValueError: If refused and raise_on_error is True.
            BorrowError: If a child list involved is being iterated.

        Example:
            >>> root = Node(1)
            >>> mid = Node(2)
            >>> root.add_child(mid)
            True
            >>> mid.add_child(root)  # root's value is already in the tree
            False
        """
        overlap = traversal.attach(self._record, child._record)
        if not overlap:
            return True
        if raise_on_error:
            raise DuplicateValueError(overlap)
        return False

    def add_leaf(self, value: T, raise_on_error: bool = False) -> bool:
        """Create a node holding value and attach it as the last child.

        Same as add_child(Node(value)).

        Example:
            >>> root = Node(10)
            >>> root.add_leaf(30)
            True
            >>> root.children[0].value
            30
        """
        return self.add_child(type(self)(value), raise_on_error=raise_on_error)

    def find(self, value: T) -> Node[T] | None:
        """Search a node by value, starting from this node inclusive.

        The search is depth-first pre-order over this node's subtree only;
        call it on the root to search the whole tree.

        Returns:
            The first matching node, or None.
        """
        found = traversal.find(self._record, value)
        if found is None:
            return None
        return type(self)._wrap(found)

    def remove_node(self, value: T) -> Node[T] | None:
        """Detach the first node holding value from its parent.

        The node is searched like find(), within this node's subtree.
        The detached node keeps all of its descendants.

        Returns:
            The detached node, or None if no node matches or the match
            is a root (nothing is changed in either case).

        Raises:
            BorrowError: If the parent's child list is being iterated.

        Example:
            >>> root = Node(10)
            >>> root.add_leaf(30)
            True
            >>> root.remove_node(30).value
            30
            >>> root.children
            []
        """
        found = traversal.find(self._record, value)
        if found is None or not traversal.detach(found):
            return None
        return type(self)._wrap(found)

    def get_root(self) -> Node[T]:
        """Get the root node; a root returns itself."""
        return type(self)._wrap(traversal.get_root(self._record))

    # ==================== Iteration ====================

    def walk(self) -> Iterator[Node[T]]:
        """Yield this node and its descendants in pre-order.

        Child lists are borrowed while they are iterated: adding or
        removing children of a node whose children are being walked
        raises BorrowError.

        Example:
            >>> root = Node('a')
            >>> root.add_leaf('b')
            True
            >>> [n.value for n in root.walk()]
            ['a', 'b']
        """
        for record in traversal.iter_preorder(self._record):
            yield type(self)._wrap(record)

    def values(self) -> list[T]:
        """Return the values of this node's subtree in pre-order."""
        return traversal.flatten_values(self._record)
