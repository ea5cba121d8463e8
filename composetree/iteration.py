"""Cursors over flat collections.

An Aggregate is an append-only, indexable collection. It hands out
independent cursors that walk it forwards or backwards with the classic
``reset`` / ``has_next`` / ``get_current`` protocol, where ``has_next``
both checks for and steps onto the next element.

For ordinary Python code the aggregate is also a lazy, restartable
iterable: ``for item in aggregate`` (or ``aggregate.backward()``) drives a
fresh cursor per loop, so the step-and-check coupling stays hidden.
"""

from abc import ABC, abstractmethod
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

from .errors import CursorBoundsError

T = TypeVar("T")


class Cursor(ABC, Generic[T]):
    """Position marker over an Aggregate.

    A cursor starts outside the collection (one before the first element
    for forward cursors, one past the last for backward cursors). Each
    successful ``has_next()`` moves it onto a valid element.
    """

    def __init__(self, aggregate: 'Aggregate[T]'):
        self._aggregate = aggregate
        self._pos = self._start()
        self._valid = False

    @abstractmethod
    def _start(self) -> int:
        """Initial out-of-bounds position for this direction."""
        pass

    @abstractmethod
    def _step(self) -> Optional[int]:
        """Next position in this direction, or None when exhausted."""
        pass

    def reset(self) -> None:
        """Return the cursor to its initial out-of-bounds position."""
        self._pos = self._start()
        self._valid = False

    def has_next(self) -> bool:
        """Advance one step and report whether an element is now available.

        Keeps returning False once the collection is exhausted.
        """
        nxt = self._step()
        if nxt is None:
            self._valid = False
            return False
        self._pos = nxt
        self._valid = True
        return True

    def get_current(self) -> T:
        """Return the element under the cursor.

        Raises:
            CursorBoundsError: If the last has_next() did not return True
        """
        if not self._valid or not 0 <= self._pos < self._aggregate.size():
            raise CursorBoundsError(
                f"{self.__class__.__name__} is not positioned on an element "
                f"(position {self._pos}, size {self._aggregate.size()})"
            )
        return self._aggregate.get(self._pos)

    def __iter__(self) -> Iterator[T]:
        """Drain the remaining elements from the current position."""
        while self.has_next():
            yield self.get_current()


class ForwardCursor(Cursor[T]):
    """Walks an aggregate from the first element to the last."""

    def _start(self) -> int:
        return -1

    def _step(self) -> Optional[int]:
        if self._pos < self._aggregate.size() - 1:
            return self._pos + 1
        return None


class BackwardCursor(Cursor[T]):
    """Walks an aggregate from the last element to the first."""

    def _start(self) -> int:
        return self._aggregate.size()

    def _step(self) -> Optional[int]:
        if self._pos > 0:
            return min(self._pos, self._aggregate.size()) - 1
        return None


class Aggregate(Generic[T]):
    """Append-only collection that creates cursors over itself.

    Example:
        >>> numbers = Aggregate(range(3))
        >>> cursor = numbers.create_backward_iterator()
        >>> while cursor.has_next():
        ...     print(cursor.get_current())
        2
        1
        0
    """

    def __init__(self, items: Optional[Iterable[T]] = None):
        self._items: List[T] = list(items) if items is not None else []

    def add(self, item: T) -> None:
        """Append ``item`` to the end of the collection."""
        self._items.append(item)

    def size(self) -> int:
        return len(self._items)

    def get(self, index: int) -> T:
        """Return the element at ``index``.

        Raises:
            CursorBoundsError: If ``index`` is outside the collection
        """
        if not 0 <= index < len(self._items):
            raise CursorBoundsError(f"Index {index} out of range for size {len(self._items)}")
        return self._items[index]

    def create_forward_iterator(self) -> ForwardCursor[T]:
        return ForwardCursor(self)

    def create_backward_iterator(self) -> BackwardCursor[T]:
        return BackwardCursor(self)

    def forward(self) -> Iterable[T]:
        """Lazy, restartable forward sequence."""
        return _CursorSequence(self.create_forward_iterator)

    def backward(self) -> Iterable[T]:
        """Lazy, restartable backward sequence."""
        return _CursorSequence(self.create_backward_iterator)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.create_forward_iterator())

    def __repr__(self) -> str:
        return f"Aggregate(size={len(self._items)})"


class _CursorSequence(Iterable[T]):
    """Iterable that starts a new cursor every time it is iterated."""

    def __init__(self, factory):
        self._factory = factory

    def __iter__(self) -> Iterator[T]:
        return iter(self._factory())
