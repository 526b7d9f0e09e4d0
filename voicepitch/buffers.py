"""Bounded FIFO queues and fixed-size sample buffers for audio streaming."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Generic, TypeVar

__all__ = ["ProducerConsumerQueue", "SampleBuffer", "allocate_sample_buffers"]

T = TypeVar("T")


class ProducerConsumerQueue(Generic[T]):
    """A bounded FIFO queue shared by one producer and one consumer.

    :meth:`push` reports whether there was room instead of blocking, and
    :meth:`front` reads the oldest item without removing it; :meth:`pop`
    removes it afterwards.
    """

    __slots__ = ("capacity", "_items", "_lock")

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"queue size must be positive, got {size}")
        self.capacity = size
        self._items: deque[T] = deque()
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"ProducerConsumerQueue(size={self.capacity}, length={len(self)})"

    def __len__(self) -> int:
        return len(self._items)

    def push(self, item: T) -> bool:
        """Append ``item``; return False, leaving the queue unchanged, if it is full."""
        with self._lock:
            if len(self._items) >= self.capacity:
                return False
            self._items.append(item)
            return True

    def front(self) -> T:
        """Return the oldest item without removing it; IndexError if empty."""
        with self._lock:
            if not self._items:
                raise IndexError("front of an empty queue")
            return self._items[0]

    def pop(self) -> None:
        """Remove the oldest item; IndexError if empty."""
        with self._lock:
            if not self._items:
                raise IndexError("pop from an empty queue")
            self._items.popleft()


@dataclass(eq=False)
class SampleBuffer:
    """An audio sample container: ``capacity`` usable bytes, ``size`` of them filled."""

    data: bytearray
    capacity: int
    size: int = field(default=0)


def allocate_sample_buffers(count: int, size_in_bytes: int) -> list[SampleBuffer]:
    """Create ``count`` empty buffers of ``size_in_bytes`` capacity each.

    Storage is padded up to a multiple of four bytes.  At least two buffers
    are needed for streaming, so fewer is an error.
    """
    if count <= 0 or size_in_bytes <= 0:
        raise ValueError(
            f"buffer count and size must be positive, got {count} and {size_in_bytes}"
        )
    if count < 2:
        raise ValueError(f"at least 2 buffers are required, got {count}")
    alloc_size = (size_in_bytes + 3) & ~3
    return [SampleBuffer(bytearray(alloc_size), size_in_bytes, 0) for _ in range(count)]