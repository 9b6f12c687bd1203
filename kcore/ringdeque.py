"""A double-ended queue backed by a power-of-two ring buffer."""

from typing import Any, Iterator


class RingDeque:
    """Ring-buffer deque that doubles its capacity when full."""

    def __init__(self):
        self._bits = 2
        self._front = 0
        self._count = 0
        self._a: list = [None] * (1 << self._bits)

    @property
    def _mask(self) -> int:
        return (1 << self._bits) - 1

    def __len__(self) -> int:
        return self._count

    def _slot(self, index: int) -> int:
        if index < 0:
            index += self._count
        if not 0 <= index < self._count:
            raise IndexError("deque index out of range")
        return (self._front + index) & self._mask

    def __getitem__(self, index: int) -> Any:
        return self._a[self._slot(index)]

    def __setitem__(self, index: int, value: Any) -> None:
        self._a[self._slot(index)] = value

    def __iter__(self) -> Iterator[Any]:
        mask = self._mask
        for k in range(self._count):
            yield self._a[(self._front + k) & mask]

    def capacity(self) -> int:
        """Return the number of slots in the ring buffer."""
        return 1 << self._bits

    def resize(self, new_bits: int) -> int:
        """Set the capacity to 2**new_bits, enlarged to hold every element.

        Returns the number of bits actually in use afterwards.
        """
        if new_bits < 0:
            raise ValueError("new_bits must be non-negative")
        if (1 << new_bits) < self._count:
            new_bits = self._count.bit_length()
        if new_bits == self._bits:
            return self._bits
        items = list(self)
        self._a = items + [None] * ((1 << new_bits) - len(items))
        self._front = 0
        self._bits = new_bits
        return self._bits

    def _grow_if_full(self) -> None:
        if self._count == 1 << self._bits:
            self.resize(self._bits + 1)

    def push(self, value: Any) -> None:
        """Append ``value`` at the back."""
        self._grow_if_full()
        self._a[(self._front + self._count) & self._mask] = value
        self._count += 1

    def unshift(self, value: Any) -> None:
        """Prepend ``value`` at the front."""
        self._grow_if_full()
        self._count += 1
        self._front = self._front - 1 if self._front else (1 << self._bits) - 1
        self._a[self._front] = value

    def pop(self) -> Any:
        """Remove and return the back element."""
        if not self._count:
            raise IndexError("pop from an empty deque")
        self._count -= 1
        slot = (self._front + self._count) & self._mask
        value, self._a[slot] = self._a[slot], None
        return value

    def shift(self) -> Any:
        """Remove and return the front element."""
        if not self._count:
            raise IndexError("shift from an empty deque")
        slot = self._front
        value, self._a[slot] = self._a[slot], None
        self._front = (self._front + 1) & self._mask
        self._count -= 1
        return value

    def first(self) -> Any:
        """Return the front element."""
        return self[0]

    def last(self) -> Any:
        """Return the back element."""
        return self[-1]

    def __repr__(self) -> str:
        return f"RingDeque({list(self)!r})"