"""Open-addressing hash tables with linear probing and backward-shift deletion.

Buckets are addressed by index. ``get`` returns the bucket holding a key, or
``capacity()`` when the key is absent. Bucket indices stay valid until the
next insertion, deletion or resize. The capacity is always a power of two and
the table grows when it becomes three quarters full.
"""

from typing import Any, Callable, Iterator, NamedTuple, Optional, Tuple

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_FNV_SEED = 11
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_GOLDEN32 = 2654435769


def hash_uint32(key: int) -> int:
    """Thomas Wang's 32-bit integer mix."""
    key &= _MASK32
    key = (key + ~(key << 15)) & _MASK32
    key ^= key >> 10
    key = (key + (key << 3)) & _MASK32
    key ^= key >> 6
    key = (key + ~(key << 11)) & _MASK32
    key ^= key >> 16
    return key


def hash_uint64(key: int) -> int:
    """Thomas Wang's 64-bit integer mix, truncated to 32 bits."""
    key &= _MASK64
    key = (~key + (key << 21)) & _MASK64
    key ^= key >> 24
    key = (key + (key << 3) + (key << 8)) & _MASK64
    key ^= key >> 14
    key = (key + (key << 2) + (key << 4)) & _MASK64
    key ^= key >> 28
    key = (key + (key << 31)) & _MASK64
    return key & _MASK32


def hash_bytes(data: bytes) -> int:
    """Seeded FNV-1a hash of a byte string."""
    h = _FNV_SEED ^ _FNV_OFFSET
    for byte in data:
        h = ((h ^ byte) * _FNV_PRIME) & _MASK32
    return h


def hash_str(s: str) -> int:
    """Seeded FNV-1a hash of the UTF-8 encoding of ``s``."""
    return hash_bytes(s.encode("utf-8"))


def hash_to_bucket(hash_value: int, bits: int) -> int:
    """Map a 32-bit hash to one of ``2**bits`` buckets by Fibonacci hashing."""
    return ((hash_value * _GOLDEN32) & _MASK32) >> (32 - bits)


def _default_hash(key: Any) -> int:
    if isinstance(key, int) and not isinstance(key, bool):
        if 0 <= key <= _MASK32:
            return hash_uint32(key)
        return hash_uint64(key & _MASK64)
    if isinstance(key, str):
        return hash_str(key)
    if isinstance(key, (bytes, bytearray, memoryview)):
        return hash_bytes(bytes(key))
    return hash(key) & _MASK32


class HashSetL:
    """A hash set of keys compared with ``==`` and hashed by ``hash_func``."""

    def __init__(self, hash_func: Optional[Callable[[Any], int]] = None):
        self._hash = hash_func if hash_func is not None else _default_hash
        self._bits = 0
        self._count = 0
        self._used = bytearray()
        self._keys: list = []
        self._vals: list = []

    def _bucket(self, key: Any, bits: int) -> int:
        return hash_to_bucket(self._hash(key) & _MASK32, bits)

    def capacity(self) -> int:
        """Return the number of buckets (0 before the first insertion)."""
        return len(self._keys)

    def __len__(self) -> int:
        return self._count

    def get(self, key: Any) -> int:
        """Return the bucket holding ``key``, or ``capacity()`` if absent."""
        nb = self.capacity()
        if nb == 0:
            return 0
        mask = nb - 1
        i = last = self._bucket(key, self._bits)
        while self._used[i] and self._keys[i] != key:
            i = (i + 1) & mask
            if i == last:
                return nb
        return i if self._used[i] else nb

    def __contains__(self, key: Any) -> bool:
        return self.get(key) != self.capacity()

    def resize(self, new_n_buckets: int) -> bool:
        """Rehash into at least ``new_n_buckets`` buckets (a power of two, min 4).

        Returns False, leaving the table unchanged, if that is too small to
        hold the current keys.
        """
        if new_n_buckets < 0:
            raise ValueError("bucket count must be non-negative")
        new_bits = max(new_n_buckets.bit_length() - 1, 0)
        if new_n_buckets & (new_n_buckets - 1):
            new_bits += 1
        new_bits = max(new_bits, 2)
        new_nb = 1 << new_bits
        if self._count > (new_nb >> 1) + (new_nb >> 2):
            return False
        nb = self.capacity()
        keys, vals, used = self._keys, self._vals, self._used
        if new_nb > nb:
            keys.extend([None] * (new_nb - nb))
            vals.extend([None] * (new_nb - nb))
        new_used = bytearray(new_nb)
        new_mask = new_nb - 1
        for j in range(nb):
            if not used[j]:
                continue
            key, val = keys[j], vals[j]
            used[j] = 0
            while True:
                i = self._bucket(key, new_bits)
                while new_used[i]:
                    i = (i + 1) & new_mask
                new_used[i] = 1
                if i < nb and used[i]:
                    keys[i], key = key, keys[i]
                    vals[i], val = val, vals[i]
                    used[i] = 0
                else:
                    keys[i], vals[i] = key, val
                    break
        del keys[new_nb:]
        del vals[new_nb:]
        for i in range(new_nb):
            if not new_used[i]:
                keys[i] = vals[i] = None
        self._used = new_used
        self._bits = new_bits
        return True

    def put(self, key: Any) -> Tuple[int, bool]:
        """Insert ``key`` if absent; return its bucket and whether it was added."""
        nb = self.capacity()
        if self._count >= (nb >> 1) + (nb >> 2):
            self.resize(nb + 1)
            nb = self.capacity()
        mask = nb - 1
        i = last = self._bucket(key, self._bits)
        while self._used[i] and self._keys[i] != key:
            i = (i + 1) & mask
            if i == last:
                break
        if self._used[i]:
            return i, False
        self._keys[i] = key
        self._vals[i] = None
        self._used[i] = 1
        self._count += 1
        return i, True

    def exists(self, index: int) -> bool:
        """Return whether bucket ``index`` holds a key."""
        return 0 <= index < self.capacity() and bool(self._used[index])

    def _check(self, index: int) -> None:
        if not self.exists(index):
            raise IndexError(f"bucket {index} is not occupied")

    def key_at(self, index: int) -> Any:
        """Return the key in bucket ``index``."""
        self._check(index)
        return self._keys[index]

    def delete(self, index: int) -> bool:
        """Empty bucket ``index``, shifting later keys back; False if it was empty."""
        if not self.exists(index):
            return False
        mask = self.capacity() - 1
        i = j = index
        while True:
            j = (j + 1) & mask
            if j == i or not self._used[j]:
                break
            k = self._bucket(self._keys[j], self._bits)
            if (j > i and (k <= i or k > j)) or (j < i and i >= k > j):
                self._keys[i] = self._keys[j]
                self._vals[i] = self._vals[j]
                i = j
        self._used[i] = 0
        self._keys[i] = self._vals[i] = None
        self._count -= 1
        return True

    def clear(self) -> None:
        """Remove every key, keeping the capacity."""
        nb = self.capacity()
        self._used = bytearray(nb)
        self._keys = [None] * nb
        self._vals = [None] * nb
        self._count = 0

    def __iter__(self) -> Iterator[Any]:
        for i, flag in enumerate(self._used):
            if flag:
                yield self._keys[i]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class HashMapL(HashSetL):
    """A hash map: a hash set whose buckets also carry a value."""

    def value_at(self, index: int) -> Any:
        """Return the value in bucket ``index``."""
        self._check(index)
        return self._vals[index]

    def set_value(self, index: int, value: Any) -> None:
        """Set the value in bucket ``index``."""
        self._check(index)
        self._vals[index] = value

    def __getitem__(self, key: Any) -> Any:
        i = self.get(key)
        if i == self.capacity():
            raise KeyError(key)
        return self._vals[i]

    def __setitem__(self, key: Any, value: Any) -> None:
        i, _ = self.put(key)
        self._vals[i] = value

    def __delitem__(self, key: Any) -> None:
        i = self.get(key)
        if i == self.capacity():
            raise KeyError(key)
        self.delete(i)

    def items(self) -> Iterator[Tuple[Any, Any]]:
        """Yield ``(key, value)`` pairs in bucket order."""
        for i, flag in enumerate(self._used):
            if flag:
                yield self._keys[i], self._vals[i]


class EnsembleIter(NamedTuple):
    """Position in a hash ensemble: sub-table and bucket (-1 when absent)."""

    sub: int
    pos: int

    @property
    def is_end(self) -> bool:
        return self.pos == -1


class HashEnsemble:
    """``2**bits`` hash maps, a key going to the one chosen by its low hash bits."""

    def __init__(self, bits: int, hash_func: Optional[Callable[[Any], int]] = None):
        if bits < 0:
            raise ValueError("bits must be non-negative")
        self._hash = hash_func if hash_func is not None else _default_hash
        self.bits = bits
        self._count = 0
        self._subs = [HashMapL(self._hash) for _ in range(1 << bits)]

    def _sub_index(self, key: Any) -> int:
        return (self._hash(key) & _MASK32) & ((1 << self.bits) - 1)

    def __len__(self) -> int:
        return self._count

    def get(self, key: Any) -> EnsembleIter:
        """Return the position of ``key``; its ``is_end`` is True if absent."""
        low = self._sub_index(key)
        sub = self._subs[low]
        pos = sub.get(key)
        return EnsembleIter(low, -1 if pos == sub.capacity() else pos)

    def __contains__(self, key: Any) -> bool:
        return not self.get(key).is_end

    def put(self, key: Any) -> Tuple[EnsembleIter, bool]:
        """Insert ``key`` if absent; return its position and whether it was added."""
        low = self._sub_index(key)
        pos, absent = self._subs[low].put(key)
        if absent:
            self._count += 1
        return EnsembleIter(low, pos), absent

    def delete(self, itr: EnsembleIter) -> bool:
        """Remove the key at ``itr``; False if there is none."""
        if itr.is_end or not 0 <= itr.sub < len(self._subs):
            return False
        removed = self._subs[itr.sub].delete(itr.pos)
        if removed:
            self._count -= 1
        return removed

    def _sub_for(self, itr: EnsembleIter) -> HashMapL:
        if itr.is_end or not 0 <= itr.sub < len(self._subs):
            raise IndexError("iterator does not point at a key")
        return self._subs[itr.sub]

    def key_at(self, itr: EnsembleIter) -> Any:
        """Return the key at ``itr``."""
        return self._sub_for(itr).key_at(itr.pos)

    def value_at(self, itr: EnsembleIter) -> Any:
        """Return the value at ``itr``."""
        return self._sub_for(itr).value_at(itr.pos)

    def set_value(self, itr: EnsembleIter, value: Any) -> None:
        """Set the value at ``itr``."""
        self._sub_for(itr).set_value(itr.pos, value)

    def __iter__(self) -> Iterator[Any]:
        for sub in self._subs:
            yield from sub