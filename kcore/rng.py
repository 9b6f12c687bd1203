"""A small xoroshiro128+ pseudo-random generator seeded with splitmix64."""

import struct

_MASK64 = 0xFFFFFFFFFFFFFFFF
_JUMP = (0xBEAC0467EBA5FACB, 0xD86B048B86AA9922)


def splitmix64(x: int) -> int:
    """Return the splitmix64 output for state ``x``."""
    z = (x + 0x9E3779B97F4A7C15) & _MASK64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK64
    return z ^ (z >> 31)


def _rotl(x: int, k: int) -> int:
    return ((x << k) | (x >> (64 - k))) & _MASK64


class Rng:
    """xoroshiro128+ generator with 64-bit outputs."""

    def __init__(self, seed: int = 0):
        self.state = [0, 0]
        self.seed(seed)

    def seed(self, seed: int) -> None:
        """Reset the state from a 64-bit seed."""
        s0 = splitmix64(seed & _MASK64)
        self.state = [s0, splitmix64(s0)]

    def next_u64(self) -> int:
        """Return the next 64-bit unsigned integer."""
        s0, s1 = self.state
        result = (s0 + s1) & _MASK64
        s1 ^= s0
        self.state = [_rotl(s0, 55) ^ s1 ^ ((s1 << 14) & _MASK64), _rotl(s0, 36)]
        return result

    def jump(self) -> None:
        """Advance the state by 2**64 steps."""
        s0 = s1 = 0
        for word in _JUMP:
            for b in range(64):
                if word >> b & 1:
                    s0 ^= self.state[0]
                    s1 ^= self.state[1]
                self.next_u64()
        self.state = [s0, s1]

    def random(self) -> float:
        """Return a float uniformly drawn from [0, 1)."""
        bits = (0x3FF << 52) | (self.next_u64() >> 12)
        return struct.unpack("<d", struct.pack("<Q", bits))[0] - 1.0

    def __iter__(self):
        while True:
            yield self.next_u64()