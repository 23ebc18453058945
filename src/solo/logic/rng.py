"""
Random number generation for wall shuffling.

The wall shuffle is driven by an injected, seedable generator so every hand
can be reproduced from (seed, hand_number):
1. Generate a cryptographic seed (96 bytes / 768 bits) via the secrets module
2. Derive a per-hand PCG64DXSM state via SHA512 with a versioned domain prefix
3. Apply a Fisher-Yates shuffle with rejection sampling for an unbiased permutation

Reference: O'Neill, M. (2014). "PCG: A Family of Simple Fast Space-Efficient
Statistically Good Algorithms for Random Number Generation."
"""

import hashlib
import secrets
from collections.abc import Sequence
from typing import TypeVar

SEED_BYTES = 96  # 768 bits, more than log2(136!) so every wall order is reachable
RNG_VERSION = "pcg64dxsm-v1"
_DOMAIN_PREFIX = b"hitori-wall-v1:"

# PCG64DXSM constants
_PCG_MULTIPLIER = 0x2360ED051FC65DA44385DF649FCCF645
_PCG_DXSM_MUL = 0xDA942042E4DD58B5
_UINT128_MASK = (1 << 128) - 1
_UINT64_MASK = (1 << 64) - 1

T = TypeVar("T")


def validate_seed_hex(seed_hex: str) -> None:
    """Validate that a seed string is 192 hex characters (96 bytes).

    Raises TypeError for non-string input, ValueError for invalid format.
    """
    if not isinstance(seed_hex, str):
        raise TypeError(f"Seed must be a string, got {type(seed_hex).__name__}")
    expected_length = SEED_BYTES * 2
    if len(seed_hex) != expected_length:
        raise ValueError(f"Seed must be exactly {expected_length} hex characters, got {len(seed_hex)}")
    try:
        bytes.fromhex(seed_hex)
    except ValueError:
        raise ValueError("Seed contains invalid hex characters") from None


class PCG64DXSM:
    """
    Pure Python PCG64DXSM generator.

    128-bit LCG state with the DXSM (double-xorshift-multiply) output permutation.
    Besides raw 64-bit output it offers the two draws the wall needs:
    an unbiased bounded integer and an in-order Fisher-Yates shuffle.
    """

    def __init__(self, state: int, increment: int) -> None:
        self._inc = ((increment << 1) | 1) & _UINT128_MASK  # increment must be odd
        self._state = (state + self._inc) & _UINT128_MASK
        # two advances move away from weak states near the injected seed
        self._advance()
        self._advance()

    def _advance(self) -> None:
        self._state = (self._state * _PCG_MULTIPLIER + self._inc) & _UINT128_MASK

    def next_uint64(self) -> int:
        """Generate the next 64-bit unsigned integer and advance state."""
        hi = (self._state >> 64) & _UINT64_MASK
        lo = (self._state & _UINT64_MASK) | 1

        hi ^= hi >> 32
        hi = (hi * _PCG_DXSM_MUL) & _UINT64_MASK
        hi ^= hi >> 48
        hi = (hi * lo) & _UINT64_MASK

        self._advance()
        return hi

    def bounded(self, bound: int) -> int:
        """
        Unbiased integer in [0, bound) via rejection sampling.

        Values from the partial final bucket are rejected, which removes modulo bias.
        """
        if bound <= 0 or bound > (1 << 64):
            raise ValueError("bound must be in (0, 2^64]")
        limit = (1 << 64) - ((1 << 64) % bound)
        while True:
            r = self.next_uint64()
            if r < limit:
                return r % bound

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Fisher-Yates (Knuth) shuffle returning a new list; the input is not modified."""
        result = list(items)
        n = len(result)
        for i in range(n - 1):
            j = i + self.bounded(n - i)
            result[i], result[j] = result[j], result[i]
        return result


def generate_seed() -> str:
    """Generate a cryptographic seed as a hex string (192 chars / 768 bits)."""
    return secrets.token_bytes(SEED_BYTES).hex()


def derive_hand_rng(seed_hex: str, hand_number: int) -> PCG64DXSM:
    """
    Derive the generator for one hand from the session seed.

    SHA512(_DOMAIN_PREFIX + seed_bytes + hand_number_bytes): the first 16 bytes
    become the PCG state and the next 16 bytes the increment.
    """
    if not (0 <= hand_number < 2**32):
        raise ValueError("hand_number must be in [0, 2^32)")
    validate_seed_hex(seed_hex)
    data = bytes.fromhex(seed_hex) + hand_number.to_bytes(4, byteorder="little")
    derived = hashlib.sha512(_DOMAIN_PREFIX + data).digest()
    state = int.from_bytes(derived[:16], byteorder="little")
    increment = int.from_bytes(derived[16:32], byteorder="little")
    return PCG64DXSM(state, increment)
