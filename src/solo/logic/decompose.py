"""
Hand decomposition into melds and a pair.

Decomposition works on immutable 34-count tuples. The lowest remaining tile
must start a meld, so the search tries a triplet of it first and then a
sequence starting on it; that keeps the recursion small enough to memoise
on (counts, melds_required), which matters because tenpai and wait scans
decompose up to 34 trial hands per call.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache

from solo.logic.enums import SpecialShape
from solo.logic.tiles import HONORS, TILE_TYPES, YAOCHUU_34, count_tiles, hand_to_34_array, rank_of, suit_of

Meld = tuple[int, int, int]
Quad = tuple[int, int, int, int]

MELDS_PER_HAND = 4
CHIITOITSU_PAIRS = 7
SPECIAL_SHAPE_SIZE = 14
_MAX_SEQUENCE_START_RANK = 7
# entries kept per memo table
MEMO_SIZE = 1 << 16


def is_triplet(meld: Sequence[int]) -> bool:
    return meld[0] == meld[1]


def is_sequence(meld: Sequence[int]) -> bool:
    return meld[0] != meld[1]


@dataclass(frozen=True)
class HandDecomposition:
    """One way of reading loose tiles as a pair plus melds."""

    pair: int
    melds: tuple[Meld, ...]

    @property
    def sequences(self) -> tuple[Meld, ...]:
        return tuple(meld for meld in self.melds if is_sequence(meld))

    @property
    def triplets(self) -> tuple[Meld, ...]:
        return tuple(meld for meld in self.melds if is_triplet(meld))

    def tiles(self) -> list[int]:
        """Flatten back into the sorted loose tiles this decomposition was built from."""
        return sorted([self.pair, self.pair, *(tile for meld in self.melds for tile in meld)])


def required_loose_tiles(melds_required: int) -> int:
    return melds_required * 3 + 2


def _take(counts: tuple[int, ...], tiles: Sequence[int]) -> tuple[int, ...]:
    remaining = list(counts)
    for tile in tiles:
        remaining[tile] -= 1
    return tuple(remaining)


def _meld_candidates(counts: tuple[int, ...]) -> list[Meld]:
    """Melds that can start on the lowest remaining tile: triplet first, then sequence."""
    first = next(tile for tile, count in enumerate(counts) if count)
    candidates: list[Meld] = []
    if counts[first] >= 3:
        candidates.append((first, first, first))
    can_start_sequence = suit_of(first) != HONORS and rank_of(first) <= _MAX_SEQUENCE_START_RANK
    if can_start_sequence and counts[first + 1] and counts[first + 2]:
        candidates.append((first, first + 1, first + 2))
    return candidates


@lru_cache(maxsize=MEMO_SIZE)
def _first_meld_set(counts: tuple[int, ...], melds_required: int) -> tuple[Meld, ...] | None:
    if not any(counts):
        return () if melds_required == 0 else None
    if melds_required == 0:
        return None
    for meld in _meld_candidates(counts):
        rest = _first_meld_set(_take(counts, meld), melds_required - 1)
        if rest is not None:
            return (meld, *rest)
    return None


@lru_cache(maxsize=MEMO_SIZE)
def _all_meld_sets(counts: tuple[int, ...], melds_required: int) -> tuple[tuple[Meld, ...], ...]:
    if not any(counts):
        return ((),) if melds_required == 0 else ()
    if melds_required == 0:
        return ()
    return tuple(
        (meld, *rest)
        for meld in _meld_candidates(counts)
        for rest in _all_meld_sets(_take(counts, meld), melds_required - 1)
    )


def decompose(loose_tiles: Sequence[int], melds_required: int) -> HandDecomposition | None:
    """
    First decomposition of loose tiles into one pair and `melds_required` melds.

    Pair candidates are tried in ascending tile order. Returns None when the
    tile count does not match or no decomposition exists.
    """
    if melds_required < 0 or len(loose_tiles) != required_loose_tiles(melds_required):
        return None
    counts = tuple(hand_to_34_array(loose_tiles))
    for pair in range(TILE_TYPES):
        if counts[pair] < 2:
            continue
        melds = _first_meld_set(_take(counts, (pair, pair)), melds_required)
        if melds is not None:
            return HandDecomposition(pair=pair, melds=melds)
    return None


def all_decompositions(loose_tiles: Sequence[int], melds_required: int) -> list[HandDecomposition]:
    """Every distinct decomposition, in the same order decompose() would find them."""
    if melds_required < 0 or len(loose_tiles) != required_loose_tiles(melds_required):
        return []
    counts = tuple(hand_to_34_array(loose_tiles))
    return [
        HandDecomposition(pair=pair, melds=melds)
        for pair in range(TILE_TYPES)
        if counts[pair] >= 2
        for melds in _all_meld_sets(_take(counts, (pair, pair)), melds_required)
    ]


def decompose_special_shapes(loose_tiles: Sequence[int]) -> SpecialShape | None:
    """
    Detect the two whole-hand shapes: seven pairs and thirteen orphans.

    Only meaningful for a concealed 14-tile hand with no quads; callers guard the quad count.
    """
    if len(loose_tiles) != SPECIAL_SHAPE_SIZE:
        return None
    counts = count_tiles(loose_tiles)
    if len(counts) == CHIITOITSU_PAIRS and all(count == 2 for count in counts.values()):
        return SpecialShape.CHIITOITSU
    if set(counts) == set(YAOCHUU_34):
        return SpecialShape.KOKUSHI
    return None
