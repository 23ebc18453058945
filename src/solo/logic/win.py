"""
Winning hand, tenpai and wait detection.

Every check takes the loose tiles and the declared quads separately; each
quad stands in for one meld, so a hand with k quads needs (4 - k) * 3 + 2
loose tiles to be complete.
"""

from collections.abc import Iterator, Sequence

from solo.logic.decompose import MELDS_PER_HAND, Quad, decompose, decompose_special_shapes, required_loose_tiles
from solo.logic.tiles import TILE_TYPES


def required_tiles_for_win(quads: Sequence[Quad]) -> int:
    return required_loose_tiles(MELDS_PER_HAND - len(quads))


def is_winning_hand(loose_tiles: Sequence[int], quads: Sequence[Quad] = ()) -> bool:
    """
    Check whether loose tiles plus quads form a complete hand.

    Seven pairs and thirteen orphans are only possible with no quads.
    The result does not depend on the order of loose_tiles.
    """
    if len(loose_tiles) != required_tiles_for_win(quads):
        return False
    if not quads and decompose_special_shapes(loose_tiles) is not None:
        return True
    return decompose(loose_tiles, MELDS_PER_HAND - len(quads)) is not None


def _completing_tiles(loose_tiles: Sequence[int], quads: Sequence[Quad]) -> Iterator[int]:
    if len(loose_tiles) != required_tiles_for_win(quads) - 1:
        return
    for tile in range(TILE_TYPES):
        if is_winning_hand([*loose_tiles, tile], quads):
            yield tile


def is_tenpai(loose_tiles: Sequence[int], quads: Sequence[Quad] = ()) -> bool:
    """Check if a hand one tile short of complete has at least one winning tile."""
    return next(_completing_tiles(loose_tiles, quads), None) is not None


def get_waiting_tiles(loose_tiles: Sequence[int], quads: Sequence[Quad] = ()) -> frozenset[int]:
    """
    Tiles that would complete the hand.

    All 34 identities are tried, including ones the hand already holds four
    copies of. Empty when the hand is not tenpai or has the wrong tile count.
    """
    return frozenset(_completing_tiles(loose_tiles, quads))
