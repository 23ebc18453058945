"""
Riichi and concealed kan validation.

All functions are pure and take the 13-tile resting hand plus the drawn
tile separately. Precondition failures return empty results or None; they
never raise.
"""

from collections.abc import Sequence

from solo.logic.decompose import Quad
from solo.logic.tiles import COPIES_PER_TILE, count_tiles, sort_tiles
from solo.logic.win import get_waiting_tiles, is_tenpai


def check_riichi(hand: Sequence[int], drawn_tile: int, quads: Sequence[Quad] = ()) -> frozenset[int]:
    """
    Discard positions that leave the hand tenpai.

    Positions index into hand + [drawn_tile]; riichi can be declared iff the result is non-empty.
    """
    full_hand = [*hand, drawn_tile]
    return frozenset(
        position
        for position in range(len(full_hand))
        if is_tenpai(full_hand[:position] + full_hand[position + 1 :], quads)
    )


def find_kan_options(hand: Sequence[int], drawn_tile: int | None) -> list[int]:
    """Tiles held four times once the drawn tile is added. Empty without a drawn tile."""
    if drawn_tile is None:
        return []
    counts = count_tiles([*hand, drawn_tile])
    return sorted(tile for tile, count in counts.items() if count == COPIES_PER_TILE)


def perform_kan(
    hand: Sequence[int],
    drawn_tile: int,
    tile: int,
    quads: Sequence[Quad] = (),
) -> tuple[list[int], tuple[Quad, ...]] | None:
    """
    Set aside four copies of `tile` as a concealed quad.

    Returns (new_hand, new_quads) with the drawn tile merged into the sorted
    hand, or None when hand + drawn tile hold fewer than four copies.
    """
    full_hand = [*hand, drawn_tile]
    if full_hand.count(tile) < COPIES_PER_TILE:
        return None
    new_hand = sort_tiles(t for t in full_hand if t != tile)
    new_quads = (*quads, (tile, tile, tile, tile))
    return new_hand, new_quads


def get_riichi_kan_options(hand: Sequence[int], drawn_tile: int | None, quads: Sequence[Quad] = ()) -> list[int]:
    """
    Kan candidates that keep the wait unchanged after riichi.

    Only the drawn tile can complete a kan; a quad already held before the
    draw stays locked in the hand. Each candidate is checked on its own: the
    waits of the pre-draw hand must equal the waits after the simulated kan.
    A hand that is not tenpai before the draw has no legal kan.
    """
    if drawn_tile is None:
        return []
    waits_before = get_waiting_tiles(hand, quads)
    if not waits_before:
        return []
    legal: list[int] = []
    for tile in find_kan_options(hand, drawn_tile):
        if tile != drawn_tile:
            continue
        result = perform_kan(hand, drawn_tile, tile, quads)
        if result is None:
            continue
        hand_after, quads_after = result
        if get_waiting_tiles(hand_after, quads_after) == waits_before:
            legal.append(tile)
    return legal


def can_kan_during_riichi(hand: Sequence[int], drawn_tile: int | None, quads: Sequence[Quad] = ()) -> int | None:
    """First wait-preserving kan candidate, or None."""
    options = get_riichi_kan_options(hand, drawn_tile, quads)
    return options[0] if options else None
