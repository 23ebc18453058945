"""
Dora resolution from revealed indicator tiles.
"""

from collections.abc import Iterable, Sequence

from solo.logic.tiles import (
    DRAGONS_34,
    HONORS,
    RANKS_PER_SUIT,
    WINDS_34,
    is_dragon,
    rank_of,
    suit_of,
)


def dora_from_indicator(indicator: int) -> int:
    """
    Tile that an indicator points to.

    Numbered suits step up one rank with 9 wrapping to 1, winds cycle
    E -> S -> W -> N -> E and dragons cycle Haku -> Hatsu -> Chun -> Haku.
    """
    if suit_of(indicator) != HONORS:
        return indicator - rank_of(indicator) + 1 + rank_of(indicator) % RANKS_PER_SUIT
    if is_dragon(indicator):
        return DRAGONS_34[(DRAGONS_34.index(indicator) + 1) % len(DRAGONS_34)]
    return WINDS_34[(WINDS_34.index(indicator) + 1) % len(WINDS_34)]


def calculate_dora_tiles(indicators: Sequence[int]) -> tuple[int, ...]:
    """
    Dora tiles for the revealed indicators, in indicator order.

    Repeated indicators give repeated dora; each one counts separately.
    """
    return tuple(dora_from_indicator(indicator) for indicator in indicators)


def count_dora(tiles: Iterable[int], dora_tiles: Sequence[int]) -> int:
    """Number of (tile, dora) matches: a tile that is dora twice over counts twice."""
    return sum(dora_tiles.count(tile) for tile in tiles)
