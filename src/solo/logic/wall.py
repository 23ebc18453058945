"""
Wall state and operations for single-player mahjong.

The Wall holds the live wall for drawing plus a fixed 14-tile dead wall.
The dead wall is never replenished.

Dead wall layout (indices into dead_wall_tiles):
  [0] [1] [2] [3]     replacement tiles for kan, drawn last-first
  [4] [5]             initial dora indicator, initial ura-dora indicator
  [6] [7] ... [12] [13]  one (dora, ura-dora) indicator pair per declared kan

All tiles are 34-format identities.
"""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from solo.logic.rng import PCG64DXSM
from solo.logic.tiles import COPIES_PER_TILE, TILE_TYPES, TOTAL_TILE_IDS, count_tiles, sort_tiles, tile_to_34

DEAD_WALL_SIZE = 14
REPLACEMENT_TILE_COUNT = 4
FIRST_DORA_INDEX = 4
FIRST_URA_DORA_INDEX = 5
INDICATOR_PAIR_STRIDE = 2
HAND_SIZE = 13


class Wall(BaseModel):
    """Immutable wall state for one hand."""

    model_config = ConfigDict(frozen=True)

    live_tiles: tuple[int, ...] = ()
    dead_wall_tiles: tuple[int, ...] = ()
    replacement_tiles: tuple[int, ...] = ()
    dora_indicators: tuple[int, ...] = ()
    ura_dora_indicators: tuple[int, ...] = ()


def _split_wall(tiles: Sequence[int]) -> Wall:
    """Last 14 tiles form the dead wall, the rest is the live wall in draw order."""
    dead_wall_tiles = tuple(tiles[-DEAD_WALL_SIZE:])
    return Wall(
        live_tiles=tuple(tiles[:-DEAD_WALL_SIZE]),
        dead_wall_tiles=dead_wall_tiles,
        replacement_tiles=dead_wall_tiles[:REPLACEMENT_TILE_COUNT],
        dora_indicators=(dead_wall_tiles[FIRST_DORA_INDEX],),
        ura_dora_indicators=(dead_wall_tiles[FIRST_URA_DORA_INDEX],),
    )


def create_wall(rng: PCG64DXSM) -> Wall:
    """Shuffle all 136 physical tiles with the given generator and split them into a wall."""
    shuffled = rng.shuffle(range(TOTAL_TILE_IDS))
    return _split_wall([tile_to_34(tile_id) for tile_id in shuffled])


def create_wall_from_tiles(tiles: Sequence[int]) -> Wall:
    """
    Create a wall from an explicit order of tile identities (for tests and replays).

    The sequence must hold every identity exactly four times; the first 122 tiles
    become the live wall in draw order and the last 14 the dead wall.
    """
    if len(tiles) != TOTAL_TILE_IDS:
        raise ValueError(f"Expected {TOTAL_TILE_IDS} tiles, got {len(tiles)}")
    if not all(isinstance(t, int) and 0 <= t < TILE_TYPES for t in tiles):
        raise ValueError(f"All tiles must be integers in [0, {TILE_TYPES - 1}]")
    counts = count_tiles(tiles)
    if any(counts[tile] != COPIES_PER_TILE for tile in range(TILE_TYPES)):
        raise ValueError(f"Every tile identity must appear exactly {COPIES_PER_TILE} times")
    return _split_wall(tiles)


def deal_initial_hand(wall: Wall) -> tuple[Wall, list[int]]:
    """Deal 13 tiles from the front of the live wall. Returns (updated_wall, sorted_hand)."""
    if len(wall.live_tiles) < HAND_SIZE:
        raise ValueError(f"Live wall has {len(wall.live_tiles)} tiles, need at least {HAND_SIZE} for dealing")
    hand = sort_tiles(wall.live_tiles[:HAND_SIZE])
    return wall.model_copy(update={"live_tiles": wall.live_tiles[HAND_SIZE:]}), hand


def build_and_shuffle(rng: PCG64DXSM) -> tuple[Wall, list[int], int | None]:
    """
    Build a fresh wall, deal the starting hand and draw the first tile.

    Returns (wall, hand, drawn_tile).
    """
    wall, hand = deal_initial_hand(create_wall(rng))
    wall, drawn_tile = draw_tile(wall)
    return wall, hand, drawn_tile


def draw_tile(wall: Wall) -> tuple[Wall, int | None]:
    """Draw from front of live wall. Returns (new_wall, tile) or (wall, None) if empty."""
    if not wall.live_tiles:
        return wall, None
    return wall.model_copy(update={"live_tiles": wall.live_tiles[1:]}), wall.live_tiles[0]


def draw_replacement(wall: Wall) -> tuple[Wall, int | None]:
    """
    Draw a kan replacement tile, last remaining slot first.

    Returns (wall, None) once the four replacement slots are used up.
    """
    if not wall.replacement_tiles:
        return wall, None
    return wall.model_copy(update={"replacement_tiles": wall.replacement_tiles[:-1]}), wall.replacement_tiles[-1]


def reveal_next_indicators(dead_wall_tiles: Sequence[int], declared_kan_count: int) -> tuple[int | None, int | None]:
    """
    Indicator pair revealed once `declared_kan_count` kans have been declared.

    Dora comes from index 4 + 2n and ura-dora from 5 + 2n. Either side is None
    when its index falls outside the dead wall.
    """
    dora_index = FIRST_DORA_INDEX + declared_kan_count * INDICATOR_PAIR_STRIDE
    ura_index = FIRST_URA_DORA_INDEX + declared_kan_count * INDICATOR_PAIR_STRIDE
    dora = dead_wall_tiles[dora_index] if 0 <= dora_index < len(dead_wall_tiles) else None
    ura = dead_wall_tiles[ura_index] if 0 <= ura_index < len(dead_wall_tiles) else None
    return dora, ura


def reveal_kan_indicators(wall: Wall, declared_kan_count: int) -> Wall:
    """Append the indicators unlocked by a kan. Indicators are only ever added."""
    dora, ura = reveal_next_indicators(wall.dead_wall_tiles, declared_kan_count)
    update: dict[str, tuple[int, ...]] = {}
    if dora is not None:
        update["dora_indicators"] = (*wall.dora_indicators, dora)
    if ura is not None:
        update["ura_dora_indicators"] = (*wall.ura_dora_indicators, ura)
    if not update:
        return wall
    return wall.model_copy(update=update)


def is_wall_exhausted(wall: Wall) -> bool:
    """Check if live wall is empty."""
    return len(wall.live_tiles) == 0


def tiles_remaining(wall: Wall) -> int:
    """Count tiles remaining in live wall."""
    return len(wall.live_tiles)
