from collections import Counter
from collections.abc import Sequence

from solo.logic.decompose import Quad
from solo.logic.enums import TurnPhase
from solo.logic.settings import GameSettings
from solo.logic.state import GameSnapshot
from solo.logic.tiles import COPIES_PER_TILE, TILE_TYPES, parse_tiles
from solo.logic.wall import DEAD_WALL_SIZE, Wall, create_wall_from_tiles

# ============================================================================
# Test State Builder Helpers
# ============================================================================


def tiles(notation: str) -> list[int]:
    """Shorthand for parse_tiles in test bodies."""
    return parse_tiles(notation)


def build_wall_tiles(
    hand: Sequence[int],
    draws: Sequence[int] = (),
    dead_wall: Sequence[int] | None = None,
) -> list[int]:
    """
    Build a full 136-tile order: the hand is dealt first, then `draws` in order.

    Leftover tiles fill the rest of the live wall in ascending order. When
    dead_wall is omitted the last 14 leftover tiles form it.
    """
    used = Counter([*hand, *draws, *(dead_wall or ())])
    leftover = [tile for tile in range(TILE_TYPES) for _ in range(COPIES_PER_TILE - used[tile])]
    if dead_wall is None:
        return [*hand, *draws, *leftover]
    if len(dead_wall) != DEAD_WALL_SIZE:
        raise ValueError(f"dead wall must have {DEAD_WALL_SIZE} tiles")
    return [*hand, *draws, *leftover, *dead_wall]


def build_wall(
    hand: Sequence[int],
    draws: Sequence[int] = (),
    dead_wall: Sequence[int] | None = None,
) -> Wall:
    return create_wall_from_tiles(build_wall_tiles(hand, draws, dead_wall))


def create_snapshot(
    hand: Sequence[int] | str = (),
    drawn_tile: int | None = None,
    *,
    live_tiles: Sequence[int] | None = None,
    dead_wall: Sequence[int] | None = None,
    dora_indicators: Sequence[int] = (),
    ura_dora_indicators: Sequence[int] = (),
    replacement_tiles: Sequence[int] | None = None,
    quads: Sequence[Quad] = (),
    discards: Sequence[int] = (),
    phase: TurnPhase | None = None,
    is_riichi: bool = False,
    is_ippatsu: bool = False,
    is_rinshan: bool = False,
    settings: GameSettings | None = None,
) -> GameSnapshot:
    """
    Create a GameSnapshot with sensible defaults for testing.

    The live wall defaults to 40 copies of a harmless tile so draws never
    exhaust it unless a test asks for that. Phase defaults to AWAITING_DISCARD
    when a drawn tile is given, AWAITING_DRAW otherwise.
    """
    hand_tiles = parse_tiles(hand) if isinstance(hand, str) else sorted(hand)
    dead = tuple(dead_wall) if dead_wall is not None else tuple(range(DEAD_WALL_SIZE))
    wall = Wall(
        live_tiles=tuple(live_tiles) if live_tiles is not None else (0,) * 40,
        dead_wall_tiles=dead,
        replacement_tiles=tuple(replacement_tiles) if replacement_tiles is not None else dead[:4],
        dora_indicators=tuple(dora_indicators),
        ura_dora_indicators=tuple(ura_dora_indicators),
    )
    if phase is None:
        phase = TurnPhase.AWAITING_DISCARD if drawn_tile is not None else TurnPhase.AWAITING_DRAW
    return GameSnapshot(
        settings=settings or GameSettings(),
        wall=wall,
        hand=tuple(hand_tiles),
        drawn_tile=drawn_tile,
        discards=tuple(discards),
        quads=tuple(quads),
        phase=phase,
        is_riichi=is_riichi,
        is_ippatsu=is_ippatsu,
        is_rinshan=is_rinshan,
    )
