"""
Pure state transitions for a single-player hand.

Each transition takes a GameSnapshot and returns a new one. Rule violations
raise a GameRuleError subclass and leave the input snapshot untouched; the
service layer turns those into error results.

Turn flow:
  AWAITING_DRAW --draw--> AWAITING_DISCARD --discard--> AWAITING_DRAW
  AWAITING_DISCARD --declare_riichi--> RIICHI_DECLARED --discard--> AWAITING_DRAW
  AWAITING_DISCARD --declare_kan--> AWAITING_DISCARD (replacement tile drawn)
  AWAITING_DISCARD --declare_tsumo--> GAME_OVER
  AWAITING_DRAW --draw on empty wall--> GAME_OVER (exhaustive draw)

Finished hands feed a GameSession through record_outcome, which keeps the
running score across hands.
"""

import structlog

from solo.logic.actions import check_riichi, find_kan_options, get_riichi_kan_options, perform_kan
from solo.logic.enums import GameAction, HandResultType, TurnPhase
from solo.logic.exceptions import (
    InvalidActionError,
    InvalidDiscardError,
    InvalidKanError,
    InvalidRiichiError,
    InvalidWinError,
)
from solo.logic.rng import derive_hand_rng, generate_seed
from solo.logic.scoring import calculate_score
from solo.logic.settings import GameSettings, validate_settings
from solo.logic.state import GameSession, GameSnapshot, HandOutcome
from solo.logic.tiles import format_tiles, sort_tiles
from solo.logic.types import AvailableAction
from solo.logic.wall import (
    Wall,
    build_and_shuffle,
    deal_initial_hand,
    draw_replacement,
    draw_tile,
    is_wall_exhausted,
    reveal_kan_indicators,
    tiles_remaining,
)
from solo.logic.yaku import WinContext, YakuResult, check_yaku

logger = structlog.get_logger()


def _start_hand(
    wall: Wall,
    hand: list[int],
    drawn_tile: int | None,
    *,
    seed: str,
    hand_number: int,
    settings: GameSettings,
) -> GameSnapshot:
    snapshot = GameSnapshot(
        seed=seed,
        hand_number=hand_number,
        settings=settings,
        wall=wall,
        hand=tuple(hand),
        drawn_tile=drawn_tile,
        phase=TurnPhase.AWAITING_DISCARD,
    )
    logger.info(
        "game initialized",
        hand_number=hand_number,
        hand=format_tiles(hand),
        drawn_tile=drawn_tile,
        dora_indicators=wall.dora_indicators,
        tiles_remaining=tiles_remaining(wall),
    )
    return snapshot


def initialize_game(
    seed: str | None = None,
    hand_number: int = 0,
    settings: GameSettings | None = None,
) -> GameSnapshot:
    """
    Shuffle a fresh wall, deal 13 tiles and draw the first tile.

    The same (seed, hand_number) always produces the same hand. A new
    cryptographic seed is generated when none is given.
    """
    settings = settings or GameSettings()
    validate_settings(settings)
    seed = seed or generate_seed()
    wall, hand, drawn_tile = build_and_shuffle(derive_hand_rng(seed, hand_number))
    return _start_hand(wall, hand, drawn_tile, seed=seed, hand_number=hand_number, settings=settings)


def create_game_from_wall(
    wall: Wall,
    *,
    seed: str = "",
    hand_number: int = 0,
    settings: GameSettings | None = None,
) -> GameSnapshot:
    """Start a hand from an explicit wall (for tests and replays)."""
    settings = settings or GameSettings()
    validate_settings(settings)
    wall, hand = deal_initial_hand(wall)
    wall, drawn_tile = draw_tile(wall)
    return _start_hand(wall, hand, drawn_tile, seed=seed, hand_number=hand_number, settings=settings)


def _require_phase(snapshot: GameSnapshot, phase: TurnPhase, action: str) -> None:
    if snapshot.phase != phase:
        raise InvalidActionError(f"cannot {action} during {snapshot.phase.value}")


def _end_in_exhaustive_draw(snapshot: GameSnapshot, wall: Wall) -> GameSnapshot:
    logger.info("exhaustive draw", discards=len(snapshot.discards), quads=len(snapshot.quads))
    return snapshot.model_copy(
        update={
            "wall": wall,
            "drawn_tile": None,
            "phase": TurnPhase.GAME_OVER,
            "is_rinshan": False,
            "outcome": HandOutcome(result_type=HandResultType.EXHAUSTIVE_DRAW),
        }
    )


def draw(snapshot: GameSnapshot) -> GameSnapshot:
    """Draw the next live tile; an empty live wall ends the hand in an exhaustive draw."""
    _require_phase(snapshot, TurnPhase.AWAITING_DRAW, "draw")
    wall, tile = draw_tile(snapshot.wall)
    if tile is None:
        return _end_in_exhaustive_draw(snapshot, wall)
    return snapshot.model_copy(
        update={
            "wall": wall,
            "drawn_tile": tile,
            "is_rinshan": False,
            "phase": TurnPhase.AWAITING_DISCARD,
        }
    )


def _validate_discard_position(snapshot: GameSnapshot, position: int) -> None:
    if snapshot.phase == TurnPhase.RIICHI_DECLARED:
        if position not in snapshot.riichi_discard_positions:
            raise InvalidRiichiError(f"discarding position {position} does not leave the hand tenpai")
        return
    _require_phase(snapshot, TurnPhase.AWAITING_DISCARD, "discard")
    if not 0 <= position < len(snapshot.full_hand):
        raise InvalidDiscardError(f"position {position} is out of range")
    if snapshot.is_riichi and position != len(snapshot.hand):
        raise InvalidDiscardError("after riichi only the drawn tile can be discarded")


def discard(snapshot: GameSnapshot, position: int) -> GameSnapshot:
    """
    Discard the tile at `position` in hand + drawn tile.

    Completing a riichi declaration sets riichi and ippatsu; any other
    discard clears ippatsu. Rinshan is always cleared.
    """
    _validate_discard_position(snapshot, position)
    full_hand = snapshot.full_hand
    tile = full_hand.pop(position)
    completes_riichi = snapshot.phase == TurnPhase.RIICHI_DECLARED
    update = {
        "hand": tuple(sort_tiles(full_hand)),
        "drawn_tile": None,
        "discards": (*snapshot.discards, tile),
        "phase": TurnPhase.AWAITING_DRAW,
        "is_ippatsu": completes_riichi,
        "is_rinshan": False,
        "riichi_discard_positions": (),
    }
    if completes_riichi:
        update["is_riichi"] = True
        logger.info("riichi declared", discard=tile, hand=format_tiles(full_hand))
    return snapshot.model_copy(update=update)


def riichi_discard_positions(snapshot: GameSnapshot) -> frozenset[int]:
    """Discard positions that would complete a riichi declaration now; empty when riichi is unavailable."""
    if snapshot.phase != TurnPhase.AWAITING_DISCARD or snapshot.is_riichi or snapshot.drawn_tile is None:
        return frozenset()
    if tiles_remaining(snapshot.wall) < snapshot.settings.min_wall_for_riichi:
        return frozenset()
    return check_riichi(snapshot.hand, snapshot.drawn_tile, snapshot.quads)


def declare_riichi(snapshot: GameSnapshot) -> GameSnapshot:
    """
    Start a riichi declaration.

    The hand moves to RIICHI_DECLARED with the discard positions that keep
    it tenpai; the declaration completes with the next discard.
    """
    _require_phase(snapshot, TurnPhase.AWAITING_DISCARD, "declare riichi")
    if snapshot.is_riichi:
        raise InvalidRiichiError("riichi already declared")
    if snapshot.drawn_tile is None:
        raise InvalidRiichiError("riichi requires a drawn tile")
    remaining = tiles_remaining(snapshot.wall)
    if remaining < snapshot.settings.min_wall_for_riichi:
        raise InvalidRiichiError(f"only {remaining} tiles left in the wall")
    positions = riichi_discard_positions(snapshot)
    if not positions:
        raise InvalidRiichiError("no discard leaves the hand tenpai")
    return snapshot.model_copy(
        update={"phase": TurnPhase.RIICHI_DECLARED, "riichi_discard_positions": tuple(sorted(positions))}
    )


def cancel_riichi(snapshot: GameSnapshot) -> GameSnapshot:
    """Abandon a riichi declaration that has not been completed by a discard."""
    _require_phase(snapshot, TurnPhase.RIICHI_DECLARED, "cancel riichi")
    return snapshot.model_copy(update={"phase": TurnPhase.AWAITING_DISCARD, "riichi_discard_positions": ()})


def kan_options(snapshot: GameSnapshot) -> list[int]:
    """Tiles that can be declared as a concealed kan right now."""
    if snapshot.phase != TurnPhase.AWAITING_DISCARD or snapshot.drawn_tile is None:
        return []
    if len(snapshot.quads) >= snapshot.settings.max_kans_per_hand:
        return []
    if snapshot.is_riichi:
        return get_riichi_kan_options(snapshot.hand, snapshot.drawn_tile, snapshot.quads)
    return find_kan_options(snapshot.hand, snapshot.drawn_tile)


def declare_kan(snapshot: GameSnapshot, tile: int | None = None) -> GameSnapshot:
    """
    Declare a concealed kan and draw its replacement tile.

    After riichi only wait-preserving kans are allowed. The kan reveals the
    next dora/ura-dora pair, clears ippatsu and marks the replacement draw as
    rinshan. When the replacement slots are used up the next live tile is
    drawn instead.
    """
    _require_phase(snapshot, TurnPhase.AWAITING_DISCARD, "declare kan")
    drawn_tile = snapshot.drawn_tile
    if drawn_tile is None:
        raise InvalidKanError("kan requires a drawn tile")
    options = kan_options(snapshot)
    if not options:
        raise InvalidKanError("no concealed kan available")
    if tile is None:
        tile = options[0]
    if tile not in options:
        raise InvalidKanError(f"tile {tile} cannot be declared as kan")

    result = perform_kan(snapshot.hand, drawn_tile, tile, snapshot.quads)
    if result is None:
        raise InvalidKanError(f"fewer than four copies of tile {tile}")
    new_hand, new_quads = result

    wall = snapshot.wall
    if snapshot.settings.has_kandora:
        wall = reveal_kan_indicators(wall, len(new_quads))
    wall, replacement = draw_replacement(wall)
    is_rinshan = replacement is not None
    if replacement is None:
        wall, replacement = draw_tile(wall)

    after_kan = snapshot.model_copy(
        update={
            "hand": tuple(new_hand),
            "quads": new_quads,
            "is_ippatsu": False,
        }
    )
    logger.info("kan declared", tile=tile, quads=len(new_quads), dora_indicators=wall.dora_indicators)
    if replacement is None:
        return _end_in_exhaustive_draw(after_kan, wall)
    return after_kan.model_copy(update={"wall": wall, "drawn_tile": replacement, "is_rinshan": is_rinshan})


def evaluate_win(snapshot: GameSnapshot) -> YakuResult | None:
    """Yaku of hand + drawn tile as a self-drawn win, or None if it cannot win."""
    if snapshot.drawn_tile is None:
        return None
    context = WinContext(
        quads=snapshot.quads,
        is_riichi=snapshot.is_riichi,
        is_ippatsu=snapshot.is_ippatsu,
        is_rinshan=snapshot.is_rinshan,
        is_haitei=is_wall_exhausted(snapshot.wall),
        dora_indicators=snapshot.wall.dora_indicators,
        ura_dora_indicators=snapshot.wall.ura_dora_indicators if snapshot.settings.has_uradora else (),
        has_uradora=snapshot.settings.has_uradora,
        has_double_yakuman=snapshot.settings.has_double_yakuman,
    )
    return check_yaku(snapshot.full_hand, snapshot.drawn_tile, context)


def declare_tsumo(snapshot: GameSnapshot) -> GameSnapshot:
    """Win on the drawn tile. Raises InvalidWinError if the hand is incomplete or has no yaku."""
    _require_phase(snapshot, TurnPhase.AWAITING_DISCARD, "declare tsumo")
    yaku = evaluate_win(snapshot)
    if yaku is None:
        raise InvalidWinError("hand is not complete or has no yaku")
    score = calculate_score(yaku.han, yaku.fu, is_yakuman=yaku.is_yakuman)
    logger.info(
        "tsumo",
        hand=format_tiles(snapshot.full_hand),
        winning_tile=snapshot.drawn_tile,
        yaku=[entry.name for entry in yaku.yaku],
        han=yaku.han,
        fu=yaku.fu,
        tier=score.name,
    )
    outcome = HandOutcome(
        result_type=HandResultType.TSUMO,
        winning_tile=snapshot.drawn_tile,
        yaku=yaku,
        score=score,
    )
    return snapshot.model_copy(update={"phase": TurnPhase.GAME_OVER, "outcome": outcome})


def auto_play_riichi(snapshot: GameSnapshot) -> GameSnapshot:
    """
    Play one turn automatically after riichi.

    Returns the snapshot unchanged when the drawn tile wins or a
    wait-preserving kan is available, so the player can decide; otherwise
    discards the drawn tile.
    """
    if not snapshot.is_riichi or snapshot.phase != TurnPhase.AWAITING_DISCARD:
        raise InvalidActionError("automatic play only applies to a riichi hand awaiting discard")
    if evaluate_win(snapshot) is not None or kan_options(snapshot):
        return snapshot
    return discard(snapshot, len(snapshot.hand))


def start_session(settings: GameSettings | None = None) -> GameSession:
    """Start an empty session aiming for the configured target score."""
    settings = settings or GameSettings()
    validate_settings(settings)
    return GameSession(target_score=settings.target_score)


def record_outcome(session: GameSession, snapshot: GameSnapshot) -> GameSession:
    """
    Add a finished hand to the session.

    A tsumo adds the non-dealer self-draw total to the running score; an
    exhaustive draw adds nothing. Raises InvalidActionError for a hand that
    is not over yet.
    """
    outcome = snapshot.outcome
    if snapshot.phase != TurnPhase.GAME_OVER or outcome is None:
        raise InvalidActionError(f"cannot record a hand during {snapshot.phase.value}")

    won = outcome.result_type == HandResultType.TSUMO
    points = outcome.score.ko_tsumo_total if won and outcome.score is not None else 0
    updated = session.model_copy(
        update={
            "current_score": session.current_score + points,
            "hands_played": session.hands_played + 1,
            "wins": session.wins + int(won),
        }
    )
    if updated.is_victory and session.victory_hand is None:
        updated = updated.model_copy(update={"victory_hand": snapshot.hand_number})
        logger.info(
            "target score reached",
            score=updated.current_score,
            target=updated.target_score,
            hand_number=snapshot.hand_number,
        )
    return updated


def get_available_actions(snapshot: GameSnapshot) -> list[AvailableAction]:
    """Actions the player can take in the current snapshot."""
    if snapshot.phase == TurnPhase.GAME_OVER:
        return []
    if snapshot.phase == TurnPhase.AWAITING_DRAW:
        return [AvailableAction(action=GameAction.DRAW)]
    if snapshot.phase == TurnPhase.RIICHI_DECLARED:
        return [
            AvailableAction(action=GameAction.DISCARD, positions=snapshot.riichi_discard_positions),
            AvailableAction(action=GameAction.CANCEL_RIICHI),
        ]

    actions: list[AvailableAction] = []
    if evaluate_win(snapshot) is not None:
        actions.append(AvailableAction(action=GameAction.DECLARE_TSUMO))
    if snapshot.is_riichi:
        positions: tuple[int, ...] = (len(snapshot.hand),)
    else:
        positions = tuple(range(len(snapshot.full_hand)))
        if riichi_discard_positions(snapshot):
            actions.append(AvailableAction(action=GameAction.DECLARE_RIICHI))
    kan_tiles = kan_options(snapshot)
    if kan_tiles:
        actions.append(AvailableAction(action=GameAction.DECLARE_KAN, tiles=tuple(kan_tiles)))
    actions.append(AvailableAction(action=GameAction.DISCARD, positions=positions))
    return actions
