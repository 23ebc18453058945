"""
Action service: the boundary between callers and the pure transitions.

apply_action validates action data, dispatches to game.py and converts
GameRuleError into an ActionError. A rejected action returns the snapshot
it was given, unchanged.
"""

from typing import Any, NamedTuple

import structlog
from pydantic import ValidationError

from solo.logic.enums import GameAction, GameErrorCode, TurnPhase
from solo.logic.exceptions import (
    GameRuleError,
    InvalidDiscardError,
    InvalidKanError,
    InvalidRiichiError,
    InvalidWinError,
)
from solo.logic.game import (
    auto_play_riichi,
    cancel_riichi,
    declare_kan,
    declare_riichi,
    declare_tsumo,
    discard,
    draw,
)
from solo.logic.state import GameSnapshot
from solo.logic.types import ActionError, DiscardActionData, KanActionData

logger = structlog.get_logger()

_ERROR_CODES: dict[type[GameRuleError], GameErrorCode] = {
    InvalidDiscardError: GameErrorCode.INVALID_DISCARD,
    InvalidRiichiError: GameErrorCode.INVALID_RIICHI,
    InvalidKanError: GameErrorCode.INVALID_KAN,
    InvalidWinError: GameErrorCode.INVALID_TSUMO,
}


class ActionResult(NamedTuple):
    """
    Result of applying an action.

    `snapshot` is the state to keep: the new state on success, the input
    state when `error` is set.
    """

    snapshot: GameSnapshot
    error: ActionError | None = None


def _draw_with_auto_discard(snapshot: GameSnapshot) -> GameSnapshot:
    """
    Draw, then keep discarding drawn tiles while riichi auto-play applies.

    Stops as soon as the player has a decision to make (a win or a
    wait-preserving kan) or the hand ends.
    """
    current = draw(snapshot)
    while (
        current.settings.auto_discard_in_riichi
        and current.is_riichi
        and current.phase == TurnPhase.AWAITING_DISCARD
    ):
        advanced = auto_play_riichi(current)
        if advanced is current:
            break
        current = draw(advanced)
    return current


def _dispatch(snapshot: GameSnapshot, action: GameAction, data: dict[str, Any]) -> GameSnapshot | None:
    if action == GameAction.DRAW:
        return _draw_with_auto_discard(snapshot)
    if action == GameAction.DISCARD:
        return discard(snapshot, DiscardActionData(**data).position)
    if action == GameAction.DECLARE_RIICHI:
        return declare_riichi(snapshot)
    if action == GameAction.CANCEL_RIICHI:
        return cancel_riichi(snapshot)
    if action == GameAction.DECLARE_KAN:
        return declare_kan(snapshot, KanActionData(**data).tile)
    if action == GameAction.DECLARE_TSUMO:
        return declare_tsumo(snapshot)
    return None


def apply_action(
    snapshot: GameSnapshot,
    action: GameAction,
    data: dict[str, Any] | None = None,
) -> ActionResult:
    """Apply one player action; user errors come back as ActionResult.error, never as exceptions."""
    try:
        new_snapshot = _dispatch(snapshot, action, data or {})
    except ValidationError as e:
        logger.warning("invalid action data", action=action, error=str(e))
        return ActionResult(
            snapshot, ActionError(code=GameErrorCode.VALIDATION_ERROR, message=f"invalid action data: {e}")
        )
    except GameRuleError as e:
        code = _ERROR_CODES.get(type(e), GameErrorCode.INVALID_ACTION)
        logger.warning("action rejected", action=action, code=code, reason=str(e))
        return ActionResult(snapshot, ActionError(code=code, message=str(e)))

    if new_snapshot is None:
        logger.warning("unknown action", action=action)
        return ActionResult(snapshot, ActionError(code=GameErrorCode.UNKNOWN_ACTION, message=f"unknown action: {action}"))
    return ActionResult(new_snapshot)
