"""
Single-player Riichi mahjong rules engine.

Dependency direction: solo.logic modules never import from solo itself;
this module only re-exports the engine boundary.
"""

from solo.logic.actions import can_kan_during_riichi, check_riichi, find_kan_options, perform_kan
from solo.logic.ai_player import AIPlayer, play_hand
from solo.logic.dora import calculate_dora_tiles
from solo.logic.enums import GameAction, GameErrorCode, HandResultType, TurnPhase, YakuId
from solo.logic.exceptions import GameRuleError, ScoringInvariantError
from solo.logic.game import get_available_actions, initialize_game, record_outcome, start_session
from solo.logic.scoring import PointTable, calculate_score
from solo.logic.service import ActionResult, apply_action
from solo.logic.settings import GameSettings
from solo.logic.state import GameSession, GameSnapshot, HandOutcome
from solo.logic.wall import Wall, draw_replacement, draw_tile, reveal_next_indicators
from solo.logic.win import get_waiting_tiles, is_tenpai, is_winning_hand
from solo.logic.yaku import WinContext, YakuEntry, YakuResult, check_yaku

__all__ = [
    "AIPlayer",
    "ActionResult",
    "GameAction",
    "GameErrorCode",
    "GameRuleError",
    "GameSession",
    "GameSettings",
    "GameSnapshot",
    "HandOutcome",
    "HandResultType",
    "PointTable",
    "ScoringInvariantError",
    "TurnPhase",
    "Wall",
    "WinContext",
    "YakuEntry",
    "YakuId",
    "YakuResult",
    "apply_action",
    "calculate_dora_tiles",
    "calculate_score",
    "can_kan_during_riichi",
    "check_riichi",
    "check_yaku",
    "draw_replacement",
    "draw_tile",
    "find_kan_options",
    "get_available_actions",
    "get_waiting_tiles",
    "initialize_game",
    "is_tenpai",
    "is_winning_hand",
    "perform_kan",
    "play_hand",
    "record_outcome",
    "reveal_next_indicators",
    "start_session",
]
