"""
AI player decision making for single-player mahjong.

Tsumogiri AI player: declares tsumo whenever it can, riichi whenever it is
offered, never declares kan, and otherwise discards the tile it just drew.
Used to play hands non-interactively from bin/simulate.py and the tests.
"""

from enum import Enum

import structlog

from solo.logic.enums import GameAction, TurnPhase
from solo.logic.game import get_available_actions, initialize_game
from solo.logic.service import apply_action
from solo.logic.settings import GameSettings
from solo.logic.state import GameSnapshot
from solo.logic.types import AIPlayerAction, AvailableAction

logger = structlog.get_logger()


class AIPlayerStrategy(Enum):
    """Available AI player strategies."""

    TSUMOGIRI = "tsumogiri"


class AIPlayer:
    """
    AI player with configurable decision-making strategy.

    All decision methods are on this class so subclasses or alternative
    strategies can override them.
    """

    def __init__(self, strategy: AIPlayerStrategy = AIPlayerStrategy.TSUMOGIRI) -> None:
        self.strategy = strategy

    def should_declare_riichi(self, snapshot: GameSnapshot) -> bool:
        """Decide whether to declare riichi when it is available."""
        return True

    def should_declare_kan(self, snapshot: GameSnapshot, tiles: tuple[int, ...]) -> bool:
        """Decide whether to declare one of the offered kans."""
        return False

    def select_discard(self, snapshot: GameSnapshot, positions: tuple[int, ...]) -> int:
        """
        Select a discard position among the legal ones.

        Prefers the drawn tile (the last position); falls back to the highest legal position.
        """
        if not positions:
            raise ValueError("cannot select discard without legal positions")
        drawn_position = len(snapshot.full_hand) - 1
        if drawn_position in positions:
            return drawn_position
        return max(positions)

    def get_action(self, snapshot: GameSnapshot) -> AIPlayerAction:
        """Determine the AI player's next action."""
        available: dict[GameAction, AvailableAction] = {
            item.action: item for item in get_available_actions(snapshot)
        }
        if not available:
            raise ValueError("no actions available: the hand is over")
        if GameAction.DRAW in available:
            return AIPlayerAction(action=GameAction.DRAW)
        if GameAction.DECLARE_TSUMO in available:
            return AIPlayerAction(action=GameAction.DECLARE_TSUMO)
        kan = available.get(GameAction.DECLARE_KAN)
        if kan is not None and self.should_declare_kan(snapshot, kan.tiles):
            return AIPlayerAction(action=GameAction.DECLARE_KAN, tile=kan.tiles[0])
        if GameAction.DECLARE_RIICHI in available and self.should_declare_riichi(snapshot):
            return AIPlayerAction(action=GameAction.DECLARE_RIICHI)
        position = self.select_discard(snapshot, available[GameAction.DISCARD].positions)
        return AIPlayerAction(action=GameAction.DISCARD, position=position)


def play_hand(
    seed: str | None = None,
    hand_number: int = 0,
    settings: GameSettings | None = None,
    player: AIPlayer | None = None,
) -> GameSnapshot:
    """Play one hand to the end with the AI player and return the final snapshot."""
    player = player or AIPlayer()
    snapshot = initialize_game(seed, hand_number, settings)
    while snapshot.phase != TurnPhase.GAME_OVER:
        ai_action = player.get_action(snapshot)
        result = apply_action(snapshot, ai_action.action, ai_action.to_data())
        if result.error is not None:
            logger.error("ai player action rejected", action=ai_action.action, code=result.error.code)
            raise RuntimeError(f"AI player chose an illegal action: {result.error.message}")
        snapshot = result.snapshot
    return snapshot
