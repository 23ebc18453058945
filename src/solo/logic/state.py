"""
Immutable game state for single-player mahjong.

Every transition in game.py takes a GameSnapshot and returns a new one via
model_copy; nothing mutates a snapshot in place. Snapshots serialise with
model_dump_json and load back with model_validate_json.
"""

from pydantic import BaseModel, ConfigDict, Field

from solo.logic.decompose import Quad
from solo.logic.dora import calculate_dora_tiles
from solo.logic.enums import HandResultType, TurnPhase
from solo.logic.scoring import PointTable
from solo.logic.settings import GameSettings
from solo.logic.wall import Wall
from solo.logic.yaku import YakuResult


class HandOutcome(BaseModel):
    """How a finished hand ended and, for a win, what it was worth."""

    model_config = ConfigDict(frozen=True)

    result_type: HandResultType
    winning_tile: int | None = None
    yaku: YakuResult | None = None
    score: PointTable | None = None


class GameSession(BaseModel):
    """
    Running score across the hands of one session.

    Only self-drawn wins add points. The session is won once the running
    score reaches the target; `victory_hand` remembers the hand that got there.
    """

    model_config = ConfigDict(frozen=True)

    target_score: int
    current_score: int = 0
    hands_played: int = 0
    wins: int = 0
    victory_hand: int | None = None

    @property
    def is_victory(self) -> bool:
        return self.current_score >= self.target_score


class GameSnapshot(BaseModel):
    """
    Complete engine state for one single-player hand.

    `hand` is the resting hand (13 tiles minus three per quad); `drawn_tile`
    is held apart until it is discarded or merged by a kan. The turn phase
    is the primary state; the riichi, ippatsu and rinshan flags are only
    changed at explicit transition points.
    """

    model_config = ConfigDict(frozen=True)

    seed: str = ""
    hand_number: int = 0
    settings: GameSettings = Field(default_factory=GameSettings)
    wall: Wall = Field(default_factory=Wall)
    hand: tuple[int, ...] = ()
    drawn_tile: int | None = None
    discards: tuple[int, ...] = ()
    quads: tuple[Quad, ...] = ()
    phase: TurnPhase = TurnPhase.AWAITING_DRAW
    is_riichi: bool = False  # one-way: never cleared once set
    is_ippatsu: bool = False
    is_rinshan: bool = False
    riichi_discard_positions: tuple[int, ...] = ()  # only set while phase is RIICHI_DECLARED
    outcome: HandOutcome | None = None

    @property
    def full_hand(self) -> list[int]:
        """Resting hand plus the drawn tile; discard positions index into this list."""
        if self.drawn_tile is None:
            return list(self.hand)
        return [*self.hand, self.drawn_tile]

    @property
    def dora_tiles(self) -> tuple[int, ...]:
        return calculate_dora_tiles(self.wall.dora_indicators)

    @property
    def is_game_over(self) -> bool:
        return self.phase == TurnPhase.GAME_OVER
