"""
Pydantic models for data crossing the engine boundary.

Contains action payloads, available actions, AI player decisions and
action errors.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from solo.logic.enums import GameAction, GameErrorCode


class DiscardActionData(BaseModel):
    """Data for discard action: index into hand + drawn tile."""

    position: int


class KanActionData(BaseModel):
    """Data for concealed kan; the first legal candidate is used when tile is omitted."""

    tile: int | None = None


class AvailableAction(BaseModel):
    """An action the player may take now, with its legal positions or tiles."""

    model_config = ConfigDict(frozen=True)

    action: GameAction
    positions: tuple[int, ...] = ()
    tiles: tuple[int, ...] = ()


class AIPlayerAction(BaseModel):
    """Decision returned by AIPlayer.get_action."""

    action: GameAction
    position: int | None = None
    tile: int | None = None

    def to_data(self) -> dict[str, Any]:
        """Payload for service.apply_action."""
        if self.action == GameAction.DISCARD:
            return {"position": self.position}
        if self.action == GameAction.DECLARE_KAN:
            return {"tile": self.tile}
        return {}


class ActionError(BaseModel):
    """Why an action was rejected."""

    model_config = ConfigDict(frozen=True)

    code: GameErrorCode
    message: str
