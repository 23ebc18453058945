"""Typed domain exceptions for single-player rule violations.

User-facing rule violations use subclasses of GameRuleError rather than raw
ValueError, so the service boundary can catch and convert them into error
results while leaving the snapshot untouched. Internal defects use separate
exception types that are never converted.
"""


class GameRuleError(Exception):
    """Base exception for game rule violations.

    Raised by the state transitions in game.py when an action violates the
    rules in the current snapshot. Caught at the service boundary
    (service.py) and converted to an ActionError.
    """


class InvalidDiscardError(GameRuleError):
    """Tile cannot be discarded (bad position, riichi restriction, etc.)."""


class InvalidRiichiError(GameRuleError):
    """Riichi declaration conditions not met."""


class InvalidKanError(GameRuleError):
    """Concealed kan is not available for the requested tile."""


class InvalidWinError(GameRuleError):
    """Tsumo declared on an incomplete hand or a hand without yaku."""


class InvalidActionError(GameRuleError):
    """Action is not valid in the current turn phase."""


class UnsupportedSettingsError(GameRuleError):
    """Game settings contain values the engine cannot honour."""


class ScoringInvariantError(Exception):
    """Raised when scoring reaches a state that indicates a logic defect.

    A positive-han, non-limit hand with zero fu can only come from a bug in
    the fu calculation. It is logged and propagated, never converted into a
    user-facing error.
    """

    def __init__(self, *, han: int, fu: int) -> None:
        self.han = han
        self.fu = fu
        super().__init__(f"fu is {fu} for a non-yakuman hand with {han} han")
