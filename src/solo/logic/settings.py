"""Centralized settings for single-player mahjong.

GameSettings holds the gameplay rules and travels inside every snapshot.
EngineSettings holds process-level configuration read from SOLO_* env vars.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings

from solo.logic.exceptions import UnsupportedSettingsError
from solo.logic.rng import validate_seed_hex

MAX_KANS = 4
DEFAULT_TARGET_SCORE = 1000


class GameSettings(BaseModel):
    """
    Configuration for the gameplay rules of a hand and its session.

    All fields default to standard Riichi behaviour.
    """

    model_config = ConfigDict(frozen=True)

    # --- Dora Rules ---
    has_uradora: bool = True
    has_kandora: bool = True

    # --- Yaku / Scoring ---
    has_double_yakuman: bool = True

    # --- Kan Rules ---
    max_kans_per_hand: int = MAX_KANS

    # --- Riichi Rules ---
    min_wall_for_riichi: int = 0
    auto_discard_in_riichi: bool = True

    # --- Session Rules ---
    target_score: int = DEFAULT_TARGET_SCORE


def validate_settings(settings: GameSettings) -> None:
    """Validate that all settings values are supported by the engine.

    Raises UnsupportedSettingsError listing every unsupported value.
    """
    errors: list[str] = []

    if not 0 <= settings.max_kans_per_hand <= MAX_KANS:
        errors.append(f"max_kans_per_hand={settings.max_kans_per_hand} must be between 0 and {MAX_KANS}")

    if settings.min_wall_for_riichi < 0:
        errors.append(f"min_wall_for_riichi={settings.min_wall_for_riichi} must not be negative")

    if settings.target_score <= 0:
        errors.append(f"target_score={settings.target_score} must be positive")

    if errors:
        raise UnsupportedSettingsError("; ".join(errors))


class EngineSettings(BaseSettings):
    model_config = {"env_prefix": "SOLO_"}

    log_dir: str | None = None
    snapshot_dir: str = "data/snapshots"
    seed: str | None = None

    @field_validator("seed")
    @classmethod
    def validate_seed(cls, v: str | None) -> str | None:
        if v:
            validate_seed_hex(v)
            return v
        return None
