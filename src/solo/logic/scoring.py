"""
Fu calculation and han/fu to points conversion.

Every win in single-player mahjong is a concealed self-draw, so the
concealed-ron bonus never applies and tsumo always adds 2 fu.
"""

import math
from collections.abc import Collection, Sequence

import structlog
from pydantic import BaseModel, ConfigDict

from solo.logic.decompose import HandDecomposition, Quad
from solo.logic.enums import YakuId
from solo.logic.exceptions import ScoringInvariantError
from solo.logic.tiles import is_dragon, is_terminal_or_honor, rank_of

logger = structlog.get_logger()

BASE_FU = 20
PINFU_TSUMO_FU = 20
CHIITOITSU_FU = 25
TSUMO_FU = 2
CONCEALED_TRIPLET_FU = 4
CONCEALED_QUAD_FU = 16
TERMINAL_HONOR_MULTIPLIER = 2
DRAGON_PAIR_FU = 2
CLOSED_WAIT_FU = 2
FU_ROUNDING = 10

YAKUMAN_HAN = 13
MANGAN_BASE = 2000

# (tier name, ko ron, oya ron, ko tsumo from dealer, ko tsumo from non-dealer, oya tsumo each)
_MANGAN = ("満貫", 8000, 12000, 4000, 2000, 4000)
_HANEMAN = ("跳満", 12000, 18000, 6000, 3000, 6000)
_BAIMAN = ("倍満", 16000, 24000, 8000, 4000, 8000)
_SANBAIMAN = ("三倍満", 24000, 36000, 12000, 6000, 12000)
_KAZOE_YAKUMAN = ("数え役満", 32000, 48000, 16000, 8000, 16000)

_YAKUMAN_NAMES = {1: "役満", 2: "ダブル役満", 3: "トリプル役満"}


class PointTable(BaseModel):
    """Point payments for a hand of the given value, from both dealer and non-dealer seats."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    ko_ron: int = 0
    oya_ron: int = 0
    ko_tsumo_dealer: int = 0  # paid by the dealer when a non-dealer self-draws
    ko_tsumo_non_dealer: int = 0  # paid by each non-dealer when a non-dealer self-draws
    oya_tsumo_all: int = 0  # paid by each player when the dealer self-draws

    @property
    def ko_tsumo_total(self) -> int:
        return self.ko_tsumo_dealer + 2 * self.ko_tsumo_non_dealer

    @property
    def oya_tsumo_total(self) -> int:
        return 3 * self.oya_tsumo_all


def _round_up(value: int, step: int) -> int:
    return math.ceil(value / step) * step


def _has_closed_wait(decomposition: HandDecomposition, winning_tile: int) -> bool:
    """True when the winning tile can be read as a pair, middle or edge wait."""
    if decomposition.pair == winning_tile:
        return True
    for low, middle, high in decomposition.sequences:
        if winning_tile == middle:
            return True
        if winning_tile == high and rank_of(low) == 1:
            return True
        if winning_tile == low and rank_of(low) == 7:
            return True
    return False


def calculate_fu(
    decomposition: HandDecomposition | None,
    winning_tile: int,
    quads: Sequence[Quad],
    yaku_ids: Collection[YakuId],
) -> int:
    """
    Compute fu for a concealed self-drawn hand.

    Seven pairs is a fixed 25 and pinfu tsumo a fixed 20; neither is rounded.
    Everything else is 20 base + 2 tsumo + concealed triplets/quads + dragon
    pair + closed wait, rounded up to the next 10.
    """
    if YakuId.CHIITOITSU in yaku_ids:
        return CHIITOITSU_FU
    if YakuId.PINFU in yaku_ids:
        return PINFU_TSUMO_FU
    if decomposition is None:
        return 0

    fu = BASE_FU
    if YakuId.TSUMO in yaku_ids:
        fu += TSUMO_FU
    for triplet in decomposition.triplets:
        value = CONCEALED_TRIPLET_FU
        if is_terminal_or_honor(triplet[0]):
            value *= TERMINAL_HONOR_MULTIPLIER
        fu += value
    for quad in quads:
        value = CONCEALED_QUAD_FU
        if is_terminal_or_honor(quad[0]):
            value *= TERMINAL_HONOR_MULTIPLIER
        fu += value
    if is_dragon(decomposition.pair):
        fu += DRAGON_PAIR_FU
    if _has_closed_wait(decomposition, winning_tile):
        fu += CLOSED_WAIT_FU
    return _round_up(fu, FU_ROUNDING)


def _limit_table(
    tier: tuple[str, int, int, int, int, int], multiplier: int = 1, name: str | None = None
) -> PointTable:
    tier_name, ko_ron, oya_ron, ko_tsumo_dealer, ko_tsumo_non_dealer, oya_tsumo_all = tier
    return PointTable(
        name=name if name is not None else tier_name,
        ko_ron=ko_ron * multiplier,
        oya_ron=oya_ron * multiplier,
        ko_tsumo_dealer=ko_tsumo_dealer * multiplier,
        ko_tsumo_non_dealer=ko_tsumo_non_dealer * multiplier,
        oya_tsumo_all=oya_tsumo_all * multiplier,
    )


def yakuman_name(multiplier: int) -> str:
    return _YAKUMAN_NAMES.get(multiplier, f"{multiplier}倍役満")


def calculate_score(han: int, fu: int, *, is_yakuman: bool = False) -> PointTable:
    """
    Convert han and fu into the standard point table.

    Yakuman hands pay one yakuman per 13 han. Limit hands use fixed tiers;
    below mangan the base is fu * 2^(han + 2) and each payment is rounded up
    to 100. Zero or negative han scores nothing.
    Raises ScoringInvariantError for a positive-han, non-limit hand with zero fu.
    """
    if han <= 0:
        return PointTable()
    if is_yakuman:
        multiplier = max(han // YAKUMAN_HAN, 1)
        return _limit_table(_KAZOE_YAKUMAN, multiplier, name=yakuman_name(multiplier))
    if han >= 13:
        return _limit_table(_KAZOE_YAKUMAN)
    if han >= 11:
        return _limit_table(_SANBAIMAN)
    if han >= 8:
        return _limit_table(_BAIMAN)
    if han >= 6:
        return _limit_table(_HANEMAN)
    if han >= 5 or (han == 4 and fu >= 40) or (han == 3 and fu >= 70):
        return _limit_table(_MANGAN)
    if fu <= 0:
        logger.error("fu is zero for a non-yakuman hand", han=han, fu=fu)
        raise ScoringInvariantError(han=han, fu=fu)

    base = fu * 2 ** (han + 2)
    if base >= MANGAN_BASE:
        return _limit_table(_MANGAN)
    return PointTable(
        ko_ron=_round_up(base * 4, 100),
        oya_ron=_round_up(base * 6, 100),
        ko_tsumo_dealer=_round_up(base * 2, 100),
        ko_tsumo_non_dealer=_round_up(base, 100),
        oya_tsumo_all=_round_up(base * 2, 100),
    )
