"""
Yaku detection for completed single-player hands.

check_yaku evaluates yakuman first; when any yakuman matches the hand is
scored on the yakuman table and ordinary yaku are not considered. Otherwise
every reading of the hand (seven pairs and each meld decomposition) is
scored and the most valuable one is kept.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict

from solo.logic.decompose import (
    MELDS_PER_HAND,
    SPECIAL_SHAPE_SIZE,
    HandDecomposition,
    Quad,
    all_decompositions,
    decompose_special_shapes,
)
from solo.logic.dora import calculate_dora_tiles, count_dora
from solo.logic.enums import SpecialShape, YakuId
from solo.logic.scoring import calculate_fu
from solo.logic.tiles import (
    CHUN_34,
    DRAGONS_34,
    HAKU_34,
    HATSU_34,
    HONORS,
    NUMBERED_SUITS,
    count_tiles,
    is_dragon,
    is_green,
    is_honor,
    is_simple,
    is_terminal,
    is_terminal_or_honor,
    rank_of,
    suit_of,
)
from solo.logic.win import is_winning_hand


class YakuDefinition(NamedTuple):
    name: str
    han: int
    is_yakuman: bool = False


YAKU_TABLE: dict[YakuId, YakuDefinition] = {
    YakuId.RIICHI: YakuDefinition("立直", 1),
    YakuId.IPPATSU: YakuDefinition("一発", 1),
    YakuId.TSUMO: YakuDefinition("門前清自摸和", 1),
    YakuId.TANYAO: YakuDefinition("断么九", 1),
    YakuId.PINFU: YakuDefinition("平和", 1),
    YakuId.IIPEIKOU: YakuDefinition("一盃口", 1),
    YakuId.YAKUHAI_HAKU: YakuDefinition("役牌：白", 1),
    YakuId.YAKUHAI_HATSU: YakuDefinition("役牌：發", 1),
    YakuId.YAKUHAI_CHUN: YakuDefinition("役牌：中", 1),
    YakuId.HAITEI: YakuDefinition("海底摸月", 1),
    YakuId.RINSHAN: YakuDefinition("嶺上開花", 1),
    YakuId.TOITOI: YakuDefinition("対々和", 2),
    YakuId.SANANKOU: YakuDefinition("三暗刻", 2),
    YakuId.SANSHOKU_DOUKOU: YakuDefinition("三色同刻", 2),
    YakuId.SHOUSANGEN: YakuDefinition("小三元", 2),
    YakuId.HONROUTOU: YakuDefinition("混老頭", 2),
    YakuId.CHIITOITSU: YakuDefinition("七対子", 2),
    YakuId.IKKITSUUKAN: YakuDefinition("一気通貫", 2),
    YakuId.SANSHOKU_DOUJUN: YakuDefinition("三色同順", 2),
    YakuId.HONCHANTAIYAO: YakuDefinition("混全帯幺九", 2),
    YakuId.SAN_KANTSU: YakuDefinition("三槓子", 2),
    YakuId.RYANPEIKOU: YakuDefinition("二盃口", 3),
    YakuId.JUNCHAN: YakuDefinition("純全帯幺九", 3),
    YakuId.HONITSU: YakuDefinition("混一色", 3),
    YakuId.CHINITSU: YakuDefinition("清一色", 6),
    YakuId.KOKUSHI: YakuDefinition("国士無双", 13, is_yakuman=True),
    YakuId.KOKUSHI_13: YakuDefinition("国士無双十三面待ち", 26, is_yakuman=True),
    YakuId.SUUANKOU: YakuDefinition("四暗刻", 13, is_yakuman=True),
    YakuId.SUUANKOU_TANKI: YakuDefinition("四暗刻単騎待ち", 26, is_yakuman=True),
    YakuId.DAISANGEN: YakuDefinition("大三元", 13, is_yakuman=True),
    YakuId.TSUUIISOU: YakuDefinition("字一色", 13, is_yakuman=True),
    YakuId.RYUUIISOU: YakuDefinition("緑一色", 13, is_yakuman=True),
    YakuId.CHINROUTOU: YakuDefinition("清老頭", 13, is_yakuman=True),
    YakuId.CHUUREN: YakuDefinition("九蓮宝燈", 13, is_yakuman=True),
    YakuId.JUNSEI_CHUUREN: YakuDefinition("純正九蓮宝燈", 26, is_yakuman=True),
    YakuId.SUU_KANTSU: YakuDefinition("四槓子", 13, is_yakuman=True),
    # han for the dora entries is the number of dora held
    YakuId.DORA: YakuDefinition("ドラ", 0),
    YakuId.URA_DORA: YakuDefinition("裏ドラ", 0),
}

# superior pattern -> the pattern it replaces
_SUPERSEDES: dict[YakuId, YakuId] = {
    YakuId.RYANPEIKOU: YakuId.IIPEIKOU,
    YakuId.JUNCHAN: YakuId.HONCHANTAIYAO,
    YakuId.CHINITSU: YakuId.HONITSU,
}

# double yakuman variant -> single variant used when double yakuman is disabled
_SINGLE_YAKUMAN: dict[YakuId, YakuId] = {
    YakuId.KOKUSHI_13: YakuId.KOKUSHI,
    YakuId.SUUANKOU_TANKI: YakuId.SUUANKOU,
    YakuId.JUNSEI_CHUUREN: YakuId.CHUUREN,
}

_YAKUHAI: dict[int, YakuId] = {
    HAKU_34: YakuId.YAKUHAI_HAKU,
    HATSU_34: YakuId.YAKUHAI_HATSU,
    CHUN_34: YakuId.YAKUHAI_CHUN,
}

# rank counts of the nine gates skeleton 1112345678999
_CHUUREN_SKELETON = (3, 1, 1, 1, 1, 1, 1, 1, 3)
_ITTSU_STARTS = frozenset({1, 4, 7})
_DRAGON_COUNT = len(DRAGONS_34)
_SANANKOU_TRIPLETS = 3
_SAN_KANTSU_QUADS = 3


class YakuEntry(BaseModel):
    """One matched pattern and the han it contributes."""

    model_config = ConfigDict(frozen=True)

    yaku_id: YakuId
    name: str
    han: int


class YakuResult(BaseModel):
    """Matched patterns with the totals used for point lookup."""

    model_config = ConfigDict(frozen=True)

    yaku: tuple[YakuEntry, ...]
    han: int
    fu: int
    is_yakuman: bool = False

    def has(self, yaku_id: YakuId) -> bool:
        return any(entry.yaku_id == yaku_id for entry in self.yaku)


class WinContext(BaseModel):
    """Situational inputs to yaku detection for a self-drawn win."""

    model_config = ConfigDict(frozen=True)

    quads: tuple[Quad, ...] = ()
    is_riichi: bool = False
    is_ippatsu: bool = False
    is_rinshan: bool = False
    is_haitei: bool = False
    dora_indicators: tuple[int, ...] = ()
    ura_dora_indicators: tuple[int, ...] = ()
    has_uradora: bool = True
    has_double_yakuman: bool = True


def _entry(yaku_id: YakuId, han: int | None = None) -> YakuEntry:
    definition = YAKU_TABLE[yaku_id]
    return YakuEntry(yaku_id=yaku_id, name=definition.name, han=definition.han if han is None else han)


def _unique(yaku_ids: Iterable[YakuId]) -> list[YakuId]:
    return list(dict.fromkeys(yaku_ids))


def _apply_supersession(yaku_ids: list[YakuId]) -> list[YakuId]:
    dropped = {_SUPERSEDES[yaku_id] for yaku_id in yaku_ids if yaku_id in _SUPERSEDES}
    return [yaku_id for yaku_id in yaku_ids if yaku_id not in dropped]


def _quad_tiles(quads: Sequence[Quad]) -> list[int]:
    return [tile for quad in quads for tile in quad]


# --- yakuman ---


def _chuuren_variant(loose_tiles: Sequence[int], winning_tile: int) -> YakuId | None:
    suits = {suit_of(tile) for tile in loose_tiles}
    if len(loose_tiles) != SPECIAL_SHAPE_SIZE or len(suits) != 1 or HONORS in suits:
        return None
    rank_counts = Counter(rank_of(tile) for tile in loose_tiles)
    if any(rank_counts[rank] < need for rank, need in enumerate(_CHUUREN_SKELETON, start=1)):
        return None
    winning_rank = rank_of(winning_tile)
    if suit_of(winning_tile) in suits and rank_counts[winning_rank] == _CHUUREN_SKELETON[winning_rank - 1] + 1:
        return YakuId.JUNSEI_CHUUREN
    return YakuId.CHUUREN


def _find_yakuman(
    loose_tiles: Sequence[int],
    winning_tile: int,
    quads: Sequence[Quad],
    decompositions: Sequence[HandDecomposition],
    shape: SpecialShape | None,
) -> list[YakuId]:
    all_tiles = [*loose_tiles, *_quad_tiles(quads)]
    found: list[YakuId] = []

    if len(quads) == MELDS_PER_HAND and len(loose_tiles) == 2 and loose_tiles[0] == loose_tiles[1]:
        found.append(YakuId.SUU_KANTSU)

    for decomposition in decompositions:
        triplet_tiles = [meld[0] for meld in decomposition.triplets] + [quad[0] for quad in quads]
        if len(triplet_tiles) == MELDS_PER_HAND:
            found.append(YakuId.SUUANKOU_TANKI if decomposition.pair == winning_tile else YakuId.SUUANKOU)
        if sum(1 for tile in triplet_tiles if is_dragon(tile)) == _DRAGON_COUNT:
            found.append(YakuId.DAISANGEN)
    if YakuId.SUUANKOU_TANKI in found:
        found = [yaku_id for yaku_id in found if yaku_id != YakuId.SUUANKOU]

    if shape == SpecialShape.KOKUSHI:
        found.append(YakuId.KOKUSHI_13 if count_tiles(loose_tiles)[winning_tile] == 2 else YakuId.KOKUSHI)

    if all(is_honor(tile) for tile in all_tiles):
        found.append(YakuId.TSUUIISOU)
    if all(is_green(tile) for tile in all_tiles):
        found.append(YakuId.RYUUIISOU)
    if all(is_terminal(tile) for tile in all_tiles):
        found.append(YakuId.CHINROUTOU)

    if not quads:
        chuuren = _chuuren_variant(loose_tiles, winning_tile)
        if chuuren is not None:
            found.append(chuuren)

    return _unique(found)


# --- ordinary yaku ---


def _flush_yaku(all_tiles: Sequence[int]) -> list[YakuId]:
    suits = {suit_of(tile) for tile in all_tiles}
    if len(suits) == 1 and HONORS not in suits:
        return [YakuId.CHINITSU]
    if len(suits) == 2 and HONORS in suits:
        return [YakuId.HONITSU]
    return []


def _situational_yaku(context: WinContext) -> list[YakuId]:
    yaku_ids: list[YakuId] = []
    if context.is_riichi:
        yaku_ids.append(YakuId.RIICHI)
        if context.is_ippatsu:
            yaku_ids.append(YakuId.IPPATSU)
    if context.is_haitei:
        yaku_ids.append(YakuId.HAITEI)
    if context.is_rinshan:
        yaku_ids.append(YakuId.RINSHAN)
    return yaku_ids


def _seven_pairs_yaku(loose_tiles: Sequence[int], context: WinContext) -> list[YakuId]:
    yaku_ids = [YakuId.CHIITOITSU, YakuId.TSUMO]
    if all(is_simple(tile) for tile in loose_tiles):
        yaku_ids.append(YakuId.TANYAO)
    if all(is_terminal_or_honor(tile) for tile in loose_tiles):
        yaku_ids.append(YakuId.HONROUTOU)
    yaku_ids.extend(_flush_yaku(loose_tiles))
    yaku_ids.extend(_situational_yaku(context))
    return yaku_ids


def _is_pinfu(decomposition: HandDecomposition, winning_tile: int, quads: Sequence[Quad]) -> bool:
    """All sequences, a non-dragon pair and a two-sided wait on the winning tile."""
    if quads or decomposition.triplets or is_dragon(decomposition.pair):
        return False
    for low, _middle, high in decomposition.sequences:
        if winning_tile == low and rank_of(low) <= 6:
            return True
        if winning_tile == high and rank_of(low) >= 2:
            return True
    return False


def _outside_hand_yaku(
    decomposition: HandDecomposition, quads: Sequence[Quad], all_tiles: Sequence[int]
) -> list[YakuId]:
    groups: list[Sequence[int]] = [*decomposition.melds, *quads, (decomposition.pair, decomposition.pair)]
    if not all(any(is_terminal_or_honor(tile) for tile in group) for group in groups):
        return []
    if all(is_terminal_or_honor(tile) for tile in all_tiles):
        return [YakuId.HONROUTOU]
    if not any(is_honor(tile) for tile in all_tiles):
        return [YakuId.JUNCHAN]
    return [YakuId.HONCHANTAIYAO]


def _sequence_pattern_yaku(decomposition: HandDecomposition) -> list[YakuId]:
    yaku_ids: list[YakuId] = []
    starts_by_suit: dict[int, set[int]] = {}
    suits_by_start: dict[int, set[int]] = {}
    for low, _middle, _high in decomposition.sequences:
        starts_by_suit.setdefault(suit_of(low), set()).add(rank_of(low))
        suits_by_start.setdefault(rank_of(low), set()).add(suit_of(low))
    if any(_ITTSU_STARTS <= starts for starts in starts_by_suit.values()):
        yaku_ids.append(YakuId.IKKITSUUKAN)
    if any(suits == set(NUMBERED_SUITS) for suits in suits_by_start.values()):
        yaku_ids.append(YakuId.SANSHOKU_DOUJUN)
    return yaku_ids


def _decomposed_yaku(
    decomposition: HandDecomposition,
    winning_tile: int,
    all_tiles: Sequence[int],
    context: WinContext,
) -> list[YakuId]:
    quads = context.quads
    yaku_ids = [YakuId.TSUMO]

    if _is_pinfu(decomposition, winning_tile, quads):
        yaku_ids.append(YakuId.PINFU)

    identical_sequence_pairs = sum(count // 2 for count in Counter(decomposition.sequences).values())
    if identical_sequence_pairs >= 2:
        yaku_ids.append(YakuId.RYANPEIKOU)
    elif identical_sequence_pairs == 1:
        yaku_ids.append(YakuId.IIPEIKOU)

    # every triplet and quad is concealed: nothing is ever called from a discard
    triplet_tiles = [meld[0] for meld in decomposition.triplets] + [quad[0] for quad in quads]
    if len(triplet_tiles) == MELDS_PER_HAND:
        yaku_ids.append(YakuId.TOITOI)
    if len(triplet_tiles) == _SANANKOU_TRIPLETS:
        yaku_ids.append(YakuId.SANANKOU)
    if len(quads) == _SAN_KANTSU_QUADS:
        yaku_ids.append(YakuId.SAN_KANTSU)

    dragon_triplets = [tile for tile in triplet_tiles if is_dragon(tile)]
    if len(dragon_triplets) == _DRAGON_COUNT - 1 and is_dragon(decomposition.pair):
        yaku_ids.append(YakuId.SHOUSANGEN)
    yaku_ids.extend(_YAKUHAI[tile] for tile in dragon_triplets)

    if all(is_simple(tile) for tile in all_tiles):
        yaku_ids.append(YakuId.TANYAO)

    yaku_ids.extend(_outside_hand_yaku(decomposition, quads, all_tiles))
    yaku_ids.extend(_sequence_pattern_yaku(decomposition))

    triplet_suits_by_rank: dict[int, set[int]] = {}
    for tile in triplet_tiles:
        if not is_honor(tile):
            triplet_suits_by_rank.setdefault(rank_of(tile), set()).add(suit_of(tile))
    if any(suits == set(NUMBERED_SUITS) for suits in triplet_suits_by_rank.values()):
        yaku_ids.append(YakuId.SANSHOKU_DOUKOU)

    yaku_ids.extend(_flush_yaku(all_tiles))
    yaku_ids.extend(_situational_yaku(context))
    return yaku_ids


def _dora_entries(all_tiles: Sequence[int], context: WinContext) -> list[YakuEntry]:
    entries: list[YakuEntry] = []
    dora_count = count_dora(all_tiles, calculate_dora_tiles(context.dora_indicators))
    if dora_count > 0:
        entries.append(_entry(YakuId.DORA, dora_count))
    if context.is_riichi and context.has_uradora:
        # one ura-dora per revealed dora indicator
        ura_indicators = context.ura_dora_indicators[: len(context.dora_indicators)]
        ura_count = count_dora(all_tiles, calculate_dora_tiles(ura_indicators))
        entries.append(_entry(YakuId.URA_DORA, ura_count))
    return entries


def _ordinary_result(
    yaku_ids: list[YakuId],
    decomposition: HandDecomposition | None,
    winning_tile: int,
    all_tiles: Sequence[int],
    context: WinContext,
) -> YakuResult | None:
    yaku_ids = _apply_supersession(_unique(yaku_ids))
    if not yaku_ids:
        return None
    fu = calculate_fu(decomposition, winning_tile, context.quads, yaku_ids)
    entries = [_entry(yaku_id) for yaku_id in yaku_ids] + _dora_entries(all_tiles, context)
    return YakuResult(yaku=tuple(entries), han=sum(entry.han for entry in entries), fu=fu)


def _yakuman_result(yaku_ids: list[YakuId], *, has_double_yakuman: bool) -> YakuResult:
    if not has_double_yakuman:
        yaku_ids = _unique(_SINGLE_YAKUMAN.get(yaku_id, yaku_id) for yaku_id in yaku_ids)
    entries = tuple(_entry(yaku_id) for yaku_id in yaku_ids)
    return YakuResult(yaku=entries, han=sum(entry.han for entry in entries), fu=0, is_yakuman=True)


def check_yaku(loose_tiles: Sequence[int], winning_tile: int, context: WinContext) -> YakuResult | None:
    """
    Find the yaku of a completed self-drawn hand.

    `loose_tiles` must already include the winning tile. Returns None when
    the hand is not complete or no yaku matched.
    """
    quads = context.quads
    if not is_winning_hand(loose_tiles, quads):
        return None

    shape = decompose_special_shapes(loose_tiles) if not quads else None
    decompositions = all_decompositions(loose_tiles, MELDS_PER_HAND - len(quads))

    yakuman = _find_yakuman(loose_tiles, winning_tile, quads, decompositions, shape)
    if yakuman:
        return _yakuman_result(yakuman, has_double_yakuman=context.has_double_yakuman)

    all_tiles = [*loose_tiles, *_quad_tiles(quads)]
    candidates: list[YakuResult | None] = []
    if shape == SpecialShape.CHIITOITSU:
        yaku_ids = _seven_pairs_yaku(loose_tiles, context)
        candidates.append(_ordinary_result(yaku_ids, None, winning_tile, all_tiles, context))
    for decomposition in decompositions:
        yaku_ids = _decomposed_yaku(decomposition, winning_tile, all_tiles, context)
        candidates.append(_ordinary_result(yaku_ids, decomposition, winning_tile, all_tiles, context))

    scored = [result for result in candidates if result is not None]
    if not scored:
        return None
    return max(scored, key=lambda result: (result.han, result.fu))
