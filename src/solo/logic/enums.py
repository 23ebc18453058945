"""
String enum definitions for single-player mahjong concepts.
"""

from enum import Enum


class TurnPhase(str, Enum):
    """Where the single player is within a turn."""

    AWAITING_DRAW = "awaiting_draw"
    AWAITING_DISCARD = "awaiting_discard"
    RIICHI_DECLARED = "riichi_declared"  # declaration pending: must pick a tenpai-keeping discard
    GAME_OVER = "game_over"


class GameAction(str, Enum):
    """Actions dispatched to the game service."""

    DRAW = "draw"
    DISCARD = "discard"
    DECLARE_RIICHI = "declare_riichi"
    CANCEL_RIICHI = "cancel_riichi"
    DECLARE_KAN = "declare_kan"
    DECLARE_TSUMO = "declare_tsumo"


class GameErrorCode(str, Enum):
    """Error codes returned for rejected actions."""

    INVALID_DISCARD = "invalid_discard"
    INVALID_RIICHI = "invalid_riichi"
    INVALID_KAN = "invalid_kan"
    INVALID_TSUMO = "invalid_tsumo"
    INVALID_ACTION = "invalid_action"
    VALIDATION_ERROR = "validation_error"
    UNKNOWN_ACTION = "unknown_action"


class HandResultType(str, Enum):
    """How a hand ended."""

    TSUMO = "tsumo"
    EXHAUSTIVE_DRAW = "exhaustive_draw"


class SpecialShape(str, Enum):
    """Whole-hand shapes that do not decompose into melds and a pair."""

    CHIITOITSU = "chiitoitsu"
    KOKUSHI = "kokushi"


class YakuId(str, Enum):
    """Closed set of scoring patterns, plus the dora pseudo-entries."""

    RIICHI = "riichi"
    IPPATSU = "ippatsu"
    TSUMO = "tsumo"
    TANYAO = "tanyao"
    PINFU = "pinfu"
    IIPEIKOU = "iipeikou"
    YAKUHAI_HAKU = "yakuhai_haku"
    YAKUHAI_HATSU = "yakuhai_hatsu"
    YAKUHAI_CHUN = "yakuhai_chun"
    HAITEI = "haitei"
    RINSHAN = "rinshan"
    TOITOI = "toitoi"
    SANANKOU = "sanankou"
    SANSHOKU_DOUKOU = "sanshoku_doukou"
    SHOUSANGEN = "shousangen"
    HONROUTOU = "honroutou"
    CHIITOITSU = "chiitoitsu"
    IKKITSUUKAN = "ikkitsuukan"
    SANSHOKU_DOUJUN = "sanshoku_doujun"
    HONCHANTAIYAO = "honchantaiyao"
    SAN_KANTSU = "san_kantsu"
    RYANPEIKOU = "ryanpeikou"
    JUNCHAN = "junchan"
    HONITSU = "honitsu"
    CHINITSU = "chinitsu"
    KOKUSHI = "kokushi"
    KOKUSHI_13 = "kokushi_13"
    SUUANKOU = "suuankou"
    SUUANKOU_TANKI = "suuankou_tanki"
    DAISANGEN = "daisangen"
    TSUUIISOU = "tsuuiisou"
    RYUUIISOU = "ryuuiisou"
    CHINROUTOU = "chinroutou"
    CHUUREN = "chuuren"
    JUNSEI_CHUUREN = "junsei_chuuren"
    SUU_KANTSU = "suu_kantsu"
    DORA = "dora"
    URA_DORA = "ura_dora"
