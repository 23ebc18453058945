"""
Tile representation utilities for single-player mahjong.

The engine works on 34-format tile identities (0-33). Physical 136-format
tile ids only exist while the wall is being shuffled; they are folded into
identities with tile_to_34 before anything else sees them.
"""

from collections import Counter
from collections.abc import Iterable

from mahjong.tile import TilesConverter

TOTAL_TILE_IDS = 136
TILE_TYPES = 34
COPIES_PER_TILE = 4
RANKS_PER_SUIT = 9

# tile ranges in 34-format (each unique tile type)
MAN_34_START = 0
MAN_34_END = 8
PIN_34_START = 9
PIN_34_END = 17
SOU_34_START = 18
SOU_34_END = 26
HONOR_34_START = 27
HONOR_34_END = 33

# suit indices returned by suit_of
MAN = 0
PIN = 1
SOU = 2
HONORS = 3
NUMBERED_SUITS = (MAN, PIN, SOU)

# honor tile indices in 34-format
EAST_34 = 27
SOUTH_34 = 28
WEST_34 = 29
NORTH_34 = 30
HAKU_34 = 31  # white dragon
HATSU_34 = 32  # green dragon
CHUN_34 = 33  # red dragon

WINDS_34 = (EAST_34, SOUTH_34, WEST_34, NORTH_34)
DRAGONS_34 = (HAKU_34, HATSU_34, CHUN_34)

# 1 and 9 of each numbered suit
TERMINALS_34 = (0, 8, 9, 17, 18, 26)

# the thirteen terminal and honor identities
YAOCHUU_34 = (*TERMINALS_34, *WINDS_34, *DRAGONS_34)

# 2s 3s 4s 6s 8s and the green dragon
GREEN_34 = frozenset({19, 20, 21, 23, 25, HATSU_34})

_SUIT_LETTERS = "mpsz"


def tile_to_34(tile_id: int) -> int:
    """
    Convert a 136-format physical tile id to its 34-format identity.

    Each identity owns four consecutive physical ids, so tile_id // 4 is the identity.
    """
    if not 0 <= tile_id < TOTAL_TILE_IDS:
        raise ValueError(f"tile id must be in [0, {TOTAL_TILE_IDS - 1}], got {tile_id}")
    return tile_id // COPIES_PER_TILE


def suit_of(tile_34: int) -> int:
    """Suit index: MAN, PIN, SOU or HONORS."""
    return tile_34 // RANKS_PER_SUIT


def rank_of(tile_34: int) -> int:
    """1-based rank inside the suit (honors count 1-7 in E S W N Haku Hatsu Chun order)."""
    return tile_34 % RANKS_PER_SUIT + 1


def is_terminal(tile_34: int) -> bool:
    return tile_34 in TERMINALS_34


def is_honor(tile_34: int) -> bool:
    return HONOR_34_START <= tile_34 <= HONOR_34_END


def is_terminal_or_honor(tile_34: int) -> bool:
    """
    Check if tile is terminal or honor (yaochuuhai).
    """
    return is_terminal(tile_34) or is_honor(tile_34)


def is_simple(tile_34: int) -> bool:
    """Numbered tile ranked 2-8 (chunchanpai)."""
    return not is_terminal_or_honor(tile_34)


def is_dragon(tile_34: int) -> bool:
    return tile_34 in DRAGONS_34


def is_green(tile_34: int) -> bool:
    return tile_34 in GREEN_34


def compare_tiles(a: int, b: int) -> int:
    """
    Total order over tile identities: suit first (m, p, s, z), then rank.

    Returns a negative number, zero or a positive number like a classic comparator.
    """
    key_a = (suit_of(a), rank_of(a))
    key_b = (suit_of(b), rank_of(b))
    return (key_a > key_b) - (key_a < key_b)


def sort_tiles(tiles: Iterable[int]) -> list[int]:
    """
    Sort tiles into canonical order.

    The 34-format numbering already follows suit then rank, so plain integer order is canonical.
    """
    return sorted(tiles)


def count_tiles(tiles: Iterable[int]) -> Counter[int]:
    """Multiset of tile identities."""
    return Counter(tiles)


def hand_to_34_array(tiles: Iterable[int]) -> list[int]:
    """
    Convert tile identities to a 34-array (tile counts).

    Each index of the 34-array is a tile type and the value is how many copies the hand holds.
    """
    tiles_34 = [0] * TILE_TYPES
    for tile in tiles:
        tiles_34[tile] += 1
    return tiles_34


def parse_tiles(notation: str) -> list[int]:
    """
    Parse compact notation like "123m456p789s11z" into sorted tile identities.

    Honors use 1-7 for East, South, West, North, Haku, Hatsu, Chun.
    Raises ValueError for malformed notation or more than four copies of a tile.
    """
    groups: dict[str, str] = dict.fromkeys(_SUIT_LETTERS, "")
    pending = ""
    for char in notation.replace(" ", ""):
        if char.isdigit():
            pending += char
        elif char in groups:
            if not pending:
                raise ValueError(f"suit letter {char!r} without ranks in {notation!r}")
            groups[char] += pending
            pending = ""
        else:
            raise ValueError(f"unexpected character {char!r} in {notation!r}")
    if pending:
        raise ValueError(f"ranks {pending!r} missing a suit letter in {notation!r}")

    for letter, ranks in groups.items():
        max_rank = 7 if letter == "z" else RANKS_PER_SUIT
        for rank in set(ranks):
            if not 1 <= int(rank) <= max_rank:
                raise ValueError(f"rank {rank} is not valid for suit {letter!r}")
            if ranks.count(rank) > COPIES_PER_TILE:
                raise ValueError(f"more than {COPIES_PER_TILE} copies of {rank}{letter}")

    tiles_136 = TilesConverter.string_to_136_array(
        man=groups["m"] or None,
        pin=groups["p"] or None,
        sou=groups["s"] or None,
        honors=groups["z"] or None,
    )
    return sort_tiles(tile_to_34(tile_id) for tile_id in tiles_136)


def format_tiles(tiles: Iterable[int]) -> str:
    """Render tile identities in compact notation, e.g. [0, 1, 2, 27, 27] -> "123m11z"."""
    by_suit: dict[int, list[str]] = {}
    for tile in sort_tiles(tiles):
        by_suit.setdefault(suit_of(tile), []).append(str(rank_of(tile)))
    return "".join("".join(ranks) + _SUIT_LETTERS[suit] for suit, ranks in by_suit.items())
