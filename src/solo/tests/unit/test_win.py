"""
Unit tests for winning hand, tenpai and wait detection.

Completeness is cross-checked against the mahjong library's Agari as an
independent reference on deterministic random hands.
"""

import pytest
from mahjong.agari import Agari

from solo.logic.rng import SEED_BYTES, derive_hand_rng
from solo.logic.tiles import COPIES_PER_TILE, TILE_TYPES, hand_to_34_array
from solo.logic.wall import HAND_SIZE, create_wall
from solo.logic.win import get_waiting_tiles, is_tenpai, is_winning_hand, required_tiles_for_win
from solo.tests.conftest import tiles

FIXED_SEED = "cd" * SEED_BYTES


class TestIsWinningHand:
    def test_straight_with_pin_triplet(self):
        hand = tiles("111m23456789m11p")
        assert is_winning_hand([*hand, tiles("1p")[0]])

    def test_seven_pairs(self):
        assert is_winning_hand(tiles("113355m2244p6688s"))

    def test_thirteen_orphans(self):
        assert is_winning_hand(tiles("19m19p19s12345677z"))

    def test_incomplete_hand(self):
        assert not is_winning_hand(tiles("1357m2468p13579s1z"))

    def test_wrong_tile_count(self):
        assert not is_winning_hand(tiles("123m456p789s1122z"))
        assert not is_winning_hand(tiles("123m456p789s11122z5p"))

    def test_order_independent(self):
        hand = tiles("123m456p789s11122z")
        assert is_winning_hand(list(reversed(hand)))

    def test_quads_replace_melds(self):
        quads = ((0, 0, 0, 0),)
        assert required_tiles_for_win(quads) == 11
        assert is_winning_hand(tiles("456p789s11122z"), quads)
        assert not is_winning_hand(tiles("123m456p789s11122z"), quads)

    def test_four_quads_need_only_a_pair(self):
        quads = tuple((tile,) * 4 for tile in (0, 10, 20, 30))
        assert is_winning_hand(tiles("55z"), quads)
        assert not is_winning_hand(tiles("56z"), quads)

    def test_special_shapes_need_no_quads(self):
        quads = ((0, 0, 0, 0),)
        # seven pairs with a quad is never complete
        assert not is_winning_hand(tiles("3355m2244p668s"), quads)


class TestTenpaiAndWaits:
    def test_two_sided_wait(self):
        hand = tiles("23m456p789s11122z")
        assert is_tenpai(hand)
        assert get_waiting_tiles(hand) == frozenset(tiles("14m"))

    def test_nine_sided_wait(self):
        assert get_waiting_tiles(tiles("1112345678999m")) == frozenset(range(9))

    def test_thirteen_sided_wait(self):
        assert get_waiting_tiles(tiles("19m19p19s1234567z")) == frozenset(tiles("19m19p19s1234567z"))

    def test_seven_pairs_single_wait(self):
        assert get_waiting_tiles(tiles("113355m2244p668s")) == frozenset(tiles("8s"))

    def test_wait_on_tile_held_four_times_is_listed(self):
        # 1111m + 234m: the 1m wait is kept even though all copies are in hand
        hand = tiles("1111234m456p789s")
        assert tiles("1m")[0] in get_waiting_tiles(hand)

    def test_not_tenpai(self):
        hand = tiles("1357m2468p1357s1z")
        assert not is_tenpai(hand)
        assert get_waiting_tiles(hand) == frozenset()

    def test_wrong_count_is_not_tenpai(self):
        assert not is_tenpai(tiles("23m456p789s1112z"))
        assert get_waiting_tiles(tiles("123m456p789s11122z")) == frozenset()

    def test_waits_with_quad(self):
        quads = ((27, 27, 27, 27),)
        assert get_waiting_tiles(tiles("23m456p789s22z"), quads) == frozenset(tiles("14m"))


class TestAgainstReferenceAgari:
    @pytest.mark.parametrize("hand_number", range(40))
    def test_random_hands_agree_with_agari(self, hand_number):
        wall = create_wall(derive_hand_rng(FIXED_SEED, hand_number))
        hand = list(wall.live_tiles[:14])
        assert is_winning_hand(hand) == Agari().is_agari(hand_to_34_array(hand))

    @pytest.mark.parametrize("hand_number", range(10))
    def test_waits_agree_with_agari(self, hand_number):
        wall = create_wall(derive_hand_rng(FIXED_SEED, hand_number))
        # a near-complete hand: a known pair and meld plus random filler with copies left
        hand = tiles("11m234p")
        for tile in wall.live_tiles:
            if len(hand) == HAND_SIZE:
                break
            if hand.count(tile) < COPIES_PER_TILE:
                hand.append(tile)
        counts = hand_to_34_array(hand)
        assert len(hand) == HAND_SIZE
        expected = {
            tile
            for tile in range(TILE_TYPES)
            if counts[tile] < COPIES_PER_TILE and Agari().is_agari(hand_to_34_array([*hand, tile]))
        }
        waits = {tile for tile in get_waiting_tiles(hand) if counts[tile] < COPIES_PER_TILE}
        assert waits == expected
