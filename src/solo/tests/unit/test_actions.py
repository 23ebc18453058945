"""
Unit tests for riichi and concealed kan validation.
"""

from solo.logic.actions import (
    can_kan_during_riichi,
    check_riichi,
    find_kan_options,
    get_riichi_kan_options,
    perform_kan,
)
from solo.tests.conftest import tiles


class TestCheckRiichi:
    def test_positions_that_keep_tenpai(self):
        # 23m456p789s111z2z3z + drawn 2z: discarding 3z keeps a 1-4m wait
        hand = tiles("23m456p789s11123z")
        drawn = tiles("2z")[0]
        positions = check_riichi(hand, drawn)
        full_hand = [*hand, drawn]
        assert full_hand.index(tiles("3z")[0]) in positions
        assert all(full_hand[p] != tiles("2z")[0] for p in positions)

    def test_drawn_tile_position_is_last(self):
        hand = tiles("23m456p789s11122z")
        drawn = tiles("7z")[0]
        assert len(hand) in check_riichi(hand, drawn)

    def test_no_positions_when_far_from_tenpai(self):
        assert check_riichi(tiles("1357m2468p1357s1z"), tiles("5z")[0]) == frozenset()


class TestFindKanOptions:
    def test_four_copies_with_drawn_tile(self):
        assert find_kan_options(tiles("111m456p789s1122z"), tiles("1m")[0]) == [0]

    def test_four_copies_already_in_hand(self):
        assert find_kan_options(tiles("1111m56p789s1122z"), tiles("9p")[0]) == [0]

    def test_multiple_candidates_sorted(self):
        hand = tiles("1111m2222p789s11z")
        assert find_kan_options(hand, tiles("5z")[0]) == [0, 10]

    def test_no_drawn_tile(self):
        assert find_kan_options(tiles("1111m56p789s1122z"), None) == []


class TestPerformKan:
    def test_sets_aside_quad_and_merges_drawn_tile(self):
        hand = tiles("111m456p789s1122z")
        result = perform_kan(hand, tiles("1m")[0], tiles("1m")[0])
        assert result is not None
        new_hand, quads = result
        assert new_hand == tiles("456p789s1122z")
        assert quads == ((0, 0, 0, 0),)

    def test_appends_to_existing_quads(self):
        existing = ((27, 27, 27, 27),)
        result = perform_kan(tiles("1111m456p789s2z"), tiles("2z")[0], 0, existing)
        assert result is not None
        new_hand, quads = result
        assert new_hand == tiles("456p789s22z")
        assert quads == ((27, 27, 27, 27), (0, 0, 0, 0))

    def test_fewer_than_four_copies_returns_none(self):
        assert perform_kan(tiles("11m456p789s111222z"), tiles("3m")[0], 0) is None


class TestRiichiKan:
    def test_wait_preserving_kan_allowed(self):
        # 111m is a settled triplet: the 4s-7s-9s wait survives its kan
        hand = tiles("111m234p567s8889s")
        drawn = tiles("1m")[0]
        assert get_riichi_kan_options(hand, drawn) == [0]
        assert can_kan_during_riichi(hand, drawn) == 0

    def test_kan_changing_the_wait_rejected(self):
        # 1112m: waits 2m (tanki) and 3m; kan of 1m would leave only 2m
        hand = tiles("1112m456p789s111z")
        drawn = tiles("1m")[0]
        assert find_kan_options(hand, drawn) == [0]
        assert get_riichi_kan_options(hand, drawn) == []
        assert can_kan_during_riichi(hand, drawn) is None

    def test_each_candidate_checked_on_its_own(self):
        # 1111m is held before the draw and would break the 1m wait; the drawn 8s completes 888s
        hand = tiles("1111m234p567s888s")
        drawn = tiles("8s")[0]
        assert find_kan_options(hand, drawn) == [0, drawn]
        assert get_riichi_kan_options(hand, drawn) == [drawn]
        assert can_kan_during_riichi(hand, drawn) == drawn

    def test_quad_held_before_draw_not_offered(self):
        # 666p kan would keep the 2z wait, but the drawn 3p is not part of it
        hand = tiles("456666p789s111z2z")
        drawn = tiles("3p")[0]
        assert find_kan_options(hand, drawn) == [tiles("6p")[0]]
        assert get_riichi_kan_options(hand, drawn) == []
        assert can_kan_during_riichi(hand, drawn) is None

    def test_not_tenpai_before_draw(self):
        hand = tiles("111m1357p2468s13z")
        assert get_riichi_kan_options(hand, tiles("1m")[0]) == []

    def test_no_drawn_tile(self):
        assert get_riichi_kan_options(tiles("111m234p567s8889s"), None) == []
        assert can_kan_during_riichi(tiles("111m234p567s8889s"), None) is None
