"""
Unit tests for Wall model and wall operations.

Covers wall creation, dealing, drawing, replacement draws, indicator
reveals and edge cases.
"""

import pytest

from solo.logic.rng import SEED_BYTES, derive_hand_rng
from solo.logic.tiles import COPIES_PER_TILE, TILE_TYPES, TOTAL_TILE_IDS
from solo.logic.wall import (
    DEAD_WALL_SIZE,
    FIRST_DORA_INDEX,
    FIRST_URA_DORA_INDEX,
    HAND_SIZE,
    REPLACEMENT_TILE_COUNT,
    Wall,
    build_and_shuffle,
    create_wall,
    create_wall_from_tiles,
    deal_initial_hand,
    draw_replacement,
    draw_tile,
    is_wall_exhausted,
    reveal_kan_indicators,
    reveal_next_indicators,
    tiles_remaining,
)
from solo.tests.conftest import build_wall_tiles

FIXED_SEED = "ab" * SEED_BYTES


def _ordered_tiles() -> list[int]:
    """Every identity four times, in ascending order."""
    return [tile for tile in range(TILE_TYPES) for _ in range(COPIES_PER_TILE)]


class TestCreateWall:
    def test_has_correct_sizes(self):
        wall = create_wall(derive_hand_rng(FIXED_SEED, 0))
        assert len(wall.live_tiles) == TOTAL_TILE_IDS - DEAD_WALL_SIZE
        assert len(wall.dead_wall_tiles) == DEAD_WALL_SIZE
        assert len(wall.replacement_tiles) == REPLACEMENT_TILE_COUNT
        assert len(wall.dora_indicators) == 1
        assert len(wall.ura_dora_indicators) == 1

    def test_holds_four_copies_of_every_identity(self):
        wall = create_wall(derive_hand_rng(FIXED_SEED, 0))
        assert sorted([*wall.live_tiles, *wall.dead_wall_tiles]) == _ordered_tiles()

    def test_initial_indicators_come_from_dead_wall(self):
        wall = create_wall(derive_hand_rng(FIXED_SEED, 0))
        assert wall.dora_indicators == (wall.dead_wall_tiles[FIRST_DORA_INDEX],)
        assert wall.ura_dora_indicators == (wall.dead_wall_tiles[FIRST_URA_DORA_INDEX],)
        assert wall.replacement_tiles == wall.dead_wall_tiles[:REPLACEMENT_TILE_COUNT]

    def test_deterministic(self):
        assert create_wall(derive_hand_rng(FIXED_SEED, 0)) == create_wall(derive_hand_rng(FIXED_SEED, 0))

    def test_different_hands_produce_different_walls(self):
        wall1 = create_wall(derive_hand_rng(FIXED_SEED, 0))
        wall2 = create_wall(derive_hand_rng(FIXED_SEED, 1))
        assert wall1.live_tiles != wall2.live_tiles


class TestCreateWallFromTiles:
    def test_last_fourteen_tiles_form_dead_wall(self):
        order = _ordered_tiles()
        wall = create_wall_from_tiles(order)
        assert wall.live_tiles == tuple(order[:-DEAD_WALL_SIZE])
        assert wall.dead_wall_tiles == tuple(order[-DEAD_WALL_SIZE:])

    def test_rejects_wrong_length(self):
        with pytest.raises(ValueError, match="Expected 136 tiles"):
            create_wall_from_tiles(_ordered_tiles()[:-1])

    def test_rejects_out_of_range_tile(self):
        order = _ordered_tiles()
        order[0] = 34
        with pytest.raises(ValueError, match="must be integers"):
            create_wall_from_tiles(order)

    def test_rejects_wrong_copy_count(self):
        order = _ordered_tiles()
        order[0] = 1
        with pytest.raises(ValueError, match="exactly 4 times"):
            create_wall_from_tiles(order)


class TestDealAndDraw:
    def test_deal_takes_thirteen_sorted_tiles_from_front(self):
        order = build_wall_tiles([9, 0, 27, 1, 2, 3, 4, 5, 6, 7, 8, 10, 11])
        wall, hand = deal_initial_hand(create_wall_from_tiles(order))
        assert hand == sorted(order[:HAND_SIZE])
        assert len(wall.live_tiles) == TOTAL_TILE_IDS - DEAD_WALL_SIZE - HAND_SIZE

    def test_deal_rejects_short_wall(self):
        with pytest.raises(ValueError, match="need at least 13"):
            deal_initial_hand(Wall(live_tiles=(0,) * 12))

    def test_draw_from_front(self):
        wall = Wall(live_tiles=(5, 6, 7))
        new_wall, tile = draw_tile(wall)
        assert tile == 5
        assert new_wall.live_tiles == (6, 7)
        assert wall.live_tiles == (5, 6, 7)

    def test_draw_from_empty_wall_returns_none(self):
        wall = Wall()
        new_wall, tile = draw_tile(wall)
        assert tile is None
        assert new_wall is wall
        assert is_wall_exhausted(wall)

    def test_build_and_shuffle_deals_and_draws(self):
        wall, hand, drawn = build_and_shuffle(derive_hand_rng(FIXED_SEED, 0))
        assert len(hand) == HAND_SIZE
        assert drawn is not None
        assert tiles_remaining(wall) == TOTAL_TILE_IDS - DEAD_WALL_SIZE - HAND_SIZE - 1


class TestDrawReplacement:
    def test_drawn_last_first(self):
        wall = Wall(replacement_tiles=(10, 11, 12, 13))
        drawn = []
        for _ in range(REPLACEMENT_TILE_COUNT):
            wall, tile = draw_replacement(wall)
            drawn.append(tile)
        assert drawn == [13, 12, 11, 10]

    def test_exhausted_slots_return_none(self):
        wall = Wall(replacement_tiles=())
        new_wall, tile = draw_replacement(wall)
        assert tile is None
        assert new_wall is wall


class TestRevealIndicators:
    DEAD_WALL = tuple(range(20, 34))

    def test_indicator_pairs_follow_kan_count(self):
        assert reveal_next_indicators(self.DEAD_WALL, 0) == (24, 25)
        assert reveal_next_indicators(self.DEAD_WALL, 1) == (26, 27)
        assert reveal_next_indicators(self.DEAD_WALL, 4) == (32, 33)

    def test_out_of_range_slots_return_none(self):
        assert reveal_next_indicators(self.DEAD_WALL, 5) == (None, None)
        assert reveal_next_indicators(self.DEAD_WALL[:13], 4) == (32, None)

    def test_reveal_is_monotonic(self):
        wall = Wall(dead_wall_tiles=self.DEAD_WALL, dora_indicators=(24,), ura_dora_indicators=(25,))
        for kan_count in range(1, 5):
            revealed = reveal_kan_indicators(wall, kan_count)
            assert revealed.dora_indicators[: len(wall.dora_indicators)] == wall.dora_indicators
            assert len(revealed.dora_indicators) == len(wall.dora_indicators) + 1
            wall = revealed
        assert wall.dora_indicators == (24, 26, 28, 30, 32)
        assert wall.ura_dora_indicators == (25, 27, 29, 31, 33)

    def test_no_slot_left_keeps_wall(self):
        wall = Wall(dead_wall_tiles=self.DEAD_WALL)
        assert reveal_kan_indicators(wall, 5) is wall
