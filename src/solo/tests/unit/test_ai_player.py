"""
Unit tests for the tsumogiri AI player and the play_hand harness.
"""

import pytest

from solo.logic.ai_player import AIPlayer, AIPlayerStrategy, play_hand
from solo.logic.enums import GameAction, HandResultType, TurnPhase
from solo.logic.game import declare_riichi
from solo.logic.rng import SEED_BYTES
from solo.logic.settings import GameSettings
from solo.tests.conftest import create_snapshot

FIXED_SEED = "ef" * SEED_BYTES
TENPAI_HAND = "23m456p789s11122z"
ONE_MAN = 0
WHITE = 31


class TestAIPlayerDecisions:
    def setup_method(self):
        self.player = AIPlayer()

    def test_default_strategy(self):
        assert self.player.strategy == AIPlayerStrategy.TSUMOGIRI

    def test_draws_when_awaiting_draw(self):
        action = self.player.get_action(create_snapshot(TENPAI_HAND))
        assert action.action == GameAction.DRAW
        assert action.to_data() == {}

    def test_declares_tsumo(self):
        action = self.player.get_action(create_snapshot(TENPAI_HAND, ONE_MAN))
        assert action.action == GameAction.DECLARE_TSUMO

    def test_declares_riichi_when_tenpai(self):
        action = self.player.get_action(create_snapshot(TENPAI_HAND, WHITE))
        assert action.action == GameAction.DECLARE_RIICHI

    def test_completes_riichi_with_drawn_tile(self):
        declared = declare_riichi(create_snapshot(TENPAI_HAND, WHITE))
        action = self.player.get_action(declared)
        assert action.action == GameAction.DISCARD
        assert action.to_data() == {"position": 13}

    def test_discards_drawn_tile_otherwise(self):
        action = self.player.get_action(create_snapshot("1357m2468p1357s1z", WHITE))
        assert action.action == GameAction.DISCARD
        assert action.position == 13

    def test_never_declares_kan(self):
        action = self.player.get_action(create_snapshot("1111m2468p1357s1z", WHITE))
        assert action.action == GameAction.DISCARD

    def test_select_discard_falls_back_to_highest_position(self):
        snapshot = create_snapshot(TENPAI_HAND, WHITE)
        assert self.player.select_discard(snapshot, (2, 5)) == 5

    def test_select_discard_needs_positions(self):
        with pytest.raises(ValueError, match="legal positions"):
            self.player.select_discard(create_snapshot(TENPAI_HAND, WHITE), ())

    def test_game_over_has_no_action(self):
        over = create_snapshot(TENPAI_HAND, phase=TurnPhase.GAME_OVER)
        with pytest.raises(ValueError, match="hand is over"):
            self.player.get_action(over)


class TestPlayHand:
    @pytest.mark.parametrize("hand_number", range(12))
    def test_hands_finish(self, hand_number):
        final = play_hand(FIXED_SEED, hand_number)
        assert final.phase == TurnPhase.GAME_OVER
        assert final.outcome is not None
        assert final.outcome.result_type in (HandResultType.TSUMO, HandResultType.EXHAUSTIVE_DRAW)
        if final.outcome.result_type == HandResultType.TSUMO:
            assert final.outcome.score is not None
            assert final.outcome.yaku.han > 0

    def test_deterministic(self):
        assert play_hand(FIXED_SEED, 3) == play_hand(FIXED_SEED, 3)

    def test_tile_conservation(self):
        final = play_hand(FIXED_SEED, 5)
        wall = final.wall
        held = [*final.hand, *([final.drawn_tile] if final.drawn_tile is not None else [])]
        quad_tiles = [tile for quad in final.quads for tile in quad]
        total = len(wall.live_tiles) + len(wall.replacement_tiles) + len(held) + len(final.discards) + len(quad_tiles)
        # dead wall minus the replacement slots is never drawn from
        assert total + (14 - 4) == 136

    def test_without_auto_discard(self):
        final = play_hand(FIXED_SEED, 1, settings=GameSettings(auto_discard_in_riichi=False))
        assert final.phase == TurnPhase.GAME_OVER
