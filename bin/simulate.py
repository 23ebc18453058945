"""Play seeded hands with the tsumogiri AI and report how they ended.

Each hand is played to the end through the action boundary and added to a
session that keeps the running score. Final snapshots are written as gzip
JSON to SOLO_SNAPSHOT_DIR unless --save-dir or --no-save says otherwise.

Usage:
    uv run python bin/simulate.py --hands 10
    uv run python bin/simulate.py --seed <192 hex chars> --hands 4 --target 2000
    uv run python bin/simulate.py --hands 100 --save-dir data/snapshots
    uv run python bin/simulate.py --hands 100 --no-save
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from shared.logging import setup_logging
from shared.storage import LocalSnapshotStorage
from solo.logic.ai_player import play_hand
from solo.logic.game import record_outcome, start_session
from solo.logic.rng import generate_seed, validate_seed_hex
from solo.logic.settings import DEFAULT_TARGET_SCORE, EngineSettings, GameSettings
from solo.logic.state import GameSnapshot


def describe(snapshot: GameSnapshot) -> str:
    outcome = snapshot.outcome
    if outcome is None or outcome.yaku is None or outcome.score is None:
        return f"exhaustive draw after {len(snapshot.discards)} discards"
    names = ", ".join(entry.name for entry in outcome.yaku.yaku)
    limit = f" {outcome.score.name}" if outcome.score.name else ""
    return (
        f"tsumo on {outcome.winning_tile}: {names} "
        f"({outcome.yaku.han} han {outcome.yaku.fu} fu{limit}, {outcome.score.ko_tsumo_total} points)"
    )


def parse_args(argv: Sequence[str] | None, settings: EngineSettings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate single-player mahjong hands")
    parser.add_argument("--hands", type=int, default=1, help="Number of hands to play (default: 1)")
    parser.add_argument("--seed", type=str, default=None, help="Hex seed (default: SOLO_SEED or random)")
    parser.add_argument(
        "--target",
        type=int,
        default=DEFAULT_TARGET_SCORE,
        help=f"Session target score (default: {DEFAULT_TARGET_SCORE})",
    )
    parser.add_argument(
        "--save-dir",
        type=str,
        default=settings.snapshot_dir,
        help=f"Directory for final snapshots (default: {settings.snapshot_dir})",
    )
    parser.add_argument("--no-save", action="store_true", help="Do not write snapshots")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    settings = EngineSettings()
    args = parse_args(argv, settings)
    setup_logging(settings.log_dir)

    seed = args.seed or settings.seed or generate_seed()
    try:
        validate_seed_hex(seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    game_settings = GameSettings(target_score=args.target)
    storage = None if args.no_save else LocalSnapshotStorage(args.save_dir)
    session = start_session(game_settings)

    print(f"Seed: {seed[:16]}...")
    for hand_number in range(args.hands):
        final = play_hand(seed, hand_number, game_settings)
        session = record_outcome(session, final)
        print(f"  Hand {hand_number}: {describe(final)} [total {session.current_score}]")
        if storage is not None:
            storage.save_snapshot(f"hand_{hand_number}", final.model_dump_json())

    print()
    print(f"Hands: {session.hands_played}, wins: {session.wins}")
    print(f"Score: {session.current_score} / {session.target_score}")
    if session.victory_hand is not None:
        print(f"Target reached on hand {session.victory_hand}")


if __name__ == "__main__":
    main()
