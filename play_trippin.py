#!/usr/bin/env python3
"""
Headless Trippin demo: lets an automated pilot play a few runs
"""

import argparse
import logging
import sys

import pygame

from trippin.ai.autopilot import CenteringPilot, IdlePilot, RandomPilot
from trippin.core.entities import Snapshot
from trippin.core.game_engine import AutoplayRunner, GameEngine
from trippin.core.interfaces.pilot import Pilot
from trippin.gui.frame_clock import FrameLoop
from trippin.utils.config import load_config_from_file, validate_trippin_config

PILOTS = {
    "centering": CenteringPilot,
    "random": RandomPilot,
    "idle": IdlePilot,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run Trippin with an automated pilot")
    parser.add_argument("--pilot", choices=sorted(PILOTS), default="centering")
    parser.add_argument("--episodes", type=int, default=3)
    parser.add_argument("--max-steps", type=int, default=5000)
    parser.add_argument("--width", type=int, default=390)
    parser.add_argument("--height", type=int, default=844)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", default="trippin_config.json")
    parser.add_argument(
        "--realtime", action="store_true", help="Drive the engine with the pygame frame clock"
    )
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def run_realtime(engine: GameEngine, pilot: Pilot) -> None:
    def fly(snapshot: Snapshot) -> None:
        if pilot.should_flap(snapshot, engine):
            engine.flap()

    pygame.init()
    try:
        loop = FrameLoop(engine, on_frame=fly)
        loop.start()
        pilot.on_episode_start()
        snapshot = loop.run()
        pilot.on_episode_end()
        loop.close()
        print(f"Score: {snapshot.score}  streak: {snapshot.streak}  time: {snapshot.elapsed:.1f}s")
    finally:
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = load_config_from_file(args.config)
    for warning in validate_trippin_config(config, args.width, args.height):
        print(f"⚠️  {warning}")

    pilot = PILOTS[args.pilot]()
    engine = GameEngine(
        args.width,
        args.height,
        config,
        on_game_over=lambda score: print(f"💥 Game over with {score} points"),
        seed=args.seed,
    )

    print("=== TRIPPIN ===")
    print(f"Pilot: {pilot.name}")
    print()

    if args.realtime:
        run_realtime(engine, pilot)
        return 0

    runner = AutoplayRunner(engine, pilot)
    for episode in range(args.episodes):
        stats = runner.run_episode(max_steps=args.max_steps)
        print(
            f"Episode {episode + 1}/{args.episodes}: score {stats['score']}, "
            f"pipes {stats['pipes_passed']}, stamps {stats['stamps_collected']}, "
            f"best streak {stats['best_streak']}, {stats['elapsed']:.1f}s"
        )

    session = engine.get_stats()
    print()
    print("=== Session ===")
    print(f"Runs finished: {session['runs']}")
    print(f"Best score: {session['best_score']}")
    print(f"Average score: {session['average_score']:.1f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
