"""
Physics system for Trippin
"""

import math
from typing import Any

import numpy as np

from trippin.core.collision import CollisionDetector
from trippin.core.entities import Flyer, IdSequence, Pipe, Stamp, clamp
from trippin.utils.config import TrippinConfig, trippin_config

DESPAWN_MARGIN = 40.0
STAMP_OFFSET = 24.0
INITIAL_PIPES = 4
FLYER_X_RATIO = 0.25


class PipeSpawner:
    """Pipe and stamp spawning manager"""

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        config: TrippinConfig,
        rng: np.random.Generator,
    ):
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.config = config
        self.rng = rng
        self.pipe_ids = IdSequence("p")
        self.stamp_ids = IdSequence("s")

    def spawn_initial(self) -> tuple[list[Pipe], list[Stamp]]:
        """Spawns the opening pipes with a reproducible gap pattern"""
        start_x = self.screen_width + self.config.SPAWN_OFFSET
        pipes: list[Pipe] = []
        stamps: list[Stamp] = []

        for i in range(INITIAL_PIPES):
            x = start_x + i * self.config.PIPE_SPACING
            gap_y = float(round(self.screen_height * 0.35 + math.sin(i * 1.3) * 80))
            pipe = Pipe(self.pipe_ids.next_id(), x, gap_y)
            pipes.append(pipe)

            stamp = self._maybe_stamp(pipe)
            if stamp is not None:
                stamps.append(stamp)

        return pipes, stamps

    def update(self, pipes: list[Pipe]) -> tuple[Pipe | None, Stamp | None]:
        """Returns at most one new pipe (and its stamp) when the rightmost one is on screen"""
        if pipes and pipes[-1].x >= self.screen_width:
            return None, None

        last_x = pipes[-1].x if pipes else self.screen_width + self.config.SPAWN_OFFSET
        x = max(last_x + self.config.PIPE_SPACING, self.screen_width + self.config.SPAWN_OFFSET)
        gap_y = float(round(self.rng.uniform(0.3, 0.7) * self.screen_height))

        pipe = Pipe(self.pipe_ids.next_id(), x, gap_y)
        return pipe, self._maybe_stamp(pipe)

    def _maybe_stamp(self, pipe: Pipe) -> Stamp | None:
        """Rolls the stamp chance for a freshly spawned pipe"""
        if self.rng.random() < self.config.STAMP_CHANCE:
            return Stamp(
                self.stamp_ids.next_id(),
                pipe.right(self.config.PIPE_WIDTH) + STAMP_OFFSET,
                pipe.gap_y,
            )
        return None


class PhysicsEngine:
    """Flyer physics, world scrolling and per-step evaluation"""

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        config: TrippinConfig | None = None,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ):
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.config = config if config is not None else trippin_config
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.collision_detector = CollisionDetector()
        self.spawner = PipeSpawner(screen_width, screen_height, self.config, self.rng)

        self.reset_world()

    @property
    def floor_y(self) -> float:
        return self.screen_height - self.config.FLOOR_PADDING

    def reset_world(self) -> None:
        """Centres the flyer and clears every run-scoped value"""
        self.flyer = Flyer(
            round(self.screen_width * FLYER_X_RATIO),
            self.screen_height * 0.5,
            self.config.BIRD_SIZE,
        )
        self.pipes: list[Pipe] = []
        self.stamps: list[Stamp] = []
        self.score = 0
        self.streak = 0
        self.game_time = 0.0
        self.speed = self.config.SPEED
        self.gap_height = self.config.GAP_HEIGHT

    def spawn_initial(self) -> None:
        """Places the opening pipes ahead of the visible area"""
        self.pipes, self.stamps = self.spawner.spawn_initial()

    def update(self, dt: float) -> dict[str, Any]:
        """Advances the world by one step and returns the events that occurred"""
        config = self.config

        # Difficulty ramps
        self.speed = clamp(
            self.speed + config.SPEED_RAMP_PER_SEC * dt, config.SPEED, config.MAX_SPEED
        )
        self.gap_height = clamp(
            self.gap_height - config.GAP_SHRINK_PER_SEC * dt,
            config.MIN_GAP_HEIGHT,
            config.GAP_HEIGHT,
        )

        self.flyer.update(dt, config.GRAVITY, config.TERMINAL_VELOCITY, self.floor_y)

        # Scroll and despawn
        shift = self.speed * dt
        self.pipes = [
            pipe
            for pipe in (p.scrolled(shift) for p in self.pipes)
            if pipe.right(config.PIPE_WIDTH) > -DESPAWN_MARGIN
        ]
        self.stamps = [
            stamp for stamp in (s.scrolled(shift) for s in self.stamps) if stamp.x > -DESPAWN_MARGIN
        ]

        events: dict[str, list] = {
            "pipes_passed": [],
            "stamps_collected": [],
            "collisions": [],
        }

        new_pipe, new_stamp = self.spawner.update(self.pipes)
        if new_pipe is not None:
            self.pipes.append(new_pipe)
        if new_stamp is not None:
            self.stamps.append(new_stamp)

        report = self.collision_detector.evaluate(
            self.flyer, self.pipes, self.stamps, self.gap_height, config.PIPE_WIDTH, self.streak
        )
        self.pipes = report.pipes
        self.stamps = report.stamps
        self.score += report.points
        self.streak = report.streak
        self.game_time += dt

        events["pipes_passed"].extend(report.passed)
        events["stamps_collected"].extend(report.collected)
        if report.collided_with is not None:
            events["collisions"].append(report.collided_with.id)

        return events

    def get_game_state(self) -> dict[str, Any]:
        """Returns the complete simulation state"""
        return {
            "flyer_position": (self.flyer.x, self.flyer.y),
            "flyer_velocity_y": self.flyer.velocity_y,
            "flyer_rect": self.flyer.get_rect(),
            "pipes": [(p.x, p.gap_y, p.scored) for p in self.pipes],
            "stamps": [(s.x, s.y, s.taken) for s in self.stamps],
            "score": self.score,
            "streak": self.streak,
            "speed": self.speed,
            "gap_height": self.gap_height,
            "time_elapsed": self.game_time,
            "field_bounds": (0, self.screen_width, 0, self.screen_height),
        }
