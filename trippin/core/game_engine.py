"""
Trippin main game engine
"""

import logging
import math
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from trippin.core.entities import GamePhase, Snapshot
from trippin.core.interfaces.feedback import FeedbackListener
from trippin.core.interfaces.pilot import Pilot
from trippin.core.physics import PhysicsEngine
from trippin.utils.config import TrippinConfig, trippin_config

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Notifications produced by a simulation step"""

    PIPE_PASSED = "pipe_passed"
    STAMP_COLLECTED = "stamp_collected"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameEvent:
    """A queued notification, delivered when the host dispatches events"""

    type: EventType
    score: int
    item_id: str | None = None


class GameEngine:
    """Lifecycle controller and tick surface of the simulation"""

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        config: TrippinConfig | None = None,
        on_game_over: Callable[[int], None] | None = None,
        on_stamp_collected: Callable[[], None] | None = None,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.config = config if config is not None else trippin_config
        self.physics_engine = PhysicsEngine(
            screen_width, screen_height, self.config, rng=rng, seed=seed
        )

        # Collaborators
        self.on_game_over = on_game_over
        self.on_stamp_collected = on_stamp_collected
        self.listeners: list[FeedbackListener] = []

        # Game state
        self.phase = GamePhase.READY
        self.pending_events: deque[GameEvent] = deque()

        # Statistics
        self.game_stats = self._empty_stats()

        self._snapshot = self._build_snapshot()

    @staticmethod
    def _empty_stats() -> dict[str, Any]:
        return {
            "runs": 0,
            "total_score": 0,
            "best_score": 0,
            "average_score": 0.0,
        }

    @property
    def snapshot(self) -> Snapshot:
        """Latest published snapshot"""
        return self._snapshot

    @property
    def flyer_x(self) -> float:
        return self.physics_engine.flyer.x

    def _build_snapshot(self) -> Snapshot:
        physics = self.physics_engine
        return Snapshot(
            phase=self.phase,
            flyer_y=physics.flyer.y,
            velocity_y=physics.flyer.velocity_y,
            pipes=tuple(physics.pipes),
            stamps=tuple(physics.stamps),
            score=physics.score,
            streak=physics.streak,
            elapsed=physics.game_time,
        )

    def _publish(self) -> Snapshot:
        self._snapshot = self._build_snapshot()
        return self._snapshot

    def start(self) -> None:
        """Starts a new run, discarding any previous one"""
        self.physics_engine.reset_world()
        self.physics_engine.spawn_initial()
        self.pending_events.clear()
        self.phase = GamePhase.RUNNING
        self._publish()
        logger.debug("Run started with %d pipes", len(self.physics_engine.pipes))

    def pause(self) -> None:
        """Pauses a running game"""
        if self.phase is not GamePhase.RUNNING:
            return
        self.phase = GamePhase.PAUSED
        self._publish()
        logger.debug("Run paused at %.3fs", self.physics_engine.game_time)

    def resume(self) -> None:
        """Resumes a paused game"""
        if self.phase is not GamePhase.PAUSED:
            return
        self.phase = GamePhase.RUNNING
        self._publish()
        logger.debug("Run resumed")

    def reset(self) -> None:
        """Returns to the ready state from any phase"""
        self.physics_engine.reset_world()
        self.pending_events.clear()
        self.phase = GamePhase.READY
        self._publish()
        logger.debug("Engine reset")

    def flap(self) -> None:
        """Sets the flyer's velocity to the upward impulse"""
        if self.phase is not GamePhase.RUNNING:
            return
        self.physics_engine.flyer.flap(self.config.impulse)
        self._publish()

    def tick(self, dt: float) -> Snapshot:
        """
        Advances the simulation by one step

        Args:
            dt: Elapsed time in seconds since the previous step

        Returns:
            The newly published snapshot, or the current one when not running
        """
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"dt must be a finite non-negative number, got {dt}")

        if self.phase is not GamePhase.RUNNING:
            return self._snapshot

        events = self.physics_engine.update(dt)
        score = self.physics_engine.score

        for pipe_id in events["pipes_passed"]:
            self.pending_events.append(GameEvent(EventType.PIPE_PASSED, score, pipe_id))
        for stamp_id in events["stamps_collected"]:
            self.pending_events.append(GameEvent(EventType.STAMP_COLLECTED, score, stamp_id))

        if events["collisions"]:
            self.phase = GamePhase.GAMEOVER
            self.pending_events.append(
                GameEvent(EventType.GAME_OVER, score, events["collisions"][0])
            )
            self._handle_game_end(score)

        return self._publish()

    def _handle_game_end(self, final_score: int) -> None:
        """Updates session statistics at the end of a run"""
        self.game_stats["runs"] += 1
        self.game_stats["total_score"] += final_score
        self.game_stats["best_score"] = max(self.game_stats["best_score"], final_score)
        self.game_stats["average_score"] = self.game_stats["total_score"] / self.game_stats["runs"]
        logger.info(
            "Run over: score %d after %.2fs", final_score, self.physics_engine.game_time
        )

    def add_listener(self, listener: FeedbackListener) -> None:
        """Registers a collaborator for game over and pickup notifications"""
        self.listeners.append(listener)

    def remove_listener(self, listener: FeedbackListener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def drain_events(self) -> list[GameEvent]:
        """Returns and clears the queued events"""
        events = list(self.pending_events)
        self.pending_events.clear()
        return events

    def dispatch_events(self) -> list[GameEvent]:
        """
        Delivers queued events to the callbacks and listeners.

        Meant to be called by the host between steps. A failing collaborator
        is logged and skipped, it never reaches the simulation.

        Returns:
            The events that were dispatched
        """
        events = self.drain_events()
        for event in events:
            if event.type is EventType.GAME_OVER:
                self._notify("on_game_over", self.on_game_over, event.score)
            elif event.type is EventType.STAMP_COLLECTED:
                self._notify("on_stamp_collected", self.on_stamp_collected)
        return events

    def _notify(self, hook: str, callback: Callable[..., None] | None, *args: Any) -> None:
        targets: list[Callable[..., None]] = []
        if callback is not None:
            targets.append(callback)
        targets.extend(getattr(listener, hook) for listener in self.listeners)

        for target in targets:
            try:
                target(*args)
            except Exception:
                logger.exception("Feedback collaborator failed in %s", hook)

    def get_game_state(self) -> dict[str, Any]:
        """Returns the complete game state"""
        state = self.physics_engine.get_game_state()
        state["phase"] = self.phase.value
        return state

    def get_stats(self) -> dict[str, Any]:
        """Returns session statistics"""
        stats: dict[str, Any] = self.game_stats.copy()
        return stats

    def reset_stats(self) -> None:
        """Resets statistics to zero"""
        self.game_stats = self._empty_stats()

    def is_running(self) -> bool:
        return self.phase is GamePhase.RUNNING

    def is_paused(self) -> bool:
        return self.phase is GamePhase.PAUSED

    def is_game_over(self) -> bool:
        return self.phase is GamePhase.GAMEOVER


class AutoplayRunner:
    """Runs headless episodes with a pilot at a fixed step"""

    def __init__(self, engine: GameEngine, pilot: Pilot, dt: float | None = None):
        self.engine = engine
        self.pilot = pilot
        self.dt = dt if dt is not None else 1.0 / engine.config.FPS

        self.episode_stats_history: list[dict[str, Any]] = []

    def run_episode(self, max_steps: int = 10000) -> dict[str, Any]:
        """
        Plays one run until game over or the step limit

        Args:
            max_steps: Maximum number of steps per episode

        Returns:
            Dict: Episode statistics
        """
        self.engine.start()
        self.pilot.on_episode_start()

        episode_stats: dict[str, Any] = {
            "steps": 0,
            "score": 0,
            "streak": 0,
            "best_streak": 0,
            "pipes_passed": 0,
            "stamps_collected": 0,
            "elapsed": 0.0,
            "game_over": False,
        }

        while self.engine.is_running() and episode_stats["steps"] < max_steps:
            if self.pilot.should_flap(self.engine.snapshot, self.engine):
                self.engine.flap()

            snapshot = self.engine.tick(self.dt)
            episode_stats["steps"] += 1
            episode_stats["best_streak"] = max(episode_stats["best_streak"], snapshot.streak)

            for event in self.engine.dispatch_events():
                if event.type is EventType.PIPE_PASSED:
                    episode_stats["pipes_passed"] += 1
                elif event.type is EventType.STAMP_COLLECTED:
                    episode_stats["stamps_collected"] += 1

        snapshot = self.engine.snapshot
        episode_stats["score"] = snapshot.score
        episode_stats["streak"] = snapshot.streak
        episode_stats["elapsed"] = snapshot.elapsed
        episode_stats["game_over"] = snapshot.phase is GamePhase.GAMEOVER

        self.pilot.on_episode_end()
        self.episode_stats_history.append(episode_stats)
        return episode_stats
