"""
Frame clock and input mapping for hosts driving Trippin with pygame
"""

import logging
from collections.abc import Callable
from typing import Any

import pygame

from trippin.core.entities import Snapshot
from trippin.core.game_engine import GameEngine

logger = logging.getLogger(__name__)


class FrameLoop:
    """Delivers one engine tick per frame, measured with a pygame clock"""

    def __init__(
        self,
        engine: GameEngine,
        fps: int | None = None,
        on_frame: Callable[[Snapshot], None] | None = None,
        clock_factory: Callable[[], Any] = pygame.time.Clock,
    ):
        """
        Args:
            engine: Engine to drive
            fps: Frame rate cap, defaults to the engine configuration
            on_frame: Called with the snapshot after every tick
            clock_factory: Builds the clock; anything with a pygame-style tick(fps)
        """
        self.engine = engine
        self.fps = fps if fps is not None else engine.config.FPS
        self.on_frame = on_frame
        self.clock_factory = clock_factory
        self.clock: Any = None
        self.active = False
        self.frames = 0

    def _reset_clock(self) -> None:
        """Replaces the clock so the next measurement starts from now"""
        self.clock = self.clock_factory()
        # The first tick of a fresh clock only sets its reference time
        self.clock.tick()

    def start(self) -> None:
        """Starts a new run and arms the clock"""
        self.engine.start()
        self._reset_clock()
        self.active = True

    def step(self) -> Snapshot:
        """Measures the frame time and ticks the engine once"""
        if self.clock is None:
            self._reset_clock()
        dt = self.clock.tick(self.fps) / 1000.0
        snapshot = self.engine.tick(dt)
        self.engine.dispatch_events()
        self.frames += 1

        if self.on_frame is not None:
            self.on_frame(snapshot)
        if not self.engine.is_running():
            self.active = False
        return snapshot

    def run(self, max_frames: int | None = None) -> Snapshot:
        """
        Runs frames until the run ends, the loop is stopped or the limit is reached.

        The clock is re-armed on entry, so the first frame only measures the
        time since this call.

        Args:
            max_frames: Optional number of frames to run

        Returns:
            The last snapshot
        """
        self.active = self.engine.is_running()
        # Wall time spent outside run() must never reach the engine
        if self.active:
            self._reset_clock()
        frames = 0
        while self.active and (max_frames is None or frames < max_frames):
            self.step()
            frames += 1
        return self.engine.snapshot

    def pause(self) -> None:
        """Pauses the engine and stops delivering ticks"""
        self.engine.pause()
        self.active = False

    def resume(self) -> None:
        """Resumes without replaying the real time spent paused"""
        if not self.engine.is_paused():
            return
        self.engine.resume()
        self._reset_clock()
        self.active = True

    def stop(self) -> None:
        self.active = False

    def close(self) -> None:
        """Releases the clock, the loop must not be run afterwards"""
        self.active = False
        self.clock = None
        logger.debug("Frame loop closed after %d frames", self.frames)


class FlapInput:
    """Maps pygame events to host verbs"""

    FLAP_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)

    def handle_event(self, event: pygame.event.Event) -> str | None:
        """
        Handle pygame events

        Returns:
            "flap", "pause", "restart", "quit" or None
        """
        if event.type == pygame.KEYDOWN:
            if event.key in self.FLAP_KEYS:
                return "flap"
            elif event.key == pygame.K_p:
                return "pause"
            elif event.key == pygame.K_r:
                return "restart"
            elif event.key == pygame.K_ESCAPE:
                return "quit"

        elif event.type == pygame.MOUSEBUTTONDOWN:
            return "flap"

        elif event.type == pygame.QUIT:
            return "quit"

        return None

    def apply(self, verb: str | None, loop: FrameLoop) -> bool:
        """
        Applies a verb to the loop's engine

        Returns:
            False when the host should quit
        """
        engine = loop.engine
        if verb == "flap":
            engine.flap()
        elif verb == "pause":
            if engine.is_paused():
                loop.resume()
            else:
                loop.pause()
        elif verb == "restart":
            engine.reset()
            loop.start()
        elif verb == "quit":
            loop.close()
            return False
        return True
