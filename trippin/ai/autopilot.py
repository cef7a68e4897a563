"""
Simple automated pilots for Trippin
"""

from typing import TYPE_CHECKING

import numpy as np

from trippin.core.entities import Pipe, Snapshot

if TYPE_CHECKING:
    from trippin.core.game_engine import GameEngine


class BasePilot:
    """Common bookkeeping for the pilots below"""

    def __init__(self, name: str = "Pilot"):
        self.name = name
        self.episodes = 0
        self.flaps = 0

    def should_flap(self, snapshot: Snapshot, engine: "GameEngine") -> bool:
        raise NotImplementedError

    def on_episode_start(self) -> None:
        self.flaps = 0

    def on_episode_end(self) -> None:
        self.episodes += 1


class IdlePilot(BasePilot):
    """Pilot that never flaps"""

    def __init__(self, name: str = "IdlePilot"):
        super().__init__(name)

    def should_flap(self, snapshot: Snapshot, engine: "GameEngine") -> bool:
        return False


class RandomPilot(BasePilot):
    """Pilot that flaps at random"""

    def __init__(
        self, name: str = "RandomPilot", flap_probability: float = 0.05, seed: int | None = None
    ):
        super().__init__(name)
        self.flap_probability = flap_probability
        self.rng = np.random.default_rng(seed)

    def should_flap(self, snapshot: Snapshot, engine: "GameEngine") -> bool:
        flap = bool(self.rng.random() < self.flap_probability)
        self.flaps += int(flap)
        return flap


class CenteringPilot(BasePilot):
    """
    Pilot that keeps the flyer around the centre of the next gap.

    It flaps once the flyer falls more than `margin` below the target. A flap
    lifts the flyer by roughly impulse^2 / (2 * gravity) before it falls back,
    so the margin keeps that arc centred on the gap.
    """

    def __init__(self, name: str = "CenteringPilot", margin: float = 35.0):
        super().__init__(name)
        self.margin = margin

    @staticmethod
    def next_pipe(snapshot: Snapshot, engine: "GameEngine") -> Pipe | None:
        """Returns the leftmost pipe the flyer has not cleared yet"""
        flyer_left = engine.flyer_x - engine.config.BIRD_SIZE / 2
        for pipe in snapshot.pipes:
            if pipe.right(engine.config.PIPE_WIDTH) >= flyer_left:
                return pipe
        return None

    def target_y(self, snapshot: Snapshot, engine: "GameEngine") -> float:
        pipe = self.next_pipe(snapshot, engine)
        if pipe is None:
            return engine.screen_height / 2
        return pipe.gap_y

    def should_flap(self, snapshot: Snapshot, engine: "GameEngine") -> bool:
        target = self.target_y(snapshot, engine)
        flap = snapshot.flyer_y > target + self.margin and snapshot.velocity_y >= 0
        self.flaps += int(flap)
        return flap
