"""
Trippin game entities: flyer, pipes, stamps and the published snapshot
"""

import itertools
from dataclasses import dataclass
from dataclasses import replace
from enum import Enum
from typing import Any


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamps a value into [minimum, maximum]"""
    return max(minimum, min(maximum, value))


class GamePhase(Enum):
    """Lifecycle phases of a run"""

    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    GAMEOVER = "gameover"


class IdSequence:
    """Monotonic identity tokens, never reused within one sequence"""

    def __init__(self, prefix: str):
        self.prefix = prefix
        self._counter = itertools.count(1)

    def next_id(self) -> str:
        return f"{self.prefix}_{next(self._counter)}"


class Flyer:
    """The player controlled entity, moving only along the vertical axis"""

    def __init__(self, x: float, y: float, size: float):
        self.x = x
        self.y = y
        self.velocity_y = 0.0
        self.size = size

    @property
    def half_size(self) -> float:
        return self.size / 2

    @property
    def top(self) -> float:
        return self.y - self.half_size

    @property
    def bottom(self) -> float:
        return self.y + self.half_size

    @property
    def left(self) -> float:
        return self.x - self.half_size

    @property
    def right(self) -> float:
        return self.x + self.half_size

    def flap(self, impulse: float) -> None:
        """Overrides the vertical velocity, repeated flaps never stack"""
        self.velocity_y = -abs(impulse)

    def update(self, dt: float, gravity: float, terminal_velocity: float, floor_y: float) -> None:
        """Integrates gravity then position, pinning the flyer inside [0, floor_y]"""
        self.velocity_y = clamp(
            self.velocity_y + gravity * dt, -terminal_velocity, terminal_velocity
        )
        # Velocity is kept when pinned so the flyer re-enters once it reverses
        self.y = clamp(self.y + self.velocity_y * dt, 0.0, floor_y)

    def get_rect(self) -> tuple[float, float, float, float]:
        """Returns the hitbox rectangle properties (x, y, width, height)"""
        return (self.left, self.top, self.size, self.size)


@dataclass(frozen=True)
class Pipe:
    """Obstacle with a passable gap, scrolling right to left"""

    id: str
    x: float
    gap_y: float
    scored: bool = False

    def scrolled(self, dx: float) -> "Pipe":
        return replace(self, x=self.x - dx)

    def mark_scored(self) -> "Pipe":
        return replace(self, scored=True)

    def right(self, width: float) -> float:
        return self.x + width

    def gap_band(self, gap_height: float) -> tuple[float, float]:
        """Returns the (top, bottom) interval the flyer may pass through"""
        return (self.gap_y - gap_height / 2, self.gap_y + gap_height / 2)


@dataclass(frozen=True)
class Stamp:
    """Collectible granting bonus points"""

    id: str
    x: float
    y: float
    taken: bool = False

    def scrolled(self, dx: float) -> "Stamp":
        return replace(self, x=self.x - dx)

    def mark_taken(self) -> "Stamp":
        return replace(self, taken=True)


@dataclass(frozen=True)
class Snapshot:
    """Externally visible state, replaced as a whole after every step"""

    phase: GamePhase
    flyer_y: float
    velocity_y: float
    pipes: tuple[Pipe, ...]
    stamps: tuple[Stamp, ...]
    score: int
    streak: int
    elapsed: float

    def to_dict(self) -> dict[str, Any]:
        """Returns a plain dictionary view of the snapshot"""
        return {
            "phase": self.phase.value,
            "flyer_y": self.flyer_y,
            "velocity_y": self.velocity_y,
            "pipes": [(p.id, p.x, p.gap_y, p.scored) for p in self.pipes],
            "stamps": [(s.id, s.x, s.y, s.taken) for s in self.stamps],
            "score": self.score,
            "streak": self.streak,
            "elapsed": self.elapsed,
        }
