"""
Collision detection and scoring for Trippin
"""

from dataclasses import dataclass
from dataclasses import field

from trippin.core.entities import Flyer, Pipe, Stamp

PRECISION_TOLERANCE = 12.0
PICKUP_RADIUS = 18.0
PIPE_POINTS = 1
STAMP_POINTS = 3


def overlaps_horizontally(flyer: Flyer, pipe: Pipe, pipe_width: float) -> bool:
    """Checks if the flyer's hitbox intersects the pipe's columns"""
    return flyer.right > pipe.x and flyer.left < pipe.right(pipe_width)


def within_gap(flyer: Flyer, pipe: Pipe, gap_height: float) -> bool:
    """Checks if the flyer's vertical extent is fully inside the gap band"""
    gap_top, gap_bottom = pipe.gap_band(gap_height)
    return flyer.top >= gap_top and flyer.bottom <= gap_bottom


def has_cleared(flyer: Flyer, pipe: Pipe, pipe_width: float) -> bool:
    """Checks if the pipe's right edge is behind the flyer's left edge"""
    return pipe.right(pipe_width) < flyer.left


def is_precise(flyer: Flyer, pipe: Pipe) -> bool:
    """Checks if the flyer is close enough to the gap centre to extend a streak"""
    return abs(flyer.y - pipe.gap_y) < PRECISION_TOLERANCE


def within_reach(flyer: Flyer, stamp: Stamp) -> bool:
    """Checks if a stamp can be picked up"""
    return abs(stamp.x - flyer.x) < PICKUP_RADIUS and abs(stamp.y - flyer.y) < PICKUP_RADIUS


@dataclass
class CollisionReport:
    """Outcome of one evaluation pass"""

    pipes: list[Pipe]
    stamps: list[Stamp]
    streak: int
    collided_with: Pipe | None = None
    points: int = 0
    passed: list[str] = field(default_factory=list)
    collected: list[str] = field(default_factory=list)

    @property
    def collided(self) -> bool:
        return self.collided_with is not None


class CollisionDetector:
    """Evaluates collisions, pipe passes and stamp pickups for one step"""

    def evaluate(
        self,
        flyer: Flyer,
        pipes: list[Pipe],
        stamps: list[Stamp],
        gap_height: float,
        pipe_width: float,
        streak: int,
    ) -> CollisionReport:
        """
        Evaluates the post-movement world against the flyer.

        Pipes are walked leftmost first. A collision stops the evaluation: the
        remaining pipes are left untouched and stamps are not collected.

        Args:
            flyer: Flyer at its new position
            pipes: Pipes ordered by horizontal position
            stamps: Live stamps
            gap_height: Current gap height
            pipe_width: Width of every pipe
            streak: Streak before this step

        Returns:
            CollisionReport with the updated entities and what happened
        """
        report = CollisionReport(pipes=list(pipes), stamps=list(stamps), streak=streak)

        for index, pipe in enumerate(pipes):
            if overlaps_horizontally(flyer, pipe, pipe_width) and not within_gap(
                flyer, pipe, gap_height
            ):
                report.collided_with = pipe
                return report

            if not pipe.scored and has_cleared(flyer, pipe, pipe_width):
                report.pipes[index] = pipe.mark_scored()
                report.points += PIPE_POINTS
                report.passed.append(pipe.id)
                report.streak = report.streak + 1 if is_precise(flyer, pipe) else 0

        for index, stamp in enumerate(stamps):
            if not stamp.taken and within_reach(flyer, stamp):
                report.stamps[index] = stamp.mark_taken()
                report.points += STAMP_POINTS
                report.collected.append(stamp.id)

        return report
