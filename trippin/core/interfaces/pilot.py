"""
Pilot protocol - defines interface for anything deciding when to flap
"""

from typing import TYPE_CHECKING
from typing import Protocol

from trippin.core.entities import Snapshot

if TYPE_CHECKING:
    from trippin.core.game_engine import GameEngine


class Pilot(Protocol):
    """
    Protocol that all automated pilots must implement.

    The single action of the game is the flap, so a pilot only answers
    whether to flap before the next step.
    """

    name: str

    def should_flap(self, snapshot: Snapshot, engine: "GameEngine") -> bool:
        """
        Decide whether to flap before the next step.

        Args:
            snapshot: Latest published snapshot
            engine: Engine being driven, for screen geometry and configuration

        Returns:
            True to flap
        """
        ...

    def on_episode_start(self) -> None:
        """Called when a new run starts"""
        ...

    def on_episode_end(self) -> None:
        """Called when a run ends"""
        ...
