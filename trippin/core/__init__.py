"""
Core module of the Trippin game
"""

from trippin.core.entities import Flyer
from trippin.core.entities import GamePhase
from trippin.core.entities import Pipe
from trippin.core.entities import Snapshot
from trippin.core.entities import Stamp
from trippin.core.game_engine import EventType
from trippin.core.game_engine import GameEngine
from trippin.core.game_engine import GameEvent

__all__ = [
    "Flyer",
    "GamePhase",
    "Pipe",
    "Stamp",
    "Snapshot",
    "GameEngine",
    "GameEvent",
    "EventType",
]
