"""
Feedback listener protocol - collaborators reacting to run events
"""

from typing import Protocol


class FeedbackListener(Protocol):
    """
    Protocol for collaborators that react to game events.

    Audio, haptics and high score bookkeeping live outside the simulation.
    They receive notifications only when the host dispatches the event queue,
    never from inside a simulation step.
    """

    def on_game_over(self, final_score: int) -> None:
        """
        Called once when a run ends on a collision.

        Args:
            final_score: Score of the finished run
        """
        ...

    def on_stamp_collected(self) -> None:
        """Called for every stamp picked up"""
        ...
