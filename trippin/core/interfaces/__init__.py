"""
Protocols for collaborators of the simulation core
"""

from trippin.core.interfaces.feedback import FeedbackListener
from trippin.core.interfaces.pilot import Pilot

__all__ = ["FeedbackListener", "Pilot"]
