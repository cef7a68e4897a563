"""
Automated pilots for Trippin
"""

from trippin.ai.autopilot import CenteringPilot
from trippin.ai.autopilot import IdlePilot
from trippin.ai.autopilot import RandomPilot

__all__ = ["CenteringPilot", "IdlePilot", "RandomPilot"]
