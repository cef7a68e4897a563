"""
pygame host helpers for Trippin
"""

from trippin.gui.frame_clock import FlapInput
from trippin.gui.frame_clock import FrameLoop

__all__ = ["FlapInput", "FrameLoop"]
