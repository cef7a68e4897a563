"""
Utilities of the Trippin game
"""

from trippin.utils.config import TrippinConfig
from trippin.utils.config import trippin_config

__all__ = ["trippin_config", "TrippinConfig"]
