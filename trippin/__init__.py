"""
Trippin - simulation core of a side-scrolling flap-to-avoid arcade game
"""

__version__ = "0.1.0"
