"""
Courtside - terminal training session manager for coaches and players.
"""

__version__ = "0.1.0"
