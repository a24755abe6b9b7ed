"""
PokerOdds: Monte Carlo hold'em odds

Estimates a player's win/tie/lose probability against random opponents
from partially known hole and community cards, using a parallel Monte
Carlo simulation over an exact best-hand evaluator.
"""

__version__ = "0.1.0"
