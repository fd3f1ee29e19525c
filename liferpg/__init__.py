"""
LifeRPG progression engine

Turns completed real-world tasks into XP, levels, skill progression, quest
advancement and a privacy-aware leaderboard.
"""

__version__ = "0.1.0"
