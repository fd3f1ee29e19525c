"""
XP and Leveling System

Maps levels to the XP needed for the next level-up, for both the player and
individual skills.

Leveling Curves:
- Player: floor(100 * 1.2^(level - 1)) XP per level (100, 120, 144, 172, ...)
- Skill: starts at the skill's own max XP and grows x1.5 at every level-up.
  This is a running value carried on the skill, not a function of its level.

Quest Rewards:
- Completion grants the quest's XP reward plus the stake refunded at 1.5x

All XP arithmetic is integer; fractional results are floored.
"""

from typing import Callable, Dict, Optional, Tuple
import math
import logging

logger = logging.getLogger(__name__)

XP_TO_LEVEL_UP_BASE = 100
XP_MULTIPLIER = 1.2
# Skill growth is 3/2 expressed as an integer ratio
SKILL_XP_GROWTH_NUM = 3
SKILL_XP_GROWTH_DEN = 2
# Stakes are refunded at 3/2 on quest completion
BET_REFUND_NUM = 3
BET_REFUND_DEN = 2


def calculate_max_xp(level: int) -> int:
    """
    XP required to go from `level` to `level + 1`

    Levels below 1 are treated as level 1.
    """
    level = max(1, level)
    return math.floor(XP_TO_LEVEL_UP_BASE * XP_MULTIPLIER ** (level - 1))


def next_skill_max_xp(max_xp: int) -> int:
    """Skill threshold after one level-up: floor(max_xp * 1.5), at least max_xp + 1"""
    return max(max_xp + 1, max_xp * SKILL_XP_GROWTH_NUM // SKILL_XP_GROWTH_DEN)


def apply_level_ups(
    current_xp: int,
    level: int,
    max_xp: int,
    next_max_xp: Callable[[int, int], int]
) -> Tuple[int, int, int, int]:
    """
    Roll overflowing XP into level-ups

    A single large award may cross several thresholds, so this loops until
    `current_xp < max_xp` holds.

    Args:
        current_xp: XP after the award
        level: Level before the award
        max_xp: Threshold for the current level
        next_max_xp: Called as next_max_xp(new_level, old_max_xp) after each level-up

    Returns:
        (current_xp, level, max_xp, levels_gained)
    """
    if max_xp <= 0:
        # A non-positive threshold would never terminate; leave state as is
        logger.warning(f"Refusing to level with non-positive threshold {max_xp}")
        return current_xp, level, max_xp, 0

    levels_gained = 0
    while current_xp >= max_xp:
        current_xp -= max_xp
        level += 1
        max_xp = next_max_xp(level, max_xp)
        levels_gained += 1

    return current_xp, level, max_xp, levels_gained


def user_next_max_xp(level: int, _previous_max_xp: int) -> int:
    """Player curve adapter for apply_level_ups"""
    return calculate_max_xp(level)


def skill_next_max_xp(_level: int, previous_max_xp: int) -> int:
    """Skill curve adapter for apply_level_ups"""
    return next_skill_max_xp(previous_max_xp)


def total_xp_for_level(level: int) -> int:
    """Cumulative XP needed to reach `level` starting from level 1 with 0 XP"""
    return sum(calculate_max_xp(lvl) for lvl in range(1, max(1, level)))


def level_from_total_xp(total_xp: int) -> Dict[str, int]:
    """
    Calculate player level from cumulative XP

    Returns:
        {
            'current_level': int,
            'xp_in_current_level': int,
            'xp_to_next_level': int,
            'max_xp': int
        }
    """
    xp, level, max_xp, _ = apply_level_ups(
        max(0, total_xp), 1, calculate_max_xp(1), user_next_max_xp
    )
    return {
        "current_level": level,
        "xp_in_current_level": xp,
        "xp_to_next_level": max_xp - xp,
        "max_xp": max_xp,
    }


def quest_completion_reward(xp_reward: int, bet_amount: Optional[int] = None) -> int:
    """Quest reward plus the stake refunded at 1.5x (floored)"""
    bonus = (bet_amount * BET_REFUND_NUM // BET_REFUND_DEN) if bet_amount else 0
    return xp_reward + bonus
