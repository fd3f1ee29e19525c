"""
Gamification core for LifeRPG

This module implements the progression engine:
- XP and leveling for players and skills
- Task completion and un-check transitions
- Quest lifecycle, including custom staked quests
- Week/month/year progress (absolute and pace)
- Privacy-aware leaderboard with percentile labels
- Friend graph transitions
"""

from liferpg.gamification.xp_system import calculate_max_xp, next_skill_max_xp, quest_completion_reward
from liferpg.gamification.task_completion import apply_completion, reverse_completion, toggle_task
from liferpg.gamification.quests import accept_quest, abandon_quest, create_custom_quest
from liferpg.gamification.progress import Period, compute_progress, count_missed_tasks
from liferpg.gamification.leaderboard import build_leaderboard, get_user_percentile_label

__all__ = [
    "calculate_max_xp",
    "next_skill_max_xp",
    "quest_completion_reward",
    "apply_completion",
    "reverse_completion",
    "toggle_task",
    "accept_quest",
    "abandon_quest",
    "create_custom_quest",
    "Period",
    "compute_progress",
    "count_missed_tasks",
    "build_leaderboard",
    "get_user_percentile_label",
]
