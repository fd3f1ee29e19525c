"""
Service Layer Package

Services connect the pure progression engine to the shared snapshot store.

- ProgressionService: tasks, quests, progress, leaderboards and friends
"""

from liferpg.services.progression_service import ProgressionService

__all__ = ["ProgressionService"]
