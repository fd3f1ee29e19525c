"""Domain models for players, skills, tasks, quests and leaderboards"""

from liferpg.models.user import (
    User,
    UserSettings,
    FriendRequest,
    PrivacyMode,
    CommunicationStyle,
)
from liferpg.models.progression import Skill, Task, TaskType
from liferpg.models.quest import Quest, QuestStatus, RequirementType
from liferpg.models.snapshot import PlayerSnapshot, LeaderboardPlayer, QuestParticipant

__all__ = [
    "User",
    "UserSettings",
    "FriendRequest",
    "PrivacyMode",
    "CommunicationStyle",
    "Skill",
    "Task",
    "TaskType",
    "Quest",
    "QuestStatus",
    "RequirementType",
    "PlayerSnapshot",
    "LeaderboardPlayer",
    "QuestParticipant",
]
