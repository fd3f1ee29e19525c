"""Player snapshot and derived leaderboard models"""
from typing import Optional
from pydantic import BaseModel, Field

from liferpg.models.user import User
from liferpg.models.progression import Skill, Task
from liferpg.models.quest import Quest


class PlayerSnapshot(BaseModel):
    """Full serialized state of one player, as kept in the shared store"""
    user: Optional[User] = None
    skills: list[Skill] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    quests: list[Quest] = Field(default_factory=list)


class LeaderboardPlayer(BaseModel):
    """One ranked row, regenerated on every query and never persisted"""
    rank: int
    username: str
    unique_id: str
    level: int
    efficiency: int  # 0-100, rounded
    is_user: bool
    is_friend: bool
    is_hidden: bool
    percentile: str  # "0.1%", "1%", "2.5%", "34%" - always read as "top N"
    avatar: str
    source_snapshot: PlayerSnapshot


class QuestParticipant(BaseModel):
    """A player currently pursuing a given quest"""
    username: str
    avatar: str
