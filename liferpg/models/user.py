"""Player-related Pydantic models"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from liferpg import config


class PrivacyMode(str, Enum):
    """Who may see a player's identity on the leaderboard"""
    PUBLIC = "public"
    FRIENDS = "friends"
    PRIVATE = "private"


class CommunicationStyle(str, Enum):
    """Tone of motivation messages"""
    DEFAULT = "default"
    RUDE = "rude"
    CUTE = "cute"
    INTELLECTUAL = "intellectual"
    FRIENDLY = "friendly"


class UserSettings(BaseModel):
    """Daily task targets and goals"""
    daily_min: int = Field(default_factory=lambda: config.DEFAULT_DAILY_MIN)
    daily_max: int = Field(default_factory=lambda: config.DEFAULT_DAILY_MAX)
    monthly_income_goal: int = 0


class FriendRequest(BaseModel):
    """Incoming friend request"""
    from_username: str
    from_id: str
    from_avatar: str = ""
    created_at: Optional[datetime] = None


class User(BaseModel):
    """The local player's character"""
    username: str
    unique_id: str  # Short public code used to find friends
    avatar: str = ""  # URL, emoji or base64 image
    description: str = ""
    level: int = Field(default=1, ge=1)
    current_xp: int = Field(default=0, ge=0)
    max_xp: int = Field(default=100, gt=0)
    total_tasks_completed: int = 0
    missed_tasks: int = 0
    current_quest_id: Optional[str] = None
    friends: set[str] = Field(default_factory=set)
    friend_requests: list[FriendRequest] = Field(default_factory=list)
    privacy_mode: PrivacyMode = PrivacyMode.PUBLIC
    communication_style: CommunicationStyle = CommunicationStyle.DEFAULT
    settings: UserSettings = Field(default_factory=UserSettings)

    def display_avatar(self) -> str:
        """Avatar, or the uppercased first letter of the username when unset"""
        return self.avatar or self.username[:1].upper()
