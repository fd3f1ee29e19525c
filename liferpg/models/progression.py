"""Skill and task models"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class TaskType(str, Enum):
    """Task categories"""
    DAILY = "daily"  # Scheduled for a specific day, counts toward targets
    GOAL = "goal"  # Longer-term, has a deadline


class Skill(BaseModel):
    """A trainable skill in the player's skill tree"""
    id: str
    name: str
    color: str = "#6366f1"
    parent_id: Optional[str] = None
    level: int = Field(default=1, ge=1)
    current_xp: int = Field(default=0, ge=0)
    max_xp: int = Field(default=100, gt=0)  # Running value, grows at each level-up


class Task(BaseModel):
    """A real-world task; only `completed` changes after creation"""
    id: str
    type: TaskType = TaskType.DAILY
    title: str = ""
    description: str = ""
    date: Optional[str] = None  # ISO date, daily tasks only
    deadline: Optional[str] = None
    completed: bool = False
    xp_reward: int = 10
    skill_id: Optional[str] = None
