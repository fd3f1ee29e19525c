"""Quest models"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class QuestStatus(str, Enum):
    """Quest lifecycle states"""
    AVAILABLE = "available"
    ACTIVE = "active"
    COMPLETED = "completed"  # Terminal, reached only through task completion
    FAILED = "failed"  # Terminal, reached by abandoning


class RequirementType(str, Enum):
    """What advances a quest"""
    TASK_COUNT = "task_count"


class Quest(BaseModel):
    """A quest the player can take on"""
    id: str
    title: str
    description: str = ""
    status: QuestStatus = QuestStatus.AVAILABLE
    requirement_type: RequirementType = RequirementType.TASK_COUNT
    requirement_value: int
    requirement_skill_id: Optional[str] = None  # Only tasks of this skill count
    current_progress: int = 0
    xp_reward: int = 0
    bet_amount: Optional[int] = None  # XP staked, refunded at 1.5x on completion
    deadline: Optional[str] = None
    is_custom: bool = False
