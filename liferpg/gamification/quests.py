"""
Quest System

Quest lifecycle:  available -> active -> completed | failed

- available -> active: explicit accept, refused while another quest is active
- active -> completed: only through task completion (see task_completion.py)
- active -> failed: explicit abandon

Players can also author custom quests with an optional XP stake and deadline.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from liferpg import config
from liferpg.exceptions import ValidationError
from liferpg.gamification.progress import round_half_up_percent
from liferpg.gamification.xp_system import quest_completion_reward
from liferpg.models import Quest, QuestStatus, RequirementType, User

logger = logging.getLogger(__name__)


@dataclass
class QuestActionResult:
    """Outcome of accepting or abandoning a quest"""
    user: User
    quests: List[Quest]
    success: bool
    conflict: bool = False  # Another quest is already active
    message: str = ""


def get_active_quest(quests: List[Quest]) -> Optional[Quest]:
    """The player's active quest, if any"""
    return next((q for q in quests if q.status == QuestStatus.ACTIVE), None)


def quest_progress_percent(quest: Quest) -> int:
    """Progress toward the requirement as a 0-100 integer"""
    if quest.requirement_value <= 0:
        return 100
    return min(100, round_half_up_percent(quest.current_progress, quest.requirement_value))


def quest_total_reward(quest: Quest) -> int:
    """XP granted when the quest completes, stake refund included"""
    return quest_completion_reward(quest.xp_reward, quest.bet_amount)


def accept_quest(user: User, quests: List[Quest], quest_id: str) -> QuestActionResult:
    """
    Make a quest the player's active quest

    Refused as a conflict (nothing changes) while the player already has an
    active quest. Unknown quests and quests that are not available are
    skipped without changes.
    """
    active = get_active_quest(quests)
    if user.current_quest_id or active is not None:
        current = user.current_quest_id or active.id
        logger.info(f"{user.username} tried to accept {quest_id} while {current} is active")
        return QuestActionResult(
            user=user,
            quests=quests,
            success=False,
            conflict=True,
            message="Finish or abandon your current quest first.",
        )

    target = next((q for q in quests if q.id == quest_id), None)
    if target is None or target.status != QuestStatus.AVAILABLE:
        logger.debug(f"Quest {quest_id} is not available to {user.username}")
        return QuestActionResult(
            user=user,
            quests=quests,
            success=False,
            message="Quest is not available.",
        )

    new_quests = [
        q.model_copy(update={"status": QuestStatus.ACTIVE, "current_progress": 0})
        if q.id == quest_id else q
        for q in quests
    ]
    new_user = user.model_copy(update={"current_quest_id": quest_id})

    logger.info(f"{user.username} accepted quest {quest_id}")
    return QuestActionResult(user=new_user, quests=new_quests, success=True, message="Quest accepted.")


def abandon_quest(
    user: User,
    quests: List[Quest],
    quest_id: str,
    deduct_bet: Optional[bool] = None
) -> QuestActionResult:
    """
    Abandon the active quest, marking it failed

    Args:
        user: Player abandoning the quest
        quests: Player's quests
        quest_id: Quest to abandon; must be active
        deduct_bet: Also deduct the stake from current XP (clamped at zero).
            Defaults to config.QUEST_FAIL_DEDUCTS_BET; otherwise the stake is
            only forgone.

    Returns:
        QuestActionResult; success is False when the quest is not active
    """
    if deduct_bet is None:
        deduct_bet = config.QUEST_FAIL_DEDUCTS_BET

    target = next((q for q in quests if q.id == quest_id), None)
    if target is None or target.status != QuestStatus.ACTIVE:
        logger.debug(f"Quest {quest_id} is not active for {user.username}, nothing to abandon")
        return QuestActionResult(user=user, quests=quests, success=False, message="Quest is not active.")

    new_quests = [
        q.model_copy(update={"status": QuestStatus.FAILED}) if q.id == quest_id else q
        for q in quests
    ]

    update = {"current_quest_id": None}
    if deduct_bet and target.bet_amount:
        update["current_xp"] = max(0, user.current_xp - target.bet_amount)
    new_user = user.model_copy(update=update)

    logger.info(f"{user.username} abandoned quest {quest_id}")
    return QuestActionResult(user=new_user, quests=new_quests, success=True, message="Quest failed.")


def create_custom_quest(
    title: str,
    requirement_value: int,
    description: str = "",
    requirement_skill_id: Optional[str] = None,
    bet_amount: Optional[int] = None,
    deadline: Optional[str] = None,
    xp_reward: Optional[int] = None,
    quest_id: Optional[str] = None
) -> Quest:
    """
    Build a player-authored quest in the available state

    Args:
        title: Quest title, required
        requirement_value: Tasks to complete, at least config.MIN_CUSTOM_QUEST_TASKS
        description: Optional description
        requirement_skill_id: Only count tasks of this skill
        bet_amount: XP stake, refunded at 1.5x on completion
        deadline: Optional ISO date
        xp_reward: Defaults to requirement_value * config.CUSTOM_QUEST_XP_PER_TASK
        quest_id: Defaults to a timestamp-based id

    Raises:
        ValidationError: On empty title, too few tasks, or a negative stake
    """
    title = (title or "").strip()
    if not title:
        raise ValidationError("Quest title is required", field="title", value=title)
    if requirement_value < config.MIN_CUSTOM_QUEST_TASKS:
        raise ValidationError(
            f"Quest needs at least {config.MIN_CUSTOM_QUEST_TASKS} tasks",
            field="requirement_value",
            value=requirement_value,
        )
    if bet_amount is not None and bet_amount < 0:
        raise ValidationError("Stake cannot be negative", field="bet_amount", value=bet_amount)

    return Quest(
        id=quest_id or f"custom_q_{time.time_ns()}",
        title=title,
        description=description or "Custom challenge",
        status=QuestStatus.AVAILABLE,
        requirement_type=RequirementType.TASK_COUNT,
        requirement_value=requirement_value,
        requirement_skill_id=requirement_skill_id or None,
        current_progress=0,
        xp_reward=xp_reward if xp_reward is not None else requirement_value * config.CUSTOM_QUEST_XP_PER_TASK,
        bet_amount=bet_amount,
        deadline=deadline or None,
        is_custom=True,
    )


def add_quest(quests: List[Quest], quest: Quest) -> List[Quest]:
    """Append a quest to the board; a duplicate id is skipped"""
    if any(q.id == quest.id for q in quests):
        logger.debug(f"Quest {quest.id} already on the board")
        return list(quests)
    return [*quests, quest]
