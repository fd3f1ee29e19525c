"""
Task Completion Transition

Applies (or reverses) the effect of checking off one task on the player's
XP and level, the task's skill, and the active quest.

Completing and then un-checking a task is intentionally NOT a round trip.
Un-checking only takes the task's XP back out of the current level's pool
(clamped at zero) and decrements the completed-task counter. Level-ups,
skill growth and quest progress already granted are kept. Players are never
de-leveled.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from liferpg.gamification.xp_system import (
    apply_level_ups,
    quest_completion_reward,
    skill_next_max_xp,
    user_next_max_xp,
)
from liferpg.models import (
    PlayerSnapshot,
    Quest,
    QuestStatus,
    RequirementType,
    Skill,
    Task,
    User,
)

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    """Outcome of completing one task"""
    user: User
    skills: List[Skill]
    quests: List[Quest]
    leveled_up: bool
    skill_leveled_up: bool = False
    completed_quest_ids: List[str] = field(default_factory=list)
    xp_gained: int = 0  # Task reward plus any quest rewards


@dataclass
class ToggleResult:
    """Outcome of flipping a task's completed flag"""
    snapshot: PlayerSnapshot
    completed: Optional[bool]  # New flag value, None when the task was not found
    leveled_up: bool = False
    completed_quest_ids: List[str] = field(default_factory=list)


def _grant_user_xp(user: User, amount: int) -> int:
    """Add XP to a user copy in place and roll level-ups; returns levels gained"""
    # Negative rewards drain the current pool but never below zero
    user.current_xp, user.level, user.max_xp, gained = apply_level_ups(
        max(0, user.current_xp + amount), user.level, user.max_xp, user_next_max_xp
    )
    return gained


def quest_matches_task(quest: Quest, task: Task) -> bool:
    """Whether completing `task` advances `quest`"""
    if quest.requirement_type != RequirementType.TASK_COUNT:
        return False
    return not quest.requirement_skill_id or quest.requirement_skill_id == task.skill_id


def apply_completion(
    user: User,
    skills: List[Skill],
    quests: List[Quest],
    task: Task
) -> CompletionResult:
    """
    Apply the effect of completing a task

    Args:
        user: Player before the completion
        skills: Player's skills
        quests: Player's quests
        task: The task being checked off

    Returns:
        CompletionResult with new copies of user, skills and quests
    """
    new_user = user.model_copy(deep=True)
    new_skills = [s.model_copy() for s in skills]
    new_quests = [q.model_copy() for q in quests]

    # 1-2. Player XP and level-ups
    new_user.total_tasks_completed += 1
    levels_gained = _grant_user_xp(new_user, task.xp_reward)
    xp_gained = task.xp_reward

    # 3. Skill progression
    skill_leveled_up = False
    skill_index = next(
        (i for i, s in enumerate(new_skills) if task.skill_id and s.id == task.skill_id),
        None
    )
    if skill_index is not None:
        skill = new_skills[skill_index]
        skill.current_xp, skill.level, skill.max_xp, skill_gained = apply_level_ups(
            skill.current_xp + task.xp_reward, skill.level, skill.max_xp, skill_next_max_xp
        )
        skill_leveled_up = skill_gained > 0
        if skill_leveled_up:
            logger.info(f"Skill {skill.id} of {user.username} reached level {skill.level}")
    elif task.skill_id:
        logger.debug(f"Task {task.id} references unknown skill {task.skill_id}, skipping skill XP")

    # 4. Active quest progress
    completed_quest_ids: List[str] = []
    for quest in new_quests:
        if quest.status != QuestStatus.ACTIVE or not quest_matches_task(quest, task):
            continue

        quest.current_progress += 1
        if quest.current_progress < quest.requirement_value:
            continue

        quest.current_progress = quest.requirement_value
        quest.status = QuestStatus.COMPLETED
        new_user.current_quest_id = None

        reward = quest_completion_reward(quest.xp_reward, quest.bet_amount)
        levels_gained += _grant_user_xp(new_user, reward)
        xp_gained += reward
        completed_quest_ids.append(quest.id)
        logger.info(f"{user.username} completed quest {quest.id} (+{reward} XP)")

    leveled_up = levels_gained > 0
    if leveled_up:
        logger.info(f"{user.username} leveled up from {user.level} to {new_user.level}!")

    return CompletionResult(
        user=new_user,
        skills=new_skills,
        quests=new_quests,
        leveled_up=leveled_up,
        skill_leveled_up=skill_leveled_up,
        completed_quest_ids=completed_quest_ids,
        xp_gained=xp_gained,
    )


def reverse_completion(
    user: User,
    skills: List[Skill],
    quests: List[Quest],
    task: Task
) -> User:
    """
    Apply the effect of un-checking a completed task

    Only the player record changes: XP drops by the task's reward, clamped at
    zero (a negative reward adds XP back and may level up), and the completed
    counter drops by one, clamped at zero. `skills` and
    `quests` are accepted for symmetry with apply_completion and are left
    untouched on purpose (see module docstring).
    """
    new_user = user.model_copy(deep=True)
    # A negative reward adds XP back on un-check, so overflow still levels up
    new_user.current_xp, new_user.level, new_user.max_xp, _ = apply_level_ups(
        max(0, new_user.current_xp - task.xp_reward), new_user.level, new_user.max_xp, user_next_max_xp
    )
    new_user.total_tasks_completed = max(0, new_user.total_tasks_completed - 1)
    return new_user


def toggle_task(snapshot: PlayerSnapshot, task_id: str) -> ToggleResult:
    """
    Flip a task's completed flag and apply the matching transition

    Unknown task ids, or a snapshot without a user, leave the snapshot unchanged.
    """
    task = next((t for t in snapshot.tasks if t.id == task_id), None)
    if task is None or snapshot.user is None:
        logger.debug(f"toggle_task: task {task_id} not found, nothing to do")
        return ToggleResult(snapshot=snapshot, completed=None)

    completing = not task.completed
    new_tasks = [
        t.model_copy(update={"completed": completing}) if t.id == task_id else t
        for t in snapshot.tasks
    ]

    if completing:
        result = apply_completion(snapshot.user, snapshot.skills, snapshot.quests, task)
        new_snapshot = snapshot.model_copy(update={
            "user": result.user,
            "skills": result.skills,
            "quests": result.quests,
            "tasks": new_tasks,
        })
        return ToggleResult(
            snapshot=new_snapshot,
            completed=True,
            leveled_up=result.leveled_up,
            completed_quest_ids=result.completed_quest_ids,
        )

    new_user = reverse_completion(snapshot.user, snapshot.skills, snapshot.quests, task)
    new_snapshot = snapshot.model_copy(update={"user": new_user, "tasks": new_tasks})
    return ToggleResult(snapshot=new_snapshot, completed=False)
