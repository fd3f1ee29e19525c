"""Global test fixtures and utilities for liferpg tests"""
import pytest
from datetime import date

from liferpg.models import (
    PlayerSnapshot,
    PrivacyMode,
    Quest,
    QuestStatus,
    Skill,
    Task,
    TaskType,
    User,
)
from liferpg.store.snapshot_store import InMemorySnapshotStore


# ============================================================================
# Time Fixtures
# ============================================================================

@pytest.fixture
def today():
    """Reference day: Wednesday 15 May 2024"""
    return date(2024, 5, 15)


# ============================================================================
# Player Fixtures
# ============================================================================

@pytest.fixture
def test_user():
    """Fresh level 1 player"""
    return User(username="hero", unique_id="HERO01", avatar="🦸")


@pytest.fixture
def test_skills():
    """Starting skill tree"""
    return [
        Skill(id="root_health", name="Sport", color="#ef4444"),
        Skill(id="root_intellect", name="Intellect", color="#3b82f6"),
    ]


@pytest.fixture
def starter_quest():
    """Built-in quest requiring 5 tasks of any skill"""
    return Quest(
        id="q1",
        title="First Steps",
        description="Complete 5 tasks.",
        xp_reward=100,
        requirement_value=5,
    )


@pytest.fixture
def make_task():
    """Factory for tasks"""
    counter = {"n": 0}

    def _make(xp_reward=10, skill_id=None, task_date=None, completed=False, task_type=TaskType.DAILY):
        counter["n"] += 1
        return Task(
            id=f"t{counter['n']}",
            type=task_type,
            title=f"Task {counter['n']}",
            date=task_date,
            completed=completed,
            xp_reward=xp_reward,
            skill_id=skill_id,
        )

    return _make


@pytest.fixture
def make_snapshot():
    """Factory for leaderboard snapshots with a given completed/missed history"""

    def _make(
        username,
        level=1,
        completed=0,
        missed=0,
        privacy=PrivacyMode.PUBLIC,
        unique_id=None,
        current_quest_id=None,
    ):
        user = User(
            username=username,
            unique_id=unique_id or username.upper(),
            level=level,
            total_tasks_completed=completed,
            privacy_mode=privacy,
            current_quest_id=current_quest_id,
        )
        tasks = [
            Task(id=f"{username}-missed-{i}", type=TaskType.DAILY, date="2024-05-01", completed=False)
            for i in range(missed)
        ]
        return PlayerSnapshot(user=user, tasks=tasks)

    return _make


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def store():
    """Empty in-memory snapshot store"""
    return InMemorySnapshotStore()


@pytest.fixture
def populated_store(store, test_user, test_skills, starter_quest):
    """Store holding the hero and two other players"""
    hero_snapshot = PlayerSnapshot(
        user=test_user,
        skills=test_skills,
        tasks=[
            Task(id="run", type=TaskType.DAILY, date="2024-05-14", xp_reward=20, skill_id="root_health"),
            Task(id="read", type=TaskType.DAILY, date="2024-05-15", xp_reward=15, skill_id="root_intellect"),
        ],
        quests=[starter_quest],
    )
    others = {
        "ally": User(username="ally", unique_id="ALLY42", level=4, total_tasks_completed=8),
        "ghost": User(
            username="ghost",
            unique_id="GHOST7",
            level=9,
            total_tasks_completed=3,
            privacy_mode=PrivacyMode.PRIVATE,
        ),
    }

    for username, snapshot in [("hero", hero_snapshot)] + [
        (name, PlayerSnapshot(user=user)) for name, user in others.items()
    ]:
        store.register_username(username)
        store.put_snapshot(username, snapshot)

    return store


@pytest.fixture
def active_quest():
    """Active staked quest requiring two tasks"""
    return Quest(
        id="custom_q_1",
        title="Double Down",
        status=QuestStatus.ACTIVE,
        requirement_value=2,
        xp_reward=50,
        bet_amount=20,
        is_custom=True,
    )
