"""Unit tests for Pydantic models"""
import pytest
from pydantic import ValidationError

from liferpg import config
from liferpg.models import (
    CommunicationStyle,
    PlayerSnapshot,
    PrivacyMode,
    Quest,
    QuestStatus,
    RequirementType,
    Skill,
    Task,
    TaskType,
    User,
    UserSettings,
)


class TestUser:
    """Test player model"""

    def test_defaults(self):
        """Test a new player starts at level 1"""
        user = User(username="hero", unique_id="HERO01")

        assert user.level == 1
        assert user.current_xp == 0
        assert user.max_xp == 100
        assert user.friends == set()
        assert user.friend_requests == []
        assert user.current_quest_id is None
        assert user.privacy_mode == PrivacyMode.PUBLIC
        assert user.communication_style == CommunicationStyle.DEFAULT

    def test_settings_defaults_from_config(self, monkeypatch):
        """Test daily targets come from configuration"""
        assert UserSettings().daily_min == config.DEFAULT_DAILY_MIN

        monkeypatch.setattr(config, "DEFAULT_DAILY_MIN", 4)
        assert UserSettings().daily_min == 4

    def test_display_avatar(self):
        """Test avatar falls back to the initial"""
        assert User(username="hero", unique_id="H", avatar="🦸").display_avatar() == "🦸"
        assert User(username="zed", unique_id="Z").display_avatar() == "Z"

    def test_invalid_level_rejected(self):
        """Test level must be at least 1"""
        with pytest.raises(ValidationError):
            User(username="hero", unique_id="H", level=0)

    def test_enum_values_from_strings(self):
        """Test stored string values load as enums"""
        user = User(username="hero", unique_id="H", privacy_mode="friends", communication_style="cute")

        assert user.privacy_mode == PrivacyMode.FRIENDS
        assert user.communication_style == CommunicationStyle.CUTE


class TestProgressionModels:
    """Test skill, task and quest models"""

    def test_skill_defaults(self):
        """Test a new skill starts at level 1 with 100 XP to go"""
        skill = Skill(id="root_health", name="Sport")

        assert skill.level == 1
        assert skill.current_xp == 0
        assert skill.max_xp == 100
        assert skill.parent_id is None

    def test_task_defaults(self):
        """Test task defaults"""
        task = Task(id="t1")

        assert task.type == TaskType.DAILY
        assert task.completed is False
        assert task.xp_reward == 10

    def test_quest_defaults(self):
        """Test quest defaults"""
        quest = Quest(id="q1", title="First Steps", requirement_value=5)

        assert quest.status == QuestStatus.AVAILABLE
        assert quest.requirement_type == RequirementType.TASK_COUNT
        assert quest.current_progress == 0
        assert quest.is_custom is False


def test_snapshot_round_trips_through_json():
    """Test that snapshots survive JSON storage"""
    snapshot = PlayerSnapshot(
        user=User(username="hero", unique_id="H", friends={"pal"}),
        skills=[Skill(id="root_health", name="Sport")],
        tasks=[Task(id="t1", date="2024-05-01")],
        quests=[Quest(id="q1", title="First Steps", requirement_value=5)],
    )

    restored = PlayerSnapshot.model_validate_json(snapshot.model_dump_json())

    assert restored == snapshot


def test_empty_snapshot():
    """Test that a snapshot may have no user"""
    snapshot = PlayerSnapshot()

    assert snapshot.user is None
    assert snapshot.tasks == []
