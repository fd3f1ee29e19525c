"""
ProgressionService - Store-backed Progression Glue

Connects the pure progression engine to a SnapshotStore: loads snapshots,
runs the transitions, and writes results back.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from liferpg.exceptions import RecordNotFoundError
from liferpg.gamification import leaderboard, quests, social
from liferpg.gamification.motivation import get_motivation_message
from liferpg.gamification.progress import Period, compute_progress
from liferpg.gamification.task_completion import ToggleResult, toggle_task
from liferpg.models import (
    LeaderboardPlayer,
    PlayerSnapshot,
    PrivacyMode,
    Quest,
    QuestParticipant,
)
from liferpg.store.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

DateLike = Optional[Union[date, datetime]]


class ProgressionService:
    """
    Service for progression features.

    Responsibilities:
    - Task toggling with XP, skill and quest effects
    - Quest acceptance, abandonment and custom quest creation
    - Period progress with motivation messages
    - Leaderboards, percentile labels and player search
    - Friend graph changes on both parties' snapshots
    """

    def __init__(self, store: SnapshotStore):
        """
        Initialize ProgressionService.

        Args:
            store: Snapshot store shared by all players
        """
        self.store = store
        logger.debug("ProgressionService initialized")

    # ------------------------------------------------------------------
    # Snapshot access
    # ------------------------------------------------------------------

    def load_all_snapshots(self) -> List[PlayerSnapshot]:
        """Every stored snapshot, in index order; dangling index entries are skipped"""
        snapshots = []
        for username in self.store.get_index():
            snapshot = self.store.get_snapshot(username)
            if snapshot is None:
                logger.debug(f"Index entry {username} has no snapshot, skipping")
                continue
            snapshots.append(snapshot)
        return snapshots

    def _load_player(self, username: str, operation: str) -> PlayerSnapshot:
        snapshot = self.store.get_snapshot(username)
        if snapshot is None or snapshot.user is None:
            raise RecordNotFoundError(
                f"No snapshot for player {username}",
                record_type="Player",
                record_id=username,
                username=username,
                operation=operation,
            )
        return snapshot

    # ------------------------------------------------------------------
    # Tasks & quests
    # ------------------------------------------------------------------

    def toggle_task(self, username: str, task_id: str) -> ToggleResult:
        """Check or un-check a task and persist the outcome"""
        snapshot = self._load_player(username, "toggle_task")
        result = toggle_task(snapshot, task_id)
        if result.completed is not None:
            self.store.put_snapshot(username, result.snapshot)
        return result

    def accept_quest(self, username: str, quest_id: str) -> quests.QuestActionResult:
        """Accept a quest; conflicts are reported in the result"""
        snapshot = self._load_player(username, "accept_quest")
        result = quests.accept_quest(snapshot.user, snapshot.quests, quest_id)
        if result.success:
            self.store.put_snapshot(
                username, snapshot.model_copy(update={"user": result.user, "quests": result.quests})
            )
        return result

    def abandon_quest(self, username: str, quest_id: str) -> quests.QuestActionResult:
        """Abandon the active quest"""
        snapshot = self._load_player(username, "abandon_quest")
        result = quests.abandon_quest(snapshot.user, snapshot.quests, quest_id)
        if result.success:
            self.store.put_snapshot(
                username, snapshot.model_copy(update={"user": result.user, "quests": result.quests})
            )
        return result

    def create_custom_quest(self, username: str, title: str, requirement_value: int, **kwargs: Any) -> Quest:
        """Create a custom quest and add it to the player's board"""
        snapshot = self._load_player(username, "create_custom_quest")
        quest = quests.create_custom_quest(title, requirement_value, **kwargs)
        self.store.put_snapshot(
            username, snapshot.model_copy(update={"quests": quests.add_quest(snapshot.quests, quest)})
        )
        return quest

    def get_quest_participants(self, quest_id: str) -> List[QuestParticipant]:
        """Players whose current quest is `quest_id`"""
        return [
            QuestParticipant(username=s.user.username, avatar=s.user.display_avatar())
            for s in self.load_all_snapshots()
            if s.user is not None and s.user.current_quest_id == quest_id
        ]

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def get_period_progress(self, username: str, period: Period, now: DateLike = None) -> Dict[str, Any]:
        """
        Period statistics plus a pace-based motivation message.

        Returns:
            {
                'completed': int,
                'target': int,
                'absolute_percent': int,  # progress bar
                'pace_percent': int,      # motivation
                'message': str
            }
            or an empty dict when the player is unknown
        """
        snapshot = self.store.get_snapshot(username)
        if snapshot is None or snapshot.user is None:
            return {}

        user = snapshot.user
        progress = compute_progress(snapshot.tasks, user.settings.daily_min, period, now)
        return {
            "completed": progress.completed,
            "target": progress.target,
            "absolute_percent": progress.absolute_percent,
            "pace_percent": progress.pace_percent,
            "message": get_motivation_message(progress.pace_percent, user.communication_style),
        }

    # ------------------------------------------------------------------
    # Leaderboard
    # ------------------------------------------------------------------

    def get_leaderboard(self, username: str, today: DateLike = None) -> List[LeaderboardPlayer]:
        """Global leaderboard seen by `username`; empty when the viewer is unknown"""
        viewer_snapshot = self.store.get_snapshot(username)
        viewer = viewer_snapshot.user if viewer_snapshot else None
        if viewer is None:
            logger.debug(f"No current user {username}, returning empty leaderboard")
            return []
        return leaderboard.build_leaderboard(viewer, self.load_all_snapshots(), today)

    def get_friends_leaderboard(self, username: str, today: DateLike = None) -> List[LeaderboardPlayer]:
        """The viewer and their friends, re-ranked"""
        return leaderboard.friends_leaderboard(self.get_leaderboard(username, today))

    def get_percentile_label(self, username: str, today: DateLike = None) -> str:
        """'Top N%' label for the player"""
        viewer_snapshot = self.store.get_snapshot(username)
        viewer = viewer_snapshot.user if viewer_snapshot else None
        return leaderboard.get_user_percentile_label(viewer, self.load_all_snapshots(), today)

    def find_player(self, username: str, unique_id: str) -> Optional[LeaderboardPlayer]:
        """Search the board by public code"""
        return leaderboard.find_player_by_unique_id(self.get_leaderboard(username), unique_id)

    # ------------------------------------------------------------------
    # Social
    # ------------------------------------------------------------------

    def send_friend_request(self, username: str, target_username: str) -> bool:
        """
        Deliver a friend request to another player's snapshot.

        Returns:
            True when a new request was stored
        """
        sender = self._load_player(username, "send_friend_request").user
        target_snapshot = self.store.get_snapshot(target_username)
        if target_snapshot is None or target_snapshot.user is None:
            logger.debug(f"Friend request target {target_username} not found")
            return False

        updated = social.send_friend_request(sender, target_snapshot.user)
        if updated is target_snapshot.user:
            return False
        self.store.put_snapshot(target_username, target_snapshot.model_copy(update={"user": updated}))
        return True

    def accept_friend_request(self, username: str, from_username: str) -> PlayerSnapshot:
        """Accept a request and record the friendship on both snapshots"""
        snapshot = self._load_player(username, "accept_friend_request")
        other_snapshot = self.store.get_snapshot(from_username)
        other = other_snapshot.user if other_snapshot else None

        new_user, new_other = social.accept_friend_request(snapshot.user, from_username, other)
        return self._save_pair(username, snapshot, new_user, from_username, other_snapshot, new_other)

    def reject_friend_request(self, username: str, from_username: str) -> PlayerSnapshot:
        """Reject a pending request"""
        snapshot = self._load_player(username, "reject_friend_request")
        updated = snapshot.model_copy(
            update={"user": social.reject_friend_request(snapshot.user, from_username)}
        )
        self.store.put_snapshot(username, updated)
        return updated

    def remove_friend(self, username: str, friend_username: str) -> PlayerSnapshot:
        """Remove a friendship from both snapshots"""
        snapshot = self._load_player(username, "remove_friend")
        other_snapshot = self.store.get_snapshot(friend_username)
        other = other_snapshot.user if other_snapshot else None

        new_user, new_other = social.remove_friend(snapshot.user, friend_username, other)
        return self._save_pair(username, snapshot, new_user, friend_username, other_snapshot, new_other)

    def update_privacy(self, username: str, mode: PrivacyMode) -> PlayerSnapshot:
        """Change the player's privacy mode"""
        snapshot = self._load_player(username, "update_privacy")
        updated = snapshot.model_copy(update={"user": social.update_privacy(snapshot.user, mode)})
        self.store.put_snapshot(username, updated)
        return updated

    def _save_pair(self, username, snapshot, new_user, other_username, other_snapshot, new_other):
        updated = snapshot.model_copy(update={"user": new_user})
        self.store.put_snapshot(username, updated)
        if other_snapshot is not None and new_other is not None and new_other is not other_snapshot.user:
            self.store.put_snapshot(other_username, other_snapshot.model_copy(update={"user": new_other}))
        return updated
