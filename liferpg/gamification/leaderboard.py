"""
Leaderboard & Ranking Engine

Builds a ranked, privacy-filtered view of every known player.

Ranking:
- Key: efficiency = completed / (completed + missed) daily tasks, in percent.
  A player with no history at all scores 100.
- Efficiencies within 0.1 of each other count as tied and are ordered by level,
  highest first. Remaining ties keep the input order.
- Percentile is rank / total players, shown as a "top N%" label.

Privacy is applied relative to the viewer. Hidden rows keep their rank, level
and efficiency; only the unique id and avatar are masked.
"""

import functools
import logging
import math
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from liferpg.gamification.progress import count_missed_tasks
from liferpg.models import LeaderboardPlayer, PlayerSnapshot, PrivacyMode, User
from liferpg.utils.datetime_helpers import as_date

logger = logging.getLogger(__name__)

HIDDEN_UNIQUE_ID = "HIDDEN"
LOCK_AVATAR = "🔒"
UNKNOWN_UNIQUE_ID = "???"
EFFICIENCY_TIE_TOLERANCE = 0.1


def calculate_efficiency(snapshot: PlayerSnapshot, today: Optional[Union[date, datetime]] = None) -> float:
    """Completed share of completed + missed daily tasks, 0-100"""
    if snapshot.user is None:
        return 100.0
    completed = snapshot.user.total_tasks_completed or 0
    missed = count_missed_tasks(snapshot.tasks, today)
    if completed + missed <= 0:
        return 100.0
    return completed * 100 / (completed + missed)


def format_percentile(rank: int, total_players: int) -> str:
    """
    "Top N%" value for a rank

    - <= 0.1%  -> "0.1%"
    - <= 1%    -> "1%"
    - <= 5%    -> one decimal, e.g. "2.5%"
    - above    -> rounded up to a whole percent, e.g. "34%"
    """
    if total_players <= 0:
        return "100%"
    percentile = rank / total_players * 100
    if percentile <= 0.1:
        return "0.1%"
    if percentile <= 1:
        return "1%"
    if percentile <= 5:
        return f"{percentile:.1f}%"
    return f"{math.ceil(percentile)}%"


def _compare_players(a: dict, b: dict) -> int:
    """Higher efficiency first; near-equal efficiency falls back to higher level"""
    if abs(b["efficiency"] - a["efficiency"]) > EFFICIENCY_TIE_TOLERANCE:
        return -1 if a["efficiency"] > b["efficiency"] else 1
    return b["level"] - a["level"]


def _is_hidden(privacy_mode: PrivacyMode, is_user: bool, is_friend: bool) -> bool:
    if is_user:
        return False
    if privacy_mode == PrivacyMode.PRIVATE:
        return True
    if privacy_mode == PrivacyMode.FRIENDS:
        return not is_friend
    return False


def build_leaderboard(
    viewer: Optional[User],
    snapshots: Iterable[PlayerSnapshot],
    today: Optional[Union[date, datetime]] = None
) -> List[LeaderboardPlayer]:
    """
    Rank all players and apply privacy relative to the viewer

    Args:
        viewer: The player looking at the board; None yields an empty board
        snapshots: All known player snapshots, in any order
        today: Reference day for missed-task counting

    Returns:
        Rows sorted by rank
    """
    if viewer is None:
        return []

    today = as_date(today)

    # First pass: efficiency per player
    entries = []
    for snapshot in snapshots:
        player = snapshot.user
        if player is None:
            logger.debug("Skipping snapshot without a user")
            continue
        entries.append({
            "user": player,
            "level": player.level,
            "efficiency": calculate_efficiency(snapshot, today),
            "snapshot": snapshot,
        })

    # sorted() is stable, so residual ties keep input order
    entries = sorted(entries, key=functools.cmp_to_key(_compare_players))
    total_players = len(entries)

    # Second pass: rank, percentile and privacy
    rows: List[LeaderboardPlayer] = []
    for index, entry in enumerate(entries):
        player: User = entry["user"]
        rank = index + 1
        is_user = player.username == viewer.username
        is_friend = player.username in viewer.friends
        is_hidden = _is_hidden(player.privacy_mode, is_user, is_friend)

        rows.append(LeaderboardPlayer(
            rank=rank,
            username=player.username,
            unique_id=HIDDEN_UNIQUE_ID if is_hidden else (player.unique_id or UNKNOWN_UNIQUE_ID),
            level=player.level,
            efficiency=math.floor(entry["efficiency"] + 0.5),
            is_user=is_user,
            is_friend=is_friend,
            is_hidden=is_hidden,
            percentile=format_percentile(rank, total_players),
            avatar=LOCK_AVATAR if is_hidden else player.display_avatar(),
            source_snapshot=entry["snapshot"],
        ))

    logger.debug(f"Built leaderboard of {total_players} players for {viewer.username}")
    return rows


def friends_leaderboard(rows: List[LeaderboardPlayer]) -> List[LeaderboardPlayer]:
    """Only the viewer and their friends, re-ranked from 1"""
    circle = [row for row in rows if row.is_friend or row.is_user]
    return [row.model_copy(update={"rank": index + 1}) for index, row in enumerate(circle)]


def find_player_by_unique_id(rows: List[LeaderboardPlayer], unique_id: str) -> Optional[LeaderboardPlayer]:
    """Case-insensitive lookup by public code; hidden players cannot be found"""
    wanted = (unique_id or "").strip().upper()
    if not wanted:
        return None
    return next(
        (row for row in rows if not row.is_hidden and row.unique_id.upper() == wanted),
        None
    )


def get_user_percentile_label(
    viewer: Optional[User],
    snapshots: Iterable[PlayerSnapshot],
    today: Optional[Union[date, datetime]] = None
) -> str:
    """
    "Top N%" label for the viewer

    Rebuilds the whole board, which is fine for the handful of players a
    local install knows about.
    """
    if viewer is None:
        return "N/A"
    rows = build_leaderboard(viewer, snapshots, today)
    me = next((row for row in rows if row.is_user), None)
    return f"Top {me.percentile}" if me else "N/A"
