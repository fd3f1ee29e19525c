"""
Social System

Friend requests, friendships and privacy settings.

Friendship is symmetric: accepting a request adds each player to the other's
friends, and removing a friend removes both edges. The `other` side is
optional in every call because the other player's snapshot may be missing
from the shared store; in that case only the local side changes.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from liferpg.models import FriendRequest, PrivacyMode, User

logger = logging.getLogger(__name__)


def has_pending_request(user: User, from_username: str) -> bool:
    """Whether `user` has an unanswered request from `from_username`"""
    return any(r.from_username == from_username for r in user.friend_requests)


def send_friend_request(sender: User, target: User) -> User:
    """
    Deliver a friend request from `sender` into `target`'s inbox

    Returns the updated target. Requests to yourself, to an existing friend,
    or duplicating a pending request leave the target unchanged.
    """
    if sender.username == target.username:
        logger.debug(f"{sender.username} cannot befriend themselves")
        return target
    if target.username in sender.friends or sender.username in target.friends:
        logger.debug(f"{sender.username} and {target.username} are already friends")
        return target
    if has_pending_request(target, sender.username):
        logger.debug(f"Request from {sender.username} to {target.username} already pending")
        return target

    request = FriendRequest(
        from_username=sender.username,
        from_id=sender.unique_id,
        from_avatar=sender.display_avatar(),
        created_at=datetime.now(timezone.utc),
    )
    logger.info(f"Friend request sent from {sender.username} to {target.username}")
    return target.model_copy(update={"friend_requests": [*target.friend_requests, request]})


def accept_friend_request(
    user: User,
    from_username: str,
    other: Optional[User] = None
) -> Tuple[User, Optional[User]]:
    """
    Accept a pending request, creating a symmetric friendship

    Args:
        user: Player accepting the request
        from_username: Sender of the request
        other: Sender's record, updated with the reverse edge when given

    Returns:
        (user, other) after the change; unchanged when no request is pending
    """
    if not has_pending_request(user, from_username):
        logger.debug(f"No pending request from {from_username} for {user.username}")
        return user, other

    new_user = user.model_copy(update={
        "friend_requests": [r for r in user.friend_requests if r.from_username != from_username],
        "friends": user.friends | {from_username},
    })

    new_other = other
    if other is not None:
        new_other = other.model_copy(update={"friends": other.friends | {user.username}})

    logger.info(f"{user.username} and {from_username} are now friends")
    return new_user, new_other


def reject_friend_request(user: User, from_username: str) -> User:
    """Drop a pending request without creating a friendship"""
    return user.model_copy(update={
        "friend_requests": [r for r in user.friend_requests if r.from_username != from_username]
    })


def remove_friend(
    user: User,
    username: str,
    other: Optional[User] = None
) -> Tuple[User, Optional[User]]:
    """
    End a friendship on both sides

    Pending friend requests are left untouched.
    """
    new_user = user.model_copy(update={"friends": user.friends - {username}})

    new_other = other
    if other is not None:
        new_other = other.model_copy(update={"friends": other.friends - {user.username}})

    logger.info(f"{user.username} removed {username} from friends")
    return new_user, new_other


def update_privacy(user: User, mode: PrivacyMode) -> User:
    """Change who can see the player's identity on the leaderboard"""
    return user.model_copy(update={"privacy_mode": PrivacyMode(mode)})
