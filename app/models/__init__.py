from app.models.friendship import Friendship, FriendshipStatus
from app.models.user import User

__all__ = ["Friendship", "FriendshipStatus", "User"]
