"""Import all models so Base.metadata sees every table."""
from campus_chat.infrastructure.db.models.chat_message import ChatMessageModel
from campus_chat.infrastructure.db.models.group_chat import GroupChatModel
from campus_chat.infrastructure.db.models.group_member import GroupMemberModel
from campus_chat.infrastructure.db.models.group_message import GroupMessageModel
from campus_chat.infrastructure.db.models.notification import NotificationModel
from campus_chat.infrastructure.db.models.thread import ThreadModel
from campus_chat.infrastructure.db.models.user import UserModel

__all__ = [
    "ChatMessageModel",
    "GroupChatModel",
    "GroupMemberModel",
    "GroupMessageModel",
    "NotificationModel",
    "ThreadModel",
    "UserModel",
]
