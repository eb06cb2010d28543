from __future__ import annotations

from enum import StrEnum


class UserRole(StrEnum):
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class GroupType(StrEnum):
    WORLD = "world"
    CUSTOM = "custom"
    CLUB = "club"


class NotificationType(StrEnum):
    LIKE = "like"
    COMMENT = "comment"
    ANNOUNCEMENT = "announcement"
    OD_STATUS = "od_status"
    EVENT_REMINDER = "event_reminder"
    MESSAGE = "message"
    QUERY_RESPONSE = "query_response"
