from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, Index, String, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_chat.infrastructure.db.base import Base


class GroupChatModel(Base):
    __tablename__ = "group_chats"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default=text("''"))
    type: Mapped[str] = mapped_column(String(20), nullable=False)  # world | custom | club
    club_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_by: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )

    members = relationship("GroupMemberModel", back_populates="group", lazy="noload")

    __table_args__ = (
        # at most one world channel
        Index(
            "uq_group_chats_world",
            "type",
            unique=True,
            postgresql_where=text("type = 'world'"),
        ),
        Index("ix_group_chats_created_by", "created_by"),
    )
