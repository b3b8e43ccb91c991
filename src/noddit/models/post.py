# src/noddit/models/post.py
"""SQLAlchemy models for posts and related attributes."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noddit.db.session import Base
from noddit.db.time import utcnow
from noddit.models.subnoddit import Subnoddit
from noddit.models.user import User

TITLE_MAX_LENGTH = 300


class Post(Base):
    """Primary content entity produced by users.

    Every post belongs to exactly one user and one subnoddit. The vote total
    is not stored on the row; it is always the sum of ``post_vote.direction``.
    """

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_user_id", "user_id"),
        Index("ix_post_subnoddit_id", "subnoddit_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Link or media reference; stored verbatim.
    attachment: Mapped[str | None] = mapped_column(Text, nullable=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    subnoddit_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("subnoddit.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    user: Mapped[User] = relationship("User", lazy="joined")
    subnoddit: Mapped[Subnoddit] = relationship("Subnoddit", lazy="joined")
