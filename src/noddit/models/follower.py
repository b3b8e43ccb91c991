# src/noddit/models/follower.py
"""Directional follower edges between users."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from noddit.db.session import Base


class Follower(Base):
    """Edge meaning ``follower_id`` follows ``followed_id``."""

    __tablename__ = "follower"
    __table_args__ = (
        CheckConstraint("follower_id <> followed_id", name="ck_follower_not_self"),
        Index("ix_follower_followed_id", "followed_id"),
    )

    follower_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    followed_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
