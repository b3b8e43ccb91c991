# src/noddit/models/vote.py
"""Models capturing voting interactions on posts."""

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
)
from sqlalchemy.orm import Mapped, mapped_column

from noddit.db.session import Base

VOTE_DOWN = -1
VOTE_NONE = 0
VOTE_UP = 1


class PostVote(Base):
    """Per-user vote on a post.

    A reset keeps the row and stores direction 0 so the post's vote sum
    stays a plain ``SUM(direction)``.
    """

    __tablename__ = "post_vote"
    __table_args__ = (
        CheckConstraint("direction IN (-1, 0, 1)", name="ck_post_vote_direction"),
        Index("ix_post_vote_post_id", "post_id"),
    )

    # Composite primary key prevents duplicate votes from the same user.
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # 1 = upvote, -1 = downvote, 0 = reset.
    direction: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=VOTE_NONE)
