"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import ColumnElement, Select, delete, func, select
from sqlalchemy.orm import Session

from noddit.models.post import Post
from noddit.models.subnoddit import Subnoddit
from noddit.models.user import User
from noddit.models.vote import PostVote

__all__ = ["PostRepository"]


def _vote_totals():
    """Per-post ``SUM(direction)`` as a joinable subquery."""
    return (
        select(PostVote.post_id, func.sum(PostVote.direction).label("total"))
        .group_by(PostVote.post_id)
        .subquery("vote_totals")
    )


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier, with its author and subnoddit loaded."""
        result = self.session.execute(select(Post).where(Post.id == post_id))
        return result.scalars().first()

    def vote_sum(self, post_id: int) -> int:
        """Return the sum of vote directions cast on a post."""
        total = self.session.execute(
            select(func.coalesce(func.sum(PostVote.direction), 0)).where(
                PostVote.post_id == post_id
            )
        ).scalar_one()
        return int(total)

    @staticmethod
    def _filter(
        stmt: Select,
        *,
        user_id: int | None = None,
        user_ids: Sequence[int] | None = None,
        subnoddit_id: int | None = None,
    ) -> Select:
        if user_id is not None:
            stmt = stmt.where(Post.user_id == user_id)
        if user_ids is not None:
            stmt = stmt.where(Post.user_id.in_(list(user_ids)))
        if subnoddit_id is not None:
            stmt = stmt.where(Post.subnoddit_id == subnoddit_id)
        return stmt

    def count(
        self,
        *,
        user_id: int | None = None,
        user_ids: Sequence[int] | None = None,
        subnoddit_id: int | None = None,
    ) -> int:
        """Return how many posts match the filter, ignoring pagination."""
        stmt = self._filter(
            select(func.count(Post.id)),
            user_id=user_id,
            user_ids=user_ids,
            subnoddit_id=subnoddit_id,
        )
        return int(self.session.execute(stmt).scalar_one())

    def list_with_votes(
        self,
        *,
        user_id: int | None = None,
        user_ids: Sequence[int] | None = None,
        subnoddit_id: int | None = None,
        limit: int | None = None,
        offset: int = 0,
        by_votes: str | None = None,
    ) -> list[tuple[Post, int]]:
        """Return ``(post, vote_sum)`` pairs for one page of matching posts.

        Args:
            user_id: Restrict to posts by this author.
            user_ids: Restrict to posts by any of these authors.
            subnoddit_id: Restrict to posts in this subnoddit.
            limit: Page size; None returns every match.
            offset: Number of matches to skip.
            by_votes: "DESC" or "ASC" to rank by vote sum before paginating.
                Without it, newest posts come first.
        """
        totals = _vote_totals()
        votes: ColumnElement[int] = func.coalesce(totals.c.total, 0)
        stmt = select(Post, votes.label("votes")).outerjoin(totals, totals.c.post_id == Post.id)
        stmt = self._filter(stmt, user_id=user_id, user_ids=user_ids, subnoddit_id=subnoddit_id)

        if by_votes == "DESC":
            stmt = stmt.order_by(votes.desc(), Post.id.desc())
        elif by_votes == "ASC":
            stmt = stmt.order_by(votes.asc(), Post.id.desc())
        else:
            stmt = stmt.order_by(Post.id.desc())

        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        return [(post, int(total)) for post, total in self.session.execute(stmt).all()]

    def create(
        self,
        *,
        user: User,
        subnoddit: Subnoddit,
        title: str,
        text: str | None = None,
        attachment: str | None = None,
    ) -> Post:
        """Insert a new post and return the flushed ORM instance."""
        post = Post(
            user=user,
            subnoddit=subnoddit,
            title=title,
            text=text,
            attachment=attachment,
        )
        self.session.add(post)
        self.session.flush()
        return post

    def delete(self, post_id: int) -> int:
        """Delete a post and its votes; return the number of post rows removed."""
        self.session.execute(delete(PostVote).where(PostVote.post_id == post_id))
        result = self.session.execute(delete(Post).where(Post.id == post_id))
        return result.rowcount

    def get_vote(self, user_id: int, post_id: int) -> PostVote | None:
        """Return the vote row a user holds on a post, if any."""
        return self.session.get(PostVote, (user_id, post_id))

    def add_vote(self, *, user_id: int, post_id: int, direction: int) -> PostVote:
        """Insert a first vote for a user on a post."""
        vote = PostVote(user_id=user_id, post_id=post_id, direction=direction)
        self.session.add(vote)
        self.session.flush()
        return vote
