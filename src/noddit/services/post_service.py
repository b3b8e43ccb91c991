"""Business logic for posts: lookup, listings, news feed, mutations and votes."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from noddit.db.time import utcnow
from noddit.models.post import Post
from noddit.models.subnoddit import Subnoddit
from noddit.models.user import User
from noddit.models.vote import VOTE_NONE, VOTE_UP
from noddit.repositories.post_repo import PostRepository
from noddit.schemas.common import MessageResponse
from noddit.schemas.post import (
    NewsFeedFilter,
    PostCreate,
    PostEnvelope,
    PostFilter,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from noddit.schemas.subnoddit import SubnodditSummary
from noddit.schemas.user import UserSummary
from noddit.schemas.vote import VoteCreate
from noddit.services import subnoddit_service, user_service
from noddit.services.exceptions import InternalServerError, NotFoundError, UnauthorizedError

__all__ = ["PostService", "to_post_response"]

logger = logging.getLogger(__name__)


def to_post_response(post: Post, votes: int) -> PostResponse:
    """Convert a Post ORM instance and its vote sum to an API schema."""
    return PostResponse(
        id=post.id,
        title=post.title,
        text=post.text,
        attachment=post.attachment,
        votes=votes,
        user=UserSummary.model_validate(post.user),
        subnoddit=SubnodditSummary.model_validate(post.subnoddit),
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


class PostService:
    """Post operations bound to one database session.

    Every failure is raised as a :class:`~noddit.services.exceptions.ServiceError`
    subclass; callers map them to transport-level responses.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repo = PostRepository(session)

    def _require_user(self, user_id: int) -> User:
        user = user_service.get_user(self.session, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _require_subnoddit(self, subnoddit_id: int) -> Subnoddit:
        subnoddit = subnoddit_service.get_subnoddit(self.session, subnoddit_id)
        if subnoddit is None:
            raise NotFoundError("Subnoddit not found")
        return subnoddit

    def _require_post(self, post_id: int) -> Post:
        post = self.repo.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def _list(
        self,
        filters: NewsFeedFilter,
        *,
        user_id: int | None = None,
        user_ids: Sequence[int] | None = None,
    ) -> PostListResponse:
        criteria = {
            "user_id": user_id,
            "user_ids": user_ids,
            "subnoddit_id": filters.subnoddit_id,
        }
        total = self.repo.count(**criteria)
        rows = self.repo.list_with_votes(
            **criteria,
            limit=filters.limit,
            offset=filters.offset,
            by_votes=filters.by_votes,
        )
        return PostListResponse(
            posts=[to_post_response(post, votes) for post, votes in rows],
            posts_count=total,
        )

    def find_one(self, post_id: int) -> PostEnvelope:
        """Return a post together with its vote sum."""
        post = self._require_post(post_id)
        return PostEnvelope(post=to_post_response(post, self.repo.vote_sum(post.id)))

    def find_many(self, filters: PostFilter) -> PostListResponse:
        """List posts, optionally by author username or by subnoddit.

        Raises:
            InternalServerError: If both ``username`` and ``subnoddit_id`` are set.
            NotFoundError: If the username or subnoddit does not resolve.
        """
        if filters.username is not None and filters.subnoddit_id is not None:
            raise InternalServerError("Wrong filters")

        author_id: int | None = None
        if filters.username is not None:
            author = user_service.get_user_by_username(self.session, filters.username)
            if author is None:
                raise NotFoundError("User not found")
            author_id = author.id
        if filters.subnoddit_id is not None:
            self._require_subnoddit(filters.subnoddit_id)

        return self._list(filters, user_id=author_id)

    def news_feed(self, user_id: int, filters: NewsFeedFilter) -> PostListResponse:
        """List posts written by the users that ``user_id`` follows."""
        followed_ids = user_service.get_followed_ids(self.session, user_id)
        if filters.subnoddit_id is not None:
            self._require_subnoddit(filters.subnoddit_id)
        if not followed_ids:
            return PostListResponse(posts=[], posts_count=0)
        return self._list(filters, user_ids=followed_ids)

    def create(self, user_id: int, data: PostCreate) -> PostEnvelope:
        """Create a post owned by ``user_id`` in the requested subnoddit."""
        user = self._require_user(user_id)
        subnoddit = self._require_subnoddit(data.subnoddit_id)

        post = self.repo.create(
            user=user,
            subnoddit=subnoddit,
            title=data.title,
            text=data.text,
            attachment=data.attachment,
        )
        self.session.commit()
        self.session.refresh(post)
        logger.info("User %s created post %s in subnoddit %s", user.id, post.id, subnoddit.id)
        return PostEnvelope(post=to_post_response(post, 0))

    def update(self, user_id: int, post_id: int, data: PostUpdate) -> PostEnvelope:
        """Apply the supplied fields to a post owned by ``user_id``."""
        post = self._require_post(post_id)
        if post.user_id != user_id:
            raise UnauthorizedError("You can only update your own posts")
        post.updated_at = utcnow()

        changes = data.model_dump(exclude_unset=True)
        subnoddit_id = changes.pop("subnoddit_id", None)
        if subnoddit_id is not None:
            post.subnoddit = self._require_subnoddit(subnoddit_id)
        for key, value in changes.items():
            setattr(post, key, value)

        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        logger.info("User %s updated post %s", user_id, post.id)
        return PostEnvelope(post=to_post_response(post, self.repo.vote_sum(post.id)))

    def delete(self, user_id: int, post_id: int) -> MessageResponse:
        """Remove a post owned by ``user_id``.

        Raises:
            InternalServerError: If anything other than exactly one row was
                removed; the transaction is rolled back first.
        """
        post = self._require_post(post_id)
        if post.user_id != user_id:
            raise UnauthorizedError("You can only delete your own posts")

        affected = self.repo.delete(post.id)
        if affected != 1:
            self.session.rollback()
            logger.error("Deleting post %s affected %s rows; rolled back", post_id, affected)
            raise InternalServerError("Post could not be removed")

        self.session.commit()
        logger.info("User %s removed post %s", user_id, post_id)
        return MessageResponse(message="Post successfully removed.")

    def vote(self, user_id: int, post_id: int, data: VoteCreate) -> MessageResponse:
        """Cast, switch or reset the vote ``user_id`` holds on a post.

        A first vote stores the direction. Repeating the stored direction
        resets it to 0 without deleting the row. Any other request, from a
        reset or from the opposite direction, stores the new direction.
        """
        self._require_user(user_id)
        post = self._require_post(post_id)
        label = "upvoted" if data.direction == VOTE_UP else "downvoted"

        existing = self.repo.get_vote(user_id, post.id)
        if existing is None:
            self.repo.add_vote(user_id=user_id, post_id=post.id, direction=data.direction)
            message = f"Post {label} successfully"
        elif existing.direction == data.direction:
            existing.direction = VOTE_NONE
            message = "Post vote reset"
        else:
            existing.direction = data.direction
            message = f"Post {label}"

        self.session.commit()
        logger.info("User %s vote on post %s: %s", user_id, post.id, message)
        return MessageResponse(message=message)
