# mypy: ignore-errors
# tests/v1/test_post_service.py
"""Tests for the post service: lookup, listings, feed, mutations and votes."""

from datetime import datetime
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from noddit.models import Post, PostVote
from noddit.repositories.post_repo import PostRepository
from noddit.schemas.post import NewsFeedFilter, PostCreate, PostFilter, PostUpdate
from noddit.schemas.vote import VoteCreate
from noddit.services.exceptions import InternalServerError, NotFoundError, UnauthorizedError
from noddit.services.post_service import PostService


@pytest.fixture()
def service(db_session) -> PostService:
    return PostService(db_session)


@pytest.fixture()
def ranked(posts, user_one, user_two, user_three, cast_vote) -> dict[int, int]:
    """Give the posts distinct vote totals and return ``{post_id: total}``."""
    cast_vote(user_one, posts[0], 1)
    cast_vote(user_two, posts[0], 1)
    cast_vote(user_one, posts[1], -1)
    cast_vote(user_three, posts[3], 1)
    cast_vote(user_one, posts[4], 1)
    cast_vote(user_three, posts[4], 1)
    cast_vote(user_two, posts[5], -1)
    return {
        posts[0].id: 2,
        posts[1].id: -1,
        posts[2].id: 0,
        posts[3].id: 1,
        posts[4].id: 2,
        posts[5].id: -1,
    }


def test_find_one_returns_post_with_vote_sum(service, posts, ranked) -> None:
    post = posts[0]

    result = service.find_one(post.id)

    assert result.post.id == post.id
    assert result.post.title == post.title
    assert result.post.votes == 2
    assert result.post.user.username == "user_one"
    assert result.post.subnoddit.name == "python"


def test_find_one_counts_reset_votes_as_zero(service, posts, user_one, user_two, cast_vote) -> None:
    cast_vote(user_one, posts[0], 0)
    cast_vote(user_two, posts[0], -1)

    assert service.find_one(posts[0].id).post.votes == -1


def test_find_one_not_found(service) -> None:
    with pytest.raises(NotFoundError, match="Post not found"):
        service.find_one(9999)


def test_find_many_without_filter(service, posts) -> None:
    result = service.find_many(PostFilter())

    assert result.posts_count == len(posts)
    # Newest first when no vote ordering is requested.
    assert [p.id for p in result.posts] == [p.id for p in reversed(posts)]
    assert all(p.votes == 0 for p in result.posts)


def test_find_many_by_username_with_limit_and_offset(service, posts, user_one) -> None:
    filters = PostFilter(username=user_one.username, limit=2, offset=1)
    authored = sorted((p.id for p in posts if p.user_id == user_one.id), reverse=True)

    result = service.find_many(filters)

    assert result.posts_count == len(authored)
    assert [p.id for p in result.posts] == authored[1:3]
    assert all(p.user.id == user_one.id for p in result.posts)


def test_find_many_by_subnoddit_with_limit_and_offset(service, posts, subnoddit_one) -> None:
    filters = PostFilter(subnoddit_id=subnoddit_one.id, limit=2, offset=1)
    in_subnoddit = sorted((p.id for p in posts if p.subnoddit_id == subnoddit_one.id), reverse=True)

    result = service.find_many(filters)

    assert result.posts_count == len(in_subnoddit)
    assert [p.id for p in result.posts] == in_subnoddit[1:3]


def test_find_many_rejects_username_and_subnoddit_together(service) -> None:
    with pytest.raises(InternalServerError, match="Wrong filters"):
        service.find_many(PostFilter(username="test", subnoddit_id=1))


def test_find_many_user_not_found(service) -> None:
    with pytest.raises(NotFoundError, match="User not found"):
        service.find_many(PostFilter(username="nobody"))


def test_find_many_subnoddit_not_found(service) -> None:
    with pytest.raises(NotFoundError, match="Subnoddit not found"):
        service.find_many(PostFilter(subnoddit_id=9999))


def test_find_many_most_voted_on_top(service, ranked) -> None:
    posts = service.find_many(PostFilter(by_votes="DESC")).posts

    votes = [p.votes for p in posts]
    assert votes == sorted(votes, reverse=True)
    assert posts[0].votes == 2
    assert posts[-1].votes == -1


def test_find_many_least_voted_on_top(service, ranked) -> None:
    posts = service.find_many(PostFilter(by_votes="ASC")).posts

    votes = [p.votes for p in posts]
    assert votes == sorted(votes)
    assert posts[0].votes == -1
    assert posts[-1].votes == 2


def test_find_many_ranks_before_paginating(service, ranked) -> None:
    result = service.find_many(PostFilter(by_votes="DESC", limit=2))

    assert result.posts_count == len(ranked)
    assert [p.votes for p in result.posts] == [2, 2]


def test_news_feed_without_filter(service, posts, user_one, user_two, following) -> None:
    followed_posts = sorted((p.id for p in posts if p.user_id == user_two.id), reverse=True)

    result = service.news_feed(user_one.id, NewsFeedFilter())

    assert result.posts_count == len(followed_posts)
    assert [p.id for p in result.posts] == followed_posts


def test_news_feed_with_subnoddit_limit_and_offset(
    service, posts, user_one, user_two, subnoddit_one, following
) -> None:
    filters = NewsFeedFilter(subnoddit_id=subnoddit_one.id, limit=2, offset=0)
    matching = sorted(
        (p.id for p in posts if p.user_id == user_two.id and p.subnoddit_id == subnoddit_one.id),
        reverse=True,
    )

    result = service.news_feed(user_one.id, filters)

    assert result.posts_count == len(matching)
    assert [p.id for p in result.posts] == matching[:2]


def test_news_feed_subnoddit_not_found(service, user_one, following) -> None:
    with pytest.raises(NotFoundError, match="Subnoddit not found"):
        service.news_feed(user_one.id, NewsFeedFilter(subnoddit_id=9999))


def test_news_feed_is_empty_when_following_nobody(service, posts, user_one) -> None:
    result = service.news_feed(user_one.id, NewsFeedFilter())

    assert result.posts == []
    assert result.posts_count == 0


def test_news_feed_most_voted_on_top(service, ranked, user_one, following) -> None:
    posts = service.news_feed(user_one.id, NewsFeedFilter(by_votes="DESC")).posts

    assert [p.votes for p in posts] == [2, 1, -1]


def test_news_feed_least_voted_on_top(service, ranked, user_one, following) -> None:
    posts = service.news_feed(user_one.id, NewsFeedFilter(by_votes="ASC")).posts

    assert [p.votes for p in posts] == [-1, 1, 2]


def test_create_post_without_optional_fields(service, user_one, subnoddit_one) -> None:
    data = PostCreate(title="Hello", subnoddit_id=subnoddit_one.id)

    post = service.create(user_one.id, data).post

    assert post.id is not None
    assert post.title == "Hello"
    assert post.text is None
    assert post.attachment is None
    assert post.subnoddit.id == subnoddit_one.id
    assert post.user.id == user_one.id
    assert post.votes == 0


def test_create_post_with_optional_fields(service, db_session, user_one, subnoddit_one) -> None:
    data = PostCreate(
        title="Hello",
        text="Some **markdown**",
        attachment="https://example.com/cat.png",
        subnodditId=subnoddit_one.id,
    )

    post = service.create(user_one.id, data).post

    assert post.text == "Some **markdown**"
    assert post.attachment == "https://example.com/cat.png"
    stored = db_session.get(Post, post.id)
    assert stored.user_id == user_one.id
    assert stored.subnoddit_id == subnoddit_one.id


def test_create_post_user_not_found(service, subnoddit_one) -> None:
    data = PostCreate(title="Hello", subnoddit_id=subnoddit_one.id)

    with pytest.raises(NotFoundError, match="User not found"):
        service.create(9999, data)


def test_create_post_subnoddit_not_found(service, user_one) -> None:
    data = PostCreate(title="Hello", subnoddit_id=9999)

    with pytest.raises(NotFoundError, match="Subnoddit not found"):
        service.create(user_one.id, data)


def test_update_post(service, posts, user_one, subnoddit_two, cast_vote, user_two) -> None:
    post = posts[0]
    cast_vote(user_two, post, 1)
    data = PostUpdate(title="Edited", text="New body", subnoddit_id=subnoddit_two.id)

    updated = service.update(user_one.id, post.id, data).post

    assert updated.id == post.id
    assert updated.title == "Edited"
    assert updated.text == "New body"
    assert updated.subnoddit.id == subnoddit_two.id
    assert updated.votes == 1


def test_update_post_keeps_unset_fields(service, posts, user_one) -> None:
    post = posts[0]

    updated = service.update(user_one.id, post.id, PostUpdate(title="Only title")).post

    assert updated.title == "Only title"
    assert updated.text == "Body of post 1"
    assert updated.subnoddit.id == post.subnoddit_id


STALE_TIMESTAMP = datetime(2000, 1, 1)


def _mark_stale(db_session, post) -> None:
    post.updated_at = STALE_TIMESTAMP
    db_session.commit()


def test_update_post_bumps_updated_at(service, db_session, posts, user_one) -> None:
    _mark_stale(db_session, posts[0])

    updated = service.update(user_one.id, posts[0].id, PostUpdate(title="Edited")).post

    assert updated.updated_at.replace(tzinfo=None) > STALE_TIMESTAMP


def test_update_post_without_changes_bumps_updated_at(service, db_session, posts, user_one) -> None:
    _mark_stale(db_session, posts[0])

    updated = service.update(user_one.id, posts[0].id, PostUpdate()).post

    assert updated.title == "Post 1"
    assert updated.updated_at.replace(tzinfo=None) > STALE_TIMESTAMP


def test_update_post_same_subnoddit_bumps_updated_at(service, db_session, posts, user_one) -> None:
    post = posts[0]
    _mark_stale(db_session, post)

    updated = service.update(user_one.id, post.id, PostUpdate(subnoddit_id=post.subnoddit_id)).post

    assert updated.subnoddit.id == post.subnoddit_id
    assert updated.updated_at.replace(tzinfo=None) > STALE_TIMESTAMP


def test_update_post_not_found(service, user_one) -> None:
    with pytest.raises(NotFoundError, match="Post not found"):
        service.update(user_one.id, 9999, PostUpdate(title="Edited"))


def test_update_post_by_non_author(service, posts, user_two) -> None:
    with pytest.raises(UnauthorizedError):
        service.update(user_two.id, posts[0].id, PostUpdate(title="Edited"))


def test_update_post_by_non_author_with_bad_subnoddit(service, posts, user_two) -> None:
    with pytest.raises(UnauthorizedError):
        service.update(user_two.id, posts[0].id, PostUpdate(subnoddit_id=9999))


def test_update_post_subnoddit_not_found(service, posts, user_one) -> None:
    with pytest.raises(NotFoundError, match="Subnoddit not found"):
        service.update(user_one.id, posts[0].id, PostUpdate(subnoddit_id=9999))


def test_update_rejects_null_title() -> None:
    with pytest.raises(ValidationError):
        PostUpdate(title=None)


def test_delete_post(service, db_session, posts, user_one, user_two, cast_vote) -> None:
    post_id = posts[0].id
    cast_vote(user_two, posts[0], 1)

    result = service.delete(user_one.id, post_id)

    assert result.message == "Post successfully removed."
    assert db_session.query(Post).filter(Post.id == post_id).count() == 0
    assert db_session.query(PostVote).filter(PostVote.post_id == post_id).count() == 0


def test_delete_post_not_found(service, user_one) -> None:
    with pytest.raises(NotFoundError, match="Post not found"):
        service.delete(user_one.id, 9999)


def test_delete_post_by_non_author(service, db_session, posts, user_two) -> None:
    with pytest.raises(UnauthorizedError):
        service.delete(user_two.id, posts[0].id)
    assert db_session.get(Post, posts[0].id) is not None


def test_delete_post_with_unexpected_affected_count(
    service, db_session, posts, user_one, user_two, cast_vote
) -> None:
    post_id = posts[0].id
    cast_vote(user_two, posts[0], 1)
    real_delete = PostRepository.delete

    def _delete_reporting_two_rows(self, target_id: int) -> int:
        real_delete(self, target_id)
        return 2

    with patch.object(PostRepository, "delete", _delete_reporting_two_rows):
        with pytest.raises(InternalServerError, match="Post could not be removed"):
            service.delete(user_one.id, post_id)

    assert db_session.query(Post).filter(Post.id == post_id).count() == 1
    assert db_session.query(PostVote).filter(PostVote.post_id == post_id).count() == 1
    assert service.find_one(post_id).post.votes == 1


def test_upvote_post(service, db_session, posts, user_one) -> None:
    result = service.vote(user_one.id, posts[0].id, VoteCreate(direction=1))

    assert result.message == "Post upvoted successfully"
    assert db_session.get(PostVote, (user_one.id, posts[0].id)).direction == 1


def test_downvote_post(service, posts, user_one) -> None:
    result = service.vote(user_one.id, posts[0].id, VoteCreate(direction=-1))

    assert result.message == "Post downvoted successfully"
    assert service.find_one(posts[0].id).post.votes == -1


@pytest.mark.parametrize("direction", [1, -1])
def test_repeating_vote_resets_it(service, db_session, posts, user_one, cast_vote, direction) -> None:
    cast_vote(user_one, posts[0], direction)

    result = service.vote(user_one.id, posts[0].id, VoteCreate(direction=direction))

    assert result.message == "Post vote reset"
    vote = db_session.get(PostVote, (user_one.id, posts[0].id))
    assert vote is not None
    assert vote.direction == 0
    assert service.find_one(posts[0].id).post.votes == 0


def test_upvote_after_reset(service, db_session, posts, user_one, cast_vote) -> None:
    cast_vote(user_one, posts[0], 0)

    result = service.vote(user_one.id, posts[0].id, VoteCreate(direction=1))

    assert result.message == "Post upvoted"
    assert db_session.get(PostVote, (user_one.id, posts[0].id)).direction == 1


def test_downvote_after_reset(service, db_session, posts, user_one, cast_vote) -> None:
    cast_vote(user_one, posts[0], 0)

    result = service.vote(user_one.id, posts[0].id, VoteCreate(direction=-1))

    assert result.message == "Post downvoted"
    assert db_session.get(PostVote, (user_one.id, posts[0].id)).direction == -1


def test_switching_vote_direction(service, posts, user_one, cast_vote) -> None:
    cast_vote(user_one, posts[0], 1)

    result = service.vote(user_one.id, posts[0].id, VoteCreate(direction=-1))

    assert result.message == "Post downvoted"
    assert service.find_one(posts[0].id).post.votes == -1


def test_vote_user_not_found(service, posts) -> None:
    with pytest.raises(NotFoundError, match="User not found"):
        service.vote(9999, posts[0].id, VoteCreate(direction=1))


def test_vote_post_not_found(service, user_one) -> None:
    with pytest.raises(NotFoundError, match="Post not found"):
        service.vote(user_one.id, 9999, VoteCreate(direction=1))


@pytest.mark.parametrize("direction", [0, 2, 999])
def test_vote_direction_must_be_up_or_down(direction) -> None:
    with pytest.raises(ValidationError):
        VoteCreate(direction=direction)
