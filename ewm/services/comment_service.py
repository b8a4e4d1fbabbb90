"""
Comment service — existence, publication and ownership gate for comments.

Rules
-----
- A comment can only be created on a PUBLISHED event, by an existing user.
- On the user path, only the author may read, edit or delete a comment.
- The admin path reads and deletes any comment without an ownership check.
- Only ``message`` is mutable; author and event are fixed at creation.
- Deletion is a hard delete.

The service never commits: writes are flushed inside the request
transaction owned by ``get_db``, and cached comment pages are dropped only
after that transaction commits.  Domain errors (``EntityNotFoundError``,
``OperationNotAllowedError``) propagate to the HTTP layer unchanged.
"""
import logging
from functools import partial

from ewm.cache import CacheManager, cache as default_cache
from ewm.config import settings
from ewm.database import on_commit
from ewm.errors import EntityNotFoundError, OperationNotAllowedError
from ewm.models import Comment, Event, EventState, User
from ewm.repositories import CommentRepository, EventRepository, UserRepository
from ewm.schemas import CommentRequest, CommentResponse

logger = logging.getLogger(__name__)


def _to_response(comment: Comment) -> CommentResponse:
    return CommentResponse.model_validate(comment)


class CommentService:
    def __init__(
        self,
        comments: CommentRepository,
        users: UserRepository,
        events: EventRepository,
        cache: CacheManager = default_cache,
    ) -> None:
        self.comments = comments
        self.users = users
        self.events = events
        self.cache = cache

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, data: CommentRequest, user_id: int, event_id: int) -> CommentResponse:
        event = await self._get_event(event_id)
        await self._get_user(user_id)
        if event.state != EventState.PUBLISHED:
            raise OperationNotAllowedError("Cannot comment on an unpublished event")

        comment = await self.comments.save(
            Comment(message=data.message, author_id=user_id, event_id=event_id)
        )
        self._invalidate_after_commit(event_id)
        logger.info("Created comment %d by user %d on event %d", comment.id, user_id, event_id)
        return _to_response(comment)

    async def update(self, data: CommentRequest, user_id: int, comment_id: int) -> CommentResponse:
        await self._ensure_user_exists(user_id)
        comment = await self._get_owned_comment(user_id, comment_id)

        comment.message = data.message
        comment = await self.comments.save(comment)
        self._invalidate_after_commit(comment.event_id)
        logger.info("Updated comment %d by user %d", comment_id, user_id)
        return _to_response(comment)

    async def delete_by_user(self, user_id: int, comment_id: int) -> None:
        await self._ensure_user_exists(user_id)
        comment = await self._get_owned_comment(user_id, comment_id)
        event_id = comment.event_id
        await self.comments.delete_by_id(comment_id)
        self._invalidate_after_commit(event_id)
        logger.info("Deleted comment %d by user %d", comment_id, user_id)

    async def delete_by_admin(self, comment_id: int) -> None:
        if not await self.comments.exists_by_id(comment_id):
            raise EntityNotFoundError(Comment, comment_id)
        await self.comments.delete_by_id(comment_id)
        # The event id is not loaded on this path, so drop every event's pages.
        self._invalidate_after_commit(None)
        logger.info("Deleted comment %d by admin", comment_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_by_user(self, user_id: int, comment_id: int) -> CommentResponse:
        await self._ensure_user_exists(user_id)
        comment = await self._get_owned_comment(user_id, comment_id)
        logger.info("Fetched comment %d for user %d", comment_id, user_id)
        return _to_response(comment)

    async def get_by_admin(self, comment_id: int) -> CommentResponse:
        comment = await self._get_comment(comment_id)
        logger.info("Fetched comment %d by admin", comment_id)
        return _to_response(comment)

    async def list_for_event(
        self,
        event_id: int,
        keyword: str | None = None,
        from_: int = 0,
        size: int = 10,
    ) -> list[CommentResponse]:
        """
        Return one page of an event's comments, optionally keyword-filtered.

        No existence check is made on *event_id*; an unknown event yields an
        empty page.  Pages are served cache-aside from Redis.
        """
        cache_key = self.cache.event_comments_key(event_id, keyword, from_, size)
        cached = await self.cache.get(cache_key)
        if cached is not None:
            return [CommentResponse(**item) for item in cached]

        comments = await self.comments.find_all_comments_for_event(event_id, keyword, from_, size)
        result = [_to_response(c) for c in comments]
        await self.cache.set(
            cache_key,
            [r.model_dump(mode="json") for r in result],
            ttl=settings.CACHE_TTL_COMMENTS,
        )
        logger.info(
            "Listed %d comment(s) for event %d (keyword=%r, from=%d, size=%d)",
            len(result), event_id, keyword, from_, size,
        )
        return result

    async def list_for_user(self, user_id: int) -> list[CommentResponse]:
        comments = await self.comments.get_comments_by_author_id(user_id)
        logger.info("Listed %d comment(s) written by user %d", len(comments), user_id)
        return [_to_response(c) for c in comments]

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    async def _get_comment(self, comment_id: int) -> Comment:
        comment = await self.comments.find_by_id(comment_id)
        if comment is None:
            raise EntityNotFoundError(Comment, comment_id)
        return comment

    async def _get_owned_comment(self, user_id: int, comment_id: int) -> Comment:
        comment = await self._get_comment(comment_id)
        if comment.author_id != user_id:
            raise OperationNotAllowedError("Cannot modify or view another user's comment")
        return comment

    async def _get_event(self, event_id: int) -> Event:
        event = await self.events.find_by_id(event_id)
        if event is None:
            raise EntityNotFoundError(Event, event_id)
        return event

    async def _get_user(self, user_id: int) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise EntityNotFoundError(User, user_id)
        return user

    async def _ensure_user_exists(self, user_id: int) -> None:
        if not await self.users.exists_by_id(user_id):
            raise EntityNotFoundError(User, user_id)

    def _invalidate_after_commit(self, event_id: int | None) -> None:
        """Drop cached pages of *event_id* (all events if None) after commit."""
        if event_id is None:
            callback = self.cache.invalidate_all_comments
        else:
            callback = partial(self.cache.invalidate_event_comments, event_id)
        on_commit(self.comments.db, callback)
