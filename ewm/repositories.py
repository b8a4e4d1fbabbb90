"""
Repositories — persistence collaborators for the service layer.

Each repository wraps the request's ``AsyncSession`` and exposes the small
contract the services depend on (``save``, ``find_by_id``, ``exists_by_id``,
``delete_by_id`` plus a few entity-specific queries).  Writes are flushed but
never committed; the transaction boundary belongs to ``get_db``.
"""
from typing import Generic, TypeVar

from sqlalchemy import delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ewm.database import Base
from ewm.models import Comment, Event, EventState, User

ModelT = TypeVar("ModelT", bound=Base)


class SqlAlchemyRepository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def save(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def find_by_id(self, entity_id: int) -> ModelT | None:
        return await self.db.get(self.model, entity_id)

    async def exists_by_id(self, entity_id: int) -> bool:
        q = select(exists().where(self.model.id == entity_id))
        return bool((await self.db.execute(q)).scalar())

    async def delete_by_id(self, entity_id: int) -> None:
        entity = await self.db.get(self.model, entity_id)
        if entity is not None:
            await self.db.delete(entity)
            await self.db.flush()

    async def count(self) -> int:
        return (await self.db.execute(select(func.count()).select_from(self.model))).scalar_one()


class UserRepository(SqlAlchemyRepository[User]):
    model = User

    async def find_all(
        self, ids: list[int] | None = None, from_: int = 0, size: int = 10
    ) -> list[User]:
        q = select(User).order_by(User.id).offset(from_).limit(size)
        if ids:
            q = q.where(User.id.in_(ids))
        return list((await self.db.execute(q)).scalars().all())


class EventRepository(SqlAlchemyRepository[Event]):
    model = Event

    async def delete_by_initiator_id(self, user_id: int) -> None:
        await self.db.execute(delete(Event).where(Event.initiator_id == user_id))

    async def count_published(self) -> int:
        q = select(func.count()).select_from(Event).where(Event.state == EventState.PUBLISHED)
        return (await self.db.execute(q)).scalar_one()


class CommentRepository(SqlAlchemyRepository[Comment]):
    model = Comment

    async def find_all_comments_for_event(
        self,
        event_id: int,
        keyword: str | None,
        from_: int,
        size: int,
    ) -> list[Comment]:
        """
        Return one page of *event_id*'s comments in creation order.

        A non-blank *keyword* keeps only comments whose message contains it,
        case-insensitively.  Wildcard characters in *keyword* match literally.
        """
        q = select(Comment).where(Comment.event_id == event_id)
        if keyword and keyword.strip():
            q = q.where(func.lower(Comment.message).contains(keyword.strip().lower(), autoescape=True))
        q = q.order_by(Comment.created_on, Comment.id).offset(from_).limit(size)
        return list((await self.db.execute(q)).scalars().all())

    async def get_comments_by_author_id(self, user_id: int) -> list[Comment]:
        q = select(Comment).where(Comment.author_id == user_id).order_by(Comment.created_on, Comment.id)
        return list((await self.db.execute(q)).scalars().all())

    async def delete_by_user_cascade(self, user_id: int) -> None:
        """Remove comments written by *user_id* or posted on their events."""
        own_events = select(Event.id).where(Event.initiator_id == user_id)
        await self.db.execute(
            delete(Comment).where(
                (Comment.author_id == user_id) | (Comment.event_id.in_(own_events))
            )
        )
