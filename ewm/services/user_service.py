"""
User service — administrative CRUD for the User aggregate.

Email uniqueness is enforced by the database; the router translates the
resulting ``IntegrityError`` into a 409 response.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ewm.cache import cache
from ewm.database import on_commit
from ewm.errors import EntityNotFoundError
from ewm.models import User
from ewm.repositories import CommentRepository, EventRepository, UserRepository
from ewm.schemas import UserCreate, UserResponse

logger = logging.getLogger(__name__)


async def get_users(
    db: AsyncSession, ids: list[int] | None = None, from_: int = 0, size: int = 10
) -> list[UserResponse]:
    """Return users ordered by id, optionally restricted to *ids*."""
    users = await UserRepository(db).find_all(ids, from_, size)
    return [UserResponse.model_validate(u) for u in users]


async def create_user(db: AsyncSession, data: UserCreate) -> UserResponse:
    user = await UserRepository(db).save(User(name=data.name, email=data.email))
    logger.info("Created user %d (%s)", user.id, user.email)
    return UserResponse.model_validate(user)


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """
    Delete a user together with their events and every comment that
    references either.
    """
    users = UserRepository(db)
    if not await users.exists_by_id(user_id):
        raise EntityNotFoundError(User, user_id)

    await CommentRepository(db).delete_by_user_cascade(user_id)
    await EventRepository(db).delete_by_initiator_id(user_id)
    await users.delete_by_id(user_id)
    on_commit(db, cache.invalidate_all_comments)
    logger.info("Deleted user %d", user_id)
