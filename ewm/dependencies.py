from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ewm.config import settings
from ewm.database import get_db
from ewm.repositories import CommentRepository, EventRepository, UserRepository
from ewm.services.comment_service import CommentService
from ewm.stats_client import StatsClient, stats_client


class PaginationParams:
    """
    Reusable dependency parsing offset-style ``from`` / ``size`` query
    parameters.

    ``size`` above ``settings.MAX_PAGE_SIZE`` is rejected with a 422.
    """

    def __init__(
        self,
        from_: int = Query(
            0,
            ge=0,
            alias="from",
            description="Number of items to skip.",
        ),
        size: int = Query(
            settings.DEFAULT_PAGE_SIZE,
            ge=1,
            le=settings.MAX_PAGE_SIZE,
            description="Number of items to return.",
        ),
    ) -> None:
        self.from_ = from_
        self.size = size


def get_comment_service(db: AsyncSession = Depends(get_db)) -> CommentService:
    """Build a CommentService wired to the request session."""
    return CommentService(
        comments=CommentRepository(db),
        users=UserRepository(db),
        events=EventRepository(db),
    )


def get_stats_client() -> StatsClient:
    return stats_client
