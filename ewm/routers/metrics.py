from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ewm.cache import cache
from ewm.database import get_db
from ewm.repositories import CommentRepository, EventRepository, UserRepository
from ewm.schemas import MetricsResponse

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("", response_model=MetricsResponse)
async def get_metrics(db: AsyncSession = Depends(get_db)):
    events = EventRepository(db)
    total_users = await UserRepository(db).count()
    total_events = await events.count()
    published_events = await events.count_published()
    total_comments = await CommentRepository(db).count()

    avg_comments = total_comments / published_events if published_events > 0 else 0

    return MetricsResponse(
        total_users=total_users,
        total_events=total_events,
        total_comments=total_comments,
        avg_comments_per_published_event=round(avg_comments, 2),
        cache_info=cache.stats,
    )
