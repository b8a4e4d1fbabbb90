from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ewm.database import get_db
from ewm.dependencies import get_stats_client
from ewm.schemas import EventAdminUpdate, EventCreate, EventResponse
from ewm.services import event_service
from ewm.stats_client import StatsClient

router = APIRouter(tags=["events"])


@router.post("/users/{user_id}/events", status_code=201, response_model=EventResponse)
async def create_event(user_id: int, data: EventCreate, db: AsyncSession = Depends(get_db)):
    return await event_service.create_event(db, user_id, data)


@router.get("/events/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: int,
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    event = await event_service.get_published_event(db, event_id)
    background_tasks.add_task(
        stats.hit, request.url.path, request.client.host if request.client else ""
    )
    return event


@router.patch("/admin/events/{event_id}", response_model=EventResponse)
async def admin_update_event(
    event_id: int, data: EventAdminUpdate, db: AsyncSession = Depends(get_db)
):
    return await event_service.update_event_by_admin(db, event_id, data)
