"""
Event service — the minimal event lifecycle the comment gate relies on.

New events start PENDING.  An administrator either publishes a pending
event (it then accepts comments) or rejects it (CANCELED).  Only PUBLISHED
events are visible through the public API.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from ewm.errors import EntityNotFoundError, OperationNotAllowedError
from ewm.models import Event, EventState, User
from ewm.repositories import EventRepository, UserRepository
from ewm.schemas import EventAdminUpdate, EventCreate, EventResponse, StateAction

logger = logging.getLogger(__name__)


async def create_event(db: AsyncSession, user_id: int, data: EventCreate) -> EventResponse:
    if not await UserRepository(db).exists_by_id(user_id):
        raise EntityNotFoundError(User, user_id)

    event = await EventRepository(db).save(
        Event(
            title=data.title,
            annotation=data.annotation,
            description=data.description,
            initiator_id=user_id,
            state=EventState.PENDING,
        )
    )
    logger.info("Created event %d by user %d", event.id, user_id)
    return EventResponse.model_validate(event)


async def get_published_event(db: AsyncSession, event_id: int) -> EventResponse:
    event = await EventRepository(db).find_by_id(event_id)
    if event is None or event.state != EventState.PUBLISHED:
        raise EntityNotFoundError(Event, event_id)
    return EventResponse.model_validate(event)


async def update_event_by_admin(
    db: AsyncSession, event_id: int, data: EventAdminUpdate
) -> EventResponse:
    """Apply an admin state action; only PENDING events can change state."""
    events = EventRepository(db)
    event = await events.find_by_id(event_id)
    if event is None:
        raise EntityNotFoundError(Event, event_id)
    if event.state != EventState.PENDING:
        raise OperationNotAllowedError(
            f"Cannot {data.state_action.value.lower()} an event in state {event.state.value}"
        )

    if data.state_action == StateAction.PUBLISH_EVENT:
        event.state = EventState.PUBLISHED
        event.published_on = datetime.now(timezone.utc)
    else:
        event.state = EventState.CANCELED

    event = await events.save(event)
    logger.info("Event %d moved to %s by admin", event_id, event.state.value)
    return EventResponse.model_validate(event)
