import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ewm.models import EventState


# --- User ---

class UserCreate(BaseModel):
    name: str = Field(min_length=2, max_length=250)
    email: str = Field(min_length=6, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    model_config = ConfigDict(from_attributes=True)


# --- Event ---

class EventCreate(BaseModel):
    title: str = Field(min_length=3, max_length=120)
    annotation: str = Field(min_length=20, max_length=2000)
    description: str | None = Field(None, max_length=7000)


class StateAction(str, enum.Enum):
    PUBLISH_EVENT = "PUBLISH_EVENT"
    REJECT_EVENT = "REJECT_EVENT"


class EventAdminUpdate(BaseModel):
    state_action: StateAction


class EventResponse(BaseModel):
    id: int
    title: str
    annotation: str
    description: str | None
    state: EventState
    initiator_id: int
    created_on: datetime
    published_on: datetime | None
    model_config = ConfigDict(from_attributes=True)


# --- Comment ---

class CommentRequest(BaseModel):
    message: str = Field(min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    id: int
    message: str
    author_id: int
    event_id: int
    created_on: datetime
    updated_on: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Metrics ---

class MetricsResponse(BaseModel):
    total_users: int
    total_events: int
    total_comments: int
    avg_comments_per_published_event: float
    cache_info: dict = {}
