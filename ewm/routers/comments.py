from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request

from ewm.dependencies import PaginationParams, get_comment_service, get_stats_client
from ewm.schemas import CommentRequest, CommentResponse
from ewm.services.comment_service import CommentService
from ewm.stats_client import StatsClient

private_router = APIRouter(prefix="/users/{user_id}/comments", tags=["comments: private"])
admin_router = APIRouter(prefix="/admin/comments", tags=["comments: admin"])
public_router = APIRouter(prefix="/events/{event_id}/comments", tags=["comments: public"])


# --- Private (author) ---

@private_router.post("", status_code=201, response_model=CommentResponse)
async def create_comment(
    user_id: int,
    data: CommentRequest,
    event_id: int = Query(...),
    service: CommentService = Depends(get_comment_service),
):
    return await service.create(data, user_id, event_id)


@private_router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    user_id: int,
    comment_id: int,
    data: CommentRequest,
    service: CommentService = Depends(get_comment_service),
):
    return await service.update(data, user_id, comment_id)


@private_router.delete("/{comment_id}", status_code=204)
async def delete_comment(
    user_id: int, comment_id: int, service: CommentService = Depends(get_comment_service)
):
    await service.delete_by_user(user_id, comment_id)


@private_router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(
    user_id: int, comment_id: int, service: CommentService = Depends(get_comment_service)
):
    return await service.get_by_user(user_id, comment_id)


@private_router.get("", response_model=list[CommentResponse])
async def list_user_comments(user_id: int, service: CommentService = Depends(get_comment_service)):
    return await service.list_for_user(user_id)


# --- Admin ---

@admin_router.get("/{comment_id}", response_model=CommentResponse)
async def admin_get_comment(comment_id: int, service: CommentService = Depends(get_comment_service)):
    return await service.get_by_admin(comment_id)


@admin_router.delete("/{comment_id}", status_code=204)
async def admin_delete_comment(
    comment_id: int, service: CommentService = Depends(get_comment_service)
):
    await service.delete_by_admin(comment_id)


# --- Public ---

@public_router.get("", response_model=list[CommentResponse])
async def list_event_comments(
    event_id: int,
    request: Request,
    background_tasks: BackgroundTasks,
    keyword: str | None = Query(None, max_length=2000),
    pagination: PaginationParams = Depends(),
    service: CommentService = Depends(get_comment_service),
    stats: StatsClient = Depends(get_stats_client),
):
    comments = await service.list_for_event(event_id, keyword, pagination.from_, pagination.size)
    background_tasks.add_task(
        stats.hit, request.url.path, request.client.host if request.client else ""
    )
    return comments
