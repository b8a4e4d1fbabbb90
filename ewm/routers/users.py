from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ewm.database import get_db
from ewm.dependencies import PaginationParams
from ewm.schemas import UserCreate, UserResponse
from ewm.services import user_service

router = APIRouter(prefix="/admin/users", tags=["users: admin"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    ids: list[int] | None = Query(None),
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.get_users(db, ids, pagination.from_, pagination.size)


@router.post("", status_code=201, response_model=UserResponse)
async def create_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await user_service.create_user(db, data)
    except IntegrityError:
        raise HTTPException(
            status_code=409,
            detail="A user with this email already exists",
        )


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)):
    await user_service.delete_user(db, user_id)
