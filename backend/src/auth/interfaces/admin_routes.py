from uuid import UUID

from fastapi import APIRouter, Depends

from auth.application.services import create_user, list_users, reset_password
from auth.domain.entities import User
from auth.interfaces.schemas import (
    CreateUserRequest,
    ResetPasswordRequest,
    UserResponse,
)
from shared.dependencies import get_uow, require_admin
from shared.infrastructure.unit_of_work import DbUnitOfWork

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", response_model=list[UserResponse])
async def list_all(
    _: User = Depends(require_admin),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await list_users(uow)


@router.post("/users", response_model=UserResponse, status_code=201)
async def create(
    body: CreateUserRequest,
    _: User = Depends(require_admin),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await create_user(uow, email=body.email, password=body.password, role=body.role)


@router.post("/users/{user_id}/reset_password")
async def reset(
    user_id: UUID,
    body: ResetPasswordRequest,
    _: User = Depends(require_admin),
    uow: DbUnitOfWork = Depends(get_uow),
):
    await reset_password(uow, user_id=user_id, password=body.password)
    return {"status": "ok"}
