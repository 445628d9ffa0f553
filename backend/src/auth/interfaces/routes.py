from fastapi import APIRouter, Depends

from auth.application.services import authenticate_user
from auth.domain.entities import User
from auth.interfaces.schemas import LoginRequest, TokenResponse, UserResponse
from shared.dependencies import get_current_user, get_uow
from shared.exceptions import AuthorizationError
from shared.infrastructure.unit_of_work import DbUnitOfWork

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=403)
async def register():
    # Accounts are provisioned by administrators only.
    raise AuthorizationError("Self-registration is disabled")


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, uow: DbUnitOfWork = Depends(get_uow)):
    user, token = await authenticate_user(uow, email=body.email, password=body.password)
    return TokenResponse(
        access_token=token,
        user=UserResponse.model_validate(user, from_attributes=True),
    )


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
