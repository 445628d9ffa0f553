from uuid import UUID

from fastapi import APIRouter, Depends

from auth.domain.entities import User
from shared.config import settings
from shared.dependencies import get_current_user, get_uow
from shared.infrastructure.unit_of_work import DbUnitOfWork
from sharing.application.services import list_shares, revoke_share, share_document
from sharing.interfaces.schemas import ShareRequest, ShareResponse

router = APIRouter(prefix="/api/docs/{document_id}/shares", tags=["sharing"])


@router.get("", response_model=list[ShareResponse])
async def list_all(
    document_id: UUID,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await list_shares(
        uow, current_user.id, document_id, timeout=settings.OPERATION_TIMEOUT_SECONDS
    )


@router.put("", response_model=ShareResponse)
async def share(
    document_id: UUID,
    body: ShareRequest,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await share_document(
        uow,
        owner_id=current_user.id,
        document_id=document_id,
        user_id=body.user_id,
        role=body.role,
        timeout=settings.OPERATION_TIMEOUT_SECONDS,
    )


@router.delete("/{user_id}", status_code=204)
async def revoke(
    document_id: UUID,
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    await revoke_share(
        uow,
        owner_id=current_user.id,
        document_id=document_id,
        user_id=user_id,
        timeout=settings.OPERATION_TIMEOUT_SECONDS,
    )
