from uuid import UUID

from fastapi import APIRouter, Depends

from auth.domain.entities import User
from documents.application.services import (
    create_document,
    get_version,
    list_versions,
    list_visible_documents,
    read_document,
    update_document,
)
from documents.interfaces.schemas import (
    CreateDocumentRequest,
    DocumentDetailResponse,
    DocumentResponse,
    UpdateDocumentRequest,
    VersionResponse,
)
from shared.config import settings
from shared.dependencies import get_current_user, get_uow
from shared.infrastructure.unit_of_work import DbUnitOfWork

router = APIRouter(prefix="/api/docs", tags=["documents"])


@router.post("", response_model=DocumentResponse, status_code=201)
async def create(
    body: CreateDocumentRequest,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await create_document(
        uow,
        owner_id=current_user.id,
        title=body.title,
        content=body.content,
        visibility=body.visibility,
        timeout=settings.OPERATION_TIMEOUT_SECONDS,
    )


@router.get("", response_model=list[DocumentResponse])
async def list_all(
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await list_visible_documents(
        uow, current_user.id, timeout=settings.OPERATION_TIMEOUT_SECONDS
    )


@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_one(
    document_id: UUID,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await read_document(
        uow, current_user.id, document_id, timeout=settings.OPERATION_TIMEOUT_SECONDS
    )


@router.put("/{document_id}", response_model=DocumentResponse)
async def update(
    document_id: UUID,
    body: UpdateDocumentRequest,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await update_document(
        uow,
        user_id=current_user.id,
        document_id=document_id,
        content=body.content,
        title=body.title,
        visibility=body.visibility,
        timeout=settings.OPERATION_TIMEOUT_SECONDS,
    )


@router.get("/{document_id}/versions", response_model=list[VersionResponse])
async def versions(
    document_id: UUID,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await list_versions(
        uow, current_user.id, document_id, timeout=settings.OPERATION_TIMEOUT_SECONDS
    )


@router.get("/{document_id}/versions/{version_id}", response_model=VersionResponse)
async def version(
    document_id: UUID,
    version_id: UUID,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await get_version(
        uow,
        current_user.id,
        document_id,
        version_id,
        timeout=settings.OPERATION_TIMEOUT_SECONDS,
    )
