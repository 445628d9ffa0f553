from uuid import UUID

from fastapi import APIRouter, Depends

from auth.domain.entities import User
from documents.application.node_services import (
    NodeInput,
    create_node,
    get_node,
    list_nodes,
    update_node,
)
from documents.interfaces.schemas import NodeRequest, NodeResponse
from shared.config import settings
from shared.dependencies import get_current_user, get_uow
from shared.infrastructure.unit_of_work import DbUnitOfWork

router = APIRouter(prefix="/api/docs/{document_id}/nodes", tags=["nodes"])


@router.get("", response_model=list[NodeResponse])
async def list_all(
    document_id: UUID,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await list_nodes(
        uow, current_user.id, document_id, timeout=settings.OPERATION_TIMEOUT_SECONDS
    )


@router.post("", response_model=NodeResponse, status_code=201)
async def create(
    document_id: UUID,
    body: NodeRequest,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await create_node(
        uow,
        user_id=current_user.id,
        document_id=document_id,
        data=NodeInput(**body.model_dump()),
        timeout=settings.OPERATION_TIMEOUT_SECONDS,
    )


@router.get("/{node_id}", response_model=NodeResponse)
async def get_one(
    document_id: UUID,
    node_id: UUID,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await get_node(
        uow,
        current_user.id,
        document_id,
        node_id,
        timeout=settings.OPERATION_TIMEOUT_SECONDS,
    )


@router.put("/{node_id}", response_model=NodeResponse)
async def update(
    document_id: UUID,
    node_id: UUID,
    body: NodeRequest,
    current_user: User = Depends(get_current_user),
    uow: DbUnitOfWork = Depends(get_uow),
):
    return await update_node(
        uow,
        user_id=current_user.id,
        document_id=document_id,
        node_id=node_id,
        data=NodeInput(**body.model_dump()),
        timeout=settings.OPERATION_TIMEOUT_SECONDS,
    )
