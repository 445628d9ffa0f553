import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from documents.application.services import get_editable_document, get_readable_document
from documents.domain.nodes import (
    DurationUnit,
    ExecForm,
    WorkflowNode,
    normalize_diagram,
    normalize_raci,
)
from shared.exceptions import NotFoundError, ValidationError
from shared.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 500


@dataclass
class NodeInput:
    """Caller-supplied node fields, before validation."""

    name: str
    exec_form: str | None
    description: str = ""
    preconditions: str = ""
    outputs: str = ""
    duration_min: float | None = None
    duration_max: float | None = None
    duration_unit: str | None = None
    raci: dict[str, list[str]] | None = None
    subtasks: list[str] | None = None
    diagram_json: dict[str, list[Any]] | None = None


def build_node(document_id: UUID, data: NodeInput) -> WorkflowNode:
    """Validate and normalise input. Every bad field is reported at once."""
    errors: dict[str, str] = {}
    name = (data.name or "").strip()
    if not name:
        errors["name"] = "required"
    elif len(name) > MAX_NAME_LENGTH:
        errors["name"] = "too_long"

    exec_form = None
    if not data.exec_form:
        errors["exec_form"] = "required"
    else:
        try:
            exec_form = ExecForm(data.exec_form.upper())
        except ValueError:
            errors["exec_form"] = "invalid_enum"

    duration_unit = DurationUnit.DAY
    if data.duration_unit:
        try:
            duration_unit = DurationUnit(data.duration_unit.upper())
        except ValueError:
            errors["duration_unit"] = "invalid_enum"

    if data.duration_min is not None and data.duration_min < 0:
        errors["duration_min"] = "must_be_non_negative"
    if data.duration_max is not None and data.duration_max < 0:
        errors["duration_max"] = "must_be_non_negative"
    if (
        data.duration_min is not None
        and data.duration_max is not None
        and data.duration_min > data.duration_max
    ):
        errors["duration"] = "min_gt_max"

    if errors:
        raise ValidationError("Invalid workflow node", fields=errors)

    return WorkflowNode(
        document_id=document_id,
        name=name,
        exec_form=exec_form,
        description=data.description or "",
        preconditions=data.preconditions or "",
        outputs=data.outputs or "",
        duration_min=data.duration_min,
        duration_max=data.duration_max,
        duration_unit=duration_unit,
        raci=normalize_raci(data.raci),
        subtasks=list(data.subtasks or []),
        diagram_json=normalize_diagram(data.diagram_json),
    )


async def create_node(
    uow: UnitOfWork,
    user_id: UUID,
    document_id: UUID,
    data: NodeInput,
    timeout: float | None = None,
) -> WorkflowNode:
    node = build_node(document_id, data)

    async with uow.transaction(timeout):
        await get_editable_document(uow, user_id, document_id)
        node = await uow.nodes.create(node)

    logger.info(f"Node {node.id} added to document {document_id} by {user_id}")
    return node


async def update_node(
    uow: UnitOfWork,
    user_id: UUID,
    document_id: UUID,
    node_id: UUID,
    data: NodeInput,
    timeout: float | None = None,
) -> WorkflowNode:
    """Replace every editable field of the node. Omitted optional fields reset to defaults."""
    node = build_node(document_id, data)

    async with uow.transaction(timeout):
        await get_editable_document(uow, user_id, document_id)
        existing = await _get_node(uow, document_id, node_id)
        node.id = existing.id
        node = await uow.nodes.update(node)

    logger.info(f"Node {node_id} of document {document_id} updated by {user_id}")
    return node


async def list_nodes(
    uow: UnitOfWork, user_id: UUID, document_id: UUID, timeout: float | None = None
) -> list[WorkflowNode]:
    async with uow.transaction(timeout):
        await get_readable_document(uow, user_id, document_id)
        return await uow.nodes.list_for_document(document_id)


async def get_node(
    uow: UnitOfWork,
    user_id: UUID,
    document_id: UUID,
    node_id: UUID,
    timeout: float | None = None,
) -> WorkflowNode:
    async with uow.transaction(timeout):
        await get_readable_document(uow, user_id, document_id)
        return await _get_node(uow, document_id, node_id)


async def _get_node(uow: UnitOfWork, document_id: UUID, node_id: UUID) -> WorkflowNode:
    node = await uow.nodes.get_by_id(node_id)
    if not node or node.document_id != document_id:
        raise NotFoundError("Node", str(node_id))
    return node

