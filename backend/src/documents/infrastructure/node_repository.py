from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from documents.domain.nodes import (
    DurationUnit,
    ExecForm,
    WorkflowNode,
    normalize_diagram,
    normalize_raci,
)
from documents.infrastructure.models import WorkflowNodeModel
from shared.exceptions import NotFoundError
from shared.infrastructure.database import utcnow


class DbWorkflowNodeRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, node_id: UUID) -> WorkflowNode | None:
        result = await self.session.execute(
            select(WorkflowNodeModel)
            .where(WorkflowNodeModel.id == node_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def list_for_document(self, document_id: UUID) -> list[WorkflowNode]:
        result = await self.session.execute(
            select(WorkflowNodeModel)
            .where(WorkflowNodeModel.document_id == document_id)
            .order_by(WorkflowNodeModel.created_at.asc(), WorkflowNodeModel.id)
            .execution_options(populate_existing=True)
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def create(self, node: WorkflowNode) -> WorkflowNode:
        now = utcnow()
        model = WorkflowNodeModel(document_id=node.document_id, created_at=now)
        _apply(model, node, now)
        self.session.add(model)
        await self.session.flush()
        return _to_entity(model)

    async def update(self, node: WorkflowNode) -> WorkflowNode:
        model = await self.session.get(WorkflowNodeModel, node.id)
        if model is None:
            raise NotFoundError("Node", str(node.id))
        _apply(model, node, utcnow())
        await self.session.flush()
        return _to_entity(model)


def _apply(model: WorkflowNodeModel, node: WorkflowNode, now) -> None:
    model.name = node.name
    model.exec_form = node.exec_form.value
    model.description = node.description
    model.preconditions = node.preconditions
    model.outputs = node.outputs
    model.duration_min = node.duration_min
    model.duration_max = node.duration_max
    model.duration_unit = node.duration_unit.value
    model.raci = normalize_raci(node.raci)
    model.subtasks = list(node.subtasks)
    model.diagram_json = normalize_diagram(node.diagram_json)
    model.updated_at = now


def _to_entity(model: WorkflowNodeModel) -> WorkflowNode:
    return WorkflowNode(
        id=model.id,
        document_id=model.document_id,
        name=model.name,
        exec_form=ExecForm(model.exec_form),
        description=model.description,
        preconditions=model.preconditions,
        outputs=model.outputs,
        duration_min=model.duration_min,
        duration_max=model.duration_max,
        duration_unit=DurationUnit(model.duration_unit),
        raci=normalize_raci(model.raci),
        subtasks=list(model.subtasks or []),
        diagram_json=normalize_diagram(model.diagram_json),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
