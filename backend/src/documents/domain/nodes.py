"""Workflow nodes: structured process steps attached to a document.

Nodes carry no access rules of their own; reading and editing them follows the
parent document's ``can_read`` / ``can_edit``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

RACI_KEYS = ("R", "A", "S", "C", "I")


class ExecForm(StrEnum):
    MANUAL = "MANUAL"
    AUTOMATIC = "AUTOMATIC"
    DECISION = "DECISION"
    REVIEW = "REVIEW"


class DurationUnit(StrEnum):
    MINUTE = "MINUTE"
    HOUR = "HOUR"
    DAY = "DAY"
    WEEK = "WEEK"


@dataclass
class WorkflowNode:
    document_id: UUID
    name: str
    exec_form: ExecForm
    description: str = ""
    preconditions: str = ""
    outputs: str = ""
    duration_min: float | None = None
    duration_max: float | None = None
    duration_unit: DurationUnit = DurationUnit.DAY
    raci: dict[str, list[str]] = field(default_factory=lambda: normalize_raci(None))
    subtasks: list[str] = field(default_factory=list)
    diagram_json: dict[str, list[Any]] = field(default_factory=lambda: normalize_diagram(None))
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)
    updated_at: datetime | None = field(default=None)


def normalize_raci(raci: dict | None) -> dict[str, list[str]]:
    """Exactly the five RACI keys, each a list. Unknown keys are dropped."""
    raci = raci or {}
    return {key: list(raci.get(key) or []) for key in RACI_KEYS}


def normalize_diagram(diagram: dict | None) -> dict[str, list[Any]]:
    diagram = diagram or {}
    return {
        "nodes": list(diagram.get("nodes") or []),
        "edges": list(diagram.get("edges") or []),
    }
