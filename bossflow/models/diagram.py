"""
Diagram domain models and schemas.

Request/response schemas for diagram CRUD. JSON uses camelCase keys to
match the editor's payloads (``isTemplate``, ``createdAt``, ``updatedAt``).

Node, edge and image entries are kept as free-form objects here; their
shape is enforced by bossflow.core.validation so failures carry a
machine-readable reason.

Dependencies: pydantic
System role: Diagram API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialised with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateDiagramRequest(CamelModel):
    """Request schema for creating a diagram."""

    title: str | None = Field(None, description="Diagram title (3-100 characters)")
    description: str | None = Field(None, description="Optional description (up to 500 chars)")
    nodes: list[Any] | None = Field(None, description="Diagram nodes")
    edges: list[Any] | None = Field(None, description="Connections between nodes")
    images: list[Any] | None = Field(None, description="Top-level image references (max 10)")
    is_template: bool = Field(False, description="Save as a reusable template")


class UpdateDiagramRequest(CamelModel):
    """
    Request schema for partially updating a diagram.

    Only fields present in the body are applied; an explicit empty list
    replaces the stored list.
    """

    title: str | None = Field(None, description="New title")
    description: str | None = Field(None, description="New description")
    nodes: list[Any] | None = Field(None, description="Replacement nodes")
    edges: list[Any] | None = Field(None, description="Replacement edges")
    images: list[Any] | None = Field(None, description="Replacement images")
    is_template: bool | None = Field(None, description="Template flag")


class DiagramResponse(CamelModel):
    """Response schema for a single diagram."""

    id: uuid.UUID
    title: str
    description: str
    nodes: list[dict[str, Any]]
    edges: list[dict[str, Any]]
    images: list[dict[str, Any]]
    is_template: bool
    created_at: datetime
    updated_at: datetime


class DiagramDetailResponse(BaseModel):
    """Envelope for GET /diagrams/{id}."""

    diagram: DiagramResponse


class DiagramMutationResponse(BaseModel):
    """Envelope for create and update."""

    message: str
    diagram: DiagramResponse


class DiagramListResponse(BaseModel):
    """Envelope for GET /diagrams."""

    diagrams: list[DiagramResponse]


class TemplateListResponse(BaseModel):
    """Envelope for GET /templates."""

    templates: list[DiagramResponse]
