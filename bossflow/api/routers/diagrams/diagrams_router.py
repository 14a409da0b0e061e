"""
Diagram API endpoints.

Routes:
- POST /diagrams - Create diagram
- GET /diagrams - List caller's diagrams (templates excluded)
- GET /diagrams/{id} - Get single diagram
- PUT /diagrams/{id} - Partially update diagram
- DELETE /diagrams/{id} - Delete diagram
- GET /templates - List caller's templates

Every route requires a bearer token; diagrams belonging to other users are
reported as not found.

Dependencies: bossflow.application.services, bossflow.models
System role: Diagram management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status

from bossflow.api.deps.auth import Principal, get_current_principal
from bossflow.api.deps.dependencies import get_diagram_service
from bossflow.application.services.diagram_service import DiagramService
from bossflow.models.common import MessageResponse
from bossflow.models.diagram import (
    CreateDiagramRequest,
    DiagramDetailResponse,
    DiagramListResponse,
    DiagramMutationResponse,
    TemplateListResponse,
    UpdateDiagramRequest,
)

from .diagram_error_handling import handle_diagram_errors
from .diagram_responses import map_diagram_to_response, map_diagrams_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/diagrams", tags=["diagrams"])
templates_router = APIRouter(prefix="/templates", tags=["diagrams"])


@router.post("", response_model=DiagramMutationResponse, status_code=status.HTTP_201_CREATED)
@handle_diagram_errors
async def create_diagram(
    request: CreateDiagramRequest,
    principal: Principal = Depends(get_current_principal),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> DiagramMutationResponse:
    """
    Create a diagram for the caller.

    Args:
        request: Title plus optional description, nodes, edges, images, isTemplate
        principal: Authenticated caller
        diagram_service: Injected DiagramService

    Returns:
        DiagramMutationResponse: Confirmation and created diagram

    Raises:
        HTTPException(400): Invalid title or structure
        HTTPException(401): Account behind the token no longer exists
        HTTPException(409): Title already used by the caller
    """
    logger.info(
        "Creating diagram",
        extra={
            "owner_id": str(principal.user_id),
            "node_count": len(request.nodes or []),
            "edge_count": len(request.edges or []),
        }
    )

    diagram = await diagram_service.create_diagram(
        principal.user_id, request.model_dump()
    )

    return DiagramMutationResponse(
        message="Diagram created successfully",
        diagram=map_diagram_to_response(diagram),
    )


@router.get("", response_model=DiagramListResponse)
@handle_diagram_errors
async def list_diagrams(
    principal: Principal = Depends(get_current_principal),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> DiagramListResponse:
    """List the caller's diagrams, most recently updated first."""
    diagrams = await diagram_service.list_diagrams(principal.user_id)
    return DiagramListResponse(diagrams=map_diagrams_to_response(diagrams))


@router.get("/{diagram_id}", response_model=DiagramDetailResponse)
@handle_diagram_errors
async def get_diagram(
    diagram_id: str,
    principal: Principal = Depends(get_current_principal),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> DiagramDetailResponse:
    """
    Get a diagram by ID.

    Raises:
        HTTPException(404): Missing, malformed ID, or owned by another user
    """
    diagram = await diagram_service.get_diagram(principal.user_id, diagram_id)
    return DiagramDetailResponse(diagram=map_diagram_to_response(diagram))


@router.put("/{diagram_id}", response_model=DiagramMutationResponse)
@handle_diagram_errors
async def update_diagram(
    diagram_id: str,
    request: UpdateDiagramRequest,
    principal: Principal = Depends(get_current_principal),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> DiagramMutationResponse:
    """
    Partially update a diagram.

    Only fields present in the body are replaced.

    Raises:
        HTTPException(400): Invalid title or merged structure
        HTTPException(404): Missing or owned by another user
        HTTPException(409): Title already used by another of the caller's diagrams
    """
    patch = request.model_dump(exclude_unset=True)

    logger.info(
        "Updating diagram",
        extra={"diagram_id": diagram_id, "updates": sorted(patch)}
    )

    diagram = await diagram_service.update_diagram(principal.user_id, diagram_id, patch)

    return DiagramMutationResponse(
        message="Diagram updated successfully",
        diagram=map_diagram_to_response(diagram),
    )


@router.delete("/{diagram_id}", response_model=MessageResponse)
@handle_diagram_errors
async def delete_diagram(
    diagram_id: str,
    principal: Principal = Depends(get_current_principal),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> MessageResponse:
    """
    Delete a diagram.

    Raises:
        HTTPException(404): Missing or owned by another user
    """
    await diagram_service.delete_diagram(principal.user_id, diagram_id)
    return MessageResponse(message="Diagram deleted successfully")


@templates_router.get("", response_model=TemplateListResponse)
@handle_diagram_errors
async def list_templates(
    principal: Principal = Depends(get_current_principal),
    diagram_service: DiagramService = Depends(get_diagram_service),
) -> TemplateListResponse:
    """List the caller's templates, most recently updated first."""
    templates = await diagram_service.list_templates(principal.user_id)
    return TemplateListResponse(templates=map_diagrams_to_response(templates))
