"""
Diagram response mapping utilities.

Transforms service dictionaries into Pydantic response models.

Dependencies: bossflow.models.diagram
System role: Diagram response transformation
"""

from typing import Any

from bossflow.models.diagram import DiagramResponse


def map_diagram_to_response(diagram_data: dict[str, Any]) -> DiagramResponse:
    """
    Transform diagram data dictionary into DiagramResponse.

    Args:
        diagram_data: Dictionary containing diagram fields
            Expected keys: id, title, description, nodes, edges, images,
            is_template, created_at, updated_at

    Returns:
        DiagramResponse: Pydantic model for API response
    """
    return DiagramResponse(**diagram_data)


def map_diagrams_to_response(diagrams_data: list[dict[str, Any]]) -> list[DiagramResponse]:
    """Transform a list of diagram dictionaries into DiagramResponse models."""
    return [map_diagram_to_response(diagram) for diagram in diagrams_data]
