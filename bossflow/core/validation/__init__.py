"""
Diagram validation rules.

Exports:
  - Schema guards for single nodes, edges, images, titles and descriptions
  - validate_structure / ensure_valid_structure for whole diagrams
"""

from bossflow.core.validation.guards import (
    ALLOWED_MIME_TYPES,
    MAX_DIAGRAM_IMAGES,
    MAX_IMAGE_SIZE,
    GuardResult,
    validate_description,
    validate_edge,
    validate_image,
    validate_node,
    validate_title,
)
from bossflow.core.validation.structure import (
    ValidationIssue,
    ValidationReport,
    ensure_valid_structure,
    validate_structure,
)

__all__ = [
    "ALLOWED_MIME_TYPES",
    "MAX_DIAGRAM_IMAGES",
    "MAX_IMAGE_SIZE",
    "GuardResult",
    "validate_description",
    "validate_edge",
    "validate_image",
    "validate_node",
    "validate_title",
    "ValidationIssue",
    "ValidationReport",
    "ensure_valid_structure",
    "validate_structure",
]
