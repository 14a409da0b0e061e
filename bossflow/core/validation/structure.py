"""
Structural validation for whole diagrams.

Applies the schema guards to every image, node and edge of a candidate
diagram and checks cross references between them. Checks run in a fixed
order (images, nodes, node identity, node images, edges, edge references)
so the first reported issue is deterministic.

Dependencies: bossflow.core.validation.guards, bossflow.core.exceptions
System role: Referential integrity of diagram payloads before persistence
"""

from dataclasses import dataclass, field
from typing import Any

from bossflow.core.exceptions import DiagramValidationError, ErrorReason
from bossflow.core.validation.guards import (
    MAX_DIAGRAM_IMAGES,
    GuardResult,
    validate_edge,
    validate_image,
    validate_node,
)


@dataclass
class ValidationIssue:
    """A single violated rule."""

    reason: ErrorReason
    field: str
    message: str


@dataclass
class ValidationReport:
    """All issues found in a diagram, in check order."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def first(self) -> ValidationIssue | None:
        return self.issues[0] if self.issues else None

    @property
    def messages(self) -> list[str]:
        return [issue.message for issue in self.issues]

    def add(self, reason: ErrorReason, field: str, message: str) -> None:
        self.issues.append(ValidationIssue(reason, field, message))

    def add_result(self, result: GuardResult) -> None:
        if not result.ok:
            self.add(result.reason, result.field, result.message)

    def to_error(self) -> DiagramValidationError:
        """Build the exception reported to callers; the first issue leads."""
        first = self.first
        return DiagramValidationError(
            first.message,
            reason=first.reason,
            field=first.field,
            errors=self.messages,
        )


def _check_list(report: ValidationReport, value: Any, name: str) -> list | None:
    if value is None:
        return []
    if not isinstance(value, list):
        report.add(ErrorReason.INVALID_TYPE, name, f'The "{name}" field must be an array')
        return None
    return value


def _check_images(report: ValidationReport, images: list) -> None:
    if len(images) > MAX_DIAGRAM_IMAGES:
        report.add(
            ErrorReason.TOO_MANY_IMAGES,
            "images",
            f"A diagram cannot have more than {MAX_DIAGRAM_IMAGES} images",
        )
    for index, image in enumerate(images):
        report.add_result(validate_image(image, f"images[{index}]"))


def _check_nodes(report: ValidationReport, nodes: list) -> set[str] | None:
    """Validate nodes; return their id set, or None when identity is unreliable."""
    shape_ok = True
    for index, node in enumerate(nodes):
        result = validate_node(node, f"nodes[{index}]")
        if not result.ok:
            shape_ok = False
            report.add_result(result)

    node_ids: set[str] = set()
    duplicates: list[str] = []
    for node in nodes:
        node_id = node.get("id") if isinstance(node, dict) else None
        if not isinstance(node_id, str) or not node_id:
            continue
        if node_id in node_ids and node_id not in duplicates:
            duplicates.append(node_id)
        node_ids.add(node_id)
    if duplicates:
        report.add(
            ErrorReason.DUPLICATE_ID,
            "nodes",
            f"Duplicate node IDs: {', '.join(duplicates)}",
        )

    for index, node in enumerate(nodes):
        if isinstance(node, dict) and node.get("image") is not None:
            report.add_result(validate_image(node["image"], f"nodes[{index}].image"))

    if not shape_ok or duplicates:
        return None
    return node_ids


def _check_edges(report: ValidationReport, edges: list, node_ids: set[str] | None) -> None:
    results = [validate_edge(edge, f"edges[{index}]") for index, edge in enumerate(edges)]
    for result in results:
        report.add_result(result)

    edge_ids: set[str] = set()
    for index, (edge, result) in enumerate(zip(edges, results)):
        if not result.ok:
            continue
        path = f"edges[{index}]"
        source, target = edge["source"], edge["target"]
        if node_ids is not None:
            for end, node_id in (("source", source), ("target", target)):
                if node_id not in node_ids:
                    report.add(
                        ErrorReason.UNKNOWN_ENDPOINT,
                        f"{path}.{end}",
                        f"{path}: {end} node with id '{node_id}' does not exist",
                    )
        if source == target:
            report.add(
                ErrorReason.SELF_LOOP,
                path,
                f"{path}: 'source' and 'target' cannot be the same node",
            )
        if edge["id"] in edge_ids:
            report.add(
                ErrorReason.DUPLICATE_ID,
                f"{path}.id",
                f"Duplicate edge ID: {edge['id']}",
            )
        edge_ids.add(edge["id"])


def validate_structure(
    nodes: Any = None,
    edges: Any = None,
    images: Any = None,
) -> ValidationReport:
    """
    Validate a candidate diagram's nodes, edges and images.

    Absent lists are treated as empty. Edge endpoints may reference nodes
    anywhere in the node list; only existence matters.

    Args:
        nodes: Candidate node list
        edges: Candidate edge list
        images: Candidate top-level image list

    Returns:
        ValidationReport: Every issue found, first-error-wins order preserved
    """
    report = ValidationReport()

    image_list = _check_list(report, images, "images")
    if image_list is not None:
        _check_images(report, image_list)

    node_list = _check_list(report, nodes, "nodes")
    node_ids = _check_nodes(report, node_list) if node_list is not None else None

    edge_list = _check_list(report, edges, "edges")
    if edge_list is not None:
        _check_edges(report, edge_list, node_ids)

    return report


def ensure_valid_structure(
    nodes: Any = None,
    edges: Any = None,
    images: Any = None,
) -> None:
    """
    Raise when the diagram structure is invalid.

    Raises:
        DiagramValidationError: Carries the first issue and all messages
    """
    report = validate_structure(nodes, edges, images)
    if not report.ok:
        raise report.to_error()
