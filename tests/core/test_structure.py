"""
Test suite for the structural validator.

Verifies referential integrity checks, the fixed check order that decides
which issue is reported first, and aggregation of every issue.

System role: Verification of whole-diagram validation
"""

import pytest

from bossflow.core.exceptions import DiagramValidationError, ErrorReason
from bossflow.core.validation import ensure_valid_structure, validate_structure


class TestValidStructures:
    """Diagrams that must be accepted."""

    def test_empty_diagram_should_pass(self) -> None:
        assert validate_structure().ok
        assert validate_structure([], [], []).ok

    def test_connected_nodes_should_pass(self, make_node, make_edge) -> None:
        nodes = [make_node("a"), make_node("b"), make_node("c")]
        edges = [make_edge("a", "b"), make_edge("b", "c")]

        assert validate_structure(nodes, edges).ok

    def test_edge_may_reference_node_listed_after_it(self, make_node, make_edge) -> None:
        """Endpoint lookup is by existence, not position in the node list."""
        nodes = [make_node("a"), make_node("z")]
        assert validate_structure(nodes, [make_edge("z", "a")]).ok

    def test_ten_images_should_pass(self, make_image) -> None:
        images = [make_image(f"{i}.png") for i in range(10)]
        assert validate_structure(images=images).ok

    def test_node_with_valid_image_should_pass(self, make_node, make_image) -> None:
        assert validate_structure([make_node("a", image=make_image())]).ok

    def test_ensure_valid_structure_should_return_none(self, make_node) -> None:
        assert ensure_valid_structure([make_node("a")]) is None


class TestReferentialIntegrity:
    """Cross-entity rules."""

    def test_unknown_target_should_fail(self, make_node, make_edge) -> None:
        report = validate_structure([make_node("A")], [make_edge("A", "B")])

        assert report.first.reason == ErrorReason.UNKNOWN_ENDPOINT
        assert report.first.field == "edges[0].target"
        assert "'B'" in report.first.message

    def test_unknown_source_should_fail(self, make_node, make_edge) -> None:
        report = validate_structure([make_node("A")], [make_edge("X", "A")])
        assert report.first.reason == ErrorReason.UNKNOWN_ENDPOINT
        assert report.first.field == "edges[0].source"

    def test_edges_without_nodes_should_fail(self, make_edge) -> None:
        report = validate_structure([], [make_edge("a", "b")])
        assert report.first.reason == ErrorReason.UNKNOWN_ENDPOINT

    def test_self_loop_should_fail(self, make_node, make_edge) -> None:
        report = validate_structure([make_node("A")], [make_edge("A", "A")])
        assert report.first.reason == ErrorReason.SELF_LOOP

    def test_duplicate_node_ids_should_fail(self, make_node) -> None:
        report = validate_structure([make_node("A"), make_node("B"), make_node("A")])

        assert report.first.reason == ErrorReason.DUPLICATE_ID
        assert report.first.message == "Duplicate node IDs: A"

    def test_duplicate_edge_ids_should_fail(self, make_node, make_edge) -> None:
        nodes = [make_node("a"), make_node("b"), make_node("c")]
        edges = [make_edge("a", "b", "e1"), make_edge("b", "c", "e1")]

        report = validate_structure(nodes, edges)

        assert report.first.reason == ErrorReason.DUPLICATE_ID
        assert report.first.field == "edges[1].id"

    def test_parallel_edges_with_distinct_ids_should_pass(self, make_node, make_edge) -> None:
        nodes = [make_node("a"), make_node("b")]
        edges = [make_edge("a", "b", "e1"), make_edge("a", "b", "e2")]
        assert validate_structure(nodes, edges).ok


class TestImageLimits:
    """Image count and per-image rules."""

    def test_eleven_images_should_fail(self, make_image) -> None:
        images = [make_image(f"{i}.png") for i in range(11)]

        report = validate_structure(images=images)

        assert report.first.reason == ErrorReason.TOO_MANY_IMAGES

    def test_image_count_is_checked_before_image_shape(self, make_image) -> None:
        images = [make_image(f"{i}.png") for i in range(11)]
        images[0]["mimeType"] = "text/plain"

        report = validate_structure(images=images)

        assert report.first.reason == ErrorReason.TOO_MANY_IMAGES
        assert len(report.issues) == 2

    def test_invalid_node_image_should_fail(self, make_node, make_image) -> None:
        node = make_node("a", image=make_image(size=6 * 1024 * 1024))

        report = validate_structure([node])

        assert report.first.reason == ErrorReason.SIZE_EXCEEDED
        assert report.first.field == "nodes[0].image.size"


class TestCheckOrder:
    """The first reported issue follows the fixed check order."""

    def test_images_are_reported_before_nodes(self, make_node, make_image) -> None:
        bad_node = make_node("a")
        del bad_node["data"]

        report = validate_structure([bad_node], [], [make_image(mime_type="bad/type")])

        assert report.first.reason == ErrorReason.INVALID_MIME_TYPE
        assert [i.field for i in report.issues] == ["images[0].mimeType", "nodes[0].data"]

    def test_node_shape_is_reported_before_duplicates(self, make_node) -> None:
        bad = make_node("b")
        bad["position"]["x"] = "1"

        report = validate_structure([make_node("a"), make_node("a"), bad])

        assert report.first.reason == ErrorReason.INVALID_TYPE
        assert report.issues[1].reason == ErrorReason.DUPLICATE_ID

    def test_node_failures_suppress_endpoint_checks(self, make_node, make_edge) -> None:
        """Edges cannot be resolved while node identity is unreliable."""
        report = validate_structure(
            [make_node("a"), make_node("a")],
            [make_edge("a", "missing")],
        )

        reasons = [issue.reason for issue in report.issues]
        assert ErrorReason.UNKNOWN_ENDPOINT not in reasons

    def test_edge_shape_failure_skips_its_reference_checks(self, make_node) -> None:
        report = validate_structure([make_node("a")], [{"id": "e1", "source": "a"}])

        assert len(report.issues) == 1
        assert report.first.field == "edges[0].target"

    def test_all_issues_are_collected(self, make_node, make_edge) -> None:
        nodes = [make_node("a"), make_node("b")]
        edges = [make_edge("a", "a", "e1"), make_edge("a", "c", "e1")]

        report = validate_structure(nodes, edges)

        assert [i.reason for i in report.issues] == [
            ErrorReason.SELF_LOOP,
            ErrorReason.UNKNOWN_ENDPOINT,
            ErrorReason.DUPLICATE_ID,
        ]


class TestListTypes:
    """Non-list containers."""

    @pytest.mark.parametrize("field", ["nodes", "edges", "images"])
    def test_non_list_should_fail_with_invalid_type(self, field) -> None:
        report = validate_structure(**{field: {"not": "a list"}})

        assert report.first.reason == ErrorReason.INVALID_TYPE
        assert report.first.field == field


def test_ensure_valid_structure_should_raise_first_issue(make_node, make_edge) -> None:
    with pytest.raises(DiagramValidationError) as exc_info:
        ensure_valid_structure([make_node("A")], [make_edge("A", "B"), make_edge("A", "A")])

    error = exc_info.value
    assert error.reason == ErrorReason.UNKNOWN_ENDPOINT
    assert error.field == "edges[0].target"
    assert len(error.errors) == 2
    assert error.message == error.errors[0]
