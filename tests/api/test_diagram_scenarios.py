"""
End-to-end diagram scenarios.

Drives the full application (auth, routers, service, database) over an
ASGI transport with an in-memory database and real signed tokens.

System role: Verification of the HTTP contract end to end
"""

import uuid

import pytest
from httpx import ASGITransport, AsyncClient

from bossflow.api.deps.auth import PrincipalResolver, get_principal_resolver
from bossflow.api.main import create_app
from bossflow.boundary.db import get_async_db

SECRET = "test-secret"


@pytest.fixture
async def client(test_session_factory):
    async def override_db():
        async with test_session_factory() as session:
            yield session

    app = create_app()
    app.dependency_overrides[get_async_db] = override_db
    app.dependency_overrides[get_principal_resolver] = lambda: PrincipalResolver(secret=SECRET)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth(make_token, owner_id):
    return {"Authorization": f"Bearer {make_token(owner_id, secret=SECRET)}"}


@pytest.fixture
def other_auth(make_token, other_owner_id):
    return {"Authorization": f"Bearer {make_token(other_owner_id, secret=SECRET)}"}


async def test_short_title_is_rejected(client, auth):
    response = await client.post(
        "/api/diagrams", json={"title": "AB", "nodes": [], "edges": []}, headers=auth
    )

    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "TitleTooShort"


async def test_self_loop_is_rejected(client, auth):
    body = {
        "title": "Valid Diagram",
        "nodes": [{"id": "n1", "type": "start", "position": {"x": 0, "y": 0}, "data": {}}],
        "edges": [{"id": "e1", "source": "n1", "target": "n1"}],
    }

    response = await client.post("/api/diagrams", json=body, headers=auth)

    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "SelfLoop"


async def test_duplicate_title_conflicts(client, auth):
    first = await client.post("/api/diagrams", json={"title": "Phase One"}, headers=auth)
    second = await client.post("/api/diagrams", json={"title": "Phase One"}, headers=auth)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["detail"]["reason"] == "DuplicateTitle"


async def test_other_owner_cannot_read_diagram(client, auth, other_auth):
    created = await client.post("/api/diagrams", json={"title": "Phase One"}, headers=auth)
    diagram_id = created.json()["diagram"]["id"]

    response = await client.get(f"/api/diagrams/{diagram_id}", headers=other_auth)

    assert response.status_code == 404
    assert response.json()["detail"]["reason"] == "NotFound"


async def test_other_owner_cannot_modify_diagram(client, auth, other_auth):
    created = await client.post("/api/diagrams", json={"title": "Phase One"}, headers=auth)
    diagram_id = created.json()["diagram"]["id"]

    put = await client.put(
        f"/api/diagrams/{diagram_id}", json={"title": "Hijacked"}, headers=other_auth
    )
    delete = await client.delete(f"/api/diagrams/{diagram_id}", headers=other_auth)
    listing = await client.get("/api/diagrams", headers=other_auth)

    assert put.status_code == 404
    assert delete.status_code == 404
    assert listing.json() == {"diagrams": []}

    own = await client.get(f"/api/diagrams/{diagram_id}", headers=auth)
    assert own.json()["diagram"]["title"] == "Phase One"


async def test_image_limit(client, auth, make_image):
    eleven = [make_image(f"{i}.png") for i in range(11)]

    rejected = await client.post(
        "/api/diagrams", json={"title": "Too Many", "images": eleven}, headers=auth
    )
    accepted = await client.post(
        "/api/diagrams", json={"title": "Just Enough", "images": eleven[:10]}, headers=auth
    )

    assert rejected.status_code == 400
    assert rejected.json()["detail"]["reason"] == "TooManyImages"
    assert accepted.status_code == 201
    assert len(accepted.json()["diagram"]["images"]) == 10


async def test_title_only_update_keeps_structure(client, auth, make_node, make_edge):
    nodes = [make_node("a"), make_node("b", x=200)]
    edges = [make_edge("a", "b")]
    created = await client.post(
        "/api/diagrams",
        json={"title": "Phase One", "nodes": nodes, "edges": edges},
        headers=auth,
    )
    diagram_id = created.json()["diagram"]["id"]

    response = await client.put(
        f"/api/diagrams/{diagram_id}", json={"title": "New Title"}, headers=auth
    )

    assert response.status_code == 200
    diagram = response.json()["diagram"]
    assert diagram["title"] == "New Title"
    assert diagram["nodes"] == nodes
    assert diagram["edges"] == edges


async def test_created_diagram_reads_back_unchanged(client, auth, make_node, make_edge, make_image):
    body = {
        "title": "Phase One",
        "description": "Opening moves",
        "nodes": [
            make_node("a", width=150, image=make_image("a.png")),
            make_node("b", x=10.5, y=-4),
        ],
        "edges": [make_edge("a", "b", sourceHandle="right", animated=True)],
        "images": [make_image("cover.webp", mime_type="image/webp")],
    }

    created = await client.post("/api/diagrams", json=body, headers=auth)
    diagram_id = created.json()["diagram"]["id"]
    fetched = (await client.get(f"/api/diagrams/{diagram_id}", headers=auth)).json()["diagram"]

    for key in ("title", "description", "nodes", "edges", "images"):
        assert fetched[key] == body[key]
    assert fetched["isTemplate"] is False


async def test_repeated_update_is_idempotent(client, auth, make_node):
    created = await client.post("/api/diagrams", json={"title": "Phase One"}, headers=auth)
    diagram_id = created.json()["diagram"]["id"]
    patch = {"description": "Same", "nodes": [make_node("a")]}

    first = await client.put(f"/api/diagrams/{diagram_id}", json=patch, headers=auth)
    second = await client.put(f"/api/diagrams/{diagram_id}", json=patch, headers=auth)

    strip = lambda d: {k: v for k, v in d.items() if k != "updatedAt"}
    assert strip(first.json()["diagram"]) == strip(second.json()["diagram"])


async def test_list_is_most_recently_updated_first(client, auth):
    first = await client.post("/api/diagrams", json={"title": "First"}, headers=auth)
    await client.post("/api/diagrams", json={"title": "Second"}, headers=auth)
    await client.put(
        f"/api/diagrams/{first.json()['diagram']['id']}",
        json={"description": "touched"},
        headers=auth,
    )

    response = await client.get("/api/diagrams", headers=auth)

    assert [d["title"] for d in response.json()["diagrams"]] == ["First", "Second"]


async def test_templates_are_listed_separately(client, auth):
    await client.post("/api/diagrams", json={"title": "Regular"}, headers=auth)
    await client.post(
        "/api/diagrams", json={"title": "Opener Template", "isTemplate": True}, headers=auth
    )

    diagrams = (await client.get("/api/diagrams", headers=auth)).json()["diagrams"]
    templates = (await client.get("/api/templates", headers=auth)).json()["templates"]

    assert [d["title"] for d in diagrams] == ["Regular"]
    assert [t["title"] for t in templates] == ["Opener Template"]


async def test_delete_then_get_is_not_found(client, auth):
    created = await client.post("/api/diagrams", json={"title": "Phase One"}, headers=auth)
    diagram_id = created.json()["diagram"]["id"]

    deleted = await client.delete(f"/api/diagrams/{diagram_id}", headers=auth)
    fetched = await client.get(f"/api/diagrams/{diagram_id}", headers=auth)

    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Diagram deleted successfully"}
    assert fetched.status_code == 404


async def test_malformed_id_is_not_found(client, auth):
    response = await client.get("/api/diagrams/not-a-uuid", headers=auth)
    assert response.status_code == 404


async def test_unauthenticated_create_is_rejected(client):
    response = await client.post("/api/diagrams", json={"title": "Phase One"})
    assert response.status_code == 401


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
async def test_non_finite_position_is_rejected(client, auth, literal):
    body = (
        '{"title": "Valid Diagram", "nodes": [{"id": "n1", "type": "start", '
        f'"position": {{"x": {literal}, "y": 0}}, "data": {{}}}}]}}'
    )

    response = await client.post(
        "/api/diagrams", content=body, headers={**auth, "Content-Type": "application/json"}
    )
    listing = await client.get("/api/diagrams", headers=auth)

    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "InvalidType"
    assert response.json()["detail"]["field"] == "nodes[0].position.x"
    assert listing.json() == {"diagrams": []}


async def test_token_for_deleted_account_is_rejected(client, make_token):
    ghost = {"Authorization": f"Bearer {make_token(uuid.uuid4(), secret=SECRET)}"}

    response = await client.post("/api/diagrams", json={"title": "Phase One"}, headers=ghost)

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["detail"]["reason"] == "Unauthenticated"


async def test_update_reports_structure_error_before_title_conflict(client, auth):
    await client.post("/api/diagrams", json={"title": "Phase One"}, headers=auth)
    created = await client.post("/api/diagrams", json={"title": "Phase Two"}, headers=auth)
    diagram_id = created.json()["diagram"]["id"]

    response = await client.put(
        f"/api/diagrams/{diagram_id}",
        json={"title": "Phase One", "nodes": [{"id": "a"}]},
        headers=auth,
    )

    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "MissingField"


async def test_profile_stats_follow_diagram_activity(client, auth, make_node):
    nodes = [make_node("a"), make_node("b", x=200)]
    created = await client.post(
        "/api/diagrams", json={"title": "Phase One", "nodes": nodes}, headers=auth
    )
    diagram_id = created.json()["diagram"]["id"]
    await client.put(f"/api/diagrams/{diagram_id}", json={"nodes": nodes[:1]}, headers=auth)

    stats = await client.get("/api/profile/stats", headers=auth)
    profile = await client.get("/api/profile", headers=auth)

    assert stats.status_code == 200
    assert stats.json() == {"stats": {"diagramsCreated": 1, "nodesCreated": 1}}
    assert profile.json()["user"]["username"] == "alice"
