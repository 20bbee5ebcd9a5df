"""Tree Routes — HTTP surface over the editor session.

Invariants:
    - Mutation endpoints return 200 with applied=false on permissive no-ops
    - Strict-mode and persistence errors map to the BannerDeskError envelope
    - displayed-banner reads 404 on unknown ids
"""

from app.infrastructure.json_file_repository import JsonFileTreeRepository
from app.main import app
from app.services.editor_session import EditorSession



async def test_get_tree(client):
    res = await client.get("/api/v1/tree")
    assert res.status_code == 200
    payroll = res.json()["departments"][0]["sections"][0]
    assert payroll["selected_type"] == "hero"
    assert payroll["displayed_content"] == "<img src=a>"
    assert payroll["banners"][0]["banner_id"] == 1


async def test_create_department(client):
    res = await client.post("/api/v1/departments", json={"name": "Finance"})
    assert res.status_code == 200
    body = res.json()
    assert body["applied"] is True
    assert body["tree"]["departments"][-1] == {"id": 3, "name": "Finance", "sections": []}


async def test_create_section_unknown_department(client):
    res = await client.post("/api/v1/departments/99/sections", json={"name": "X"})
    assert res.status_code == 200
    body = res.json()
    assert body["applied"] is False
    assert body["error_code"] == "DEPARTMENT_NOT_FOUND"


async def test_banner_flow(client):
    await client.post("/api/v1/departments/1/sections", json={"name": "Events"})
    for banner_type in ("hero", "side", "footer"):
        res = await client.post(
            "/api/v1/departments/1/sections/3/banners",
            json={"type": banner_type, "content": f"<{banner_type}>"},
        )
        assert res.json()["applied"] is True

    res = await client.post(
        "/api/v1/departments/1/sections/3/banners",
        json={"type": "extra", "content": "<extra>"},
    )
    assert res.json()["applied"] is False
    assert res.json()["error_code"] == "BANNER_CAPACITY_EXCEEDED"

    res = await client.put(
        "/api/v1/departments/1/sections/3/selection", json={"type": "side"},
    )
    section = res.json()["tree"]["departments"][0]["sections"][2]
    assert section["displayed_content"] == "<side>"


async def test_displayed_banner(client):
    res = await client.get("/api/v1/departments/1/sections/1/displayed-banner")
    assert res.status_code == 200
    body = res.json()
    assert body["label"] == "Hero"
    assert body["banner_types"] == ["hero", "side"]
    assert body["slots_remaining"] == 1


async def test_displayed_banner_unknown_section(client):
    res = await client.get("/api/v1/departments/1/sections/9/displayed-banner")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "SECTION_NOT_FOUND"


async def test_invalid_body_returns_400(client):
    res = await client.post("/api/v1/departments/1/sections/1/banners", json={"type": "hero"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    error = res.json()["error"]
    assert error["context"] == {
        "department_id": 1,
        "section_id": 1,
        "path": "/api/v1/departments/1/sections/1/banners",
    }
    assert error["details"][0]["location"] == "body"
    assert error["details"][0]["field"] == "content"


async def test_non_integer_path_id_returns_400(client):
    res = await client.post("/api/v1/departments/hr/sections", json={"name": "X"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["context"]["department_id"] is None
    assert error["details"][0]["location"] == "path"
    assert error["details"][0]["field"] == "department_id"


async def test_save_and_reload(client, repository):
    await client.post("/api/v1/departments", json={"name": "Finance"})
    res = await client.post("/api/v1/tree/save")
    assert res.status_code == 200
    assert res.json() == {"status": "saved", "departments": 3}
    assert repository.save_count == 1

    await client.post("/api/v1/departments", json={"name": "Unsaved"})
    res = await client.post("/api/v1/tree/reload")
    assert [d["name"] for d in res.json()["departments"]] == ["HR", "IT", "Finance"]


async def test_strict_mode_maps_to_404(client, repository):
    app.state.editor_session = EditorSession(repository, strict=True)
    await app.state.editor_session.load()
    res = await client.post("/api/v1/departments/99/sections", json={"name": "X"})
    assert res.status_code == 404
    assert res.json()["error"]["context"]["department_id"] == 99


async def test_strict_capacity_maps_to_409(client, repository):
    app.state.editor_session = EditorSession(repository, strict=True)
    await app.state.editor_session.load()
    await client.post(
        "/api/v1/departments/1/sections/1/banners", json={"type": "c", "content": "3"},
    )
    res = await client.post(
        "/api/v1/departments/1/sections/1/banners", json={"type": "d", "content": "4"},
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "BANNER_CAPACITY_EXCEEDED"


async def test_save_failure_returns_503(client, failing_repository):
    app.state.editor_session = EditorSession(failing_repository)
    res = await client.post("/api/v1/tree/save")
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "PERSISTENCE_ERROR"


async def test_reload_missing_document_returns_404(client, empty_repository):
    app.state.editor_session = EditorSession(empty_repository)
    res = await client.post("/api/v1/tree/reload")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "DOCUMENT_NOT_FOUND"


async def test_reload_undecodable_file_returns_422(client, tmp_path):
    path = tmp_path / "data.json"
    path.write_bytes(b'{"departments": [{"id": 1, "name": "\xff"}]}')
    app.state.editor_session = EditorSession(JsonFileTreeRepository(path))
    res = await client.post("/api/v1/tree/reload")
    assert res.status_code == 422
    assert res.json()["error"]["code"] == "DOCUMENT_MALFORMED"
