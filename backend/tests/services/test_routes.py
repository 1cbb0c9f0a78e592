"""HTTP routes — projects, deletion, transfers through the FastAPI test client.

Tests cover:
    - Project creation makes the first project active
    - Deletion plan → transfer-delete moves records and the active pointer
    - Last-project deletion → 409 with structured envelope
    - Transfer errors map to 400/404; skipped ids come back with 200
    - Schema validation errors → 400 VALIDATION_ERROR
"""


async def _create(client, name: str) -> str:
    res = await client.post("/api/v1/projects", json={"name": name})
    assert res.status_code == 201
    return res.json()["id"]


async def test_health_is_ok(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_first_created_project_becomes_active(client):
    pid = await _create(client, "Savanna")
    res = await client.get("/api/v1/projects/active")
    assert res.json() == {"project_id": pid}


async def test_rename_project(client):
    pid = await _create(client, "Savanna")
    res = await client.patch(f"/api/v1/projects/{pid}", json={"name": "Grassland"})
    assert res.status_code == 200
    assert res.json()["name"] == "Grassland"


async def test_delete_last_project_is_conflict(client):
    pid = await _create(client, "Only")
    res = await client.post(f"/api/v1/projects/{pid}/delete", json={"mode": "purge"})
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "LAST_PROJECT_VIOLATION"
    listed = await client.get("/api/v1/projects")
    assert [p["id"] for p in listed.json()] == [pid]


async def test_transfer_delete_of_active_project(client):
    first = await _create(client, "First")
    second = await _create(client, "Second")

    plan = await client.get(f"/api/v1/projects/{first}/deletion-plan")
    assert plan.status_code == 200
    assert plan.json()["suggested_target"] == second
    assert plan.json()["is_active"] is True

    res = await client.post(
        f"/api/v1/projects/{first}/delete",
        json={"mode": "transfer", "target_project_id": second},
    )
    assert res.status_code == 200
    assert res.json()["new_active_partition_id"] == second
    assert res.json()["mode"] == "transfer"


async def test_transfer_mode_requires_target(client):
    pid = await _create(client, "First")
    res = await client.post(f"/api/v1/projects/{pid}/delete", json={"mode": "transfer"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_plan_for_unknown_project_is_404(client):
    res = await client.get("/api/v1/projects/nope/deletion-plan")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "INVALID_REFERENCE"


async def test_noop_transfer_is_400(client):
    pid = await _create(client, "First")
    res = await client.post("/api/v1/transfers/group", json={
        "source_project_id": pid, "target_project_id": pid, "species_ids": ["x"],
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "NO_OP_TRANSFER"


async def test_empty_selection_is_400(client):
    a = await _create(client, "A")
    b = await _create(client, "B")
    res = await client.post("/api/v1/transfers/selective", json={
        "source_project_id": a, "target_project_id": b, "individual_ids": [],
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "EMPTY_SELECTION"


async def test_unresolvable_ids_are_skipped_not_errors(client):
    a = await _create(client, "A")
    b = await _create(client, "B")
    res = await client.post("/api/v1/transfers/selective", json={
        "source_project_id": a, "target_project_id": b, "individual_ids": ["missing-ind"],
    })
    assert res.status_code == 200
    body = res.json()
    assert body["individuals_moved"] == 0
    assert body["skipped_ids"] == ["missing-ind"]


async def test_set_unknown_active_partition_is_404(client):
    await _create(client, "A")
    res = await client.put("/api/v1/projects/active", json={"project_id": "nope"})
    assert res.status_code == 404
