from conftest import auth_headers, make_project


def _create(client, token_service, user, manager_id, **extra):
    return client.post(
        "/api/projects",
        headers=auth_headers(token_service, user),
        json={"name": "Nuevo portal", "manager_id": manager_id, **extra},
    )


def test_employee_create_is_403_and_nothing_stored(client, token_service, admin, manager, employee):
    resp = _create(client, token_service, employee, manager.id)
    assert resp.status_code == 403

    listing = client.get("/api/projects", headers=auth_headers(token_service, admin))
    assert listing.json() == []


def test_manager_creates_then_completes(client, token_service, manager):
    resp = _create(client, token_service, manager, manager.id, budget=1500.5)
    assert resp.status_code == 201, resp.text
    project = resp.json()
    assert project["creator"]["id"] == manager.id
    assert project["status"] == "PLANNING"

    resp = client.put(
        f"/api/projects/{project['id']}",
        headers=auth_headers(token_service, manager),
        json={"status": "COMPLETED"},
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "COMPLETED"


def test_unknown_manager_is_400(client, token_service, admin):
    resp = _create(client, token_service, admin, "no-existe")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Manager not found or inactive"


def test_invalid_status_is_400(client, token_service, manager):
    resp = _create(client, token_service, manager, manager.id, status="FINISHED")
    assert resp.status_code == 400


def test_detail_visibility(client, db, token_service, manager, employee, outsider):
    project = make_project(db, manager, members=[employee])

    resp = client.get(f"/api/projects/{project.id}", headers=auth_headers(token_service, employee))
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert [e["user"]["id"] for e in body["employees"]] == [employee.id]
    assert body["kpis"] == []

    resp = client.get(f"/api/projects/{project.id}", headers=auth_headers(token_service, outsider))
    assert resp.status_code == 403


def test_list_filters_by_involvement(client, db, token_service, manager, other_manager, employee):
    make_project(db, manager, members=[employee], name="Visible")
    make_project(db, other_manager, name="Oculto")

    resp = client.get("/api/projects", headers=auth_headers(token_service, employee))
    assert [p["name"] for p in resp.json()] == ["Visible"]


def test_assign_twice_is_409(client, db, token_service, manager, employee):
    project = make_project(db, manager)
    headers = auth_headers(token_service, manager)
    url = f"/api/projects/{project.id}/assign"

    first = client.post(url, headers=headers, json={"user_id": employee.id, "role": "QA"})
    assert first.status_code == 201, first.text
    assert first.json()["user"]["id"] == employee.id

    second = client.post(url, headers=headers, json={"user_id": employee.id})
    assert second.status_code == 409

    removed = client.delete(f"{url}/{employee.id}", headers=headers)
    assert removed.status_code == 200


def test_delete_requires_admin(client, db, token_service, admin, manager):
    project = make_project(db, manager)
    assert client.delete(f"/api/projects/{project.id}", headers=auth_headers(token_service, manager)).status_code == 403
    assert client.delete(f"/api/projects/{project.id}", headers=auth_headers(token_service, admin)).status_code == 200
    assert client.get(f"/api/projects/{project.id}", headers=auth_headers(token_service, admin)).status_code == 404
