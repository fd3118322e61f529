from conftest import auth_headers


def test_non_admin_cannot_list_users(client, token_service, manager, employee):
    for user in (manager, employee):
        resp = client.get("/api/users", headers=auth_headers(token_service, user))
        assert resp.status_code == 403


def test_admin_lists_users(client, token_service, admin, employee):
    resp = client.get("/api/users", params={"role": "EMPLOYEE"}, headers=auth_headers(token_service, admin))
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["total"] == 1
    assert body["users"][0]["id"] == employee.id


def test_admin_creates_user(client, token_service, admin):
    resp = client.post("/api/users", headers=auth_headers(token_service, admin), json={
        "email": "creado@teamops.com",
        "password": "Secret123!",
        "first_name": "Creado",
        "last_name": "Por Admin",
        "role": "MANAGER",
    })
    assert resp.status_code == 201, resp.text
    assert resp.json()["role"] == "MANAGER"


def test_duplicate_email_is_409(client, token_service, admin, employee):
    resp = client.post("/api/users", headers=auth_headers(token_service, admin), json={
        "email": employee.email,
        "password": "Secret123!",
        "first_name": "Otro",
        "last_name": "Igual",
    })
    assert resp.status_code == 409


def test_self_update_ignores_role(client, token_service, employee):
    resp = client.put(
        f"/api/users/{employee.id}",
        headers=auth_headers(token_service, employee),
        json={"first_name": "Juana", "role": "ADMIN", "is_active": False},
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["first_name"] == "Juana"
    assert body["role"] == "EMPLOYEE"
    assert body["is_active"] is True


def test_cannot_read_other_user(client, token_service, manager, employee):
    resp = client.get(f"/api/users/{manager.id}", headers=auth_headers(token_service, employee))
    assert resp.status_code == 403


def test_change_own_password(client, token_service, employee):
    resp = client.put(
        f"/api/users/{employee.id}/password",
        headers=auth_headers(token_service, employee),
        json={"current_password": "incorrecta", "new_password": "NuevaClave1"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Current password is incorrect"


def test_toggle_and_delete(client, token_service, admin, employee):
    headers = auth_headers(token_service, admin)
    resp = client.patch(f"/api/users/{employee.id}/toggle-status", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False

    assert client.delete(f"/api/users/{employee.id}", headers=headers).status_code == 200
    assert client.get(f"/api/users/{employee.id}", headers=headers).status_code == 404


def test_admin_cannot_delete_self(client, token_service, admin):
    resp = client.delete(f"/api/users/{admin.id}", headers=auth_headers(token_service, admin))
    assert resp.status_code == 400
