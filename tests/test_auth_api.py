from conftest import DEFAULT_PASSWORD, auth_headers, make_user


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200, resp.text
    assert resp.json()["database"] == "connected"


def test_register_returns_tokens_and_cookie(client):
    resp = client.post("/api/auth/register", json={
        "email": "nuevo@teamops.com",
        "password": "Secret123!",
        "first_name": "Nuevo",
        "last_name": "Usuario",
    })
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["role"] == "EMPLOYEE"
    assert "password_hash" not in data["user"]
    assert "refresh_token" in resp.cookies


def test_register_validation_errors_are_400(client):
    resp = client.post("/api/auth/register", json={"email": "no-es-email", "password": "corta"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "Validation Error"
    fields = {err["field"] for err in body["errors"]}
    assert {"email", "password", "first_name", "last_name"} <= fields


def test_login_and_me(client, employee):
    resp = client.post("/api/auth/login", json={"email": employee.email, "password": DEFAULT_PASSWORD})
    assert resp.status_code == 200, resp.text
    token = resp.json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["id"] == employee.id


def test_login_wrong_password(client, employee):
    resp = client.post("/api/auth/login", json={"email": employee.email, "password": "incorrecta"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid email or password"


def test_missing_token_is_401(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Access token required"


def test_deactivated_user_token_rejected(client, db, token_service):
    user = make_user(db, "baja@teamops.com")
    headers = auth_headers(token_service, user)
    user.is_active = False
    db.commit()
    assert client.get("/api/auth/me", headers=headers).status_code == 401


def test_refresh_from_body(client, employee):
    login = client.post("/api/auth/login", json={"email": employee.email, "password": DEFAULT_PASSWORD})
    refresh_token = login.cookies["refresh_token"]
    client.cookies.clear()

    resp = client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
    assert resp.status_code == 200, resp.text
    assert resp.json()["access_token"]


def test_refresh_with_access_token_is_401(client, employee):
    login = client.post("/api/auth/login", json={"email": employee.email, "password": DEFAULT_PASSWORD})
    client.cookies.clear()
    resp = client.post("/api/auth/refresh", json={"refresh_token": login.json()["access_token"]})
    assert resp.status_code == 401


def test_refresh_without_token_is_400(client):
    resp = client.post("/api/auth/refresh")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Refresh token required"


def test_logout(client):
    resp = client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Logout successful"
