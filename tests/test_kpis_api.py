import pytest

from conftest import auth_headers, make_kpi, make_project, make_value


@pytest.fixture
def project(db, manager, employee):
    return make_project(db, manager, members=[employee])


@pytest.fixture
def kpi(db, manager, project):
    return make_kpi(db, manager, project, name="Avance")


def test_create_and_filter_by_type(client, token_service, manager, project):
    headers = auth_headers(token_service, manager)
    resp = client.post("/api/kpis", headers=headers, json={
        "name": "Presupuesto", "type": "CURRENCY", "unit": "USD", "project_id": project.id,
    })
    assert resp.status_code == 201, resp.text
    assert resp.json()["project"]["id"] == project.id

    listing = client.get("/api/kpis", params={"type": "CURRENCY"}, headers=headers)
    assert [k["name"] for k in listing.json()] == ["Presupuesto"]


def test_employee_create_is_403(client, token_service, employee):
    resp = client.post("/api/kpis", headers=auth_headers(token_service, employee), json={"name": "X"})
    assert resp.status_code == 403


def test_member_records_value_outsider_cannot(client, token_service, employee, outsider, kpi):
    url = f"/api/kpis/{kpi.id}/values"
    resp = client.post(url, headers=auth_headers(token_service, employee), json={"value": 12.5, "notes": "ok"})
    assert resp.status_code == 201, resp.text
    assert resp.json()["user"]["id"] == employee.id

    resp = client.post(url, headers=auth_headers(token_service, outsider), json={"value": 1})
    assert resp.status_code == 403


def test_recorder_exception(client, db, token_service, manager, employee, kpi):
    own = make_value(db, kpi, employee)
    foreign = make_value(db, kpi, manager)
    headers = auth_headers(token_service, employee)

    resp = client.put(f"/api/kpis/{kpi.id}/values/{own.id}", headers=headers, json={"value": 9})
    assert resp.status_code == 200, resp.text
    assert resp.json()["value"] == 9

    resp = client.put(f"/api/kpis/{kpi.id}/values/{foreign.id}", headers=headers, json={"value": 9})
    assert resp.status_code == 403


def test_delete_kpi_cascades_to_values(client, db, token_service, manager, employee, kpi):
    value = make_value(db, kpi, employee)
    headers = auth_headers(token_service, manager)

    assert client.delete(f"/api/kpis/{kpi.id}", headers=headers).status_code == 200
    assert client.get(f"/api/kpis/{kpi.id}/values/{value.id}", headers=headers).status_code == 404


def test_values_newest_first(client, token_service, manager, kpi):
    headers = auth_headers(token_service, manager)
    url = f"/api/kpis/{kpi.id}/values"
    client.post(url, headers=headers, json={"value": 1, "date": "2024-01-01T00:00:00"})
    client.post(url, headers=headers, json={"value": 2, "date": "2024-02-01T00:00:00"})

    resp = client.get(url, headers=headers)
    assert [v["value"] for v in resp.json()] == [2, 1]
