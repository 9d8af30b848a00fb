from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from transform_auth.domain.entities import Role
from transform_auth.infrastructure.models import UserORM
from transform_auth.interfaces.http.authz import get_revoked
from transform_auth.main import app


@pytest.fixture
def client(revoked):
    app.dependency_overrides[get_revoked] = lambda: revoked
    yield TestClient(app)
    app.dependency_overrides.pop(get_revoked, None)


@pytest.fixture
def admin_headers(make_user, tokens):
    admin = make_user(email="root@x.com", name="Root", role=Role.ADMIN)
    return {"Authorization": f"Bearer {tokens.issue(admin).token}"}


@pytest.fixture
def student_headers(make_user, tokens):
    student = make_user(email="eve@x.com", name="Eve")
    return {"Authorization": f"Bearer {tokens.issue(student).token}"}


def test_promote_to_admin(client, make_user, admin_headers):
    target = make_user()
    response = client.post(f"/api/users/{target.id}/promote", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == target.id
    assert data["role"] == "admin"
    assert "password" not in response.text.lower()


def test_promoted_user_can_promote_others(client, make_user, admin_headers):
    target = make_user()
    other = make_user(email="bob@x.com", name="Bob")
    client.post(f"/api/users/{target.id}/promote", headers=admin_headers)

    token = client.post("/api/login", json={"email": "ada@x.com", "password": "secret123"}).json()["token"]
    response = client.post(
        f"/api/users/{other.id}/promote", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200
    assert response.json()["role"] == "admin"


def test_promote_by_student_forbidden(client, make_user, student_headers, repo):
    target = make_user()
    response = client.post(f"/api/users/{target.id}/promote", headers=student_headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}
    assert repo.get_by_id(target.id).role is Role.STUDENT


def test_promote_unknown_user(client, admin_headers):
    response = client.post("/api/users/does-not-exist/promote", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_promote_without_token(client, make_user):
    target = make_user()
    response = client.post(f"/api/users/{target.id}/promote")
    assert response.status_code == 401


def test_list_users_newest_first(client, admin_headers, make_user, db):
    ada = make_user()
    bob = make_user(email="bob@x.com", name="Bob")
    # pin creation times so the order doesn't depend on clock resolution
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for offset, user_id in enumerate([ada.id, bob.id]):
        db.get(UserORM, user_id).created_at = base + timedelta(days=offset)
    db.commit()

    response = client.get("/api/users", headers=admin_headers)
    assert response.status_code == 200
    emails = [u["email"] for u in response.json()]
    # root was created "now", after the pinned dates
    assert emails == ["root@x.com", "bob@x.com", "ada@x.com"]
    for u in response.json():
        assert set(u) == {"id", "name", "email", "role", "createdAt", "lastLogin"}


def test_list_users_paging(client, admin_headers, make_user):
    make_user()
    make_user(email="bob@x.com", name="Bob")
    response = client.get("/api/users?limit=2&offset=1", headers=admin_headers)
    assert response.status_code == 200
    assert len(response.json()) == 2


def test_list_users_bad_paging(client, admin_headers):
    response = client.get("/api/users?limit=0", headers=admin_headers)
    assert response.status_code == 400


def test_list_users_as_student(client, student_headers):
    response = client.get("/api/users", headers=student_headers)
    assert response.status_code == 403
