"""Moderation workflow and the admin-only surface."""
from uuid import uuid4

import pytest

from conftest import auth_header, create_project, register


ADMIN_ROUTES = [
    ("get", "/api/admin/users"),
    ("get", "/api/admin/projects"),
    ("get", "/api/admin/analytics"),
    ("put", "/api/admin/projects/{id}/approve"),
    ("put", "/api/admin/projects/{id}/reject"),
    ("put", "/api/admin/users/{id}/deactivate"),
]


@pytest.mark.parametrize("method, path", ADMIN_ROUTES)
def test_admin_routes_refuse_regular_users(client, method, path):
    token, user = register(client)
    project = create_project(client, token)
    target = project["id"] if "projects/" in path else user["id"]
    response = getattr(client, method)(path.format(id=target), headers=auth_header(token))
    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Admin access required"}


@pytest.mark.parametrize("method, path", ADMIN_ROUTES)
def test_admin_routes_require_authentication(client, method, path):
    response = getattr(client, method)(path.format(id=uuid4()))
    assert response.status_code == 401


def test_approve_scenario(client, admin):
    admin_token, admin_user = admin
    token, _ = register(client)
    project = create_project(client, token)
    assert project["id"] not in {p["id"] for p in client.get("/api/projects").json()["projects"]}

    response = client.put(f"/api/admin/projects/{project['id']}/approve", headers=auth_header(admin_token))
    assert response.status_code == 200
    approved = response.json()["project"]
    assert approved["status"] == "approved"
    assert approved["approved_by"] == admin_user["id"]
    assert approved["approved_at"] is not None

    assert project["id"] in {p["id"] for p in client.get("/api/projects").json()["projects"]}


def test_reject_then_reapprove_scenario(client, admin):
    admin_token, _ = admin
    token, _ = register(client)
    project = create_project(client, token)
    base = f"/api/admin/projects/{project['id']}"

    client.put(f"{base}/approve", headers=auth_header(admin_token))
    response = client.put(f"{base}/reject", json={"reason": "low quality"}, headers=auth_header(admin_token))
    assert response.status_code == 200
    rejected = response.json()["project"]
    assert rejected["status"] == "rejected"
    assert rejected["rejection_reason"] == "low quality"
    assert rejected["approved_at"] is None
    assert rejected["approved_by"] is None
    assert project["id"] not in {p["id"] for p in client.get("/api/projects").json()["projects"]}

    response = client.put(f"{base}/approve", headers=auth_header(admin_token))
    reapproved = response.json()["project"]
    assert reapproved["status"] == "approved"
    assert reapproved["rejection_reason"] is None
    assert reapproved["approved_at"] is not None


def test_reject_without_body_uses_empty_reason(client, admin):
    admin_token, _ = admin
    token, _ = register(client)
    project = create_project(client, token)
    response = client.put(f"/api/admin/projects/{project['id']}/reject", headers=auth_header(admin_token))
    assert response.status_code == 200
    assert response.json()["project"]["rejection_reason"] == ""


def test_repeating_a_transition_conflicts(client, admin):
    admin_token, _ = admin
    token, _ = register(client)
    project = create_project(client, token)
    url = f"/api/admin/projects/{project['id']}/approve"
    assert client.put(url, headers=auth_header(admin_token)).status_code == 200
    response = client.put(url, headers=auth_header(admin_token))
    assert response.status_code == 409
    assert response.json()["success"] is False


def test_moderating_unknown_project_is_404(client, admin):
    admin_token, _ = admin
    for action in ("approve", "reject"):
        response = client.put(f"/api/admin/projects/{uuid4()}/{action}", headers=auth_header(admin_token))
        assert response.status_code == 404


def test_admin_listing_filters_by_status(client, admin):
    admin_token, _ = admin
    token, _ = register(client)
    pending = create_project(client, token, title="Pending one")
    approved = create_project(client, token, title="Approved one")
    client.put(f"/api/admin/projects/{approved['id']}/approve", headers=auth_header(admin_token))

    def listed(**params):
        body = client.get("/api/admin/projects", params=params, headers=auth_header(admin_token)).json()
        return {p["id"] for p in body["projects"]}

    assert listed() == {pending["id"], approved["id"]}
    assert listed(status="pending") == {pending["id"]}
    assert listed(status="approved") == {approved["id"]}
    assert listed(status="rejected") == set()

    response = client.get("/api/admin/projects", params={"status": "bogus"}, headers=auth_header(admin_token))
    assert response.status_code == 400


def test_admin_lists_users_without_secrets(client, admin):
    admin_token, _ = admin
    register(client)
    response = client.get("/api/admin/users", headers=auth_header(admin_token))
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    for user in body["users"]:
        assert "hashed_password" not in user
        assert "password" not in user


def test_deactivating_unknown_user_is_404(client, admin):
    admin_token, _ = admin
    response = client.put(f"/api/admin/users/{uuid4()}/deactivate", headers=auth_header(admin_token))
    assert response.status_code == 404


def test_admin_cannot_deactivate_self(client, admin):
    admin_token, admin_user = admin
    response = client.put(f"/api/admin/users/{admin_user['id']}/deactivate", headers=auth_header(admin_token))
    assert response.status_code == 400
    assert client.get("/api/auth/me", headers=auth_header(admin_token)).status_code == 200


def test_deactivated_user_cannot_submit_projects(client, admin):
    admin_token, _ = admin
    token, user = register(client)
    client.put(f"/api/admin/users/{user['id']}/deactivate", headers=auth_header(admin_token))
    response = client.post(
        "/api/projects",
        json={"title": "t", "description": "d", "github": "g", "thumbnail": "x"},
        headers=auth_header(token),
    )
    assert response.status_code == 403


def test_analytics_summarises_projects(client, admin):
    admin_token, _ = admin
    token, user = register(client)
    first = create_project(client, token, tech_stack=["Python", "React"])
    second = create_project(client, token, title="Second", tech_stack=["Python"])
    create_project(client, token, title="Third")
    for p in (first, second):
        client.put(f"/api/admin/projects/{p['id']}/approve", headers=auth_header(admin_token))
    client.get(f"/api/projects/{second['id']}")

    response = client.get("/api/admin/analytics", headers=auth_header(admin_token))
    assert response.status_code == 200
    analytics = response.json()["analytics"]
    assert analytics["total_users"] == 2
    assert analytics["total_projects"] == 3
    assert (analytics["approved"], analytics["pending"], analytics["rejected"]) == (2, 1, 0)
    assert analytics["top_tech"][0] == {"name": "Python", "count": 2}
    assert sum(t["count"] for t in analytics["trends"]) == 3
    assert analytics["top_projects"][0]["id"] == second["id"]
    assert analytics["top_projects"][0]["author"]["id"] == user["id"]


def test_admin_listing_includes_author_contact(client, admin):
    admin_token, _ = admin
    token, user = register(client)
    create_project(client, token)

    listed = client.get("/api/admin/projects", headers=auth_header(admin_token)).json()["projects"]
    assert listed[0]["author"]["id"] == user["id"]
    assert listed[0]["author"]["name"] == "Alice"
    assert listed[0]["author"]["email"] == "alice@example.com"


def test_reject_accepts_null_reason(client, admin):
    admin_token, _ = admin
    token, _ = register(client)
    project = create_project(client, token)
    response = client.put(
        f"/api/admin/projects/{project['id']}/reject", json={"reason": None}, headers=auth_header(admin_token)
    )
    assert response.status_code == 200
    assert response.json()["project"]["status"] == "rejected"
    assert response.json()["project"]["rejection_reason"] == ""


@pytest.mark.parametrize(
    "path",
    [
        "/api/admin/projects/not-a-uuid/approve",
        "/api/admin/projects/not-a-uuid/reject",
        "/api/admin/users/not-a-uuid/deactivate",
        "/api/admin/users/not-a-uuid/activate",
    ],
)
def test_malformed_ids_on_admin_routes_are_404(client, admin, path):
    admin_token, _ = admin
    assert client.put(path, headers=auth_header(admin_token)).status_code == 404
