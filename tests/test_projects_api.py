"""
API tests for projects, membership and the project chat group.
"""

API = "/api/v1/projects"


def create_project(client, headers, **body):
    payload = {"name": "Apollo", "description": "Launch site"}
    payload.update(body)
    return client.post(API, json=payload, headers=headers)


class TestCreateProject:
    """Project creation is one unit of work."""

    def test_creates_members_and_group(self, client, headers_for, manager, employee):
        resp = create_project(client, headers_for(manager), member_ids=[employee.id, employee.id, 999])
        assert resp.status_code == 201
        project = resp.json()
        assert project["status"] == "PLANNING"
        assert project["manager"]["id"] == manager.id

        members = client.get(f"{API}/{project['id']}/members", headers=headers_for(manager)).json()
        assert sorted((m["user_id"], m["role"]) for m in members) == sorted(
            [(manager.id, "OWNER"), (employee.id, "MEMBER")]
        )

        group = client.get(f"/api/v1/chat/project/{project['id']}/group", headers=headers_for(manager)).json()
        assert group["name"] == "Apollo Group"
        assert group["type"] == "PROJECT_TEAM"

    def test_employee_cannot_create(self, client, headers_for, employee):
        resp = create_project(client, headers_for(employee))
        assert resp.status_code == 403
        assert resp.json()["error"] == "Forbidden"

    def test_unknown_status_falls_back(self, client, headers_for, manager):
        resp = create_project(client, headers_for(manager), status="launched")
        assert resp.json()["status"] == "PLANNING"


class TestMembership:
    """Adding, checking and removing members."""

    def test_duplicate_member_rejected(self, client, headers_for, manager, employee):
        project = create_project(client, headers_for(manager), member_ids=[employee.id]).json()
        resp = client.post(f"{API}/{project['id']}/members", json={"user_id": employee.id},
                           headers=headers_for(manager))
        assert resp.status_code == 400
        assert resp.json()["message"] == "User is already a member of this project"

    def test_add_check_remove(self, client, headers_for, manager, employee):
        project = create_project(client, headers_for(manager)).json()
        check = f"{API}/{project['id']}/members/{employee.id}/check"
        assert client.get(check, headers=headers_for(manager)).json() is False

        resp = client.post(f"{API}/{project['id']}/members", json={"user_id": employee.id, "role": "manager"},
                           headers=headers_for(manager))
        assert resp.status_code == 201
        assert resp.json()["role"] == "MANAGER"
        assert client.get(check, headers=headers_for(manager)).json() is True

        resp = client.delete(f"{API}/{project['id']}/members/{employee.id}", headers=headers_for(manager))
        assert resp.status_code == 204
        assert client.get(check, headers=headers_for(manager)).json() is False

    def test_unknown_project_is_not_found_even_for_employee(self, client, headers_for, employee):
        resp = client.post(f"{API}/999/members", json={"user_id": employee.id}, headers=headers_for(employee))
        assert resp.status_code == 404


class TestVisibility:
    """Managers see all projects, employees only their own."""

    def test_listing(self, client, headers_for, manager, employee, other_employee):
        create_project(client, headers_for(manager), name="Apollo", member_ids=[employee.id])
        create_project(client, headers_for(manager), name="Gemini")

        names = [p["name"] for p in client.get(API, headers=headers_for(manager)).json()]
        assert names == ["Apollo", "Gemini"]
        names = [p["name"] for p in client.get(API, headers=headers_for(employee)).json()]
        assert names == ["Apollo"]
        assert client.get(API, headers=headers_for(other_employee)).json() == []

    def test_non_member_cannot_view(self, client, headers_for, manager, other_employee):
        project = create_project(client, headers_for(manager)).json()
        resp = client.get(f"{API}/{project['id']}", headers=headers_for(other_employee))
        assert resp.status_code == 403


class TestUpdates:
    """Updates, financials and deletion."""

    def test_financials(self, client, headers_for, manager):
        project = create_project(client, headers_for(manager)).json()
        resp = client.patch(f"{API}/{project['id']}/financials", json={"revenue": "1500.50"},
                            headers=headers_for(manager))
        assert resp.status_code == 200
        assert float(resp.json()["revenue"]) == 1500.5
        assert float(resp.json()["expenses"]) == 0.0

    def test_update_status(self, client, headers_for, manager):
        project = create_project(client, headers_for(manager)).json()
        resp = client.put(f"{API}/{project['id']}", json={"status": "in_progress"}, headers=headers_for(manager))
        assert resp.json()["status"] == "IN_PROGRESS"

    def test_delete_removes_group(self, client, headers_for, manager):
        project = create_project(client, headers_for(manager)).json()
        assert client.delete(f"{API}/{project['id']}", headers=headers_for(manager)).status_code == 204
        assert client.get(f"{API}/{project['id']}", headers=headers_for(manager)).status_code == 404
        resp = client.get(f"/api/v1/chat/project/{project['id']}/group", headers=headers_for(manager))
        assert resp.status_code == 404
