"""
API tests for registration, login and the current-user endpoints.
"""


def register(client, **body):
    payload = {"name": "Rita", "email": "rita@acme.io", "password": "hunter22"}
    payload.update(body)
    return client.post("/auth/register", json=payload)


class TestRegistration:
    """Tests for /auth/register."""

    def test_defaults_to_employee(self, client):
        resp = register(client)
        assert resp.status_code == 201
        assert resp.json()["role"] == "EMPLOYEE"
        assert "hashed_password" not in resp.json()

    def test_unknown_role_falls_back(self, client):
        assert register(client, role="admin").json()["role"] == "EMPLOYEE"
        assert register(client, email="max@acme.io", role="manager").json()["role"] == "MANAGER"

    def test_duplicate_email(self, client):
        register(client)
        resp = register(client)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Email is already in use"


class TestLogin:
    """Tests for /auth/login and /auth/token."""

    def test_json_login_returns_token(self, client):
        user = register(client).json()
        resp = client.post("/auth/login", json={"email": "rita@acme.io", "password": "hunter22"})
        assert resp.status_code == 200
        token = resp.json()
        assert token["token_type"] == "bearer"
        assert token["user_id"] == user["id"]

        me = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token['access_token']}"})
        assert me.json()["email"] == "rita@acme.io"

    def test_form_login(self, client):
        register(client)
        resp = client.post("/auth/token", data={"username": "rita@acme.io", "password": "hunter22"})
        assert resp.status_code == 200
        assert resp.json()["access_token"]

    def test_wrong_password(self, client):
        register(client)
        resp = client.post("/auth/login", json={"email": "rita@acme.io", "password": "nope-nope"})
        assert resp.status_code == 401
        assert resp.json()["message"] == "Invalid email or password"

    def test_garbage_token(self, client):
        resp = client.get("/api/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401
        assert resp.json()["error"] == "Unauthorized"


class TestUsers:
    """Tests for /api/v1/users."""

    def test_change_password(self, client, headers_for, employee, password):
        resp = client.put("/api/v1/users/me/password", headers=headers_for(employee),
                          json={"current_password": password, "new_password": "brand-new"})
        assert resp.status_code == 204
        resp = client.post("/auth/login", json={"email": employee.email, "password": "brand-new"})
        assert resp.status_code == 200

    def test_wrong_current_password(self, client, headers_for, employee):
        resp = client.put("/api/v1/users/me/password", headers=headers_for(employee),
                          json={"current_password": "guess", "new_password": "brand-new"})
        assert resp.status_code == 400

    def test_listing_is_manager_only(self, client, headers_for, manager, employee):
        assert client.get("/api/v1/users", headers=headers_for(employee)).status_code == 403
        users = client.get("/api/v1/users", headers=headers_for(manager)).json()
        assert [u["email"] for u in users] == [manager.email, employee.email]
