"""Tests for /users."""

from sqlalchemy.exc import OperationalError

from utils.repository import Repository


class TestCreateUser:

    def test_email_is_lowercased_and_duplicates_conflict(self, client):
        first = client.post("/users", json={"name": "Jane Doe", "email": "JANE@X.COM"})
        assert first.status_code == 201
        assert first.json()["email"] == "jane@x.com"

        second = client.post("/users", json={"name": "Jane2", "email": "jane@x.com"})
        assert second.status_code == 409
        assert second.json() == {"error": "User already exists"}

        assert len(client.get("/users").json()) == 1

    def test_defaults_role_and_avatar(self, client):
        body = client.post("/users", json={"name": "Jane Doe", "email": "jane@x.com"}).json()

        assert body["role"] == "Site Engineer"
        assert body["avatar"].startswith("https://ui-avatars.com/api/?name=Jane")
        assert body["id"].startswith("user-")
        assert body["createdAt"]

    def test_keeps_explicit_role_and_phone(self, client):
        body = client.post(
            "/users",
            json={"name": "Pat", "email": "pat@x.com", "role": "Project Manager", "phone": "9779800000001"},
        ).json()

        assert body["role"] == "Project Manager"
        assert body["phone"] == "9779800000001"

    def test_ids_are_unique(self, client):
        ids = {
            client.post("/users", json={"name": f"User {i}", "email": f"user{i}@x.com"}).json()["id"]
            for i in range(5)
        }
        assert len(ids) == 5
        assert all(ids)

    def test_password_is_hashed_and_never_returned(self, client, db_session):
        from models.users import User

        body = client.post("/users", json={"name": "Sec", "email": "sec@x.com", "password": "s3cret"}).json()

        assert "password" not in body
        stored = db_session.get(User, body["id"])
        assert stored.password and stored.password != "s3cret"

    def test_missing_fields_are_rejected(self, client):
        response = client.post("/users", json={"name": "No Email"})

        assert response.status_code == 400
        assert "email" in response.json()["error"]

    def test_blank_name_is_rejected(self, client):
        response = client.post("/users", json={"name": "   ", "email": "blank@x.com"})
        assert response.status_code == 400


class TestListUsers:

    def test_empty(self, client):
        response = client.get("/users")
        assert response.status_code == 200
        assert response.json() == []

    def test_store_failure_is_reported_as_server_error(self, client, monkeypatch):
        def boom(self, **filters):
            raise OperationalError("SELECT * FROM users", {}, Exception("database is locked"))

        monkeypatch.setattr(Repository, "find_all", boom)
        response = client.get("/users")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to fetch users"
        assert "database is locked" in body["details"]


def test_unsupported_method(client):
    response = client.delete("/users")
    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}


def test_malformed_json_body(client):
    response = client.post("/users", content=b'{"name": "Jane", ', headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid JSON body"
