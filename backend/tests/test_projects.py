"""Tests for /projects."""

import pytest

from schemas.project import SUB_COLLECTIONS

SERVER_MANAGED = {"updatedAt", "version"}


def _camel(name):
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class TestCreateAndRead:

    def test_required_fields_only_defaults_every_sub_collection(self, project):
        for name, factory in SUB_COLLECTIONS.items():
            assert project[_camel(name)] == factory(), name
        assert project["environmentRegistry"] == {}
        assert project["boq"] == []
        assert project["version"] == 1

    def test_get(self, client, project):
        response = client.get(f"/projects/{project['id']}")

        assert response.status_code == 200
        assert response.json() == project
        assert response.headers["etag"] == '"1"'

    def test_get_unknown(self, client):
        response = client.get("/projects/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Project not found"}

    def test_generated_id(self, client):
        body = client.post("/projects", json={"name": "Bridge", "client": "DoR"}).json()
        assert body["id"].startswith("project-")

    def test_duplicate_id(self, client, project):
        response = client.post("/projects", json={"id": project["id"], "name": "Again", "client": "DoR"})
        assert response.status_code == 409

    @pytest.mark.parametrize("payload", [
        {"name": "No client"},
        {"client": "No name"},
        {"name": "", "client": "DoR"},
    ])
    def test_name_and_client_required(self, client, payload):
        assert client.post("/projects", json=payload).status_code == 400

    def test_list(self, client, project):
        response = client.get("/projects")
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [project["id"]]


class TestUpdate:

    def test_partial_update_leaves_other_fields_untouched(self, client, project):
        client.put(f"/projects/{project['id']}", json={
            "location": "Kathmandu",
            "rfis": [{"id": "rfi-1", "status": "Open"}],
            "settings": {"currency": "NPR"},
        })
        before = client.get(f"/projects/{project['id']}").json()

        response = client.put(f"/projects/{project['id']}", json={"name": "X"})

        assert response.status_code == 200
        after = response.json()
        assert after["name"] == "X"
        for key, value in before.items():
            if key not in SERVER_MANAGED | {"name"}:
                assert after[key] == value, key

    def test_sub_collection_is_replaced_as_a_whole(self, client, project):
        assert project["boq"] == []
        client.put(f"/projects/{project['id']}", json={"boq": [{"id": "b0", "quantity": 1}, {"id": "b9"}]})

        response = client.put(f"/projects/{project['id']}", json={"boq": [{"id": "b1", "quantity": 5}]})

        assert response.json()["boq"] == [{"id": "b1", "quantity": 5}]
        assert client.get(f"/projects/{project['id']}").json()["boq"] == [{"id": "b1", "quantity": 5}]

    def test_null_sub_collection_falls_back_to_default(self, client, project):
        client.put(f"/projects/{project['id']}", json={"vehicles": [{"id": "v1"}], "weather": {"temp": 21}})

        body = client.put(f"/projects/{project['id']}", json={"vehicles": None, "weather": None}).json()

        assert body["vehicles"] == []
        assert body["weather"] == {}

    def test_scalar_sub_collection_is_stored_as_is(self, client, project):
        body = client.put(f"/projects/{project['id']}", json={"labTests": "pending upload"}).json()
        assert body["labTests"] == "pending upload"

    def test_scalar_fields_and_dates(self, client, project):
        body = client.put(f"/projects/{project['id']}", json={
            "contractNo": "DOR/2024/17",
            "startDate": "2024-01-15",
            "projectManager": "Er. Kunwar",
        }).json()

        assert body["contractNo"] == "DOR/2024/17"
        assert body["startDate"].startswith("2024-01-15T00:00:00")
        assert body["projectManager"] == "Er. Kunwar"

    def test_dates_keep_their_time_of_day(self, client, project):
        response = client.put(f"/projects/{project['id']}", json={
            "startDate": "2024-01-14T18:15:00.000Z",
            "endDate": "2026-07-14T00:00:00Z",
        })

        assert response.status_code == 200
        assert response.json()["startDate"].startswith("2024-01-14T18:15:00")
        assert response.json()["endDate"].startswith("2026-07-14T00:00:00")

    def test_blank_dates_are_stored_as_null(self, client, project):
        client.put(f"/projects/{project['id']}", json={"startDate": "2024-01-15", "endDate": "2026-07-14"})

        response = client.put(f"/projects/{project['id']}", json={"startDate": "", "endDate": "  "})

        assert response.status_code == 200
        assert response.json()["startDate"] is None
        assert response.json()["endDate"] is None

    def test_create_with_blank_dates(self, client):
        response = client.post("/projects", json={"name": "Bridge", "client": "DoR", "startDate": "", "endDate": ""})

        assert response.status_code == 201
        assert response.json()["startDate"] is None

    def test_unknown_and_server_managed_keys_are_ignored(self, client, project):
        body = client.put(f"/projects/{project['id']}", json={
            "id": "hijack", "version": 99, "notAField": True, "engineer": "Sarah",
        }).json()

        assert body["id"] == project["id"]
        assert body["version"] == 2
        assert body["engineer"] == "Sarah"
        assert "notAField" not in body

    @pytest.mark.parametrize("payload", [{"name": None}, {"client": ""}, {"name": "   "}])
    def test_required_fields_cannot_be_cleared(self, client, project, payload):
        response = client.put(f"/projects/{project['id']}", json=payload)

        assert response.status_code == 400
        assert client.get(f"/projects/{project['id']}").json()["name"] == project["name"]

    def test_update_unknown(self, client):
        response = client.put("/projects/nope", json={"name": "X"})
        assert response.status_code == 404

    def test_version_and_etag_advance(self, client, project):
        response = client.put(f"/projects/{project['id']}", json={"code": "KRR"})

        assert response.json()["version"] == 2
        assert response.headers["etag"] == '"2"'

    def test_matching_if_match(self, client, project):
        etag = client.get(f"/projects/{project['id']}").headers["etag"]

        response = client.put(f"/projects/{project['id']}", json={"code": "A"}, headers={"If-Match": etag})
        assert response.status_code == 200

    def test_stale_if_match_is_rejected(self, client, project):
        etag = client.get(f"/projects/{project['id']}").headers["etag"]
        client.put(f"/projects/{project['id']}", json={"code": "first"})

        response = client.put(f"/projects/{project['id']}", json={"code": "second"}, headers={"If-Match": etag})

        assert response.status_code == 412
        assert client.get(f"/projects/{project['id']}").json()["code"] == "first"

    def test_concurrent_write_is_a_conflict(self, client, project, monkeypatch):
        from database import SessionLocal
        from models.project import Project
        from utils.repository import Repository

        original_update = Repository.update_by_id

        def update_after_another_writer(self, record_id, changes, commit=True):
            # Another request commits between our read and our write
            other = SessionLocal()
            try:
                original_update(Repository(other, Project), record_id, {"code": "first"})
            finally:
                other.close()
            return original_update(self, record_id, changes, commit)

        monkeypatch.setattr(Repository, "update_by_id", update_after_another_writer)
        response = client.put(f"/projects/{project['id']}", json={"code": "second"})
        monkeypatch.undo()

        assert response.status_code == 409
        assert response.json() == {"error": "Project was modified by another request"}
        stored = client.get(f"/projects/{project['id']}").json()
        assert stored["code"] == "first"
        assert stored["version"] == 2


class TestDelete:

    def test_delete_then_get(self, client, project):
        response = client.delete(f"/projects/{project['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/projects/{project['id']}").status_code == 404

    def test_delete_unknown(self, client):
        response = client.delete("/projects/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Project not found"}


def test_unsupported_method(client, project):
    response = client.patch(f"/projects/{project['id']}", json={"name": "X"})
    assert response.status_code == 405
