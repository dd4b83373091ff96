import uuid

import pytest

BASE = "/api/v1/dashboard/projects"


@pytest.fixture
def acme_url(project) -> str:
    return f"{BASE}/{project.name}"


class TestProjects:
    def test_create(self, client, owner_headers):
        response = client.post(f"{BASE}/", json={"name": "globex"}, headers=owner_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "globex"
        assert body["public"] is False

        key = client.get(f"{BASE}/globex/api-key/", headers=owner_headers)
        assert key.status_code == 200
        assert key.json()["key"]

    def test_create_requires_session(self, client):
        response = client.post(f"{BASE}/", json={"name": "globex"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_FAILED"

    def test_create_invalid_name(self, client, owner_headers):
        response = client.post(f"{BASE}/", json={"name": "No"}, headers=owner_headers)

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert "name" in body["details"]["fields"]

    def test_create_duplicate(self, client, project, other_headers):
        response = client.post(f"{BASE}/", json={"name": "acme"}, headers=other_headers)

        assert response.status_code == 409
        assert response.json()["details"] == {"resource": "Project", "field": "name"}

    def test_list_own_projects(self, client, project, owner_headers, other_headers):
        mine = client.get("/api/v1/projects/", headers=owner_headers).json()
        theirs = client.get("/api/v1/projects/", headers=other_headers).json()

        assert mine["count"] == 1
        assert mine["data"][0]["name"] == "acme"
        assert theirs == {"data": [], "count": 0}

    def test_detail(self, client, acme_url, locales, label, owner_headers):
        response = client.get(acme_url, headers=owner_headers)

        assert response.status_code == 200
        body = response.json()
        assert [loc["name"] for loc in body["locales"]] == ["en", "it"]
        assert body["labels"][0]["key"] == "greeting.hello"
        assert body["labels"][0]["translated_locales"] == []

    def test_non_owner_sees_not_found(self, client, acme_url, other_headers):
        for method in ("get", "patch", "delete"):
            kwargs = {"json": {"public": True}} if method == "patch" else {}
            response = getattr(client, method)(acme_url, headers=other_headers, **kwargs)
            assert response.status_code == 404

    def test_api_key_alone_cannot_write(self, client, acme_url, project):
        response = client.patch(
            acme_url, json={"public": True}, headers={"X-Api-Key": project.api_key.key}
        )
        assert response.status_code == 401

    def test_toggle_public(self, client, acme_url, owner_headers):
        response = client.patch(acme_url, json={"public": True}, headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["public"] is True
        assert client.get("/api/v1/projects/acme").status_code == 200

    def test_delete(self, client, acme_url, owner_headers):
        assert client.delete(acme_url, headers=owner_headers).status_code == 200
        assert client.get(acme_url, headers=owner_headers).status_code == 404

    def test_rotate_api_key(self, client, acme_url, project, owner_headers):
        old_key = project.api_key.key

        response = client.post(f"{acme_url}/api-key/rotate", headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["key"] != old_key
        assert client.get("/api/v1/projects/acme", headers={"X-Api-Key": old_key}).status_code == 404


class TestLocales:
    def test_create_list_and_detail(self, client, acme_url, owner_headers):
        created = client.post(f"{acme_url}/locales/", json={"name": "en"}, headers=owner_headers)
        assert created.status_code == 201

        listed = client.get(f"{acme_url}/locales/", headers=owner_headers)
        assert [loc["name"] for loc in listed.json()] == ["en"]

        detail = client.get(f"{acme_url}/locales/en", headers=owner_headers)
        assert detail.json()["translation_count"] == 0

    def test_create_duplicate(self, client, acme_url, locales, owner_headers):
        response = client.post(f"{acme_url}/locales/", json={"name": "en"}, headers=owner_headers)

        assert response.status_code == 409
        assert response.json()["error_code"] == "LOCALE_EXISTS"

    def test_create_invalid_name(self, client, acme_url, owner_headers):
        response = client.post(
            f"{acme_url}/locales/", json={"name": "en.us"}, headers=owner_headers
        )

        assert response.status_code == 422
        assert "name" in response.json()["details"]["fields"]

    def test_delete(self, client, acme_url, locales, owner_headers):
        assert client.delete(f"{acme_url}/locales/it", headers=owner_headers).status_code == 200
        assert client.delete(f"{acme_url}/locales/it", headers=owner_headers).status_code == 404


class TestLabels:
    def test_create_and_list(self, client, acme_url, owner_headers):
        created = client.post(
            f"{acme_url}/labels/",
            json={"key": "menu.open", "description": "Open menu"},
            headers=owner_headers,
        )
        assert created.status_code == 201

        listed = client.get(f"{acme_url}/labels/", headers=owner_headers).json()
        assert [item["key"] for item in listed] == ["menu.open"]

    def test_create_duplicate(self, client, acme_url, label, owner_headers):
        response = client.post(
            f"{acme_url}/labels/", json={"key": label.key}, headers=owner_headers
        )

        assert response.status_code == 409
        assert response.json()["details"] == {"resource": "Label", "field": "key"}

    def test_create_invalid_key(self, client, acme_url, owner_headers):
        response = client.post(
            f"{acme_url}/labels/", json={"key": "Menu.Open"}, headers=owner_headers
        )

        assert response.status_code == 422
        assert "key" in response.json()["details"]["fields"]

    def test_create_prefix_collision(self, client, acme_url, label, owner_headers):
        response = client.post(
            f"{acme_url}/labels/", json={"key": "greeting"}, headers=owner_headers
        )

        assert response.status_code == 422
        assert "key" in response.json()["details"]["fields"]

    def test_upsert_translations_and_detail(
        self, client, acme_url, locales, label, owner_headers
    ):
        en, it = locales
        url = f"{acme_url}/labels/{label.id}"
        payload = {
            "translations": [
                {"locale_id": str(en.id), "value": "Hello"},
                {"locale_id": str(it.id), "value": "Ciao"},
            ]
        }

        first = client.put(f"{url}/translations", json=payload, headers=owner_headers)
        assert first.status_code == 200
        assert first.json()["created"] == 2

        second = client.put(f"{url}/translations", json=payload, headers=owner_headers)
        assert second.json()["unchanged"] == 2

        detail = client.get(url, headers=owner_headers).json()
        assert {t["locale_id"]: t["value"] for t in detail["translations"]} == {
            str(en.id): "Hello",
            str(it.id): "Ciao",
        }

    def test_update(self, client, acme_url, label, owner_headers):
        response = client.patch(
            f"{acme_url}/labels/{label.id}",
            json={"key": "greeting.hi"},
            headers=owner_headers,
        )

        assert response.status_code == 200
        assert response.json()["key"] == "greeting.hi"

    def test_delete(self, client, acme_url, label, owner_headers):
        url = f"{acme_url}/labels/{label.id}"

        assert client.delete(url, headers=owner_headers).status_code == 200
        response = client.delete(url, headers=owner_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "LABEL_NOT_FOUND"

    def test_label_of_other_project_is_not_found(
        self, client, label, owner_headers
    ):
        client.post(f"{BASE}/", json={"name": "globex"}, headers=owner_headers)

        response = client.get(f"{BASE}/globex/labels/{label.id}", headers=owner_headers)
        assert response.status_code == 404

    def test_unknown_label_is_not_found(self, client, acme_url, owner_headers):
        response = client.get(f"{acme_url}/labels/{uuid.uuid4()}", headers=owner_headers)
        assert response.status_code == 404

    def test_writes_require_session(self, client, acme_url, label):
        response = client.put(
            f"{acme_url}/labels/{label.id}/translations", json={"translations": []}
        )
        assert response.status_code == 401


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
