"""
Tests for the /api/v1/songs HTTP endpoints.

These tests verify status codes, the ``{"data": ...}`` success envelope
and the ``{"error": ..., "details": ...}`` error body, including the
404 mapping for missing songs and 400 for malformed requests.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from song_library_api.app.core.config import Settings
from song_library_api.app.core.exceptions import StorageConnectionError
from song_library_api.app.main import create_app

SONGS = "/api/v1/songs"


def _create(client, **fields):
    response = client.post(SONGS, json=fields)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# =============================================================================
# Create / read
# =============================================================================


def test_create_song(client):
    response = client.post(SONGS, json={"group_name": "Muse", "song_name": "Supermassive Black Hole"})

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["id"] == 1
    assert data["song_name"] == "Supermassive Black Hole"
    assert data["text"] == ""
    assert data["release_date"] is None
    assert data["created_at"]
    assert data["updated_at"]


def test_create_ignores_store_managed_fields(client):
    data = _create(client, id=99, created_at="2000-01-01T00:00:00Z", song_name="Uprising")

    assert data["id"] == 1
    assert not data["created_at"].startswith("2000")


def test_create_with_trailing_slash(client):
    response = client.post(SONGS + "/", json={"song_name": "Uprising"})

    assert response.status_code == 201


def test_create_with_malformed_body_is_400(client):
    response = client.post(SONGS, content="{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request payload"
    assert body["details"]


def test_create_with_wrong_field_type_is_400(client):
    response = client.post(SONGS, json={"release_date": "not a date"})

    assert response.status_code == 400
    assert "release_date" in response.json()["details"]


def test_list_songs(client):
    _create(client, group_name="Muse", song_name="Hysteria")
    _create(client, group_name="Muse", song_name="Starlight")

    response = client.get(SONGS)

    assert response.status_code == 200
    assert [song["song_name"] for song in response.json()["data"]] == ["Hysteria", "Starlight"]


def test_list_empty(client):
    response = client.get(SONGS + "/")

    assert response.status_code == 200
    assert response.json() == {"data": []}


def test_get_song(client):
    created = _create(client, group_name="Muse", song_name="Madness", link="https://muse.mu")

    response = client.get(f"{SONGS}/{created['id']}")

    assert response.status_code == 200
    assert response.json()["data"] == created


def test_get_missing_song_is_404(client):
    response = client.get(f"{SONGS}/12345")

    assert response.status_code == 404
    assert response.json()["error"] == "Song not found"


def test_get_with_non_integer_id_is_400(client):
    response = client.get(f"{SONGS}/abc")

    assert response.status_code == 400


# =============================================================================
# Update / delete
# =============================================================================


def test_update_song(client):
    created = _create(client, group_name="Muse", song_name="Starlight", text="Far away")

    response = client.put(f"{SONGS}/{created['id']}", json={"song_name": "X"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["song_name"] == "X"
    assert data["group_name"] == "Muse"
    assert data["text"] == "Far away"
    assert data["created_at"] == created["created_at"]


def test_update_empty_string_clears_and_null_keeps(client):
    created = _create(client, song_name="Starlight", text="Far away", link="https://muse.mu")

    response = client.put(f"{SONGS}/{created['id']}", json={"text": "", "link": None})

    data = response.json()["data"]
    assert data["text"] == ""
    assert data["link"] == "https://muse.mu"


def test_update_missing_song_is_404(client):
    response = client.put(f"{SONGS}/77", json={"song_name": "X"})

    assert response.status_code == 404


def test_update_with_bad_payload_is_400(client):
    created = _create(client, song_name="Starlight")

    response = client.put(f"{SONGS}/{created['id']}", json={"song_name": ["X"]})

    assert response.status_code == 400


def test_delete_song(client):
    created = _create(client, group_name="Muse", song_name="Supermassive Black Hole")

    response = client.delete(f"{SONGS}/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"data": {"message": "Song deleted successfully"}}
    assert client.get(SONGS).json()["data"] == []
    assert client.get(f"{SONGS}/{created['id']}").status_code == 404


def test_delete_missing_song_is_404(client):
    response = client.delete(f"{SONGS}/5")

    assert response.status_code == 404
    assert response.json() == {"error": "Song not found", "details": "no song with id 5"}


# =============================================================================
# Storage failures
# =============================================================================


def test_storage_failure_is_500(client, repository):
    repository.conn.execute("DROP TABLE songs")

    response = client.get(SONGS)

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to retrieve songs"
    assert "no such table" in body["details"]


def test_openapi_lists_song_routes(client):
    paths = client.get("/openapi.json").json()["paths"]

    assert set(paths) == {SONGS, SONGS + "/{song_id}"}


def test_startup_fails_when_store_is_unreachable(tmp_path):
    app = create_app(settings=Settings(db_name=str(tmp_path / "missing" / "songs.db")))

    with pytest.raises(StorageConnectionError):
        with TestClient(app):
            pass


def test_startup_opens_and_closes_its_own_store(tmp_path):
    app = create_app(settings=Settings(db_name=str(tmp_path / "songs.db")))

    with TestClient(app) as client:
        assert _create(client, song_name="Uprising")["id"] == 1
    assert (tmp_path / "songs.db").exists()


# =============================================================================
# Input outside what the store can hold
# =============================================================================


@pytest.mark.parametrize("method", ["get", "delete"])
def test_oversized_id_is_404(client, method):
    response = getattr(client, method)(f"{SONGS}/99999999999999999999")

    assert response.status_code == 404
    assert response.json()["error"] == "Song not found"


def test_update_oversized_id_is_404(client):
    response = client.put(f"{SONGS}/99999999999999999999", json={"song_name": "X"})

    assert response.status_code == 404
    assert response.json()["error"] == "Song not found"


def test_create_with_lone_surrogate_is_400(client):
    response = client.post(
        SONGS,
        content='{"text": "\\ud800"}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request payload"
    assert "text" in response.json()["details"]
    assert client.get(SONGS).json()["data"] == []


def test_update_with_lone_surrogate_is_400(client):
    created = _create(client, song_name="Starlight")

    response = client.put(
        f"{SONGS}/{created['id']}",
        content='{"song_name": "\\udfff"}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert client.get(f"{SONGS}/{created['id']}").json()["data"]["song_name"] == "Starlight"


def test_release_date_cannot_be_cleared_once_set(client):
    created = _create(client, song_name="Starlight", release_date="2006-09-04T00:00:00Z")

    null_response = client.put(f"{SONGS}/{created['id']}", json={"release_date": None})
    empty_response = client.put(f"{SONGS}/{created['id']}", json={"release_date": ""})

    assert null_response.status_code == 200
    assert null_response.json()["data"]["release_date"] == created["release_date"]
    assert empty_response.status_code == 400
    stored = client.get(f"{SONGS}/{created['id']}").json()["data"]
    assert stored["release_date"] == created["release_date"]
