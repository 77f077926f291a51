"""Tests for the Mediashelf API application factory and routes."""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.media_api import create_app  # noqa: E402
from backend.media_api.schemas import PlayerSessionModel  # noqa: E402
from backend.media_api.settings import MediaSettings  # noqa: E402
from backend.media_core import ConfigurationError  # noqa: E402

CATALOG = {
    "categories": ["movie", "series", "documentary"],
    "items": [
        {
            "id": "movie1",
            "title": "Assamese Blockbuster",
            "category": "movie",
            "thumbnailUrl": "https://img.test/movie1.jpg",
            "mediaUrl": "https://media.test/movie1.m3u8",
        },
        {
            "id": "series1",
            "title": "Tea Garden Chronicles",
            "category": "series",
            "thumbnailUrl": "https://img.test/series1.jpg",
            "mediaUrl": "https://media.test/series1.m3u8",
        },
        {
            "id": "movie2",
            "title": "Monsoon Express",
            "category": "movie",
            "thumbnailUrl": "https://img.test/movie2.jpg",
            "mediaUrl": "https://media.test/movie2.m3u8",
        },
    ],
}


@pytest.fixture()
def catalog_path(tmp_path: Path) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return path


@pytest.fixture()
def client(catalog_path: Path) -> TestClient:
    """Provide a test client backed by an isolated catalog file."""

    settings = MediaSettings(catalog_path=str(catalog_path))
    return TestClient(create_app(settings=settings))


def open_player(client: TestClient, content_id: str = "movie1") -> PlayerSessionModel:
    response = client.post("/players", json={"content_id": content_id})
    assert response.status_code == 201
    return PlayerSessionModel.model_validate(response.json())


def send_event(client: TestClient, session_id: str, **payload: object) -> dict:
    response = client.post(f"/players/{session_id}/events", json=payload)
    assert response.status_code == 200
    return response.json()


def test_health_endpoint_reports_catalog_size(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "version": "0.1.0",
        "catalog": {"items": 3, "categories": 3},
    }


def test_create_app_refuses_duplicate_ids(tmp_path: Path) -> None:
    """Startup must fail when the configured catalog repeats an id."""

    record = CATALOG["items"][0]
    path = tmp_path / "dupes.json"
    path.write_text(json.dumps({"items": [record, dict(record, category="series")]}), encoding="utf-8")

    with pytest.raises(ConfigurationError):
        create_app(settings=MediaSettings(catalog_path=str(path)))


def test_default_settings_use_bundled_catalog() -> None:
    client = TestClient(create_app(settings=MediaSettings()))

    response = client.get("/catalog/movie1")

    assert response.status_code == 200
    assert response.json()["title"] == "Assamese Blockbuster"


def test_catalog_lists_items_in_wire_shape(client: TestClient) -> None:
    response = client.get("/catalog")

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body] == ["movie1", "series1", "movie2"]
    assert body[0] == CATALOG["items"][0]


def test_catalog_filters_by_category(client: TestClient) -> None:
    response = client.get("/catalog", params={"category": "movie"})
    assert [item["id"] for item in response.json()] == ["movie1", "movie2"]

    empty = client.get("/catalog", params={"category": "anime"})
    assert empty.status_code == 200
    assert empty.json() == []


def test_category_rows_follow_configured_order(client: TestClient) -> None:
    response = client.get("/catalog/categories")

    assert response.status_code == 200
    rows = response.json()
    assert [row["name"] for row in rows] == ["movie", "series", "documentary"]
    assert [item["id"] for item in rows[0]["items"]] == ["movie1", "movie2"]
    assert rows[2]["items"] == []


def test_catalog_detail_returns_record(client: TestClient) -> None:
    response = client.get("/catalog/movie1")

    assert response.status_code == 200
    assert response.json() == CATALOG["items"][0]


def test_catalog_detail_unknown_id_returns_not_found(client: TestClient) -> None:
    """Resolver misses map to a distinguishable 404 body."""

    response = client.get("/catalog/doesnotexist")

    assert response.status_code == 404
    assert response.json() == {"detail": "Content not found", "id": "doesnotexist"}


def test_search_is_case_insensitive(client: TestClient) -> None:
    response = client.get("/search", params={"q": "ASSAMESE"})

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == ["movie1"]


def test_search_without_query_returns_full_catalog(client: TestClient) -> None:
    full = client.get("/search").json()

    assert [item["id"] for item in full] == ["movie1", "series1", "movie2"]
    assert client.get("/search", params={"q": "   "}).json() == full


def test_search_without_matches_returns_empty_list(client: TestClient) -> None:
    response = client.get("/search", params={"q": "nothing matches"})

    assert response.status_code == 200
    assert response.json() == []


def test_search_can_filter_by_category(client: TestClient) -> None:
    response = client.get("/search", params={"q": "e", "category": "series"})

    assert [item["id"] for item in response.json()] == ["series1"]


def test_presentation_config_exposes_placeholder(catalog_path: Path) -> None:
    settings = MediaSettings(
        catalog_path=str(catalog_path),
        placeholder_thumbnail_url="https://img.test/placeholder.png",
    )
    client = TestClient(create_app(settings=settings))

    response = client.get("/config/presentation")

    assert response.status_code == 200
    assert response.json() == {"placeholder_thumbnail_url": "https://img.test/placeholder.png"}


def test_open_player_mounts_in_loading_state(client: TestClient) -> None:
    session = open_player(client)

    assert session.content_id == "movie1"
    assert session.state == "loading"
    assert session.generation == 1
    assert session.media_url == "https://media.test/movie1.m3u8"
    assert session.load is not None
    assert session.load.generation == 1


def test_open_player_for_unknown_content_returns_not_found(client: TestClient) -> None:
    response = client.post("/players", json={"content_id": "doesnotexist"})

    assert response.status_code == 404
    assert response.json()["id"] == "doesnotexist"


def test_player_lifecycle_through_events_and_actions(client: TestClient) -> None:
    session = open_player(client)

    result = send_event(client, session.session_id, type="canplay", generation=1)
    assert result["applied"] is True
    assert result["session"]["state"] == "playing"

    paused = client.post(f"/players/{session.session_id}/pause")
    assert paused.status_code == 200
    assert paused.json()["state"] == "paused"

    resumed = client.post(f"/players/{session.session_id}/play")
    assert resumed.json()["state"] == "playing"
    assert resumed.json()["generation"] == 1


def test_player_error_and_retry_flow(client: TestClient) -> None:
    session = open_player(client)

    failed = send_event(client, session.session_id, type="error", generation=1, media_error_code=2)
    assert failed["session"]["state"] == "error"
    assert failed["session"]["error_kind"] == "network_error"

    retried = client.post(f"/players/{session.session_id}/retry")
    assert retried.status_code == 200
    body = retried.json()
    assert body["state"] == "loading"
    assert body["generation"] == 2
    assert body["error_kind"] is None
    assert body["load"] == {"generation": 2, "media_url": "https://media.test/movie1.m3u8"}

    ready = send_event(client, session.session_id, type="ready", generation=2)
    assert ready["session"]["state"] == "playing"


def test_retry_with_fallback_url(client: TestClient) -> None:
    session = open_player(client)
    send_event(client, session.session_id, type="error", generation=1, error_kind="unavailable_source")

    response = client.post(
        f"/players/{session.session_id}/retry",
        json={"fallback_url": "https://backup.test/movie1.mp4"},
    )

    assert response.status_code == 200
    assert response.json()["media_url"] == "https://backup.test/movie1.mp4"


def test_stale_event_is_reported_and_discarded(client: TestClient) -> None:
    session = open_player(client)
    client.post(f"/players/{session.session_id}/retry")

    result = send_event(client, session.session_id, type="ready", generation=1)

    assert result["applied"] is False
    assert result["session"]["state"] == "loading"
    assert result["session"]["generation"] == 2


def test_unknown_event_type_is_rejected(client: TestClient) -> None:
    session = open_player(client)

    response = client.post(
        f"/players/{session.session_id}/events", json={"type": "timeupdate", "generation": 1}
    )

    assert response.status_code == 422


def test_invalid_actions_return_conflict(client: TestClient) -> None:
    session = open_player(client)

    assert client.post(f"/players/{session.session_id}/play").status_code == 409

    send_event(client, session.session_id, type="ready", generation=1)
    assert client.post(f"/players/{session.session_id}/retry").status_code == 409


def test_attributes_update_without_transition(client: TestClient) -> None:
    session = open_player(client)
    send_event(client, session.session_id, type="ready", generation=1)

    response = client.put(
        f"/players/{session.session_id}/attributes", json={"volume": 0.25, "position": 12.5}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "playing"
    assert body["volume"] == 0.25
    assert body["position"] == 12.5


def test_attributes_rejected_in_error_state(client: TestClient) -> None:
    session = open_player(client)
    send_event(client, session.session_id, type="error", generation=1)

    response = client.put(f"/players/{session.session_id}/attributes", json={"volume": 0.5})

    assert response.status_code == 409


def test_players_are_independent(client: TestClient) -> None:
    first = open_player(client, "movie1")
    second = open_player(client, "movie2")

    send_event(client, first.session_id, type="error", generation=1)

    other = client.get(f"/players/{second.session_id}").json()
    assert other["state"] == "loading"
    assert other["error_kind"] is None


def test_close_player_discards_session(client: TestClient) -> None:
    session = open_player(client)

    response = client.delete(f"/players/{session.session_id}")
    assert response.status_code == 204

    assert client.get(f"/players/{session.session_id}").status_code == 404
    assert client.delete(f"/players/{session.session_id}").status_code == 404


@pytest.mark.parametrize(
    "body",
    ['{"volume": NaN}', '{"volume": Infinity}', '{"position": Infinity}', '{"position": NaN}'],
)
def test_attributes_reject_non_finite_numbers(client: TestClient, body: str) -> None:
    """Non-finite attribute values are a validation error, not a server error."""

    session = open_player(client)
    send_event(client, session.session_id, type="ready", generation=1)

    response = client.put(
        f"/players/{session.session_id}/attributes",
        content=body,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"][0] == "body"

    current = client.get(f"/players/{session.session_id}").json()
    assert current["volume"] == 1.0
    assert current["position"] == 0.0


def test_player_session_limit_comes_from_settings(catalog_path: Path) -> None:
    settings = MediaSettings(catalog_path=str(catalog_path), max_player_sessions=1)
    client = TestClient(create_app(settings=settings))

    first = open_player(client, "movie1")
    second = open_player(client, "movie2")

    assert client.get(f"/players/{first.session_id}").status_code == 404
    assert client.get(f"/players/{second.session_id}").status_code == 200
