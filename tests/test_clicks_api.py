"""Click recording route (/api/clicks)."""

from unittest.mock import MagicMock

from bson import ObjectId
from pymongo.errors import PyMongoError

from api.deps import get_db


def test_record_click_returns_created_record(client, db):
    game_id = str(db.games.insert_one({"name": "Chess", "rating": 9}).inserted_id)

    r = client.post("/api/clicks", json={"gameId": game_id})
    assert r.status_code == 200
    body = r.json()
    assert body["gameId"] == game_id
    assert ObjectId.is_valid(body["_id"])
    assert body["createdAt"].endswith("Z")
    assert db.clicks.count_documents({"gameId": game_id}) == 1


def test_record_click_does_not_require_existing_game(client, db):
    r = client.post("/api/clicks", json={"gameId": "no-such-game"})
    assert r.status_code == 200
    assert r.json()["gameId"] == "no-such-game"
    assert db.games.count_documents({}) == 0


def test_clicks_are_append_only(client, db):
    for _ in range(3):
        assert client.post("/api/clicks", json={"gameId": "g1"}).status_code == 200
    assert db.clicks.count_documents({"gameId": "g1"}) == 3


def test_record_click_store_failure(app, client):
    broken = MagicMock()
    broken.__getitem__.side_effect = PyMongoError("write failed")
    app.dependency_overrides[get_db] = lambda: broken

    r = client.post("/api/clicks", json={"gameId": "g1"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to record click"}


def test_record_click_rejects_non_json_body(client, db):
    r = client.post("/api/clicks", content=b"not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 422
    assert r.json()["error"] == "Invalid request"
    assert db.clicks.count_documents({}) == 0
