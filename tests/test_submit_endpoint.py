from __future__ import annotations

import importlib
import json
import sys

from fastapi.testclient import TestClient


_DEF_MODULES = [
    "quiz_core.config",
    "api.storage",
    "api.app",
]


def _reload_app(tmp_path, monkeypatch, quizzes: list[dict] | None = None):
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    if quizzes is not None:
        (tmp_path / "quizzes.json").write_text(json.dumps(quizzes), encoding="utf-8")
    for name in _DEF_MODULES:
        if name in sys.modules:
            importlib.reload(sys.modules[name])
        else:
            __import__(name)
    return sys.modules["api.storage"], sys.modules["api.app"]


def test_knowledge_submission_is_scored_and_stored(tmp_path, monkeypatch):
    _storage, app_module = _reload_app(tmp_path, monkeypatch)
    client = TestClient(app_module.app)

    resp = client.post("/quizzes/2/submit", json={"answers": {"21": 212, "22": 221, "23": 232}})
    assert resp.status_code == 200
    body = resp.json()
    assert body["result"]["id"] == 203
    assert (body["score"], body["max_score"]) == (3, 3)
    assert body["score_description"] == "3 of 3"
    assert body["calculation"]["type"] == "knowledge"
    assert body["calculation"]["details"]["correct_answers"] == 3

    stored = client.get(f"/submissions/{body['submission_id']}")
    assert stored.status_code == 200
    assert stored.json()["answers"] == {"21": 212, "22": 221, "23": 232}

    listed = client.get("/quizzes/2/submissions").json()["submissions"]
    assert [s["id"] for s in listed] == [body["submission_id"]]
    assert listed[0]["resultId"] == 203


def test_personality_submission_has_empty_description(tmp_path, monkeypatch):
    _storage, app_module = _reload_app(tmp_path, monkeypatch)
    client = TestClient(app_module.app)

    resp = client.post("/quizzes/1/submit", json={"answers": {"11": 112, "12": 122}})
    assert resp.status_code == 200
    body = resp.json()
    assert body["result"]["id"] == 102
    assert body["score"] == 5
    assert body["score_description"] == ""


def test_incomplete_submission_is_rejected(tmp_path, monkeypatch):
    _storage, app_module = _reload_app(tmp_path, monkeypatch)
    client = TestClient(app_module.app)

    resp = client.post("/quizzes/2/submit", json={"answers": {"21": 212}})
    assert resp.status_code == 400
    assert resp.json()["missing_questions"] == [22, 23]


def test_unknown_and_inactive_quizzes(tmp_path, monkeypatch):
    inactive = {
        "id": 9,
        "quizType": 3,
        "status": 2,
        "questions": [{"id": 91, "answers": [{"id": 1, "points": 1}, {"id": 2, "points": 0}]}],
        "results": [{"id": 1, "pointFrom": 1, "pointTo": 1}, {"id": 2, "pointFrom": 0, "pointTo": 0}],
    }
    _storage, app_module = _reload_app(tmp_path, monkeypatch, [inactive])
    client = TestClient(app_module.app)

    assert client.get("/quizzes/2").status_code == 404
    assert client.get("/quizzes/9").status_code == 403
    assert client.post("/quizzes/9/submit", json={"answers": {"91": 1}}).status_code == 403
    assert client.get("/quizzes").json()["pagination"]["total"] == 0
    assert client.get("/quizzes/9/validate").json()["is_valid"] is True


def test_misconfigured_quiz_returns_server_error(tmp_path, monkeypatch):
    broken = {
        "id": 5,
        "quizType": 2,
        "status": 1,
        "questions": [{"id": 51, "answers": [{"id": 511, "points": 11}, {"id": 512, "points": 0}]}],
        "results": [{"id": 501, "pointFrom": 0, "pointTo": 5}, {"id": 502, "pointFrom": 6, "pointTo": 10}],
    }
    _storage, app_module = _reload_app(tmp_path, monkeypatch, [broken])
    client = TestClient(app_module.app)

    resp = client.post("/quizzes/5/submit", json={"answers": {"51": 511}})
    assert resp.status_code == 500
    assert resp.json()["code"] == "no_matching_result"

    ok = client.post("/quizzes/5/submit", json={"answers": {"51": 512}})
    assert ok.status_code == 200
    assert ok.json()["result"]["id"] == 501


def test_quiz_listing_filters_and_pages(tmp_path, monkeypatch):
    _storage, app_module = _reload_app(tmp_path, monkeypatch)
    client = TestClient(app_module.app)

    body = client.get("/quizzes", params={"type": 3}).json()
    assert [q["id"] for q in body["quizzes"]] == [3]
    assert body["quizzes"][0]["quiz_type_name"] == "puzzle"

    paged = client.get("/quizzes", params={"page": 2, "limit": 2}).json()
    assert [q["id"] for q in paged["quizzes"]] == [3]
    assert paged["pagination"]["total_pages"] == 2


def test_calculation_can_be_hidden(tmp_path, monkeypatch):
    monkeypatch.setenv("EXPOSE_CALCULATION", "0")
    _storage, app_module = _reload_app(tmp_path, monkeypatch)
    client = TestClient(app_module.app)

    body = client.post("/quizzes/3/submit", json={"answers": {"31": 312}}).json()
    assert "calculation" not in body
    assert body["score_description"] == "1 of 1"
    stored = client.get(f"/submissions/{body['submission_id']}").json()
    assert stored["calculation"]["details"]["is_correct"] is True


def _listed(quiz_id: int, **extra) -> dict:
    return {
        "id": quiz_id,
        "quizType": 3,
        "status": 1,
        "questions": [{"id": quiz_id * 10, "answers": [{"id": 1, "points": 1}, {"id": 2, "points": 0}]}],
        "results": [{"id": 1, "pointFrom": 1, "pointTo": 1}, {"id": 2, "pointFrom": 0, "pointTo": 0}],
        **extra,
    }


def test_listing_is_newest_first_and_featured_by_visits(tmp_path, monkeypatch):
    quizzes = [
        _listed(1, createDate="2024-01-05T10:00:00Z", starFlag=1, visits=3),
        _listed(2, createDate="2024-03-01T10:00:00Z", visits=50),
        _listed(3, createDate="2024-02-10T10:00:00Z", starFlag=1, visits=40),
        _listed(4),
    ]
    _storage, app_module = _reload_app(tmp_path, monkeypatch, quizzes)
    client = TestClient(app_module.app)

    body = client.get("/quizzes").json()
    assert [q["id"] for q in body["quizzes"]] == [2, 3, 1, 4]
    assert body["quizzes"][0]["create_date"] == "2024-03-01T10:00:00Z"

    featured = client.get("/quizzes", params={"featured": "true"}).json()
    assert [q["id"] for q in featured["quizzes"]] == [3, 1]
    assert featured["pagination"]["total"] == 2
    assert featured["quizzes"][0]["visits"] == 40


def test_corrupt_index_is_logged_and_read_as_empty(tmp_path, monkeypatch, caplog):
    storage, app_module = _reload_app(tmp_path, monkeypatch)
    storage.SUBMISSION_INDEX_PATH.write_text("{not json", encoding="utf-8")

    with caplog.at_level("WARNING", logger="api.storage"):
        assert storage.list_submissions_for_quiz(2) == []
    assert "unreadable store file" in caplog.text

    client = TestClient(app_module.app)
    body = client.post("/quizzes/3/submit", json={"answers": {"31": 312}}).json()
    assert body["created_at"].endswith("Z")
    listed = storage.list_submissions_for_quiz(3)
    assert [s["id"] for s in listed] == [body["submission_id"]]
    assert not list(tmp_path.glob("**/*.tmp"))
