"""Web API contract tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from resume_battle.config import BattleConfig
from resume_battle.observability import BattleObserver
from resume_battle.roast import RoastError, RoastResult
from resume_battle.web.app import create_app
from resume_battle.web.errors import APIError

STRONG = "Experience\n2022-2024 Engineer\n- built scalable systems\n- increased throughput 20%\nSkills\nPython, AWS, Docker\n"
WEAK = "Experience\nDid stuff\n"


class FakeRoastClient:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[dict] = []

    async def roast(self, first_text, second_text, comparison, first_name="Player 1", second_name="Player 2", brutal=False):
        self.calls.append({"first_name": first_name, "brutal": brutal, "winner": comparison.winner})
        if self.error is not None:
            raise self.error
        return RoastResult(winner=first_name, roast=f"{second_name} brought a napkin.", advice="Add metrics.")


def _client(**config_overrides) -> TestClient:
    return TestClient(create_app(config=BattleConfig(**config_overrides)))


def test_healthz_reports_roast_disabled() -> None:
    with _client() as client:
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "roast_enabled": False}


def test_healthz_reports_roast_enabled() -> None:
    app = create_app(config=BattleConfig(), roast_client=FakeRoastClient())
    with TestClient(app) as client:
        assert client.get("/healthz").json()["roast_enabled"] is True


def test_score_text() -> None:
    with _client() as client:
        response = client.post("/api/v1/score", json={"text": STRONG})
        assert response.status_code == 200
        body = response.json()
        assert body["scores"] == {
            "experience": 9,
            "projects": 3,
            "skills": 9,
            "structure": 6,
            "keywords": 6,
            "total": 33,
            "ats": 35,
        }
        assert body["sections"] == ["Experience", "Skills"]
        assert body["details"]["ats"]["contact"] is False


def test_score_whitespace_text_rejected() -> None:
    with _client() as client:
        response = client.post("/api/v1/score", json={"text": "   \n"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_create_battle() -> None:
    with _client() as client:
        response = client.post(
            "/api/v1/battles",
            json={"first_text": WEAK, "second_text": STRONG, "first_name": "Bob", "second_name": "Alice"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["winner"] == "second"
        assert body["winner_name"] == "Alice"
        assert body["total_winner"] == "second"
        assert body["scores_second"]["ats"] == 35
        assert [row["metric"] for row in body["breakdown"]] == [
            "Experience",
            "Projects",
            "Skills",
            "Structure",
            "Keywords",
            "ATS Score",
        ]
        assert body["breakdown"][2]["reason"] == "3 skills (3 modern tech)"
        assert body["details_second"]["skills"] == {"total": 3, "modern": 3}


def test_create_battle_default_names() -> None:
    with _client() as client:
        body = client.post("/api/v1/battles", json={"first_text": STRONG, "second_text": STRONG}).json()
        assert body["first_name"] == "Player 1"
        assert body["winner_name"] == "Player 1"


def test_create_battle_missing_fields() -> None:
    with _client() as client:
        response = client.post("/api/v1/battles", json={})
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "BAD_REQUEST"
        assert error["message"] == "Invalid request payload"
        assert len(error["details"]["errors"]) == 2


def test_create_battle_whitespace_text() -> None:
    with _client() as client:
        response = client.post("/api/v1/battles", json={"first_text": STRONG, "second_text": "  "})
        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"fields": ["second_text"]}


def test_battle_upload() -> None:
    with _client() as client:
        response = client.post(
            "/api/v1/battles/upload",
            files={
                "first": ("alice.txt", STRONG.encode("utf-8"), "text/plain"),
                "second": ("bob.md", WEAK.encode("utf-8"), "text/markdown"),
            },
            data={"first_name": "Alice", "second_name": "Bob"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["winner_name"] == "Alice"
        assert body["scores_first"]["total"] == 33


def test_battle_upload_unsupported_format() -> None:
    with _client() as client:
        response = client.post(
            "/api/v1/battles/upload",
            files={
                "first": ("alice.exe", b"MZ", "application/octet-stream"),
                "second": ("bob.md", WEAK.encode("utf-8"), "text/markdown"),
            },
        )
        assert response.status_code == 415
        error = response.json()["error"]
        assert error["code"] == "UNSUPPORTED_FORMAT"
        assert error["details"]["filename"] == "alice.exe"


def test_battle_upload_too_large() -> None:
    with _client(max_upload_bytes=16) as client:
        response = client.post(
            "/api/v1/battles/upload",
            files={
                "first": ("alice.txt", STRONG.encode("utf-8"), "text/plain"),
                "second": ("bob.txt", b"Skills", "text/plain"),
            },
        )
        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "UPLOAD_TOO_LARGE"
        assert error["details"]["max_upload_bytes"] == 16


def test_battle_upload_empty_file() -> None:
    with _client() as client:
        response = client.post(
            "/api/v1/battles/upload",
            files={
                "first": ("alice.txt", b"   ", "text/plain"),
                "second": ("bob.txt", WEAK.encode("utf-8"), "text/plain"),
            },
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "EXTRACTION_FAILED"


def test_battle_upload_broken_pdf() -> None:
    with _client() as client:
        response = client.post(
            "/api/v1/battles/upload",
            files={
                "first": ("alice.pdf", b"not a pdf", "application/pdf"),
                "second": ("bob.txt", WEAK.encode("utf-8"), "text/plain"),
            },
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "EXTRACTION_FAILED"


def test_roast_disabled_without_provider() -> None:
    with _client() as client:
        response = client.post("/api/v1/battles/roast", json={"first_text": STRONG, "second_text": WEAK})
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "ROAST_DISABLED"


def test_roast_with_provider() -> None:
    roast_client = FakeRoastClient()
    app = create_app(config=BattleConfig(), roast_client=roast_client)
    with TestClient(app) as client:
        response = client.post(
            "/api/v1/battles/roast",
            json={"first_text": STRONG, "second_text": WEAK, "first_name": "Alice", "second_name": "Bob", "brutal": True},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["winner"] == "Alice"
        assert body["roast"] == "Bob brought a napkin."
        assert body["advice"] == "Add metrics."
        assert body["comparison"]["winner_name"] == "Alice"
        assert roast_client.calls == [{"first_name": "Alice", "brutal": True, "winner": "first"}]


def test_roast_service_error() -> None:
    app = create_app(config=BattleConfig(), roast_client=FakeRoastClient(error=RoastError("AI service error")))
    with TestClient(app) as client:
        response = client.post("/api/v1/battles/roast", json={"first_text": STRONG, "second_text": WEAK})
        assert response.status_code == 502
        assert response.json()["error"] == {"code": "AI_SERVICE_ERROR", "message": "AI service error", "details": {}}


def test_roast_rejects_empty_text_before_calling_provider() -> None:
    roast_client = FakeRoastClient()
    app = create_app(config=BattleConfig(), roast_client=roast_client)
    with TestClient(app) as client:
        response = client.post("/api/v1/battles/roast", json={"first_text": " ", "second_text": WEAK})
        assert response.status_code == 400
        assert roast_client.calls == []


@pytest.fixture
def observers(monkeypatch) -> list[BattleObserver]:
    created: list[BattleObserver] = []

    class RecordingObserver(BattleObserver):
        def __init__(self, run_id=None) -> None:
            super().__init__(run_id)
            created.append(self)

    monkeypatch.setattr("resume_battle.web.api.v1.endpoints.battles.BattleObserver", RecordingObserver)
    return created


def test_roast_is_tracked(observers) -> None:
    app = create_app(config=BattleConfig(), roast_client=FakeRoastClient())
    with TestClient(app) as client:
        response = client.post("/api/v1/battles/roast", json={"first_text": STRONG, "second_text": WEAK})
        assert response.status_code == 200

    assert len(observers) == 1
    roast_event = observers[0].events[-1]
    assert observers[0].get_stats()["steps"] == ["parse", "compare", "roast"]
    assert roast_event.data == {"brutal": False, "winner": "Player 1"}


def test_failed_roast_is_tracked_as_error(observers) -> None:
    app = create_app(config=BattleConfig(), roast_client=FakeRoastClient(error=RoastError("AI service error")))
    with TestClient(app) as client:
        assert client.post("/api/v1/battles/roast", json={"first_text": STRONG, "second_text": WEAK}).status_code == 502

    stats = observers[0].get_stats()
    assert stats["steps"] == ["parse", "compare"]
    assert stats["errors"] == 1


def test_invalid_config_rejected_at_startup() -> None:
    with pytest.raises(ValueError, match="temperature"):
        create_app(config=BattleConfig(temperature=5.0))


def test_invalid_config_file_rejected_at_startup(tmp_path, monkeypatch) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("max_upload_bytes: 0\n", encoding="utf-8")
    monkeypatch.setenv("RESUME_BATTLE_CONFIG", str(path))
    with pytest.raises(ValueError, match="max_upload_bytes"):
        create_app()


def test_config_file_loaded_at_startup(tmp_path, monkeypatch) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("max_upload_bytes: 16\n", encoding="utf-8")
    monkeypatch.setenv("RESUME_BATTLE_CONFIG", str(path))
    with TestClient(create_app()) as client:
        assert client.get("/healthz").json() == {"status": "ok", "roast_enabled": False}
        response = client.post(
            "/api/v1/battles/upload",
            files={
                "first": ("alice.txt", STRONG.encode("utf-8"), "text/plain"),
                "second": ("bob.txt", b"Skills", "text/plain"),
            },
        )
        assert response.status_code == 422



def test_api_error_envelope() -> None:
    error = APIError(415, "UNSUPPORTED_FORMAT", "Unsupported file format: .exe")
    assert error.to_dict() == {
        "error": {"code": "UNSUPPORTED_FORMAT", "message": "Unsupported file format: .exe", "details": {}}
    }
    assert str(error) == "Unsupported file format: .exe"
