"""Tests for the health check, CORS headers, and POST /api/transcribe.

Exercises the FastAPI app through an async HTTP client with the STT
provider replaced by a mock, covering upload validation and the JSON
error envelope.
"""

import pytest
from fastapi import Query
from httpx import ASGITransport, AsyncClient

from yak.api.app import create_app
from yak.api.routes.transcribe import get_stt
from yak.core.config import get_settings
from yak.core.exceptions import TranscriptionError


@pytest.fixture
def app(mock_stt):
    """Create a fresh FastAPI application with the STT provider mocked."""
    app = create_app()
    app.dependency_overrides[get_stt] = lambda: mock_stt
    return app


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ---------------------------------------------------------------------------
# Health / CORS
# ---------------------------------------------------------------------------


async def test_health_returns_200(client):
    """GET /health returns 200 with status, version, and timestamp."""
    resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["version"] == "0.1.0"
    assert "timestamp" in body


async def test_cors_allows_streamlit_origin(client):
    """Streamlit's default origin (localhost:8501) is in the CORS allow-list."""
    resp = await client.options(
        "/api/transcribe",
        headers={
            "Origin": "http://localhost:8501",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.headers.get("access-control-allow-origin") == "http://localhost:8501"


async def test_cors_rejects_unknown_origin(client):
    """Origins not in the allow-list receive no CORS header."""
    resp = await client.options(
        "/api/transcribe",
        headers={
            "Origin": "http://evil.example.com",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert "access-control-allow-origin" not in resp.headers


# ---------------------------------------------------------------------------
# POST /api/transcribe
# ---------------------------------------------------------------------------


async def test_transcribe_returns_results(client, mock_stt, sample_audio_bytes):
    """A valid upload is forwarded and the transcript comes back under ``results``."""
    resp = await client.post(
        "/api/transcribe",
        files={"file": ("talk.mp3", sample_audio_bytes, "audio/mpeg")},
    )
    assert resp.status_code == 200
    results = resp.json()["results"]
    assert results["language"] == "english"
    assert [s["id"] for s in results["segments"]] == [0, 1]
    assert results["segments"][0]["tokens"] == [50364, 2425, 456, 13, 50489]

    mock_stt.transcribe.assert_awaited_once_with(
        sample_audio_bytes, filename="talk.mp3", content_type="audio/mpeg"
    )


async def test_extension_check_is_case_insensitive(client, sample_audio_bytes):
    resp = await client.post(
        "/api/transcribe",
        files={"file": ("MEMO.M4A", sample_audio_bytes, "audio/mp4")},
    )
    assert resp.status_code == 200


async def test_missing_file_returns_400(client, mock_stt):
    """No ``file`` part -> NO_FILE envelope, provider never called."""
    resp = await client.post("/api/transcribe", data={"other": "value"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "NO_FILE"
    assert body["detail"] == "no file found"
    assert "timestamp" in body
    mock_stt.transcribe.assert_not_awaited()


async def test_text_field_named_file_returns_400(client, mock_stt):
    """A plain form field called ``file`` is not an upload."""
    resp = await client.post("/api/transcribe", data={"file": "not-a-file"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "NO_FILE"
    mock_stt.transcribe.assert_not_awaited()


async def test_part_without_filename_returns_400(client, mock_stt):
    resp = await client.post(
        "/api/transcribe",
        files={"file": ("", b"abc", "audio/wav")},
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "NO_FILE"
    mock_stt.transcribe.assert_not_awaited()


async def test_empty_file_returns_400(client):
    resp = await client.post(
        "/api/transcribe",
        files={"file": ("silence.wav", b"", "audio/wav")},
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "EMPTY_FILE"


async def test_unsupported_extension_returns_415(client, sample_audio_bytes):
    resp = await client.post(
        "/api/transcribe",
        files={"file": ("notes.txt", sample_audio_bytes, "text/plain")},
    )
    assert resp.status_code == 415
    assert resp.json()["code"] == "UNSUPPORTED_MEDIA"


async def test_oversized_file_returns_413(client, monkeypatch):
    monkeypatch.setenv("MAX_UPLOAD_MB", "1")
    get_settings.cache_clear()
    resp = await client.post(
        "/api/transcribe",
        files={"file": ("long.wav", b"\x00" * (1024 * 1024 + 1), "audio/wav")},
    )
    assert resp.status_code == 413
    assert resp.json()["code"] == "FILE_TOO_LARGE"


async def test_service_failure_returns_502(client, mock_stt, sample_audio_bytes):
    """A provider failure is reported, not swallowed."""
    mock_stt.transcribe.side_effect = TranscriptionError("Transcription service returned 500")
    resp = await client.post(
        "/api/transcribe",
        files={"file": ("talk.mp3", sample_audio_bytes, "audio/mpeg")},
    )
    assert resp.status_code == 502
    body = resp.json()
    assert body["code"] == "TRANSCRIPTION_ERROR"
    assert body["detail"] == "Transcription service returned 500"


async def test_get_not_allowed(client):
    resp = await client.get("/api/transcribe")
    assert resp.status_code == 405


async def test_unexpected_error_returns_500_envelope(app, mock_stt, sample_audio_bytes):
    """Anything outside the domain hierarchy becomes an opaque 500."""
    mock_stt.transcribe.side_effect = RuntimeError("provider exploded")
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        resp = await c.post(
            "/api/transcribe",
            files={"file": ("talk.mp3", sample_audio_bytes, "audio/mpeg")},
        )
    assert resp.status_code == 500
    body = resp.json()
    assert body["code"] == "INTERNAL_ERROR"
    assert body["detail"] == "Internal server error"
    assert "provider exploded" not in resp.text


async def test_validation_error_envelope(app):
    """Request validation failures use the same envelope with a 422."""

    @app.get("/api/_echo")
    async def echo(n: int = Query(...)):
        return {"n": n}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        resp = await c.get("/api/_echo", params={"n": "many"})
    assert resp.status_code == 422
    body = resp.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert "timestamp" in body
