"""Integration test fixtures for yak.

Wires the real FastAPI app to a real ``OpenAIWhisperSTT`` whose HTTP
client talks to an in-process fake of the hosted transcription service.
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from yak.api.app import create_app
from yak.api.routes.transcribe import get_stt
from yak.services.transcription.openai_api import OpenAIWhisperSTT


@pytest.fixture
def service_calls():
    """Requests received by the fake transcription service."""
    return []


@pytest.fixture
def service_response(verbose_json):
    """Response the fake service returns; tests may replace it."""
    return {"status": 200, "json": verbose_json}


@pytest.fixture
def app(service_calls, service_response):
    """FastAPI app whose STT provider hits the fake service."""

    def handler(request: httpx.Request) -> httpx.Response:
        service_calls.append(request)
        return httpx.Response(service_response["status"], json=service_response["json"])

    async def fake_stt():
        stt = OpenAIWhisperSTT(
            api_key="sk-integration",
            base_url="https://stt.test/v1",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        try:
            yield stt
        finally:
            await stt.aclose()

    app = create_app()
    app.dependency_overrides[get_stt] = fake_stt
    return app


@pytest.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
