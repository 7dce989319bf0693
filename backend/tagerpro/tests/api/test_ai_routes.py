import json

import pytest
from fastapi.testclient import TestClient

from tagerpro.ai.framing import FrameDecoder
from tagerpro.tests.fakes import FakeLLMClient


def parse_frames(body: bytes) -> list[dict | str]:
    lines = body.decode("utf-8").split("\n")
    frames: list[dict | str] = []
    for line in lines:
        if not line.startswith("data: "):
            continue
        payload = line[len("data: "):]
        frames.append(payload if payload == "[DONE]" else json.loads(payload))
    return frames


def test_description_streams_content_frames_then_done(client: TestClient, llm: FakeLLMClient):
    llm.fragments = ["Sweet", " and", " soft."]

    response = client.post(
        "/api/ai/generate-description",
        json={"productName": "Medjool Dates", "category": "Food", "language": "en"},
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert "no-cache" in response.headers["cache-control"]
    assert response.headers["x-accel-buffering"] == "no"
    assert parse_frames(response.content) == [
        {"content": "Sweet"},
        {"content": " and"},
        {"content": " soft."},
        "[DONE]",
    ]
    assert "\r" not in response.text
    prompt, max_tokens = llm.calls[0]
    assert "Medjool Dates in the Food category" in prompt
    assert max_tokens == 256
    assert llm.streams[0].closed


def test_stream_body_decodes_with_client_frame_decoder(client: TestClient, llm: FakeLLMClient):
    llm.fragments = ["عرض", " خاص"]

    response = client.post(
        "/api/ai/generate-ad-copy",
        json={"productName": "عباية", "price": "200", "language": "ar"},
    )

    decoder = FrameDecoder()
    records = decoder.feed(response.content) + decoder.close()
    assert records == [{"content": "عرض"}, {"content": " خاص"}]
    assert decoder.finished
    assert llm.calls[0][0].startswith("اكتب نص إعلاني")


@pytest.mark.parametrize(
    "path,body,max_tokens",
    [
        ("/api/ai/suggest-price", {"productName": "Saffron", "description": "Grade A"}, 256),
        ("/api/ai/campaign-ideas", {"productName": "Oud", "targetAudience": "Gift buyers"}, 512),
    ],
)
def test_each_tool_endpoint_streams(client: TestClient, llm: FakeLLMClient, path, body, max_tokens):
    llm.fragments = ["ok"]

    response = client.post(path, json=body)

    assert response.status_code == 200
    assert parse_frames(response.content) == [{"content": "ok"}, "[DONE]"]
    assert llm.calls[0][1] == max_tokens


def test_provider_rejection_before_stream_is_json_error(client: TestClient, llm: FakeLLMClient):
    llm.open_error = RuntimeError("quota exceeded")

    response = client.post("/api/ai/campaign-ideas", json={"productName": "Oud"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate campaign ideas"}


def test_mid_stream_failure_sends_error_frame_and_no_done(client: TestClient, llm: FakeLLMClient):
    llm.fragments = ["Partial"]
    llm.stream_error = RuntimeError("connection reset")

    response = client.post("/api/ai/suggest-price", json={"productName": "Saffron"})

    assert response.status_code == 200
    assert parse_frames(response.content) == [{"content": "Partial"}, {"error": "Failed to generate"}]
    assert llm.streams[0].closed


def test_missing_required_field_is_bad_request(client: TestClient, llm: FakeLLMClient):
    response = client.post("/api/ai/generate-ad-copy", json={"productName": "Abaya"})

    assert response.status_code == 400
    assert "price" in response.json()["error"]
    assert llm.calls == []


def test_health_check(client: TestClient):
    response = client.get("/api/utils/health-check/")

    assert response.status_code == 200
    assert response.json() is True
