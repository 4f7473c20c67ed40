import json

import httpx
import pytest

from qudrat import config
from qudrat.main import app
from qudrat.prompts.generator import PromptGenerationError, get_openai_client, parse_ai_content

PROMPT = {
    "category": "  Writing  ",
    "prompt": "Write a product description for {product}",
    "tool": "ChatGPT",
    "title": "Product copy",
    "subHeading": "E-commerce descriptions",
}


def use_openai(handler):
    """Route the generator's HTTP calls to `handler`"""

    async def client_override():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            yield client

    app.dependency_overrides[get_openai_client] = client_override


def completion(content):
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


async def test_create_prompt_trims_category(client):
    response = await client.post("/api/prompts", json=PROMPT)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["category"] == "Writing"
    assert data["tags"] == []


async def test_create_prompt_requires_fields(client):
    response = await client.post("/api/prompts", json={**PROMPT, "subHeading": ""})

    assert response.status_code == 400
    assert response.json()["error"] == "Category, prompt, tool, title, and subHeading are required"


async def test_prompt_populates_related_course(client):
    course = await client.post("/api/courses", json={"title": "Copywriting", "heading": "h", "type": "simple"})
    course_id = course.json()["data"]["_id"]
    created = await client.post("/api/prompts", json={**PROMPT, "relatedCourseId": course_id})
    prompt_id = created.json()["data"]["_id"]

    response = await client.get(f"/api/prompts/{prompt_id}")

    assert response.json()["data"]["relatedCourseId"]["title"] == "Copywriting"


async def test_list_prompts_by_tool(client):
    await client.post("/api/prompts", json=PROMPT)
    await client.post("/api/prompts", json={**PROMPT, "tool": "MidJourney"})

    response = await client.get("/api/prompts", params={"tool": "MidJourney"})

    assert [p["tool"] for p in response.json()["data"]] == ["MidJourney"]


async def test_update_and_delete_prompt(client, object_id):
    created = await client.post("/api/prompts", json=PROMPT)
    prompt_id = created.json()["data"]["_id"]

    updated = await client.put(f"/api/prompts/{prompt_id}", json={"tags": ["copy", "sales"]})
    deleted = await client.delete(f"/api/prompts/{prompt_id}")

    assert updated.json()["data"]["tags"] == ["copy", "sales"]
    assert deleted.json()["message"] == "Prompt deleted successfully"
    assert (await client.get(f"/api/prompts/{object_id}")).json()["error"] == "Prompt not found"


# ==================== GENERATION ====================

async def test_generate_without_api_key(client, monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", None)

    response = await client.post("/api/prompts/generate", json={"description": "a haiku bot"})

    assert response.status_code == 500
    assert response.json()["error"] == "OPENAI_API_KEY is not set on the server"


async def test_generate_requires_description(client, monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", "sk-test")

    response = await client.post("/api/prompts/generate", json={"tone": "formal"})

    assert response.status_code == 400
    assert response.json()["error"] == "description is required"


async def test_generate_sends_hints_and_truncates(client, monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", "sk-test")
    sent = {}

    def handler(request):
        sent["auth"] = request.headers["Authorization"]
        sent["body"] = json.loads(request.content)
        return completion(json.dumps({"title": "Haiku helper", "tags": ["poetry"]}))

    use_openai(handler)
    response = await client.post(
        "/api/prompts/generate",
        json={"description": "x" * 2000, "tone": "playful", "length": "short", "toolHint": "Claude"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"title": "Haiku helper", "tags": ["poetry"]}}
    assert sent["auth"] == "Bearer sk-test"
    body = sent["body"]
    assert body["model"] == config.OPENAI_MODEL
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 400
    system, user = body["messages"]
    assert "Tone: playful. Length: short. Category hint: General. Tool hint: Claude." in system["content"]
    assert len(user["content"]) == 1200


async def test_generate_extracts_json_from_prose(client, monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", "sk-test")
    use_openai(lambda request: completion('Here you go:\n```json\n{"title": "T"}\n```'))

    response = await client.post("/api/prompts/generate", json={"description": "d"})

    assert response.json()["data"] == {"title": "T"}


async def test_generate_reports_upstream_error(client, monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", "sk-test")
    use_openai(lambda request: httpx.Response(429, text="rate limited"))

    response = await client.post("/api/prompts/generate", json={"description": "d"})

    assert response.status_code == 500
    assert response.json()["error"] == "OpenAI error: rate limited"


async def test_generate_unparsable_response(client, monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", "sk-test")
    use_openai(lambda request: completion("no json here"))

    response = await client.post("/api/prompts/generate", json={"description": "d"})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to parse AI response"


def test_parse_ai_content_without_object():
    with pytest.raises(PromptGenerationError):
        parse_ai_content("plain text")
