"""
Prompt Generator
Asks the OpenAI chat completions API to draft a prompt-library entry
(title, subHeading, prompt, tags, category, tool) from a free-text description.
"""

import json
import logging
import re

import httpx

from qudrat import config
from qudrat.prompts.models import GenerateRequest

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_CHARS = 1200

SYSTEM_PROMPT = """
You are an assistant that creates a structured prompt object for an admin prompt library.
Return concise JSON with:
- title (max 10 words)
- subHeading (max 15 words)
- prompt (the actual prompt text; concise but clear)
- tags (3-6 short tags)
- category (short, 1-3 words, reuse hint if good)
- tool (reuse hint if sensible)
Tone: {tone}. Length: {length}. Category hint: {category_hint}. Tool hint: {tool_hint}.
Keep output strictly JSON. Do not include explanations.
"""


class PromptGenerationError(Exception):
    pass


async def get_openai_client():
    async with httpx.AsyncClient(timeout=config.OPENAI_TIMEOUT_SECONDS) as client:
        yield client


def build_messages(request: GenerateRequest) -> list:
    system_prompt = SYSTEM_PROMPT.format(
        tone=request.tone or "friendly",
        length=request.length or "medium",
        category_hint=request.category_hint or "General",
        tool_hint=request.tool_hint or "ChatGPT",
    )
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": request.description[:MAX_DESCRIPTION_CHARS]},
    ]


def parse_ai_content(content: str):
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        # Models sometimes wrap the object in prose or ```json fences
        match = re.search(r"\{.*\}", content, re.DOTALL)
        if not match:
            raise PromptGenerationError("Failed to parse AI response")
        return json.loads(match.group(0))


async def generate_prompt(client: httpx.AsyncClient, request: GenerateRequest) -> dict:
    response = await client.post(
        config.OPENAI_API_URL,
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config.OPENAI_API_KEY}",
        },
        json={
            "model": config.OPENAI_MODEL,
            "messages": build_messages(request),
            "temperature": 0.7,
            "max_tokens": 400,
        },
    )

    if not response.is_success:
        logger.warning("OpenAI returned %s", response.status_code)
        raise PromptGenerationError(f"OpenAI error: {response.text}")

    body = response.json()
    try:
        content = body["choices"][0]["message"]["content"] or "{}"
    except (KeyError, IndexError, TypeError):
        content = "{}"

    return parse_ai_content(content)
