import base64
import json
import logging

from openai import AsyncOpenAI

from ..config import settings

logger = logging.getLogger(__name__)

_client: AsyncOpenAI | None = None


def _get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        _client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.collaborator_timeout,
        )
    return _client


def image_message(prompt: str, data: bytes, content_type: str) -> dict:
    """User message carrying a prompt and an inline base64 image."""
    encoded = base64.b64encode(data).decode("ascii")
    return {
        "role": "user",
        "content": [
            {"type": "text", "text": prompt},
            {
                "type": "image_url",
                "image_url": {"url": f"data:{content_type};base64,{encoded}"},
            },
        ],
    }


async def chat_json(system_prompt: str, messages: list[dict]) -> dict:
    """Single LLM call that returns parsed JSON."""
    client = _get_client()
    response = await client.chat.completions.create(
        model=settings.openai_model,
        response_format={"type": "json_object"},
        messages=[
            {"role": "system", "content": system_prompt},
            *messages,
        ],
        temperature=0.0,
        max_tokens=1024,
    )
    raw = response.choices[0].message.content or ""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.error("LLM returned invalid JSON: %s", raw[:500])
        return {}
