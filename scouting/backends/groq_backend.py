import time
import logging

import httpx

from scouting.backends.base import ErrorKind, GenerationResult, LLMBackend
from scouting.config import (
    ERROR_BODY_PREVIEW_CHARS,
    GROQ_API_URL,
    LOG_BODY_PREVIEW_CHARS,
    REQUEST_TIMEOUT_SECONDS,
    TEMPERATURE,
)
from scouting.run_config import RunConfig

logger = logging.getLogger(__name__)


def build_payload(prompt: str, config: RunConfig) -> dict:
    return {
        "model": config.model,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": TEMPERATURE,
        "max_tokens": config.max_tokens,
    }


def _api_error_text(r: httpx.Response) -> str:
    """Prefer the structured ``error.message``; fall back to a truncated raw body."""
    try:
        data = r.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return f"ERRORE API: {error['message']}"
    return f"ERRORE {r.status_code}: {r.text[:ERROR_BODY_PREVIEW_CHARS]}"


def extract_output_text(resp_json) -> str | None:
    """Content of the first choice, or None when the API returned no usable content."""
    if not isinstance(resp_json, dict):
        return None
    choices = resp_json.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    if not isinstance(message, dict) or not isinstance(message.get("content"), str):
        return None
    return message["content"].strip()


class GroqBackend(LLMBackend):
    """Groq chat completions over plain HTTP (OpenAI-compatible schema)."""

    name = "groq"

    def __init__(self, client: httpx.Client | None = None, url: str = GROQ_API_URL):
        self.url = url
        self.client = client or httpx.Client(timeout=httpx.Timeout(REQUEST_TIMEOUT_SECONDS))

    def complete(self, prompt: str, config: RunConfig) -> GenerationResult:
        payload = build_payload(prompt, config)
        headers = {"Authorization": f"Bearer {config.api_key}"}
        logger.info("[GEN] Calling Groq: model=%s max_tokens=%s", config.model, config.max_tokens)

        try:
            start = time.time()
            r = self.client.post(self.url, headers=headers, json=payload)
            elapsed = time.time() - start
            body = r.text
            logger.info("[GEN] Response %s in %.1fs", r.status_code, elapsed)
            logger.debug("[GEN] Response body: %s", body[:LOG_BODY_PREVIEW_CHARS])

            if r.status_code != 200:
                logger.warning("[GEN] Groq API error %s: %s", r.status_code, body)
                return GenerationResult.failure(
                    ErrorKind.API_ERROR, _api_error_text(r), status_code=r.status_code
                )

            text = extract_output_text(r.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("[GEN] Groq request failed: %s", e)
            return GenerationResult.failure(ErrorKind.TRANSPORT_FAILURE, f"ERRORE: {e}")

        if text is None:
            return GenerationResult.failure(
                ErrorKind.EMPTY_RESPONSE, "ERRORE: Risposta vuota dall'API", status_code=200
            )
        return GenerationResult.success(text)

    def close(self) -> None:
        self.client.close()
        logger.debug("[GEN] Groq HTTP client closed")
