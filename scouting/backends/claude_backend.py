import time
import logging

import anthropic

from scouting.backends.base import ErrorKind, GenerationResult, LLMBackend
from scouting.config import ERROR_BODY_PREVIEW_CHARS, REQUEST_TIMEOUT_SECONDS, TEMPERATURE
from scouting.run_config import RunConfig

logger = logging.getLogger(__name__)


class ClaudeBackend(LLMBackend):
    """Claude backend using the Anthropic Messages API."""

    name = "claude"

    def __init__(self, client: anthropic.Anthropic | None = None):
        self._client = client

    def _get_client(self, api_key: str) -> anthropic.Anthropic:
        if self._client is None:
            # No SDK-level retries: one request per pair, throttled by the batch loop
            self._client = anthropic.Anthropic(
                api_key=api_key, timeout=REQUEST_TIMEOUT_SECONDS, max_retries=0
            )
        return self._client

    def complete(self, prompt: str, config: RunConfig) -> GenerationResult:
        client = self._get_client(config.api_key)
        logger.info("[GEN] Calling Claude: model=%s max_tokens=%s", config.model, config.max_tokens)
        try:
            start = time.time()
            message = client.messages.create(
                model=config.model,
                max_tokens=config.max_tokens,
                temperature=TEMPERATURE,
                messages=[{"role": "user", "content": prompt}],
            )
            elapsed = time.time() - start
        except anthropic.APIStatusError as e:
            logger.warning("[GEN] Claude API error %s: %s", e.status_code, e.message)
            body = e.body if isinstance(e.body, dict) else {}
            error = body.get("error") if isinstance(body.get("error"), dict) else {}
            if error.get("message"):
                text = f"ERRORE API: {error['message']}"
            else:
                text = f"ERRORE {e.status_code}: {str(e.message)[:ERROR_BODY_PREVIEW_CHARS]}"
            return GenerationResult.failure(ErrorKind.API_ERROR, text, status_code=e.status_code)
        except anthropic.APIError as e:
            # connection errors, timeouts and undecodable responses
            logger.warning("[GEN] Claude request failed: %s", e)
            return GenerationResult.failure(ErrorKind.TRANSPORT_FAILURE, f"ERRORE: {e}")

        usage = getattr(message, "usage", None)
        logger.info(
            "[GEN] Claude call: elapsed=%.1fs stop=%s input=%s output=%s",
            elapsed,
            message.stop_reason,
            getattr(usage, "input_tokens", "?"),
            getattr(usage, "output_tokens", "?"),
        )

        parts = [block.text for block in message.content if block.type == "text"]
        if not parts:
            return GenerationResult.failure(
                ErrorKind.EMPTY_RESPONSE, "ERRORE: Risposta vuota dall'API", status_code=200
            )
        return GenerationResult.success("".join(parts).strip())

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
