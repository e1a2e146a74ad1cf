import logging
from typing import Any

from scouting.backends import ErrorKind, GenerationResult, LLMBackend, get_backend
from scouting.config import LLM_PROVIDER, MIN_API_KEY_LENGTH, MIN_DESCRIPTION_LENGTH
from scouting.prompts import build_value_proposition_prompt
from scouting.run_config import RunConfig

logger = logging.getLogger(__name__)


def _clean(value: Any) -> str:
    return "" if value is None else str(value).strip()


def generate_value_proposition(
    startup_description: Any,
    accelerator_info: Any,
    config: RunConfig | None,
    backend: LLMBackend | None = None,
) -> GenerationResult:
    """Draft a value proposition for one startup/accelerator pair.

    Never raises for bad configuration, bad input, or API/transport failures: each
    of those comes back as a failed ``GenerationResult`` whose text starts with
    "ERRORE". Checks run in order: config present, API key length, description length.
    """
    if config is None:
        return GenerationResult.failure(ErrorKind.CONFIG_MISSING, "ERRORE: Config non disponibile")

    if len(config.api_key) < MIN_API_KEY_LENGTH:
        return GenerationResult.failure(ErrorKind.CONFIG_INVALID, "ERRORE: API Key non valida")

    startup = _clean(startup_description)
    accelerator = _clean(accelerator_info)

    if len(startup) < MIN_DESCRIPTION_LENGTH:
        return GenerationResult.failure(
            ErrorKind.INPUT_INVALID, "ERRORE: Descrizione startup troppo breve"
        )

    if backend is None:
        backend = get_backend(LLM_PROVIDER)

    prompt = build_value_proposition_prompt(startup, accelerator)
    result = backend.complete(prompt, config)
    if result.ok:
        logger.info("[GEN] Generated %d chars via %s", len(result.text), backend.name)
    else:
        logger.warning("[GEN] Generation failed (%s): %s", result.error.value, result.text)
    return result
