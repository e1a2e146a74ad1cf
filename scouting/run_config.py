import logging
import math
from typing import Any

from pydantic import BaseModel, ConfigDict

from scouting.config import LLM_PROVIDER, PROVIDER_KEY_ENV, _get_secret
from scouting.workbook import CONFIG_SHEET, Workbook

logger = logging.getLogger(__name__)

API_KEY_CELL = "B1"
MAX_TOKENS_CELL = "B2"
MODEL_CELL = "B3"
RATE_LIMIT_CELL = "B4"
THRESHOLD_CELL = "B5"


class ConfigError(Exception):
    """Base class for problems reading the run configuration."""


class ConfigMissingError(ConfigError):
    def __init__(self, sheet_name: str = CONFIG_SHEET):
        super().__init__(f"Scheda {sheet_name} non trovata")


class ConfigInvalidError(ConfigError):
    def __init__(self, cell: str, value: Any):
        self.cell = cell
        self.value = value
        super().__init__(f"Valore non numerico in {CONFIG_SHEET}!{cell}: {value!r}")


class RunConfig(BaseModel):
    """Settings for one operation, read once and never changed during the run."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    max_tokens: int
    model: str
    rate_limit_ms: float
    match_threshold: float

    def __repr__(self) -> str:
        masked = f"{self.api_key[:4]}..." if self.api_key else ""
        return (
            f"RunConfig(api_key={masked!r}, max_tokens={self.max_tokens}, model={self.model!r}, "
            f"rate_limit_ms={self.rate_limit_ms}, match_threshold={self.match_threshold})"
        )


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _to_number(value: Any, cell: str) -> float:
    """Numeric cell or numeric string; a blank cell counts as 0. NaN and infinities are rejected."""
    if isinstance(value, (bool, int, float)):
        number = float(value)
    else:
        text = _to_text(value)
        if not text:
            return 0.0
        try:
            number = float(text.replace(",", "."))
        except ValueError:
            raise ConfigInvalidError(cell, value) from None
    if not math.isfinite(number):
        raise ConfigInvalidError(cell, value)
    return number


def load_run_config(workbook: Workbook, provider: str = LLM_PROVIDER) -> RunConfig:
    """Read the five run settings from the Config sheet.

    Values are coerced but not range-checked: a threshold of 1.5 is returned as-is.
    A blank API key cell falls back to the provider's environment variable or secret.
    """
    sheet = workbook.get_sheet(CONFIG_SHEET)
    if sheet is None:
        raise ConfigMissingError()

    api_key = _to_text(sheet.get_value(API_KEY_CELL))
    if not api_key and provider in PROVIDER_KEY_ENV:
        api_key = _get_secret(PROVIDER_KEY_ENV[provider]).strip()
        if api_key:
            logger.info("[CONFIG] API key cell empty, using %s", PROVIDER_KEY_ENV[provider])

    config = RunConfig(
        api_key=api_key,
        max_tokens=int(_to_number(sheet.get_value(MAX_TOKENS_CELL), MAX_TOKENS_CELL)),
        model=_to_text(sheet.get_value(MODEL_CELL)),
        rate_limit_ms=_to_number(sheet.get_value(RATE_LIMIT_CELL), RATE_LIMIT_CELL),
        match_threshold=_to_number(sheet.get_value(THRESHOLD_CELL), THRESHOLD_CELL),
    )
    logger.info("[CONFIG] Loaded %r", config)
    return config
