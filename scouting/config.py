import os
import logging
from pathlib import Path
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env", override=True)

# Workbook path: use data/ dir if it exists (Docker), otherwise project root (local dev)
_data_dir = PROJECT_ROOT / "data"
if _data_dir.is_dir():
    _default_workbook = _data_dir / "startup_scouting.xlsx"
    _default_log_db = _data_dir / "scouting_run_log.db"
else:
    _default_workbook = PROJECT_ROOT / "startup_scouting.xlsx"
    _default_log_db = PROJECT_ROOT / "scouting_run_log.db"

WORKBOOK_PATH = os.getenv("WORKBOOK_PATH", str(_default_workbook))
RUN_LOG_DB_PATH = os.getenv("RUN_LOG_DB_PATH", str(_default_log_db))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- GCP Secret Manager integration ---
GCP_PROJECT_ID = os.getenv("GCP_PROJECT_ID", "")

_SECRET_NAMES = {
    "GROQ_API_KEY": "groq-api-key",
    "ANTHROPIC_API_KEY": "anthropic-api-key",
}


def _get_secret(env_var: str) -> str:
    """Try env var first, then GCP Secret Manager, return empty string on failure."""
    val = os.getenv(env_var, "")
    if val:
        return val

    if not GCP_PROJECT_ID:
        return ""

    secret_id = _SECRET_NAMES.get(env_var)
    if not secret_id:
        return ""

    try:
        from google.cloud import secretmanager
        client = secretmanager.SecretManagerServiceClient()
        name = f"projects/{GCP_PROJECT_ID}/secrets/{secret_id}/versions/latest"
        response = client.access_secret_version(request={"name": name})
        val = response.payload.data.decode("UTF-8").strip()
        logger.info("Loaded %s from Secret Manager", env_var)
        return val
    except Exception as exc:
        logger.warning("Failed to load %s from Secret Manager: %s", env_var, exc)
        return ""


# Backend selection
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "groq").lower()

# Environment variable holding the fallback API key for each provider
PROVIDER_KEY_ENV = {
    "groq": "GROQ_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
}

# Groq endpoint (OpenAI-compatible chat completions)
GROQ_API_URL = os.getenv("GROQ_API_URL", "https://api.groq.com/openai/v1/chat/completions")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "60"))

# Generation defaults
TEMPERATURE = 0.7
MIN_API_KEY_LENGTH = 20
MIN_DESCRIPTION_LENGTH = 10
ERROR_BODY_PREVIEW_CHARS = 150
LOG_BODY_PREVIEW_CHARS = 500
