import sqlite3
import time
import logging
from contextlib import closing

from scouting.config import RUN_LOG_DB_PATH

logger = logging.getLogger(__name__)

LOG_DB_PATH = RUN_LOG_DB_PATH

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS generation_log (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp REAL NOT NULL,
    run_id TEXT NOT NULL,
    sequence_number INTEGER,
    startup_name TEXT,
    accelerator_name TEXT,
    match_score REAL,
    outcome TEXT NOT NULL,
    status_code INTEGER,
    elapsed_secs REAL,
    created_at TEXT DEFAULT (datetime('now'))
)
"""


def _connect() -> sqlite3.Connection:
    conn = sqlite3.connect(LOG_DB_PATH)
    conn.execute(_CREATE_TABLE)
    return conn


def log_generation(
    run_id: str,
    startup_name: str,
    accelerator_name: str,
    outcome: str,
    sequence_number: int | None = None,
    match_score: float | None = None,
    status_code: int | None = None,
    elapsed_secs: float | None = None,
) -> int:
    """Record one generation attempt and return the row ID.

    ``outcome`` is "ok" or the failure kind of the generation result.
    """
    with closing(_connect()) as conn:
        cur = conn.execute(
            """INSERT INTO generation_log
               (timestamp, run_id, sequence_number, startup_name, accelerator_name,
                match_score, outcome, status_code, elapsed_secs)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                time.time(),
                run_id,
                sequence_number,
                startup_name,
                accelerator_name,
                match_score,
                outcome,
                status_code,
                elapsed_secs,
            ),
        )
        row_id = cur.lastrowid
        conn.commit()
        logger.debug("[LOG] Generation logged: id=%d run=%s outcome=%s", row_id, run_id, outcome)
        return row_id


def summarize_run(run_id: str) -> dict[str, int]:
    """Count logged attempts per outcome for one run."""
    with closing(_connect()) as conn:
        rows = conn.execute(
            "SELECT outcome, COUNT(*) FROM generation_log WHERE run_id = ? GROUP BY outcome",
            (run_id,),
        ).fetchall()
    return {outcome: count for outcome, count in rows}
