import time
import uuid
import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from scouting.backends import GenerationResult, LLMBackend
from scouting.generator import generate_value_proposition
from scouting.notify import Notifier
from scouting.prompts import SAMPLE_ACCELERATOR, SAMPLE_STARTUP
from scouting.records import (
    ValuePropositionRecord,
    load_accelerators,
    load_startups,
)
from scouting.run_config import RunConfig
from scouting.run_log import log_generation
from scouting.scoring import score_match
from scouting.workbook import ACCELERATOR_SHEET, RESULTS_SHEET, STARTUP_SHEET, Workbook

logger = logging.getLogger(__name__)


class FixedDelayThrottle:
    """Fixed pause between consecutive API calls. The only rate limiting there is."""

    def __init__(self, delay_ms: float, sleep: Callable[[float], None] | None = None):
        self.delay_ms = delay_ms
        self._sleep = sleep or time.sleep

    def wait(self) -> None:
        if self.delay_ms > 0:
            self._sleep(self.delay_ms / 1000)


@dataclass
class BatchSummary:
    generated: int = 0
    failed: int = 0
    skipped: int = 0
    candidate_pairs: int = 0


def _log_attempt(run_id: str, record: ValuePropositionRecord, result: GenerationResult, elapsed: float):
    try:
        log_generation(
            run_id=run_id,
            startup_name=record.startup_name,
            accelerator_name=record.accelerator_name,
            outcome="ok" if result.ok else result.error.value,
            sequence_number=record.sequence_number,
            match_score=record.match_score,
            status_code=result.status_code,
            elapsed_secs=elapsed,
        )
    except sqlite3.Error as e:
        logger.warning("[LOG] Could not write run log: %s", e)


def run_batch(
    workbook: Workbook,
    config: RunConfig,
    backend: LLMBackend,
    notifier: Notifier,
    throttle: FixedDelayThrottle | None = None,
) -> BatchSummary | None:
    """Generate value propositions for every startup/accelerator pair above threshold.

    Returns None when there is nothing to do or the user declines. Rows are written
    one by one; an exception mid-loop leaves the rows written so far in place.
    """
    results_sheet = workbook.require_sheet(RESULTS_SHEET)
    startups = load_startups(workbook)
    accelerators = load_accelerators(workbook)
    logger.info("[BATCH] Loaded %d startups, %d accelerators", len(startups), len(accelerators))

    if not startups or not accelerators:
        notifier.alert("❌ Serve almeno 1 startup e 1 acceleratore!")
        return None

    summary = BatchSummary(candidate_pairs=len(startups) * len(accelerators))
    if not notifier.confirm(
        "Conferma",
        f"Verranno generate fino a {summary.candidate_pairs} value propositions.\n\nContinuare?",
    ):
        logger.info("[BATCH] Cancelled by user")
        return None

    results_sheet.clear_data_rows()
    throttle = throttle or FixedDelayThrottle(config.rate_limit_ms)
    run_id = uuid.uuid4().hex[:12]
    logger.info("[BATCH] Run %s starting, threshold=%s", run_id, config.match_threshold)

    for startup in startups:
        for accelerator in accelerators:
            score = score_match(startup, accelerator)
            if score < config.match_threshold:
                summary.skipped += 1
                continue

            if summary.generated:
                throttle.wait()

            seq = summary.generated + 1
            logger.info("[BATCH] VP %d: %s → %s (score %.2f)", seq, startup.name, accelerator.name, score)
            start = time.time()
            result = generate_value_proposition(startup.description, accelerator.info, config, backend)
            elapsed = time.time() - start

            if not result.ok:
                summary.failed += 1
                logger.warning("[BATCH] VP %d failed with %s", seq, result.error.value)

            record = ValuePropositionRecord(
                sequence_number=seq,
                startup_name=startup.name,
                accelerator_name=accelerator.name,
                match_score=score,
                text=result.text,
                generated_at=datetime.now(),
            )
            results_sheet.append_row(record.to_row())
            summary.generated += 1
            _log_attempt(run_id, record, result, elapsed)

    logger.info(
        "[BATCH] Run %s done: generated=%d failed=%d skipped=%d",
        run_id, summary.generated, summary.failed, summary.skipped,
    )
    notifier.alert(f"✅ Completato!\n\nGenerate {summary.generated} value propositions.")
    return summary


def run_fixed_test(config: RunConfig, backend: LLMBackend, notifier: Notifier) -> GenerationResult:
    """Generate for the built-in sample pair; a quick check that key and model work."""
    logger.info("[TEST] Fixed-input test: startup=%r", SAMPLE_STARTUP[:60])
    result = generate_value_proposition(SAMPLE_STARTUP, SAMPLE_ACCELERATOR, config, backend)
    verdict = "FUNZIONA! ✅" if result.ok else "Controlla i log per i dettagli. ❌"
    notifier.alert(f"📊 RISULTATO TEST\n\n{result.text}\n\n{verdict}")
    return result


def run_sheet_test(
    workbook: Workbook, config: RunConfig, backend: LLMBackend, notifier: Notifier
) -> ValuePropositionRecord | None:
    """Generate for the first startup and first accelerator and append the result."""
    for name in (STARTUP_SHEET, ACCELERATOR_SHEET):
        sheet = workbook.get_sheet(name)
        if sheet is None or sheet.last_row() < 2:
            notifier.alert(f"❌ Scheda '{name}' vuota o mancante!")
            return None

    startup = load_startups(workbook)[0]
    accelerator = load_accelerators(workbook)[0]
    logger.info("[TEST] Sheet test: %s → %s", startup.name, accelerator.name)

    result = generate_value_proposition(startup.description, accelerator.info, config, backend)

    results_sheet = workbook.get_sheet(RESULTS_SHEET)
    record = ValuePropositionRecord(
        sequence_number=max(results_sheet.last_row(), 1) if results_sheet else 1,
        startup_name=startup.name,
        accelerator_name=accelerator.name,
        match_score=score_match(startup, accelerator),
        text=result.text,
        generated_at=datetime.now(),
    )
    if results_sheet is not None:
        results_sheet.append_row(record.to_row())

    notifier.alert(
        "✅ TEST COMPLETATO\n\n"
        f"Startup: {startup.name}\n"
        f"Acceleratore: {accelerator.name}\n\n"
        f"Value Proposition:\n{result.text}"
    )
    return record
