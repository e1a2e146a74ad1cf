"""Shared fixtures: template workbooks on disk, a scripted backend, a recording notifier."""
import os
from unittest.mock import MagicMock

import pytest

import scouting.run_log as rl
from scouting.backends import GenerationResult, LLMBackend
from scouting.notify import Notifier
from scouting.run_config import RunConfig
from scouting.workbook import (
    ACCELERATOR_SHEET,
    RESULTS_SHEET,
    STARTUP_SHEET,
    XlsxWorkbook,
    create_template,
)

VALID_KEY = "gsk_" + "x" * 40

STARTUP_ROWS = [
    [1, "HireAI", "Italia", "SaaS, AI", "Seed", "Piattaforma di recruiting basata su AI per PMI.", "hireai.it"],
    [2, "PayFlow", "Germania", "Fintech", "Pre-seed", "Pagamenti istantanei per marketplace B2B.", ""],
    [3, "GreenGrid", "Spagna", "Energy/CleanTech", "Series A", "Ottimizzazione di micro-reti energetiche.", ""],
]

ACCELERATOR_ROWS = [
    [1, "Boost Milano", "Italia", "ai fintech", "3 mesi", "Programma per startup early stage."],
    [2, "EU Climate Lab", "Multi-country EU", "cleantech energy", "6 mesi", "Acceleratore paneuropeo sul clima."],
]


@pytest.fixture(autouse=True)
def _temp_run_log(tmp_path):
    """Point the run log at a temp DB for test isolation."""
    rl.LOG_DB_PATH = os.path.join(tmp_path, "run_log.db")
    yield rl.LOG_DB_PATH


def build_workbook(path, startups=STARTUP_ROWS, accelerators=ACCELERATOR_ROWS, config=None, results=()):
    create_template(path)
    wb = XlsxWorkbook(path)
    config_sheet = wb.get_sheet("Config")
    values = config or {"B1": VALID_KEY, "B2": 200, "B3": "llama-3.1-8b-instant", "B4": 0, "B5": 0.5}
    for cell, value in values.items():
        config_sheet._ws[cell] = value
    for row in startups:
        wb.get_sheet(STARTUP_SHEET).append_row(row)
    for row in accelerators:
        wb.get_sheet(ACCELERATOR_SHEET).append_row(row)
    for row in results:
        wb.get_sheet(RESULTS_SHEET).append_row(row)
    wb.save()
    return XlsxWorkbook(path)


@pytest.fixture
def make_workbook(tmp_path):
    def _make(name="scouting.xlsx", **kwargs):
        return build_workbook(tmp_path / name, **kwargs)
    return _make


@pytest.fixture
def workbook(make_workbook):
    return make_workbook()


@pytest.fixture
def run_config():
    return RunConfig(
        api_key=VALID_KEY,
        max_tokens=200,
        model="llama-3.1-8b-instant",
        rate_limit_ms=0,
        match_threshold=0.5,
    )


class ScriptedBackend(LLMBackend):
    """Returns canned results and remembers every prompt it was sent."""

    name = "scripted"

    def __init__(self, results=None):
        self.results = list(results or [])
        self.prompts = []

    def complete(self, prompt, config):
        self.prompts.append(prompt)
        if self.results:
            return self.results.pop(0)
        return GenerationResult.success(f"Value proposition #{len(self.prompts)}")


@pytest.fixture
def make_backend():
    return ScriptedBackend


@pytest.fixture
def backend():
    return ScriptedBackend()


@pytest.fixture
def notifier():
    n = MagicMock(spec=Notifier)
    n.confirm.return_value = True
    return n
