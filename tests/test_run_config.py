"""Tests for reading the run configuration from the Config sheet."""
import pytest
from openpyxl import load_workbook

import scouting.run_config as rc
from scouting.run_config import ConfigInvalidError, ConfigMissingError, load_run_config
from scouting.workbook import XlsxWorkbook

from conftest import VALID_KEY


def test_loads_and_coerces_values(make_workbook):
    wb = make_workbook(config={"B1": f"  {VALID_KEY}  ", "B2": "150", "B3": " llama-3.3-70b ", "B4": 1500, "B5": "0,6"})
    config = load_run_config(wb)
    assert config.api_key == VALID_KEY
    assert config.max_tokens == 150
    assert config.model == "llama-3.3-70b"
    assert config.rate_limit_ms == 1500
    assert config.match_threshold == pytest.approx(0.6)


def test_out_of_range_threshold_is_not_rejected(make_workbook):
    wb = make_workbook(config={"B1": VALID_KEY, "B2": 100, "B3": "m", "B4": 0, "B5": 1.5})
    assert load_run_config(wb).match_threshold == 1.5


def test_blank_numeric_cells_default_to_zero(make_workbook):
    wb = make_workbook(config={"B1": VALID_KEY, "B2": None, "B3": "m", "B4": None, "B5": None})
    config = load_run_config(wb)
    assert config.max_tokens == 0
    assert config.rate_limit_ms == 0
    assert config.match_threshold == 0


def test_non_numeric_cell_raises(make_workbook):
    wb = make_workbook(config={"B1": VALID_KEY, "B2": "molti", "B3": "m", "B4": 0, "B5": 0.5})
    with pytest.raises(ConfigInvalidError, match="B2"):
        load_run_config(wb)


@pytest.mark.parametrize("value", ["nan", "inf", "1e400"])
def test_non_finite_cell_raises(make_workbook, value):
    wb = make_workbook(config={"B1": VALID_KEY, "B2": value, "B3": "m", "B4": 0, "B5": 0.5})
    with pytest.raises(ConfigInvalidError, match="B2"):
        load_run_config(wb)


def test_non_finite_threshold_raises(make_workbook):
    wb = make_workbook(config={"B1": VALID_KEY, "B2": 200, "B3": "m", "B4": 0, "B5": "NaN"})
    with pytest.raises(ConfigInvalidError, match="B5"):
        load_run_config(wb)


def test_missing_config_sheet(make_workbook, tmp_path):
    make_workbook()
    path = tmp_path / "scouting.xlsx"
    raw = load_workbook(path)
    del raw["Config"]
    raw.save(path)
    with pytest.raises(ConfigMissingError, match="Config"):
        load_run_config(XlsxWorkbook(path))


def test_blank_key_falls_back_to_environment(make_workbook, monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk_from_environment_123456")
    wb = make_workbook(config={"B1": None, "B2": 100, "B3": "m", "B4": 0, "B5": 0.5})
    assert load_run_config(wb, provider="groq").api_key == "gsk_from_environment_123456"


def test_sheet_key_wins_over_environment(make_workbook, monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk_from_environment_123456")
    assert load_run_config(make_workbook(), provider="groq").api_key == VALID_KEY


def test_blank_key_without_fallback_stays_empty(make_workbook, monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.setattr(rc, "_get_secret", lambda env_var: "")
    wb = make_workbook(config={"B1": "", "B2": 100, "B3": "m", "B4": 0, "B5": 0.5})
    assert load_run_config(wb, provider="claude").api_key == ""


def test_config_is_immutable(make_workbook):
    config = load_run_config(make_workbook())
    with pytest.raises(Exception):
        config.match_threshold = 0.1


def test_repr_masks_api_key(make_workbook):
    assert VALID_KEY not in repr(load_run_config(make_workbook()))
