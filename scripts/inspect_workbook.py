#!/usr/bin/env python3
"""Debug tool: view parsed records and the match-score matrix without calling any API."""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from scouting.config import WORKBOOK_PATH
from scouting.records import load_accelerators, load_startups
from scouting.run_config import load_run_config
from scouting.scoring import score_match
from scouting.workbook import XlsxWorkbook


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else WORKBOOK_PATH
    workbook = XlsxWorkbook(path)
    config = load_run_config(workbook)
    startups = load_startups(workbook)
    accelerators = load_accelerators(workbook)
    print(f"Workbook: {path}")
    print(f"Config: {config!r}")
    print(f"Startups: {len(startups)} | Accelerators: {len(accelerators)}")

    above = 0
    print(f"\n--- Scores (threshold {config.match_threshold}) ---")
    for s in startups:
        for a in accelerators:
            score = score_match(s, a)
            mark = "*" if score >= config.match_threshold else " "
            above += score >= config.match_threshold
            print(f"{mark} {score:.2f}  {s.name} [{s.sector} / {s.country}] -> {a.name} [{a.focus} / {a.country}]")
    print(f"\n{above} of {len(startups) * len(accelerators)} pairs would be generated")

if __name__ == "__main__":
    main()
