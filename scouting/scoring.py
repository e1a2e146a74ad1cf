import re

from scouting.records import AcceleratorRecord, StartupRecord

BASE_SCORE = 0.2
SECTOR_BONUS = 0.5
SAME_COUNTRY_BONUS = 0.3
MULTI_COUNTRY_BONUS = 0.15
MAX_SCORE = 1.0

_TOKEN_SEPARATORS = re.compile(r"[,/\s]+")
_MULTI_COUNTRY_MARKERS = ("multi", "eu")


def tokenize(text: str | None) -> list[str]:
    """Lower-case and split on commas, slashes and whitespace, dropping empty tokens."""
    if not text:
        return []
    return [t for t in _TOKEN_SEPARATORS.split(str(text).lower()) if t]


def score_match(startup: StartupRecord, accelerator: AcceleratorRecord) -> float:
    """Heuristic compatibility of a startup and an accelerator, in [0.2, 1.0].

    Each sector token that appears among the focus tokens adds 0.5. Country adds
    0.3 on an exact (case-insensitive) match, otherwise 0.15 when the accelerator
    country looks multi-national ("multi", "eu").
    """
    score = BASE_SCORE

    focuses = tokenize(accelerator.focus)
    for sector in tokenize(startup.sector):
        if sector in focuses:
            score += SECTOR_BONUS

    startup_country = (startup.country or "").lower()
    accelerator_country = (accelerator.country or "").lower()
    if startup_country and accelerator_country:
        if startup_country == accelerator_country:
            score += SAME_COUNTRY_BONUS
        elif any(marker in accelerator_country for marker in _MULTI_COUNTRY_MARKERS):
            score += MULTI_COUNTRY_BONUS

    return min(score, MAX_SCORE)
