# scramble/core/dates.py
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List

from loguru import logger

DUPLICATE = "duplicate"
GAP = "gap"


def _parse_day(value: str):
    # strict YYYY-MM-DD; fromisoformat also takes compact and week forms on 3.11+
    return datetime.strptime(value, "%Y-%m-%d").date()


@dataclass(frozen=True)
class DateWarning:
    kind: str # DUPLICATE or GAP
    date: str # YYYY-MM-DD

    def __str__(self) -> str:
        if self.kind == DUPLICATE:
            return f"duplicate date {self.date}"
        return f"missing date {self.date}"


def date_warnings(dates: Iterable[str]) -> List[DateWarning]:
    """
    Flags repeated dates and single-day holes in a run of puzzle dates.

    A gap is reported for day D+1 when D and D+2 are both present but D+1 is
    not. Longer holes are treated as intentional breaks.
    """
    counts = Counter(dates)
    parsed = set()
    for value in counts:
        try:
            parsed.add(_parse_day(value))
        except ValueError:
            logger.warning(f"Skipping unparseable puzzle date: {value!r}")

    one_day = timedelta(days=1)
    warnings: List[DateWarning] = []
    for value, count in counts.items():
        if count > 1:
            warnings.append(DateWarning(DUPLICATE, value))
        try:
            day = _parse_day(value)
        except ValueError:
            continue
        following = day + one_day
        if following not in parsed and following + one_day in parsed:
            warnings.append(DateWarning(GAP, following.isoformat()))
    return warnings
