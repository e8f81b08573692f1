"""
birth_date.py - Birth date inference for GEDCOM individuals.

Provides the BirthDateInference class, which turns the loosely structured
textual dates of GEDCOM birth events into a single best-guess calendar date.
Supports:
    - Exact dates ('04 Jul 1776'), month and year ('Jul 1776'), bare years ('1776')
    - Leading AFT/BEF/ABT qualifiers, which are discarded
    - Year ranges ('BET 1770 AND 1780') and dual years ('ABT 1780/81'),
      both resolved to the midpoint between the two 1 January dates
"""

import re
import logging
from datetime import date, timedelta
from typing import Callable, Dict, Iterable, List, Optional

from .individual import Individual

logger = logging.getLogger(__name__)

BirthDateMap = Dict[str, date]

MONTH_ABBR_TO_NUM = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}

QUALIFIER_RE = re.compile(r'^(AFT|BEF|ABT) ')
DAY_MONTH_YEAR_RE = re.compile(r'(\d{1,2}) ([A-Za-z]{3}) (\d{4})')
MONTH_YEAR_RE = re.compile(r'([A-Za-z]{3}) (\d{4})')
YEAR_RE = re.compile(r'(\d{4})')
BETWEEN_RE = re.compile(r'BET (\d{4}) AND (\d{4})')
ABOUT_DUAL_YEAR_RE = re.compile(r'ABT (\d{4})/(\d{2})')


def _make_date(year: int, month: int = 1, day: int = 1) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _month_num(month: str) -> Optional[int]:
    return MONTH_ABBR_TO_NUM.get(month.upper())


def midpoint(year1: int, year2: int) -> Optional[date]:
    """
    Midpoint between 1 January of two years.

    The halved day count is truncated toward zero, so a second year earlier
    than the first moves backwards by the same amount a later one moves forwards.

    Args:
        year1 (int): First year.
        year2 (int): Second year.

    Returns:
        date or None: The midpoint date, or None if either year is out of range.
    """
    d1 = _make_date(year1)
    d2 = _make_date(year2)
    if d1 is None or d2 is None:
        return None
    days = (d2 - d1).days
    half = days // 2 if days >= 0 else -(-days // 2)
    return d1 + timedelta(days=half)


def strip_qualifier(text: str) -> str:
    """Remove a leading 'AFT ', 'BEF ' or 'ABT ' qualifier."""
    return QUALIFIER_RE.sub('', text, count=1)


def parse_day_month_year(stripped: str, original: str) -> Optional[date]:
    """'04 Jul 1776' -> 1776-07-04."""
    m = DAY_MONTH_YEAR_RE.fullmatch(stripped)
    if not m:
        return None
    day, month, year = m.groups()
    month_num = _month_num(month)
    if month_num is None:
        return None
    return _make_date(int(year), month_num, int(day))


def parse_month_year(stripped: str, original: str) -> Optional[date]:
    """'Jul 1776' -> 1776-07-01."""
    m = MONTH_YEAR_RE.fullmatch(stripped)
    if not m:
        return None
    month, year = m.groups()
    month_num = _month_num(month)
    if month_num is None:
        return None
    return _make_date(int(year), month_num)


def parse_year(stripped: str, original: str) -> Optional[date]:
    """'1776' -> 1776-01-01."""
    m = YEAR_RE.fullmatch(stripped)
    if not m:
        return None
    return _make_date(int(m.group(1)))


def parse_between(stripped: str, original: str) -> Optional[date]:
    """'BET 1770 AND 1780' -> midpoint of 1770-01-01 and 1780-01-01."""
    m = BETWEEN_RE.fullmatch(original)
    if not m:
        return None
    return midpoint(int(m.group(1)), int(m.group(2)))


def parse_about_dual_year(stripped: str, original: str) -> Optional[date]:
    """'ABT 1780/81' -> midpoint of 1780-01-01 and 1781-01-01; the suffix shares the first year's century."""
    m = ABOUT_DUAL_YEAR_RE.fullmatch(original)
    if not m:
        return None
    year1 = int(m.group(1))
    year2 = 100 * (year1 // 100) + int(m.group(2))
    return midpoint(year1, year2)


DateCandidate = Callable[[str, str], Optional[date]]

# Tried in order; the first candidate returning a date wins.
DEFAULT_CANDIDATES: List[DateCandidate] = [
    parse_day_month_year,
    parse_month_year,
    parse_year,
    parse_between,
    parse_about_dual_year,
]


class BirthDateInference:
    """
    Infers a best-estimate birth date per individual.

    Each candidate parser receives the qualifier-stripped text and the
    original text, and returns a date or None.

    Attributes:
        candidates (List[DateCandidate]): Candidate parsers in priority order.
    """
    __slots__ = ['candidates']

    def __init__(self, candidates: Optional[Iterable[DateCandidate]] = None) -> None:
        self.candidates: List[DateCandidate] = list(candidates) if candidates is not None else list(DEFAULT_CANDIDATES)

    def parse_date_text(self, text: Optional[str]) -> Optional[date]:
        """
        Parse one textual GEDCOM date.

        Args:
            text (Optional[str]): The raw date string.

        Returns:
            date or None: The point estimate, or None if no candidate matches.
        """
        if not text:
            return None
        stripped = strip_qualifier(text)
        for candidate in self.candidates:
            result = candidate(stripped, text)
            if result is not None:
                return result
        return None

    def infer(self, individual: Individual) -> Optional[date]:
        """
        Infer the birth date of an individual.

        Birth events are tried in order and the first usable date is returned.
        Each unparseable date is logged as a warning and skipped.

        Args:
            individual (Individual): The individual.

        Returns:
            date or None: The inferred birth date, or None if unknown.
        """
        for event in individual.dated_birth_events():
            result = self.parse_date_text(event.date_text)
            if result is not None:
                return result
            logger.warning(f"Unable to parse date '{event.date_text}' for {individual}")
        return None

    def infer_all(self, individuals: Iterable[Individual]) -> BirthDateMap:
        """
        Build the birth date map for a collection of individuals.

        Individuals with unknown birth dates are omitted.

        Returns:
            BirthDateMap: Mapping of xref id to inferred birth date.
        """
        birth_dates: BirthDateMap = {}
        for individual in individuals:
            birth_date = self.infer(individual)
            if birth_date is not None:
                birth_dates[individual.xref_id] = birth_date
        logger.info(f"Parsed {len(birth_dates)} birth dates")
        return birth_dates
