#!/usr/bin/env python3
"""
Years Extractor - derive years of experience from candidate records.

Works from explicit start/end dates first, then from free-text durations
("2 years 3 months"), then from a direct years-like field.
"""
from datetime import date, datetime
from typing import Any, Optional
import logging
import re

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

PRESENT_MARKERS = {'present', 'current', 'now', 'ongoing', 'today'}

DAYS_PER_YEAR = 365.25


class YearsExtractor:
    """
    Extract years of experience values from dates, durations and free text.
    """

    YEARS_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*(?:years?|yrs?)', re.IGNORECASE)
    MONTHS_PATTERN = re.compile(r'(\d+)\s*(?:months?|mos?)', re.IGNORECASE)
    LEADING_NUMBER_PATTERN = re.compile(r'(\d+(?:\.\d+)?)')

    def __init__(self, today: Optional[date] = None):
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def parse_date(self, value: Any) -> Optional[date]:
        """Parse a loosely formatted date. Returns None when unparseable."""
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            year = int(value)
            return date(year, 1, 1) if 1900 <= year <= 2100 else None
        text = str(value).strip()
        if not text:
            return None
        if text.lower() in PRESENT_MARKERS:
            return self.today
        try:
            return date_parser.parse(text, default=datetime(2000, 1, 1)).date()
        except (ValueError, OverflowError, TypeError) as e:
            logger.debug(f"Could not parse date {text!r}: {e}")
            return None

    def years_between(self, start_date: Any, end_date: Any = None) -> Optional[float]:
        """Years between two dates; a missing or "present" end means today."""
        start = self.parse_date(start_date)
        if start is None:
            return None

        if end_date is None or (isinstance(end_date, str) and end_date.strip().lower() in PRESENT_MARKERS | {''}):
            end = self.today
        else:
            end = self.parse_date(end_date)
            if end is None:
                return None

        diff = relativedelta(end, start)
        years = diff.years + diff.months / 12 + diff.days / DAYS_PER_YEAR
        return max(0.0, years)

    def years_from_duration(self, duration: Any) -> Optional[float]:
        """Parse a duration string such as "1 year 6 months" into years."""
        if duration is None:
            return None
        if isinstance(duration, (int, float)) and not isinstance(duration, bool):
            return float(duration) if duration > 0 else None

        text = str(duration)
        years = 0.0
        year_match = self.YEARS_PATTERN.search(text)
        month_match = self.MONTHS_PATTERN.search(text)
        if year_match:
            years += float(year_match.group(1))
        if month_match:
            years += int(month_match.group(1)) / 12

        return years if years > 0 else None

    def years_from_value(self, value: Any) -> Optional[float]:
        """Read a direct years-of-experience field (number or "5+ years")."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            match = self.LEADING_NUMBER_PATTERN.search(value)
            if match:
                return float(match.group(1))
        return None
