"""Resolve scraped Dutch/English date and time phrases to calendar dates.

Rules are tried in order and the first matching pattern wins. Every path
ends in a valid date: anything that cannot be parsed falls back to today.

Examples (with now = Wednesday 2024-04-24 18:00):
- "30/04 - 19:00"         -> 2024-04-30
- "19:00"                 -> 2024-04-24 (20:00 -> tomorrow)
- "2024-04-30T19:00:00Z"  -> 2024-04-30
- "ma 19:00"              -> 2024-04-29
- "morgen 20:45"          -> 2024-04-25
- "april 30 19:00"        -> 2024-04-30
- "12 mrt"                -> 2024-03-12
- "niet begonnen"         -> 2024-04-24
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Callable, Mapping, Optional
from zoneinfo import ZoneInfo

from .config import Config, default_config

logger = logging.getLogger("textalgos.dates")

# ISO weekday numbers (Monday=1 .. Sunday=7).
WEEKDAYS: Mapping[str, int] = MappingProxyType(
    {
        "ma": 1,
        "di": 2,
        "wo": 3,
        "do": 4,
        "vr": 5,
        "za": 6,
        "zo": 7,
        "mo": 1,
        "tu": 2,
        "we": 3,
        "th": 4,
        "fr": 5,
        "sa": 6,
        "su": 7,
    }
)

DUTCH_MONTHS: tuple[str, ...] = (
    "jan", "feb", "mrt", "apr", "mei", "jun", "jul", "aug", "sep", "okt", "nov", "dec",
)

ENGLISH_MONTHS: tuple[str, ...] = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)

LITERAL_OFFSETS: Mapping[str, int] = MappingProxyType(
    {
        "today": 0,
        "vandaag": 0,
        "niet begonnen": 0,
        "morgen": 1,
        "tomorrow": 1,
    }
)

_WEEKDAY_ALTERNATION = "|".join(WEEKDAYS)

DAY_MONTH_TIME_RE = re.compile(r"^(\d{1,2})/(\d{1,2}).{1,3}?(\d{1,2}):(\d{2})")
TIME_ONLY_RE = re.compile(r"^(\d{1,2}):(\d{2})")
ISO_DATE_RE = re.compile(r"^(\d{4}).(\d{2}).(\d{2})")
WEEKDAY_TIME_RE = re.compile(rf"^({_WEEKDAY_ALTERNATION}).?(\d{{1,2}}):(\d{{2}})", re.IGNORECASE)
TODAY_RE = re.compile(r"^(?:vandaag|today)", re.IGNORECASE)
TOMORROW_RE = re.compile(r"^(?:morgen|tomorrow)", re.IGNORECASE)
MONTH_NAME_TIME_RE = re.compile(r"^([a-z]+)\s+(\d{1,2})\b.*?(\d{1,2}):(\d{2})", re.IGNORECASE)
LITERAL_RE = re.compile(
    "^(?:" + "|".join(re.escape(key) for key in LITERAL_OFFSETS) + ")$",
    re.IGNORECASE,
)
ANY_RE = re.compile(r"")
_SLASH_DOT_SPLIT_RE = re.compile(r"[/.]")
_LEADING_NOISE_RE = re.compile(r"^[\W_]+")


@dataclass(frozen=True)
class DateResolution:
    """Resolved date plus the rule that produced it.

    ``defaulted`` is True when a parse failure substituted today's date.
    """

    value: date
    rule: str
    defaulted: bool = False


@dataclass(frozen=True)
class DateRule:
    name: str
    pattern: re.Pattern[str]
    resolve: Callable[[re.Match[str], str, datetime], DateResolution]


def current_time(config: Config | None = None) -> datetime:
    """Return the naive wall clock in the configured timezone.

    Without a config the default_config() zone (Europe/Amsterdam) applies; a
    config with ``timezone=None`` reads the host local clock.
    """
    if config is None:
        config = default_config()
    if config.timezone:
        return datetime.now(ZoneInfo(config.timezone)).replace(tzinfo=None)
    return datetime.now()


def resolve_date(
    raw: str,
    now: Optional[datetime] = None,
    config: Config | None = None,
) -> date:
    """Resolve a raw date/time phrase to a calendar date. Never raises."""
    return resolve_date_detailed(raw, now, config).value


def resolve_date_detailed(
    raw: str,
    now: Optional[datetime] = None,
    config: Config | None = None,
) -> DateResolution:
    """Resolve ``raw`` and report which rule matched.

    ``now`` is read once; when omitted it comes from current_time(config).
    """
    if now is None:
        now = current_time(config)
    phrase = _LEADING_NOISE_RE.sub("", (raw or "").lower().strip())

    for rule in RULES:
        match = rule.pattern.match(phrase)
        if match:
            return rule.resolve(match, phrase, now)

    # unreachable: RULES ends with a catch-all
    return DateResolution(now.date(), "fallback", defaulted=True)


def _day_month_time(match: re.Match[str], phrase: str, now: datetime) -> DateResolution:
    return _assemble(now, now.year, int(match.group(2)), int(match.group(1)), "day_month_time")


def _time_only(match: re.Match[str], phrase: str, now: datetime) -> DateResolution:
    hour = int(match.group(1))
    if now.hour < hour:
        return DateResolution(now.date(), "time_only")
    return DateResolution(now.date() + timedelta(days=1), "time_only")


def _iso_date(match: re.Match[str], phrase: str, now: datetime) -> DateResolution:
    year, month, day = (int(group) for group in match.groups())
    return _assemble(now, year, month, day, "iso_date")


def _weekday_time(match: re.Match[str], phrase: str, now: datetime) -> DateResolution:
    target = WEEKDAYS[match.group(1).lower()] % 7
    current = now.isoweekday() % 7
    days_to_add = (target - current + 7) % 7
    return DateResolution(now.date() + timedelta(days=days_to_add), "weekday_time")


def _today(match: re.Match[str], phrase: str, now: datetime) -> DateResolution:
    return DateResolution(now.date(), "today")


def _tomorrow(match: re.Match[str], phrase: str, now: datetime) -> DateResolution:
    return DateResolution(now.date() + timedelta(days=1), "tomorrow")


def _month_name_time(match: re.Match[str], phrase: str, now: datetime) -> DateResolution:
    month = _english_month(match.group(1))
    if month is None:
        logger.warning("Unparseable date %r: unknown month %r", phrase, match.group(1))
        return DateResolution(now.date(), "month_name_time", defaulted=True)
    return _assemble(now, now.year, month, int(match.group(2)), "month_name_time")


def _literal(match: re.Match[str], phrase: str, now: datetime) -> DateResolution:
    return DateResolution(now.date() + timedelta(days=LITERAL_OFFSETS[phrase]), "literal")


def _fallback(match: re.Match[str], phrase: str, now: datetime) -> DateResolution:
    year, month, day = now.year, now.month, now.day
    parsed = False

    tokens = phrase.split(" ")
    if len(tokens) == 2:
        month_token = tokens[1].rstrip(".,").lower()
        if month_token in DUTCH_MONTHS:
            month = DUTCH_MONTHS.index(month_token) + 1
            parsed = True
    if tokens[0].isdigit():
        day = _to_int(tokens[0], day)
        parsed = True

    parts = _SLASH_DOT_SPLIT_RE.split(phrase)
    if len(parts) >= 2:
        day_str = parts[0].strip().rstrip(",")[:2]
        month_str = parts[1].strip().rstrip(",")[:2]
        day = _to_int(day_str, day)
        month = _to_int(month_str, month)
        parsed = parsed or day_str.isdigit() or month_str.isdigit()

    if not parsed:
        logger.warning("Unparseable date %r, using today", phrase)
        return DateResolution(now.date(), "fallback", defaulted=True)
    return _assemble(now, year, month, day, "fallback")


def _assemble(now: datetime, year: int, month: int, day: int, rule: str) -> DateResolution:
    try:
        return DateResolution(date(year, month, day), rule)
    except ValueError as exc:
        logger.warning("Invalid date %04d-%02d-%02d (%s): %s", year, month, day, rule, exc)
        return DateResolution(now.date(), rule, defaulted=True)


def _english_month(name: str) -> int | None:
    name = name.lower()
    if len(name) < 3:
        return None
    for index, full_name in enumerate(ENGLISH_MONTHS, start=1):
        if full_name.startswith(name):
            return index
    return None


def _to_int(value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        return default


RULES: tuple[DateRule, ...] = (
    DateRule("day_month_time", DAY_MONTH_TIME_RE, _day_month_time),
    DateRule("time_only", TIME_ONLY_RE, _time_only),
    DateRule("iso_date", ISO_DATE_RE, _iso_date),
    DateRule("weekday_time", WEEKDAY_TIME_RE, _weekday_time),
    DateRule("today", TODAY_RE, _today),
    DateRule("tomorrow", TOMORROW_RE, _tomorrow),
    DateRule("month_name_time", MONTH_NAME_TIME_RE, _month_name_time),
    DateRule("literal", LITERAL_RE, _literal),
    DateRule("fallback", ANY_RE, _fallback),
)
