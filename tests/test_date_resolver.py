import logging
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from textalgos.config import Config
from textalgos.date_resolver import (
    RULES,
    WEEKDAYS,
    DateResolution,
    current_time,
    resolve_date,
    resolve_date_detailed,
)

# Wednesday evening.
NOW = datetime(2024, 4, 24, 18, 0)
TODAY = date(2024, 4, 24)
TOMORROW = date(2024, 4, 25)


def test_day_month_with_time() -> None:
    assert resolve_date("30/04 - 19:00", NOW) == date(2024, 4, 30)
    assert resolve_date("2/3 19:00", NOW) == date(2024, 3, 2)


def test_time_only_before_and_after_now() -> None:
    assert resolve_date("19:00", datetime(2024, 4, 24, 18, 0)) == TODAY
    assert resolve_date("19:00", datetime(2024, 4, 24, 20, 0)) == TOMORROW
    assert resolve_date("19:00", datetime(2024, 4, 24, 19, 30)) == TOMORROW


def test_time_only_rolls_over_month_end() -> None:
    assert resolve_date("12:30", datetime(2024, 12, 31, 22, 0)) == date(2025, 1, 1)


def test_iso_timestamp_ignores_clock() -> None:
    assert resolve_date("2024-04-30T19:00:00Z", datetime(2030, 1, 1, 0, 0)) == date(2024, 4, 30)
    assert resolve_date("2023/12/05", NOW) == date(2023, 12, 5)


def test_weekday_with_time_dutch_and_english() -> None:
    assert resolve_date("ma 19:00", NOW) == date(2024, 4, 29)
    assert resolve_date("mo 19:00", NOW) == date(2024, 4, 29)
    assert resolve_date("zo 14:30", NOW) == date(2024, 4, 28)
    assert resolve_date("Su 14:30", NOW) == date(2024, 4, 28)
    assert resolve_date("vr 20:00", NOW) == date(2024, 4, 26)


def test_weekday_matching_today_returns_today() -> None:
    assert resolve_date("wo 21:00", NOW) == TODAY
    assert resolve_date("we 21:00", NOW) == TODAY


def test_weekday_tokens_agree_between_languages() -> None:
    pairs = [("ma", "mo"), ("di", "tu"), ("wo", "we"), ("do", "th"), ("vr", "fr"), ("za", "sa"), ("zo", "su")]
    for dutch, english in pairs:
        assert WEEKDAYS[dutch] == WEEKDAYS[english]
    assert len(WEEKDAYS) == 14


def test_today_and_tomorrow_prefixes() -> None:
    assert resolve_date("Vandaag 20:45", NOW) == TODAY
    assert resolve_date("today", NOW) == TODAY
    assert resolve_date("morgen 14:00", NOW) == TOMORROW
    assert resolve_date("Tomorrow", NOW) == TOMORROW


def test_month_name_with_time() -> None:
    assert resolve_date("April 30 19:00", NOW) == date(2024, 4, 30)
    assert resolve_date("sept 1 - 12:00", NOW) == date(2024, 9, 1)


def test_month_name_unknown_month_defaults_to_today(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="textalgos.dates"):
        result = resolve_date_detailed("zo 12 aug 19:00", NOW)
    assert result.value == TODAY
    assert result.rule == "month_name_time"
    assert result.defaulted is True
    assert "Unparseable date" in caplog.text


def test_month_name_invalid_day_defaults_to_today() -> None:
    result = resolve_date_detailed("february 31 19:00", NOW)
    assert result.value == TODAY
    assert result.defaulted is True


def test_niet_begonnen_is_today() -> None:
    result = resolve_date_detailed("Niet begonnen", NOW)
    assert result.value == TODAY
    assert result.rule == "literal"


def test_space_split_with_dutch_month() -> None:
    assert resolve_date("12 mrt", NOW) == date(2024, 3, 12)
    assert resolve_date("3 okt.", NOW) == date(2024, 10, 3)


def test_slash_and_dot_split() -> None:
    assert resolve_date("12/03", NOW) == date(2024, 3, 12)
    assert resolve_date("12/03,", NOW) == date(2024, 3, 12)
    assert resolve_date("05.11.2023", NOW) == date(2024, 11, 5)
    assert resolve_date("x/03", NOW) == date(2024, 3, 24)


def test_month_token_is_truncated_not_whole_input() -> None:
    assert resolve_date("15/0612", NOW) == date(2024, 6, 15)


def test_invalid_components_default_to_today() -> None:
    result = resolve_date_detailed("31/02", NOW)
    assert result.value == TODAY
    assert result.defaulted is True
    assert resolve_date("45/13 - 19:00", NOW) == TODAY
    assert resolve_date("2024-13-45", NOW) == TODAY


@pytest.mark.parametrize("phrase", ["not a date at all", "", "   ", "??", "--:--", "zz 99"])
def test_total_failure_returns_today(phrase: str) -> None:
    result = resolve_date_detailed(phrase, NOW)
    assert result.value == TODAY
    assert result.defaulted is True


def test_rules_are_ordered_with_catch_all_last() -> None:
    names = [rule.name for rule in RULES]
    assert names[0] == "day_month_time"
    assert names.index("time_only") < names.index("weekday_time")
    assert names[-1] == "fallback"


def test_clock_is_read_once_per_call(monkeypatch) -> None:
    calls = []

    def fake_now(config=None):
        calls.append(config)
        return NOW

    monkeypatch.setattr("textalgos.date_resolver.current_time", fake_now)
    assert resolve_date("morgen") == TOMORROW
    assert len(calls) == 1


def test_current_time_uses_configured_timezone() -> None:
    now = current_time(Config(timezone="UTC"))
    assert now.tzinfo is None
    assert isinstance(current_time(Config(timezone=None)), datetime)


def test_numeric_first_token_sets_day_regardless_of_token_count() -> None:
    assert resolve_date_detailed("15", NOW) == DateResolution(date(2024, 4, 15), "fallback")
    assert resolve_date("15 mei 2024", NOW) == date(2024, 4, 15)
    assert resolve_date("3 aanvang onbekend", NOW) == date(2024, 4, 3)


def test_leading_noise_is_ignored() -> None:
    result = resolve_date_detailed("- 19:00", NOW)
    assert result == DateResolution(TODAY, "time_only")
    assert resolve_date("(ma 19:00)", NOW) == date(2024, 4, 29)
    assert resolve_date("* 30/04 - 19:00", NOW) == date(2024, 4, 30)


def test_dutch_month_lookup_ignores_case() -> None:
    fallback = RULES[-1]
    phrase = "12 MRT"
    result = fallback.resolve(fallback.pattern.match(phrase), phrase, NOW)
    assert result.value == date(2024, 3, 12)


def test_default_clock_follows_default_config_timezone() -> None:
    expected = datetime.now(ZoneInfo("Europe/Amsterdam")).replace(tzinfo=None)
    assert abs(current_time() - expected) < timedelta(minutes=1)
    assert current_time().tzinfo is None
