"""Tests for the ICS calendar writer."""

import time
from datetime import date, datetime, timedelta, timezone

import pytest

from studyweek.adapters.ics import (
    escape_text,
    format_ics_datetime,
    generate_ics,
    ics_file_name,
    subscription_url,
)
from studyweek.core.schedule import ScheduledSession

requires_tzset = pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")


@pytest.fixture
def now():
    return datetime(2025, 1, 12, 18, 30, tzinfo=timezone.utc)


@pytest.fixture
def toronto(monkeypatch):
    """Run with the process local time set to America/Toronto."""
    monkeypatch.setenv("TZ", "America/Toronto")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def session():
    return ScheduledSession(
        id="session-t1-0-abc",
        task_id="t1",
        title="Essay, draft; part 1",
        start_time=datetime(2025, 1, 13, 9, 5, tzinfo=timezone.utc),
        end_time=datetime(2025, 1, 13, 10, 5, tzinfo=timezone.utc),
        day_of_week=0,
        calculated_priority=16,
        notes="Intro\nBody",
        activity_id="english",
    )


class TestEscapeText:
    def test_escapes_special_characters(self):
        assert escape_text("a,b;c\\d") == "a\\,b\\;c\\\\d"

    def test_newlines(self):
        assert escape_text("line one\nline two") == "line one\\nline two"

    def test_strips_carriage_returns(self):
        assert escape_text("one\r\ntwo") == "one\\ntwo"

    def test_plain_text_unchanged(self):
        assert escape_text("Read chapter 4") == "Read chapter 4"


class TestFormatIcsDatetime:
    def test_utc(self):
        assert format_ics_datetime(datetime(2025, 1, 13, 9, 5, tzinfo=timezone.utc)) == "20250113T090500Z"

    def test_converts_to_utc(self):
        eastern = timezone(timedelta(hours=-5))
        assert format_ics_datetime(datetime(2025, 1, 13, 22, 0, tzinfo=eastern)) == "20250114T030000Z"

    @requires_tzset
    def test_naive_treated_as_local(self, toronto):
        assert format_ics_datetime(datetime(2025, 1, 13, 9, 5, 30)) == "20250113T140530Z"

    @requires_tzset
    def test_naive_local_summer_offset(self, toronto):
        assert format_ics_datetime(datetime(2025, 7, 14, 9, 0)) == "20250714T130000Z"


class TestGenerateIcs:
    def test_header_and_footer(self, now):
        lines = generate_ics([], now).split("\n")

        assert lines[0] == "BEGIN:VCALENDAR"
        assert "VERSION:2.0" in lines
        assert any(line.startswith("PRODID:") for line in lines)
        assert "X-WR-TIMEZONE:UTC" in lines
        assert "DTSTAMP:20250112T183000Z" in lines
        assert lines[-1] == "END:VCALENDAR"
        assert "BEGIN:VEVENT" not in lines

    def test_event(self, session, now):
        lines = generate_ics([session], now).split("\n")
        start = lines.index("BEGIN:VEVENT")
        event = lines[start : lines.index("END:VEVENT") + 1]

        assert event == [
            "BEGIN:VEVENT",
            "UID:session-t1-0-abc",
            "SUMMARY:Essay\\, draft\\; part 1",
            "DTSTART:20250113T090500Z",
            "DTEND:20250113T100500Z",
            "DTSTAMP:20250112T183000Z",
            "LAST-MODIFIED:20250113T090500Z",
            "STATUS:CONFIRMED",
            "TRANSP:OPAQUE",
            "DESCRIPTION:Intro\\nBody",
            "CATEGORIES:english",
            "SEQUENCE:0",
            "END:VEVENT",
        ]

    def test_optional_fields_omitted(self, session, now):
        session.notes = None
        session.activity_id = None
        content = generate_ics([session], now)

        assert "DESCRIPTION:" not in content
        assert "CATEGORIES:" not in content
        assert "LOCATION:" not in content

    def test_location(self, session, now):
        session.location = "Library, room 2"
        assert "LOCATION:Library\\, room 2" in generate_ics([session], now)

    def test_one_event_per_session(self, session, now):
        content = generate_ics([session, session, session], now)
        assert content.count("BEGIN:VEVENT") == 3
        assert content.count("END:VEVENT") == 3


class TestHelpers:
    def test_file_name(self):
        assert ics_file_name("u1", date(2025, 1, 12)) == "study-schedule-u1-2025-01-12.ics"

    def test_subscription_url(self):
        assert subscription_url("u1", "https://example.com/") == "https://example.com/calendar/u1"
