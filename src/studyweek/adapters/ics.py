"""ICS calendar file writer."""

from datetime import date, datetime, timezone

from studyweek.core.schedule import ScheduledSession

PRODID = "-//Studyweek//Study Schedule Generator//EN"


def format_ics_datetime(dt: datetime) -> str:
    """Format as a UTC ICS timestamp. Naive datetimes are taken as local time."""
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def escape_text(text: str) -> str:
    """Escape free text for an ICS property value."""
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
        .replace("\r", "")
    )


def calendar_header(now: datetime) -> list[str]:
    return [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        f"DTSTAMP:{format_ics_datetime(now)}",
        "X-WR-CALNAME:Study Schedule",
        "X-WR-CALDESC:Generated study schedule",
        "X-WR-TIMEZONE:UTC",
    ]


def session_event(session: ScheduledSession, now: datetime) -> list[str]:
    """VEVENT lines for one session."""
    lines = [
        "BEGIN:VEVENT",
        f"UID:{session.id}",
        f"SUMMARY:{escape_text(session.title)}",
        f"DTSTART:{format_ics_datetime(session.start_time)}",
        f"DTEND:{format_ics_datetime(session.end_time)}",
        f"DTSTAMP:{format_ics_datetime(now)}",
        f"LAST-MODIFIED:{format_ics_datetime(session.start_time)}",
        "STATUS:CONFIRMED",
        "TRANSP:OPAQUE",
    ]
    if session.notes:
        lines.append(f"DESCRIPTION:{escape_text(session.notes)}")
    if session.location:
        lines.append(f"LOCATION:{escape_text(session.location)}")
    if session.activity_id:
        lines.append(f"CATEGORIES:{escape_text(session.activity_id)}")
    lines.append("SEQUENCE:0")
    lines.append("END:VEVENT")
    return lines


def generate_ics(sessions: list[ScheduledSession], now: datetime | None = None) -> str:
    """Render sessions as an ICS calendar document."""
    now = now or datetime.now(timezone.utc)
    lines = calendar_header(now)
    for session in sessions:
        lines.extend(session_event(session, now))
    lines.append("END:VCALENDAR")
    return "\n".join(lines)


def ics_file_name(user_id: str, today: date | None = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"study-schedule-{user_id}-{today.isoformat()}.ics"


def subscription_url(user_id: str, base_url: str) -> str:
    """URL external calendar apps can subscribe to."""
    return f"{base_url.rstrip('/')}/calendar/{user_id}"
