import logging
from datetime import datetime, time, timedelta
from pathlib import Path

from icalendar import Calendar
import recurring_ical_events

from daygrid import EmptyDayRangeError
from ical_utils import ConfigError, FetchError

logger = logging.getLogger(__name__)


def get_timezone(name):
    if not name:
        return None
    from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Unknown timezone: {name}") from exc


def normalize_datetime(dt, tzinfo):
    if dt.tzinfo is None and tzinfo:
        return dt.replace(tzinfo=tzinfo)
    if tzinfo:
        return dt.astimezone(tzinfo)
    return dt


def normalize_source(source):
    if isinstance(source, str):
        if "://" in source:
            return {"type": "ical_url", "url": source}
        return {"type": "local", "path": source}
    if not isinstance(source, dict):
        raise ConfigError("No calendar source configured")
    return source


def load_calendar_text(source, fetcher):
    source = normalize_source(source)
    cal_type = (source.get("type") or "").lower()
    if cal_type == "ical_url":
        url = source.get("url")
        if not url:
            raise ConfigError("Calendar source of type ical_url needs a url")
        if url.startswith("webcal://"):
            url = "https://" + url[len("webcal://"):]
        logger.info("fetching calendar from %s", url)
        return fetcher.fetch_text(url)
    if cal_type == "local":
        path = source.get("path")
        if not path:
            raise ConfigError("Calendar source of type local needs a path")
        logger.info("reading calendar from %s", path)
        try:
            return Path(path).read_bytes().decode("utf-8", errors="ignore")
        except OSError as exc:
            raise FetchError(f"could not read {path}: {exc}") from exc
    raise ConfigError(f"Unknown calendar source type: {cal_type!r}")


def event_end(event, dtstart):
    dtend = event.get("dtend")
    if dtend:
        return dtend.dt
    duration = event.get("duration")
    if duration:
        return dtstart + duration.dt
    return dtstart


def parse_ical_events(ical_text, tzinfo, start_dt, end_dt):
    cal = Calendar.from_ical(ical_text)
    events = []
    for event in recurring_ical_events.of(cal).between(start_dt, end_dt):
        summary = str(event.get("summary") or "Untitled")
        dtstart = event.get("dtstart")
        if not dtstart:
            continue
        dtstart = dtstart.dt
        if not isinstance(dtstart, datetime):
            logger.debug("skipping all-day event %r", summary)
            continue
        dtend = event_end(event, dtstart)
        events.append(
            {
                "start": normalize_datetime(dtstart, tzinfo),
                "end": normalize_datetime(dtend, tzinfo),
                "title": summary,
                "all_day": False,
            }
        )
    return events


def window_for_days(days, tzinfo):
    first, last = min(days), max(days)
    start_dt = datetime.combine(first, time.min, tzinfo)
    end_dt = datetime.combine(last + timedelta(days=1), time.min, tzinfo)
    return start_dt, end_dt


def fetch_events(source, tzinfo, days, fetcher):
    days = [d.date() if isinstance(d, datetime) else d for d in days]
    if not days:
        raise EmptyDayRangeError("at least one day is required")
    start_dt, end_dt = window_for_days(days, tzinfo)
    ical_text = load_calendar_text(source, fetcher)
    events = parse_ical_events(ical_text, tzinfo, start_dt, end_dt)
    logger.info("loaded %d timed events between %s and %s", len(events), start_dt, end_dt)
    return events
