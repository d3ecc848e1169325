"""Locale-aware labels for day headings and times, backed by pendulum."""

import pendulum

from daygrid import SLOT_MINUTES

DEFAULT_LOCALE = "en"
DAY_HEADING_FORMAT = "dddd D/M"
TIME_FORMAT = "LT"


def day_heading(day, locale=DEFAULT_LOCALE):
    return pendulum.date(day.year, day.month, day.day).format(DAY_HEADING_FORMAT, locale=locale)


def time_of_day(dt, locale=DEFAULT_LOCALE):
    return pendulum.instance(dt).format(TIME_FORMAT, locale=locale)


def slot_label(slot, locale=DEFAULT_LOCALE):
    minutes = slot * SLOT_MINUTES
    hour, minute = divmod(minutes, 60)
    # slots at the end of the day wrap to midnight
    moment = pendulum.datetime(2000, 1, 1, hour % 24, minute)
    return moment.format(TIME_FORMAT, locale=locale)


def event_span_text(event, locale=DEFAULT_LOCALE):
    return f"{time_of_day(event.actual_start, locale)} - {time_of_day(event.actual_end, locale)}"
