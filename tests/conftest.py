"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

from helpers import make_event

# Make the top-level modules importable without installing the project
sys.path.insert(0, str(Path(__file__).parent.parent))


SAMPLE_ICS = """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//ical-to-image//tests//EN
BEGIN:VEVENT
UID:standup@example.com
DTSTART:20240101T090000
DTEND:20240101T103000
SUMMARY:Standup
END:VEVENT
BEGIN:VEVENT
UID:holiday@example.com
DTSTART;VALUE=DATE:20240101
DTEND;VALUE=DATE:20240102
SUMMARY:Holiday
END:VEVENT
BEGIN:VEVENT
UID:gym@example.com
DTSTART:20240102T080000
DURATION:PT45M
RRULE:FREQ=DAILY;COUNT=3
SUMMARY:Gym
END:VEVENT
END:VCALENDAR
"""


@pytest.fixture
def standup():
    return make_event("Standup", datetime(2024, 1, 1, 9, 0), 90)


@pytest.fixture
def sample_ics():
    return SAMPLE_ICS


@pytest.fixture
def ics_file(tmp_path):
    path = tmp_path / "calendar.ics"
    path.write_text(SAMPLE_ICS)
    return path
