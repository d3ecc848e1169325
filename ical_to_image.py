#!/usr/bin/env python3
import argparse
import copy
import json
import logging
import sys
from datetime import date, timedelta
from pathlib import Path

from daygrid import build_grid, day_range
from ical_source import fetch_events, get_timezone
from ical_utils import ConfigError, Fetcher, FetchError
from renderers import RENDERER_REGISTRY, RENDERER_SUFFIXES, normalize_colors, normalize_styles

logger = logging.getLogger(__name__)

CONFIG_VERSION = 1
CONFIG_PATH = Path(__file__).resolve().parent / "config.json"
OUTPUT_DIR = Path(__file__).resolve().parent / ".generated"

DEFAULT_WIDTH = 800
DEFAULT_DAYS = 7
MAX_DAYS = 31

DEFAULT_FETCH_CONFIG = {
    "timeout": 10,
    "retries": 3,
    "delay": 10,
    "cache_ttl": 300,
}


def default_config():
    return {
        "version": CONFIG_VERSION,
        "source": None,
        "tz": None,
        "locale": "en",
        "width": DEFAULT_WIDTH,
        "days": DEFAULT_DAYS,
        "start_day": None,
        "format": "png",
        "output": None,
        "css": {},
        "colors": {},
        "fetch": dict(DEFAULT_FETCH_CONFIG),
    }


def load_config(path=None):
    path = Path(path) if path else CONFIG_PATH
    if not path.exists():
        if path != CONFIG_PATH:
            raise ConfigError(f"Config file not found: {path}")
        return default_config()
    try:
        data = json.loads(path.read_text())
    except ValueError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    return normalize_config(data)


def as_int(value, default, low, high):
    try:
        value = int(value)
    except (TypeError, ValueError):
        value = default
    return max(low, min(high, value))


def normalize_config(data):
    cfg = default_config()
    if not isinstance(data, dict):
        return cfg
    for key in ("source", "tz", "start_day", "output"):
        if data.get(key):
            cfg[key] = data[key]
    cfg["locale"] = str(data.get("locale") or cfg["locale"])
    cfg["days"] = as_int(data.get("days"), DEFAULT_DAYS, 1, MAX_DAYS)

    width = data.get("width", DEFAULT_WIDTH)
    try:
        width = int(width)
    except (TypeError, ValueError):
        width = DEFAULT_WIDTH
    if width <= 0:
        raise ConfigError(f"width must be positive, got {width}")
    cfg["width"] = width

    fmt = str(data.get("format") or "png").lower()
    if fmt not in RENDERER_REGISTRY:
        raise ConfigError(f"Unknown output format {fmt!r}")
    cfg["format"] = fmt

    # rejects unknown style regions and colors
    cfg["css"] = dict(data.get("css") or {})
    normalize_styles(cfg["css"])
    cfg["colors"] = dict(data.get("colors") or {})
    normalize_colors(cfg["colors"])

    fetch = data.get("fetch") if isinstance(data.get("fetch"), dict) else {}
    cfg["fetch"] = {
        "timeout": as_int(fetch.get("timeout"), DEFAULT_FETCH_CONFIG["timeout"], 1, 120),
        "retries": as_int(fetch.get("retries"), DEFAULT_FETCH_CONFIG["retries"], 1, 10),
        "delay": as_int(fetch.get("delay"), DEFAULT_FETCH_CONFIG["delay"], 0, 300),
        "cache_ttl": as_int(fetch.get("cache_ttl"), DEFAULT_FETCH_CONFIG["cache_ttl"], 0, 86400),
    }
    return cfg


def parse_day(value):
    if not value:
        return date.today()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ConfigError(f"Invalid date {value!r}") from exc


def config_days(cfg):
    start = parse_day(cfg.get("start_day"))
    return day_range(start, start + timedelta(days=cfg["days"] - 1))


def output_path_for(cfg):
    if cfg.get("output"):
        return Path(cfg["output"])
    return OUTPUT_DIR / f"calendar{RENDERER_SUFFIXES[cfg['format']]}"


def render_days(events, days, fmt="png", width=DEFAULT_WIDTH, locale="en", styles=None, colors=None):
    renderer = RENDERER_REGISTRY.get(fmt)
    if renderer is None:
        raise ConfigError(f"Unknown output format {fmt!r}")
    if width <= 0:
        raise ValueError("width must be positive")
    grid = build_grid(days, events)
    logger.debug("grid covers slots %d..%d for %d days", grid.low_bound, grid.high_bound, len(grid.days))
    return renderer(grid, width, locale, styles=styles, colors=colors)


def render_range(events, first_day, last_day, **kwargs):
    return render_days(events, day_range(first_day, last_day), **kwargs)


def render_calendar(config=None, fetcher=None):
    cfg = normalize_config(copy.deepcopy(config)) if config is not None else default_config()
    if not cfg.get("source"):
        raise ConfigError("No calendar source configured")
    tzinfo = get_timezone(cfg.get("tz"))
    days = config_days(cfg)
    fetcher = fetcher or Fetcher.from_config(cfg["fetch"])
    events = fetch_events(cfg["source"], tzinfo, days, fetcher)
    payload = render_days(
        events,
        days,
        fmt=cfg["format"],
        width=cfg["width"],
        locale=cfg["locale"],
        styles=cfg["css"],
        colors=cfg["colors"],
    )
    path = output_path_for(cfg)
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(payload, bytes):
        path.write_bytes(payload)
    else:
        path.write_text(payload, encoding="utf-8")
    logger.info("wrote %s", path)
    return payload, path


def build_parser():
    parser = argparse.ArgumentParser(description="Render an iCalendar feed as a day-by-day grid image")
    parser.add_argument("--config", help="path to a JSON config file")
    parser.add_argument("--source", help="calendar URL or local .ics path")
    parser.add_argument("--start", help="first day (YYYY-MM-DD), defaults to today")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--end", help="last day (YYYY-MM-DD)")
    group.add_argument("--days", type=int, help="number of days to show")
    parser.add_argument("--width", type=int, help="image width in pixels")
    parser.add_argument("--locale", help="locale for day names and times, e.g. en, de, fr")
    parser.add_argument("--tz", help="timezone the events are shown in, e.g. Europe/Berlin")
    parser.add_argument("--format", choices=sorted(RENDERER_REGISTRY), help="output format")
    parser.add_argument("--output", help="output file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def apply_args(cfg, args):
    cfg = dict(cfg)
    for key in ("source", "width", "locale", "tz", "format", "output", "days"):
        value = getattr(args, key)
        if value is not None:
            cfg[key] = value
    if args.days is not None and not 1 <= args.days <= MAX_DAYS:
        raise ConfigError(f"--days must be between 1 and {MAX_DAYS}")
    if args.start:
        cfg["start_day"] = args.start
    if args.end:
        days = day_range(parse_day(cfg.get("start_day")), parse_day(args.end))
        if len(days) > MAX_DAYS:
            raise ConfigError(f"Day range {days[0]}..{days[-1]} is longer than {MAX_DAYS} days")
        cfg["start_day"] = days[0].isoformat()
        cfg["days"] = len(days)
    return cfg


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = apply_args(load_config(args.config), args)
        _, path = render_calendar(cfg)
    except (FetchError, OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
