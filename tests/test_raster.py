from datetime import date, datetime, timedelta
from io import BytesIO

import pytest
from PIL import Image

from daygrid import build_grid
from ical_utils import ConfigError
from renderers import render_png
from renderers.raster import normalize_colors
from helpers import make_event


def open_png(data):
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    return Image.open(BytesIO(data))


def test_png_has_requested_width(standup) -> None:
    img = open_png(render_png(build_grid([date(2024, 1, 1)], [standup]), 600))
    assert img.size[0] == 600


def test_height_grows_with_rows(standup) -> None:
    short = open_png(render_png(build_grid([date(2024, 1, 1)], [standup]), 600))
    longer_event = make_event("Workshop", datetime(2024, 1, 1, 9, 0), 6 * 60)
    tall = open_png(render_png(build_grid([date(2024, 1, 1)], [longer_event]), 600))
    assert tall.size[1] > short.size[1]


def test_empty_grid_still_renders_header() -> None:
    img = open_png(render_png(build_grid([date(2024, 1, 1), date(2024, 1, 2)], []), 400))
    assert img.size[0] == 400
    assert img.size[1] > 0


def test_many_days_in_narrow_image() -> None:
    days = [date(2024, 1, 1) + timedelta(days=i) for i in range(7)]
    events = [make_event("Long title that will not fit", datetime(2024, 1, 3, 10, 0), 0)]
    img = open_png(render_png(build_grid(days, events), 120))
    assert img.size[0] == 120


def test_width_must_be_positive(standup) -> None:
    with pytest.raises(ValueError):
        render_png(build_grid([date(2024, 1, 1)], [standup]), 0)


def test_color_overrides_fill_background(standup) -> None:
    img = open_png(render_png(build_grid([date(2024, 1, 1)], [standup]), 300, colors={"background": "#ff0000"}))
    assert img.convert("RGB").getpixel((1, 1)) == (255, 0, 0)


def test_unknown_color_key_is_rejected() -> None:
    with pytest.raises(ConfigError):
        normalize_colors({"sky": "blue"})


def test_invalid_color_is_rejected() -> None:
    with pytest.raises(ConfigError):
        normalize_colors({"event": "not-a-colour"})
