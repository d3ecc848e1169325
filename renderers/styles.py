from enum import Enum
from types import MappingProxyType

from ical_utils import ConfigError


class Region(Enum):
    TABLE = "table"
    CELLS = "td, th"
    HEAD_CELLS = "th"
    HEAD = "thead"
    BODY = "tbody"
    EMPTY_CELLS = "td:empty"
    ROWS = "tr"

    @property
    def selector(self):
        return self.value


DEFAULT_STYLES = MappingProxyType({
    Region.TABLE: (
        "border: 2px solid black;\n"
        "border-collapse: collapse;\n"
        "empty-cells: show;\n"
        "font-family: 'Trebuchet MS', 'Lucida Sans Unicode', 'Lucida Grande', 'Lucida Sans', Arial, sans-serif;"
    ),
    Region.HEAD: "border-bottom-style: double;",
    Region.CELLS: (
        "max-width: 160px;\n"
        "border: 1px solid black;\n"
        "text-align: center;\n"
        "padding: 5px;"
    ),
    Region.EMPTY_CELLS: (
        "border: none;\n"
        "border-right: 1px solid black;\n"
        "background-color: lightgrey;"
    ),
    Region.HEAD_CELLS: "font-weight: bold;",
    Region.ROWS: "flex: 1;",
    Region.BODY: "display: flex;",
})


def to_region(key):
    if isinstance(key, Region):
        return key
    try:
        return Region[str(key).upper()]
    except KeyError:
        names = ", ".join(r.name.lower() for r in Region)
        raise ConfigError(f"Unknown style region {key!r} (expected one of: {names})") from None


def normalize_styles(overrides=None):
    styles = dict(DEFAULT_STYLES)
    for key, css in (overrides or {}).items():
        region = to_region(key)
        if not isinstance(css, str):
            raise ConfigError(f"Style for {region.name.lower()} must be a string")
        styles[region] = css
    return MappingProxyType(styles)


def change_style(styles, region, css):
    return normalize_styles({**styles, to_region(region): css})
