import html

from daygrid import CellKind

from .formatting import DEFAULT_LOCALE, day_heading, event_span_text, slot_label
from .styles import normalize_styles

HEADER = """<!DOCTYPE HTML>
<html>
<head>
    <meta charset="UTF-8">
    <style>
"""

STYLE_END = """    </style>
</head>
<body>
    <table>
"""

FOOTER = """    </table>
</body>
</html>"""


def style_block(styles):
    return "".join(f"{region.selector}{{{css}}}\n" for region, css in styles.items())


def cell_markup(cell, locale):
    if cell.kind is CellKind.SUPPRESSED:
        return ""
    if cell.kind is CellKind.EMPTY:
        return "<td></td>"
    span_text = html.escape(event_span_text(cell.event, locale))
    return f'<td rowspan="{cell.row_span}">{span_text}<br />{html.escape(cell.content)}</td>\n'


def row_markup(row, locale):
    parts = ["<tr>\n"]
    if row.time_label is not None:
        label = html.escape(slot_label(row.time_label.slot, locale))
        parts.append(f'<th rowspan="{row.time_label.row_span}">{label}</th>\n')
    parts.extend(cell_markup(cell, locale) for cell in row.cells)
    parts.append("</tr>\n")
    return "".join(parts)


def render_html(grid, styles=None, locale=DEFAULT_LOCALE):
    styles = normalize_styles(styles)
    parts = [HEADER, style_block(styles), STYLE_END]
    parts.append("<thead>\n<tr>\n<th></th>\n")
    for day in grid.days:
        parts.append(f"<th>{html.escape(day_heading(day, locale))}</th>\n")
    parts.append("</tr>\n</thead>\n<tbody>\n")
    parts.extend(row_markup(row, locale) for row in grid.rows)
    parts.append("</tbody>")
    parts.append(FOOTER)
    return "".join(parts)
