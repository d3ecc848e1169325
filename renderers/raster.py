from io import BytesIO

from PIL import Image, ImageColor, ImageDraw, ImageFont

from daygrid import CellKind
from ical_utils import ConfigError, line_height, text_size, truncate_text, wrap_text

from .formatting import DEFAULT_LOCALE, day_heading, event_span_text, slot_label

PAD = 5

DEFAULT_COLORS = {
    "background": "white",
    "lines": "black",
    "empty": "lightgrey",
    "event": "lightsteelblue",
    "text": "black",
}


def load_fonts():
    # Fall back to the default bitmap font if truetype is unavailable
    try:
        return {
            "head": ImageFont.truetype("DejaVuSans-Bold.ttf", 15),
            "body": ImageFont.truetype("DejaVuSans.ttf", 12),
        }
    except OSError:
        return {
            "head": ImageFont.load_default(),
            "body": ImageFont.load_default(),
        }


def normalize_colors(colors=None):
    merged = dict(DEFAULT_COLORS)
    for key, value in (colors or {}).items():
        if key not in DEFAULT_COLORS:
            raise ConfigError(f"Unknown color key {key!r}")
        try:
            ImageColor.getrgb(value)
        except (ValueError, AttributeError) as exc:
            raise ConfigError(f"Invalid color for {key}: {value!r}") from exc
        merged[key] = value
    return merged


def draw_dither_line(draw, x0, y, x1, color, step=2):
    for x in range(min(x0, x1), max(x0, x1) + 1, step):
        draw.point((x, y), fill=color)


def draw_event_card(draw, x, y, w, h, lines, colors, font, radius=3):
    draw.rounded_rectangle((x, y, x + w, y + h), radius=radius, fill=colors["event"], outline=colors["lines"])
    line_h = line_height(draw, font)
    max_lines = max(1, (h - 2) // max(1, line_h))
    for idx, line in enumerate(lines[:max_lines]):
        line = truncate_text(draw, line, max(0, w - 6), font)
        draw.text((x + 3, y + 1 + idx * line_h), line, colors["text"], font=font)


def card_lines(draw, cell, width, rows, font, locale):
    span_text = event_span_text(cell.event, locale)
    if rows == 1:
        return [f"{span_text} {cell.content}".strip()]
    return [span_text] + wrap_text(draw, cell.content, width, font)


def render_png(grid, width, locale=DEFAULT_LOCALE, colors=None):
    if width <= 0:
        raise ValueError("width must be positive")
    colors = normalize_colors(colors)
    fonts = load_fonts()
    scratch = ImageDraw.Draw(Image.new("RGB", (1, 1)))

    row_h = line_height(scratch, fonts["body"]) + 2
    header_h = line_height(scratch, fonts["head"]) + PAD * 2
    labels = {row.slot: slot_label(row.slot, locale) for row in grid.rows if row.time_label}
    label_w = max((text_size(scratch, text, fonts["body"])[0] for text in labels.values()), default=0)
    time_col_w = label_w + PAD * 2
    col_w = max(1, (width - time_col_w) // max(1, len(grid.days)))
    height = header_h + len(grid.rows) * row_h + 1

    img = Image.new("RGB", (width, height), colors["background"])
    draw = ImageDraw.Draw(img)

    for idx, day in enumerate(grid.days):
        col_x = time_col_w + idx * col_w
        heading = truncate_text(draw, day_heading(day, locale), col_w - PAD * 2, fonts["head"])
        heading_w, _ = text_size(draw, heading, fonts["head"])
        draw.text((col_x + max(0, (col_w - heading_w) // 2), PAD), heading, colors["text"], font=fonts["head"])

    cards = []
    for row_idx, row in enumerate(grid.rows):
        y = header_h + row_idx * row_h
        if row.time_label:
            draw.text((PAD, y + 1), labels[row.slot], colors["text"], font=fonts["body"])
            draw_dither_line(draw, time_col_w, y, width - 1, colors["lines"])
        for col_idx, cell in enumerate(row.cells):
            x = time_col_w + col_idx * col_w
            if cell.kind is CellKind.EMPTY:
                draw.rectangle((x + 1, y + 1, x + max(1, col_w - 1), y + row_h - 1), fill=colors["empty"])
            elif cell.kind is CellKind.EVENT_START:
                cards.append((x, y, cell))

    # cards are drawn over the cell fills
    for x, y, cell in cards:
        card_w = max(1, col_w - 2)
        lines = card_lines(draw, cell, card_w - 6, cell.row_span, fonts["body"], locale)
        draw_event_card(draw, x + 1, y + 1, card_w, cell.row_span * row_h - 2, lines, colors, fonts["body"])

    for idx in range(len(grid.days) + 1):
        x = min(width - 1, time_col_w + idx * col_w)
        draw.line((x, 0, x, height - 1), fill=colors["lines"])
    draw.line((0, header_h, width - 1, header_h), fill=colors["lines"], width=2)

    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
