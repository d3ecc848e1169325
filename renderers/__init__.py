from .markup import render_html
from .raster import DEFAULT_COLORS, normalize_colors, render_png
from .styles import DEFAULT_STYLES, Region, change_style, normalize_styles


def html_output(grid, width, locale, styles=None, colors=None):
    return render_html(grid, styles=styles, locale=locale)


def png_output(grid, width, locale, styles=None, colors=None):
    return render_png(grid, width, locale=locale, colors=colors)


RENDERER_REGISTRY = {
    "html": html_output,
    "png": png_output,
}

RENDERER_SUFFIXES = {
    "html": ".html",
    "png": ".png",
}

__all__ = [
    "DEFAULT_COLORS",
    "DEFAULT_STYLES",
    "RENDERER_REGISTRY",
    "RENDERER_SUFFIXES",
    "Region",
    "change_style",
    "normalize_colors",
    "normalize_styles",
    "render_html",
    "render_png",
]
