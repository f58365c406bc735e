"""Rendering helpers for the physics sandbox."""

from .assets import TEXT_CACHE, TextCache, get_text_surface, load_font
from .draw import (
    downsample_points,
    draw_arrow,
    draw_circular,
    draw_collision,
    draw_field,
    draw_pendulum,
    draw_polyline,
    draw_projectile,
    draw_snapshot,
    draw_spring,
    hud_lines,
)
from .ui import Button, ButtonBar, ButtonVisualStyle, draw_text_lines

__all__ = [
    "TEXT_CACHE",
    "TextCache",
    "Button",
    "ButtonBar",
    "ButtonVisualStyle",
    "downsample_points",
    "draw_arrow",
    "draw_circular",
    "draw_collision",
    "draw_field",
    "draw_pendulum",
    "draw_polyline",
    "draw_projectile",
    "draw_snapshot",
    "draw_spring",
    "draw_text_lines",
    "get_text_surface",
    "hud_lines",
    "load_font",
]
