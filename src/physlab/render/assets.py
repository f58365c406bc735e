from __future__ import annotations

from collections import OrderedDict
from typing import Sequence

import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]


class TextCache:
    """LRU of rendered labels; HUD text mostly repeats between frames."""

    def __init__(self, max_size: int = 256) -> None:
        self.max_size = max_size
        self._surfaces: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()

    def __len__(self) -> int:
        return len(self._surfaces)

    def render(self, font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
        key = (id(font), text, color)
        surface = self._surfaces.pop(key, None)
        if surface is None:
            surface = font.render(text, True, color)
        self._surfaces[key] = surface
        while len(self._surfaces) > self.max_size:
            self._surfaces.popitem(last=False)
        return surface

    def clear(self) -> None:
        self._surfaces.clear()


TEXT_CACHE = TextCache()


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    return TEXT_CACHE.render(font, text, color)


def load_font(preferred_names: Sequence[str], size: int) -> pygame.font.Font:
    """First installed font from *preferred_names*, else pygame's default."""

    if not pygame.font.get_init():
        pygame.font.init()
    for name in preferred_names:
        path = pygame.font.match_font(name)
        if path:
            return pygame.font.Font(path, size)
    return pygame.font.Font(None, size)
