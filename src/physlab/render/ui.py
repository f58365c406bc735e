from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence, Union

import pygame

from .assets import Color, get_text_surface

Label = Union[str, Callable[[], str]]


@dataclass(frozen=True)
class ButtonVisualStyle:
    base_color: Color
    hover_color: Color
    text_color: tuple[int, int, int]
    radius: int


@dataclass
class Button:
    """Clickable control; *label* may be a callable for toggling captions."""

    rect: pygame.Rect
    label: Label
    on_click: Callable[[], None]
    style: ButtonVisualStyle

    @property
    def text(self) -> str:
        return self.label() if callable(self.label) else self.label

    def hovered(self, mouse_pos: tuple[int, int]) -> bool:
        return bool(self.rect.collidepoint(mouse_pos))

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, mouse_pos: tuple[int, int]) -> None:
        color = self.style.hover_color if self.hovered(mouse_pos) else self.style.base_color
        # Palette colours may carry alpha.
        body = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(body, color, body.get_rect(), border_radius=self.style.radius)
        surface.blit(body, self.rect.topleft)
        caption = get_text_surface(font, self.text, self.style.text_color)
        surface.blit(caption, caption.get_rect(center=self.rect.center))

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Fire on left click inside the button; returns whether it fired."""

        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return False
        if not self.hovered(event.pos):
            return False
        self.on_click()
        return True


@dataclass
class ButtonBar:
    """Row of equally sized buttons anchored to the right edge of the HUD."""

    right: int
    top: int
    style: ButtonVisualStyle
    size: tuple[int, int] = (100, 32)
    gap: int = 10
    buttons: list[Button] = field(default_factory=list)

    def add(self, label: Label, on_click: Callable[[], None]) -> Button:
        width, height = self.size
        for button in self.buttons:
            button.rect.x -= width + self.gap
        rect = pygame.Rect(self.right - width, self.top, width, height)
        button = Button(rect, label, on_click, self.style)
        self.buttons.append(button)
        return button

    def handle_event(self, event: pygame.event.Event) -> bool:
        return any(button.handle_event(event) for button in self.buttons)

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        mouse_pos = pygame.mouse.get_pos()
        for button in self.buttons:
            button.draw(surface, font, mouse_pos)


def draw_text_lines(
    surface: pygame.Surface,
    font: pygame.font.Font,
    lines: Sequence[str],
    origin: tuple[int, int],
    color: tuple[int, int, int],
) -> None:
    x, y = origin
    step = font.get_linesize()
    for row, text in enumerate(lines):
        if text:
            surface.blit(get_text_surface(font, text, color), (x, y + row * step))
