"""
Resistor Decoder - About Screen

Static description of the app, drawn with the UIManager helpers.
"""

from __future__ import annotations

import pygame

from ui_manager import ACCENT, BG_COLOR, CONTENT_H, SCREEN_W, TEXT_COLOR

ABOUT_MESSAGE = "Calculates the resistance of a resistor from its color bands."

_CARD_BG = (22, 33, 62)

_HELP_LINES = [
    "Bands A and B are the significant figures,",
    "band C is the power-of-ten multiplier.",
    "Band D (tolerance) is shown but not decoded.",
    "A single black band is a zero-ohm link.",
]


class ScreenAbout:
    """About screen.

    Args:
        ui: The app's UIManager; its fonts and draw helpers are used.
    """

    def __init__(self, ui) -> None:
        self._ui = ui

    def update(self, dt: float) -> None:
        pass

    def draw(self, surface: pygame.Surface | None = None) -> None:
        target = surface if surface is not None else self._ui.screen
        target.fill(BG_COLOR)

        ui = self._ui
        ui.draw_text("Resistor Decoder", ui.title_font, ACCENT,
                     SCREEN_W // 2, 16, anchor="midtop")
        ui.draw_text(ABOUT_MESSAGE, ui.body_font, TEXT_COLOR,
                     SCREEN_W // 2, 64, anchor="midtop")
        try:
            card = pygame.Rect(24, 100, SCREEN_W - 48, CONTENT_H - 116)
            ui.draw_rounded_rect(target, card, _CARD_BG)
        except TypeError:
            # pygame.draw.* rejects MagicMock surfaces in tests.
            return
        for i, line in enumerate(_HELP_LINES):
            ui.draw_text(line, ui.body_font, TEXT_COLOR, card.x + 16, card.y + 14 + i * 28)

    def handle_event(self, event) -> None:
        pass
