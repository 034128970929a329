"""
Resistor Decoder - Band Decoder Screen

Pick the four colour bands of a resistor; display its nominal resistance or
the reason the bands cannot be decoded.

Layout (480 × 320, content area 480 × 272 above the nav bar):

  BAND COLUMNS (y   4–138)  A / B / C / D, each with ▲ / colour swatch / ▼
  ACTION ROW   (y 146–188)  resistor illustration, Calculate button
  RESULT CARD  (y 198–264)  ohms value or error message

Keyboard: ←/→ pick the active band, ↑/↓ change its colour, Backspace clears
it, Enter calculates.

Construction modes:
  ScreenDecoder(surface)     : test mode: plain Surface or MagicMock
  ScreenDecoder(ui_manager)  : app mode: UIManager instance passed as 'surface'
"""

from __future__ import annotations

import logging

import pygame

import config
# Imported at module level so tests can patch("screen_decoder.calculate").
from band_code import BAND_CHOICES, BandColor, BandDecodeError, calculate, format_ohms

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

_BAND_LABELS = ["A", "B", "C", "D"]
_BAND_ROLES  = ["1st digit", "2nd digit", "Multiplier", "Tolerance"]

_COL_X0   = 16
_COL_W    = 104
_COL_GAP  = 8
_HEADER_Y = 4
_UP_Y     = 22
_SWATCH_Y = 62
_DOWN_Y   = 102
_CELL_H   = 36

# Resistor illustration
_RES_X = 16
_RES_Y = 150
_RES_W = 260
_RES_H = 34

_CALC_RECT   = (296, 146, 160, 42)
_RESULT_RECT = (16, 198, 448, 66)

# ---------------------------------------------------------------------------
# Colour palette  (mirrors ui_manager.py)
# ---------------------------------------------------------------------------

BG_COLOR     = (15,  23,  42)
CARD_BG      = (22,  33,  62)
RESULT_BG    = (15,  30,  20)   # green-tinted when a value is shown
ERROR_BG     = (45,  20,  25)   # red-tinted when an error is shown
TEXT_COLOR   = (226, 232, 240)
TEXT_MUTED   = (150, 160, 180)
TEXT_DARK    = (15,  23,  42)
ACCENT       = (56,  189, 248)
GREEN        = (52,  211, 153)
RED          = (248, 113, 113)
RESISTOR_TAN = (210, 180, 140)
LEAD_COLOR   = (160, 160, 160)
_ARROW_BG    = (30,  45,  75)


# ---------------------------------------------------------------------------
# Font helpers  (module-level cache, safe to call multiple times)
# ---------------------------------------------------------------------------

_FONT_CACHE: dict[str, pygame.font.Font] | None = None


def _load_font(family: str, size: int, bold: bool = False) -> pygame.font.Font:
    """Load a font by family name with a fallback to the default font."""
    try:
        font = pygame.font.SysFont(family, size, bold=bold)
        if font is None:
            raise RuntimeError("SysFont returned None")
        return font
    except Exception:
        return pygame.font.SysFont(None, size, bold=bold)


def _fonts() -> dict[str, pygame.font.Font]:
    global _FONT_CACHE
    if _FONT_CACHE is None:
        pygame.font.init()
        _FONT_CACHE = {
            "heading": _load_font("dejavusans", 22, bold=True),
            "body":    _load_font("dejavusans", 16),
            "small":   _load_font("dejavusans", 13),
        }
    return _FONT_CACHE


# ---------------------------------------------------------------------------
# Pure-surface drawing helpers
# ---------------------------------------------------------------------------

def _draw_text(surface, text, font, color, x, y, anchor="topleft") -> pygame.Rect:
    """Render *text* onto *surface* at the given anchor position."""
    surf = font.render(text, True, color)
    rect = surf.get_rect()
    setattr(rect, anchor, (x, y))
    surface.blit(surf, rect)
    return rect


def _text_on(rgb: tuple) -> tuple:
    """Pick a readable label colour for a swatch filled with *rgb*."""
    return TEXT_DARK if sum(rgb) > 382 else TEXT_COLOR


def _draw_resistor(surface, bands) -> None:
    """Draw a resistor body with leads and one stripe per present band."""
    lead_w = int(_RES_W * 0.15)
    body_x = _RES_X + lead_w
    body_w = int(_RES_W * 0.70)
    cy     = _RES_Y + _RES_H // 2

    pygame.draw.line(surface, LEAD_COLOR, (_RES_X, cy), (body_x, cy), 2)
    pygame.draw.line(surface, LEAD_COLOR, (body_x + body_w, cy), (_RES_X + _RES_W, cy), 2)

    body_rect = pygame.Rect(body_x, _RES_Y, body_w, _RES_H)
    radius = max(2, _RES_H // 3)
    pygame.draw.rect(surface, RESISTOR_TAN, body_rect, border_radius=radius)

    band_w = max(2, int(_RES_W * 0.06))
    for pct, band in zip((0.20, 0.40, 0.60, 0.80), bands):
        if band is BandColor.NONE:
            continue
        cx = int(body_x + pct * body_w)
        band_rect = pygame.Rect(cx - band_w // 2, _RES_Y, band_w, _RES_H).clip(body_rect)
        if band_rect.width > 0 and band_rect.height > 0:
            pygame.draw.rect(surface, band.rgb, band_rect)

    # Re-draw body outline to crisp up rounded corners over bands
    pygame.draw.rect(surface, RESISTOR_TAN, body_rect, width=2, border_radius=radius)


# ---------------------------------------------------------------------------
# ScreenDecoder
# ---------------------------------------------------------------------------

class ScreenDecoder:
    """Colour band decoder screen.

    Holds the four selected bands, decodes them on request via
    :func:`band_code.calculate`, and shows either the resistance or the
    decoder's error message.

    Args:
        surface: pygame.Surface to render onto (480×320), OR a UIManager
                 instance (detected via ``hasattr(surface, '_surface')``).
    """

    def __init__(self, surface) -> None:
        if hasattr(surface, "_surface"):
            self._ui      = surface
            self._surface = surface._surface
        else:
            self._ui      = None
            self._surface = surface

        self._bands: list[BandColor] = [BandColor.from_name(n) for n in config.DEFAULT_BANDS]
        self.active_band: int = 0
        self.result: int | None = None
        self.error: str | None = None

        # Hit-rects: (band index, action, rect) for the ▲ / swatch / ▼ cells.
        self._cell_rects: list[tuple[int, str, pygame.Rect]] = []
        for i in range(len(_BAND_LABELS)):
            x = _COL_X0 + i * (_COL_W + _COL_GAP)
            self._cell_rects.append((i, "up",     pygame.Rect(x, _UP_Y,     _COL_W, _CELL_H)))
            self._cell_rects.append((i, "select", pygame.Rect(x, _SWATCH_Y, _COL_W, _CELL_H)))
            self._cell_rects.append((i, "down",   pygame.Rect(x, _DOWN_Y,   _COL_W, _CELL_H)))
        self._calc_rect = pygame.Rect(*_CALC_RECT)

        if not pygame.font.get_init():
            pygame.font.init()

    # ------------------------------------------------------------------
    # Band selection
    # ------------------------------------------------------------------

    @property
    def bands(self) -> tuple[BandColor, ...]:
        return tuple(self._bands)

    def select(self, index: int, color: BandColor) -> None:
        """Set band *index* (0 = A … 3 = D) to *color* and clear any stale result."""
        self._bands[index] = color
        self.result = None
        self.error = None

    def cycle(self, index: int, step: int) -> None:
        """Move band *index* *step* places through the colour choices, wrapping."""
        pos = BAND_CHOICES.index(self._bands[index])
        self.select(index, BAND_CHOICES[(pos + step) % len(BAND_CHOICES)])

    # ------------------------------------------------------------------
    # Screen interface: update / draw / event handling
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        """No-op: this screen has no time-based animation."""
        pass

    def draw(self, surface: pygame.Surface | None = None) -> None:
        target = surface if surface is not None else self._surface
        target.fill(BG_COLOR)

        try:
            fnt = _fonts()
            self._draw_band_columns(target, fnt)
            _draw_resistor(target, self._bands)
            self._draw_calc_button(target, fnt)
            self._draw_result_card(target, fnt)
        except TypeError:
            # pygame.draw.* rejects MagicMock surfaces in tests; fill() above
            # has already drawn.
            pass

    def handle_event(self, event) -> None:
        """Process keyboard input; non-KEYDOWN events are ignored."""
        if event.type != pygame.KEYDOWN:
            return

        if event.key == pygame.K_LEFT:
            self.active_band = (self.active_band - 1) % len(self._bands)
        elif event.key == pygame.K_RIGHT:
            self.active_band = (self.active_band + 1) % len(self._bands)
        elif event.key == pygame.K_UP:
            self.cycle(self.active_band, -1)
        elif event.key == pygame.K_DOWN:
            self.cycle(self.active_band, 1)
        elif event.key in (pygame.K_BACKSPACE, pygame.K_DELETE):
            self.select(self.active_band, BandColor.NONE)
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._calculate()

    def handle_touch(self, x: int, y: int) -> None:
        """Process an on-screen tap at pixel coordinates (*x*, *y*)."""
        if self._calc_rect.collidepoint(x, y):
            self._calculate()
            return
        for index, action, rect in self._cell_rects:
            if not rect.collidepoint(x, y):
                continue
            self.active_band = index
            if action == "up":
                self.cycle(index, -1)
            elif action == "down":
                self.cycle(index, 1)
            return

    def _calculate(self) -> None:
        try:
            self.result = calculate(*self._bands)
            self.error = None
        except BandDecodeError as exc:
            log.info("Rejected bands %s: %s",
                     "-".join(b.title for b in self._bands), exc)
            self.result = None
            self.error = str(exc)

    # ------------------------------------------------------------------
    # Private: drawing
    # ------------------------------------------------------------------

    def _draw_band_columns(self, surface, fnt: dict) -> None:
        for index, action, rect in self._cell_rects:
            band = self._bands[index]
            if action == "select":
                pygame.draw.rect(surface, band.rgb, rect, border_radius=6)
                if index == self.active_band:
                    pygame.draw.rect(surface, ACCENT, rect, width=3, border_radius=6)
                _draw_text(surface, band.title, fnt["body"], _text_on(band.rgb),
                           rect.centerx, rect.centery, anchor="center")
                continue
            pygame.draw.rect(surface, _ARROW_BG, rect, border_radius=6)
            glyph = "▲" if action == "up" else "▼"
            _draw_text(surface, glyph, fnt["body"], TEXT_COLOR,
                       rect.centerx, rect.centery, anchor="center")

        for i, (label, role) in enumerate(zip(_BAND_LABELS, _BAND_ROLES)):
            cx = _COL_X0 + i * (_COL_W + _COL_GAP) + _COL_W // 2
            colour = ACCENT if i == self.active_band else TEXT_MUTED
            _draw_text(surface, f"{label} · {role}", fnt["small"], colour,
                       cx, _HEADER_Y, anchor="midtop")

    def _draw_calc_button(self, surface, fnt: dict) -> None:
        pygame.draw.rect(surface, ACCENT, self._calc_rect, border_radius=8)
        _draw_text(surface, "Calculate", fnt["body"], TEXT_DARK,
                   self._calc_rect.centerx, self._calc_rect.centery, anchor="center")

    def _draw_result_card(self, surface, fnt: dict) -> None:
        card = pygame.Rect(*_RESULT_RECT)
        if self.error is not None:
            pygame.draw.rect(surface, ERROR_BG, card, border_radius=8)
            _draw_text(surface, self.error, fnt["body"], RED,
                       card.centerx, card.centery, anchor="center")
        elif self.result is not None:
            pygame.draw.rect(surface, RESULT_BG, card, border_radius=8)
            text = f"{self.result:,} Ω  ({format_ohms(self.result)})"
            _draw_text(surface, text, fnt["heading"], GREEN,
                       card.centerx, card.centery, anchor="center")
        else:
            pygame.draw.rect(surface, CARD_BG, card, border_radius=8)
            _draw_text(surface, "—", fnt["heading"], TEXT_MUTED,
                       card.centerx, card.centery, anchor="center")

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def on_enter(self) -> None:
        pass

    def on_exit(self) -> None:
        pass


# ---------------------------------------------------------------------------
# Standalone preview
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import sys

    pygame.init()
    window = pygame.display.set_mode((config.SCREEN_W, config.SCREEN_H))
    pygame.display.set_caption("Decoder - preview")
    clock = pygame.time.Clock()

    decoder = ScreenDecoder(window)

    running = True
    while running:
        dt = clock.tick(config.FPS) / 1000.0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                decoder.handle_touch(event.pos[0], event.pos[1])
            decoder.handle_event(event)
        decoder.update(dt)
        decoder.draw(window)
        pygame.display.flip()

    pygame.quit()
    sys.exit()
