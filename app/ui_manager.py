"""
Resistor Decoder - Pygame Display Manager

Manages pygame initialisation, screen transitions, the nav bar, and the main
render loop for the 480×320 touchscreen.

The UIManager can be constructed in two modes:

  1. Hardware mode (no surface argument):
       mgr = UIManager()
     pygame.init() is called, the display is created (fullscreen unless
     config.FULLSCREEN is off), and the clock and fonts are set up.

  2. Headless / test mode (surface provided):
       mgr = UIManager(surface)
     pygame is NOT re-initialised.  The supplied surface is used directly.
     Clock and display-flip calls are skipped so the class works with a
     MagicMock surface under SDL dummy mode.
"""

from __future__ import annotations

import logging

import pygame

import config

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

SCREEN_W  = config.SCREEN_W
SCREEN_H  = config.SCREEN_H
NAV_H     = 48                  # nav bar height, pinned to bottom
CONTENT_H = SCREEN_H - NAV_H   # 272 px available for screen content

# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

BG_COLOR     = (15,  23,  42)   # dark blue-gray, main background
TEXT_COLOR   = (226, 232, 240)  # near-white, primary text
ACCENT       = (56,  189, 248)  # cyan, active nav / calculate button
NAV_BG       = (8,   15,  30)   # nav bar background, darker than BG_COLOR
NAV_BORDER   = (30,  41,  59)   # 1-px top border on the nav bar

# ---------------------------------------------------------------------------
# Nav bar configuration
# ---------------------------------------------------------------------------

_NAV_LABELS = ["Decoder", "About"]
_NAV_KEYS   = ["decoder", "about"]
_NAV_BTN_W  = SCREEN_W // len(_NAV_KEYS)


# ---------------------------------------------------------------------------
# UIManager
# ---------------------------------------------------------------------------

class UIManager:
    """Manages registered screens and dispatches events, updates, and draws.

    Screens are registered by name and activated via switch_to().  Only the
    active screen receives update() and draw() calls.  handle_event() is also
    forwarded exclusively to the active screen.

    Args:
        surface: Optional pygame.Surface for headless / test mode.
    """

    def __init__(self, surface=None) -> None:
        self._test_mode = surface is not None

        if self._test_mode:
            # Headless path: only the font subsystem is needed.
            pygame.font.init()
            self._surface = surface
            self.screen   = surface
            self.clock    = None
        else:
            pygame.init()
            flags = pygame.FULLSCREEN if config.FULLSCREEN else 0
            self.screen = pygame.display.set_mode((SCREEN_W, SCREEN_H), flags)
            pygame.display.set_caption("Resistor Decoder")
            self._surface = self.screen
            self.clock = pygame.time.Clock()
        self._init_fonts_safe()

        self._screens: dict[str, object] = {}
        self._active: str | None = None

        # Nav hit-rects are rebuilt in draw_nav_bar(); empty until first draw.
        self._nav_rects: list[pygame.Rect] = []

        self.current_screen: str | None = None

    # ------------------------------------------------------------------
    # Font loading
    # ------------------------------------------------------------------

    def _init_fonts_safe(self) -> None:
        """Load DejaVu Sans at each needed size, falling back to the default font."""
        def _load(family: str, size: int, bold: bool = False) -> pygame.font.Font:
            try:
                font = pygame.font.SysFont(family, size, bold=bold)
                # SysFont can return None in dummy SDL environments
                if font is None:
                    raise RuntimeError("SysFont returned None")
                return font
            except Exception:
                return pygame.font.SysFont(None, size, bold=bold)

        self.title_font   = _load("dejavusans", 32, bold=True)
        self.body_font    = _load("dejavusans", 16)

    # ------------------------------------------------------------------
    # Screen registry
    # ------------------------------------------------------------------

    def register_screen(self, name: str, screen_obj) -> None:
        """Add a screen to the registry under the given name.

        Args:
            name:       Unique string key (e.g. ``'decoder'``).
            screen_obj: Object with update, draw, handle_event and optionally
                        handle_touch / on_enter / on_exit.
        """
        self._screens[name] = screen_obj

    def switch_to(self, name: str) -> None:
        """Activate the named screen.

        Raises:
            KeyError: If *name* has not been registered.
        """
        if name not in self._screens:
            raise KeyError(f"Unknown screen: {name!r}")
        if self._active is not None and self._active != name:
            old = self._screens[self._active]
            if hasattr(old, "on_exit"):
                old.on_exit()
        self._active = name
        self.current_screen = name
        new = self._screens[name]
        if hasattr(new, "on_enter"):
            new.on_enter()
        log.debug("Switched to screen %r", name)

    # ------------------------------------------------------------------
    # Main-loop hooks
    # ------------------------------------------------------------------

    def handle_event(self, event) -> None:
        """Forward a single pygame event to the active screen (if any)."""
        if self._active is not None:
            self._screens[self._active].handle_event(event)

    def handle_events(self) -> bool:
        """Drain the pygame event queue, handle nav taps, and dispatch to the active screen.

        Returns:
            ``False`` if the application should quit (QUIT or Escape pressed),
            ``True`` otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self._nav_hit(event.pos) is not None or self._active is None:
                    continue
                screen = self._screens[self._active]
                if hasattr(screen, "handle_touch"):
                    screen.handle_touch(event.pos[0], event.pos[1])
                    continue
            self.handle_event(event)
        return True

    def update(self, dt: float) -> None:
        """Advance the active screen by *dt* seconds."""
        if self._active is not None:
            self._screens[self._active].update(dt)

    def draw(self) -> None:
        """Render the active screen onto the surface, then overlay the nav bar."""
        if self._active is not None:
            self._screens[self._active].draw(self._surface)

        if not self._test_mode:
            # pygame.draw cannot target a MagicMock surface.
            self.draw_nav_bar()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(config.FPS)

    # ------------------------------------------------------------------
    # Nav bar
    # ------------------------------------------------------------------

    def draw_nav_bar(self) -> None:
        """Draw the bottom nav bar and rebuild ``self._nav_rects``."""
        nav_y = SCREEN_H - NAV_H

        pygame.draw.line(self._surface, NAV_BORDER,
                         (0, nav_y), (SCREEN_W - 1, nav_y), 1)

        self._nav_rects = []
        for i, (label, key) in enumerate(zip(_NAV_LABELS, _NAV_KEYS)):
            rect = pygame.Rect(i * _NAV_BTN_W, nav_y + 1, _NAV_BTN_W, NAV_H - 1)
            self._nav_rects.append(rect)

            is_active = (key == self._active)
            fill_color = ACCENT if is_active else NAV_BG
            label_color = BG_COLOR if is_active else TEXT_COLOR

            pygame.draw.rect(self._surface, fill_color, rect)
            self.draw_text(label, self.body_font, label_color,
                           rect.centerx, rect.centery, anchor="center")

    def _nav_hit(self, pos) -> str | None:
        """Return the nav key under *pos* (switching to it if registered), else None."""
        for rect, key in zip(self._nav_rects, _NAV_KEYS):
            if rect.collidepoint(pos):
                if key in self._screens:
                    self.switch_to(key)
                return key
        return None

    # ------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------

    def draw_rounded_rect(
        self,
        surface: pygame.Surface,
        rect: pygame.Rect,
        color: tuple,
        radius: int = 8,
        width: int = 0,
    ) -> None:
        """Draw a filled (width 0) or outlined rounded rectangle."""
        pygame.draw.rect(surface, color, rect, width=width, border_radius=radius)

    def draw_text(
        self,
        text: str,
        font: pygame.font.Font,
        color: tuple,
        x: int,
        y: int,
        anchor: str = "topleft",
    ) -> pygame.Rect:
        """Render *text* onto ``self.screen`` at the given anchor position.

        Args:
            anchor: One of the pygame.Rect attributes (e.g. ``'topleft'``,
                    ``'center'``, ``'midtop'``).

        Returns:
            The blit rect of the rendered text.
        """
        surf = font.render(text, True, color)
        rect = surf.get_rect()
        setattr(rect, anchor, (x, y))
        self.screen.blit(surf, rect)
        return rect
