"""
Resistor Decoder - Touchscreen Entry Point

Builds the Pygame UI and runs the main event loop.

Screens
-------
  decoder  – pick four colour bands, decode them to ohms
  about    – what the app does

ScreenDecoder and ScreenAbout receive the UIManager so they share its
surface, fonts and drawing helpers.
"""

import logging
import sys
import time

import pygame

import config
from screen_about import ScreenAbout
from screen_decoder import ScreenDecoder
from ui_manager import UIManager

log = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )

    mgr = UIManager()

    mgr.register_screen("decoder", ScreenDecoder(mgr))
    mgr.register_screen("about",   ScreenAbout(mgr))
    mgr.switch_to("decoder")

    log.info("Resistor Decoder started")

    last_t = time.monotonic()
    try:
        running = True
        while running:
            now = time.monotonic()
            dt  = now - last_t
            last_t = now

            running = mgr.handle_events()
            mgr.update(dt)
            mgr.draw()
    finally:
        pygame.quit()
        log.info("Pygame quit")


if __name__ == "__main__":
    main()
