"""
UI tests for the Resistor Decoder touchscreen app.

Pygame runs in SDL dummy mode, no physical display required.

Run from the repo root:
    pytest app/tests/ -v
"""

import unittest
from unittest.mock import MagicMock, patch

import pygame

from band_code import BandColor, MissingMultiplierBand

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_surface(w=480, h=320):
    """Return a MagicMock that looks enough like a pygame.Surface."""
    surf = MagicMock(spec=pygame.Surface)
    surf.get_width.return_value = w
    surf.get_height.return_value = h
    surf.get_size.return_value = (w, h)
    return surf


def _keydown(key=None, unicode_char=""):
    """Build a minimal pygame KEYDOWN event mock."""
    event = MagicMock()
    event.type = pygame.KEYDOWN
    event.key = key if key is not None else 0
    event.unicode = unicode_char
    return event


# ---------------------------------------------------------------------------
# UIManager
# ---------------------------------------------------------------------------

class TestUIManager(unittest.TestCase):
    """UIManager: screen registry, transitions, and event/update/draw dispatch."""

    def setUp(self):
        from ui_manager import UIManager
        self.surface = _make_surface()
        self.manager = UIManager(self.surface)

    def test_register_and_switch(self):
        screen = MagicMock()
        self.manager.register_screen("decoder", screen)
        self.manager.switch_to("decoder")
        self.assertEqual(self.manager.current_screen, "decoder")
        screen.on_enter.assert_called_once()

    def test_switch_to_unknown_screen_raises(self):
        with self.assertRaises(KeyError):
            self.manager.switch_to("does_not_exist")

    def test_switch_calls_on_exit_of_previous_screen(self):
        s1, s2 = MagicMock(), MagicMock()
        self.manager.register_screen("decoder", s1)
        self.manager.register_screen("about", s2)
        self.manager.switch_to("decoder")
        self.manager.switch_to("about")
        s1.on_exit.assert_called_once()

    def test_draw_delegates_to_active_screen(self):
        screen = MagicMock()
        self.manager.register_screen("decoder", screen)
        self.manager.switch_to("decoder")
        self.manager.draw()
        screen.draw.assert_called_once_with(self.surface)

    def test_update_delegates_to_active_screen(self):
        screen = MagicMock()
        self.manager.register_screen("decoder", screen)
        self.manager.switch_to("decoder")
        self.manager.update(0.016)
        screen.update.assert_called_once_with(0.016)

    def test_handle_event_dispatches_to_active_screen(self):
        screen = MagicMock()
        self.manager.register_screen("decoder", screen)
        self.manager.switch_to("decoder")
        event = MagicMock()
        self.manager.handle_event(event)
        screen.handle_event.assert_called_once_with(event)

    def test_inactive_screens_do_not_receive_update(self):
        s1, s2 = MagicMock(), MagicMock()
        self.manager.register_screen("decoder", s1)
        self.manager.register_screen("about", s2)
        self.manager.switch_to("decoder")
        self.manager.update(0.1)
        s1.update.assert_called_once_with(0.1)
        s2.update.assert_not_called()

    def test_no_active_screen_draw_does_not_raise(self):
        self.manager.draw()

    def test_handle_events_quits_on_escape(self):
        with patch("ui_manager.pygame.event.get",
                   return_value=[_keydown(key=pygame.K_ESCAPE)]):
            self.assertFalse(self.manager.handle_events())

    def test_handle_events_forwards_keys_to_active_screen(self):
        screen = MagicMock()
        self.manager.register_screen("decoder", screen)
        self.manager.switch_to("decoder")
        event = _keydown(key=pygame.K_RETURN)
        with patch("ui_manager.pygame.event.get", return_value=[event]):
            self.assertTrue(self.manager.handle_events())
        screen.handle_event.assert_called_once_with(event)

    def test_handle_events_routes_taps_to_handle_touch(self):
        screen = MagicMock()
        self.manager.register_screen("decoder", screen)
        self.manager.switch_to("decoder")
        event = MagicMock(type=pygame.MOUSEBUTTONDOWN, button=1, pos=(100, 50))
        with patch("ui_manager.pygame.event.get", return_value=[event]):
            self.manager.handle_events()
        screen.handle_touch.assert_called_once_with(100, 50)
        screen.handle_event.assert_not_called()


# ---------------------------------------------------------------------------
# ScreenDecoder
# ---------------------------------------------------------------------------

class TestScreenDecoder(unittest.TestCase):
    """ScreenDecoder: band selection, calculation, result/error state."""

    def setUp(self):
        from screen_decoder import ScreenDecoder
        self.surface = _make_surface()
        self.screen = ScreenDecoder(self.surface)

    def _set_bands(self, *bands):
        for i, band in enumerate(bands):
            self.screen.select(i, band)

    def test_update_does_not_raise(self):
        self.screen.update(0.016)

    def test_draw_does_not_raise(self):
        self.screen.draw()
        self.surface.fill.assert_called()

    def test_draw_on_real_surface(self):
        surface = pygame.Surface((480, 320))
        self.screen.draw(surface)
        self.screen.handle_event(_keydown(key=pygame.K_RETURN))
        self.screen.draw(surface)

    def test_handle_event_ignores_non_keydown(self):
        event = MagicMock()
        event.type = pygame.MOUSEMOTION
        before = self.screen.bands
        self.screen.handle_event(event)
        self.assertEqual(self.screen.bands, before)

    def test_initial_bands_are_the_configured_defaults(self):
        self.assertEqual(
            self.screen.bands,
            (BandColor.YELLOW, BandColor.VIOLET, BandColor.RED, BandColor.GOLD),
        )

    def test_enter_decodes_selected_bands(self):
        self.screen.handle_event(_keydown(key=pygame.K_RETURN))
        self.assertEqual(self.screen.result, 4700)
        self.assertIsNone(self.screen.error)

    def test_enter_calls_calculate_with_all_four_bands(self):
        with patch("screen_decoder.calculate", return_value=4700) as mock_calc:
            self.screen.handle_event(_keydown(key=pygame.K_RETURN))
        mock_calc.assert_called_once_with(
            BandColor.YELLOW, BandColor.VIOLET, BandColor.RED, BandColor.GOLD
        )

    def test_decode_error_is_shown_verbatim(self):
        self._set_bands(BandColor.GRAY, BandColor.VIOLET, BandColor.GOLD, BandColor.NONE)
        self.screen.handle_event(_keydown(key=pygame.K_RETURN))
        self.assertIsNone(self.screen.result)
        self.assertEqual(self.screen.error, "Unhandled gold multiplier band.")

    def test_decode_error_from_calculate_is_caught(self):
        with patch("screen_decoder.calculate", side_effect=MissingMultiplierBand()):
            self.screen.handle_event(_keydown(key=pygame.K_RETURN))
        self.assertEqual(self.screen.error, "No multiplier band found.")

    def test_arrow_keys_move_active_band_and_wrap(self):
        self.screen.handle_event(_keydown(key=pygame.K_LEFT))
        self.assertEqual(self.screen.active_band, 3)
        self.screen.handle_event(_keydown(key=pygame.K_RIGHT))
        self.screen.handle_event(_keydown(key=pygame.K_RIGHT))
        self.assertEqual(self.screen.active_band, 1)

    def test_up_down_cycle_active_band_colour(self):
        # Band A starts on yellow (4); down moves to green, up back to yellow.
        self.screen.handle_event(_keydown(key=pygame.K_DOWN))
        self.assertIs(self.screen.bands[0], BandColor.GREEN)
        self.screen.handle_event(_keydown(key=pygame.K_UP))
        self.assertIs(self.screen.bands[0], BandColor.YELLOW)

    def test_cycle_wraps_around_choices(self):
        self.screen.select(0, BandColor.NONE)
        self.screen.cycle(0, -1)
        self.assertIs(self.screen.bands[0], BandColor.SILVER)
        self.screen.cycle(0, 1)
        self.assertIs(self.screen.bands[0], BandColor.NONE)

    def test_backspace_clears_active_band(self):
        self.screen.handle_event(_keydown(key=pygame.K_BACKSPACE))
        self.assertIs(self.screen.bands[0], BandColor.NONE)
        self.screen.handle_event(_keydown(key=pygame.K_RETURN))
        self.assertEqual(self.screen.error, "Significant figure band A not present.")

    def test_changing_a_band_clears_stale_result(self):
        self.screen.handle_event(_keydown(key=pygame.K_RETURN))
        self.screen.select(2, BandColor.ORANGE)
        self.assertIsNone(self.screen.result)

    def test_tap_calculate_button(self):
        rect = self.screen._calc_rect
        self.screen.handle_touch(rect.centerx, rect.centery)
        self.assertEqual(self.screen.result, 4700)

    def test_tap_down_arrow_cycles_that_band(self):
        index, _, rect = next(
            cell for cell in self.screen._cell_rects if cell[0] == 2 and cell[1] == "down"
        )
        self.screen.handle_touch(rect.centerx, rect.centery)
        self.assertEqual(self.screen.active_band, index)
        self.assertIs(self.screen.bands[2], BandColor.ORANGE)

    def test_tap_outside_controls_is_ignored(self):
        before = self.screen.bands
        self.screen.handle_touch(470, 310)
        self.assertEqual(self.screen.bands, before)
        self.assertIsNone(self.screen.result)

    def test_zero_ohm_resistor(self):
        self._set_bands(BandColor.BLACK, BandColor.NONE, BandColor.NONE, BandColor.NONE)
        self.screen.handle_event(_keydown(key=pygame.K_RETURN))
        self.assertEqual(self.screen.result, 0)


# ---------------------------------------------------------------------------
# ScreenAbout
# ---------------------------------------------------------------------------

class TestScreenAbout(unittest.TestCase):

    def setUp(self):
        from screen_about import ScreenAbout
        from ui_manager import UIManager
        self.surface = _make_surface()
        self.screen = ScreenAbout(UIManager(self.surface))

    def test_draw_does_not_raise(self):
        self.screen.draw()
        self.surface.fill.assert_called()
        self.surface.blit.assert_called()

    def test_update_and_events_do_not_raise(self):
        self.screen.update(0.016)
        self.screen.handle_event(MagicMock())


if __name__ == "__main__":
    unittest.main()
