"""
Resistor Decoder - Colour Band to Resistance Conversion

Decodes the nominal resistance of a 4-band resistor from its colour bands.
Invalid band combinations raise a BandDecodeError subclass whose message is
suitable for showing to the user as-is.

Exports:
    BandColor    – enum of band colours (rank, label, rgb)
    Resistor     – immutable 4-band resistor; resistance() does the decoding
    calculate    – bands → resistance in ohms (int)
    format_ohms  – ohms → compact SI string, e.g. '4.7kΩ'
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Band colours
# ---------------------------------------------------------------------------

class BandColor(enum.Enum):
    """A resistor band colour.

    The value is the colour's rank: 0–9 for the digit colours, -1 for Gold,
    -2 for Silver and ``None`` for a missing band.
    """

    BLACK  = 0
    BROWN  = 1
    RED    = 2
    ORANGE = 3
    YELLOW = 4
    GREEN  = 5
    BLUE   = 6
    VIOLET = 7
    GRAY   = 8
    WHITE  = 9
    GOLD   = -1
    SILVER = -2
    NONE   = None

    @classmethod
    def from_name(cls, name: str | None) -> "BandColor":
        """Look up a colour by name, case-insensitively.

        Accepts the British spelling ``'grey'``; an empty or missing name
        means no band.

        Raises:
            ValueError: If *name* is not a band colour.
        """
        key = (name or "none").strip().upper()
        if key == "GREY":
            key = "GRAY"
        if not key:
            key = "NONE"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown band colour: {name!r}") from None

    @property
    def is_digit(self) -> bool:
        return self.value is not None and 0 <= self.value <= 9

    @property
    def label(self) -> str:
        """Lower-case colour name, e.g. ``'gold'``."""
        return self.name.lower()

    @property
    def title(self) -> str:
        return self.name.title()

    @property
    def rgb(self) -> tuple:
        return _BAND_RGB[self]


# Display colour per band (index order matches the selector cycle order).
_BAND_RGB: dict[BandColor, tuple] = {
    BandColor.NONE:   (80,  90,  120),
    BandColor.BLACK:  (0,   0,   0  ),
    BandColor.BROWN:  (139, 69,  19 ),
    BandColor.RED:    (255, 0,   0  ),
    BandColor.ORANGE: (255, 140, 0  ),
    BandColor.YELLOW: (255, 255, 0  ),
    BandColor.GREEN:  (0,   200, 0  ),
    BandColor.BLUE:   (0,   0,   255),
    BandColor.VIOLET: (139, 0,   255),
    BandColor.GRAY:   (128, 128, 128),
    BandColor.WHITE:  (255, 255, 255),
    BandColor.GOLD:   (255, 215, 0  ),
    BandColor.SILVER: (192, 192, 192),
}

# Order used by selectors: no band first, then digits, then gold/silver.
BAND_CHOICES: list[BandColor] = list(_BAND_RGB)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class BandDecodeError(ValueError):
    """Base class for band combinations that do not decode to a resistance."""


class MissingSignificantFigureBand(BandDecodeError):
    def __init__(self, band_label: str) -> None:
        self.band_label = band_label
        super().__init__(f"Significant figure band {band_label} not present.")


class UntranslatableSignificantFigureBand(BandDecodeError):
    def __init__(self, band_label: str, color: BandColor) -> None:
        self.band_label = band_label
        self.color = color
        super().__init__(
            f"Cannot convert a {color.label} {band_label} band to a significant figure."
        )


class MissingMultiplierBand(BandDecodeError):
    def __init__(self) -> None:
        super().__init__("No multiplier band found.")


class UntranslatableMultiplierBand(BandDecodeError):
    def __init__(self, color: BandColor) -> None:
        self.color = color
        super().__init__(f"Unhandled {color.label} multiplier band.")


# ---------------------------------------------------------------------------
# Resistor
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Resistor:
    """A discrete 4-band resistor.

    Band D (tolerance) is carried along for display but is not decoded.
    """

    band_a: BandColor
    band_b: BandColor
    band_c: BandColor
    band_d: BandColor = BandColor.NONE

    @property
    def bands(self) -> tuple[BandColor, ...]:
        return (self.band_a, self.band_b, self.band_c, self.band_d)

    @property
    def is_zero_ohm(self) -> bool:
        # A single black band marks a zero-ohm link.
        return (
            self.band_a is BandColor.BLACK
            and self.band_b is BandColor.NONE
            and self.band_c is BandColor.NONE
        )

    def resistance(self) -> int:
        """Return the nominal resistance in ohms.

        Raises:
            BandDecodeError: If the bands do not describe a resistance.
        """
        if self.is_zero_ohm:
            return 0
        return self._significant_figures() * self._multiplier()

    def _significant_figures(self) -> int:
        # Both bands must be present before either is translated.
        for color, band_label in ((self.band_a, "A"), (self.band_b, "B")):
            if color is BandColor.NONE:
                raise MissingSignificantFigureBand(band_label)
        for color, band_label in ((self.band_a, "A"), (self.band_b, "B")):
            if not color.is_digit:
                raise UntranslatableSignificantFigureBand(band_label, color)
        return 10 * self.band_a.value + self.band_b.value

    def _multiplier(self) -> int:
        if self.band_c is BandColor.NONE:
            raise MissingMultiplierBand()
        if not self.band_c.is_digit:
            raise UntranslatableMultiplierBand(self.band_c)
        return 10 ** self.band_c.value


def calculate(
    band_a: BandColor,
    band_b: BandColor,
    band_c: BandColor,
    band_d: BandColor = BandColor.NONE,
) -> int:
    """Return the resistance in ohms encoded by four colour bands.

    Raises:
        BandDecodeError: If the bands do not describe a resistance.
    """
    ohms = Resistor(band_a, band_b, band_c, band_d).resistance()
    log.debug("%s-%s-%s-%s -> %d ohms",
              band_a.title, band_b.title, band_c.title, band_d.title, ohms)
    return ohms


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_ohms(ohms: float) -> str:
    """Format *ohms* as a compact SI string (Ω / kΩ / MΩ / GΩ), stripping '.0'."""
    if ohms >= 1_000_000_000:
        scaled, unit = ohms / 1_000_000_000, "GΩ"
    elif ohms >= 1_000_000:
        scaled, unit = ohms / 1_000_000, "MΩ"
    elif ohms >= 1_000:
        scaled, unit = ohms / 1_000, "kΩ"
    else:
        scaled, unit = ohms, "Ω"

    formatted = f"{scaled:.1f}"
    if formatted.endswith(".0"):
        formatted = formatted[:-2]
    return f"{formatted}{unit}"
