"""
Color Model and Codec

Colors are stored as four floats in [0, 1]: red, green, blue and opacity.
The same four-field record is used in memory and in the JSON stores.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# Factor applied to each RGB channel to get a legible foreground color.
FONT_DARKEN_FACTOR = 0.333

_COLOR_FIELDS = ("red", "green", "blue", "opacity")


class Color(BaseModel):
    """An immutable RGBA color, each component in [0, 1]."""
    model_config = ConfigDict(frozen=True)

    red: float = Field(..., ge=0.0, le=1.0)
    green: float = Field(..., ge=0.0, le=1.0)
    blue: float = Field(..., ge=0.0, le=1.0)
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)

    @classmethod
    def from_rgb255(cls, red: int, green: int, blue: int, opacity: float = 1.0) -> "Color":
        """Build a color from 0-255 channel values."""
        return cls(red=red / 255, green=green / 255, blue=blue / 255, opacity=opacity)

    def to_hex(self) -> str:
        """Render as #rrggbb (opacity dropped)."""
        return "#{:02x}{:02x}{:02x}".format(
            round(self.red * 255), round(self.green * 255), round(self.blue * 255)
        )


class ColorCodec:
    """Converts between Color and its four-field numeric record."""

    @staticmethod
    def to_record(color: Color) -> dict[str, float]:
        return {name: float(getattr(color, name)) for name in _COLOR_FIELDS}

    @staticmethod
    def from_record(record: dict[str, Any]) -> Color:
        """
        Build a Color from a {red, green, blue, opacity} record.

        Raises:
            ValueError: If a field is missing or out of range
        """
        missing = [name for name in _COLOR_FIELDS if name not in record]
        if missing:
            raise ValueError(f"Color record is missing fields: {', '.join(missing)}")
        return Color(**{name: record[name] for name in _COLOR_FIELDS})


def darken(color: Color, factor: float = FONT_DARKEN_FACTOR) -> Color:
    """Scale each RGB channel by factor, keeping opacity."""
    return Color(
        red=color.red * factor,
        green=color.green * factor,
        blue=color.blue * factor,
        opacity=color.opacity,
    )


# Named colors (JavaFX/CSS web palette values)
GRAY = Color.from_rgb255(128, 128, 128)
RED = Color.from_rgb255(255, 0, 0)
GREEN = Color.from_rgb255(0, 128, 0)
BLUE = Color.from_rgb255(0, 0, 255)
ORANGE = Color.from_rgb255(255, 165, 0)
WHITE = Color.from_rgb255(255, 255, 255)
