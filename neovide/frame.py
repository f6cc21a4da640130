"""Window decoration styles."""

from __future__ import annotations

import sys
from enum import Enum


class Frame(Enum):
    """Which window decorations to use."""

    FULL = "full"
    TRANSPARENT = "transparent"
    BUTTONLESS = "buttonless"
    NONE = "none"

    @classmethod
    def _available(cls) -> list[Frame]:
        if sys.platform == "darwin":
            return [cls.FULL, cls.TRANSPARENT, cls.BUTTONLESS, cls.NONE]
        return [cls.FULL, cls.NONE]

    @classmethod
    def parse(cls, value: str) -> Frame:
        """Return the frame named ``value`` if this platform supports it."""
        available = cls._available()
        for frame in available:
            if frame.value == value:
                return frame
        names = ", ".join(frame.value for frame in available)
        raise ValueError(f"invalid value '{value}' (possible values: {names})")

    def __str__(self) -> str:
        return self.value