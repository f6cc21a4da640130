"""Grid and window dimensions expressed as ``<width>x<height>``."""

from __future__ import annotations

import re
from dataclasses import dataclass

_U64_MAX = 2**64 - 1
_NUMBER = re.compile(r"\+?[0-9]+", re.ASCII)
_ZERO_MESSAGE = "Invalid Dimensions: Window dimensions should be greater than 0."


@dataclass(frozen=True)
class Dimensions:
    """A width and a height, both non-negative integers."""

    width: int
    height: int

    @classmethod
    def parse(cls, text: str) -> Dimensions:
        """Parse ``<width>x<height>``; both parts must be positive integers."""
        invalid = f"Invalid geometry: {text}\nValid format: <width>x<height>"
        values = []
        for part in text.split("x"):
            if not _NUMBER.fullmatch(part) or int(part) > _U64_MAX:
                raise ValueError(invalid)
            value = int(part)
            if value == 0:
                raise ValueError(_ZERO_MESSAGE)
            values.append(value)
        if len(values) != 2:
            raise ValueError(invalid)
        width, height = values
        return cls(width, height)

    def clamped(self, minimum: Dimensions, maximum: Dimensions) -> Dimensions:
        """Return these dimensions clamped between ``minimum`` and ``maximum``."""
        return Dimensions(
            min(max(self.width, minimum.width), maximum.width),
            min(max(self.height, minimum.height), maximum.height),
        )

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"

    def __mul__(self, other: object) -> Dimensions:
        if not isinstance(other, Dimensions):
            return NotImplemented
        return Dimensions(self.width * other.width, self.height * other.height)

    def __rmul__(self, other: object) -> tuple[int, int]:
        if not (isinstance(other, tuple) and len(other) == 2):
            return NotImplemented
        x, y = other
        return (x * self.width, y * self.height)

    def __truediv__(self, other: object) -> Dimensions:
        if not isinstance(other, Dimensions):
            return NotImplemented
        return Dimensions(self.width // other.width, self.height // other.height)