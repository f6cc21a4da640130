"""Highlight styles and the colours they carry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Color:
    """An RGBA colour with float components in the range 0..1."""

    r: float
    g: float
    b: float
    a: float = 1.0


@dataclass
class Colors:
    """Foreground, background and special colours; any of them may be unset."""

    foreground: Color | None = None
    background: Color | None = None
    special: Color | None = None


class UnderlineStyle(Enum):
    UNDERLINE = "underline"
    UNDER_DOUBLE = "underdouble"
    UNDER_DASH = "underdash"
    UNDER_DOT = "underdot"
    UNDER_CURL = "undercurl"


def _required(color: Color | None, name: str) -> Color:
    if color is None:
        raise ValueError(f"default {name} colour is not set")
    return color


@dataclass
class Style:
    """A highlight group definition as sent by Neovim."""

    colors: Colors
    reverse: bool = False
    italic: bool = False
    bold: bool = False
    strikethrough: bool = False
    blend: int = 0
    underline: UnderlineStyle | None = None

    def _own_or_default_foreground(self, default_colors: Colors) -> Color:
        if self.colors.foreground is not None:
            return self.colors.foreground
        return _required(default_colors.foreground, "foreground")

    def _own_or_default_background(self, default_colors: Colors) -> Color:
        if self.colors.background is not None:
            return self.colors.background
        return _required(default_colors.background, "background")

    def foreground(self, default_colors: Colors) -> Color:
        """The colour text is drawn in, honouring ``reverse``."""
        if self.reverse:
            return self._own_or_default_background(default_colors)
        return self._own_or_default_foreground(default_colors)

    def background(self, default_colors: Colors) -> Color:
        """The colour behind the text, honouring ``reverse``."""
        if self.reverse:
            return self._own_or_default_foreground(default_colors)
        return self._own_or_default_background(default_colors)

    def special(self, default_colors: Colors) -> Color:
        """The colour of underlines; falls back to the foreground."""
        if self.colors.special is not None:
            return self.colors.special
        return self.foreground(default_colors)