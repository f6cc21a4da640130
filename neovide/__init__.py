"""Redraw event parsing, grids, windows, cursor state and command-line settings for a Neovim front end."""

__version__ = "0.11.2"