"""Command line and environment handling."""

from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from .dimensions import Dimensions
from .frame import Frame

SRGB_DEFAULT = "1" if sys.platform == "win32" else "0"
VERSION = "0.11.2"

_FALSEY = frozenset({"n", "no", "f", "false", "off", "0", ""})
_GRID_WITHOUT_VALUE = object()


class CmdLineError(Exception):
    """The command line could not be parsed."""


@dataclass
class GeometryArgs:
    """Initial window geometry; grid, size and maximized exclude each other.

    ``grid_set`` is true when ``--grid`` was given at all; ``grid`` is None
    when it was given without a value, meaning the size comes from the config.
    """

    grid_set: bool = False
    grid: Dimensions | None = None
    size: Dimensions | None = None
    maximized: bool = False


@dataclass
class CmdLineSettings:
    """Settings taken from the command line and environment."""

    files_to_open: list[str] = field(default_factory=list)
    neovim_args: list[str] = field(default_factory=list)
    log_to_file: bool = False
    server: str | None = None
    wsl: bool = False
    frame: Frame = Frame.FULL
    no_multi_grid: bool = False
    no_fork: bool = False
    idle: bool = True
    no_tabs: bool = False
    srgb: bool = SRGB_DEFAULT != "0"
    vsync: bool = True
    neovim_bin: str | None = None
    wayland_app_id: str = "neovide"
    x11_wm_class: str = "neovide"
    x11_wm_class_instance: str = "neovide"
    geometry: GeometryArgs = field(default_factory=GeometryArgs)


def _truthy(value: str) -> bool:
    return value.lower() not in _FALSEY


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    value = environ.get(name)
    return default if value is None else _truthy(value)


def _dimensions_type(text: str) -> Dimensions:
    try:
        return Dimensions.parse(text)
    except ValueError as error:
        raise argparse.ArgumentTypeError(str(error)) from None


def _frame_type(text: str) -> Frame:
    try:
        return Frame.parse(text)
    except ValueError as error:
        raise argparse.ArgumentTypeError(str(error)) from None


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):
        raise CmdLineError(f"{self.prog}: error: {message}")


def build_parser(environ: Mapping[str, str] | None = None) -> argparse.ArgumentParser:
    """Build the argument parser, taking defaults from ``environ``."""
    env = os.environ if environ is None else environ
    parser = _Parser(
        prog="neovide",
        description="No Nonsense Neovim Gui",
        epilog="Arguments after -- are passed to Neovim unchanged.",
    )
    parser.add_argument(
        "files_to_open",
        nargs="*",
        metavar="FILES",
        help="Files to open (plainly appended to Neovim args)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "--log",
        dest="log_to_file",
        action="store_true",
        help="Enable logging to a file in the current directory",
    )
    parser.add_argument(
        "--server",
        "--remote-tcp",
        dest="server",
        metavar="ADDRESS",
        help="Connect to the named pipe or socket at ADDRESS",
    )
    parser.add_argument(
        "--wsl",
        action="store_true",
        default=_env_flag(env, "NEOVIDE_WSL", False),
        help="Run Neovim in WSL rather than on the host",
    )
    parser.add_argument(
        "--frame",
        type=_frame_type,
        default=env.get("NEOVIDE_FRAME", "full"),
        help="Which window decorations to use",
    )
    parser.add_argument(
        "--no-multigrid",
        dest="no_multi_grid",
        action="store_true",
        default=_env_flag(env, "NEOVIDE_NO_MULTIGRID", False),
        help="Disable the Multigrid extension",
    )
    parser.add_argument(
        "--no-fork",
        dest="no_fork",
        action="store_true",
        help="Stay attached to the launching shell instead of forking",
    )
    parser.add_argument(
        "--no-idle",
        dest="idle",
        action="store_false",
        default=_env_flag(env, "NEOVIDE_IDLE", True),
        help="Render every frame",
    )
    parser.add_argument(
        "--no-tabs",
        dest="no_tabs",
        action="store_true",
        help="Do not open multiple files in tabs",
    )
    parser.add_argument(
        "--srgb",
        action="store_true",
        default=_truthy(env.get("NEOVIDE_SRGB", SRGB_DEFAULT)),
        help="Request sRGB when initializing the window",
    )
    parser.add_argument(
        "--no-srgb",
        dest="no_srgb",
        action="store_true",
        help="Do not request sRGB when initializing the window",
    )
    parser.add_argument(
        "--vsync",
        action="store_true",
        default=_env_flag(env, "NEOVIDE_VSYNC", True),
        help="Request VSync on the window [DEFAULT]",
    )
    parser.add_argument(
        "--no-vsync",
        dest="no_vsync",
        action="store_true",
        help="Do not try to request VSync on the window",
    )
    parser.add_argument(
        "--neovim-bin",
        dest="neovim_bin",
        default=env.get("NEOVIM_BIN"),
        help="Which Neovim binary to invoke instead of nvim found on PATH",
    )
    parser.add_argument(
        "--wayland_app_id",
        dest="wayland_app_id",
        default=env.get("NEOVIDE_APP_ID", "neovide"),
        help="The app ID to show to the compositor (Wayland only)",
    )
    parser.add_argument(
        "--x11-wm-class",
        dest="x11_wm_class",
        default=env.get("NEOVIDE_WM_CLASS", "neovide"),
        help="The class part of the X11 WM_CLASS property",
    )
    parser.add_argument(
        "--x11-wm-class-instance",
        dest="x11_wm_class_instance",
        default=env.get("NEOVIDE_WM_CLASS_INSTANCE", "neovide"),
        help="The instance part of the X11 WM_CLASS property",
    )
    geometry = parser.add_mutually_exclusive_group()
    geometry.add_argument(
        "--grid",
        nargs="?",
        const=_GRID_WITHOUT_VALUE,
        type=_dimensions_type,
        help="The initial grid size of the window [<columns>x<lines>]",
    )
    geometry.add_argument(
        "--size",
        type=_dimensions_type,
        help="The size of the window in pixels",
    )
    geometry.add_argument(
        "--maximized",
        action="store_true",
        default=_env_flag(env, "NEOVIDE_MAXIMIZED", False),
        help="Maximize the window on startup",
    )
    return parser


def parse_command_line(
    args: Sequence[str], environ: Mapping[str, str] | None = None
) -> CmdLineSettings:
    """Parse ``args`` (program name first) without merging the Neovim arguments."""
    args = list(args)
    rest = args[1:]
    passthrough: list[str] = []
    if "--" in rest:
        split = rest.index("--")
        rest, passthrough = rest[:split], rest[split + 1 :]

    parser = build_parser(environ)
    if args:
        parser.prog = os.path.basename(args[0]) or parser.prog
    ns = parser.parse_intermixed_args(rest)

    grid_set = ns.grid is not None
    grid = None if ns.grid is _GRID_WITHOUT_VALUE else ns.grid

    return CmdLineSettings(
        files_to_open=list(ns.files_to_open),
        neovim_args=passthrough,
        log_to_file=ns.log_to_file,
        server=ns.server,
        wsl=ns.wsl,
        frame=ns.frame,
        no_multi_grid=ns.no_multi_grid,
        no_fork=ns.no_fork,
        idle=ns.idle,
        no_tabs=ns.no_tabs,
        srgb=ns.srgb and not ns.no_srgb,
        vsync=ns.vsync and not ns.no_vsync,
        neovim_bin=ns.neovim_bin,
        wayland_app_id=ns.wayland_app_id,
        x11_wm_class=ns.x11_wm_class,
        x11_wm_class_instance=ns.x11_wm_class_instance,
        geometry=GeometryArgs(
            grid_set=grid_set, grid=grid, size=ns.size, maximized=ns.maximized
        ),
    )


def handle_command_line_arguments(
    args: Sequence[str], environ: Mapping[str, str] | None = None
) -> CmdLineSettings:
    """Parse ``args`` and fold the files to open into the Neovim arguments."""
    settings = parse_command_line(args, environ)
    tab_flag = [] if settings.no_tabs else ["-p"]
    return dataclasses.replace(
        settings,
        neovim_args=[*tab_flag, *settings.files_to_open, *settings.neovim_args],
        files_to_open=[],
    )