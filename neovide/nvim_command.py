"""Locating the Neovim binary and building the command that embeds it."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from collections.abc import Sequence

from .cmd_line import CmdLineSettings

_log = logging.getLogger(__name__)


class NeovimNotFoundError(Exception):
    """Neovim could not be found, or it did not answer as expected."""


def _use_wsl(settings: CmdLineSettings) -> bool:
    return sys.platform == "win32" and settings.wsl


def _login_shell() -> list[str]:
    shell = os.environ.get("SHELL", "/bin/sh")
    argv = [shell]
    if "TERM" not in os.environ:
        argv.append("-l")
    argv.append("-c")
    return argv


def _run(argv: Sequence[str]) -> subprocess.CompletedProcess | None:
    extra = {}
    if sys.platform == "win32":
        extra["creationflags"] = getattr(subprocess, "CREATE_NO_WINDOW", 0)
    try:
        return subprocess.run(
            list(argv),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            check=False,
            **extra,
        )
    except OSError:
        return None


def create_platform_shell_command(
    command: str, args: Sequence[str], settings: CmdLineSettings
) -> list[str]:
    """The argv to run ``command``, through WSL or a login shell where needed."""
    line = f"{command} {' '.join(args)}"
    if _use_wsl(settings):
        return ["wsl", "$SHELL", "-lc", line]
    if sys.platform == "darwin":
        return [*_login_shell(), line]
    return [command, *args]


def neovim_ok(binary: str, args: Sequence[str], settings: CmdLineSettings) -> bool:
    """Whether ``binary -v`` runs; raises if it runs but does not look like Neovim."""
    output = _run(create_platform_shell_command(binary, [*args, "-v"], settings))
    if output is None or output.returncode != 0:
        return False

    stdout = output.stdout.decode("utf-8", errors="replace")
    if stdout.startswith("NVIM v") and not output.stderr:
        return True

    stderr = output.stderr.decode("utf-8", errors="replace")
    message = (
        "ERROR: Unexpected output from neovim binary:\n"
        f"\t{binary} -v\n"
        f"stdout: {stdout}\n"
        f"stderr: {stderr}\n"
        "Check that your shell doesn't output anything extra when running:\n\t"
    )
    if settings.wsl:
        message += f"wsl '$SHELL' -lc '{binary} -v'"
    else:
        message += f"$SHELL -lc '{binary} -v'"
    raise NeovimNotFoundError(message)


def platform_which(binary: str, settings: CmdLineSettings) -> str | None:
    """Full path of ``binary``, searched directly and then through a shell."""
    if not settings.wsl:
        path = shutil.which(binary)
        if path is not None:
            return path

    which_command = create_platform_shell_command("which", [binary], settings)
    _log.debug("Running which command: %s", which_command)
    output = _run(which_command)
    if output is not None and output.returncode == 0:
        return output.stdout.decode("utf-8", errors="replace").strip()
    return None


def lex_nvim_cmdline(
    cmdline: str, settings: CmdLineSettings
) -> tuple[str, list[str]] | None:
    """Split a NEOVIM_BIN value into binary and arguments, if it runs Neovim."""
    try:
        tokens = shlex.split(cmdline)
    except ValueError:
        return None
    if not tokens:
        return None

    binary, *args = tokens
    # Without a path separator the binary is looked up on the search path.
    if "/" not in binary and "\\" not in binary:
        found = platform_which(binary, settings)
        if found is None:
            return None
        binary = found

    return (binary, args) if neovim_ok(binary, args, settings) else None


def build_nvim_cmd_with_args(
    binary: str, args: Sequence[str], settings: CmdLineSettings
) -> list[str]:
    """The argv that starts ``binary`` embedded, with the user's Neovim arguments."""
    full_args = [*args, "--embed", *settings.neovim_args]
    if sys.platform == "darwin":
        return [*_login_shell(), shlex.join([binary, *full_args])]
    if _use_wsl(settings):
        return ["wsl", "$SHELL", "-lc", " ".join([binary, *full_args])]
    return [binary, *full_args]


def create_nvim_command(settings: CmdLineSettings) -> list[str]:
    """The argv for the embedded Neovim, from NEOVIM_BIN or the search path."""
    if settings.neovim_bin is not None:
        found = lex_nvim_cmdline(settings.neovim_bin, settings)
        if found is None:
            raise NeovimNotFoundError(
                f"ERROR: NEOVIM_BIN='{settings.neovim_bin}' was not found."
            )
        command = build_nvim_cmd_with_args(*found, settings)
    else:
        path = platform_which("nvim", settings)
        if path is None or not neovim_ok(path, [], settings):
            raise NeovimNotFoundError("ERROR: nvim not found!")
        command = build_nvim_cmd_with_args(path, [], settings)

    _log.debug("Starting neovim with: %s", command)
    return command