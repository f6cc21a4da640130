import shlex
import sys

import pytest

from neovide.cmd_line import CmdLineSettings
from neovide.nvim_command import (
    NeovimNotFoundError,
    build_nvim_cmd_with_args,
    create_nvim_command,
    create_platform_shell_command,
    lex_nvim_cmdline,
    neovim_ok,
    platform_which,
)


def write_script(tmp_path, body):
    script = tmp_path / "fake_nvim.py"
    script.write_text("import sys\n" + body + "\n")
    return str(script)


@pytest.fixture
def good_script(tmp_path):
    return write_script(tmp_path, 'sys.stdout.write("NVIM v0.9.5\\n")')


@pytest.fixture
def linux(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")


def test_shell_command_linux(linux):
    assert create_platform_shell_command("which", ["nvim"], CmdLineSettings()) == [
        "which",
        "nvim",
    ]


def test_shell_command_wsl(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    settings = CmdLineSettings(wsl=True)
    assert create_platform_shell_command("which", ["nvim"], settings) == [
        "wsl",
        "$SHELL",
        "-lc",
        "which nvim",
    ]


def test_shell_command_macos_login_shell(monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    monkeypatch.setenv("SHELL", "/bin/zsh")
    monkeypatch.delenv("TERM", raising=False)
    assert create_platform_shell_command("which", ["nvim"], CmdLineSettings()) == [
        "/bin/zsh",
        "-l",
        "-c",
        "which nvim",
    ]


def test_build_cmd_linux(linux):
    settings = CmdLineSettings(neovim_args=["-p", "a.txt"])
    assert build_nvim_cmd_with_args("nvim", ["-u", "NONE"], settings) == [
        "nvim",
        "-u",
        "NONE",
        "--embed",
        "-p",
        "a.txt",
    ]


def test_build_cmd_wsl(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    settings = CmdLineSettings(wsl=True)
    assert build_nvim_cmd_with_args("nvim", [], settings) == [
        "wsl",
        "$SHELL",
        "-lc",
        "nvim --embed",
    ]


def test_build_cmd_macos_quotes_arguments(monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    monkeypatch.setenv("SHELL", "/bin/zsh")
    monkeypatch.setenv("TERM", "xterm")
    settings = CmdLineSettings(neovim_args=["my file"])
    command = build_nvim_cmd_with_args("nvim", [], settings)
    assert command[:2] == ["/bin/zsh", "-c"]
    assert shlex.split(command[2]) == ["nvim", "--embed", "my file"]


def test_neovim_ok_accepts_neovim_output(linux, good_script):
    assert neovim_ok(sys.executable, [good_script], CmdLineSettings()) is True


def test_neovim_ok_false_on_failure(linux, tmp_path):
    script = write_script(tmp_path, "sys.exit(1)")
    assert neovim_ok(sys.executable, [script], CmdLineSettings()) is False


def test_neovim_ok_false_for_missing_binary(linux, tmp_path):
    missing = str(tmp_path / "no_such_binary")
    assert neovim_ok(missing, [], CmdLineSettings()) is False


def test_neovim_ok_raises_on_unexpected_output(linux, tmp_path):
    script = write_script(tmp_path, 'sys.stdout.write("hello\\n")')
    with pytest.raises(NeovimNotFoundError, match="Unexpected output"):
        neovim_ok(sys.executable, [script], CmdLineSettings())


def test_platform_which_finds_executable(linux, tmp_path, monkeypatch):
    binary = tmp_path / "fakebin"
    binary.write_text("#!/bin/sh\n")
    binary.chmod(0o755)
    monkeypatch.setenv("PATH", str(tmp_path))
    assert platform_which("fakebin", CmdLineSettings()) == str(binary)


def test_platform_which_missing(linux, tmp_path, monkeypatch):
    monkeypatch.setenv("PATH", str(tmp_path))
    assert platform_which("missing_binary", CmdLineSettings()) is None


def test_lex_cmdline_with_path(linux, good_script):
    cmdline = shlex.join([sys.executable, good_script])
    assert lex_nvim_cmdline(cmdline, CmdLineSettings()) == (sys.executable, [good_script])


@pytest.mark.parametrize("cmdline", ["", "   ", "'unterminated"])
def test_lex_cmdline_rejects_bad_input(linux, cmdline):
    assert lex_nvim_cmdline(cmdline, CmdLineSettings()) is None


def test_create_command_from_neovim_bin(linux, good_script):
    settings = CmdLineSettings(
        neovim_bin=shlex.join([sys.executable, good_script]), neovim_args=["--clean"]
    )
    assert create_nvim_command(settings) == [
        sys.executable,
        good_script,
        "--embed",
        "--clean",
    ]


def test_create_command_bad_neovim_bin(linux, tmp_path):
    missing = str(tmp_path / "missing")
    settings = CmdLineSettings(neovim_bin=missing)
    with pytest.raises(NeovimNotFoundError, match="NEOVIM_BIN"):
        create_nvim_command(settings)


def test_create_command_without_nvim(linux, tmp_path, monkeypatch):
    monkeypatch.setenv("PATH", str(tmp_path))
    with pytest.raises(NeovimNotFoundError, match="nvim not found"):
        create_nvim_command(CmdLineSettings())