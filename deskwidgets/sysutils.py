"""Formatting helpers and process inspection used by the monitor widgets."""

from __future__ import annotations

import os
import posixpath
import string
from enum import IntEnum
from pathlib import Path
from typing import Any, Sequence

import regex

_PROC_ROOT = Path("/proc")
_DEFAULT_ICON = "application-x-executable"
_HAN = regex.compile(r"\p{Han}")

RECTANGLE_PADDING = 24
RECTANGLE_RADIUS = 8
RECTANGLE_FONT_SIZE = 11


class SizeUnit(IntEnum):
    """Powers of 1024."""

    B = 0
    KB = 1
    MB = 2
    GB = 3
    TB = 4
    PB = 5
    EB = 6


_UNIT_SUFFIX = ("B", "K", "M", "G", "T", "P", "E")
_UNIT_SUFFIX_EXT = ("B", "KB", "MB", "GB", "TB", "PB", "EB")


def format_unit(
    size: Any,
    base: SizeUnit = SizeUnit.B,
    prec: int = 1,
    is_speed: bool = False,
) -> str:
    """Render ``size`` (given in ``base`` units) with the largest fitting unit."""
    try:
        value = float(size)
    except (TypeError, ValueError):
        return ""
    unit = int(base)
    while value > 1024.0 and unit < SizeUnit.EB:
        value /= 1024
        unit += 1
    if is_speed:
        return f"{value:.{prec}f} {_UNIT_SUFFIX_EXT[unit]}/s"
    return f"{value:.{prec}f} {_UNIT_SUFFIX[unit]}"


def _as_text(item: str | bytes) -> str:
    return item.decode("utf-8", errors="replace") if isinstance(item, bytes) else item


def normalize_proc_name(proc_name: str, cmdline: Sequence[str | bytes]) -> str:
    """Recover a full process name from its command line when the kernel truncated it."""
    if not cmdline or len(proc_name) < 15:
        return proc_name
    first = _as_text(cmdline[0])
    if (
        len(first) > 3
        and first[0] in string.ascii_letters
        and first[1] == ":"
        and first[2] in "/\\"
    ):
        return posixpath.basename(first)
    for cmd in cmdline:
        name = posixpath.basename(_as_text(cmd))
        if name.startswith(proc_name):
            return name
    return proc_name


def starts_with_hanzi(text: str) -> bool:
    """Tell whether the first character belongs to the Han script."""
    return bool(text) and _HAN.match(text) is not None


def desktop_file_map() -> dict[str, str]:
    """Executables whose desktop file cannot be found by their name."""
    return {
        "/opt/kingsoft/wps-office/office6/wps": "/usr/share/applications/wps-office-wps.desktop",
        "/opt/kingsoft/wps-office/office6/wpp": "/usr/share/applications/wps-office-wpp.desktop",
        "/opt/kingsoft/wps-office/office6/et": "/usr/share/applications/wps-office-et.desktop",
    }


def status_bar_max_width() -> int:
    return 300


def desktop_file_icon_name(desktop_file: str | os.PathLike[str]) -> str:
    """Icon name or path named by a desktop file, or the generic executable icon.

    A theme icon name ends the search; an icon path is kept but a later
    ``Icon`` line may still replace it.
    """
    try:
        with open(desktop_file, encoding="utf-8", errors="replace") as file:
            lines = file.read().splitlines()
    except OSError:
        return _DEFAULT_ICON
    icon: str | None = None
    for line in lines:
        if not line.startswith("Icon"):
            continue
        name = " ".join(line.split("=")[-1].split())
        if "/" in name:
            icon = name
            continue
        icon = name or _DEFAULT_ICON
        break
    return icon if icon is not None else _DEFAULT_ICON


def _read_proc_line(pid: int, entry: str) -> str:
    try:
        data = (_PROC_ROOT / str(pid) / entry).read_bytes()
    except OSError:
        return ""
    return data.split(b"\n", 1)[0].decode("utf-8", errors="replace")


def process_cmdline(pid: int) -> str:
    """Command line of a process with arguments joined by spaces; empty if unreadable."""
    line = _read_proc_line(pid, "cmdline").replace("\0", " ")
    return line.strip()


def process_environment_variable(pid: int, name: str) -> str:
    """Value of an environment variable of a process; empty if absent or unreadable."""
    line = _read_proc_line(pid, "environ").replace("\0", "\n")
    if not line:
        return ""
    prefix = f"{name}="
    for variable in line.strip().split("\n"):
        if variable.startswith(prefix):
            return variable[len(prefix):]
    return ""


def qrc_path(image_name: str) -> str:
    """Resource path of a bundled image."""
    return f":/image/{image_name}"


def file_exists(path: str | os.PathLike[str]) -> bool:
    """True if ``path`` exists and is a regular file."""
    return Path(path).is_file()