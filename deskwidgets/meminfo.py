"""Reading the kernel's memory statistics."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger("deskwidgets")

PROC_MEMINFO = Path("/proc/meminfo")

_NUMBER = re.compile(r"\s*\+?(\d+)")

# Line prefix in the statistics file -> field of MemInfo.
_FIELDS = {
    "MemTotal": "mem_total",
    "MemFree": "mem_free",
    "MemAvailable": "mem_available",
    "Buffers": "buffers",
    "Cached": "cached",
    "SwapCached": "swap_cached",
    "Active": "active",
    "Inactive": "inactive",
    "SwapTotal": "swap_total",
    "SwapFree": "swap_free",
    "Dirty": "dirty",
    "Shmem": "shmem",
    "Slab": "slab",
    "Mapped": "mapped",
}


@dataclass(frozen=True)
class MemInfo:
    """Memory statistics, every value in kB."""

    mem_total: int = 0
    mem_free: int = 0
    mem_available: int = 0
    buffers: int = 0
    cached: int = 0
    active: int = 0
    inactive: int = 0
    swap_total: int = 0
    swap_free: int = 0
    swap_cached: int = 0
    shmem: int = 0
    slab: int = 0
    dirty: int = 0
    mapped: int = 0


def parse_meminfo(text: str) -> MemInfo:
    """Parse the text of a meminfo file; fields that are missing or malformed stay 0."""
    values: dict[str, int] = {}
    for line in text.splitlines():
        key, sep, rest = line.partition(":")
        if not sep or key not in _FIELDS:
            continue
        match = _NUMBER.match(rest)
        if match is None:
            log.warning("parse %s -> %s failed", PROC_MEMINFO, key)
            continue
        values[_FIELDS[key]] = int(match.group(1))
    return MemInfo(**values)


def read_meminfo(path: str | Path = PROC_MEMINFO) -> MemInfo:
    """Read and parse a meminfo file; raises OSError if it cannot be read."""
    try:
        text = Path(path).read_text(encoding="ascii", errors="replace")
    except OSError as error:
        log.warning("open %s failed: %s", path, error)
        raise
    return parse_meminfo(text)