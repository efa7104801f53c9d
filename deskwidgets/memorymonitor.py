"""Memory usage widget showing memory and swap load."""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from pathlib import Path

from .interface import PluginType, Widget, WidgetPlugin, WidgetType
from .meminfo import PROC_MEMINFO, MemInfo, read_meminfo
from .sysutils import SizeUnit, format_unit

log = logging.getLogger("deskwidgets")

UPDATE_INTERVAL = 1.0


def _percent(used: int, total: int) -> str:
    value = used / total * 100 if total else math.nan
    return f"{value:.1f}"


def _to_double(text: str) -> float:
    try:
        return float(text)
    except (TypeError, ValueError):
        return 0.0


def memory_percentages(info: MemInfo) -> tuple[str, str]:
    """Memory and swap usage in percent, one decimal; swap is empty if unusable."""
    mem_percent = _percent(info.mem_total - info.mem_available, info.mem_total)
    swap_used = info.swap_total - info.swap_free
    swap_percent = _percent(swap_used, info.swap_total)
    swap_usage = format_unit(swap_used << 10, SizeUnit.B, 1)
    if len(swap_usage.split(" ")) != 2:
        swap_percent = ""
    return mem_percent, swap_percent


def memory_labels(mem_percent: str, swap_percent: str) -> tuple[str, str, str]:
    """Texts drawn by the widget: memory line, swap line and the ring's centre text."""
    memory = f"Memory ({mem_percent}%)"
    if not swap_percent:
        swap = "SW Memory (Unabled)"
    else:
        swap = f"SW Memory ({swap_percent}%)"
    centre = f"{_to_double(mem_percent):.1f}%"
    return memory, swap, centre


@dataclass
class _MemoryView:
    mem_percent: str = ""
    swap_percent: str = ""
    type: WidgetType = WidgetType.INVALID
    updates: int = 0

    def update_memory_info(self, mem_percent: str, swap_percent: str) -> None:
        self.mem_percent = mem_percent
        self.swap_percent = swap_percent
        self.updates += 1

    @property
    def labels(self) -> tuple[str, str, str]:
        return memory_labels(self.mem_percent, self.swap_percent)

    @property
    def memory_ratio(self) -> float:
        return _to_double(self.mem_percent) / 100

    @property
    def swap_ratio(self) -> float:
        return _to_double(self.swap_percent) / 100


class _RepeatingTimer:
    """Calls a function at a fixed interval on a background thread until stopped."""

    def __init__(self, interval: float, callback) -> None:
        self.interval = interval
        self._callback = callback
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_active(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        self.stop()
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, args=(self._stop,), daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop.set()
        if self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None

    def _run(self, stop: threading.Event) -> None:
        while not stop.wait(self.interval):
            self._callback()


class MemoryMonitorWidget(Widget):
    """Widget refreshing memory statistics while the panel is shown."""

    def __init__(
        self,
        meminfo_path: str | Path = PROC_MEMINFO,
        interval: float = UPDATE_INTERVAL,
    ) -> None:
        super().__init__()
        self.meminfo_path = Path(meminfo_path)
        self._view: _MemoryView | None = None
        self._timer = _RepeatingTimer(interval, self.update_memory)

    @property
    def timer_active(self) -> bool:
        return self._timer.is_active

    def view(self) -> _MemoryView | None:
        return self._view

    def initialize(self, arguments: list[str]) -> bool:
        self._view = _MemoryView()
        return True

    def type_changed(self, type: WidgetType) -> None:
        if self._view is not None:
            self._view.type = WidgetType(type)

    def show_widgets(self) -> None:
        self.update_memory()
        self._timer.start()

    def hide_widgets(self) -> None:
        self._timer.stop()

    def about_to_shutdown(self) -> None:
        self._timer.stop()

    def update_memory(self) -> None:
        """Read the statistics and hand the new percentages to the view."""
        try:
            info = read_meminfo(self.meminfo_path)
        except OSError:
            info = MemInfo()
        mem_percent, swap_percent = memory_percentages(info)
        if self._view is not None:
            self._view.update_memory_info(mem_percent, swap_percent)


class MemoryMonitorWidgetPlugin(WidgetPlugin):
    """Plugin providing the memory monitor widget."""

    plugin_id = "memorymonitor"
    version = "1.0"

    def title(self) -> str:
        return "MemoryMonitor"

    def description(self) -> str:
        return "Memory Monitor"

    def create_widget(self) -> MemoryMonitorWidget:
        return MemoryMonitorWidget()

    def support_types(self) -> list[WidgetType]:
        return [WidgetType.SMALL]

    def type(self) -> PluginType:
        return PluginType.NORMAL