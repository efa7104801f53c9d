import pytest

from deskwidgets.handler import DataStore, WidgetHandlerImpl
from deskwidgets.interface import PluginType, WidgetType
from deskwidgets.manager import WidgetManager
from deskwidgets.meminfo import MemInfo
from deskwidgets.memorymonitor import (
    MemoryMonitorWidget,
    MemoryMonitorWidgetPlugin,
    memory_labels,
    memory_percentages,
)

SAMPLE = (
    "MemTotal:        1000 kB\n"
    "MemFree:          100 kB\n"
    "MemAvailable:    1000 kB\n"
    "SwapTotal:        400 kB\n"
    "SwapFree:           0 kB\n"
)


def _widget(tmp_path, text=SAMPLE):
    path = tmp_path / "meminfo"
    path.write_text(text)
    widget = MemoryMonitorWidget(meminfo_path=path, interval=60)
    widget.handler = WidgetHandlerImpl(
        id="w1", plugin_id="memorymonitor", type=WidgetType.SMALL, data_store=DataStore()
    )
    return widget


def test_percentages_nothing_used():
    info = MemInfo(mem_total=2048, mem_available=2048, swap_total=512, swap_free=512)
    assert memory_percentages(info) == ("0.0", "0.0")


def test_percentages_everything_used():
    info = MemInfo(mem_total=2048, mem_available=0, swap_total=512, swap_free=0)
    assert memory_percentages(info) == ("100.0", "100.0")


def test_percentages_without_totals_are_nan():
    assert memory_percentages(MemInfo()) == ("nan", "nan")


def test_labels_with_swap():
    memory, swap, centre = memory_labels("12.5", "3.0")
    assert memory == "Memory (12.5%)"
    assert swap == "SW Memory (3.0%)"
    assert centre == "12.5%"


def test_labels_without_swap():
    _, swap, _ = memory_labels("12.5", "")
    assert swap == "SW Memory (Unabled)"


def test_labels_centre_of_unparsable_percent():
    assert memory_labels("abc", "1.0")[2] == "0.0%"


def test_view_is_none_before_initialize(tmp_path):
    widget = _widget(tmp_path)
    assert widget.view() is None


def test_update_memory_reads_file(tmp_path):
    widget = _widget(tmp_path)
    assert widget.initialize([]) is True
    widget.update_memory()
    view = widget.view()
    assert view.mem_percent == "0.0"
    assert view.swap_percent == "100.0"
    assert view.swap_ratio == pytest.approx(1.0)


def test_update_memory_with_missing_file(tmp_path):
    widget = MemoryMonitorWidget(meminfo_path=tmp_path / "absent", interval=60)
    widget.initialize([])
    widget.update_memory()
    assert widget.view().mem_percent == "nan"


def test_type_changed_records_type(tmp_path):
    widget = _widget(tmp_path)
    widget.initialize([])
    widget.type_changed(WidgetType.SMALL)
    assert widget.view().type is WidgetType.SMALL


def test_show_and_hide_control_timer(tmp_path):
    widget = _widget(tmp_path)
    widget.initialize([])
    widget.show_widgets()
    try:
        assert widget.timer_active is True
        assert widget.view().updates == 1
    finally:
        widget.hide_widgets()
    assert widget.timer_active is False


def test_plugin_metadata():
    plugin = MemoryMonitorWidgetPlugin()
    assert plugin.title() == "MemoryMonitor"
    assert plugin.description() == "Memory Monitor"
    assert plugin.about_description() == "Memory Monitor"
    assert plugin.support_types() == [WidgetType.SMALL]
    assert plugin.type() is PluginType.NORMAL
    assert isinstance(plugin.create_widget(), MemoryMonitorWidget)


def test_store_offers_only_small(tmp_path):
    manager = WidgetManager(config_file=tmp_path / "widgets.json")
    plugin_id = manager.load_plugin(MemoryMonitorWidgetPlugin())
    instances = manager.create_widget_store_instances(plugin_id)
    assert [w.handler.type for w in instances] == [WidgetType.SMALL]
    manager.shutdown()