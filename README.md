# deskwidgets

A small framework for desktop widgets. Plugins create widgets of a given
size class, a manager keeps the loaded plugins and their live instances,
and each instance keeps its own settings in a per-plugin JSON file.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Concepts

- `deskwidgets.interface` defines the contracts:
  - `WidgetType`: `INVALID`, `SMALL`, `MIDDLE`, `LARGE`, `CUSTOM`.
  - `PluginType`: `NORMAL`, `RESIDENT`, `ALONE`.
  - `Widget`: base class of a widget instance. Subclasses implement
    `view()` and may override the life-cycle hooks `initialize(arguments)`
    (return `False` to refuse), `delay_initialize()`, `type_changed(type)`,
    `show_widgets()`, `hide_widgets()`, `about_to_shutdown()`,
    `enable_settings()` and `settings()`. The `handler` property gives the
    instance's `WidgetHandler` and raises `RuntimeError` until the host has
    attached one.
  - `WidgetHandler`: settings access for one instance: `set_value`,
    `value`, `reset_value`, `remove_value`, `contains_value`, plus the
    `id`, `plugin_id` and `type` attributes.
  - `WidgetPlugin`: base class of a plugin. Subclasses implement `title()`
    and `create_widget()`; `description()`, `about_description()`,
    `contributors()`, `support_types()` and `type()` have defaults.
- `deskwidgets.handler` provides:
  - `DataStore`: a key/value store with nested groups
    (`with store.group("prefix"): ...`). When given a path it loads that
    JSON file and writes it back after every change.
  - `WidgetHandlerImpl`: scopes a widget's settings to a group named by its
    instance id. Instances that are not user-area instances (widget-store
    previews) read only defaults and write nothing.
  - `type_string(type)`: display name of `INVALID` to `LARGE`; raises
    `ValueError` for other types.
- `deskwidgets.manager` provides `WidgetManager` and the version helpers
  `parse_version`, `current_version` (`"1.0"`) and `match_version`.

## Writing a plugin

A plugin carries its metadata as class attributes: `plugin_id` (required)
and `version`, which must be accepted by `match_version`. Otherwise
`WidgetManager.load_plugin` raises `ValueError`.

```python
from deskwidgets.interface import Widget, WidgetPlugin, WidgetType
from deskwidgets.manager import WidgetManager


class ClockWidget(Widget):
    def view(self):
        return "clock"


class ClockPlugin(WidgetPlugin):
    plugin_id = "clock"
    version = "1.0"

    def title(self):
        return "Clock"

    def create_widget(self):
        return ClockWidget()


manager = WidgetManager(config_file="/tmp/demo/widgets.json")
manager.load_plugin(ClockPlugin())
clock = manager.create_widget("clock", WidgetType.SMALL)
clock.handler.set_value("zone", "UTC")   # saved to /tmp/demo/widgets-clock.json
```

Without `config_file` the manager uses `~/.config/deskwidgets/widgets.json`;
each plugin's settings go next to it as `<base name>-<plugin id>.json`
(see `data_store_path`).

## The manager

- `load_plugin`, `get_plugin`, `remove_plugin` (raises `KeyError` for an
  unknown id) and `plugins_of_type` (sorted by plugin id).
- `create_widget(plugin_id, type, instance_id=None)` creates a widget,
  runs `initialize` and then `delay_initialize` on a worker thread, and
  returns it, or `None` if the plugin is unknown or the widget refuses.
- `remove_widget`, `type_changed`, `get_instance`, `instances`,
  `get_instances`, `show_all_widgets`, `hide_all_widgets`, `initialize`,
  `about_to_shutdown` and `shutdown`.
- `create_widget_store_instances(plugin_id)` creates one preview per size
  class the plugin supports, dropping size classes that fail;
  `load_widget_store_instances()` does this for every normal plugin and
  returns the previews keyed by plugin id.
- `clear_data_store(plugin_id, instance_id=None)` deletes a plugin's
  settings file, or only one instance's group in it.

## Bundled widgets

- `deskwidgets.memorymonitor`: `MemoryMonitorWidgetPlugin` (id
  `"memorymonitor"`, small size only) creates `MemoryMonitorWidget`, which
  reads `/proc/meminfo` (or another path given to it) when shown and then
  once a second on a background thread until hidden or shut down. Its view
  holds `mem_percent`, `swap_percent` and `labels`.
  `memory_percentages(info)` and `memory_labels(mem_percent, swap_percent)`
  compute the displayed texts, e.g. `"Memory (42.0%)"` and
  `"SW Memory (Unabled)"` when there is no swap percentage.
- `deskwidgets.example`: `ExampleWidgetPlugin` (id `"example"`) creates
  `ExampleWidget`, a counter whose `click()` increments the `content`
  setting and shows it as the view's `text`.

## Helpers

- `deskwidgets.meminfo`: `MemInfo` (values in kB), `parse_meminfo(text)`
  and `read_meminfo(path)`, which raises `OSError` if the file cannot be
  read.
- `deskwidgets.sysutils`: `format_unit` with `SizeUnit`
  (`format_unit(2048)` gives `"2.0 K"`), `normalize_proc_name`,
  `starts_with_hanzi`, `process_cmdline`, `process_environment_variable`,
  `desktop_file_icon_name`, `desktop_file_map`, `status_bar_max_width`,
  `qrc_path` and `file_exists`.
- `deskwidgets.timetext`: `relative_time_text(ctime_ms, now=None)` turns a
  time in milliseconds since the epoch into `"Just now"`,
  `"5 minutes ago"`, `"3 hours ago"`, `"Yesterday  14:05"`, a weekday with
  clock time, or a date; it returns `None` for a time after `now`.

## What it does not do

- Nothing is drawn on screen: widget views are plain Python objects that
  hold what a display would show.
- Plugins are not discovered from directories or loaded from files; they
  are passed to `WidgetManager.load_plugin` as objects.
- There is no command, background service or message-bus interface to
  show, hide or sync the widget panel.
- Of notifications, only the age text is provided; there is no
  notification list or bubble.