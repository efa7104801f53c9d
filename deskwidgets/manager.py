"""Plugin registry and lifetime management of widget instances."""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable
from uuid import uuid4

from .handler import DataStore, WidgetHandlerImpl
from .interface import PluginType, Widget, WidgetPlugin, WidgetType

log = logging.getLogger("deskwidgets")

_CURRENT_VERSION = "1.0"
_STORE_TYPES = (WidgetType.SMALL, WidgetType.MIDDLE, WidgetType.LARGE)
_USHORT_MAX = 0xFFFF
_DIGITS = re.compile(r"\s*\+?(\d+)\s*")


def parse_version(version: str) -> tuple[int, int]:
    """Split ``major.minor`` into two numbers; anything malformed gives ``(0, 0)``."""
    items = version.split(".")
    if len(items) != 2:
        return (0, 0)
    numbers = []
    for item in items:
        match = _DIGITS.fullmatch(item)
        if match is None:
            return (0, 0)
        number = int(match.group(1))
        if number > _USHORT_MAX:
            return (0, 0)
        numbers.append(number)
    return (numbers[0], numbers[1])


def current_version() -> str:
    """Plugin interface version implemented by the host."""
    return _CURRENT_VERSION


def match_version(version: str) -> bool:
    """Tell whether a plugin built for ``version`` can be loaded."""
    supported_major, _ = parse_version(current_version())
    major, minor = parse_version(version)
    return (major > 0 or minor > 0) and major <= supported_major


@dataclass
class _PluginSpec:
    plugin: WidgetPlugin
    id: str
    version: str
    data_store: DataStore
    support_types: list[WidgetType] = field(default_factory=list)

    def create(
        self,
        type: WidgetType,
        instance_id: str | None = None,
        for_store: bool = False,
    ) -> Widget | None:
        if for_store and type not in self.support_types:
            return None
        widget = self.plugin.create_widget()
        if widget is None:
            return None
        widget.handler = WidgetHandlerImpl(
            id=instance_id or str(uuid4()),
            plugin_id=self.id,
            type=WidgetType(type),
            plugin_type=self.plugin.type(),
            data_store=self.data_store,
            is_user_area_instance=not for_store,
        )
        return widget

    def remove_support_type(self, type: WidgetType) -> None:
        if type in self.support_types:
            self.support_types.remove(type)


class WidgetManager:
    """Keeps the loaded plugins and every widget instance created from them.

    Plugins carry their metadata as attributes: ``plugin_id`` (required) and
    ``version`` (the interface version they were written for).
    """

    def __init__(
        self,
        config_file: str | Path | None = None,
        arguments: Iterable[str] = (),
    ) -> None:
        if config_file is None:
            config_file = Path.home() / ".config" / "deskwidgets" / "widgets.json"
        self.config_file = Path(config_file)
        self.data_store = DataStore(self.config_file)
        self.arguments = list(arguments)
        self._plugins: dict[str, _PluginSpec] = {}
        self._widgets: dict[str, Widget] = {}

    # plugins

    def load_plugin(self, plugin: WidgetPlugin) -> str:
        """Register ``plugin`` and return its id; a plugin with the same id is replaced."""
        if not isinstance(plugin, WidgetPlugin):
            raise TypeError(f"{plugin!r} is not a WidgetPlugin")
        plugin_id = str(getattr(plugin, "plugin_id", "") or "")
        if not plugin_id:
            raise ValueError("plugin has no plugin_id in its metadata")
        version = str(getattr(plugin, "version", "") or "")
        if not match_version(version):
            raise ValueError(
                f"plugin version [{version}] is not matched by [{current_version()}]"
            )
        store = DataStore(self.data_store_path(plugin_id))
        log.debug("load_plugin() config's file path: %s", store.path)
        self._plugins[plugin_id] = _PluginSpec(
            plugin=plugin,
            id=plugin_id,
            version=version,
            data_store=store,
            support_types=list(plugin.support_types()),
        )
        return plugin_id

    def plugins_of_type(self, type: PluginType) -> list[WidgetPlugin]:
        """Plugins of the given placement type, ordered by id."""
        specs = sorted(
            (spec for spec in self._plugins.values() if spec.plugin.type() == type),
            key=lambda spec: spec.id,
        )
        return [spec.plugin for spec in specs]

    def get_plugin(self, plugin_id: str) -> WidgetPlugin | None:
        spec = self._plugins.get(plugin_id)
        return spec.plugin if spec is not None else None

    def remove_plugin(self, plugin_id: str) -> None:
        """Forget a loaded plugin; raises KeyError if it is not loaded."""
        try:
            del self._plugins[plugin_id]
        except KeyError:
            raise KeyError(f"plugin {plugin_id!r} is not loaded") from None

    # instances

    def create_widget(
        self,
        plugin_id: str,
        type: WidgetType,
        instance_id: str | None = None,
    ) -> Widget | None:
        """Create and initialise a widget; None if the plugin is unknown or refuses."""
        spec = self._plugins.get(plugin_id)
        if spec is None:
            return None
        instance = spec.create(type, instance_id)
        if instance is None:
            raise RuntimeError(f"plugin {plugin_id!r} created no widget")
        if self._initialize_one(instance):
            self._notify_types([instance])
            return instance
        return None

    def remove_widget(self, instance_id: str) -> None:
        instance = self._widgets.pop(instance_id, None)
        if instance is not None:
            self.about_to_shutdown([instance])

    def type_changed(self, instance_id: str, type: WidgetType) -> None:
        """Give an instance a new size class and tell it about the change."""
        instance = self._widgets.get(instance_id)
        if instance is None:
            return
        instance.handler.type = WidgetType(type)
        instance.type_changed(WidgetType(type))

    def get_instance(self, instance_id: str) -> Widget | None:
        return self._widgets.get(instance_id)

    def instances(self) -> list[Widget]:
        return list(self._widgets.values())

    def get_instances(self, plugin_id: str) -> list[Widget]:
        return [w for w in self._widgets.values() if w.handler.plugin_id == plugin_id]

    def show_all_widgets(self) -> None:
        for instance in self.instances():
            instance.show_widgets()

    def hide_all_widgets(self) -> None:
        for instance in self.instances():
            instance.hide_widgets()

    def initialize(self, instances: Iterable[Widget]) -> list[Widget]:
        """Initialise and register instances; return the ones that refused."""
        failed: list[Widget] = []
        ready: list[Widget] = []
        for instance in instances:
            handler = instance.handler
            log.debug("initialize widget. %s %s", handler.plugin_id, handler.id)
            if not instance.initialize(self.arguments):
                failed.append(instance)
                continue
            self._widgets[handler.id] = instance
            ready.append(instance)
        if ready:
            with ThreadPoolExecutor() as pool:
                futures = [pool.submit(instance.delay_initialize) for instance in ready]
                wait(futures)
            for future in futures:
                error = future.exception()
                if error is not None:
                    log.warning("delay_initialize failed: %s", error)
        return failed

    def _initialize_one(self, instance: Widget) -> bool:
        return not self.initialize([instance])

    def about_to_shutdown(self, instances: Iterable[Widget]) -> None:
        for instance in instances:
            handler = instance.handler
            log.debug("about_to_shutdown widget. %s %s", handler.plugin_id, handler.id)
            instance.about_to_shutdown()

    @staticmethod
    def _notify_types(instances: Iterable[Widget]) -> None:
        for instance in instances:
            instance.type_changed(instance.handler.type)

    # settings files

    def data_store_path(self, plugin_id: str) -> Path:
        """Settings file of a plugin, next to the host's own settings file."""
        directory = self.config_file.absolute().parent
        base_name = self.config_file.name.split(".", 1)[0]
        return directory / f"{base_name}-{plugin_id}.json"

    def clear_data_store(self, plugin_id: str, instance_id: str | None = None) -> None:
        """Delete a plugin's settings, or only one instance's group of them."""
        path = self.data_store_path(plugin_id)
        spec = self._plugins.get(plugin_id)
        if instance_id is None:
            path.unlink(missing_ok=True)
            if spec is not None:
                spec.data_store = DataStore(path)
            return
        if spec is not None:
            store = spec.data_store
        elif path.exists():
            store = DataStore(path)
        else:
            return
        with store.group(instance_id):
            store.remove("")

    # widget store

    def create_widget_store_instances(self, plugin_id: str) -> list[Widget]:
        """Create one preview instance for each size class the plugin supports."""
        instances: list[Widget] = []
        spec = self._plugins.get(plugin_id)
        if spec is not None:
            for type in _STORE_TYPES:
                instance = spec.create(type, for_store=True)
                if instance is None:
                    spec.remove_support_type(type)
                    continue
                instances.append(instance)
        for item in self.initialize(instances):
            owner = self._plugins.get(item.handler.plugin_id)
            if owner is not None:
                owner.remove_support_type(item.handler.type)
            instances.remove(item)
        self._notify_types(instances)
        return instances

    def load_widget_store_instances(self) -> dict[str, list[Widget]]:
        """Preview instances of every normal plugin, keyed by plugin id."""
        result: dict[str, list[Widget]] = {}
        for spec in list(self._plugins.values()):
            if spec.plugin.type() != PluginType.NORMAL:
                continue
            created = self.create_widget_store_instances(spec.id)
            if created:
                result.setdefault(spec.id, []).extend(created)
        return result

    def shutdown(self) -> None:
        """Tell every instance it is going away and drop all instances and plugins."""
        self.about_to_shutdown(list(self._widgets.values()))
        self._widgets.clear()
        self._plugins.clear()