"""Settings storage and the host-side widget handler."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from .interface import PluginType, WidgetHandler, WidgetType

log = logging.getLogger("deskwidgets")

_TYPE_NAMES = {
    WidgetType.INVALID: "Invalid",
    WidgetType.SMALL: "Small",
    WidgetType.MIDDLE: "Middle",
    WidgetType.LARGE: "Large",
}


class DataStore:
    """Key/value settings with nested groups, optionally backed by a JSON file."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._groups: list[str] = []
        self._data: dict[str, Any] = {}
        if self.path is not None and self.path.exists():
            self._data = json.loads(self.path.read_text(encoding="utf-8") or "{}")

    @contextmanager
    def group(self, prefix: str) -> Iterator[DataStore]:
        """Make following keys relative to ``prefix`` for the duration of the block."""
        self._groups.append(prefix)
        try:
            yield self
        finally:
            self._groups.pop()

    def _full_key(self, key: str) -> str:
        return "/".join(part for part in (*self._groups, key) if part)

    def value(self, key: str, default: Any = None) -> Any:
        return self._data.get(self._full_key(key), default)

    def set_value(self, key: str, value: Any) -> None:
        self._data[self._full_key(key)] = value
        self._changed()

    def remove(self, key: str) -> None:
        """Remove ``key`` and everything below it; an empty key clears the current group."""
        full = self._full_key(key)
        if not full:
            self._data.clear()
        else:
            prefix = full + "/"
            self._data = {
                k: v for k, v in self._data.items() if k != full and not k.startswith(prefix)
            }
        self._changed()

    def contains(self, key: str) -> bool:
        return self._full_key(key) in self._data

    def save(self) -> None:
        """Write the settings to the backing file, if there is one."""
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data, indent=2, sort_keys=True), encoding="utf-8")

    def _changed(self) -> None:
        if self.path is not None:
            self.save()


def type_string(type: WidgetType) -> str:
    """Display name of a size class; only Invalid to Large have one."""
    try:
        return _TYPE_NAMES[WidgetType(type)]
    except (KeyError, ValueError):
        raise ValueError(f"no display name for widget type {type!r}") from None


@dataclass
class WidgetHandlerImpl(WidgetHandler):
    """Handler giving one widget instance its own settings group."""

    id: str
    plugin_id: str
    type: WidgetType = WidgetType.INVALID
    plugin_type: PluginType = PluginType.NORMAL
    data_store: DataStore | None = None
    is_user_area_instance: bool = True

    @property
    def unavailable_ds(self) -> bool:
        """True when this instance must not touch the settings store."""
        return not self.is_user_area_instance or self.data_store is None

    @property
    def is_fixed(self) -> bool:
        return self.plugin_type in (PluginType.RESIDENT, PluginType.ALONE)

    @property
    def is_custom(self) -> bool:
        return self.plugin_type is PluginType.ALONE

    def value(self, key: str, default: Any = None) -> Any:
        if self.unavailable_ds:
            return default
        with self.data_store.group(self.id) as store:
            result = store.value(key, default)
        log.debug("value: %s %r", key, result)
        return result

    def set_value(self, key: str, value: Any) -> None:
        if self.unavailable_ds:
            return
        log.debug("setValue: %s %r", key, value)
        with self.data_store.group(self.id) as store:
            store.set_value(key, value)

    def reset_value(self, key: str) -> None:
        if self.unavailable_ds:
            return
        log.debug("resetValue: %s", key)
        with self.data_store.group(self.id) as store:
            store.set_value(key, None)

    def remove_value(self, key: str) -> None:
        if self.unavailable_ds:
            return
        log.debug("removeValue: %s", key)
        with self.data_store.group(self.id) as store:
            store.remove(key)

    def contains_value(self, key: str) -> bool:
        if self.unavailable_ds:
            return False
        with self.data_store.group(self.id) as store:
            return store.contains(key)

    def clear(self) -> None:
        """Remove every value of this instance."""
        if self.unavailable_ds:
            return
        with self.data_store.group(self.id) as store:
            store.remove("")

    def type_string(self) -> str:
        return type_string(self.type)