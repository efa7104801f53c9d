"""A minimal widget counting clicks, showing how plugins are written."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .interface import Widget, WidgetPlugin, WidgetType

log = logging.getLogger("deskwidgets")

_ICONS = {
    WidgetType.SMALL: "dde-file-manager",
    WidgetType.MIDDLE: "dde-printer",
    WidgetType.LARGE: "deepin-album",
}


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass
class _ExampleView:
    text: str = ""
    icon: str = ""
    type: WidgetType = WidgetType.INVALID
    settings_requests: int = 0


class ExampleWidget(Widget):
    """Button whose label is a click counter stored in the settings."""

    def __init__(self) -> None:
        super().__init__()
        self._view: _ExampleView | None = None

    def view(self) -> _ExampleView | None:
        return self._view

    def initialize(self, arguments: list[str]) -> bool:
        self._view = _ExampleView(text=str(_to_int(self.handler.value("content"))))
        return True

    def type_changed(self, type: WidgetType) -> None:
        log.debug("type_changed %s", type)
        if self._view is None:
            return
        self._view.type = WidgetType(type)
        icon = _ICONS.get(WidgetType(type))
        if icon is not None:
            self._view.icon = icon

    def click(self) -> None:
        """Increment the stored counter and show the stored value."""
        content = _to_int(self.handler.value("content")) + 1
        self.handler.set_value("content", content)
        if self._view is not None:
            self._view.text = str(_to_int(self.handler.value("content")))

    def enable_settings(self) -> bool:
        log.debug("enable_settings %s %s", self.handler.plugin_id, self.handler.id)
        return True

    def settings(self) -> bool:
        """Record a settings request on the view; always handled."""
        log.debug("settings %s %s", self.handler.plugin_id, self.handler.id)
        if self._view is not None:
            self._view.settings_requests += 1
        return True


class ExampleWidgetPlugin(WidgetPlugin):
    """Plugin providing the example widget."""

    plugin_id = "example"
    version = "1.0"

    def title(self) -> str:
        return "Example"

    def description(self) -> str:
        return "Normal Example Widget"

    def create_widget(self) -> ExampleWidget:
        return ExampleWidget()

    def support_types(self) -> list[WidgetType]:
        return [WidgetType.SMALL, WidgetType.MIDDLE, WidgetType.LARGE]