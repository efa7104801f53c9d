"""Interfaces shared by the widget host and its plugins."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any

log = logging.getLogger("deskwidgets")

PLUGIN_IID = "org.deepin.dde.widgets.PluginInterface"


class WidgetType(IntEnum):
    """Size class of a widget instance."""

    INVALID = 0
    SMALL = 1
    MIDDLE = 2
    LARGE = 3
    CUSTOM = 64


class PluginType(IntEnum):
    """How a plugin's widgets are placed and controlled."""

    NORMAL = 0  # placed and edited by the user
    RESIDENT = 1  # built in, above the normal ones, not user-editable
    ALONE = 2  # standalone, only its maximum size is controlled


class WidgetHandler(ABC):
    """Per-instance access to settings storage and identity."""

    id: str
    plugin_id: str
    type: WidgetType

    @abstractmethod
    def set_value(self, key: str, value: Any) -> None:
        """Store a value under ``key``."""

    @abstractmethod
    def value(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``."""

    @abstractmethod
    def reset_value(self, key: str) -> None:
        """Reset the value under ``key`` to an empty value."""

    @abstractmethod
    def remove_value(self, key: str) -> None:
        """Remove the value under ``key``."""

    @abstractmethod
    def contains_value(self, key: str) -> bool:
        """Tell whether a value is stored under ``key``."""


class Widget(ABC):
    """A widget instance created by a plugin."""

    def __init__(self) -> None:
        self._handler: WidgetHandler | None = None
        self.ready = False

    @property
    def handler(self) -> WidgetHandler:
        """The handler attached by the host; raises if none is attached yet."""
        handler = getattr(self, "_handler", None)
        if handler is None:
            raise RuntimeError("widget has no handler attached")
        return handler

    @handler.setter
    def handler(self, handler: WidgetHandler | None) -> None:
        self._handler = handler

    @abstractmethod
    def view(self) -> Any:
        """Return the content shown for this widget."""

    def type_changed(self, type: WidgetType) -> None:
        """Called when the widget's size class changes."""

    def initialize(self, arguments: list[str]) -> bool:
        """Called after creation; return False to reject the instance."""
        return True

    def delay_initialize(self) -> None:
        """Deferred initialisation; may run outside the main thread.

        The default marks the widget as ready.
        """
        self.ready = True

    def show_widgets(self) -> None:
        """Called when the widget panel is shown."""

    def hide_widgets(self) -> None:
        """Called when the widget panel is hidden."""

    def about_to_shutdown(self) -> None:
        """Called before the widget is removed."""

    def enable_settings(self) -> bool:
        """Whether the widget offers a settings entry."""
        return False

    def settings(self) -> bool:
        """Handle a request to open the widget's settings.

        Returns whether the request was handled; by default only widgets
        that enable settings handle it.
        """
        return self.enable_settings()


class WidgetPlugin(ABC):
    """A plugin providing one kind of widget."""

    @abstractmethod
    def title(self) -> str:
        """Name of the widget."""

    def description(self) -> str:
        """Short description of what the widget does."""
        return ""

    def about_description(self) -> str:
        """Text for the about dialog; defaults to the description."""
        return self.description()

    def contributors(self) -> list[str]:
        """Names of the contributors."""
        return []

    @abstractmethod
    def create_widget(self) -> Widget:
        """Create a new widget instance owned by the caller."""

    def support_types(self) -> list[WidgetType]:
        """Size classes the plugin can provide."""
        return [WidgetType.SMALL, WidgetType.MIDDLE, WidgetType.LARGE]

    def type(self) -> PluginType:
        """Placement type of the plugin."""
        return PluginType.NORMAL