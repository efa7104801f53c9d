"""Desktop widget framework: plugin and widget interfaces, a manager for
plugins and instances, per-instance JSON settings, and memory monitor and
example widgets."""

__version__ = "0.1.0"