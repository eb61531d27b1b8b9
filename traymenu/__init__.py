"""Render system tray (StatusNotifierItem) menus as line-oriented text."""

__version__ = "0.3.0"
