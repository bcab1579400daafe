"""Kconfig expression algebra, gettext template writing and curses dialog widgets."""

__version__ = "1.0.0"