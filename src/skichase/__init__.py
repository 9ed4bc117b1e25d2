"""Ski Chase - a downhill skiing game with a hungry rhino."""

__version__ = "0.1.0"
