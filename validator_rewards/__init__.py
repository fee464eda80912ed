"""Flare validator reward data, normalized, classified and cached."""

__version__ = "1.0.0"
