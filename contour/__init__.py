"""Contour - input classification and embedded-tool engine for the chat composer."""

__version__ = "1.0.0"
