"""Readers and writers for cell ranges, content types, document properties and drawing shapes of an xlsx package."""

__version__ = "0.1.0"