"""Helpers for paths, code pages, text and binary files, INI and JSON documents, byte buffers, timing and command arguments."""

__version__ = "0.1.0"