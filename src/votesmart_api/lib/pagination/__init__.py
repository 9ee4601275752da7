"""Windowed pagination over insertion-ordered tables."""

from votesmart_api.lib.pagination.window import window_range

__all__ = ["window_range"]
