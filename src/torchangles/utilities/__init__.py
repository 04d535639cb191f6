"""Utility functions for torchangles."""

from torchangles.utilities._cache import get_cached, set_cached
from torchangles.utilities._indices import as_index_tensor, check_points

__all__ = [
    "get_cached",
    "set_cached",
    "as_index_tensor",
    "check_points",
]
