"""Per-facet geometry: edge lengths and interior angles."""

from torchangles.geometry._edge_lengths import edge_lengths, squared_edge_lengths
from torchangles.geometry._internal_angles import (
    internal_angles,
    internal_angles_using_edge_lengths,
    internal_angles_using_squared_edge_lengths,
    polygon_corner_angles,
)

__all__ = [
    "edge_lengths",
    "squared_edge_lengths",
    "internal_angles",
    "internal_angles_using_edge_lengths",
    "internal_angles_using_squared_edge_lengths",
    "polygon_corner_angles",
]
