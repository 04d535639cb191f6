"""Interior (corner) angles of triangle and polygon facets.

Two paths are provided:
- Triangles use the law of cosines on squared edge lengths.
- General polygons use the stable form atan2(||u x v||, u . v) on unit edge
  vectors, which stays well-conditioned near 0 and π where acos does not.

Both paths sweep over facets in row-aligned chunks through `parallel_for_chunks`;
each chunk writes only its own rows of the output, and the result is the same
bit for bit for every grain size and thread count.
"""

import warnings
from typing import Callable

import torch

from torchangles.geometry._edge_lengths import squared_edge_lengths
from torchangles.parallel import DEFAULT_GRAIN_SIZE, parallel_for_chunks
from torchangles.utilities import as_index_tensor, check_points


# Chunk starts are rounded to this many rows, so each value lands on the same
# SIMD-or-scalar path of torch's transcendental kernels whatever the grain size.
_ROW_ALIGNMENT = 64

# Chunks stay below torch's intra-op grain (32768 values), so torch never
# re-splits a chunk across its own threads at unaligned offsets.
_MAX_CHUNK_VALUES = 16384


def _aligned_grain_size(grain_size: int, values_per_row: int) -> int:
    """Round `grain_size` up to a multiple of _ROW_ALIGNMENT rows, capped so a
    chunk holds at most _MAX_CHUNK_VALUES values (but never fewer than one
    alignment block)."""
    max_rows = max(
        _ROW_ALIGNMENT,
        _MAX_CHUNK_VALUES // values_per_row // _ROW_ALIGNMENT * _ROW_ALIGNMENT,
    )
    rows = -(-grain_size // _ROW_ALIGNMENT) * _ROW_ALIGNMENT
    return min(rows, max_rows)


def _sweep(
    n: int,
    func: Callable[[int, int], None],
    grain_size: int,
    device: torch.device,
    values_per_row: int,
) -> None:
    """Run `func` over [0, n) in aligned chunks, threading only for CPU tensors."""
    if grain_size < 1:
        raise ValueError(f"`grain_size` must be >= 1, but got {grain_size=}.")

    if device.type != "cpu":
        if n > 0:
            func(0, n)
        return
    parallel_for_chunks(
        n, func, grain_size=_aligned_grain_size(grain_size, values_per_row)
    )


def _check_triangle_lengths(lengths: torch.Tensor, name: str) -> None:
    if lengths.ndim != 2 or lengths.shape[1] != 3:
        raise ValueError(
            f"`{name}` must have shape (n_faces, 3) (edge lengths come from triangles), "
            f"but got {lengths.shape=}."
        )
    if not torch.is_floating_point(lengths):
        raise TypeError(f"`{name}` must have a floating dtype, but got {lengths.dtype=}.")


def internal_angles_using_squared_edge_lengths(
    squared_lengths: torch.Tensor,  # shape: (n_faces, 3)
    grain_size: int = DEFAULT_GRAIN_SIZE,
) -> torch.Tensor:
    """Compute triangle corner angles from squared edge lengths.

    Column d of `squared_lengths` is the squared length of the edge opposite
    corner d (see `squared_edge_lengths`). With s1 = L_sq[:, d],
    s2 = L_sq[:, (d+1) % 3] and s3 = L_sq[:, (d+2) % 3]:

        K[:, d] = acos((s3 + s2 - s1) / (2 * sqrt(s3 * s2)))

    The acos argument is clamped to [-1, 1] so rounding drift on flat
    triangles cannot produce NaN. Triangles with a zero-length edge still
    yield NaN at the corners where 0/0 occurs.

    Args:
        squared_lengths: Squared edge lengths per triangle
        grain_size: Minimum number of triangles per parallel chunk

    Returns:
        Angles in radians, shape (n_faces, 3), same dtype and device as the input.
    """
    _check_triangle_lengths(squared_lengths, "squared_lengths")

    angles = torch.empty_like(squared_lengths)

    def kernel(start: int, stop: int) -> None:
        l_sq = squared_lengths[start:stop]
        for d in range(3):
            s1 = l_sq[:, d]
            s2 = l_sq[:, (d + 1) % 3]
            s3 = l_sq[:, (d + 2) % 3]
            cosine = (s3 + s2 - s1) / (2.0 * torch.sqrt(s3 * s2))
            angles[start:stop, d] = torch.acos(cosine.clamp(min=-1.0, max=1.0))

    _sweep(squared_lengths.shape[0], kernel, grain_size, squared_lengths.device, 3)
    return angles


def internal_angles_using_edge_lengths(
    lengths: torch.Tensor,  # shape: (n_faces, 3)
    grain_size: int = DEFAULT_GRAIN_SIZE,
) -> torch.Tensor:
    """Compute triangle corner angles from (unsquared) edge lengths.

    Deprecated: squaring lengths that were just square-rooted loses precision.
    Use `internal_angles_using_squared_edge_lengths` instead.
    """
    warnings.warn(
        "`internal_angles_using_edge_lengths` is deprecated and will be removed in a "
        "future release; use `internal_angles_using_squared_edge_lengths` instead.",
        DeprecationWarning,
        stacklevel=2,
    )
    _check_triangle_lengths(lengths, "lengths")

    angles = torch.empty_like(lengths)

    def kernel(start: int, stop: int) -> None:
        lens = lengths[start:stop]
        for d in range(3):
            s1 = lens[:, d]
            s2 = lens[:, (d + 1) % 3]
            s3 = lens[:, (d + 2) % 3]
            cosine = (s3 * s3 + s2 * s2 - s1 * s1) / (2.0 * s3 * s2)
            angles[start:stop, d] = torch.acos(cosine.clamp(min=-1.0, max=1.0))

    _sweep(lengths.shape[0], kernel, grain_size, lengths.device, 3)
    return angles


def polygon_corner_angles(
    points: torch.Tensor,  # shape: (n_points, 3)
    faces: torch.Tensor,  # shape: (n_faces, n_vertices_per_face)
    grain_size: int = DEFAULT_GRAIN_SIZE,
) -> torch.Tensor:
    """Compute corner angles of n-gon facets directly from vertex positions.

    For corner j of facet i, with x = V[F[i, j-1]], y = V[F[i, j]] and
    z = V[F[i, j+1]] (indices modulo n):

        u = (x - y) / ||x - y||,  v = (z - y) / ||z - y||
        K[i, j] = atan2(||u x v||, u . v)

    Works for any n >= 3, triangles included. Facets need not be planar; each
    corner is measured in the plane of its two incident edges. A zero-length
    incident edge yields NaN at that corner.

    Args:
        points: Vertex positions (must be 3D)
        faces: Facet connectivity in consistent winding
        grain_size: Minimum number of facets per parallel chunk

    Returns:
        Angles in radians in [0, π], shape (n_faces, n_vertices_per_face).
    """
    check_points(points)
    faces = as_index_tensor(faces)

    if faces.shape[1] < 3:
        raise ValueError(
            f"Facets must have at least 3 vertices, but got {faces.shape[1]=}."
        )
    if points.shape[1] != 3:
        raise ValueError(
            f"Corner angles from positions require 3D points, but got {points.shape[1]=}."
        )

    ### Neighbor tables: column j holds F[:, j-1] and F[:, j+1] respectively
    prev_faces = torch.roll(faces, shifts=1, dims=1)
    next_faces = torch.roll(faces, shifts=-1, dims=1)

    angles = torch.empty(faces.shape, dtype=points.dtype, device=points.device)

    def kernel(start: int, stop: int) -> None:
        # Shape: (chunk, n_vertices_per_face, 3)
        corner = points[faces[start:stop]]
        u = points[prev_faces[start:stop]] - corner
        v = points[next_faces[start:stop]] - corner

        u = u / torch.linalg.vector_norm(u, dim=-1, keepdim=True)
        v = v / torch.linalg.vector_norm(v, dim=-1, keepdim=True)

        sine = torch.linalg.vector_norm(torch.linalg.cross(u, v, dim=-1), dim=-1)
        cosine = (u * v).sum(dim=-1)
        angles[start:stop] = torch.atan2(sine, cosine)

    _sweep(faces.shape[0], kernel, grain_size, points.device, 3 * faces.shape[1])
    return angles


def internal_angles(
    points: torch.Tensor,  # shape: (n_points, n_spatial_dims)
    faces: torch.Tensor,  # shape: (n_faces, n_vertices_per_face)
    grain_size: int = DEFAULT_GRAIN_SIZE,
) -> torch.Tensor:
    """Compute the interior angle at every corner of every facet.

    Triangle tables (3 columns) go through squared edge lengths and the law of
    cosines, and accept 2D or 3D points. Any other facet size goes through
    `polygon_corner_angles`, which requires 3D points.

    Args:
        points: Vertex positions
        faces: Facet connectivity in consistent winding, at least 3 columns
        grain_size: Minimum number of facets per parallel chunk

    Returns:
        Angles in radians with the shape of `faces`; K[i, j] is the angle at
        the j-th corner of facet i.

    Example:
        >>> points = torch.tensor([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
        >>> faces = torch.tensor([[0, 1, 2]])
        >>> angles = internal_angles(points, faces)  # ≈ [[π/2, π/4, π/4]]
    """
    check_points(points)
    faces = as_index_tensor(faces)

    n_vertices_per_face = faces.shape[1]
    if n_vertices_per_face < 3:
        raise ValueError(
            f"Facets must have at least 3 vertices, but got {n_vertices_per_face=}."
        )

    if n_vertices_per_face == 3:
        return internal_angles_using_squared_edge_lengths(
            squared_edge_lengths(points, faces),
            grain_size=grain_size,
        )

    if points.shape[1] != 3:
        raise ValueError(
            f"Non-triangle facets require 3D points, but got {points.shape[1]=} "
            f"with {n_vertices_per_face=}."
        )
    return polygon_corner_angles(points, faces, grain_size=grain_size)
