import torch


def as_index_tensor(faces: torch.Tensor) -> torch.Tensor:
    """Return `faces` as an int64 connectivity table usable for gather-indexing.

    torch treats uint8 and bool tensors as masks when used as indices, so every
    integer dtype is widened to int64 first.

    Args:
        faces: Connectivity table, shape (n_faces, n_vertices_per_face)

    Returns:
        The same table with dtype torch.int64 (no copy if already int64).
    """
    if faces.ndim != 2:
        raise ValueError(
            f"`faces` must have shape (n_faces, n_vertices_per_face), but got {faces.shape=}."
        )
    if torch.is_floating_point(faces) or torch.is_complex(faces) or faces.dtype == torch.bool:
        raise TypeError(f"`faces` must have an int-like dtype, but got {faces.dtype=}.")
    if faces.dtype != torch.int64:
        faces = faces.to(torch.int64)
    return faces


def check_points(points: torch.Tensor) -> None:
    """Validate a vertex position table of shape (n_points, n_spatial_dims)."""
    if points.ndim != 2:
        raise ValueError(
            f"`points` must have shape (n_points, n_spatial_dimensions), but got {points.shape=}."
        )
    if not torch.is_floating_point(points):
        raise TypeError(f"`points` must have a floating dtype, but got {points.dtype=}.")
