"""Per-facet edge lengths for simplicial connectivity tables.

Edge ordering follows the opposite-vertex convention: for triangles, column d
holds the edge opposite corner d.
"""

import torch

from torchangles.utilities import as_index_tensor, check_points

# Local vertex pairs for each edge, keyed by vertices per face
_EDGE_VERTEX_PAIRS: dict[int, list[list[int]]] = {
    2: [[0, 1]],
    3: [[1, 2], [2, 0], [0, 1]],
    4: [[3, 0], [3, 1], [3, 2], [1, 2], [2, 0], [0, 1]],
}


def squared_edge_lengths(
    points: torch.Tensor,  # shape: (n_points, n_spatial_dims)
    faces: torch.Tensor,  # shape: (n_faces, n_vertices_per_face)
) -> torch.Tensor:
    """Compute squared edge lengths of every edge of every simplex.

    Supported connectivity:
    - Edges (2 columns): shape (n_faces, 1)
    - Triangles (3 columns): shape (n_faces, 3), where column d is the squared
      length of the edge opposite corner d, i.e. ``L_sq[i, 0] = ||V[F[i,1]] - V[F[i,2]]||^2``
      and cyclically for d = 1, 2.
    - Tetrahedra (4 columns): shape (n_faces, 6), ordered by the local edges
      [3,0], [3,1], [3,2], [1,2], [2,0], [0,1].

    The result does not depend on winding direction: reversing a triangle
    permutes its columns but not its values.

    Args:
        points: Vertex positions
        faces: Connectivity table

    Returns:
        Squared edge lengths with the dtype and device of `points`.

    Raises:
        ValueError: If `faces` has an unsupported number of columns.
    """
    check_points(points)
    faces = as_index_tensor(faces)

    n_vertices_per_face = faces.shape[1]
    if n_vertices_per_face not in _EDGE_VERTEX_PAIRS:
        raise ValueError(
            f"Squared edge lengths are defined for edges, triangles and tetrahedra "
            f"(2, 3 or 4 vertices per face), but got {n_vertices_per_face=}."
        )

    pairs = torch.tensor(
        _EDGE_VERTEX_PAIRS[n_vertices_per_face],
        dtype=torch.int64,
        device=faces.device,
    )

    ### Gather both endpoints of every edge
    # Shape: (n_faces, n_edges_per_face, n_spatial_dims)
    edge_vectors = points[faces[:, pairs[:, 0]]] - points[faces[:, pairs[:, 1]]]

    return (edge_vectors * edge_vectors).sum(dim=-1)


def edge_lengths(
    points: torch.Tensor,  # shape: (n_points, n_spatial_dims)
    faces: torch.Tensor,  # shape: (n_faces, n_vertices_per_face)
) -> torch.Tensor:
    """Edge lengths in the same layout as `squared_edge_lengths`."""
    return torch.sqrt(squared_edge_lengths(points, faces))
