import torch
from tensordict import TensorDict, tensorclass

from torchangles.geometry import (
    internal_angles,
    internal_angles_using_squared_edge_lengths,
    squared_edge_lengths,
)
from torchangles.utilities import get_cached, set_cached


@tensorclass
class Mesh:
    points: torch.Tensor  # shape: (n_points, n_spatial_dimensions)
    faces: torch.Tensor  # shape: (n_faces, n_vertices_per_face)
    face_data: TensorDict = None  # accepts dict/None, converted to TensorDict in __post_init__  # ty: ignore

    def __post_init__(self):
        ### Validate shapes
        if self.points.ndim != 2:
            raise ValueError(
                f"`points` must have shape (n_points, n_spatial_dimensions), but got {self.points.shape=}."
            )
        if self.faces.ndim != 2:
            raise ValueError(
                f"`faces` must have shape (n_faces, n_vertices_per_face), but got {self.faces.shape=}."
            )
        if self.n_face_vertices < 3:
            raise ValueError(
                f"Facets must have at least 3 vertices, but got {self.n_face_vertices=}."
            )

        ### Validate dtypes
        if not torch.is_floating_point(self.points):
            raise TypeError(
                f"`points` must have a floating dtype, but got {self.points.dtype=}."
            )
        if torch.is_floating_point(self.faces):
            raise TypeError(
                f"`faces` must have an int-like dtype, but got {self.faces.dtype=}."
            )

        ### Initialize data TensorDict
        if self.face_data is None:
            self.face_data = {}

        if not isinstance(self.face_data, TensorDict):
            self.face_data = TensorDict(
                dict(self.face_data),
                batch_size=torch.Size([self.n_faces]),
                device=self.points.device,
            )

    @property
    def n_spatial_dims(self) -> int:
        return self.points.shape[-1]

    @property
    def n_face_vertices(self) -> int:
        return self.faces.shape[-1]

    @property
    def n_points(self) -> int:
        return self.points.shape[0]

    @property
    def n_faces(self) -> int:
        return self.faces.shape[0]

    @property
    def face_squared_edge_lengths(self) -> torch.Tensor:
        """Squared edge lengths of every triangle, column d opposite corner d.

        Only defined for triangle meshes. The result is cached in face_data.

        Returns:
            Tensor of shape (n_faces, 3).
        """
        if self.n_face_vertices != 3:
            raise ValueError(
                f"Squared edge lengths are only cached for triangle meshes, but got {self.n_face_vertices=}."
            )
        cached = get_cached(self.face_data, "squared_edge_lengths")
        if cached is None:
            cached = squared_edge_lengths(self.points, self.faces)
            set_cached(self.face_data, "squared_edge_lengths", cached)
        return cached

    @property
    def face_internal_angles(self) -> torch.Tensor:
        """Interior angle at every corner of every facet, in radians.

        Triangle meshes reuse the cached squared edge lengths. The result is
        cached in face_data.

        Returns:
            Tensor of shape (n_faces, n_vertices_per_face).
        """
        cached = get_cached(self.face_data, "internal_angles")
        if cached is None:
            if self.n_face_vertices == 3:
                cached = internal_angles_using_squared_edge_lengths(
                    self.face_squared_edge_lengths
                )
            else:
                cached = internal_angles(self.points, self.faces)
            set_cached(self.face_data, "internal_angles", cached)
        return cached
