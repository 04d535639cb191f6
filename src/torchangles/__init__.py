from torchangles.mesh import Mesh
from torchangles.geometry import (
    edge_lengths,
    squared_edge_lengths,
    internal_angles,
    internal_angles_using_edge_lengths,
    internal_angles_using_squared_edge_lengths,
    polygon_corner_angles,
)
from torchangles.parallel import (
    parallel_for,
    parallel_for_chunks,
    get_num_threads,
    set_num_threads,
)
