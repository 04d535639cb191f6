import logging
import math

import torch

from torchangles import Mesh, internal_angles, set_num_threads

logging.basicConfig(level=logging.DEBUG)

# Right isosceles triangle: angles π/2, π/4, π/4
points = torch.tensor([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
faces = torch.tensor([[0, 1, 2]])
print(internal_angles(points, faces) / math.pi)

# Regular hexagon: every corner is 2π/3
theta = torch.arange(6) * (2 * math.pi / 6)
hexagon = Mesh(
    points=torch.stack([torch.cos(theta), torch.sin(theta), torch.zeros(6)], dim=1),
    faces=torch.arange(6).unsqueeze(0),
)
print(hexagon.face_internal_angles / math.pi)

# Large random triangle soup, swept on 4 threads. Repeated indices give NaN.
set_num_threads(4)
points = torch.randn(10_000, 3, dtype=torch.float64)
faces = torch.randint(0, 10_000, (100_000, 3))
errors = (internal_angles(points, faces).sum(dim=1) - math.pi).abs()
print(f"max |sum - π| = {errors[~errors.isnan()].max().item():.2e}")
