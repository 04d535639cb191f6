"""Pytest configuration and shared fixtures for torchangles tests.

All fixtures defined here are automatically available to all test files
without explicit imports.
"""

import pytest
import torch

from torchangles.parallel import set_num_threads


### Pytest Hooks ###


def pytest_collection_modifyitems(config, items):
    """Skip tests marked with 'cuda' if CUDA is not available."""
    if torch.cuda.is_available():
        return  # CUDA available, run all tests

    skip_cuda = pytest.mark.skip(reason="CUDA not available")
    for item in items:
        if "cuda" in item.keywords:
            item.add_marker(skip_cuda)


### Pytest Fixtures ###


@pytest.fixture(
    params=[
        "cpu",
        pytest.param("cuda", marks=pytest.mark.cuda),
    ]
)
def device(request):
    """Parametrize tests over all available devices (CPU, CUDA).

    CUDA tests are automatically skipped if CUDA is not available via
    the pytest_collection_modifyitems hook.
    """
    return request.param


@pytest.fixture(params=[torch.float32, torch.float64])
def dtype(request):
    """Parametrize over supported floating-point precisions."""
    return request.param


@pytest.fixture(autouse=True)
def reset_num_threads():
    """Clear any thread-count override a test installs."""
    yield
    set_num_threads(None)


@pytest.fixture
def random_triangle_mesh():
    """Random, non-degenerate triangle soup in 3D (float64)."""
    generator = torch.Generator().manual_seed(0)
    n_points, n_faces = 300, 2000
    points = torch.randn(n_points, 3, dtype=torch.float64, generator=generator)
    faces = torch.stack(
        [torch.randperm(n_points, generator=generator)[:3] for _ in range(n_faces)]
    )
    return points, faces
