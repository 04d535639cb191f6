"""Cache utilities for TensorDict-based data storage.

Derived quantities (edge lengths, corner angles) are stored in a nested
TensorDict under the "_cache" key so they travel with the mesh data.
"""

import torch
from tensordict import TensorDict

CACHE_KEY = "_cache"


def get_cached(data: TensorDict, key: str) -> torch.Tensor | None:
    """Get a cached value from a TensorDict.

    Args:
        data: TensorDict containing potentially cached data
        key: Name of the cached value (without the "_cache" prefix)

    Returns:
        The cached tensor if present, otherwise None.
    """
    return data.get((CACHE_KEY, key), None)


def set_cached(data: TensorDict, key: str, value: torch.Tensor) -> None:
    """Set a cached value in a TensorDict.

    Creates the "_cache" sub-TensorDict if it doesn't exist, then stores the
    value under ("_cache", key).

    Args:
        data: TensorDict to store the cached value in
        key: Name of the cached value (without the "_cache" prefix)
        value: Tensor to cache; its leading dimension must match data.batch_size
    """
    if CACHE_KEY not in data:
        data[CACHE_KEY] = TensorDict({}, batch_size=data.batch_size, device=data.device)
    data[(CACHE_KEY, key)] = value
