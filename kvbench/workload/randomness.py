"""Random key/value material for workloads."""

from typing import Optional

import numpy as np


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a random generator.

    Args:
        seed: Seed for reproducible workloads; None draws fresh OS entropy

    Returns:
        numpy Generator
    """
    return np.random.default_rng(seed)


def random_bytes(rng: np.random.Generator, length: int) -> bytes:
    """Draw ``length`` independent, uniformly distributed bytes."""
    if length == 0:
        return b""
    return rng.bytes(length)
