"""
Apply coloring / whitening maps from decompose().

Single vectors and row-wise batches are both accepted:

    color(C, z)   z : (n,) or (k, n)  →  (m,) or (k, m)
    whiten(D, x)  x : (m,) or (k, m)  →  (n,) or (k, n)
"""

from typing import Optional, Union

import numpy as np


def color(forward: np.ndarray, z) -> np.ndarray:
    """Map uncorrelated unit-variance components to correlated space."""
    forward = np.asarray(forward, dtype=np.float64)
    return _apply(forward, z)


def whiten(inverse: np.ndarray, x) -> np.ndarray:
    """Map correlated vectors to uncorrelated unit-variance components."""
    inverse = np.asarray(inverse, dtype=np.float64)
    return _apply(inverse, x)


def sample(
    forward: np.ndarray,
    size: int,
    random_state: Optional[Union[int, np.random.Generator]] = None,
) -> np.ndarray:
    """
    Draw correlated samples by coloring standard normal noise.

    Parameters
    ----------
    forward : np.ndarray
        (m, n) coloring map from decompose().
    size : int
        Number of samples.
    random_state : int or np.random.Generator, optional
        Seed or generator.

    Returns
    -------
    np.ndarray
        (size, m) samples with covariance ≈ forward @ forward.T.
    """
    forward = np.asarray(forward, dtype=np.float64)
    if forward.ndim != 2:
        raise ValueError(f"forward map must be 2-D, got shape {forward.shape}")

    rng = np.random.default_rng(random_state)
    z = rng.standard_normal((size, forward.shape[1]))
    return color(forward, z)


def _apply(matrix: np.ndarray, vectors) -> np.ndarray:
    if matrix.ndim != 2:
        raise ValueError(f"map must be 2-D, got shape {matrix.shape}")

    vectors = np.asarray(vectors, dtype=np.float64)
    if vectors.ndim not in (1, 2) or vectors.shape[-1] != matrix.shape[1]:
        raise ValueError(
            f"cannot apply map of shape {matrix.shape} to input of shape {vectors.shape}"
        )

    if vectors.ndim == 1:
        return matrix @ vectors
    return vectors @ matrix.T
