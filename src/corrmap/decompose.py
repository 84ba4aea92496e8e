"""
Covariance decomposition into coloring / whitening maps.

Given an m×m covariance matrix Σ, computes an m×n matrix C and an n×m
matrix D such that:

- for an n-vector z with uncorrelated unit-variance components, C @ z is
  an m-vector whose components are correlated according to Σ;
- for an m-vector x correlated according to Σ, D @ x is an n-vector with
  uncorrelated unit-variance components.

n ≤ m is the smallest number of principal components that keeps a fraction
λ ∈ (0, 1] of the total variance.

Eigendecomposition is delegated to corrmap.solver. This module is
orchestration: validate → eigendecompose → choose n → scale eigenvectors.
"""

import logging
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from corrmap.config import CONFIG
from corrmap.solver import EigenSolver, get_solver

logger = logging.getLogger(__name__)

SolverLike = Union[None, str, EigenSolver]


def decompose(
    covariance,
    m: int,
    retention: Optional[float] = None,
    solver: SolverLike = None,
) -> Tuple[np.ndarray, np.ndarray, int]:
    """
    Decompose a covariance matrix into a reduced coloring/whitening pair.

    Parameters
    ----------
    covariance : array-like
        m×m covariance matrix, either (m, m) or flattened row-major (m*m,).
    m : int
        Number of dimensions.
    retention : float, optional
        Fraction of variance to keep, in (0, 1].
        Defaults to CONFIG['decompose']['retention'].
    solver : str or EigenSolver, optional
        Backend name or solver instance. Defaults to the configured backend.

    Returns
    -------
    (forward, inverse, n)
        forward : (m, n) coloring map C
        inverse : (n, m) whitening map D
        n : int — number of retained components, 1 ≤ n ≤ m

    Raises
    ------
    ValueError
        m not positive, covariance size not m*m, retention outside (0, 1].
    SolverError
        Eigendecomposition failed. Propagated unchanged.
    """
    forward, inverse, n, _ = _decompose(covariance, m, retention, solver)
    return forward, inverse, n


def decompose_summary(
    covariance,
    m: int,
    retention: Optional[float] = None,
    solver: SolverLike = None,
) -> Dict[str, Any]:
    """
    Like decompose(), but also report the spectrum.

    Returns
    -------
    dict with:
        forward : np.ndarray — (m, n) coloring map
        inverse : np.ndarray — (n, m) whitening map
        n_components : int — n
        n_dimensions : int — m
        eigenvalues : np.ndarray — all m eigenvalues, descending
        explained_ratio : np.ndarray — fraction of total variance per eigenvalue
        retained_variance : float — fraction kept by the first n components
        retention : float — threshold used
    """
    if retention is None:
        retention = CONFIG['decompose']['retention']

    forward, inverse, n, eigenvalues = _decompose(covariance, m, retention, solver)
    explained = explained_variance(eigenvalues)

    return {
        'forward': forward,
        'inverse': inverse,
        'n_components': n,
        'n_dimensions': int(m),
        'eigenvalues': eigenvalues,
        'explained_ratio': explained,
        'retained_variance': float(np.sum(explained[:n])),
        'retention': float(retention),
    }


def effective_dimension(eigenvalues, retention: float) -> int:
    """
    Number of leading eigenvalues needed to reach `retention` of the total.

    Eigenvalues must be sorted descending. Falls back to len(eigenvalues)
    when no prefix reaches the threshold (zero total variance).
    """
    _check_retention(retention)
    eigenvalues = np.asarray(eigenvalues, dtype=np.float64)
    m = len(eigenvalues)
    if m == 0:
        raise ValueError("eigenvalues must not be empty")

    # Total is the last running sum, so the full prefix gives exactly 1.0
    cum = np.cumsum(eigenvalues)
    total = cum[-1]
    for i in range(m):
        # total == 0 gives NaN, which never compares true
        with np.errstate(divide='ignore', invalid='ignore'):
            ratio = cum[i] / total
        if ratio >= retention:
            return i + 1
    return m


def explained_variance(eigenvalues) -> np.ndarray:
    """Fraction of total variance per eigenvalue (NaN if the total is zero)."""
    eigenvalues = np.asarray(eigenvalues, dtype=np.float64)
    total = np.sum(eigenvalues)
    if total <= 0:
        return np.full(eigenvalues.shape, np.nan)
    return eigenvalues / total


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _decompose(covariance, m, retention, solver):
    if retention is None:
        retention = CONFIG['decompose']['retention']
    _check_retention(retention)
    matrix = _as_square(covariance, m)

    if solver is None or isinstance(solver, str):
        solver = get_solver(solver)

    U, lam = solver.decompose(matrix, CONFIG['solver']['tolerance'])
    U = np.asarray(U, dtype=np.float64)
    lam = np.asarray(lam, dtype=np.float64)

    n = effective_dimension(lam, retention)

    # Retained zero-variance directions cannot be whitened: inf/NaN in D
    with np.errstate(divide='ignore', invalid='ignore'):
        sigma = np.sqrt(lam[:n])
        forward = (U[:n] * sigma[:, None]).T
        inverse = U[:n] / sigma[:, None]

    if logger.isEnabledFor(logging.DEBUG):
        kept = float(np.nansum(explained_variance(lam)[:n]))
        logger.debug(
            "decompose: m=%d -> n=%d (retention=%.4g, kept=%.4g)",
            len(lam), n, retention, kept,
        )

    return np.ascontiguousarray(forward), inverse, n, lam


def _as_square(covariance, m) -> np.ndarray:
    """Reshape a flat or square covariance to (m, m), checking m."""
    if isinstance(m, bool) or not isinstance(m, (int, np.integer)) or m <= 0:
        raise ValueError(f"m must be a positive integer, got {m!r}")
    m = int(m)

    covariance = np.asarray(covariance, dtype=np.float64)
    if covariance.size != m * m:
        raise ValueError(
            f"covariance has {covariance.size} entries, expected m*m = {m * m}"
        )
    if covariance.ndim not in (1, 2):
        raise ValueError(f"covariance must be flat or 2-D, got {covariance.ndim}-D")
    if covariance.ndim == 2 and covariance.shape != (m, m):
        raise ValueError(f"covariance has shape {covariance.shape}, expected ({m}, {m})")

    return covariance.reshape(m, m)


def _check_retention(retention) -> None:
    if not (0.0 < retention <= 1.0):
        raise ValueError(f"retention must be in (0, 1], got {retention}")
