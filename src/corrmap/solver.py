"""
Eigensolver backends for covariance matrices.

A solver takes a symmetric (m, m) covariance matrix and a tolerance and
returns its eigen-pairs sorted by descending eigenvalue:

    eigenvectors : (m, m) — row i is the i-th eigenvector
    eigenvalues  : (m,)   — non-negative, descending

The math delegates to LAPACK through numpy or scipy. This module only
checks the input, sorts, and enforces positive semi-definiteness.

Usage:
    from corrmap.solver import get_solver
    U, lam = get_solver('numpy').decompose(cov, tolerance=1e-8)
"""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np
import scipy.linalg

from corrmap.config import CONFIG

logger = logging.getLogger(__name__)


class SolverError(RuntimeError):
    """The eigendecomposition could not be computed."""


class EigenSolver:
    """
    Base eigensolver. Subclasses implement _eigh() with a raw LAPACK call
    returning (eigenvalues, column eigenvectors) in any order.
    """

    name = 'base'

    def decompose(
        self,
        matrix: np.ndarray,
        tolerance: Optional[float] = None,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Eigendecompose a covariance matrix.

        Parameters
        ----------
        matrix : np.ndarray
            (m, m) symmetric positive semi-definite matrix.
        tolerance : float, optional
            Negative eigenvalues down to -tolerance are treated as zero.
            Defaults to CONFIG['solver']['tolerance'].

        Returns
        -------
        (eigenvectors, eigenvalues)
            eigenvectors is (m, m) with one eigenvector per row,
            eigenvalues is (m,), both sorted by descending eigenvalue.

        Raises
        ------
        SolverError
            Non-square, non-finite, non-symmetric or indefinite input,
            or a failed LAPACK call.
        """
        if tolerance is None:
            tolerance = CONFIG['solver']['tolerance']

        matrix = _check_matrix(matrix)

        try:
            eigenvalues, eigenvectors = self._eigh(matrix)
        except (np.linalg.LinAlgError, ValueError) as exc:
            raise SolverError(f"{self.name} eigensolver failed: {exc}") from exc

        eigenvalues = np.real(eigenvalues)
        eigenvectors = np.real(eigenvectors)

        negative = eigenvalues < 0
        if np.any(eigenvalues < -tolerance):
            raise SolverError(
                f"matrix is not positive semi-definite: "
                f"min eigenvalue {eigenvalues.min():.3e} < -{tolerance:.3e}"
            )
        if np.any(negative):
            logger.debug("clamping %d negative eigenvalue(s) to zero", int(negative.sum()))
            eigenvalues = np.where(negative, 0.0, eigenvalues)

        # Sort descending, stable so ties keep LAPACK order
        idx = np.argsort(-eigenvalues, kind='stable')
        return eigenvectors[:, idx].T.copy(), eigenvalues[idx]

    def _eigh(self, matrix: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        raise NotImplementedError


class NumpySolver(EigenSolver):
    """numpy.linalg.eigh backend."""

    name = 'numpy'

    def _eigh(self, matrix):
        return np.linalg.eigh(matrix)


class ScipySolver(EigenSolver):
    """scipy.linalg.eigh backend."""

    name = 'scipy'

    def _eigh(self, matrix):
        return scipy.linalg.eigh(matrix, check_finite=False)


def _check_matrix(matrix) -> np.ndarray:
    """Validate shape, finiteness and symmetry."""
    matrix = np.asarray(matrix, dtype=np.float64)

    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise SolverError(f"expected a square matrix, got shape {matrix.shape}")
    if matrix.shape[0] == 0:
        raise SolverError("matrix is empty")
    if not np.all(np.isfinite(matrix)):
        raise SolverError("matrix contains NaN or Inf")

    cfg = CONFIG['solver']
    if not np.allclose(matrix, matrix.T, rtol=cfg['symmetry_rtol'], atol=cfg['symmetry_atol']):
        raise SolverError("matrix is not symmetric")

    return matrix


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_SOLVERS: Dict[str, EigenSolver] = {
    NumpySolver.name: NumpySolver(),
    ScipySolver.name: ScipySolver(),
}


def available_solvers() -> List[str]:
    """Names of the registered backends."""
    return list(_SOLVERS.keys())


def get_solver(name: Optional[str] = None) -> EigenSolver:
    """
    Get a solver backend by name.
    None selects CONFIG['solver']['backend'].
    """
    if name is None:
        name = CONFIG['solver']['backend']
    if name not in _SOLVERS:
        raise KeyError(f"Unknown solver: {name}. Available: {available_solvers()}")
    return _SOLVERS[name]
