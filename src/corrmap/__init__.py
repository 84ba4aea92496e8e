"""
corrmap: rank correlation conversion and covariance decomposition.

Converts Spearman's ρ and Kendall's τ into Pearson correlation, and splits a
covariance matrix Σ into a coloring map C (m×n) and a whitening map D (n×m),
keeping only the principal components needed to preserve a given fraction
of the variance.

    C, D, n = decompose(cov, m, 0.95)
    x = C @ z     # z uncorrelated  → x correlated per Σ
    z = D @ x     # x correlated    → z uncorrelated
"""

from corrmap.convert import (
    spearman_to_pearson,
    kendall_to_pearson,
    pearson_to_spearman,
    pearson_to_kendall,
)
from corrmap.solver import (
    EigenSolver,
    NumpySolver,
    ScipySolver,
    SolverError,
    available_solvers,
    get_solver,
)
from corrmap.decompose import (
    decompose,
    decompose_summary,
    effective_dimension,
    explained_variance,
)
from corrmap.transform import color, whiten, sample
from corrmap.flatten import flatten_summary, flatten_batch

__all__ = [
    'spearman_to_pearson',
    'kendall_to_pearson',
    'pearson_to_spearman',
    'pearson_to_kendall',
    'EigenSolver',
    'NumpySolver',
    'ScipySolver',
    'SolverError',
    'available_solvers',
    'get_solver',
    'decompose',
    'decompose_summary',
    'effective_dimension',
    'explained_variance',
    'color',
    'whiten',
    'sample',
    'flatten_summary',
    'flatten_batch',
]
