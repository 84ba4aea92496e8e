"""
corrmap Configuration
=====================
Numerical tolerances and defaults for decomposition.
Single source of truth, read at call time so callers may override entries.

Usage:
    from corrmap.config import CONFIG
    tol = CONFIG['solver']['tolerance']
"""

import numpy as np

CONFIG = {

    # =================================================================
    # Eigensolver
    # =================================================================
    'solver': {
        'backend': 'numpy',
        # sqrt(machine epsilon): eigenvalues in [-tol, 0) are clamped to 0,
        # anything below -tol means the matrix is not PSD
        'tolerance': float(np.sqrt(np.finfo(np.float64).eps)),
        'symmetry_rtol': 1e-10,
        'symmetry_atol': 1e-12,
    },

    # =================================================================
    # Dimension reduction
    # =================================================================
    'decompose': {
        'retention': 1.0,
    },
}
