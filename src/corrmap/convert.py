"""
Rank correlation → Pearson correlation conversions.

Closed-form relations that hold for bivariate normal variables:

    r = 2·sin(π·ρ/6)     Spearman's ρ
    r = sin(π·τ/2)       Kendall's τ

All functions are element-wise and shape-preserving. Inputs outside [-1, 1]
are not rejected: the forward formulas still evaluate (the result is just not
a meaningful correlation), the inverse formulas give NaN.
"""

import numpy as np


def spearman_to_pearson(rho) -> np.ndarray:
    """
    Convert Spearman's rank correlation coefficients to Pearson.

    Parameters
    ----------
    rho : float, sequence or np.ndarray
        Spearman coefficients, any shape.

    Returns
    -------
    np.ndarray
        Pearson coefficients, same shape and order as the input.
    """
    rho = np.asarray(rho, dtype=np.float64)
    return 2.0 * np.sin(np.pi * rho / 6.0)


def kendall_to_pearson(tau) -> np.ndarray:
    """
    Convert Kendall's τ rank correlation coefficients to Pearson.

    Parameters
    ----------
    tau : float, sequence or np.ndarray
        Kendall coefficients, any shape.

    Returns
    -------
    np.ndarray
        Pearson coefficients, same shape and order as the input.
    """
    tau = np.asarray(tau, dtype=np.float64)
    return np.sin(np.pi * tau / 2.0)


def pearson_to_spearman(r) -> np.ndarray:
    """Inverse of spearman_to_pearson: ρ = (6/π)·arcsin(r/2)."""
    r = np.asarray(r, dtype=np.float64)
    with np.errstate(invalid='ignore'):
        return 6.0 / np.pi * np.arcsin(r / 2.0)


def pearson_to_kendall(r) -> np.ndarray:
    """Inverse of kendall_to_pearson: τ = (2/π)·arcsin(r)."""
    r = np.asarray(r, dtype=np.float64)
    with np.errstate(invalid='ignore'):
        return 2.0 / np.pi * np.arcsin(r)
