"""
Flatten decomposition summaries to scalar rows.

decompose_summary() returns arrays (eigenvalues, explained_ratio) and the
two maps. This module reduces a summary to a dict of scalars, suitable for
a table row or a log record. The maps themselves are not included.
"""

from typing import Any, Dict, List

import numpy as np


def flatten_summary(
    summary: Dict[str, Any],
    max_components: int = 5,
) -> Dict[str, float]:
    """
    Flatten a decompose_summary() dict to scalar key-value pairs.

    Parameters
    ----------
    summary : dict
        Output from decompose_summary().
    max_components : int
        Number of eigenvalues / ratios to include.

    Returns
    -------
    dict of {str: int or float}
    """
    row = {}

    for key in ['n_components', 'n_dimensions']:
        val = summary.get(key)
        if val is not None:
            row[key] = int(val)

    for key in ['retention', 'retained_variance']:
        val = summary.get(key)
        if val is not None:
            row[key] = float(val)

    eigenvalues = summary.get('eigenvalues')
    if eigenvalues is not None:
        for i in range(min(max_components, len(eigenvalues))):
            row[f'eigenvalue_{i}'] = float(eigenvalues[i])

    explained = summary.get('explained_ratio')
    if explained is not None:
        explained = np.asarray(explained, dtype=np.float64)
        # NaN ratios (zero total variance) count as 0 in the running total
        cumulative = np.nancumsum(explained)
        for i, (ratio, cum) in enumerate(zip(explained[:max_components], cumulative)):
            row[f'explained_ratio_{i}'] = float(ratio)
            row[f'cumulative_variance_{i}'] = float(cum)

    return row


def flatten_batch(
    summaries: List[Dict[str, Any]],
    max_components: int = 5,
) -> List[Dict[str, float]]:
    """Flatten a list of decomposition summaries."""
    return [flatten_summary(s, max_components) for s in summaries]
