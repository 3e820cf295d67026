"""
NetTrust Mathematical Utilities
================================

Numerical primitives used by the detection pipeline: per-feature z-score
standardisation, softmax normalisation, and a bounded running mean.

Every function is backed by NumPy and accepts plain Python sequences.

References:
    [1] Bishop, C. M. (2006). Pattern Recognition and Machine Learning.
        Springer. Section 4.3.4: Multiclass logistic regression (softmax).
    [2] Pedregosa, F. et al. (2011). Scikit-learn: Machine Learning in
        Python. JMLR 12, 2825-2830. (StandardScaler semantics)
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray


FloatArray = NDArray[np.floating]


# ======================== Standardisation ==================================


def zscore_standardize(
    values: Sequence[float],
    mean: Sequence[float],
    scale: Sequence[float],
) -> list[float]:
    """Standardise *values* elementwise with a fitted mean and scale.

    .. math::

        z_i = \\frac{x_i - \\mu_i}{\\sigma_i}

    Features whose scale is exactly zero (constant during fitting) are
    only centred: ``z_i = x_i - mu_i``.

    Reference:
        Pedregosa et al. (2011), ``StandardScaler.transform``.

    Args:
        values: Raw feature vector.
        mean:   Per-feature mean, same length as *values*.
        scale:  Per-feature scale (standard deviation), same length.

    Returns:
        Standardised vector as a list of floats.

    Raises:
        ValueError: If the three sequences differ in length.
    """
    x = np.asarray(values, dtype=np.float64)
    mu = np.asarray(mean, dtype=np.float64)
    sigma = np.asarray(scale, dtype=np.float64)

    if not (x.shape == mu.shape == sigma.shape):
        raise ValueError(
            f"Length mismatch: values={x.size}, mean={mu.size}, scale={sigma.size}"
        )

    centred = x - mu
    safe_sigma = np.where(sigma != 0.0, sigma, 1.0)
    return np.where(sigma != 0.0, centred / safe_sigma, centred).tolist()


# ======================== Softmax ==========================================


def softmax(scores: Sequence[float]) -> FloatArray:
    """Convert raw scores into a probability distribution.

    .. math::

        p_i = \\frac{e^{s_i}}{\\sum_j e^{s_j}}

    The maximum score is subtracted before exponentiation for numerical
    stability; the result is mathematically identical.

    Reference:
        Bishop (2006), Eq. 4.104.

    Args:
        scores: Raw (unnormalised) scores.

    Returns:
        Array of probabilities summing to 1.  Empty input yields an
        empty array.
    """
    s = np.asarray(scores, dtype=np.float64)
    if s.size == 0:
        return s
    exp = np.exp(s - np.max(s))
    return exp / np.sum(exp)


# ======================== Running statistics ===============================


def mean_of(values: Sequence[float]) -> float:
    """Arithmetic mean of *values*, ``0.0`` for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=np.float64)))
