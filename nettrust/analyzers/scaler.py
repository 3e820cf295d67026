"""
NetTrust Standardizer
======================

Per-feature z-score normalisation with parameters fitted offline
(``StandardScaler`` mean and scale). Features with zero scale are only
centred.
"""

from __future__ import annotations

from typing import Sequence

from shared.math_utils import zscore_standardize


class Standardizer:
    """Applies a fitted mean/scale pair to raw feature vectors.

    Args:
        mean:  Per-feature mean.
        scale: Per-feature scale; must have the same length as *mean*.

    Raises:
        ValueError: If *mean* and *scale* differ in length.
    """

    def __init__(self, mean: Sequence[float], scale: Sequence[float]) -> None:
        if len(mean) != len(scale):
            raise ValueError(
                f"Scaler parameter mismatch: mean={len(mean)}, scale={len(scale)}"
            )
        self._mean = tuple(float(m) for m in mean)
        self._scale = tuple(float(s) for s in scale)

    def __len__(self) -> int:
        return len(self._mean)

    def standardize(self, vector: Sequence[float]) -> list[float]:
        """Return ``(x - mean) / scale`` elementwise.

        Raises:
            ValueError: If *vector* does not match the fitted length.
        """
        return zscore_standardize(vector, self._mean, self._scale)
