"""Dimension reconciliation — force a vector to the store's length."""

from __future__ import annotations

from collections.abc import Sequence


def reconcile_dimension(vector: Sequence[float], target: int) -> list[float]:
    """Truncate or right-pad *vector* with zeros to exactly *target* items.

    Zero-padding keeps the original components but adds no information; a
    padded 768-d vector is an approximation of a native 1536-d embedding.
    """
    if target < 0:
        raise ValueError(f"target dimension must be >= 0, got {target}")
    values = [float(v) for v in vector[:target]]
    if len(values) < target:
        values.extend([0.0] * (target - len(values)))
    return values
