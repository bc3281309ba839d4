from __future__ import annotations
from typing import Sequence

from ..core.errors import MalformedDataset
from ..core.types import Sample


def lagrange_interp(x: float, samples: Sequence[Sample]) -> float:
    """
    Lagrange polynomial through `samples`, evaluated at x.

        L(x) = Σ_i y_i · Π_{j≠i} (x - x_j) / (x_i - x_j)

    Terms are accumulated in index order. n points reproduce any polynomial
    of degree <= n-1 exactly (up to rounding).
    """
    n = len(samples)
    if n < 2:
        raise MalformedDataset(f"need at least 2 samples, got {n}")

    xs = [float(s.x) for s in samples]
    if len(set(xs)) != n:
        raise MalformedDataset("sample x values are not pairwise distinct")

    x = float(x)
    acc = 0.0
    for i in range(n):
        xi = xs[i]
        term = float(samples[i].y)
        for j in range(n):
            if j != i:
                term *= (x - xs[j]) / (xi - xs[j])
        acc += term
    return acc
