"""
Spline Interpolation - Dense lookup tables from sparse calibration points

Fits a natural cubic spline (second derivative zero at both ends) through an
ordered point sequence and writes the curve at every integer x into a
caller-provided array.

A repeated x value is a hard boundary: the points on each side are fitted as
separate regions, so a pair such as (1023, 6000), (1024, 4600) between two
boundaries becomes a vertical jump instead of being smoothed over.
"""

from typing import List, Sequence, Tuple

import numpy as np
from scipy.interpolate import CubicSpline

from .calibration import CalibrationError, validate_points


def split_runs(points: Sequence[Tuple[int, float]]) -> List[Tuple[np.ndarray, np.ndarray]]:
    """
    Split points into regions of strictly increasing x.

    A new region starts wherever a point repeats the previous x. Consecutive
    regions therefore share their boundary x value.

    Args:
        points: Sequence of (x, y) sorted by non-decreasing x

    Returns:
        List of (x, y) float64 array pairs, one per region
    """
    runs = []
    current = [points[0]]
    for point in points[1:]:
        if point[0] == current[-1][0]:
            runs.append(current)
            current = [point]
        else:
            current.append(point)
    runs.append(current)

    return [
        (np.array([p[0] for p in run], dtype=np.float64),
         np.array([p[1] for p in run], dtype=np.float64))
        for run in runs
    ]


def _evaluate_run(x: np.ndarray, y: np.ndarray, xs: np.ndarray) -> np.ndarray:
    """Evaluate one region's natural cubic spline at xs."""
    if len(x) == 1:
        return np.full(len(xs), y[0])
    if len(x) == 2:
        # Natural spline through two points is the straight line
        return np.interp(xs, x, y)
    return CubicSpline(x, y, bc_type='natural')(xs)


def interpolate(points: Sequence[Tuple[int, float]], out: np.ndarray,
                scale: float = 1.0, x_min: int = 0) -> np.ndarray:
    """
    Write the spline through points at every integer x into out.

    out[i] holds the curve at x = x_min + i, multiplied by scale. Integer
    output arrays receive values rounded to nearest; float arrays receive
    them unrounded.

    Each region owns [first x, last x) except the final one, which also owns
    its last x, so every index is written exactly once.

    Args:
        points: Sequence of (x, y) sorted by non-decreasing x, covering
            exactly [x_min, x_min + len(out) - 1]
        out: Dense output array
        scale: Factor applied to y before quantization
        x_min: x value mapped to out[0]

    Returns:
        out, for chaining

    Raises:
        CalibrationError: If the points cannot cover the output domain or
            the fitted curve is not finite
    """
    x_max = x_min + len(out) - 1
    validate_points(points, x_min, x_max)

    runs = split_runs(points)
    if not all(np.all(np.isfinite(y)) for _, y in runs):
        raise CalibrationError("Calibration points contain non-finite values")

    values = np.empty(len(out), dtype=np.float64)

    for index, (x, y) in enumerate(runs):
        first = int(x[0])
        last = int(x[-1])
        if index == len(runs) - 1:
            last += 1
        if last <= first:
            continue
        xs = np.arange(first, last, dtype=np.float64)
        values[first - x_min:last - x_min] = _evaluate_run(x, y, xs)

    values *= scale
    if not np.all(np.isfinite(values)):
        raise CalibrationError("Spline produced non-finite values")

    if np.issubdtype(out.dtype, np.integer):
        out[:] = np.rint(values).astype(out.dtype)
    else:
        out[:] = values
    return out
