"""Interpolation of sparse time series at fractional query times.

A query time is resolved against a series by bisection:

- at or before the first sample, the first value is returned unchanged;
- after the last sample, the last value is returned unchanged;
- otherwise the two bracketing samples are blended linearly, the earlier
  sample weighted by ``1 - frac`` and the later one by ``frac``.

There is no extrapolation, so query times outside the series' span are never
errors.
"""

from __future__ import annotations

import math
import warnings

import numpy as np
from numpy.typing import ArrayLike, NDArray

from motionchart.errors import DegenerateSampleWarning, ErrorKind, format_error
from motionchart.series import Series


def bisect_left(times: NDArray[np.float64], t: float) -> int:
    """Leftmost insertion point of ``t`` in ascending ``times``.

    Returns ``i`` such that ``times[:i] < t <= times[i:]``.

    Examples
    --------
    >>> times = np.array([1998.0, 2000.0, 2012.0])
    >>> bisect_left(times, 1999.0), bisect_left(times, 2000.0)
    (1, 1)
    >>> bisect_left(times, 1990.0), bisect_left(times, 2020.0)
    (0, 3)
    """
    return int(np.searchsorted(times, t, side="left"))


def interpolate_arrays(
    times: ArrayLike,
    values: ArrayLike,
    t: float,
) -> float:
    """Interpolate raw sample arrays at time ``t`` without validating them.

    Parameters
    ----------
    times : array-like of float, shape (n_samples,)
        Ascending sample times. Not checked; use `interpolate` with a
        validated `Series` wherever possible.
    values : array-like of float, shape (n_samples,)
        Sample values.
    t : float
        Query time. Must be finite.

    Returns
    -------
    float
        Interpolated (or boundary-clamped) value.

    Raises
    ------
    ValueError
        If ``t`` is not finite or the arrays are empty.

    Warns
    -----
    DegenerateSampleWarning
        ``[E2004]`` if the bracketing samples share the same time. The later
        sample's value is returned. Left bisection over ascending times
        never brackets equal times, so this only guards the invariant.

    Examples
    --------
    >>> interpolate_arrays([1998, 2000, 2012], [100000, 200000, 500000], 1999)
    150000.0
    >>> interpolate_arrays([1998, 2000, 2012], [100000, 200000, 500000], 1990)
    100000.0
    """
    if not math.isfinite(t):
        raise ValueError(f"Query time must be finite (got {t}).")

    times_arr = np.asarray(times, dtype=np.float64)
    values_arr = np.asarray(values, dtype=np.float64)
    n = len(times_arr)
    if n == 0:
        raise ValueError("Cannot interpolate an empty series.")

    i = bisect_left(times_arr, t)
    if i == 0:
        return float(values_arr[0])
    if i == n:
        return float(values_arr[-1])
    if times_arr[i] == t:
        return float(values_arr[i])

    a_time, a_value = float(times_arr[i - 1]), float(values_arr[i - 1])
    b_time, b_value = float(times_arr[i]), float(values_arr[i])

    if b_time == a_time:
        warnings.warn(
            format_error(
                ErrorKind.DEGENERATE_SAMPLE,
                f"Adjacent samples {i - 1} and {i} share time {b_time}; "
                "using the later sample's value.",
            ),
            DegenerateSampleWarning,
            stacklevel=2,
        )
        return b_value

    frac = (t - a_time) / (b_time - a_time)
    blended = a_value * (1.0 - frac) + b_value * frac
    # Rounding may stray an ulp outside the bracketing values
    lo, hi = min(a_value, b_value), max(a_value, b_value)
    return min(max(blended, lo), hi)


def interpolate(series: Series, t: float) -> float:
    """Value of ``series`` at query time ``t``.

    Parameters
    ----------
    series : Series
        Validated series (non-empty, strictly increasing).
    t : float
        Query time. Values outside the series' span clamp to the nearest
        boundary sample.

    Returns
    -------
    float

    Examples
    --------
    >>> s = Series.from_pairs([(1998, 100000), (2000, 200000), (2012, 500000)])
    >>> interpolate(s, 1999)
    150000.0
    >>> interpolate(s, 2012)
    500000.0
    >>> interpolate(s, 2050)
    500000.0

    See Also
    --------
    interpolate_arrays : Same algorithm on unvalidated arrays.
    """
    return interpolate_arrays(series.times, series.values, t)


__all__ = ["bisect_left", "interpolate", "interpolate_arrays"]
