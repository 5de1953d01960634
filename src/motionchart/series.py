"""Sparse time series and the per-entity store that holds them.

A `Series` is an ascending sequence of ``(time, value)`` samples for one
dimension of one entity. Series are validated on construction: they must be
non-empty, strictly increasing in time, and finite in value. Out-of-order or
duplicate timestamps are rejected rather than silently repaired.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from motionchart.errors import ErrorKind, MissingDimensionError, SeriesValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Series:
    """Ascending ``(time, value)`` samples for one dimension.

    Parameters
    ----------
    times : array-like of float, shape (n_samples,)
        Sample times. Must be finite and strictly increasing.
    values : array-like of float, shape (n_samples,)
        Sample values, one per time. Must be finite.

    Raises
    ------
    SeriesValidationError
        ``[E2001]`` if the series is empty, ``[E2002]`` if the times are not
        finite and strictly increasing, ``[E2005]`` if a value is not finite.

    Notes
    -----
    The arrays are copied and marked read-only, so a Series can be shared
    freely between frames.

    Examples
    --------
    >>> s = Series.from_pairs([(1998, 1e5), (2000, 2e5), (2012, 5e5)])
    >>> len(s)
    3
    >>> s.first_time, s.last_time
    (1998.0, 2012.0)
    """

    times: NDArray[np.float64]
    values: NDArray[np.float64]

    def __post_init__(self) -> None:
        times = np.array(self.times, dtype=np.float64).reshape(-1)
        values = np.array(self.values, dtype=np.float64).reshape(-1)
        if len(times) != len(values):
            raise ValueError(
                f"times ({len(times)}) and values ({len(values)}) must have "
                "the same length."
            )
        validate_samples(times)
        validate_values(values)
        times.flags.writeable = False
        values.flags.writeable = False
        object.__setattr__(self, "times", times)
        object.__setattr__(self, "values", values)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[float]]) -> Series:
        """Build a series from ``[time, value]`` pairs.

        Parameters
        ----------
        pairs : iterable of (time, value)
            Samples in ascending time order.

        Returns
        -------
        Series
        """
        arr = np.asarray(list(pairs), dtype=np.float64)
        if arr.size == 0:
            arr = arr.reshape(0, 2)
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(
                f"pairs must have shape (n_samples, 2), got {arr.shape}."
            )
        return cls(times=arr[:, 0], values=arr[:, 1])

    def __len__(self) -> int:
        return len(self.times)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Series):
            return NotImplemented
        return bool(
            np.array_equal(self.times, other.times)
            and np.array_equal(self.values, other.values)
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def first_time(self) -> float:
        """Time of the earliest sample."""
        return float(self.times[0])

    @property
    def last_time(self) -> float:
        """Time of the latest sample."""
        return float(self.times[-1])

    def pairs(self) -> list[tuple[float, float]]:
        """Return the samples as a list of ``(time, value)`` tuples."""
        return [(float(t), float(v)) for t, v in zip(self.times, self.values)]


def validate_samples(
    times: ArrayLike,
    entity: str | None = None,
    dimension: str | None = None,
) -> None:
    """Check that sample times are non-empty, finite, and strictly increasing.

    Parameters
    ----------
    times : array-like of float
        Sample times to check.
    entity, dimension : str, optional
        Included in the error message when given.

    Raises
    ------
    SeriesValidationError
        ``[E2001]`` for an empty series, ``[E2002]`` for non-finite or
        non-increasing times.
    """
    arr = np.asarray(times, dtype=np.float64)
    if arr.size == 0:
        raise SeriesValidationError(
            ErrorKind.EMPTY_SERIES,
            "Series must contain at least one sample.",
            entity=entity,
            dimension=dimension,
        )
    if not np.all(np.isfinite(arr)):
        raise SeriesValidationError(
            ErrorKind.UNSORTED_SERIES,
            "Series times must be finite numeric values.",
            entity=entity,
            dimension=dimension,
        )
    if arr.size > 1:
        diffs = np.diff(arr)
        if not np.all(diffs > 0):
            n_bad = int(np.sum(diffs <= 0))
            first_bad = int(np.argmax(diffs <= 0))
            raise SeriesValidationError(
                ErrorKind.UNSORTED_SERIES,
                "Series times must be strictly increasing. "
                f"Found {n_bad} non-increasing interval(s), first at index "
                f"{first_bad} ({arr[first_bad]} -> {arr[first_bad + 1]}).",
                entity=entity,
                dimension=dimension,
            )


def validate_values(
    values: ArrayLike,
    entity: str | None = None,
    dimension: str | None = None,
) -> None:
    """Check that sample values are finite.

    Raises
    ------
    SeriesValidationError
        ``[E2005]`` naming the first non-finite value.
    """
    arr = np.asarray(values, dtype=np.float64)
    bad = ~np.isfinite(arr)
    if bad.any():
        first_bad = int(np.argmax(bad))
        raise SeriesValidationError(
            ErrorKind.MALFORMED_RECORD,
            f"Series values must be finite. Found {int(bad.sum())} non-finite "
            f"value(s), first at index {first_bad} ({arr[first_bad]}).",
            entity=entity,
            dimension=dimension,
        )


class TimeSeriesStore:
    """Read-only store of one `Series` per ``(entity, dimension)``.

    Parameters
    ----------
    series : mapping of str to mapping of str to Series
        ``series[entity_key][dimension]``. Every series is validated again on
        construction; any violation fails the whole load.

    Examples
    --------
    >>> store = TimeSeriesStore({"AL": {"numcol": Series.from_pairs([(1998, 16000)])}})
    >>> store.lookup("AL", "numcol").first_time
    1998.0
    >>> store.lookup("AL", "priceperlb")  # doctest: +SKIP
    Traceback (most recent call last):
        ...
    MissingDimensionError: [E2003] Entity 'AL' has no series for dimension 'priceperlb'.
    """

    def __init__(self, series: Mapping[str, Mapping[str, Series]]) -> None:
        self._series: dict[str, dict[str, Series]] = {}
        for entity, by_dimension in series.items():
            for dimension, s in by_dimension.items():
                validate_samples(s.times, entity=entity, dimension=dimension)
                validate_values(s.values, entity=entity, dimension=dimension)
            self._series[entity] = dict(by_dimension)
        logger.debug(
            "Loaded time series store with %d entities and %d series",
            len(self._series),
            sum(len(d) for d in self._series.values()),
        )

    def lookup(self, entity: str, dimension: str) -> Series:
        """Return the series for ``entity`` and ``dimension``.

        Raises
        ------
        MissingDimensionError
            ``[E2003]`` if the entity or dimension is unknown.
        """
        try:
            return self._series[entity][dimension]
        except KeyError:
            raise MissingDimensionError(entity, dimension) from None

    def dimensions(self, entity: str) -> tuple[str, ...]:
        """Dimensions available for ``entity`` (empty if unknown)."""
        return tuple(self._series.get(entity, {}))

    def entities(self) -> tuple[str, ...]:
        """Entity keys held by the store."""
        return tuple(self._series)

    def time_extent(self) -> tuple[float, float]:
        """Earliest and latest sample time over every series.

        Raises
        ------
        ValueError
            If the store holds no series.
        """
        firsts = [s.first_time for d in self._series.values() for s in d.values()]
        lasts = [s.last_time for d in self._series.values() for s in d.values()]
        if not firsts:
            raise ValueError("Cannot compute the time extent of an empty store.")
        return min(firsts), max(lasts)

    def __len__(self) -> int:
        return len(self._series)


__all__ = ["Series", "TimeSeriesStore", "validate_samples", "validate_values"]
