"""Scale mappers between data domains and render ranges.

Three mapping laws are provided:

- `LinearScale` : affine map, invertible, optionally clamped. Used for the
  x/y position axes and for mapping pointer positions back to time.
- `SqrtScale` : square-root map used for circle radii, so that rendered
  *area* (not radius) is linear in the data value.
- `CategoricalScale` : deterministic, collision-free assignment of
  categorical keys to palette colors.

All scales are frozen dataclasses; they carry no mutable state after
construction. Numeric scales accept scalars (returning ``float``) or
array-likes (returning ``ndarray``).
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import overload

import matplotlib
import numpy as np
from matplotlib.colors import hsv_to_rgb, to_rgba
from numpy.typing import ArrayLike, NDArray

from motionchart.errors import InvalidScaleError

RGBA = tuple[float, float, float, float]

DEFAULT_PALETTE = "tab10"


def _validate_interval(name: str, interval: Sequence[float]) -> tuple[float, float]:
    """Check that ``interval`` is a finite 2-tuple with distinct endpoints."""
    if len(interval) != 2:
        raise InvalidScaleError(
            f"{name} must have exactly two endpoints (got {len(interval)})."
        )
    lo, hi = float(interval[0]), float(interval[1])
    if not (np.isfinite(lo) and np.isfinite(hi)):
        raise InvalidScaleError(f"{name} endpoints must be finite (got {interval}).")
    return lo, hi


@dataclass(frozen=True)
class LinearScale:
    """Affine mapping from ``domain`` to ``range``.

    Parameters
    ----------
    domain : tuple of float
        Input interval ``(d0, d1)``. Endpoints must differ.
    range : tuple of float
        Output interval ``(r0, r1)``. May be reversed (e.g. screen y axes).
    clamp : bool, default=False
        If True, `map` results are forced into ``range`` and `invert`
        results into ``domain``.

    Examples
    --------
    >>> scale = LinearScale(domain=(1998, 2012), range=(0.0, 1.0), clamp=True)
    >>> scale.map(2005)
    0.5
    >>> scale.invert(-0.2)
    1998.0
    >>> scale.invert(1.5)
    2012.0
    """

    domain: tuple[float, float]
    range: tuple[float, float]
    clamp: bool = False

    def __post_init__(self) -> None:
        domain = _validate_interval("domain", self.domain)
        range_ = _validate_interval("range", self.range)
        if domain[0] == domain[1]:
            raise InvalidScaleError(
                f"Linear scale domain must have distinct endpoints (got {self.domain})."
            )
        if range_[0] == range_[1]:
            raise InvalidScaleError(
                f"Linear scale range must have distinct endpoints (got {self.range}); "
                "a zero-width range cannot be inverted."
            )
        object.__setattr__(self, "domain", domain)
        object.__setattr__(self, "range", range_)

    @overload
    def map(self, value: float) -> float: ...
    @overload
    def map(self, value: NDArray[np.float64]) -> NDArray[np.float64]: ...

    def map(self, value):
        """Map domain value(s) to render coordinate(s)."""
        return _affine(value, self.domain, self.range, self.clamp)

    @overload
    def invert(self, coordinate: float) -> float: ...
    @overload
    def invert(self, coordinate: NDArray[np.float64]) -> NDArray[np.float64]: ...

    def invert(self, coordinate):
        """Map render coordinate(s) back to domain value(s).

        With ``clamp=True`` the result always lies within ``domain``; a
        coordinate at (or beyond) a range endpoint maps exactly to the
        corresponding domain endpoint.
        """
        return _affine(coordinate, self.range, self.domain, self.clamp)


def _affine(
    value: ArrayLike,
    source: tuple[float, float],
    target: tuple[float, float],
    clamp: bool,
) -> float | NDArray[np.float64]:
    arr = np.asarray(value, dtype=np.float64)
    s0, s1 = source
    t0, t1 = target
    frac = (arr - s0) / (s1 - s0)
    if clamp:
        frac = np.clip(frac, 0.0, 1.0)
    result = t0 + (t1 - t0) * frac
    # Endpoints map exactly onto the target bounds, free of rounding error
    result = np.where(frac == 0.0, t0, np.where(frac == 1.0, t1, result))
    if result.ndim == 0:
        return float(result)
    return result


@dataclass(frozen=True)
class SqrtScale:
    """Square-root mapping used for circle radii.

    ``r0 + (r1 - r0) * sqrt((value - d0) / (d1 - d0))``

    Values below ``d0`` map to ``r0`` rather than producing NaN. There is no
    inverse.

    Parameters
    ----------
    domain : tuple of float
        Input interval ``(d0, d1)``. Endpoints must differ.
    range : tuple of float
        Output interval ``(r0, r1)``.

    Examples
    --------
    >>> radius = SqrtScale(domain=(0, 100000), range=(0, 10))
    >>> radius.map(25000)
    5.0
    """

    domain: tuple[float, float]
    range: tuple[float, float]

    def __post_init__(self) -> None:
        domain = _validate_interval("domain", self.domain)
        range_ = _validate_interval("range", self.range)
        if domain[0] == domain[1]:
            raise InvalidScaleError(
                f"Sqrt scale domain must have distinct endpoints (got {self.domain})."
            )
        object.__setattr__(self, "domain", domain)
        object.__setattr__(self, "range", range_)

    @overload
    def map(self, value: float) -> float: ...
    @overload
    def map(self, value: NDArray[np.float64]) -> NDArray[np.float64]: ...

    def map(self, value):
        """Map domain value(s) to radius/radii."""
        arr = np.asarray(value, dtype=np.float64)
        d0, d1 = self.domain
        r0, r1 = self.range
        frac = np.maximum((arr - d0) / (d1 - d0), 0.0)
        result = r0 + (r1 - r0) * np.sqrt(frac)
        if result.ndim == 0:
            return float(result)
        return result


@dataclass(frozen=True)
class CategoricalScale:
    """Collision-free assignment of categorical keys to colors.

    Keys are assigned palette colors in first-seen order, so the mapping is
    fully determined by the key sequence given at construction. When there
    are more distinct keys than palette entries, colors are instead spread
    evenly around the hue circle so that no two keys share a color.

    Use `CategoricalScale.from_keys` rather than the raw constructor.

    Attributes
    ----------
    keys : tuple
        Distinct keys in assignment order.
    colors : tuple of RGBA
        Color assigned to each key (same order as ``keys``).

    Examples
    --------
    >>> scale = CategoricalScale.from_keys(["AL", "AZ", "AL", "CA"])
    >>> scale.keys
    ('AL', 'AZ', 'CA')
    >>> scale.map("AZ") == scale.colors[1]
    True
    """

    keys: tuple[Hashable, ...]
    colors: tuple[RGBA, ...]
    _index: dict[Hashable, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.keys) != len(self.colors):
            raise InvalidScaleError(
                f"Got {len(self.keys)} keys but {len(self.colors)} colors."
            )
        index = {key: i for i, key in enumerate(self.keys)}
        if len(index) != len(self.keys):
            raise InvalidScaleError("Categorical scale keys must be distinct.")
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_keys(
        cls,
        keys: Iterable[Hashable],
        palette: str | Sequence[str | RGBA] | None = None,
    ) -> CategoricalScale:
        """Build a scale assigning colors to ``keys`` in first-seen order.

        Parameters
        ----------
        keys : iterable of hashable
            Keys to assign. Duplicates are ignored after their first
            occurrence.
        palette : str or sequence of colors, optional
            Name of a matplotlib qualitative colormap or an explicit list of
            matplotlib color specs. Defaults to ``"tab10"`` (the d3
            category10 colors).

        Returns
        -------
        CategoricalScale
        """
        distinct = tuple(dict.fromkeys(keys))
        base = _resolve_palette(palette)
        if len(distinct) <= len(base):
            colors = tuple(base[: len(distinct)])
        else:
            colors = _hue_circle(len(distinct))
        return cls(keys=distinct, colors=colors)

    def map(self, key: Hashable) -> RGBA:
        """Return the color assigned to ``key``.

        Raises
        ------
        KeyError
            If ``key`` was not part of the scale's domain.
        """
        try:
            return self.colors[self._index[key]]
        except KeyError:
            raise KeyError(
                f"Key {key!r} is not in the categorical scale domain."
            ) from None

    def __len__(self) -> int:
        return len(self.keys)


def _resolve_palette(palette: str | Sequence[str | RGBA] | None) -> list[RGBA]:
    if palette is None:
        palette = DEFAULT_PALETTE
    if isinstance(palette, str):
        cmap = matplotlib.colormaps[palette]
        colors = getattr(cmap, "colors", None)
        if colors is None:
            raise InvalidScaleError(
                f"Colormap {palette!r} is not a listed (qualitative) colormap."
            )
        return [to_rgba(c) for c in colors]
    return [to_rgba(c) for c in palette]


def _hue_circle(n: int) -> tuple[RGBA, ...]:
    hues = np.arange(n, dtype=np.float64) / n
    hsv = np.column_stack([hues, np.full(n, 0.65), np.full(n, 0.9)])
    rgb = hsv_to_rgb(hsv)
    return tuple((float(r), float(g), float(b), 1.0) for r, g, b in rgb)


__all__ = [
    "DEFAULT_PALETTE",
    "RGBA",
    "CategoricalScale",
    "LinearScale",
    "SqrtScale",
]
