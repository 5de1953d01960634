"""Per-frame render state for every entity at one query time.

`FrameBuilder` turns a query time into a `Frame`: one `EntityState` per
entity, carrying the interpolated and scaled position and radius, the
unmapped color key, and the entity key. Frames are pure functions of the
dataset and the query time, so building the same time twice yields equal
frames.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Hashable, Iterator
from dataclasses import dataclass

from motionchart.config import ChartConfig
from motionchart.dataset import Dataset
from motionchart.errors import MissingDimensionError, MissingDimensionWarning
from motionchart.interpolation import interpolate
from motionchart.series import Series

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityState:
    """Render state of one entity in one frame.

    Attributes
    ----------
    key : str
        Entity identifier, stable across frames.
    x, y : float
        Position in render coordinates.
    radius : float
        Circle radius in render units.
    color_key : hashable
        Categorical value; renderers map it through a `CategoricalScale`.
    """

    key: str
    x: float
    y: float
    radius: float
    color_key: Hashable


@dataclass(frozen=True)
class Frame:
    """All entity states at one query time.

    Attributes
    ----------
    time : float
        Query time the frame was built for.
    states : tuple of EntityState
        One state per included entity.
    excluded : tuple of str
        Keys of entities left out because a required dimension is missing.
    """

    time: float
    states: tuple[EntityState, ...]
    excluded: tuple[str, ...] = ()

    def keys(self) -> tuple[str, ...]:
        """Entity keys in state order."""
        return tuple(s.key for s in self.states)

    def __iter__(self) -> Iterator[EntityState]:
        return iter(self.states)

    def __len__(self) -> int:
        return len(self.states)


@dataclass(frozen=True)
class _ResolvedEntity:
    key: str
    color_key: Hashable
    x: Series
    y: Series
    radius: Series


class FrameBuilder:
    """Build frames for arbitrary query times.

    Series lookups happen once, at construction. Entities lacking any of the
    x, y, or radius dimensions are excluded from every frame; each exclusion
    emits a `MissingDimensionWarning` and a log record, and the remaining
    entities are processed normally.

    Parameters
    ----------
    dataset : Dataset
        Validated dataset.
    config : ChartConfig, optional
        Scales and encoding. Defaults to ``ChartConfig(encoding=dataset.encoding)``.

    Examples
    --------
    >>> builder = FrameBuilder(dataset)  # doctest: +SKIP
    >>> frame = builder.build(2005.5)  # doctest: +SKIP
    >>> frame == builder.build(2005.5)  # doctest: +SKIP
    True
    """

    def __init__(self, dataset: Dataset, config: ChartConfig | None = None) -> None:
        self.dataset = dataset
        self.config = config if config is not None else ChartConfig(encoding=dataset.encoding)
        self.x_scale = self.config.x_scale()
        self.y_scale = self.config.y_scale()
        self.radius_scale = self.config.radius_scale()

        encoding = self.config.encoding
        resolved: list[_ResolvedEntity] = []
        excluded: list[str] = []
        for entity in dataset:
            try:
                resolved.append(
                    _ResolvedEntity(
                        key=entity.key,
                        color_key=entity.color_key,
                        x=dataset.store.lookup(entity.key, encoding.x),
                        y=dataset.store.lookup(entity.key, encoding.y),
                        radius=dataset.store.lookup(entity.key, encoding.radius),
                    )
                )
            except MissingDimensionError as err:
                excluded.append(entity.key)
                logger.warning("Excluding entity %r from frames: %s", entity.key, err)
                warnings.warn(
                    f"{err} The entity is excluded from every frame.",
                    MissingDimensionWarning,
                    stacklevel=2,
                )
        self._entities = tuple(resolved)
        self.excluded = tuple(excluded)

    @property
    def keys(self) -> tuple[str, ...]:
        """Keys of the entities that appear in frames, in dataset order."""
        return tuple(e.key for e in self._entities)

    def build(self, t: float) -> Frame:
        """Build the frame for query time ``t``.

        Parameters
        ----------
        t : float
            Query time. Times outside the data clamp to boundary samples.

        Returns
        -------
        Frame
            States in dataset order (apply `order_by_radius` for draw order).
        """
        t = float(t)
        states = tuple(
            EntityState(
                key=e.key,
                x=self.x_scale.map(interpolate(e.x, t)),
                y=self.y_scale.map(interpolate(e.y, t)),
                radius=self.radius_scale.map(interpolate(e.radius, t)),
                color_key=e.color_key,
            )
            for e in self._entities
        )
        return Frame(time=t, states=states, excluded=self.excluded)


__all__ = ["EntityState", "Frame", "FrameBuilder"]
