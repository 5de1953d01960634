"""Validated, immutable dataset of animated entities.

Input records are checked against a fixed schema at this boundary, and any
malformed record is rejected before it can reach the frame builder.

Record schema
-------------
Each record is a mapping with:

- ``encoding.key`` : str or int, the entity identifier (unique)
- ``encoding.color`` : hashable, the categorical color key
- one field per tracked dimension (``encoding.x``, ``encoding.y``,
  ``encoding.radius``) holding a list of ``[time, value]`` pairs in strictly
  increasing time order

Other fields are ignored. A missing dimension field is *not* a load error:
the entity is kept, and the frame builder later drops it with a warning.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Hashable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from motionchart.errors import DatasetValidationError, ErrorKind
from motionchart.series import Series, TimeSeriesStore, validate_samples

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DimensionEncoding:
    """Which record fields feed which visual channel.

    Defaults match the honey production dataset: one circle per US state,
    x = total production, y = price per lb, radius = number of colonies,
    color = state.

    Parameters
    ----------
    key : str
        Field holding the entity identifier.
    color : str
        Field holding the categorical color key. May equal ``key``.
    x, y, radius : str
        Fields holding the time series for each channel.

    Examples
    --------
    >>> enc = DimensionEncoding()
    >>> enc.dimensions
    ('totalprod', 'priceperlb', 'numcol')
    """

    key: str = "state"
    color: str = "state"
    x: str = "totalprod"
    y: str = "priceperlb"
    radius: str = "numcol"

    @property
    def dimensions(self) -> tuple[str, ...]:
        """Distinct time-series fields, in x, y, radius order."""
        return tuple(dict.fromkeys((self.x, self.y, self.radius)))


@dataclass(frozen=True)
class Entity:
    """One animated subject.

    Attributes
    ----------
    key : str
        Stable identifier, used for display and to match entities across
        frames.
    color_key : hashable
        Categorical value that selects the entity's color.
    series : mapping of str to Series
        One series per available dimension.
    """

    key: str
    color_key: Hashable
    series: Mapping[str, Series] = field(default_factory=dict)


class Dataset:
    """Immutable collection of entities plus their time-series store.

    Parameters
    ----------
    entities : iterable of Entity
        Entities in display order. Keys must be unique.
    encoding : DimensionEncoding, optional
        Field-to-channel mapping used when the entities were loaded.

    Raises
    ------
    DatasetValidationError
        ``[E2006]`` if two entities share a key.
    SeriesValidationError
        ``[E2001]``/``[E2002]`` if any series is empty or unsorted.

    Examples
    --------
    >>> records = [
    ...     {"state": "AL", "totalprod": [[1998, 1136000]],
    ...      "priceperlb": [[1998, 0.72]], "numcol": [[1998, 16000]]},
    ... ]
    >>> ds = Dataset.from_records(records)
    >>> ds.keys()
    ('AL',)
    """

    def __init__(
        self,
        entities: Iterable[Entity],
        encoding: DimensionEncoding | None = None,
    ) -> None:
        self.encoding = encoding if encoding is not None else DimensionEncoding()
        entity_list = tuple(entities)
        seen: set[str] = set()
        for entity in entity_list:
            if entity.key in seen:
                raise DatasetValidationError(
                    ErrorKind.DUPLICATE_ENTITY,
                    f"Entity key {entity.key!r} appears more than once. "
                    "Keys must be unique so entities can be matched across frames.",
                )
            seen.add(entity.key)
        self._entities = entity_list
        self._by_key = {e.key: e for e in entity_list}
        self.store = TimeSeriesStore({e.key: e.series for e in entity_list})

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        encoding: DimensionEncoding | None = None,
    ) -> Dataset:
        """Validate raw records and build a dataset.

        Parameters
        ----------
        records : iterable of mapping
            Records following the module-level schema.
        encoding : DimensionEncoding, optional
            Field mapping. Defaults to `DimensionEncoding()`.

        Returns
        -------
        Dataset

        Raises
        ------
        DatasetValidationError
            ``[E2005]`` for malformed records, ``[E2006]`` for duplicate keys.
        SeriesValidationError
            ``[E2001]``/``[E2002]`` for empty or unsorted series.
        """
        encoding = encoding if encoding is not None else DimensionEncoding()
        entities = [
            _entity_from_record(record, index, encoding)
            for index, record in enumerate(records)
        ]
        dataset = cls(entities, encoding=encoding)
        logger.debug(
            "Built dataset with %d entities over dimensions %s",
            len(dataset),
            encoding.dimensions,
        )
        return dataset

    @property
    def entities(self) -> tuple[Entity, ...]:
        """Entities in display order."""
        return self._entities

    def keys(self) -> tuple[str, ...]:
        """Entity keys in display order."""
        return tuple(e.key for e in self._entities)

    def color_keys(self) -> tuple[Hashable, ...]:
        """Color key of every entity, in display order (may repeat)."""
        return tuple(e.color_key for e in self._entities)

    def time_extent(self) -> tuple[float, float]:
        """Earliest and latest sample time across all series."""
        return self.store.time_extent()

    def __getitem__(self, key: str) -> Entity:
        return self._by_key[key]

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __repr__(self) -> str:
        return f"Dataset(n_entities={len(self)}, dimensions={self.encoding.dimensions})"


def _entity_from_record(
    record: Mapping[str, Any],
    index: int,
    encoding: DimensionEncoding,
) -> Entity:
    if not isinstance(record, Mapping):
        raise DatasetValidationError(
            ErrorKind.MALFORMED_RECORD,
            f"Record {index} must be a mapping, got {type(record).__name__}.",
        )

    raw_key = record.get(encoding.key)
    if isinstance(raw_key, bool) or not isinstance(raw_key, (str, numbers.Integral)):
        raise DatasetValidationError(
            ErrorKind.MALFORMED_RECORD,
            f"Record {index} must have a string or integer {encoding.key!r} field "
            f"(got {raw_key!r}).",
        )
    key = str(raw_key)

    if encoding.color not in record:
        raise DatasetValidationError(
            ErrorKind.MALFORMED_RECORD,
            f"Record {key!r} is missing the color field {encoding.color!r}.",
        )
    color_key = record[encoding.color]
    if not isinstance(color_key, Hashable):
        raise DatasetValidationError(
            ErrorKind.MALFORMED_RECORD,
            f"Record {key!r} has an unhashable color key {color_key!r}.",
        )

    series: dict[str, Series] = {}
    for dimension in encoding.dimensions:
        if dimension not in record or record[dimension] is None:
            continue
        series[dimension] = _series_from_pairs(record[dimension], key, dimension)

    return Entity(key=key, color_key=color_key, series=series)


def _series_from_pairs(raw: Any, entity: str, dimension: str) -> Series:
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        raise DatasetValidationError(
            ErrorKind.MALFORMED_RECORD,
            f"Field {dimension!r} of {entity!r} must be a list of [time, value] "
            f"pairs (got {type(raw).__name__}).",
        )
    times: list[float] = []
    values: list[float] = []
    for position, item in enumerate(raw):
        pair = (
            list(item)
            if isinstance(item, Iterable) and not isinstance(item, (str, bytes))
            else [item]
        )
        if len(pair) != 2 or not all(_is_real(v) for v in pair):
            raise DatasetValidationError(
                ErrorKind.MALFORMED_RECORD,
                f"Sample {position} of {entity!r}/{dimension!r} must be a "
                f"numeric [time, value] pair (got {item!r}).",
            )
        if not math.isfinite(pair[1]):
            raise DatasetValidationError(
                ErrorKind.MALFORMED_RECORD,
                f"Sample {position} of {entity!r}/{dimension!r} has a non-finite "
                f"value ({pair[1]!r}).",
            )
        times.append(float(pair[0]))
        values.append(float(pair[1]))

    validate_samples(times, entity=entity, dimension=dimension)
    return Series(times=times, values=values)


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


__all__ = ["Dataset", "DimensionEncoding", "Entity"]
