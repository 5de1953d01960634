"""Loading datasets from JSON payloads and long-form tables.

Two input shapes are supported:

- **Records JSON**: a list of entity records, each holding one array of
  ``[time, value]`` pairs per dimension. This is the payload the bubble
  chart's data endpoint serves.
- **Long-form tables**: one row per (entity, time), with one column per
  dimension. The honey production CSV has this shape (``state``, ``year``,
  ``totalprod``, ``priceperlb``, ``numcol``, ...). `records_from_dataframe`
  converts it into records.

Both routes end in `Dataset.from_records`, so the same schema validation
applies.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import IO, Any

import numpy as np
import pandas as pd

from motionchart.dataset import Dataset, DimensionEncoding
from motionchart.errors import DatasetValidationError, ErrorKind

logger = logging.getLogger(__name__)


def read_json(
    source: str | Path | IO[str],
    encoding: DimensionEncoding | None = None,
) -> Dataset:
    """Load a dataset from a records JSON file or file object.

    Parameters
    ----------
    source : str, Path, or text file object
        JSON document whose top level is a list of records.
    encoding : DimensionEncoding, optional
        Field mapping. Defaults to `DimensionEncoding()`.

    Returns
    -------
    Dataset

    Raises
    ------
    DatasetValidationError
        ``[E2005]`` if the top level is not a list, or any record is
        malformed.

    Examples
    --------
    >>> ds = read_json("honey.json")  # doctest: +SKIP
    """
    if isinstance(source, (str, Path)):
        with open(source, encoding="utf-8") as f:
            payload = json.load(f)
    else:
        payload = json.load(source)

    if not isinstance(payload, list):
        raise DatasetValidationError(
            ErrorKind.MALFORMED_RECORD,
            f"Expected a JSON list of records, got {type(payload).__name__}.",
        )
    logger.debug("Read %d records from JSON", len(payload))
    return Dataset.from_records(payload, encoding=encoding)


def records_from_dataframe(
    df: pd.DataFrame,
    encoding: DimensionEncoding | None = None,
    time_column: str = "year",
) -> list[dict[str, Any]]:
    """Convert a long-form table into entity records.

    Rows are grouped by ``encoding.key``, sorted by ``time_column``, and each
    dimension column becomes a list of ``[time, value]`` pairs. Rows with a
    missing (NaN) value are dropped for that dimension only. A dimension with
    no values at all for an entity is left out of that entity's record.

    Parameters
    ----------
    df : pandas.DataFrame
        Long-form data with one row per entity and time.
    encoding : DimensionEncoding, optional
        Field mapping. Defaults to `DimensionEncoding()`.
    time_column : str, default="year"
        Column holding the sample time.

    Returns
    -------
    list of dict
        Records ready for `Dataset.from_records`.

    Raises
    ------
    DatasetValidationError
        ``[E2005]`` if required columns are absent, a key is missing, a
        time or dimension column holds non-numeric values, or the color key
        varies within one entity.

    Examples
    --------
    >>> df = pd.DataFrame({
    ...     "state": ["AL", "AL", "AZ"],
    ...     "year": [1999, 1998, 1998],
    ...     "totalprod": [1.0e6, 1.1e6, 3.3e6],
    ...     "priceperlb": [0.7, 0.72, 0.64],
    ...     "numcol": [16000.0, 16000.0, 55000.0],
    ... })
    >>> records = records_from_dataframe(df)
    >>> records[0]["totalprod"]
    [[1998.0, 1100000.0], [1999.0, 1000000.0]]
    """
    encoding = encoding if encoding is not None else DimensionEncoding()
    required = {encoding.key, encoding.color, time_column}
    missing = sorted(required - set(df.columns))
    if missing:
        raise DatasetValidationError(
            ErrorKind.MALFORMED_RECORD,
            f"Table is missing required column(s): {missing}.",
        )

    missing_keys = df[encoding.key].isna()
    if missing_keys.any():
        raise DatasetValidationError(
            ErrorKind.MALFORMED_RECORD,
            f"Column {encoding.key!r} has {int(missing_keys.sum())} missing "
            f"key(s), first at row {df.index[missing_keys.to_numpy()][0]!r}.",
        )

    dimensions = [d for d in encoding.dimensions if d in df.columns]
    for column in (time_column, *dimensions):
        _check_numeric(df, column)

    records: list[dict[str, Any]] = []
    for key, group in df.groupby(encoding.key, sort=False, dropna=False):
        group = group.sort_values(time_column, kind="stable")
        colors = group[encoding.color].unique()
        if len(colors) != 1:
            raise DatasetValidationError(
                ErrorKind.MALFORMED_RECORD,
                f"Entity {key!r} has {len(colors)} different values in the "
                f"color column {encoding.color!r}; expected exactly one.",
            )
        record: dict[str, Any] = {encoding.key: key, encoding.color: colors[0]}
        times = group[time_column].to_numpy(dtype=np.float64)
        for dimension in dimensions:
            values = group[dimension].to_numpy(dtype=np.float64)
            keep = ~np.isnan(values)
            if not keep.any():
                continue
            record[dimension] = np.column_stack([times[keep], values[keep]]).tolist()
        records.append(_to_builtin(record))
    return records


def read_csv(
    path: str | Path,
    encoding: DimensionEncoding | None = None,
    time_column: str = "year",
    dimensions: Sequence[str] | None = None,
) -> Dataset:
    """Load a dataset from a long-form CSV file.

    Parameters
    ----------
    path : str or Path
        CSV file with one row per entity and time.
    encoding : DimensionEncoding, optional
        Field mapping. Defaults to `DimensionEncoding()`.
    time_column : str, default="year"
        Column holding the sample time.
    dimensions : sequence of str, optional
        Restrict the columns read to the key, color, time, and these
        dimension columns. Defaults to the encoding's dimensions.

    Returns
    -------
    Dataset
    """
    encoding = encoding if encoding is not None else DimensionEncoding()
    wanted = list(dimensions) if dimensions is not None else list(encoding.dimensions)
    columns = list(dict.fromkeys([encoding.key, encoding.color, time_column, *wanted]))
    df = pd.read_csv(path, usecols=lambda c: c in columns)
    logger.debug("Read %d rows from %s", len(df), path)
    return Dataset.from_records(
        records_from_dataframe(df, encoding=encoding, time_column=time_column),
        encoding=encoding,
    )


def _check_numeric(df: pd.DataFrame, column: str) -> None:
    try:
        df[column].to_numpy(dtype=np.float64)
    except (TypeError, ValueError) as err:
        raise DatasetValidationError(
            ErrorKind.MALFORMED_RECORD,
            f"Column {column!r} must be numeric ({err}).",
        ) from err


def _to_builtin(record: dict[str, Any]) -> dict[str, Any]:
    # numpy scalars from pandas group keys become plain Python values
    return {k: v.item() if isinstance(v, np.generic) else v for k, v in record.items()}


__all__ = ["read_csv", "read_json", "records_from_dataframe"]
