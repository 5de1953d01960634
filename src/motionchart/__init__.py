"""Animated bubble charts over sparse time series.

**motionchart** animates a collection of entities, each carrying several
sparsely sampled time series (production, price, colony count, ...). At any
fractional time it produces one render state (position, radius, color key)
per entity. The time comes either from an automatic sweep across the full
range or from a pointer scrubbing over an interactive region.

Core Classes (Top-Level Exports)
--------------------------------
Dataset : Validated, immutable collection of entities
    Built with ``Dataset.from_records`` or the loaders in ``motionchart.io``.
Series : Strictly increasing (time, value) samples for one dimension
FrameBuilder : Turns a query time into a Frame of EntityStates
MotionChart : Timeline + interaction controller + renderer, wired together
ChartConfig, PlaybackConfig : Frozen configuration dataclasses

Submodule Organization
----------------------
scales : LinearScale, SqrtScale, CategoricalScale
interpolation : interpolate, interpolate_arrays
ordering : order_by_radius
animation : MotionChart, AnimationTimeline, InteractionController, renderers
io : read_json, read_csv, records_from_dataframe
errors : ErrorKind codes, exceptions, and warnings

Common Usage
------------
    >>> from motionchart import Dataset, MotionChart
    >>> from motionchart.animation import RecordingRenderer
    >>> records = [
    ...     {"state": "AL", "totalprod": [[1998, 1136000], [2012, 1010000]],
    ...      "priceperlb": [[1998, 0.72], [2012, 1.91]],
    ...      "numcol": [[1998, 16000], [2012, 9000]]},
    ... ]
    >>> chart = MotionChart(Dataset.from_records(records), renderer=RecordingRenderer())
    >>> frame = chart.display(2005)
    >>> frame.keys()
    ('AL',)

Enable per-frame timing reports on stderr with ``MOTIONCHART_TIMING=1``.
"""

import logging

from motionchart.animation import MotionChart
from motionchart.config import ChartConfig, PlaybackConfig
from motionchart.dataset import Dataset, DimensionEncoding, Entity
from motionchart.frame import EntityState, Frame, FrameBuilder
from motionchart.series import Series, TimeSeriesStore

# Add NullHandler to prevent "No handler found" warnings if user doesn't configure logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ChartConfig",
    "Dataset",
    "DimensionEncoding",
    "Entity",
    "EntityState",
    "Frame",
    "FrameBuilder",
    "MotionChart",
    "PlaybackConfig",
    "Series",
    "TimeSeriesStore",
]
