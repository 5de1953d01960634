"""Per-frame timing reports for frame building and playback.

Set ``MOTIONCHART_TIMING=1`` before importing motionchart to get one line on
stderr for every rendered frame and every offline export::

    [TIMING] tick t=2005.00 entities=3: 0.41 ms
    [TIMING] export frames=60 entities=180: 12.80 ms

The ``source`` names where the frame came from: ``start`` and ``tick`` for
the automatic sweep, ``scrub`` for pointer scrubbing, ``display`` for a
direct render, and ``export`` for `MotionChart.frames`.
"""

from __future__ import annotations

import contextlib
import os
import sys
import time
from collections.abc import Generator
from dataclasses import dataclass

_TIMING_ENABLED = bool(os.environ.get("MOTIONCHART_TIMING"))


@dataclass
class FrameTiming:
    """Timing of one rendered frame or one batch of frames.

    Attributes
    ----------
    source : str
        What produced the frame(s), e.g. ``"tick"`` or ``"export"``.
    t : float or None
        Query time of a single frame; None for a batch.
    n_frames : int
        Number of frames built.
    n_entities : int
        Entity states produced over all frames.
    elapsed_ms : float
        Wall time in milliseconds. Only measured when timing is enabled.
    """

    source: str
    t: float | None = None
    n_frames: int = 0
    n_entities: int = 0
    elapsed_ms: float = 0.0

    def add_frame(self, n_entities: int) -> None:
        """Count one built frame holding ``n_entities`` states."""
        self.n_frames += 1
        self.n_entities += n_entities

    def format(self) -> str:
        if self.t is not None:
            where = f"t={self.t:.2f}"
        else:
            where = f"frames={self.n_frames}"
        return (
            f"[TIMING] {self.source} {where} entities={self.n_entities}: "
            f"{self.elapsed_ms:.2f} ms"
        )


@contextlib.contextmanager
def frame_timing(
    source: str, t: float | None = None
) -> Generator[FrameTiming, None, None]:
    """Time the frame(s) built inside the block.

    The block reports what it built through the yielded `FrameTiming`. When
    timing is disabled the record is still yielded but nothing is measured
    or printed.

    Parameters
    ----------
    source : str
        Label for the report.
    t : float, optional
        Query time, for single-frame blocks.

    Examples
    --------
    >>> with frame_timing("tick", t=2005.0) as record:
    ...     frame = builder.build(2005.0)  # doctest: +SKIP
    ...     record.add_frame(len(frame))  # doctest: +SKIP
    """
    record = FrameTiming(source=source, t=t)
    if not _TIMING_ENABLED:
        yield record
        return

    start = time.perf_counter()
    try:
        yield record
    finally:
        record.elapsed_ms = (time.perf_counter() - start) * 1000
        print(record.format(), file=sys.stderr)
