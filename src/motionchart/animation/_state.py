"""Pure playback state shared by the timeline and the interaction controller.

This module contains no rendering or scheduling logic, so state transitions
can be tested without a GUI or a timer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PlaybackMode(Enum):
    """Which component currently selects the query time.

    - ``AUTOPLAYING``: the animation timeline sweeps from start to end.
    - ``IDLE``: nothing drives the chart; the last frame stays on screen.
    - ``SCRUBBING``: the pointer position selects the query time.
    """

    AUTOPLAYING = "autoplaying"
    IDLE = "idle"
    SCRUBBING = "scrubbing"


@dataclass
class TimelineState:
    """Mutable playback state.

    Only `AnimationTimeline` and `InteractionController` mutate this object.

    Parameters
    ----------
    start_time, end_time : float
        Query-time bounds of the sweep and of pointer scrubbing.
    duration : float
        Wall-clock length of the sweep in seconds.
    mode : PlaybackMode
        Current mode. Starts ``IDLE`` until the timeline is started.
    current_time : float or None
        Query time of the most recently rendered frame. None before the
        first frame.
    duration_remaining : float or None
        Wall-clock seconds left in the sweep. Defaults to ``duration``;
        zero once the sweep is complete or cancelled.

    Examples
    --------
    >>> state = TimelineState(start_time=1998.0, end_time=2012.0, duration=15.0)
    >>> state.mode
    <PlaybackMode.IDLE: 'idle'>
    >>> state.duration_remaining
    15.0
    """

    start_time: float
    end_time: float
    duration: float
    mode: PlaybackMode = PlaybackMode.IDLE
    current_time: float | None = None
    duration_remaining: float | None = None

    def __post_init__(self) -> None:
        if not self.start_time < self.end_time:
            raise ValueError(
                f"start_time ({self.start_time}) must be before end_time "
                f"({self.end_time})."
            )
        if not self.duration > 0:
            raise ValueError(f"duration must be positive (got {self.duration}).")
        if self.duration_remaining is None:
            self.duration_remaining = self.duration

    @property
    def span(self) -> float:
        """Length of the query-time range."""
        return self.end_time - self.start_time

    def time_at_progress(self, progress: float) -> float:
        """Query time reached after ``progress`` (0-1) of the sweep.

        Progress is clamped to ``[0, 1]`` and the end points are returned
        exactly.
        """
        if progress <= 0.0:
            return self.start_time
        if progress >= 1.0:
            return self.end_time
        return self.start_time + self.span * progress
