"""High-level motion chart combining frames, timeline, and interaction."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import numpy as np

from motionchart._timing import frame_timing
from motionchart.animation._state import PlaybackMode, TimelineState
from motionchart.animation.context import (
    ChartContext,
    RendererProtocol,
    build_ordered,
    render_at,
)
from motionchart.animation.interaction import InteractionController, InteractionEvent
from motionchart.animation.timeline import AnimationTimeline
from motionchart.config import ChartConfig
from motionchart.dataset import Dataset
from motionchart.frame import Frame, FrameBuilder
from motionchart.scales import CategoricalScale

logger = logging.getLogger(__name__)


class MotionChart:
    """Animated bubble chart over a dataset of sparse time series.

    Owns the `ChartContext` and wires the `AnimationTimeline` and the
    `InteractionController` to it. Rendering happens through the optional
    ``renderer`` sink.

    Parameters
    ----------
    dataset : Dataset
        Validated dataset.
    config : ChartConfig, optional
        Scales, encoding, and playback settings. Defaults to
        ``ChartConfig(encoding=dataset.encoding)``.
    renderer : RendererProtocol, optional
        Called with ``(ordered_states, display_time)`` for every frame.
    clock : Callable[[], float], optional
        Clock for the timeline. Defaults to `time.perf_counter`.

    Examples
    --------
    >>> from motionchart.animation.rendering import RecordingRenderer
    >>> records = [
    ...     {"state": "AL", "totalprod": [[1998, 1e6], [2012, 2e6]],
    ...      "priceperlb": [[1998, 0.7], [2012, 1.9]], "numcol": [[1998, 16000], [2012, 9000]]},
    ... ]
    >>> sink = RecordingRenderer()
    >>> chart = MotionChart(Dataset.from_records(records), renderer=sink)
    >>> _ = chart.start(now=0.0)
    >>> chart.tick(now=7.5)
    True
    >>> sink.times
    [1998.0, 2005.0]
    >>> chart.tick(now=15.0), chart.mode
    (False, <PlaybackMode.IDLE: 'idle'>)
    """

    def __init__(
        self,
        dataset: Dataset,
        config: ChartConfig | None = None,
        renderer: RendererProtocol | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.config = config if config is not None else ChartConfig(encoding=dataset.encoding)
        builder = FrameBuilder(dataset, self.config)
        playback = self.config.playback
        start_time, end_time = playback.resolve(dataset.time_extent())
        state = TimelineState(
            start_time=start_time,
            end_time=end_time,
            duration=playback.duration,
        )
        self.context = ChartContext(builder=builder, state=state, renderer=renderer)
        self.timeline = AnimationTimeline(
            clock=clock if clock is not None else time.perf_counter
        )
        self.controller = InteractionController(self.timeline)
        self.color_scale: CategoricalScale = self.config.color_scale(
            dataset.color_keys()
        )

    @property
    def dataset(self) -> Dataset:
        """The dataset being animated."""
        return self.context.dataset

    @property
    def state(self) -> TimelineState:
        """Shared playback state."""
        return self.context.state

    @property
    def mode(self) -> PlaybackMode:
        """Current playback mode."""
        return self.context.state.mode

    def start(self, now: float | None = None) -> Frame:
        """Start the automatic sweep and render its first frame."""
        return self.timeline.start(self.context, now=now)

    def tick(self, now: float | None = None) -> bool:
        """Advance the sweep; returns False once no more ticks are needed.

        When the sweep reaches its end the mode becomes ``IDLE``.
        """
        return self.timeline.tick(self.context, now=now)

    def handle(self, event: InteractionEvent) -> Frame | None:
        """Dispatch an interaction event through the controller."""
        return self.controller.handle(self.context, event)

    def enter(self) -> None:
        """Pointer entered the interactive region."""
        self.handle(InteractionEvent.enter())

    def move(self, position: float) -> Frame | None:
        """Pointer moved to normalized ``position`` within the region."""
        return self.handle(InteractionEvent.move(position))

    def leave(self) -> None:
        """Pointer left the interactive region."""
        self.handle(InteractionEvent.leave())

    def display(self, t: float) -> Frame:
        """Render the frame for query time ``t`` immediately."""
        return render_at(self.context, t)

    def frame_at(self, t: float) -> Frame:
        """Frame for query time ``t`` in draw order, without rendering."""
        return build_ordered(self.context, t)

    def frames(self, n_frames: int) -> list[Frame]:
        """Evenly spaced frames over ``[start_time, end_time]``.

        Useful for offline export where no wall clock is involved.

        Parameters
        ----------
        n_frames : int
            Number of frames, at least 2. The first and last frames are at
            exactly ``start_time`` and ``end_time``.

        Returns
        -------
        list of Frame
        """
        if n_frames < 2:
            raise ValueError(f"n_frames must be at least 2 (got {n_frames}).")
        state = self.context.state
        progress = np.linspace(0.0, 1.0, n_frames)
        frames = []
        with frame_timing("export") as record:
            for p in progress:
                frame = self.frame_at(state.time_at_progress(float(p)))
                record.add_frame(len(frame))
                frames.append(frame)
        return frames


__all__ = ["MotionChart"]
