"""Explicit context passed between the timeline and the interaction controller.

Rather than capturing the dataset, playback state, and renderer in
closures, every component receives a `ChartContext` and calls `render_at`
to turn a query time into a rendered frame.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from motionchart._timing import frame_timing
from motionchart.animation._state import TimelineState
from motionchart.frame import EntityState, Frame, FrameBuilder
from motionchart.ordering import order_by_radius

if TYPE_CHECKING:
    from motionchart.dataset import Dataset


@runtime_checkable
class RendererProtocol(Protocol):
    """Sink that draws ordered entity states.

    Called once per computed frame with the states in draw order (largest
    radius first) and the frame's query time. Implementations own every
    drawing concern. They may also define ``set_active(active: bool)`` to be
    told when pointer scrubbing starts and stops.
    """

    def __call__(self, states: Sequence[EntityState], display_time: float) -> None: ...


@dataclass
class ChartContext:
    """References shared by every playback component.

    Attributes
    ----------
    builder : FrameBuilder
        Frame builder, which also owns the read-only dataset.
    state : TimelineState
        Playback state, mutated by the timeline and the controller.
    renderer : RendererProtocol or None
        Frame sink. None renders nothing (frames are still returned).
    """

    builder: FrameBuilder
    state: TimelineState
    renderer: RendererProtocol | None = None

    @property
    def dataset(self) -> Dataset:
        """The dataset frames are built from."""
        return self.builder.dataset


def build_ordered(context: ChartContext, t: float) -> Frame:
    """Build the frame for ``t`` in draw order, without rendering it."""
    return order_by_radius(context.builder.build(t))


def render_at(context: ChartContext, t: float, source: str = "display") -> Frame:
    """Build, order, and render the frame for query time ``t``.

    The frame is computed completely before the renderer sees it, and
    ``context.state.current_time`` is updated to ``t``.

    Parameters
    ----------
    context : ChartContext
        Shared playback context.
    t : float
        Query time.
    source : str, default="display"
        Label for the ``MOTIONCHART_TIMING`` report (``"tick"``,
        ``"scrub"``, ...).

    Returns
    -------
    Frame
        The frame handed to the renderer, in draw order.
    """
    with frame_timing(source, t=t) as record:
        frame = build_ordered(context, t)
        context.state.current_time = frame.time
        if context.renderer is not None:
            context.renderer(frame.states, frame.time)
        record.add_frame(len(frame))
    return frame


def notify_active(context: ChartContext, active: bool) -> None:
    """Forward a scrubbing start/stop to renderers that support it."""
    set_active = getattr(context.renderer, "set_active", None)
    if callable(set_active):
        set_active(active)


__all__ = [
    "ChartContext",
    "RendererProtocol",
    "build_ordered",
    "notify_active",
    "render_at",
]
