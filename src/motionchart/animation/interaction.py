"""Pointer interaction state machine.

Pointer events arrive as discrete `InteractionEvent` values and go through
one dispatcher, `InteractionController.handle`. Transitions:

==============  ====================  ==============================================
Mode            Event                 Effect
==============  ====================  ==============================================
AUTOPLAYING     PLAYBACK_FINISHED     -> IDLE
AUTOPLAYING     ENTER                 cancel timeline, -> SCRUBBING
IDLE            ENTER                 cancel timeline (first time), -> SCRUBBING
SCRUBBING       MOVE                  render frame at the pointer's time
SCRUBBING       LEAVE                 -> IDLE
(any other)                           ignored
==============  ====================  ==============================================

Once the timeline has been cancelled it never resumes; interactive mode is
terminal for the session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from motionchart.animation._state import PlaybackMode
from motionchart.animation.context import ChartContext, notify_active, render_at
from motionchart.animation.timeline import AnimationTimeline
from motionchart.frame import Frame
from motionchart.scales import LinearScale

logger = logging.getLogger(__name__)


class EventKind(Enum):
    """Kinds of event understood by the controller."""

    ENTER = "enter"
    MOVE = "move"
    LEAVE = "leave"
    PLAYBACK_FINISHED = "playback_finished"


@dataclass(frozen=True)
class InteractionEvent:
    """A discrete interaction event.

    Parameters
    ----------
    kind : EventKind
        What happened.
    position : float, optional
        Pointer position normalized to the interactive region, where 0 is
        the left edge and 1 the right edge. Required for ``MOVE``.

    Examples
    --------
    >>> InteractionEvent.move(0.25).position
    0.25
    """

    kind: EventKind
    position: float | None = None

    def __post_init__(self) -> None:
        if self.kind is EventKind.MOVE and self.position is None:
            raise ValueError("MOVE events require a pointer position.")

    @classmethod
    def enter(cls) -> InteractionEvent:
        return cls(EventKind.ENTER)

    @classmethod
    def move(cls, position: float) -> InteractionEvent:
        return cls(EventKind.MOVE, float(position))

    @classmethod
    def leave(cls) -> InteractionEvent:
        return cls(EventKind.LEAVE)

    @classmethod
    def playback_finished(cls) -> InteractionEvent:
        return cls(EventKind.PLAYBACK_FINISHED)


class InteractionController:
    """Translate interaction events into mode changes and query times.

    Parameters
    ----------
    timeline : AnimationTimeline
        Timeline to cancel when scrubbing starts. Unless the timeline already
        has a completion hook, the controller installs one that dispatches
        ``PLAYBACK_FINISHED`` when the sweep ends.
    pointer_range : tuple of float, default=(0.0, 1.0)
        Normalized pointer positions that map onto ``start_time`` and
        ``end_time``. Positions outside it clamp to the nearest end.

    Examples
    --------
    >>> controller = InteractionController(timeline)  # doctest: +SKIP
    >>> controller.handle(context, InteractionEvent.enter())  # doctest: +SKIP
    >>> frame = controller.handle(context, InteractionEvent.move(0.5))  # doctest: +SKIP
    >>> frame.time  # doctest: +SKIP
    2005.0
    """

    def __init__(
        self,
        timeline: AnimationTimeline,
        pointer_range: tuple[float, float] = (0.0, 1.0),
    ) -> None:
        self.timeline = timeline
        self.pointer_range = (float(pointer_range[0]), float(pointer_range[1]))
        if timeline.on_complete is None:
            timeline.on_complete = self._on_playback_finished

    def time_at(self, context: ChartContext, position: float) -> float:
        """Query time for a normalized pointer position.

        Uses the inverse of a clamped linear scale from
        ``[start_time, end_time]`` to ``pointer_range``, so positions at or
        beyond the edges map exactly onto the start and end times.
        """
        state = context.state
        scale = LinearScale(
            domain=(state.start_time, state.end_time),
            range=self.pointer_range,
            clamp=True,
        )
        return scale.invert(position)

    def handle(self, context: ChartContext, event: InteractionEvent) -> Frame | None:
        """Apply ``event`` to the state machine.

        Parameters
        ----------
        context : ChartContext
            Shared playback context.
        event : InteractionEvent
            Event to dispatch.

        Returns
        -------
        Frame or None
            The frame rendered in response (``MOVE`` while scrubbing), or
            None if the event rendered nothing.
        """
        mode = context.state.mode
        kind = event.kind

        if kind is EventKind.PLAYBACK_FINISHED:
            if mode is PlaybackMode.AUTOPLAYING:
                self._transition(context, PlaybackMode.IDLE)
            return None

        if kind is EventKind.ENTER:
            if mode is not PlaybackMode.SCRUBBING:
                self.timeline.cancel(context)
                self._transition(context, PlaybackMode.SCRUBBING)
            return None

        if kind is EventKind.LEAVE:
            if mode is PlaybackMode.SCRUBBING:
                self._transition(context, PlaybackMode.IDLE)
            return None

        if kind is EventKind.MOVE and mode is PlaybackMode.SCRUBBING:
            assert event.position is not None  # nosec: validated in __post_init__
            return render_at(
                context, self.time_at(context, event.position), source="scrub"
            )

        return None

    def _on_playback_finished(self, context: ChartContext) -> None:
        self.handle(context, InteractionEvent.playback_finished())

    def _transition(self, context: ChartContext, mode: PlaybackMode) -> None:
        previous = context.state.mode
        context.state.mode = mode
        logger.debug("Playback mode %s -> %s", previous.value, mode.value)
        notify_active(context, mode is PlaybackMode.SCRUBBING)


__all__ = ["EventKind", "InteractionController", "InteractionEvent"]
