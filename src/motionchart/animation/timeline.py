"""Automatic sweep of the query time from start to end.

The timeline does not own a timer. An external scheduler (the matplotlib
canvas timer, or a test) calls `AnimationTimeline.tick` repeatedly; each tick
reads the clock, computes how far through the sweep it is, and renders the
corresponding frame to completion before returning.

Playback is one-shot: once the sweep completes or is cancelled it never
restarts.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from motionchart.animation._state import PlaybackMode
from motionchart.animation.context import ChartContext, render_at
from motionchart.frame import Frame

logger = logging.getLogger(__name__)


class AnimationTimeline:
    """Linear, wall-clock driven sweep over ``[start_time, end_time]``.

    Parameters
    ----------
    clock : Callable[[], float], default=time.perf_counter
        Monotonic clock in seconds. Only consulted when ``now`` is not
        passed explicitly to `start` / `tick`.
    on_complete : Callable[[ChartContext], None], optional
        Called once when the sweep reaches ``end_time``. When None, an
        ``AUTOPLAYING`` context is moved to ``IDLE`` directly.
        `InteractionController` installs its ``PLAYBACK_FINISHED`` dispatch
        here.

    Attributes
    ----------
    clock : Callable[[], float]
        The clock in use.
    on_complete : Callable[[ChartContext], None] or None
        Completion hook.

    Examples
    --------
    >>> timeline = AnimationTimeline()
    >>> timeline.start(context, now=0.0)  # doctest: +SKIP
    >>> timeline.tick(context, now=7.5)  # halfway through a 15 s sweep  # doctest: +SKIP
    True
    >>> context.state.current_time  # doctest: +SKIP
    2005.0

    Notes
    -----
    Progress is ``elapsed / duration`` with no easing, so the query time
    advances at a constant rate. Late ticks simply jump ahead; no
    intermediate frames are rendered to catch up.

    Cancellation is cooperative. `cancel` only prevents future ticks from
    rendering; a tick that is already rendering (for instance one whose
    renderer triggers a pointer event) runs to completion.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.perf_counter,
        on_complete: Callable[[ChartContext], None] | None = None,
    ) -> None:
        self.clock = clock
        self.on_complete = on_complete
        self._started_at: float | None = None
        self._completed: bool = False
        self._cancelled: bool = False

    @property
    def is_started(self) -> bool:
        """Whether `start` has been called."""
        return self._started_at is not None

    @property
    def is_running(self) -> bool:
        """Whether future ticks will render frames."""
        return self.is_started and not (self._completed or self._cancelled)

    @property
    def is_completed(self) -> bool:
        """Whether the sweep reached ``end_time``."""
        return self._completed

    @property
    def is_cancelled(self) -> bool:
        """Whether the sweep was cancelled before completing."""
        return self._cancelled

    def start(self, context: ChartContext, now: float | None = None) -> Frame:
        """Begin the sweep and render the first frame at ``start_time``.

        Parameters
        ----------
        context : ChartContext
            Shared playback context.
        now : float, optional
            Current clock reading. Defaults to ``self.clock()``.

        Returns
        -------
        Frame
            The frame rendered at ``start_time``.

        Raises
        ------
        RuntimeError
            If the timeline was already started or has been cancelled.
        """
        if self._cancelled:
            raise RuntimeError(
                "Timeline was cancelled by interaction and cannot be restarted."
            )
        if self.is_started:
            raise RuntimeError("Timeline playback is one-shot and was already started.")

        state = context.state
        self._started_at = self.clock() if now is None else float(now)
        state.mode = PlaybackMode.AUTOPLAYING
        state.duration_remaining = state.duration
        logger.debug(
            "Timeline started: %s -> %s over %.3f s",
            state.start_time,
            state.end_time,
            state.duration,
        )
        return render_at(context, state.start_time, source="start")

    def tick(self, context: ChartContext, now: float | None = None) -> bool:
        """Advance the sweep to the current clock reading and render.

        Parameters
        ----------
        context : ChartContext
            Shared playback context.
        now : float, optional
            Current clock reading. Defaults to ``self.clock()``.

        Returns
        -------
        bool
            True if more ticks are wanted, False once the sweep has completed
            or was cancelled (in which case nothing is rendered). Completion
            moves an ``AUTOPLAYING`` context to ``IDLE``.
        """
        if not self.is_running:
            return False
        assert self._started_at is not None  # nosec: type narrowing for mypy

        state = context.state
        now = self.clock() if now is None else float(now)
        elapsed = max(now - self._started_at, 0.0)
        progress = min(elapsed / state.duration, 1.0)
        state.duration_remaining = max(state.duration - elapsed, 0.0)

        render_at(context, state.time_at_progress(progress), source="tick")

        if self._cancelled:
            # Cancelled while this tick was rendering
            return False
        if progress >= 1.0:
            self._completed = True
            state.duration_remaining = 0.0
            logger.debug("Timeline completed at %s", state.end_time)
            if self.on_complete is not None:
                self.on_complete(context)
            elif state.mode is PlaybackMode.AUTOPLAYING:
                state.mode = PlaybackMode.IDLE
            return False
        return True

    def cancel(self, context: ChartContext) -> None:
        """Stop the sweep; future ticks render nothing.

        Cancelling a completed timeline does nothing. Cancelling one that
        has not started yet prevents it from ever starting.
        """
        if self._completed or self._cancelled:
            return
        self._cancelled = True
        context.state.duration_remaining = 0.0
        logger.debug("Timeline cancelled at t=%s", context.state.current_time)


__all__ = ["AnimationTimeline"]
