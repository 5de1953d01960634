"""Renderer sinks and the matplotlib event driver.

Two sinks are provided:

1. `RecordingRenderer` keeps every frame it receives. It is used for
   headless runs and tests.
2. `MatplotlibRenderer` draws the bubble chart. It creates its artists once
   (a scatter collection and the year label) and updates them for every
   frame.

`attach_matplotlib` connects a `MotionChart` to a matplotlib figure. A
canvas timer drives the timeline ticks, and mouse events over the year
label become enter/move/leave interaction events.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.ticker import FuncFormatter

from motionchart.frame import EntityState

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.backend_bases import MouseEvent

    from motionchart.animation.chart import MotionChart
    from motionchart.config import ChartConfig
    from motionchart.scales import CategoricalScale

logger = logging.getLogger(__name__)


def format_display_time(display_time: float) -> str:
    """Label text for a display time: the time rounded half-up to an integer.

    Examples
    --------
    >>> format_display_time(2004.5), format_display_time(1998.2)
    ('2005', '1998')
    """
    return str(math.floor(display_time + 0.5))


@dataclass
class RecordingRenderer:
    """Renderer that records frames instead of drawing them.

    Attributes
    ----------
    frames : list of tuple
        ``(states, display_time)`` for every call, in call order.
    active : bool
        Whether scrubbing is currently active.
    active_changes : list of bool
        Every value passed to `set_active`.
    """

    frames: list[tuple[tuple[EntityState, ...], float]] = field(default_factory=list)
    active: bool = False
    active_changes: list[bool] = field(default_factory=list)

    def __call__(self, states: Sequence[EntityState], display_time: float) -> None:
        self.frames.append((tuple(states), float(display_time)))

    def set_active(self, active: bool) -> None:
        self.active = active
        self.active_changes.append(active)

    @property
    def times(self) -> list[float]:
        """Display times of all recorded frames."""
        return [t for _, t in self.frames]

    @property
    def last(self) -> tuple[tuple[EntityState, ...], float] | None:
        """Most recent ``(states, display_time)``, or None."""
        return self.frames[-1] if self.frames else None


class MatplotlibRenderer:
    """Draw frames as a matplotlib bubble chart.

    The axes span the render coordinate space ``[0, width] x [height, 0]``.
    Tick labels are formatted in data units by inverting the chart's x and
    y scales.

    Parameters
    ----------
    config : ChartConfig
        Geometry, scales, and labels.
    color_scale : CategoricalScale
        Maps each state's ``color_key`` to a color.
    ax : matplotlib.axes.Axes, optional
        Axes to draw into. A new figure is created if omitted.
    initial_time : float, optional
        Text of the year label before the first frame.

    Attributes
    ----------
    ax : Axes
    scatter : matplotlib.collections.PathCollection
    label : matplotlib.text.Text
        The large year label; also the interactive region.
    """

    inactive_color = "#dddddd"
    active_color = "#aaaaaa"

    def __init__(
        self,
        config: ChartConfig,
        color_scale: CategoricalScale,
        ax: Axes | None = None,
        initial_time: float | None = None,
    ) -> None:
        if ax is None:
            _, ax = plt.subplots(figsize=(9.6, 5.0))
        self.ax = ax
        self.config = config
        self.color_scale = color_scale

        x_scale = config.x_scale()
        y_scale = config.y_scale()
        ax.set_xlim(0.0, config.width)
        ax.set_ylim(config.height, 0.0)
        ax.xaxis.set_major_formatter(
            FuncFormatter(lambda v, _pos: f"{x_scale.invert(v):,.0f}")
        )
        ax.yaxis.set_major_formatter(
            FuncFormatter(lambda v, _pos: f"{y_scale.invert(v):.1f}")
        )
        ax.set_xlabel(config.x_label)
        ax.set_ylabel(config.y_label)
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)

        self.scatter = ax.scatter(
            np.empty(0),
            np.empty(0),
            s=np.empty(0),
            edgecolors="black",
            linewidths=0.5,
            zorder=3,
        )
        self.label = ax.text(
            config.width,
            config.height - 24.0,
            "" if initial_time is None else format_display_time(initial_time),
            ha="right",
            va="baseline",
            fontsize=60,
            color=self.inactive_color,
            zorder=1,
        )
        self.keys: tuple[str, ...] = ()

    @property
    def figure(self) -> Any:
        return self.ax.figure

    def __call__(self, states: Sequence[EntityState], display_time: float) -> None:
        n = len(states)
        offsets = np.empty((n, 2), dtype=np.float64)
        sizes = np.empty(n, dtype=np.float64)
        colors = np.empty((n, 4), dtype=np.float64)
        for i, s in enumerate(states):
            offsets[i] = (s.x, s.y)
            # Marker size is area in points^2 of the bounding square
            sizes[i] = (2.0 * s.radius) ** 2
            colors[i] = self.color_scale.map(s.color_key)

        self.scatter.set_offsets(offsets)
        self.scatter.set_sizes(sizes)
        self.scatter.set_facecolors(colors)
        self.keys = tuple(s.key for s in states)
        self.label.set_text(format_display_time(display_time))
        self.figure.canvas.draw_idle()

    def set_active(self, active: bool) -> None:
        """Highlight the year label while scrubbing."""
        self.label.set_color(self.active_color if active else self.inactive_color)
        self.figure.canvas.draw_idle()


def normalized_position(x0: float, width: float, x: float, inset: float = 0.0) -> float:
    """Normalize a display x coordinate to ``[0, 1]`` across a region.

    ``inset`` pixels at each end are treated as lying beyond the edges, so
    the returned value may fall outside ``[0, 1]`` there; the controller
    clamps it.

    Examples
    --------
    >>> normalized_position(100.0, 220.0, 210.0, inset=10.0)
    0.5
    >>> normalized_position(100.0, 220.0, 105.0, inset=10.0) < 0
    True
    """
    usable = width - 2.0 * inset
    if usable <= 0:
        return 0.5
    return (x - x0 - inset) / usable


class MatplotlibDriver:
    """Connect a `MotionChart` to a matplotlib figure's timer and mouse events.

    The mouse handlers only translate raw events into normalized
    interaction events; every decision is made by the chart's controller.

    Parameters
    ----------
    chart : MotionChart
        Chart to drive.
    renderer : MatplotlibRenderer
        Renderer whose year label is the interactive region.
    """

    def __init__(self, chart: MotionChart, renderer: MatplotlibRenderer) -> None:
        self.chart = chart
        self.renderer = renderer
        canvas = renderer.figure.canvas
        self.timer = canvas.new_timer(interval=chart.config.playback.interval_ms)
        self.timer.add_callback(self._on_timer)
        self._inside = False
        self._cids = [
            canvas.mpl_connect("motion_notify_event", self._on_motion),
            canvas.mpl_connect("figure_leave_event", self._on_figure_leave),
        ]

    def start(self) -> None:
        """Start the sweep and the tick timer."""
        self.chart.start()
        self.timer.start()

    def stop(self) -> None:
        """Stop the tick timer."""
        self.timer.stop()

    def disconnect(self) -> None:
        """Stop the timer and remove the mouse handlers."""
        self.stop()
        canvas = self.renderer.figure.canvas
        for cid in self._cids:
            canvas.mpl_disconnect(cid)
        self._cids = []

    def _on_timer(self) -> None:
        if not self.chart.tick():
            self.timer.stop()

    def _on_motion(self, event: MouseEvent) -> None:
        bbox = self.renderer.label.get_window_extent()
        inside = bbox.contains(event.x, event.y)
        if inside and not self._inside:
            self._inside = True
            self.chart.enter()
        if inside:
            position = normalized_position(
                bbox.x0, bbox.width, event.x, self.chart.config.playback.pointer_inset
            )
            self.chart.move(position)
        elif self._inside:
            self._inside = False
            self.chart.leave()

    def _on_figure_leave(self, _event: Any) -> None:
        if self._inside:
            self._inside = False
            self.chart.leave()


def attach_matplotlib(
    chart: MotionChart,
    ax: Axes | None = None,
    start: bool = True,
) -> MatplotlibDriver:
    """Render ``chart`` with matplotlib and drive it from the canvas.

    Parameters
    ----------
    chart : MotionChart
        Chart to display. Its renderer is replaced by a `MatplotlibRenderer`.
    ax : Axes, optional
        Axes to draw into; a new figure is created if omitted.
    start : bool, default=True
        Start the automatic sweep immediately.

    Returns
    -------
    MatplotlibDriver
        Keep a reference to it, or the timer may be garbage collected.

    Examples
    --------
    >>> driver = attach_matplotlib(chart)  # doctest: +SKIP
    >>> plt.show()  # doctest: +SKIP
    """
    renderer = MatplotlibRenderer(
        chart.config,
        chart.color_scale,
        ax=ax,
        initial_time=chart.state.start_time,
    )
    chart.context.renderer = renderer
    driver = MatplotlibDriver(chart, renderer)
    if start:
        driver.start()
    logger.debug("Attached matplotlib driver (start=%s)", start)
    return driver


__all__ = [
    "MatplotlibDriver",
    "MatplotlibRenderer",
    "RecordingRenderer",
    "attach_matplotlib",
    "format_display_time",
    "normalized_position",
]
