"""Playback for motion charts.

The automatic timeline and the pointer interaction controller share one
`ChartContext`. Both select a query time and call `render_at`, which builds,
orders, and renders the frame for that time.

Public API
----------
MotionChart : class
    Facade wiring dataset, timeline, controller, and renderer together
AnimationTimeline : class
    One-shot linear sweep from start to end time, driven by external ticks
InteractionController : class
    State machine mapping enter/move/leave events to query times
InteractionEvent, EventKind : class, enum
    Discrete events dispatched to the controller
PlaybackMode : enum
    AUTOPLAYING, IDLE, SCRUBBING
TimelineState : dataclass
    Shared mutable playback state
ChartContext : dataclass
    Explicit context passed to every playback component
render_at : function
    Build, order, and render the frame for a query time
RecordingRenderer, MatplotlibRenderer : class
    Renderer sinks (headless recording, matplotlib bubble chart)
attach_matplotlib : function
    Drive a chart from a matplotlib figure's timer and mouse events
"""

from motionchart.animation._state import PlaybackMode, TimelineState
from motionchart.animation.chart import MotionChart
from motionchart.animation.context import ChartContext, RendererProtocol, render_at
from motionchart.animation.interaction import (
    EventKind,
    InteractionController,
    InteractionEvent,
)
from motionchart.animation.rendering import (
    MatplotlibDriver,
    MatplotlibRenderer,
    RecordingRenderer,
    attach_matplotlib,
)
from motionchart.animation.timeline import AnimationTimeline

__all__: list[str] = [
    "AnimationTimeline",
    "ChartContext",
    "EventKind",
    "InteractionController",
    "InteractionEvent",
    "MatplotlibDriver",
    "MatplotlibRenderer",
    "MotionChart",
    "PlaybackMode",
    "RecordingRenderer",
    "RendererProtocol",
    "TimelineState",
    "attach_matplotlib",
    "render_at",
]
