"""Chart and playback configuration.

All settings are grouped into frozen dataclasses with sensible defaults, so
the simplest usage is ``ChartConfig()``. The defaults reproduce the honey
production bubble chart: a 940.5 x 461 plot area, production on a linear x
axis, price on an inverted linear y axis, colony counts as square-root
scaled radii, and a 15 second sweep over the data's years.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass, field

from motionchart.dataset import DimensionEncoding
from motionchart.scales import RGBA, CategoricalScale, LinearScale, SqrtScale

# 960 x 500 canvas minus its margins
MARGIN_TOP = 19.5
MARGIN_RIGHT = 19.5
MARGIN_BOTTOM = 19.5
MARGIN_LEFT = 39.5
DEFAULT_WIDTH = 960.0 - MARGIN_RIGHT
DEFAULT_HEIGHT = 500.0 - MARGIN_TOP - MARGIN_BOTTOM


@dataclass(frozen=True)
class PlaybackConfig:
    """Timing of the automatic sweep and of pointer scrubbing.

    Parameters
    ----------
    start_time, end_time : float or None
        Query-time bounds of the sweep (and of the scrubbing scale). None
        means "use the dataset's earliest / latest sample time".
    duration : float
        Wall-clock length of the automatic sweep, in seconds. Must be
        positive.
    interval_ms : int
        Tick interval requested from the scheduler, in milliseconds.
    pointer_inset : float
        Inset, in display pixels, applied at both ends of the interactive
        region before mapping pointer positions to time. Pointers inside the
        inset clamp to the start/end time.

    Examples
    --------
    >>> PlaybackConfig().duration
    15.0
    >>> PlaybackConfig(start_time=1998, end_time=2012).resolve((1990.0, 2020.0))
    (1998.0, 2012.0)
    """

    start_time: float | None = None
    end_time: float | None = None
    duration: float = 15.0
    interval_ms: int = 16
    pointer_inset: float = 10.0

    def __post_init__(self) -> None:
        if not self.duration > 0:
            raise ValueError(f"duration must be positive (got {self.duration}).")
        if self.interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive (got {self.interval_ms}).")
        if self.pointer_inset < 0:
            raise ValueError(
                f"pointer_inset must be non-negative (got {self.pointer_inset})."
            )

    def resolve(self, extent: tuple[float, float]) -> tuple[float, float]:
        """Fill unset bounds from a dataset's ``(min, max)`` time extent.

        Raises
        ------
        ValueError
            If the resolved start is not strictly before the resolved end.
        """
        start = float(extent[0] if self.start_time is None else self.start_time)
        end = float(extent[1] if self.end_time is None else self.end_time)
        if not start < end:
            raise ValueError(
                f"Playback start_time ({start}) must be before end_time ({end})."
            )
        return start, end


@dataclass(frozen=True)
class ChartConfig:
    """Plot geometry, scale domains, and channel encoding.

    Parameters
    ----------
    width, height : float
        Size of the plot area in render units.
    x_domain, y_domain : tuple of float
        Data intervals mapped onto ``(0, width)`` and ``(height, 0)``.
    radius_domain, radius_range : tuple of float
        Square-root scale from data value to circle radius.
    palette : str or sequence of colors, optional
        Categorical palette, forwarded to `CategoricalScale.from_keys`.
    encoding : DimensionEncoding
        Which record fields feed which channel.
    playback : PlaybackConfig
        Sweep and scrubbing timing.
    x_label, y_label : str
        Axis labels for renderers.

    Examples
    --------
    >>> config = ChartConfig()
    >>> config.x_scale().map(2000)
    0.0
    >>> config.y_scale().map(0)
    461.0
    """

    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    x_domain: tuple[float, float] = (2000.0, 50_000_000.0)
    y_domain: tuple[float, float] = (0.0, 4.0)
    radius_domain: tuple[float, float] = (0.0, 100_000.0)
    radius_range: tuple[float, float] = (0.0, 10.0)
    palette: str | Sequence[str | RGBA] | None = None
    encoding: DimensionEncoding = field(default_factory=DimensionEncoding)
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    x_label: str = "Total Production"
    y_label: str = "Price per lb ($)"

    def x_scale(self) -> LinearScale:
        """Linear scale for the x channel."""
        return LinearScale(domain=self.x_domain, range=(0.0, self.width))

    def y_scale(self) -> LinearScale:
        """Linear scale for the y channel (screen y grows downward)."""
        return LinearScale(domain=self.y_domain, range=(self.height, 0.0))

    def radius_scale(self) -> SqrtScale:
        """Square-root scale for circle radii."""
        return SqrtScale(domain=self.radius_domain, range=self.radius_range)

    def color_scale(self, keys: Iterable[Hashable]) -> CategoricalScale:
        """Categorical color scale over ``keys``."""
        return CategoricalScale.from_keys(keys, palette=self.palette)


__all__ = [
    "DEFAULT_HEIGHT",
    "DEFAULT_WIDTH",
    "ChartConfig",
    "PlaybackConfig",
]
