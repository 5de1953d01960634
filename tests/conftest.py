"""Shared test fixtures for the motionchart test suite.

Fixture Naming Convention
=========================

- ``*_records``: raw record lists, as an external loader would supply them
- ``*_dataset``: validated `Dataset` built from those records
- ``chart``: `MotionChart` wired to a `RecordingRenderer` and a manual clock

Data
----
The honey fixtures follow the shape of the honey production dataset. There
is one record per state, with x = total production, y = price per lb and
radius = number of colonies. The series are sparse and irregular on purpose
(the gaps differ per dimension) so that interpolation is exercised between
unevenly spaced samples.
"""

import os

import matplotlib
import pytest
from hypothesis import Phase, Verbosity, settings

matplotlib.use("Agg")

from motionchart import ChartConfig, Dataset, MotionChart, PlaybackConfig  # noqa: E402
from motionchart.animation import RecordingRenderer  # noqa: E402

# =============================================================================
# Hypothesis Configuration for Performance
# =============================================================================
# - "ci": Fast profile for CI pipelines (fewer examples, no deadline)
# - "dev": Standard development profile (moderate examples)
# - "thorough": Full property testing (many examples, for pre-release)

settings.register_profile(
    "ci",
    max_examples=10,
    deadline=None,
    suppress_health_check=[],
    phases=[Phase.explicit, Phase.reuse, Phase.generate],
    verbosity=Verbosity.quiet,
)

settings.register_profile(
    "dev",
    max_examples=50,
    deadline=5000,
    verbosity=Verbosity.normal,
)

settings.register_profile(
    "thorough",
    max_examples=500,
    deadline=None,
    verbosity=Verbosity.verbose,
)

_profile = os.environ.get("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(_profile)

# =============================================================================
# Test Configuration Constants
# =============================================================================

START_YEAR = 1998.0
END_YEAR = 2012.0
DURATION = 15.0


class ManualClock:
    """Clock whose reading only changes when a test advances it."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


# =============================================================================
# --- Fixtures ---
# =============================================================================


@pytest.fixture
def honey_records() -> list[dict]:
    """Three states with sparse, irregular series spanning 1998-2012."""
    return [
        {
            "state": "AL",
            "totalprod": [[1998, 1136000], [2000, 1200000], [2012, 1000000]],
            "priceperlb": [[1998, 0.72], [2003, 1.40], [2012, 1.91]],
            "numcol": [[1998, 16000], [2005, 12000], [2012, 9000]],
        },
        {
            "state": "CA",
            "totalprod": [[1998, 37350000], [2006, 20000000], [2012, 13000000]],
            "priceperlb": [[1998, 0.60], [2012, 1.85]],
            "numcol": [[1998, 450000], [2004, 380000], [2012, 340000]],
        },
        {
            "state": "ND",
            "totalprod": [[1998, 29610000], [2012, 33120000]],
            "priceperlb": [[1998, 0.57], [2008, 1.30], [2012, 1.88]],
            "numcol": [[1998, 270000], [2012, 460000]],
        },
    ]


@pytest.fixture
def honey_dataset(honey_records: list[dict]) -> Dataset:
    """Validated dataset built from `honey_records`."""
    return Dataset.from_records(honey_records)


@pytest.fixture
def clock() -> ManualClock:
    """Manual clock starting at t=0 s."""
    return ManualClock()


@pytest.fixture
def sink() -> RecordingRenderer:
    """Renderer that records every frame."""
    return RecordingRenderer()


@pytest.fixture
def chart(honey_dataset: Dataset, sink: RecordingRenderer, clock: ManualClock) -> MotionChart:
    """Chart over `honey_dataset` with a 15 s sweep from 1998 to 2012."""
    config = ChartConfig(
        playback=PlaybackConfig(start_time=START_YEAR, end_time=END_YEAR, duration=DURATION)
    )
    return MotionChart(honey_dataset, config=config, renderer=sink, clock=clock)
