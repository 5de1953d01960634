"""Import tests for the motionchart package.

Verifies that the top-level exports, each submodule's ``__all__``, and a
fresh import work without circular import errors.
"""

import importlib
import sys

import pytest

SUBMODULES = [
    "motionchart.errors",
    "motionchart.scales",
    "motionchart.series",
    "motionchart.interpolation",
    "motionchart.dataset",
    "motionchart.config",
    "motionchart.frame",
    "motionchart.ordering",
    "motionchart.io",
    "motionchart.animation",
    "motionchart.animation.chart",
    "motionchart.animation.context",
    "motionchart.animation.interaction",
    "motionchart.animation.rendering",
    "motionchart.animation.timeline",
]


class TestNoCircularImports:
    """Test that importing submodules doesn't cause circular import errors."""

    def test_import_motionchart_fresh(self):
        """Test that motionchart can be imported from a clean module cache."""
        saved = {k: v for k, v in sys.modules.items() if k.startswith("motionchart")}
        for name in saved:
            sys.modules.pop(name, None)
        try:
            mc = importlib.import_module("motionchart")
            assert hasattr(mc, "MotionChart")
        finally:
            # Other test modules hold references to the first-imported classes
            for name in [k for k in sys.modules if k.startswith("motionchart")]:
                sys.modules.pop(name, None)
            sys.modules.update(saved)

    @pytest.mark.parametrize("name", SUBMODULES)
    def test_submodule_imports(self, name):
        assert importlib.import_module(name) is not None


class TestPublicExports:
    """Every name in ``__all__`` must resolve."""

    @pytest.mark.parametrize("name", ["motionchart", *SUBMODULES])
    def test_all_names_resolve(self, name):
        module = importlib.import_module(name)
        for attr in getattr(module, "__all__", []):
            assert hasattr(module, attr), f"{name}.{attr} is missing"

    def test_top_level_exports(self):
        from motionchart import (  # noqa: F401
            ChartConfig,
            Dataset,
            DimensionEncoding,
            Entity,
            EntityState,
            Frame,
            FrameBuilder,
            MotionChart,
            PlaybackConfig,
            Series,
            TimeSeriesStore,
        )
