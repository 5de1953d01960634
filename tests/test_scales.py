"""Tests for the linear, square-root, and categorical scale mappers."""

import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st

from motionchart.errors import InvalidScaleError
from motionchart.scales import CategoricalScale, LinearScale, SqrtScale

finite = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)


class TestLinearScale:
    """Affine mapping, inversion, and clamping."""

    def test_maps_domain_endpoints_onto_range_endpoints(self):
        scale = LinearScale(domain=(2000, 5e7), range=(0.0, 940.5))
        assert scale.map(2000) == 0.0
        assert scale.map(5e7) == 940.5

    def test_reversed_range_for_screen_y(self):
        scale = LinearScale(domain=(0, 4), range=(461.0, 0.0))
        assert scale.map(0) == 461.0
        assert scale.map(4) == 0.0
        assert scale.map(2) == pytest.approx(230.5)

    def test_unclamped_extrapolates(self):
        scale = LinearScale(domain=(0, 10), range=(0, 100))
        assert scale.map(20) == pytest.approx(200.0)
        assert scale.invert(-50) == pytest.approx(-5.0)

    def test_clamped_invert_stays_in_domain(self):
        scale = LinearScale(domain=(1998, 2012), range=(0.0, 1.0), clamp=True)
        assert scale.invert(-3.0) == 1998.0
        assert scale.invert(7.0) == 2012.0

    def test_array_input_returns_array(self):
        scale = LinearScale(domain=(0, 10), range=(0, 1))
        result = scale.map(np.array([0.0, 5.0, 10.0]))
        assert isinstance(result, np.ndarray)
        np.testing.assert_allclose(result, [0.0, 0.5, 1.0])

    def test_scalar_input_returns_float(self):
        scale = LinearScale(domain=(0, 10), range=(0, 1))
        assert isinstance(scale.map(3), float)

    @pytest.mark.parametrize(
        "domain, range_",
        [
            ((1.0, 1.0), (0.0, 1.0)),
            ((0.0, 1.0), (5.0, 5.0)),
            ((0.0, float("inf")), (0.0, 1.0)),
            ((0.0, 1.0, 2.0), (0.0, 1.0)),
        ],
    )
    def test_invalid_intervals_raise(self, domain, range_):
        with pytest.raises(InvalidScaleError, match=r"\[E2007\]"):
            LinearScale(domain=domain, range=range_)

    @given(value=finite)
    def test_invert_undoes_map(self, value):
        scale = LinearScale(domain=(-3.0, 17.0), range=(0.0, 940.5))
        assert scale.invert(scale.map(value)) == pytest.approx(value, abs=1e-6)

    @given(position=st.floats(min_value=-10, max_value=10, allow_nan=False))
    def test_clamped_invert_is_bounded(self, position):
        scale = LinearScale(domain=(1998, 2012), range=(0.1, 0.9), clamp=True)
        assert 1998.0 <= scale.invert(position) <= 2012.0


class TestSqrtScale:
    """Square-root mapping used for radii."""

    def test_area_is_linear_in_value(self):
        scale = SqrtScale(domain=(0, 1e5), range=(0, 10))
        r1 = scale.map(25_000)
        r2 = scale.map(100_000)
        assert r1 == pytest.approx(5.0)
        assert (r2 / r1) ** 2 == pytest.approx(4.0)

    def test_values_below_domain_map_to_range_start(self):
        scale = SqrtScale(domain=(0, 1e5), range=(0, 10))
        assert scale.map(-500) == 0.0

    def test_array_input(self):
        scale = SqrtScale(domain=(0, 100), range=(0, 10))
        np.testing.assert_allclose(scale.map(np.array([0.0, 25.0, 100.0])), [0, 5, 10])

    def test_zero_width_domain_raises(self):
        with pytest.raises(InvalidScaleError, match=r"\[E2007\]"):
            SqrtScale(domain=(3.0, 3.0), range=(0, 10))

    @given(
        a=st.floats(min_value=0, max_value=1e5),
        b=st.floats(min_value=0, max_value=1e5),
    )
    def test_monotone_non_decreasing(self, a, b):
        scale = SqrtScale(domain=(0, 1e5), range=(0, 10))
        lo, hi = sorted((a, b))
        assert scale.map(lo) <= scale.map(hi)


class TestCategoricalScale:
    """Deterministic, collision-free color assignment."""

    def test_first_seen_order(self):
        scale = CategoricalScale.from_keys(["CA", "AL", "CA", "ND"])
        assert scale.keys == ("CA", "AL", "ND")
        assert len(scale) == 3

    def test_deterministic_for_same_key_sequence(self):
        keys = ["AL", "AZ", "CA", "FL"]
        a = CategoricalScale.from_keys(keys)
        b = CategoricalScale.from_keys(keys)
        assert [a.map(k) for k in keys] == [b.map(k) for k in keys]

    def test_distinct_keys_get_distinct_colors(self):
        scale = CategoricalScale.from_keys(["AL", "AZ", "CA", "FL"])
        assert len(set(scale.colors)) == 4

    def test_more_keys_than_palette_stays_collision_free(self):
        keys = [f"S{i}" for i in range(44)]
        scale = CategoricalScale.from_keys(keys)
        assert len(set(scale.colors)) == 44
        assert all(len(c) == 4 for c in scale.colors)

    def test_explicit_palette(self):
        scale = CategoricalScale.from_keys(["a", "b"], palette=["red", "#0000ff"])
        assert scale.map("a") == (1.0, 0.0, 0.0, 1.0)
        assert scale.map("b") == (0.0, 0.0, 1.0, 1.0)

    def test_unknown_key_raises_key_error(self):
        scale = CategoricalScale.from_keys(["AL"])
        with pytest.raises(KeyError, match="ZZ"):
            scale.map("ZZ")

    def test_continuous_colormap_rejected(self):
        with pytest.raises(InvalidScaleError, match=r"\[E2007\]"):
            CategoricalScale.from_keys(["a"], palette="coolwarm")

    @given(keys=st.lists(st.text(min_size=1, max_size=4), max_size=60))
    def test_collision_free_for_any_key_set(self, keys):
        scale = CategoricalScale.from_keys(keys)
        assert len(set(scale.colors)) == len(set(keys))
