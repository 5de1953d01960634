"""Tests for the error code system.

Every error and warning raised by motionchart carries a bracketed code so
that messages can be searched and matched.
"""

from __future__ import annotations

import warnings

import pytest

from motionchart import Dataset, FrameBuilder, Series
from motionchart.errors import (
    DatasetValidationError,
    DegenerateSampleWarning,
    ErrorKind,
    InvalidScaleError,
    MissingDimensionError,
    MissingDimensionWarning,
    SeriesValidationError,
    format_error,
)
from motionchart.scales import LinearScale


class TestErrorKind:
    """Tests for the ErrorKind enumeration."""

    def test_codes_are_unique(self):
        """Test that no two kinds share a code."""
        codes = [kind.code for kind in ErrorKind]
        assert len(codes) == len(set(codes))

    @pytest.mark.parametrize(
        "kind, code",
        [
            (ErrorKind.EMPTY_SERIES, "E2001"),
            (ErrorKind.UNSORTED_SERIES, "E2002"),
            (ErrorKind.MISSING_DIMENSION, "E2003"),
            (ErrorKind.DEGENERATE_SAMPLE, "E2004"),
            (ErrorKind.MALFORMED_RECORD, "E2005"),
            (ErrorKind.DUPLICATE_ENTITY, "E2006"),
            (ErrorKind.INVALID_SCALE, "E2007"),
        ],
    )
    def test_code_values(self, kind, code):
        assert kind.code == code

    def test_format_error(self):
        assert format_error(ErrorKind.UNSORTED_SERIES, "bad") == "[E2002] bad"


class TestErrorHierarchy:
    """Load-time errors are ValueErrors so callers can catch them broadly."""

    def test_e2001_is_value_error(self):
        """Test that E2001 is catchable as ValueError."""
        with pytest.raises(ValueError, match=r"\[E2001\]"):
            Series.from_pairs([])

    def test_e2005_is_value_error(self):
        """Test that E2005 is catchable as ValueError."""
        with pytest.raises(ValueError, match=r"\[E2005\]"):
            Dataset.from_records([42])

    def test_e2007_is_value_error(self):
        with pytest.raises(ValueError, match=r"\[E2007\]"):
            LinearScale(domain=(0, 0), range=(0, 1))

    def test_missing_dimension_is_lookup_error(self):
        """Test that E2003 is a LookupError whose message is not quoted."""
        err = MissingDimensionError("AL", "numcol")
        assert isinstance(err, LookupError)
        assert str(err).startswith("[E2003]")

    def test_kinds_attached(self):
        assert SeriesValidationError(ErrorKind.EMPTY_SERIES, "x").kind is ErrorKind.EMPTY_SERIES
        assert (
            DatasetValidationError(ErrorKind.DUPLICATE_ENTITY, "x").kind
            is ErrorKind.DUPLICATE_ENTITY
        )
        assert InvalidScaleError("x").kind is ErrorKind.INVALID_SCALE

    def test_location_suffix_only_when_known(self):
        assert "entity=" not in str(SeriesValidationError(ErrorKind.EMPTY_SERIES, "x"))
        assert "entity='AL'" in str(
            SeriesValidationError(ErrorKind.EMPTY_SERIES, "x", entity="AL")
        )


class TestWarnings:
    """Runtime problems are warnings and never abort frame building."""

    def test_warning_categories(self):
        assert issubclass(MissingDimensionWarning, UserWarning)
        assert issubclass(DegenerateSampleWarning, RuntimeWarning)
        assert MissingDimensionWarning.kind is ErrorKind.MISSING_DIMENSION
        assert DegenerateSampleWarning.kind is ErrorKind.DEGENERATE_SAMPLE

    def test_missing_dimension_can_be_escalated(self):
        """Test that callers can turn the warning into an error."""
        dataset = Dataset.from_records(
            [{"state": "AL", "totalprod": [[1998, 1.0]], "numcol": [[1998, 1.0]]}]
        )
        with warnings.catch_warnings():
            warnings.simplefilter("error", MissingDimensionWarning)
            with pytest.raises(MissingDimensionWarning, match=r"\[E2003\]"):
                FrameBuilder(dataset)
