"""Error codes, exceptions, and warnings for motionchart.

Every error raised by the package starts with a bracketed error code (e.g.
``[E2001]``) so that messages can be searched and matched in tests.

Load-time problems (empty or unsorted series, malformed records) are fatal
and raised as exceptions before any frame is rendered. Per-entity problems
discovered while building frames are reported as warnings and never abort
an animation in progress.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Classification of everything that can go wrong in motionchart.

    The enum value is the error code that prefixes every message.
    """

    EMPTY_SERIES = "E2001"
    UNSORTED_SERIES = "E2002"
    MISSING_DIMENSION = "E2003"
    DEGENERATE_SAMPLE = "E2004"
    MALFORMED_RECORD = "E2005"
    DUPLICATE_ENTITY = "E2006"
    INVALID_SCALE = "E2007"

    @property
    def code(self) -> str:
        """Error code string, e.g. ``"E2001"``."""
        return self.value


def format_error(kind: ErrorKind, message: str) -> str:
    """Prefix a message with the error code for ``kind``.

    Examples
    --------
    >>> format_error(ErrorKind.EMPTY_SERIES, "series is empty")
    '[E2001] series is empty'
    """
    return f"[{kind.code}] {message}"


class SeriesValidationError(ValueError):
    """Raised when a time series violates its load-time invariants.

    A series must contain at least one sample, its times must be finite and
    strictly increasing, and its values must be finite. Any violation aborts
    the whole dataset load.

    Parameters
    ----------
    kind : ErrorKind
        ``EMPTY_SERIES``, ``UNSORTED_SERIES``, or ``MALFORMED_RECORD`` for a
        non-finite value.
    message : str
        Human-readable description (without the code prefix).
    entity : str, optional
        Key of the offending entity, if known.
    dimension : str, optional
        Name of the offending dimension, if known.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        entity: str | None = None,
        dimension: str | None = None,
    ) -> None:
        location = ""
        if entity is not None or dimension is not None:
            location = f" (entity={entity!r}, dimension={dimension!r})"
        super().__init__(format_error(kind, message + location))
        self.kind = kind
        self.entity = entity
        self.dimension = dimension


class DatasetValidationError(ValueError):
    """Raised when input records do not match the dataset record schema."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(format_error(kind, message))
        self.kind = kind


class MissingDimensionError(LookupError):
    """Raised when an entity has no series for a requested dimension.

    Notes
    -----
    This inherits from `LookupError` rather than `KeyError` so that the
    message is not wrapped in quotes by ``str()``.
    """

    def __init__(self, entity: str, dimension: str) -> None:
        super().__init__(
            format_error(
                ErrorKind.MISSING_DIMENSION,
                f"Entity {entity!r} has no series for dimension {dimension!r}.",
            )
        )
        self.kind = ErrorKind.MISSING_DIMENSION
        self.entity = entity
        self.dimension = dimension


class InvalidScaleError(ValueError):
    """Raised when a scale is constructed with an unusable domain or range."""

    def __init__(self, message: str) -> None:
        super().__init__(format_error(ErrorKind.INVALID_SCALE, message))
        self.kind = ErrorKind.INVALID_SCALE


class MissingDimensionWarning(UserWarning):
    """Emitted when an entity is dropped from frames for lacking a dimension."""

    kind = ErrorKind.MISSING_DIMENSION


class DegenerateSampleWarning(RuntimeWarning):
    """Emitted when two adjacent samples share the same time.

    Validated series can never trigger this. It signals that unvalidated
    arrays were handed to the interpolation engine.
    """

    kind = ErrorKind.DEGENERATE_SAMPLE


__all__ = [
    "DatasetValidationError",
    "DegenerateSampleWarning",
    "ErrorKind",
    "InvalidScaleError",
    "MissingDimensionError",
    "MissingDimensionWarning",
    "SeriesValidationError",
    "format_error",
]
