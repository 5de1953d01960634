"""Draw order for frame entities."""

from __future__ import annotations

import numpy as np

from motionchart.frame import Frame


def order_by_radius(frame: Frame) -> Frame:
    """Return ``frame`` with states sorted by descending radius.

    Larger circles are drawn first so smaller ones layer on top. The sort is
    stable: entities with equal radii keep their relative order.

    Parameters
    ----------
    frame : Frame
        Frame in any order.

    Returns
    -------
    Frame
        New frame with the same time, states, and exclusions; only the state
        order differs.

    Examples
    --------
    >>> from motionchart.frame import EntityState
    >>> frame = Frame(time=2000.0, states=(
    ...     EntityState("a", 0.0, 0.0, 1.0, "a"),
    ...     EntityState("b", 0.0, 0.0, 3.0, "b"),
    ... ))
    >>> order_by_radius(frame).keys()
    ('b', 'a')
    """
    if len(frame.states) < 2:
        return frame
    radii = np.fromiter((s.radius for s in frame.states), dtype=np.float64)
    order = np.argsort(-radii, kind="stable")
    states = tuple(frame.states[i] for i in order)
    return Frame(time=frame.time, states=states, excluded=frame.excluded)


__all__ = ["order_by_radius"]
