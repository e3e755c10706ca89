"""Compact string encoding of lane layouts.

A layout is written as the forward lane characters, a single ``/``,
then the backward lane characters, e.g. ``"dps/ds"``.  Each lane type
has exactly one character:

====  =========
char  lane type
====  =========
d     driving
p     parking
s     sidewalk
b     biking
u     bus
====  =========

This is the format the lane editor writes into the
``abst:synthetic_lanes`` tag, so it has to stay stable.
"""

from typing import Dict, List, Optional

from .types import LaneLayout, LaneType

SEPARATOR = "/"

LANE_TO_CHAR: Dict[LaneType, str] = {
    LaneType.DRIVING: "d",
    LaneType.PARKING: "p",
    LaneType.SIDEWALK: "s",
    LaneType.BIKING: "b",
    LaneType.BUS: "u",
}

CHAR_TO_LANE: Dict[str, LaneType] = {c: lt for lt, c in LANE_TO_CHAR.items()}


def encode(layout: LaneLayout) -> str:
    """Encode a layout as a compact lane string.

    Parameters
    ----------
    layout : LaneLayout
        Layout to encode.

    Returns
    -------
    str
        Forward characters, ``/``, backward characters.
    """
    fwd = "".join(LANE_TO_CHAR[lt] for lt in layout.fwd)
    back = "".join(LANE_TO_CHAR[lt] for lt in layout.back)
    return fwd + SEPARATOR + back


def parse_layout(s: str) -> LaneLayout:
    """Parse a compact lane string, raising on malformed input.

    Parameters
    ----------
    s : str
        String such as ``"ds/s"``.

    Returns
    -------
    LaneLayout
        The decoded layout.

    Raises
    ------
    ValueError
        If the string has no separator, more than one separator, an
        unknown character, or no lane characters at all.
    """
    fwd: List[LaneType] = []
    back: List[LaneType] = []
    seen_separator = False
    for pos, c in enumerate(s):
        if c == SEPARATOR:
            if seen_separator:
                raise ValueError(f"second '{SEPARATOR}' at position {pos} in {s!r}")
            seen_separator = True
            continue
        lane_type = CHAR_TO_LANE.get(c)
        if lane_type is None:
            raise ValueError(f"unknown lane character {c!r} at position {pos} in {s!r}")
        (back if seen_separator else fwd).append(lane_type)

    if not seen_separator:
        raise ValueError(f"missing '{SEPARATOR}' in {s!r}")
    if not fwd and not back:
        raise ValueError(f"no lanes in {s!r}")
    return LaneLayout(fwd=tuple(fwd), back=tuple(back))


def decode(s: str) -> Optional[LaneLayout]:
    """Decode a compact lane string.

    Returns ``None`` instead of raising when ``s`` is malformed; see
    :func:`parse_layout` for the rules.
    """
    try:
        return parse_layout(s)
    except ValueError:
        return None
