"""Infer lane layouts from OpenStreetMap way tags.

The inference engine turns the tags of a single way into a
:class:`~src.lanes.types.LaneLayout`.  It runs in two phases:

1. An ordered list of special cases.  The first one whose guard
   matches produces the final layout: an explicit lane override
   written by the lane editor, roundabouts and footways.
2. A fixed sequence of steps that build the layout up from driving
   lanes outwards: driving lane counts, bus lane substitution, bike
   lanes, parking and finally sidewalks.  Later steps depend on what
   earlier ones appended, so the order matters.

Real-world tags are messy.  Missing keys, non-numeric lane counts and
unknown values all fall back to defaults.  The only error is a lane
override that cannot be decoded, which raises
:class:`BadOverrideError` so the caller can decide whether to abort
or skip the way.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional, Tuple

from ..utils.logging import get_logger
from . import osm
from .codec import decode
from .types import LaneLayout, LaneType

logger = get_logger(__name__)

Tags = Mapping[str, str]

_UNSIGNED = re.compile(r"\+?[0-9]+")

# Larger counts are treated as unparseable
MAX_LANE_COUNT = 64


class BadOverrideError(ValueError):
    """Raised when the lane override tag holds a malformed lane string."""

    def __init__(self, value: str):
        super().__init__(f"Bad {osm.SYNTHETIC_LANES} lane string: {value!r}")
        self.value = value


def parse_count(value: Optional[str]) -> Optional[int]:
    """Parse a non-negative lane count, or return None.

    Counts above ``MAX_LANE_COUNT`` return None like any other bad value.
    """
    if value is None or not _UNSIGNED.fullmatch(value):
        return None
    digits = value.lstrip("+").lstrip("0")
    if len(digits) > len(str(MAX_LANE_COUNT)):
        return None
    count = int(digits or "0")
    if count > MAX_LANE_COUNT:
        return None
    return count


def is_oneway(tags: Tags) -> bool:
    """Whether the way only carries traffic in the forward direction."""
    # Reversible ways are treated like plain one-ways
    return tags.get(osm.ONEWAY) in ("yes", "reversible")


def split_lanes(total: int, oneway: bool) -> Tuple[int, int]:
    """Split an undirected ``lanes`` count between the two directions.

    Parameters
    ----------
    total : int
        Value of the ``lanes`` tag.
    oneway : bool
        Whether the way is one-way.

    Returns
    -------
    tuple of int
        ``(forward, backward)`` lane counts.  For an odd total on a
        two-way road both sides get ``max(total // 2, 1)``, so the sum
        does not have to equal ``total``.  There is no way to tell
        which side the extra lane belongs to.
    """
    if oneway:
        return total, 0
    if total % 2 == 0:
        return total // 2, total // 2
    half = max(total // 2, 1)
    return half, half


def driving_lane_counts(tags: Tags, oneway: bool) -> Tuple[int, int]:
    """Number of driving lanes ``(forward, backward)`` for a way."""
    total = parse_count(tags.get(osm.LANES))
    split = split_lanes(total, oneway) if total is not None else None

    num_fwd = parse_count(tags.get(osm.LANES_FORWARD))
    if num_fwd is None:
        num_fwd = split[0] if split is not None else 1

    num_back = parse_count(tags.get(osm.LANES_BACKWARD))
    if num_back is None:
        if split is not None:
            num_back = split[1]
        else:
            num_back = 0 if oneway else 1

    return num_fwd, num_back


def _override(tags: Tags) -> LaneLayout:
    value = tags[osm.SYNTHETIC_LANES]
    layout = decode(value)
    if layout is None:
        logger.error("Malformed lane override %r", value)
        raise BadOverrideError(value)
    logger.debug("Using lane override %r", value)
    return layout


@dataclass(frozen=True)
class SpecialCase:
    """A guard and the layout it produces when the guard matches."""
    name: str
    guard: Callable[[Tags], bool]
    action: Callable[[Tags], LaneLayout]


SPECIAL_CASES: Tuple[SpecialCase, ...] = (
    SpecialCase(
        "override",
        lambda tags: osm.SYNTHETIC_LANES in tags,
        _override,
    ),
    SpecialCase(
        "roundabout",
        lambda tags: tags.get(osm.JUNCTION) == "roundabout",
        lambda tags: LaneLayout.of([LaneType.DRIVING, LaneType.SIDEWALK], []),
    ),
    SpecialCase(
        "footway",
        lambda tags: tags.get(osm.HIGHWAY) == "footway",
        lambda tags: LaneLayout.of([LaneType.SIDEWALK], []),
    ),
)


@dataclass
class _Sides:
    """Mutable lane sequences while the layout is being built."""
    fwd: List[LaneType] = field(default_factory=list)
    back: List[LaneType] = field(default_factory=list)
    oneway: bool = False


def _add_driving_lanes(tags: Tags, sides: _Sides) -> None:
    num_fwd, num_back = driving_lane_counts(tags, sides.oneway)
    sides.fwd.extend([LaneType.DRIVING] * num_fwd)
    sides.back.extend([LaneType.DRIVING] * num_back)


def _substitute_bus_lanes(tags: Tags, sides: _Sides) -> None:
    # Only presence of bus:lanes is used, not its per-lane value
    if osm.BUS_LANES not in tags:
        return
    if sides.fwd:
        sides.fwd.pop()
    sides.fwd.append(LaneType.BUS)
    if sides.back:
        sides.back.pop()
        sides.back.append(LaneType.BUS)


def _add_bike_lanes(tags: Tags, sides: _Sides) -> None:
    if tags.get(osm.CYCLEWAY) == "lane":
        sides.fwd.append(LaneType.BIKING)
        if sides.back:
            sides.back.append(LaneType.BIKING)
        return
    if tags.get(osm.CYCLEWAY_RIGHT) == "lane":
        sides.fwd.append(LaneType.BIKING)
    if tags.get(osm.CYCLEWAY_LEFT) == "lane":
        sides.back.append(LaneType.BIKING)


def _add_parking_lanes(tags: Tags, sides: _Sides) -> None:
    highway = tags.get(osm.HIGHWAY)
    definitely_no_parking = highway is not None and (
        highway.endswith("_link") or highway == "motorway"
    )
    if definitely_no_parking:
        return
    if tags.get(osm.PARKING_LANE_FWD) == "true":
        sides.fwd.append(LaneType.PARKING)
    if tags.get(osm.PARKING_LANE_BACK) == "true" and sides.back:
        sides.back.append(LaneType.PARKING)


def _add_sidewalks(tags: Tags, sides: _Sides) -> None:
    highway = tags.get(osm.HIGHWAY)
    if highway in ("motorway", "motorway_link"):
        return
    sides.fwd.append(LaneType.SIDEWALK)
    if not sides.oneway:
        sides.back.append(LaneType.SIDEWALK)
    elif highway == "residential" or tags.get(osm.SIDEWALK) == "both":
        # Other one-ways are assumed to have a sidewalk on one side only
        sides.back.append(LaneType.SIDEWALK)


BUILD_STEPS: Tuple[Callable[[Tags, _Sides], None], ...] = (
    _add_driving_lanes,
    _substitute_bus_lanes,
    _add_bike_lanes,
    _add_parking_lanes,
    _add_sidewalks,
)


def infer(tags: Tags) -> LaneLayout:
    """Infer the lane layout of a way from its tags.

    Parameters
    ----------
    tags : Mapping[str, str]
        Way tags.  The mapping is only read.

    Returns
    -------
    LaneLayout
        Forward and backward lane sequences.

    Raises
    ------
    BadOverrideError
        If ``abst:synthetic_lanes`` is present but cannot be decoded.
    """
    for case in SPECIAL_CASES:
        if case.guard(tags):
            logger.debug("Special case %s matched", case.name)
            return case.action(tags)

    sides = _Sides(oneway=is_oneway(tags))
    for step in BUILD_STEPS:
        step(tags, sides)
    return LaneLayout.of(sides.fwd, sides.back)
