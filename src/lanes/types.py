"""Lane types and the lane layout value.

A lane layout describes the cross-section of a single road segment as
two ordered sequences of lane types: one for the direction in which
the way is digitised (forward) and one for the opposite direction
(backward).  Each sequence runs from the road centre towards the
kerb, which is the order downstream geometry code lays lanes out in.

The five lane types are a closed set.  The compact codec in
:mod:`src.lanes.codec` maps every type to a single character, and the
inference engine in :mod:`src.lanes.inference` relies on this exact
set for its defaults, so a new type has to be added to both.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Tuple


class LaneType(Enum):
    """Lane designation."""
    DRIVING = "driving"
    PARKING = "parking"
    SIDEWALK = "sidewalk"
    BIKING = "biking"
    BUS = "bus"


@dataclass(frozen=True)
class LaneLayout:
    """Ordered lane types for both directions of a road segment."""

    fwd: Tuple[LaneType, ...] = ()
    """Lanes in the digitised direction, centre to kerb."""

    back: Tuple[LaneType, ...] = ()
    """Lanes against the digitised direction, centre to kerb."""

    def __post_init__(self):
        # Accept any iterable but always store tuples
        object.__setattr__(self, "fwd", tuple(self.fwd))
        object.__setattr__(self, "back", tuple(self.back))

    @classmethod
    def of(cls, fwd: Iterable[LaneType], back: Iterable[LaneType]) -> "LaneLayout":
        """Build a layout from two iterables of lane types."""
        return cls(fwd=tuple(fwd), back=tuple(back))

    def fwd_count(self, lane_type: LaneType) -> int:
        """Number of forward lanes of the given type."""
        return self.fwd.count(lane_type)

    def back_count(self, lane_type: LaneType) -> int:
        """Number of backward lanes of the given type."""
        return self.back.count(lane_type)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the layout to a JSON-friendly dictionary.

        Returns
        -------
        dict
            ``{"fwd": [...], "back": [...]}`` with lane type values.
        """
        return {
            "fwd": [lt.value for lt in self.fwd],
            "back": [lt.value for lt in self.back],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LaneLayout":
        """Create a layout from the output of :meth:`to_dict`.

        Parameters
        ----------
        data : dict
            Mapping with optional ``fwd`` and ``back`` lists of lane
            type values.

        Raises
        ------
        ValueError
            If a lane type value is not recognised.
        """
        return cls(
            fwd=tuple(LaneType(v) for v in data.get("fwd", [])),
            back=tuple(LaneType(v) for v in data.get("back", [])),
        )

    def __str__(self) -> str:
        from .codec import encode
        return encode(self)
