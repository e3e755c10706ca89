"""Lane layout inference from OpenStreetMap way tags.

``infer`` turns the tags of a way into a ``LaneLayout``; ``encode`` and
``decode`` convert layouts to and from the compact lane string used
by the ``abst:synthetic_lanes`` override tag.
"""

from .types import LaneType, LaneLayout
from .codec import encode, decode, parse_layout
from .inference import infer, BadOverrideError

__all__ = [
    "LaneType",
    "LaneLayout",
    "encode",
    "decode",
    "parse_layout",
    "infer",
    "BadOverrideError",
]
