"""Tag keys read by the lane inference engine.

Most keys are plain OpenStreetMap tags.  The ``abst:`` keys are not
found in OSM data; they are written onto ways by upstream tooling
(parking blockface matching and the lane editor) before inference.
"""

HIGHWAY = "highway"
JUNCTION = "junction"
ONEWAY = "oneway"
LANES = "lanes"
LANES_FORWARD = "lanes:forward"
LANES_BACKWARD = "lanes:backward"
BUS_LANES = "bus:lanes"
CYCLEWAY = "cycleway"
CYCLEWAY_RIGHT = "cycleway:right"
CYCLEWAY_LEFT = "cycleway:left"
SIDEWALK = "sidewalk"

# Compact lane string that replaces inference entirely
SYNTHETIC_LANES = "abst:synthetic_lanes"
PARKING_LANE_FWD = "abst:parking_lane_fwd"
PARKING_LANE_BACK = "abst:parking_lane_back"
