"""Demo script for lane layout inference on a few typical ways.

Infers lane layouts for a handful of hand-written tag sets, prints
them as compact lane strings, and runs the batch runner over the same
ways with malformed overrides skipped.

Usage:
    python examples/demo_lane_inference.py
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.lanes import BadOverrideError, infer, osm
from src.lanes.batch import LaneBatchRunner, summarize

WAYS = [
    ("residential street", {"highway": "residential", "lanes": "2"}),
    ("one-way arterial", {"highway": "primary", "oneway": "yes", "lanes": "3"}),
    ("bus corridor", {"highway": "secondary", "lanes": "4", "bus:lanes": "|designated"}),
    ("street with bike lanes", {"highway": "tertiary", "cycleway": "lane"}),
    ("parked street", {
        "highway": "residential",
        osm.PARKING_LANE_FWD: "true",
        osm.PARKING_LANE_BACK: "true",
    }),
    ("motorway", {"highway": "motorway", "lanes": "6"}),
    ("roundabout", {"junction": "roundabout", "highway": "primary"}),
    ("footway", {"highway": "footway"}),
    ("edited street", {osm.SYNTHETIC_LANES: "dbs/ds", "highway": "primary"}),
    ("broken edit", {osm.SYNTHETIC_LANES: "d//x"}),
]


def main():
    """Run the demo."""
    print("Lane layouts (forward/backward, centre to kerb):")
    for name, tags in WAYS:
        try:
            print(f"  {name:<24} {infer(tags)}")
        except BadOverrideError as e:
            print(f"  {name:<24} ERROR: {e}")

    runner = LaneBatchRunner(on_bad_override="skip")
    df = runner.run({"id": i, "tags": tags} for i, (_, tags) in enumerate(WAYS))
    print()
    print(df.to_string(index=False))
    print()
    for key, value in summarize(df).items():
        print(f"  {key}: {value}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
