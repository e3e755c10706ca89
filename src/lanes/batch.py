"""Batch lane inference over a table of tagged ways.

Reads ways (an ``id`` and a ``tags`` mapping per record) from a JSON
Lines or CSV file, infers a lane layout for each, and writes one row
per way to CSV or Parquet.  A malformed lane override either aborts
the batch or marks the way and continues, depending on the
``on_bad_override`` setting.

Usage:
    python -m src.lanes.batch --input ways.jsonl --output layouts.csv
"""

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from ..utils.config import get_section, load_config
from ..utils.logging import get_logger, set_level
from .codec import encode
from .inference import BadOverrideError, infer
from .types import LaneLayout

logger = get_logger(__name__)

ON_BAD_OVERRIDE = ("raise", "skip")

STATUS_OK = "ok"
STATUS_BAD_OVERRIDE = "bad_override"

COLUMNS = ["id", "fwd", "back", "spec", "n_fwd", "n_back", "status"]


def _join(lanes) -> str:
    return ",".join(lt.value for lt in lanes)


@dataclass
class LaneBatchRunner:
    """Infer lane layouts for many ways and collect them in a table."""

    on_bad_override: str = "raise"
    """Either 'raise' (abort the batch) or 'skip' (mark the way)."""

    show_progress: bool = False
    """Whether to show a progress bar while processing."""

    def __post_init__(self):
        if self.on_bad_override not in ON_BAD_OVERRIDE:
            raise ValueError(
                f"on_bad_override must be one of {ON_BAD_OVERRIDE}, got {self.on_bad_override!r}"
            )

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "LaneBatchRunner":
        """Create a runner from the ``batch`` section of a configuration."""
        section = get_section(cfg, "batch")
        return cls(
            on_bad_override=section.get("on_bad_override", "raise"),
            show_progress=bool(section.get("show_progress", False)),
        )

    def process(self, way_id: Any, tags: Mapping[str, str]) -> Dict[str, Any]:
        """Infer the layout of a single way and return its result row.

        Raises
        ------
        BadOverrideError
            If the override is malformed and the policy is 'raise'.
        """
        try:
            layout = infer(tags)
        except BadOverrideError as e:
            if self.on_bad_override == "raise":
                raise
            logger.warning("Skipping way %s: %s", way_id, e)
            return {
                "id": way_id,
                "fwd": "",
                "back": "",
                "spec": "",
                "n_fwd": 0,
                "n_back": 0,
                "status": STATUS_BAD_OVERRIDE,
            }
        return self._row(way_id, layout)

    @staticmethod
    def _row(way_id: Any, layout: LaneLayout) -> Dict[str, Any]:
        return {
            "id": way_id,
            "fwd": _join(layout.fwd),
            "back": _join(layout.back),
            "spec": encode(layout),
            "n_fwd": len(layout.fwd),
            "n_back": len(layout.back),
            "status": STATUS_OK,
        }

    def run(self, records: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
        """Infer layouts for a sequence of way records.

        Parameters
        ----------
        records : iterable of mapping
            Each record needs an ``id`` and a ``tags`` mapping.  Records
            without tags are treated as untagged ways.

        Returns
        -------
        pandas.DataFrame
            One row per record with the columns in ``COLUMNS``.
        """
        rows: List[Dict[str, Any]] = []
        for record in tqdm(records, desc="Ways", disable=not self.show_progress):
            rows.append(self.process(record.get("id"), record.get("tags") or {}))
        df = pd.DataFrame(rows, columns=COLUMNS)
        n_bad = int((df["status"] == STATUS_BAD_OVERRIDE).sum())
        if n_bad:
            logger.warning("%d of %d ways had a malformed lane override", n_bad, len(df))
        logger.info("Inferred lane layouts for %d ways", len(df) - n_bad)
        return df


def summarize(df: pd.DataFrame) -> Dict[str, Any]:
    """Summarise a result table produced by :meth:`LaneBatchRunner.run`.

    Parameters
    ----------
    df : pandas.DataFrame
        Result table.

    Returns
    -------
    dict
        Record counts per status and lane count statistics over the
        successfully processed ways.
    """
    ok = df[df["status"] == STATUS_OK]
    n_fwd = ok["n_fwd"].to_numpy(dtype=float)
    n_back = ok["n_back"].to_numpy(dtype=float)
    return {
        "records": int(len(df)),
        "ok": int(len(ok)),
        "bad_override": int(len(df) - len(ok)),
        "mean_fwd_lanes": float(np.mean(n_fwd)) if n_fwd.size else 0.0,
        "mean_back_lanes": float(np.mean(n_back)) if n_back.size else 0.0,
        "max_lanes": int(np.max(n_fwd + n_back)) if n_fwd.size else 0,
        "no_backward_lanes": int(np.count_nonzero(n_back == 0)),
    }


def read_records(path: Path) -> List[Dict[str, Any]]:
    """Read way records from a JSON Lines or CSV file.

    In CSV files the ``tags`` column holds a JSON object per row.

    Raises
    ------
    ValueError
        If the file extension is not supported or a column is missing.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in (".jsonl", ".ndjson"):
        df = pd.read_json(path, lines=True, dtype=False)
    elif suffix == ".csv":
        df = pd.read_csv(path, dtype={"tags": str}, keep_default_na=False)
    else:
        raise ValueError(f"Unsupported input format: {path.suffix}")

    missing = {"id", "tags"} - set(df.columns)
    if missing:
        raise ValueError(f"{path} is missing columns: {sorted(missing)}")
    if suffix == ".csv":
        df["tags"] = [json.loads(t) if t else {} for t in df["tags"]]
    records = df[["id", "tags"]].to_dict(orient="records")
    for record in records:
        # Tag values are always text
        tags = record["tags"] if isinstance(record["tags"], dict) else {}
        record["tags"] = {str(k): str(v) for k, v in tags.items()}
    return records


def write_results(df: pd.DataFrame, path: Path) -> None:
    """Write a result table to CSV or Parquet, chosen by extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        df.to_csv(path, index=False)
    elif suffix == ".parquet":
        df.to_parquet(path, index=False)
    else:
        raise ValueError(f"Unsupported output format: {path.suffix}")


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description="Infer lane layouts for a table of tagged ways"
    )
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Input ways (.jsonl or .csv with 'id' and 'tags' columns)"
    )
    parser.add_argument(
        "--output",
        type=str,
        required=True,
        help="Output table (.csv or .parquet)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/lanes.yaml",
        help="YAML configuration file (default: configs/lanes.yaml)"
    )
    parser.add_argument(
        "--on-bad-override",
        choices=ON_BAD_OVERRIDE,
        default=None,
        help="Override the configured policy for malformed lane overrides"
    )

    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    set_level(get_section(cfg, "logging").get("level", "INFO"))
    runner = LaneBatchRunner.from_config(cfg)
    if args.on_bad_override is not None:
        runner.on_bad_override = args.on_bad_override

    records = read_records(Path(args.input))
    try:
        df = runner.run(records)
    except BadOverrideError as e:
        logger.error("Aborting batch: %s", e)
        return 1
    write_results(df, Path(args.output))

    summary = summarize(df)
    print(f"Ways:              {summary['records']:,}")
    print(f"Bad overrides:     {summary['bad_override']:,}")
    print(f"Mean fwd lanes:    {summary['mean_fwd_lanes']:.2f}")
    print(f"Mean back lanes:   {summary['mean_back_lanes']:.2f}")
    print(f"\nOutput: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
