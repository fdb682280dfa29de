#!/usr/bin/env python3
"""Render per-operation comparison charts from `comparison_summary.csv`."""

from __future__ import annotations

import argparse
import csv
import math
import pathlib
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

try:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
except ImportError as exc:  # pragma: no cover
    raise SystemExit(
        "matplotlib is required for graph rendering. Install it via 'pip install matplotlib'."
    ) from exc

plt.rcParams.update(
    {
        "axes.grid": True,
        "grid.alpha": 0.3,
        "grid.linestyle": "--",
        "legend.frameon": False,
    }
)

HERE = pathlib.Path(__file__).resolve().parent
REPO_ROOT = HERE.parent
DEFAULT_CSV = REPO_ROOT / "results" / "comparison_summary.csv"
DEFAULT_OUTPUT = REPO_ROOT / "results" / "graphs"

OPERATIONS: Sequence[Tuple[str, str]] = (
    ("key_generation_ms", "Key generation"),
    ("encryption_ms", "Encryption"),
    ("decryption_ms", "Decryption"),
)


@dataclass
class Record:
    algorithm: str
    data_size: int
    key_size: int
    key_generation_ms: Optional[float]
    encryption_ms: Optional[float]
    decryption_ms: Optional[float]
    success: bool


def _parse_float(value: str | None) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(parsed):
        return None
    return parsed


def load_records(csv_path: pathlib.Path) -> List[Record]:
    if not csv_path.exists():
        raise SystemExit(f"CSV file not found: {csv_path}")
    records: List[Record] = []
    with csv_path.open("r", newline="", encoding="utf-8") as handle:
        for row in csv.DictReader(handle):
            records.append(
                Record(
                    algorithm=row.get("algorithm", ""),
                    data_size=int(row.get("data_size") or 0),
                    key_size=int(row.get("key_size") or 0),
                    key_generation_ms=_parse_float(row.get("key_generation_ms")),
                    encryption_ms=_parse_float(row.get("encryption_ms")),
                    decryption_ms=_parse_float(row.get("decryption_ms")),
                    success=(row.get("success") or "").lower() in {"true", "1", "t"},
                )
            )
    if not records:
        raise SystemExit(f"No rows found in CSV: {csv_path}")
    return records


def _series(records: Sequence[Record], field: str) -> Dict[str, Dict[int, float]]:
    """Mean of `field` per series label ("RSA-2048") and data size, successes only."""
    sums: Dict[Tuple[str, int], List[float]] = defaultdict(list)
    for rec in records:
        value = getattr(rec, field)
        if not rec.success or value is None:
            continue
        sums[(f"{rec.algorithm}-{rec.key_size}", rec.data_size)].append(value)
    out: Dict[str, Dict[int, float]] = defaultdict(dict)
    for (label, size), values in sums.items():
        out[label][size] = sum(values) / len(values)
    return out


def plot_operation(records: Sequence[Record], field: str, title: str, output_dir: pathlib.Path) -> pathlib.Path | None:
    series = _series(records, field)
    if not series:
        print(f"No successful trials for {title}; skipping.")
        return None
    sizes = sorted({size for points in series.values() for size in points})
    labels = sorted(series)
    width = 0.8 / len(labels)
    fig, ax = plt.subplots(figsize=(10, 5))
    for idx, label in enumerate(labels):
        xs = [i + idx * width for i in range(len(sizes))]
        ys = [series[label].get(size, 0.0) for size in sizes]
        ax.bar(xs, ys, width=width, label=label)
    ax.set_xticks([i + 0.4 - width / 2 for i in range(len(sizes))])
    ax.set_xticklabels([str(s) for s in sizes])
    ax.set_xlabel("Payload size (bytes)")
    ax.set_ylabel("Mean time (ms)")
    ax.set_yscale("log")
    ax.set_title(title)
    ax.legend(fontsize=8, ncol=2)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{field.replace('_ms', '')}.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render comparison graphs.")
    parser.add_argument("--csv", type=pathlib.Path, default=DEFAULT_CSV, help="Input CSV from run_benchmarks.py.")
    parser.add_argument("--output", type=pathlib.Path, default=DEFAULT_OUTPUT, help="Directory for PNG charts.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    records = load_records(args.csv)
    for field, title in OPERATIONS:
        path = plot_operation(records, field, title, args.output)
        if path is not None:
            print(f"Wrote {path}")


if __name__ == "__main__":
    main()
