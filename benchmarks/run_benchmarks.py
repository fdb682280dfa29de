"""Batch comparison driver.

Sweeps RSA and ECC key sizes over a list of payload sizes, running one
comparison per (RSA size, ECC size) pair. Results are written to
`results/comparison_summary.json` and `results/comparison_summary.csv`.
"""

from __future__ import annotations

import argparse
import json
import pathlib
import subprocess
import sys
from typing import List, Sequence

HERE = pathlib.Path(__file__).parent
ROOT = HERE.parent
GRAPH_SCRIPT = HERE / "render_comparison_graphs.py"
RESULTS = ROOT / "results"

for rel in ("libs/core/src", "libs/adapters/rsa/src", "libs/adapters/ecc/src", "apps/cli/src"):
    candidate = str(ROOT / rel)
    if candidate not in sys.path:
        sys.path.append(candidate)

from asymbench import ComparisonHarness, TrialConfig, TrialResult  # noqa: E402
from asymbench_cli.runners.common import export_csv  # noqa: E402

DEFAULT_DATA_SIZES = (16, 64, 200, 1024, 10240, 102400)
DEFAULT_RSA_SIZES = (1024, 2048, 3072, 4096)
DEFAULT_ECC_SIZES = (256, 384, 521)


def _int_list(value: str) -> List[int]:
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got {value!r}") from exc


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the asymmetric encryption comparison sweep.")
    parser.add_argument(
        "--data-sizes",
        type=_int_list,
        default=list(DEFAULT_DATA_SIZES),
        help="Comma-separated payload sizes in bytes.",
    )
    parser.add_argument(
        "--rsa-sizes",
        type=_int_list,
        default=list(DEFAULT_RSA_SIZES),
        help="Comma-separated RSA modulus sizes to sweep.",
    )
    parser.add_argument(
        "--ecc-sizes",
        type=_int_list,
        default=list(DEFAULT_ECC_SIZES),
        help="Comma-separated ECC curve sizes to sweep.",
    )
    parser.add_argument(
        "--with-hybrid",
        action="store_true",
        help="Include the RSA+AES hybrid alongside RSA and ECC.",
    )
    parser.add_argument(
        "--output-dir",
        type=pathlib.Path,
        default=RESULTS,
        help="Directory for the JSON/CSV summaries (default: results/).",
    )
    parser.add_argument(
        "--render-graphs",
        action="store_true",
        help="Invoke the comparison graph renderer after the sweep finishes.",
    )
    return parser.parse_args(argv)


def run_sweep(
    data_sizes: Sequence[int],
    rsa_sizes: Sequence[int],
    ecc_sizes: Sequence[int],
    *,
    with_hybrid: bool = False,
) -> List[TrialResult]:
    harness = ComparisonHarness.reference()
    if with_hybrid:
        harness = harness.with_hybrid()
    results: List[TrialResult] = []
    # Pair sizes by position so each run compares similar strength levels;
    # the shorter list repeats its last entry.
    steps = max(len(rsa_sizes), len(ecc_sizes))
    for i in range(steps):
        config = TrialConfig(
            data_sizes=tuple(data_sizes),
            rsa_key_size=rsa_sizes[min(i, len(rsa_sizes) - 1)],
            ecc_key_size=ecc_sizes[min(i, len(ecc_sizes) - 1)],
        )
        print(f"Running RSA-{config.rsa_key_size} vs ECC-{config.ecc_key_size} ...")
        results.extend(harness.run_comparison(config))
    return results


def write_outputs(results: Sequence[TrialResult], output_dir: pathlib.Path) -> tuple[pathlib.Path, pathlib.Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / "comparison_summary.json"
    csv_path = output_dir / "comparison_summary.csv"
    json_path.write_text(json.dumps([r.as_dict() for r in results], indent=2))
    export_csv(results, str(csv_path))
    return json_path, csv_path


def _run_graph_renderer(script_path: pathlib.Path, csv_path: pathlib.Path) -> None:
    if not script_path.exists():
        print(f"Graph renderer not found at {script_path}. Skipping graph generation.")
        return
    cmd = [sys.executable, str(script_path), "--csv", str(csv_path)]
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as exc:
        print(f"Graph renderer exited with status {exc.returncode}. Command: {' '.join(cmd)}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    results = run_sweep(args.data_sizes, args.rsa_sizes, args.ecc_sizes, with_hybrid=args.with_hybrid)
    json_path, csv_path = write_outputs(results, args.output_dir)
    failed = sum(1 for r in results if not r.success)
    print(f"Wrote {json_path} and {csv_path} ({len(results)} trials, {failed} failed)")
    if args.render_graphs:
        _run_graph_renderer(GRAPH_SCRIPT, csv_path)


if __name__ == "__main__":
    main()
