from __future__ import annotations
import json
from typing import List, Optional, Tuple

import typer

from .common import build_export_payload, export_json, format_table
from asymbench import ComparisonHarness, TrialConfig, TrialResult

app = typer.Typer(add_completion=False)


def run_matrix(
    config: TrialConfig,
    *,
    with_hybrid: bool = False,
    show_progress: bool = False,
) -> Tuple[ComparisonHarness, List[TrialResult]]:
    harness = ComparisonHarness.reference()
    if with_hybrid:
        harness = harness.with_hybrid()

    def _progress(done: int, total: int, result: TrialResult) -> None:
        state = "ok" if result.success else "failed"
        typer.echo(f"[{done}/{total}] {result.algorithm} {result.data_size}B: {state}", err=True)

    results = harness.run_comparison(config, progress=_progress if show_progress else None)
    return harness, results


@app.command()
def main(
    data_size: Optional[List[int]] = typer.Option(None, "--data-size", "-d", help="Repeat for each payload size in bytes."),
    rsa_key_size: Optional[int] = typer.Option(None, help="RSA modulus bits (default: ASYMBENCH_RSA_BITS or 2048)."),
    ecc_key_size: Optional[int] = typer.Option(None, help="ECC curve size (default: ASYMBENCH_ECC_BITS or 256)."),
    with_hybrid: bool = typer.Option(False, "--with-hybrid", help="Also run the RSA+AES hybrid per data size."),
    export: str = "results/comparison_summary.json",
    print_json: bool = False,
):
    """
    Run the RSA vs ECC comparison matrix (keygen/encrypt/decrypt per data size).
    """
    overrides = {}
    if data_size:
        overrides["data_sizes"] = tuple(data_size)
    if rsa_key_size is not None:
        overrides["rsa_key_size"] = rsa_key_size
    if ecc_key_size is not None:
        overrides["ecc_key_size"] = ecc_key_size
    try:
        config = TrialConfig(**overrides)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    harness, results = run_matrix(config, with_hybrid=with_hybrid, show_progress=not print_json)
    payload = build_export_payload(config, results, harness.algorithm_names)
    written = export_json(payload, export)
    if print_json:
        typer.echo(json.dumps(payload, indent=2))
    else:
        typer.echo(format_table(results))
        if written is not None:
            typer.echo(f"Wrote {written}")


def app_main():
    app()


if __name__ == "__main__":
    app_main()
