from __future__ import annotations
import json
import logging
import os
from typing import List, Optional

import typer

from .runners.common import load_adapters
from .runners import compare as compare_runner
from asymbench import TrialConfig, estimate, registry, run_trial

app = typer.Typer(add_completion=False, help="Asymmetric encryption comparison CLI")


@app.callback()
def _configure(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log trial details to stderr.")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def list_algos():
    """List registered providers and their supported key sizes."""
    load_adapters()
    for name, cls in registry.list().items():
        sizes = ", ".join(str(s) for s in sorted(cls().supported_key_sizes()))
        typer.echo(f"- {name} ({sizes})")


@app.command()
def compare(
    data_size: Optional[List[int]] = typer.Option(None, "--data-size", "-d", help="Repeat for each payload size in bytes."),
    rsa_key_size: Optional[int] = typer.Option(None, help="RSA modulus bits (default: ASYMBENCH_RSA_BITS or 2048)."),
    ecc_key_size: Optional[int] = typer.Option(None, help="ECC curve size (default: ASYMBENCH_ECC_BITS or 256)."),
    with_hybrid: bool = typer.Option(False, "--with-hybrid", help="Also run the RSA+AES hybrid per data size."),
    export: str = typer.Option("", help="Write the JSON summary to this path."),
    print_json: bool = typer.Option(False, "--print-json/--no-print-json"),
):
    """Run the comparison matrix and print a table (or JSON)."""
    compare_runner.main(
        data_size=data_size,
        rsa_key_size=rsa_key_size,
        ecc_key_size=ecc_key_size,
        with_hybrid=with_hybrid,
        export=export,
        print_json=print_json,
    )


@app.command()
def demo(
    name: str,
    key_size: Optional[int] = typer.Option(None, help="Key size; defaults to the provider's smallest."),
    data_size: int = typer.Option(32, help="Payload size in bytes."),
):
    """Run a single keygen + encrypt + decrypt trial with the selected provider."""
    load_adapters()
    try:
        provider = registry.get(name)()
    except KeyError:
        typer.echo(f"Unknown algorithm: {name}", err=True)
        raise typer.Exit(code=1)
    if key_size is None:
        key_size = min(provider.supported_key_sizes())
    result = run_trial(provider, os.urandom(data_size), key_size)
    if result.success:
        typer.echo(
            f"[{result.algorithm}] key={key_size} data={data_size}B: ok "
            f"(keygen {result.key_generation_ms:.3f} ms, encrypt {result.encryption_ms:.3f} ms, "
            f"decrypt {result.decryption_ms:.3f} ms)"
        )
    else:
        typer.echo(f"[{result.algorithm}] key={key_size} data={data_size}B: FAILED: {result.error}")


@app.command("estimate")
def estimate_cmd(algorithm: str, key_size: int):
    """Print the security estimate for an (algorithm, key size) pair."""
    typer.echo(json.dumps(estimate(algorithm, key_size).as_dict(), indent=2))


@app.command()
def defaults():
    """Show the effective default configuration (environment-aware)."""
    config = TrialConfig()
    typer.echo(json.dumps({
        "dataSizes": list(config.data_sizes),
        "rsaKeySize": config.rsa_key_size,
        "eccKeySize": config.ecc_key_size,
    }, indent=2))


def app_main():
    app()


if __name__ == "__main__":
    app_main()
