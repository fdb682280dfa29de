"""Shared helpers for CLI runners.

Includes core-library bootstrap for plain checkouts, JSON/CSV export and the
plain-text results table printed by `asymbench compare`.
"""

from __future__ import annotations

import csv
import json
import pathlib
import platform
import sys
from typing import Any, Dict, Iterable, List, Sequence

_HERE = pathlib.Path(__file__).resolve()

try:
    _PROJECT_ROOT = next(p for p in _HERE.parents if (p / "libs").exists())
except StopIteration:
    _PROJECT_ROOT = _HERE.parents[0]

for rel in (
    pathlib.Path("libs/core/src"),
    pathlib.Path("libs/adapters/rsa/src"),
    pathlib.Path("libs/adapters/ecc/src"),
):
    candidate = _PROJECT_ROOT / rel
    if candidate.exists():
        candidate_str = str(candidate)
        if candidate_str not in sys.path:
            sys.path.append(candidate_str)

from asymbench import TrialConfig, TrialResult, load_adapters  # noqa: E402

_TABLE_COLUMNS = (
    ("Algorithm", 16),
    ("Data (B)", 10),
    ("Key", 6),
    ("Keygen ms", 11),
    ("Encrypt ms", 11),
    ("Decrypt ms", 11),
    ("Sec bits", 9),
    ("Status", 0),
)


def _collect_environment_meta() -> Dict[str, Any]:
    try:
        import cryptography
        crypto_version = cryptography.__version__
    except Exception:
        crypto_version = None
    return {
        "python": platform.python_version(),
        "platform": platform.platform(),
        "machine": platform.machine(),
        "cryptography": crypto_version,
    }


def _fmt_ms(value: float | None) -> str:
    return "-" if value is None else f"{value:.3f}"


def format_table(results: Sequence[TrialResult]) -> str:
    header = "".join(title.ljust(width) if width else title for title, width in _TABLE_COLUMNS)
    lines = [header, "-" * len(header)]
    for r in results:
        bits = r.security_estimate.security_bits if r.security_estimate else None
        status = "ok" if r.success else f"FAILED: {r.error}"
        cells = (
            r.algorithm,
            str(r.data_size),
            str(r.key_size),
            _fmt_ms(r.key_generation_ms),
            _fmt_ms(r.encryption_ms),
            _fmt_ms(r.decryption_ms),
            "-" if bits is None else str(bits),
            status,
        )
        lines.append("".join(
            cell.ljust(width) if width else cell
            for cell, (_, width) in zip(cells, _TABLE_COLUMNS)
        ))
    return "\n".join(lines)


def build_export_payload(
    config: TrialConfig,
    results: Sequence[TrialResult],
    algorithms: Iterable[str],
) -> Dict[str, Any]:
    return {
        "config": {
            "dataSizes": list(config.data_sizes),
            "rsaKeySize": config.rsa_key_size,
            "eccKeySize": config.ecc_key_size,
        },
        "algorithms": list(algorithms),
        "results": [r.as_dict() for r in results],
        "environment": _collect_environment_meta(),
    }


def _repo_root() -> pathlib.Path:
    """Best-effort detection of the repository root (directory containing .git).
    Falls back to the current working directory if not found.
    """
    for p in (_HERE, *_HERE.parents):
        if (p / ".git").exists():
            return p
    return pathlib.Path.cwd()


def _resolve_export_path(export_path: str) -> pathlib.Path:
    # Normalize Windows-style separators on POSIX if users pass e.g. "results\file.json"
    if "\\" in export_path and ":" not in export_path:
        export_path = export_path.replace("\\", "/")
    path = pathlib.Path(export_path)
    if not path.is_absolute():
        path = _repo_root() / path
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def export_json(data: Dict[str, Any], export_path: str | None) -> pathlib.Path | None:
    if not export_path:
        return None
    path = _resolve_export_path(export_path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path


def export_csv(results: Sequence[TrialResult], export_path: str | None) -> pathlib.Path | None:
    if not export_path:
        return None
    path = _resolve_export_path(export_path)
    rows: List[Dict[str, Any]] = [r.as_row() for r in results]
    fieldnames = list(rows[0].keys()) if rows else list(TrialResult("", 0, 0).as_row().keys())
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    return path


__all__ = [
    "load_adapters",
    "format_table",
    "build_export_payload",
    "export_json",
    "export_csv",
]
