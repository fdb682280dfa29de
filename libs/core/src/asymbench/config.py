"""Environment-driven defaults for comparison runs and the web API."""
from __future__ import annotations

import os
from typing import Tuple

DEFAULT_DATA_SIZES: Tuple[int, ...] = (1024, 10240, 102400)
DEFAULT_RSA_BITS = 2048
DEFAULT_ECC_BITS = 256
DEFAULT_SESSION_TTL = 900.0
DEFAULT_SESSION_MAX = 256


def _env_int(var: str, default: int) -> int:
    override = os.getenv(var)
    if override:
        try:
            return int(override)
        except ValueError as exc:
            raise ValueError(f"{var} must be an integer") from exc
    return default


def _env_float(var: str, default: float) -> float:
    override = os.getenv(var)
    if override:
        try:
            return float(override)
        except ValueError as exc:
            raise ValueError(f"{var} must be a number") from exc
    return default


def data_sizes() -> Tuple[int, ...]:
    override = os.getenv("ASYMBENCH_DATA_SIZES")
    if not override:
        return DEFAULT_DATA_SIZES
    try:
        return tuple(int(part) for part in override.split(",") if part.strip())
    except ValueError as exc:
        raise ValueError("ASYMBENCH_DATA_SIZES must be a comma-separated list of integers") from exc


def rsa_bits() -> int:
    return _env_int("ASYMBENCH_RSA_BITS", DEFAULT_RSA_BITS)


def ecc_bits() -> int:
    return _env_int("ASYMBENCH_ECC_BITS", DEFAULT_ECC_BITS)


def session_ttl() -> float:
    return _env_float("ASYMBENCH_SESSION_TTL", DEFAULT_SESSION_TTL)


def session_max() -> int:
    return _env_int("ASYMBENCH_SESSION_MAX", DEFAULT_SESSION_MAX)
