from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional, Tuple

from . import config

"""Trial configuration and result containers.

`TrialResult` is what the harness returns per matrix cell; the CLI, web API
and `benchmarks/` scripts serialize it via `as_dict`.
"""


@dataclass(frozen=True)
class SecurityEstimate:
    algorithm: str
    key_size: int
    security_bits: int
    estimated_break_time: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "keySize": self.key_size,
            "securityBits": self.security_bits,
            "estimatedBreakTime": self.estimated_break_time,
        }


@dataclass(frozen=True)
class TrialConfig:
    data_sizes: Tuple[int, ...] = field(default_factory=config.data_sizes)
    rsa_key_size: int = field(default_factory=config.rsa_bits)
    ecc_key_size: int = field(default_factory=config.ecc_bits)

    def __post_init__(self) -> None:
        sizes = tuple(int(s) for s in self.data_sizes)
        for size in sizes:
            if size <= 0:
                raise ValueError(f"data sizes must be positive integers, got {size}")
        # frozen: normalize lists into a tuple in place
        object.__setattr__(self, "data_sizes", sizes)


@dataclass
class TrialResult:
    algorithm: str
    data_size: int
    key_size: int
    key_generation_ms: float | None = None
    encryption_ms: float | None = None
    decryption_ms: float | None = None
    security_estimate: Optional[SecurityEstimate] = None
    success: bool = False
    error: str | None = None

    def as_dict(self) -> Dict[str, Any]:
        """camelCase mapping used by the JSON exports and the web API."""
        return {
            "algorithm": self.algorithm,
            "dataSize": self.data_size,
            "keySize": self.key_size,
            "keyGenerationTime": self.key_generation_ms,
            "encryptionTime": self.encryption_ms,
            "decryptionTime": self.decryption_ms,
            "securityEstimate": self.security_estimate.as_dict() if self.security_estimate else None,
            "success": self.success,
            "errorMessage": self.error,
        }

    def as_row(self) -> Dict[str, Any]:
        """Flat snake_case mapping for CSV export."""
        row = asdict(self)
        estimate = row.pop("security_estimate") or {}
        row["security_bits"] = estimate.get("security_bits")
        row["estimated_break_time"] = estimate.get("estimated_break_time")
        return row
