from __future__ import annotations
from typing import Dict, Tuple

from .metrics import SecurityEstimate

"""Table-driven security strength lookup.

Security bits follow the NIST SP 800-57 comparable-strength figures for RSA
moduli and elliptic-curve orders. Break-time labels are qualitative and only
meant for side-by-side display next to timing results.
"""

_TABLE: Dict[str, Dict[int, Tuple[int, str]]] = {
    "RSA": {
        1024: (80, "Days to weeks on specialized hardware"),
        2048: (112, "Years with current technology"),
        3072: (128, "Decades with current technology"),
        4096: (152, "Beyond foreseeable future"),
    },
    "ECC": {
        256: (128, "Decades with current technology"),
        384: (192, "Beyond foreseeable future"),
        521: (256, "Beyond foreseeable quantum computing threats"),
    },
}

# The hybrid's strength is bounded by its RSA key exchange
_ALIASES: Dict[str, str] = {
    "RSA+AES Hybrid": "RSA",
}


def estimate(algorithm: str, key_size: int) -> SecurityEstimate:
    """Look up the strength of `algorithm` at `key_size`.

    Unmapped pairs yield zero security bits and an empty label instead of
    raising; callers must not assume every pair is covered.
    """
    table = _TABLE.get(_ALIASES.get(algorithm, algorithm), {})
    bits, label = table.get(key_size, (0, ""))
    return SecurityEstimate(
        algorithm=algorithm,
        key_size=key_size,
        security_bits=bits,
        estimated_break_time=label,
    )


def known_pairs() -> Dict[str, Tuple[int, ...]]:
    return {algo: tuple(sorted(rows)) for algo, rows in _TABLE.items()}
