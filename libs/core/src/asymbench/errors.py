"""Error kinds raised by providers and the comparison harness.

Every error here is caught at the per-trial boundary and turned into a failed
`TrialResult`; none of them escape `run_comparison`.
"""
from __future__ import annotations


class AsymBenchError(Exception):
    """Base class for harness and provider failures."""


class UnsupportedKeySizeError(AsymBenchError, ValueError):
    def __init__(self, algorithm: str, key_size: int) -> None:
        self.algorithm = algorithm
        self.key_size = key_size
        super().__init__(f"Unsupported key size: {key_size}")


class PayloadTooLargeError(AsymBenchError, ValueError):
    """Plaintext exceeds the modulus-derived RSA ceiling."""

    def __init__(self, max_size: int, actual_size: int) -> None:
        self.max_size = max_size
        self.actual_size = actual_size
        super().__init__(
            f"Data too large for RSA encryption. Max size: {max_size} bytes, "
            f"got: {actual_size} bytes"
        )


class IntegrityError(AsymBenchError):
    """Decrypted output differs from the original plaintext."""


class MalformedCiphertextError(AsymBenchError, ValueError):
    """Ciphertext framing is inconsistent with the buffer length."""


class DecryptionError(AsymBenchError):
    """The backend rejected the ciphertext (bad padding or tag)."""
