"""Comparison harness.

Runs one trial per (data size, provider) cell of a `TrialConfig` matrix:
keygen, encrypt and decrypt are timed separately, the round trip is verified
byte-for-byte, and the security estimate for the (algorithm, key size) pair
is attached. Trials run strictly in sequence so timings are not skewed by
contention; each trial owns its key pair, plaintext and ciphertext.
"""

from __future__ import annotations

import logging
import os
import time
from operator import attrgetter
from typing import Callable, List, Optional, Sequence, Tuple

from .errors import IntegrityError, UnsupportedKeySizeError
from .interfaces import AlgorithmProvider
from .loader import load_adapters
from .metrics import TrialConfig, TrialResult
from .registry import registry
from .security_estimator import estimate

log = logging.getLogger(__name__)

KeySizeSelector = Callable[[TrialConfig], int]
ProgressCallback = Callable[[int, int, TrialResult], None]

RSA_KEY_SIZE: KeySizeSelector = attrgetter("rsa_key_size")
ECC_KEY_SIZE: KeySizeSelector = attrgetter("ecc_key_size")


def _elapsed_ms(start: float, clock: Callable[[], float]) -> float:
    return (clock() - start) * 1000.0


def run_trial(
    provider: AlgorithmProvider,
    data: bytes,
    key_size: int,
    *,
    clock: Callable[[], float] = time.perf_counter,
) -> TrialResult:
    """Run one keygen/encrypt/decrypt/verify cycle against `provider`.

    Never raises for provider failures: the exception message is recorded on
    a result with ``success=False`` and the duration fields left as ``None``.
    """
    name = provider.name
    result = TrialResult(algorithm=name, data_size=len(data), key_size=key_size)
    try:
        if key_size not in provider.supported_key_sizes():
            raise UnsupportedKeySizeError(name, key_size)

        t0 = clock()
        key_pair = provider.generate_key_pair(key_size)
        keygen_ms = _elapsed_ms(t0, clock)

        t0 = clock()
        ciphertext = provider.encrypt(data, key_pair.public_key)
        encrypt_ms = _elapsed_ms(t0, clock)

        t0 = clock()
        decrypted = provider.decrypt(ciphertext, key_pair.private_key)
        decrypt_ms = _elapsed_ms(t0, clock)

        if decrypted != data:
            raise IntegrityError("Decryption failed - data mismatch")
    except Exception as exc:
        log.error("Error testing %s with key size %s: %s", name, key_size, exc)
        result.error = str(exc) or exc.__class__.__name__
        return result

    result.key_generation_ms = keygen_ms
    result.encryption_ms = encrypt_ms
    result.decryption_ms = decrypt_ms
    result.security_estimate = estimate(name, key_size)
    result.success = True
    log.debug(
        "Successfully tested %s with key size %s and data size %s",
        name, key_size, len(data),
    )
    return result


class ComparisonHarness:
    """Ordered set of (provider, key-size selector) arms run per data size."""

    def __init__(
        self,
        arms: Sequence[Tuple[AlgorithmProvider, KeySizeSelector]],
        *,
        random_bytes: Callable[[int], bytes] = os.urandom,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.arms: Tuple[Tuple[AlgorithmProvider, KeySizeSelector], ...] = tuple(arms)
        self._random_bytes = random_bytes
        self._clock = clock

    @classmethod
    def reference(cls, **kwargs) -> "ComparisonHarness":
        """RSA then ECC, keyed on `rsa_key_size` / `ecc_key_size`."""
        load_adapters()
        return cls(
            [
                (registry.get("RSA")(), RSA_KEY_SIZE),
                (registry.get("ECC")(), ECC_KEY_SIZE),
            ],
            **kwargs,
        )

    def with_provider(self, provider: AlgorithmProvider, key_size: KeySizeSelector) -> "ComparisonHarness":
        return ComparisonHarness(
            [*self.arms, (provider, key_size)],
            random_bytes=self._random_bytes,
            clock=self._clock,
        )

    def with_hybrid(self) -> "ComparisonHarness":
        load_adapters()
        return self.with_provider(registry.get("RSA+AES Hybrid")(), RSA_KEY_SIZE)

    @property
    def algorithm_names(self) -> List[str]:
        return [provider.name for provider, _ in self.arms]

    def run_comparison(
        self,
        config: TrialConfig,
        *,
        progress: Optional[ProgressCallback] = None,
    ) -> List[TrialResult]:
        """Run the full matrix, data sizes outer and providers inner."""
        results: List[TrialResult] = []
        total = len(config.data_sizes) * len(self.arms)
        for data_size in config.data_sizes:
            # fresh plaintext per data size, shared by that size's providers
            data = self._random_bytes(data_size)
            for provider, key_size in self.arms:
                result = run_trial(provider, data, key_size(config), clock=self._clock)
                results.append(result)
                if progress is not None:
                    try:
                        progress(len(results), total, result)
                    except Exception:
                        # Never let progress reporting break measurements
                        log.debug("progress callback failed", exc_info=True)
        return results


def run_comparison(config: TrialConfig | None = None) -> List[TrialResult]:
    """Run the reference RSA + ECC comparison for `config` (defaults if None)."""
    if config is None:
        config = TrialConfig()
    return ComparisonHarness.reference().run_comparison(config)
