from __future__ import annotations

from itertools import count
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
CORE_SRC = ROOT / "libs" / "core" / "src"
if str(CORE_SRC) not in sys.path:
    sys.path.insert(0, str(CORE_SRC))

from asymbench import (  # noqa: E402
    ComparisonHarness,
    KeyPair,
    TrialConfig,
    run_comparison,
    run_trial,
)
from asymbench.harness import ECC_KEY_SIZE, RSA_KEY_SIZE  # noqa: E402


class XorProvider:
    """Deterministic stand-in provider that records its calls."""

    def __init__(self, name: str, sizes=(1, 2)) -> None:
        self.name = name
        self._sizes = frozenset(sizes)
        self.calls: list[tuple[str, object]] = []

    def supported_key_sizes(self):
        return self._sizes

    def generate_key_pair(self, key_size: int) -> KeyPair:
        self.calls.append(("keygen", key_size))
        return KeyPair(public_key=0x5A, private_key=0x5A, key_size=key_size)

    def encrypt(self, plaintext: bytes, public_key) -> bytes:
        self.calls.append(("encrypt", len(plaintext)))
        return bytes(b ^ public_key for b in plaintext)

    def decrypt(self, ciphertext: bytes, private_key) -> bytes:
        self.calls.append(("decrypt", len(ciphertext)))
        return bytes(b ^ private_key for b in ciphertext)


class CorruptingProvider(XorProvider):
    def decrypt(self, ciphertext: bytes, private_key) -> bytes:
        return b"\x00" + super().decrypt(ciphertext, private_key)[1:]


class ExplodingProvider(XorProvider):
    def encrypt(self, plaintext: bytes, public_key) -> bytes:
        raise RuntimeError("backend exploded")


def _ticking_clock(step: float = 0.002):
    ticks = count()
    return lambda: next(ticks) * step


def test_run_trial_success_records_timings_and_estimate():
    provider = XorProvider("RSA", sizes=(2048,))
    result = run_trial(provider, b"hello world", 2048, clock=_ticking_clock())
    assert result.success
    assert result.error is None
    assert result.algorithm == "RSA"
    assert result.data_size == 11
    assert result.key_size == 2048
    # each operation spans exactly one clock tick of 2 ms
    assert result.key_generation_ms == pytest.approx(2.0)
    assert result.encryption_ms == pytest.approx(2.0)
    assert result.decryption_ms == pytest.approx(2.0)
    assert result.security_estimate is not None
    assert result.security_estimate.security_bits == 112
    assert [c[0] for c in provider.calls] == ["keygen", "encrypt", "decrypt"]


def test_run_trial_rejects_unsupported_key_size_before_keygen():
    provider = XorProvider("ECC", sizes=(256,))
    result = run_trial(provider, b"data", 9999)
    assert not result.success
    assert "9999" in result.error
    assert "Unsupported key size" in result.error
    assert result.key_generation_ms is None
    assert result.encryption_ms is None
    assert result.decryption_ms is None
    assert provider.calls == []


def test_run_trial_detects_data_mismatch():
    result = run_trial(CorruptingProvider("ECC", sizes=(256,)), b"\x01\x02\x03", 256)
    assert not result.success
    assert result.error == "Decryption failed - data mismatch"
    assert result.security_estimate is None


def test_run_trial_catches_provider_exceptions():
    result = run_trial(ExplodingProvider("X", sizes=(1,)), b"abc", 1)
    assert not result.success
    assert result.error == "backend exploded"


def test_matrix_order_and_completeness():
    rsa = XorProvider("RSA", sizes=(1,))
    ecc = XorProvider("ECC", sizes=(2,))
    harness = ComparisonHarness([(rsa, RSA_KEY_SIZE), (ecc, ECC_KEY_SIZE)])
    config = TrialConfig(data_sizes=(5, 1, 3), rsa_key_size=1, ecc_key_size=2)

    results = harness.run_comparison(config)

    assert len(results) == 6
    assert [(r.data_size, r.algorithm) for r in results] == [
        (5, "RSA"), (5, "ECC"),
        (1, "RSA"), (1, "ECC"),
        (3, "RSA"), (3, "ECC"),
    ]
    assert [r.key_size for r in results] == [1, 2, 1, 2, 1, 2]
    assert all(r.success for r in results)


def test_fresh_plaintext_per_data_size():
    drawn: list[int] = []

    def fake_random(n: int) -> bytes:
        drawn.append(n)
        return bytes([len(drawn)]) * n

    harness = ComparisonHarness(
        [(XorProvider("RSA"), RSA_KEY_SIZE), (XorProvider("ECC"), ECC_KEY_SIZE)],
        random_bytes=fake_random,
    )
    harness.run_comparison(TrialConfig(data_sizes=(4, 4, 8), rsa_key_size=1, ecc_key_size=2))
    assert drawn == [4, 4, 8]


def test_one_failing_cell_does_not_abort_matrix():
    good = XorProvider("ECC", sizes=(2,))
    bad = ExplodingProvider("RSA", sizes=(1,))
    harness = ComparisonHarness([(bad, RSA_KEY_SIZE), (good, ECC_KEY_SIZE)])
    results = harness.run_comparison(TrialConfig(data_sizes=(8, 16), rsa_key_size=1, ecc_key_size=2))
    assert [r.success for r in results] == [False, True, False, True]


def test_progress_callback_reports_each_cell_and_errors_are_ignored():
    seen: list[tuple[int, int, str]] = []

    def progress(done, total, result):
        seen.append((done, total, result.algorithm))
        raise RuntimeError("progress sinks must not break runs")

    harness = ComparisonHarness([(XorProvider("RSA"), RSA_KEY_SIZE), (XorProvider("ECC"), ECC_KEY_SIZE)])
    results = harness.run_comparison(
        TrialConfig(data_sizes=(1, 2), rsa_key_size=1, ecc_key_size=2),
        progress=progress,
    )
    assert len(results) == 4
    assert seen == [(1, 4, "RSA"), (2, 4, "ECC"), (3, 4, "RSA"), (4, 4, "ECC")]


def test_with_provider_returns_extended_copy():
    base = ComparisonHarness([(XorProvider("RSA"), RSA_KEY_SIZE)])
    extended = base.with_provider(XorProvider("EXTRA"), RSA_KEY_SIZE)
    assert base.algorithm_names == ["RSA"]
    assert extended.algorithm_names == ["RSA", "EXTRA"]


@pytest.mark.parametrize("bad", [(0,), (16, -1)])
def test_trial_config_rejects_non_positive_sizes(bad):
    with pytest.raises(ValueError):
        TrialConfig(data_sizes=bad)


def test_trial_config_normalizes_lists():
    config = TrialConfig(data_sizes=[16, 32], rsa_key_size=1024, ecc_key_size=384)
    assert config.data_sizes == (16, 32)


def test_reference_comparison_all_cells_succeed():
    results = run_comparison(TrialConfig(data_sizes=(16, 32), rsa_key_size=2048, ecc_key_size=256))
    assert len(results) == 4
    assert [r.algorithm for r in results] == ["RSA", "ECC", "RSA", "ECC"]
    for r in results:
        assert r.success, r.error
        assert r.security_estimate is not None
        assert r.key_generation_ms > 0
        assert r.encryption_ms >= 0
        assert r.decryption_ms >= 0


def test_reference_comparison_oversized_rsa_cell_is_isolated():
    results = run_comparison(TrialConfig(data_sizes=(16, 300), rsa_key_size=1024, ecc_key_size=256))
    by_cell = {(r.data_size, r.algorithm): r for r in results}
    assert by_cell[(16, "RSA")].success
    assert by_cell[(16, "ECC")].success
    assert by_cell[(300, "ECC")].success
    failed = by_cell[(300, "RSA")]
    assert not failed.success
    assert "Max size: 117 bytes" in failed.error
    assert "got: 300 bytes" in failed.error


def test_reference_comparison_unsupported_ecc_size_fails_explicitly():
    results = run_comparison(TrialConfig(data_sizes=(16,), rsa_key_size=1024, ecc_key_size=192))
    rsa, ecc = results
    assert rsa.success
    assert not ecc.success
    assert ecc.error == "Unsupported key size: 192"


def test_hybrid_arm_handles_payloads_beyond_rsa_limit():
    harness = ComparisonHarness.reference().with_hybrid()
    results = harness.run_comparison(TrialConfig(data_sizes=(4096,), rsa_key_size=1024, ecc_key_size=256))
    assert [r.algorithm for r in results] == ["RSA", "ECC", "RSA+AES Hybrid"]
    assert [r.success for r in results] == [False, True, True]
    assert results[2].security_estimate.security_bits == 80
