from __future__ import annotations

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
CORE_SRC = ROOT / "libs" / "core" / "src"
if str(CORE_SRC) not in sys.path:
    sys.path.insert(0, str(CORE_SRC))

from asymbench import TrialConfig, config  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "ASYMBENCH_DATA_SIZES",
        "ASYMBENCH_RSA_BITS",
        "ASYMBENCH_ECC_BITS",
        "ASYMBENCH_SESSION_TTL",
        "ASYMBENCH_SESSION_MAX",
    ):
        monkeypatch.delenv(var, raising=False)


def test_defaults_match_reference_configuration():
    cfg = TrialConfig()
    assert cfg.data_sizes == (1024, 10240, 102400)
    assert cfg.rsa_key_size == 2048
    assert cfg.ecc_key_size == 256
    assert config.session_ttl() == 900.0
    assert config.session_max() == 256


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ASYMBENCH_DATA_SIZES", "16, 32,64")
    monkeypatch.setenv("ASYMBENCH_RSA_BITS", "3072")
    monkeypatch.setenv("ASYMBENCH_ECC_BITS", "384")
    monkeypatch.setenv("ASYMBENCH_SESSION_TTL", "1.5")
    cfg = TrialConfig()
    assert cfg.data_sizes == (16, 32, 64)
    assert cfg.rsa_key_size == 3072
    assert cfg.ecc_key_size == 384
    assert config.session_ttl() == 1.5


def test_explicit_values_win_over_environment(monkeypatch):
    monkeypatch.setenv("ASYMBENCH_RSA_BITS", "3072")
    assert TrialConfig(rsa_key_size=1024).rsa_key_size == 1024


@pytest.mark.parametrize(
    "var,value",
    [
        ("ASYMBENCH_RSA_BITS", "big"),
        ("ASYMBENCH_ECC_BITS", "2.5"),
        ("ASYMBENCH_DATA_SIZES", "16,x"),
        ("ASYMBENCH_SESSION_TTL", "soon"),
    ],
)
def test_invalid_environment_values_name_the_variable(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(ValueError, match=var):
        if var == "ASYMBENCH_SESSION_TTL":
            config.session_ttl()
        else:
            TrialConfig()
