from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
CORE_SRC = ROOT / "libs" / "core" / "src"
if str(CORE_SRC) not in sys.path:
    sys.path.insert(0, str(CORE_SRC))

from asymbench import load_adapters, registry  # noqa: E402


def test_registry_has_reference_providers():
    load_adapters()
    items = registry.list()
    assert "RSA" in items
    assert "ECC" in items
    assert "RSA+AES Hybrid" in items


def test_registry_lookup_is_case_insensitive():
    load_adapters()
    assert registry.get("rsa") is registry.get("RSA")
    assert registry.get("ecc") is registry.get("ECC")


def test_provider_properties():
    load_adapters()
    rsa = registry.get("RSA")()
    ecc = registry.get("ECC")()
    hybrid = registry.get("RSA+AES Hybrid")()
    assert rsa.name == "RSA"
    assert ecc.name == "ECC"
    assert hybrid.name == "RSA+AES Hybrid"
    assert sorted(rsa.supported_key_sizes()) == [1024, 2048, 3072, 4096]
    assert sorted(ecc.supported_key_sizes()) == [256, 384, 521]
    assert sorted(hybrid.supported_key_sizes()) == [1024, 2048, 3072, 4096]
