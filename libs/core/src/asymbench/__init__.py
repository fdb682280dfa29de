from .interfaces import AlgorithmProvider, KeyPair
from .registry import registry
from .metrics import SecurityEstimate, TrialConfig, TrialResult
from .errors import (
    AsymBenchError,
    DecryptionError,
    IntegrityError,
    MalformedCiphertextError,
    PayloadTooLargeError,
    UnsupportedKeySizeError,
)
from .security_estimator import estimate
from .harness import ComparisonHarness, run_comparison, run_trial
from .loader import load_adapters

__all__ = [
    "AlgorithmProvider",
    "KeyPair",
    "registry",
    "SecurityEstimate",
    "TrialConfig",
    "TrialResult",
    "AsymBenchError",
    "DecryptionError",
    "IntegrityError",
    "MalformedCiphertextError",
    "PayloadTooLargeError",
    "UnsupportedKeySizeError",
    "estimate",
    "ComparisonHarness",
    "run_comparison",
    "run_trial",
    "load_adapters",
]
