from __future__ import annotations
from dataclasses import dataclass
from typing import Any, FrozenSet, Protocol

"""Algorithm interfaces used by adapters.

Adapters implement this Protocol and register themselves into the global
registry. The harness, CLI and web API interact only with these interfaces,
never with the `cryptography` primitives directly.
"""


@dataclass(frozen=True)
class KeyPair:
    """Opaque key handles produced by one provider for one trial.

    The objects are whatever the provider's backend uses (``cryptography``
    key objects for the bundled adapters). They are never serialized by the
    harness and must not be shared between trials.
    """
    public_key: Any
    private_key: Any
    key_size: int

    def __iter__(self):
        # Allows `pk, sk = provider.generate_key_pair(n)` like the KEM adapters
        yield self.public_key
        yield self.private_key


class AlgorithmProvider(Protocol):
    """Asymmetric encryption contract."""
    name: str
    def supported_key_sizes(self) -> FrozenSet[int]: ...
    def generate_key_pair(self, key_size: int) -> KeyPair: ...
    def encrypt(self, plaintext: bytes, public_key: Any) -> bytes: ...
    def decrypt(self, ciphertext: bytes, private_key: Any) -> bytes: ...
