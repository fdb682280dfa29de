"""RSA-backed providers (plain RSA and the RSA+AES hybrid).

Importing this package registers both providers.
"""

from .rsa_adapter import RSAProvider, RSAAESHybridProvider  # noqa: F401

__all__ = ["RSAProvider", "RSAAESHybridProvider"]
