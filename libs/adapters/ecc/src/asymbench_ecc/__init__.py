"""Elliptic-curve providers. Importing this package registers ECIES as "ECC"."""

from .ecies_adapter import ECIESProvider  # noqa: F401

__all__ = ["ECIESProvider"]
