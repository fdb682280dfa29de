from __future__ import annotations
import os
import struct
from typing import FrozenSet

from asymbench import KeyPair, registry
from asymbench.errors import (
    DecryptionError,
    MalformedCiphertextError,
    PayloadTooLargeError,
    UnsupportedKeySizeError,
)

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.asymmetric import rsa, padding
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

RSA_KEY_SIZES: FrozenSet[int] = frozenset({1024, 2048, 3072, 4096})
PUBLIC_EXPONENT = 65537
PKCS1_OVERHEAD = 11  # bytes of PKCS#1 v1.5 padding per block

AES_KEY_BYTES = 32
GCM_NONCE_BYTES = 12
_LENGTH_PREFIX = struct.Struct(">I")


def _gen_rsa_keypair(bits: int) -> KeyPair:
    sk = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=bits)
    return KeyPair(public_key=sk.public_key(), private_key=sk, key_size=bits)


def max_plaintext_size(public_key: rsa.RSAPublicKey) -> int:
    """Largest PKCS#1 v1.5 plaintext for the key's actual modulus length."""
    return public_key.key_size // 8 - PKCS1_OVERHEAD


def _rsa_encrypt(data: bytes, public_key: rsa.RSAPublicKey) -> bytes:
    limit = max_plaintext_size(public_key)
    if len(data) > limit:
        raise PayloadTooLargeError(limit, len(data))
    return public_key.encrypt(data, padding.PKCS1v15())


def _rsa_decrypt(ciphertext: bytes, private_key: rsa.RSAPrivateKey) -> bytes:
    try:
        return private_key.decrypt(ciphertext, padding.PKCS1v15())
    except ValueError as exc:
        raise DecryptionError(f"RSA decryption failed: {exc}") from exc


@registry.register("RSA")
class RSAProvider:
    """Textbook RSA with PKCS#1 v1.5 padding (single block, no chunking).

    Payloads above ``modulus_bytes - 11`` are rejected with
    `PayloadTooLargeError`; that ceiling is what the comparison is meant to
    expose next to ECIES and the hybrid.
    """
    name = "RSA"

    def supported_key_sizes(self) -> FrozenSet[int]:
        return RSA_KEY_SIZES

    def generate_key_pair(self, key_size: int) -> KeyPair:
        if key_size not in RSA_KEY_SIZES:
            raise UnsupportedKeySizeError(self.name, key_size)
        return _gen_rsa_keypair(key_size)

    def encrypt(self, plaintext: bytes, public_key: rsa.RSAPublicKey) -> bytes:
        return _rsa_encrypt(plaintext, public_key)

    def decrypt(self, ciphertext: bytes, private_key: rsa.RSAPrivateKey) -> bytes:
        return _rsa_decrypt(ciphertext, private_key)


def pack_hybrid(encrypted_key: bytes, encrypted_payload: bytes) -> bytes:
    """Frame as [4-byte big-endian key length][encrypted key][encrypted payload]."""
    return _LENGTH_PREFIX.pack(len(encrypted_key)) + encrypted_key + encrypted_payload


def unpack_hybrid(blob: bytes) -> tuple[bytes, bytes]:
    if len(blob) < _LENGTH_PREFIX.size:
        raise MalformedCiphertextError(
            f"Hybrid ciphertext too short for length prefix: {len(blob)} bytes"
        )
    (key_len,) = _LENGTH_PREFIX.unpack_from(blob)
    end = _LENGTH_PREFIX.size + key_len
    if key_len == 0 or end > len(blob):
        raise MalformedCiphertextError(
            f"Hybrid ciphertext declares a {key_len}-byte key but only "
            f"{len(blob) - _LENGTH_PREFIX.size} bytes follow the prefix"
        )
    return blob[_LENGTH_PREFIX.size:end], blob[end:]


@registry.register("RSA+AES Hybrid")
class RSAAESHybridProvider:
    """RSA key transport of a fresh AES-256-GCM key per message.

    The symmetric segment is ``nonce (12) || ciphertext || tag (16)``, which
    lifts RSA's plaintext ceiling while keeping RSA-based key exchange.
    """
    name = "RSA+AES Hybrid"

    def supported_key_sizes(self) -> FrozenSet[int]:
        return RSA_KEY_SIZES

    def generate_key_pair(self, key_size: int) -> KeyPair:
        if key_size not in RSA_KEY_SIZES:
            raise UnsupportedKeySizeError(self.name, key_size)
        return _gen_rsa_keypair(key_size)

    def encrypt(self, plaintext: bytes, public_key: rsa.RSAPublicKey) -> bytes:
        aes_key = AESGCM.generate_key(bit_length=AES_KEY_BYTES * 8)
        nonce = os.urandom(GCM_NONCE_BYTES)
        payload = nonce + AESGCM(aes_key).encrypt(nonce, plaintext, None)
        encrypted_key = _rsa_encrypt(aes_key, public_key)
        return pack_hybrid(encrypted_key, payload)

    def decrypt(self, ciphertext: bytes, private_key: rsa.RSAPrivateKey) -> bytes:
        encrypted_key, payload = unpack_hybrid(ciphertext)
        aes_key = _rsa_decrypt(encrypted_key, private_key)
        if len(aes_key) != AES_KEY_BYTES:
            raise DecryptionError(f"Recovered symmetric key has {len(aes_key)} bytes, expected {AES_KEY_BYTES}")
        if len(payload) < GCM_NONCE_BYTES:
            raise MalformedCiphertextError("Hybrid payload shorter than its nonce")
        nonce, body = payload[:GCM_NONCE_BYTES], payload[GCM_NONCE_BYTES:]
        try:
            return AESGCM(aes_key).decrypt(nonce, body, None)
        except InvalidTag as exc:
            raise DecryptionError("AES-GCM authentication failed") from exc
