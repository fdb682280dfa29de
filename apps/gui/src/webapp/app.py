"""Flask JSON API wrapping the comparison harness.

Uses the same provider registry as the CLI. Key pairs created through the
per-algorithm endpoints live in a `SessionKeyStore` so later encrypt/decrypt
calls can refer to them by session id.
"""

from __future__ import annotations

import base64
import binascii
import logging
import secrets
import sys
import time
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest as InvalidRequestBody


_HERE = Path(__file__).resolve()
try:
    _PROJECT_ROOT = next(p for p in _HERE.parents if (p / "libs").exists())
except StopIteration:
    _PROJECT_ROOT = _HERE.parents[0]

for rel in (
    Path("libs/core/src"),
    Path("libs/adapters/rsa/src"),
    Path("libs/adapters/ecc/src"),
):
    candidate = _PROJECT_ROOT / rel
    if candidate.exists():
        candidate_str = str(candidate)
        if candidate_str not in sys.path:
            sys.path.append(candidate_str)

from asymbench import (  # noqa: E402
    AsymBenchError,
    ComparisonHarness,
    TrialConfig,
    UnsupportedKeySizeError,
    config,
    load_adapters,
    registry,
)

from .session_store import SessionKeyStore  # noqa: E402

app = Flask(__name__)

log = logging.getLogger(__name__)

# URL segment -> (registered provider name, display name)
ALGORITHMS: Dict[str, Tuple[str, str]] = {
    "rsa": ("RSA", "RSA"),
    "ecc": ("ECC", "ECC"),
    "hybrid": ("RSA+AES Hybrid", "RSA+AES Hybrid"),
}

DEFAULT_TEXT_LENGTH = 100

session_keys = SessionKeyStore(
    ttl_seconds=config.session_ttl(),
    max_entries=config.session_max(),
)


class BadRequest(ValueError):
    """Raised when a request body is missing fields or has the wrong types."""


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def _json_body() -> Dict[str, Any]:
    if not request.get_data(cache=True):
        return {}
    try:
        payload = request.get_json(force=True)
    except InvalidRequestBody as exc:
        raise BadRequest("Request body is not valid JSON.") from exc
    if not isinstance(payload, dict):
        raise BadRequest("Request body must be a JSON object.")
    return payload


def _bool_field(payload: Mapping[str, Any], field: str, default: bool) -> bool:
    value = payload.get(field, default)
    if not isinstance(value, bool):
        raise BadRequest(f"{field} must be a boolean.")
    return value


def _int_field(payload: Mapping[str, Any], field: str, default: int) -> int:
    value = payload.get(field, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise BadRequest(f"{field} must be an integer.")
    return value


def _str_field(payload: Mapping[str, Any], field: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value:
        raise BadRequest(f"{field} is required.")
    return value


def _provider(algo: str):
    load_adapters()
    registered, _ = ALGORITHMS[algo]
    return registry.get(registered)()


def _default_key_size(algo: str) -> int:
    return config.ecc_bits() if algo == "ecc" else config.rsa_bits()


def _parse_trial_config(payload: Mapping[str, Any]) -> TrialConfig:
    overrides: Dict[str, Any] = {}
    if "dataSizes" in payload:
        sizes = payload["dataSizes"]
        if not isinstance(sizes, list) or not all(isinstance(s, int) and not isinstance(s, bool) for s in sizes):
            raise BadRequest("dataSizes must be a list of integers.")
        overrides["data_sizes"] = tuple(sizes)
    if "rsaKeySize" in payload:
        overrides["rsa_key_size"] = _int_field(payload, "rsaKeySize", config.rsa_bits())
    if "eccKeySize" in payload:
        overrides["ecc_key_size"] = _int_field(payload, "eccKeySize", config.ecc_bits())
    try:
        return TrialConfig(**overrides)
    except ValueError as exc:
        raise BadRequest(str(exc)) from exc


@app.errorhandler(BadRequest)
def _handle_bad_request(exc: BadRequest):
    return jsonify({"success": False, "error": str(exc)}), 400


@app.route("/health")
def health():
    return {"status": "ok"}


@app.post("/api/crypto/generate/text")
def generate_random_text():
    payload = _json_body()
    length = _int_field(payload, "length", DEFAULT_TEXT_LENGTH)
    if length < 0:
        raise BadRequest("length must not be negative.")
    text = base64.b64encode(secrets.token_bytes(length)).decode("ascii")
    return jsonify({"text": text, "length": length})


@app.post("/api/crypto/<algo>/generateKeys")
def generate_keys(algo: str):
    if algo not in ALGORITHMS:
        return jsonify({"success": False, "error": f"Unknown algorithm: {algo}"}), 404
    payload = _json_body()
    key_size = _int_field(payload, "keySize", _default_key_size(algo))
    _, display = ALGORITHMS[algo]
    start = time.perf_counter()
    try:
        provider = _provider(algo)
        if key_size not in provider.supported_key_sizes():
            raise UnsupportedKeySizeError(provider.name, key_size)
        key_pair = provider.generate_key_pair(key_size)
        session_id = session_keys.put(algo, key_pair)
        return jsonify(
            {
                "success": True,
                "sessionId": session_id,
                "keySize": key_size,
                "algorithm": display,
                "generationTime": _elapsed_ms(start),
            }
        )
    except AsymBenchError as exc:
        log.warning("%s key generation failed: %s", display, exc)
        return jsonify({"success": False, "error": str(exc)})
    except Exception as exc:
        log.exception("%s key generation error: %s", display, exc)
        return jsonify({"success": False, "error": str(exc)})


@app.post("/api/crypto/<algo>/encrypt")
def encrypt(algo: str):
    if algo not in ALGORITHMS:
        return jsonify({"success": False, "error": f"Unknown algorithm: {algo}"}), 404
    payload = _json_body()
    session_id = _str_field(payload, "sessionId")
    data = payload.get("data")
    if not isinstance(data, str):
        raise BadRequest("data must be a string.")
    _, display = ALGORITHMS[algo]
    key_pair = session_keys.get(algo, session_id)
    if key_pair is None:
        return jsonify({"success": False, "error": f"No {display} key pair found for session ID"})

    start = time.perf_counter()
    try:
        encrypted = _provider(algo).encrypt(data.encode("utf-8"), key_pair.public_key)
        return jsonify(
            {
                "success": True,
                "encryptedData": base64.b64encode(encrypted).decode("ascii"),
                "algorithm": display,
                "encryptionTime": _elapsed_ms(start),
            }
        )
    except Exception as exc:
        log.warning("%s encryption failed: %s", display, exc)
        return jsonify({"success": False, "error": str(exc)})


@app.post("/api/crypto/<algo>/decrypt")
def decrypt(algo: str):
    if algo not in ALGORITHMS:
        return jsonify({"success": False, "error": f"Unknown algorithm: {algo}"}), 404
    payload = _json_body()
    session_id = _str_field(payload, "sessionId")
    encoded = _str_field(payload, "encryptedData")
    _, display = ALGORITHMS[algo]
    key_pair = session_keys.get(algo, session_id)
    if key_pair is None:
        return jsonify({"success": False, "error": f"No {display} key pair found for session ID"})
    try:
        ciphertext = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise BadRequest("encryptedData is not valid base64.") from exc

    start = time.perf_counter()
    try:
        decrypted = _provider(algo).decrypt(ciphertext, key_pair.private_key)
        return jsonify(
            {
                "success": True,
                "decryptedData": decrypted.decode("utf-8", errors="replace"),
                "algorithm": display,
                "decryptionTime": _elapsed_ms(start),
            }
        )
    except Exception as exc:
        log.warning("%s decryption failed: %s", display, exc)
        return jsonify({"success": False, "error": str(exc)})


def _run_comparison(trial_config: TrialConfig, *, with_hybrid: bool = False):
    harness = ComparisonHarness.reference()
    if with_hybrid:
        harness = harness.with_hybrid()
    results = harness.run_comparison(trial_config)
    return jsonify([r.as_dict() for r in results])


@app.post("/api/crypto/compare")
def compare_algorithms():
    payload = _json_body()
    with_hybrid = _bool_field(payload, "withHybrid", False)
    return _run_comparison(_parse_trial_config(payload), with_hybrid=with_hybrid)


@app.get("/api/crypto/compare/default")
def compare_with_defaults():
    return _run_comparison(TrialConfig())


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    app.run(host="127.0.0.1", port=8080, threaded=True)


if __name__ == "__main__":
    main()
