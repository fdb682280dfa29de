"""Adapter bootstrap.

Importing an adapter package runs its `registry.register` decorators. When the
packages are not installed (plain checkout) their `src/` directories are
appended to `sys.path` first.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import pathlib
import sys
from typing import Dict, Tuple

log = logging.getLogger(__name__)

ADAPTER_MODULES: Tuple[str, ...] = ("asymbench_rsa", "asymbench_ecc")

_HERE = pathlib.Path(__file__).resolve()
try:
    _PROJECT_ROOT = next(p for p in _HERE.parents if (p / "libs").exists())
except StopIteration:
    _PROJECT_ROOT = _HERE.parents[0]

_ADAPTER_PATHS: Dict[str, pathlib.Path] = {
    "asymbench_rsa": _PROJECT_ROOT / "libs" / "adapters" / "rsa" / "src",
    "asymbench_ecc": _PROJECT_ROOT / "libs" / "adapters" / "ecc" / "src",
}


def load_adapters() -> None:
    for mod in ADAPTER_MODULES:
        spec = importlib.util.find_spec(mod)
        if spec is None:
            candidate = _ADAPTER_PATHS.get(mod)
            if candidate and candidate.exists():
                if str(candidate) not in sys.path:
                    sys.path.append(str(candidate))
                spec = importlib.util.find_spec(mod)
        if spec is None:
            log.warning("adapter package %s not found; its providers are unavailable", mod)
            continue
        importlib.import_module(mod)
