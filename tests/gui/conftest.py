from __future__ import annotations

import importlib
import sys
from collections import namedtuple
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
GUI_SRC = ROOT / "apps" / "gui" / "src"
CORE_SRC = ROOT / "libs" / "core" / "src"
for candidate in (GUI_SRC, CORE_SRC):
    if str(candidate) not in sys.path:
        sys.path.insert(0, str(candidate))


GuiTestEnv = namedtuple("GuiTestEnv", "client module")


@pytest.fixture
def gui_test_env() -> GuiTestEnv:
    module = importlib.import_module("webapp.app")
    module.app.config.update(TESTING=True)
    module.app.testing = True
    module.session_keys.clear()
    try:
        with module.app.test_client() as client:
            yield GuiTestEnv(client=client, module=module)
    finally:
        module.session_keys.clear()
