import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'modloader'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


@pytest.fixture(autouse=True)
def _isolated_modloader_env(monkeypatch: pytest.MonkeyPatch):
    """Drop MODLOADER_* variables from the developer's shell and reset cached data."""
    import logging
    import os

    from modloader.core.stdlib_logging import reset_logging_for_tests
    from modloader.data import clear_caches

    for key in list(os.environ):
        if key.startswith("MODLOADER_"):
            monkeypatch.delenv(key, raising=False)
    clear_caches()
    root_level = logging.getLogger().level
    yield
    reset_logging_for_tests()
    logging.getLogger().setLevel(root_level)
    clear_caches()
