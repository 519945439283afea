"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local rowfields package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from rowfields.localization import local_texts, reset_language, set_language  # noqa: E402


@pytest.fixture(autouse=True)
def clean_local_texts() -> Iterator[None]:
    """Each test starts with an empty global text registry and no current language."""
    local_texts.clear()
    local_texts.default_language = ""
    token = set_language(None)
    yield
    reset_language(token)
    local_texts.clear()
    local_texts.default_language = ""
