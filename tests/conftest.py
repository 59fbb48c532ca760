import pytest

from errchain import config

@pytest.fixture(autouse=True)
def _settings():
    """Restore the library settings after each test."""
    saved = vars(config.settings).copy()
    yield None
    vars(config.settings).update(saved)
