"""
Shared fixtures for Protector tests.
"""

import pytest

from protector.core.config import set_config
from protector.metrics import set_global_collector


@pytest.fixture(autouse=True)
def reset_protector_state():
    """Restore the default configuration and drop the global collector."""
    set_config(None)
    set_global_collector(None)
    yield
    set_config(None)
    set_global_collector(None)
