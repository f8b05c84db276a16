import pytest
from bluebirdish import Promise


@pytest.fixture
def library():
    """An independent promise class, so attribute tweaks never leak between tests."""
    return Promise.get_new_library_copy()
