"""
Test configuration for the ICAO 9303 core test suite.
"""

import pytest

from icao9303.config import Settings, configure


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "mrz: mark test as MRZ related")
    config.addinivalue_line("markers", "vds: mark test as visible digital seal related")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        if "mrz" in item.name.lower():
            item.add_marker(pytest.mark.mrz)
        if "seal" in item.name.lower() or "vds" in str(item.fspath):
            item.add_marker(pytest.mark.vds)


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test against default settings and restore them afterwards."""
    configure(**Settings().as_dict())
    yield
    configure(**Settings().as_dict())
