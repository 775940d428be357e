"""
Pytest configuration and shared fixtures for hash ring tests
"""

import pytest
import os
import sys
from typing import Dict

# Add the project root to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from weighted_ring import HashRing
from tests.utils.helpers import weighted_ip_nodes


@pytest.fixture
def hash_ring():
    """Create a fresh hash ring for testing"""
    return HashRing(cubes_per_weight=10)  # Smaller for faster tests


@pytest.fixture
def weighted_nodes() -> Dict[str, int]:
    """192.168.1.1 .. 192.168.1.10 with weights 1 .. 10"""
    return weighted_ip_nodes(10)


@pytest.fixture
def loaded_ring(weighted_nodes):
    """Ring with the default cube count and the ten weighted nodes"""
    ring = HashRing()
    ring.add_nodes(weighted_nodes)
    return ring


@pytest.fixture
def test_keys():
    """Common test keys for consistent distribution testing"""
    return [
        "user:123", "user:456", "user:789",
        "product:abc", "product:def", "product:ghi",
        "order:001", "order:002", "order:003",
        "session:aaa", "session:bbb", "session:ccc"
    ]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove ring-related environment variables"""
    for name in ("HASH_RING_CUBES_PER_WEIGHT", "HASH_RING_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# Pytest configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
