"""
Test Configuration
==================

Pytest configuration with fixtures for all test types.
Provides test settings, mock upstream clients, and service instances.
"""

import os

os.environ.setdefault("QUALITY_RANGE_ENVIRONMENT", "testing")
os.environ.setdefault("QUALITY_RANGE_LOG_LEVEL", "DEBUG")

import pytest
from typing import Dict

from quality_range.config.settings import Settings, get_settings
from quality_range.core.elements import ElementNameResolver
from quality_range.core.hash_ids import encode_id
from quality_range.core.range_query import RangeQueryService

from tests.utils.data_generators import IndicatorDataGenerator
from tests.utils.mocks import MockProcessClient, MockQualityClient, MockStoreClient


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Test settings fixture."""
    settings = get_settings()
    assert settings.environment == "testing"
    return settings


@pytest.fixture
def indicator_ids() -> Dict[str, str]:
    """Hashed indicator IDs keyed by the element type they require."""
    return {"CodeccCheckAtom": encode_id(1), "UnitTestAtom": encode_id(2), "SonarAtom": encode_id(3)}


@pytest.fixture
def mock_quality_client() -> MockQualityClient:
    return MockQualityClient(
        {
            1: IndicatorDataGenerator.indicator("CodeccCheckAtom", "Coverity defects"),
            2: IndicatorDataGenerator.indicator("UnitTestAtom", "Unit test pass rate"),
            3: IndicatorDataGenerator.indicator("SonarAtom", "Sonar blockers"),
        }
    )


@pytest.fixture
def mock_store_client() -> MockStoreClient:
    return MockStoreClient({"UnitTestAtom": "Unit Test", "SonarAtom": "Sonar Scan"})


@pytest.fixture
def name_resolver(mock_store_client: MockStoreClient) -> ElementNameResolver:
    return ElementNameResolver(mock_store_client, builtin_names={"CodeccCheckAtom": "Code Check"})


@pytest.fixture
def mock_process_client() -> MockProcessClient:
    return MockProcessClient()


@pytest.fixture
def range_service(
    mock_process_client: MockProcessClient,
    mock_quality_client: MockQualityClient,
    name_resolver: ElementNameResolver,
) -> RangeQueryService:
    """Range query service over mock upstream clients."""
    return RangeQueryService(mock_process_client, mock_quality_client, name_resolver)
