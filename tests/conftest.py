"""
Global test configuration and fixtures.
"""

import pytest

from collectibles.adapters import create_default_registry
from collectibles.assembler import CollectibleAssembler
from collectibles.config import create_settings
from collectibles.media.prober import ContentProber
from collectibles.media.protocol import ProtocolResolver
from tests.test_utils import (
    ARWEAVE_GATEWAY,
    IPFS_GATEWAY,
    PLACEHOLDER_URL,
    PROBE_TIMEOUT_MS,
    FakeGateway,
)


@pytest.fixture
def gateway() -> FakeGateway:
    """Provide an empty simulated network."""
    return FakeGateway()


@pytest.fixture
def protocol_resolver() -> ProtocolResolver:
    return ProtocolResolver(ipfs_gateway_url=IPFS_GATEWAY, arweave_gateway_url=ARWEAVE_GATEWAY)


@pytest.fixture
def prober(gateway: FakeGateway) -> ContentProber:
    """Provide a prober bound to the simulated network with a short timeout."""
    return ContentProber(client=gateway.client(), timeout_ms=PROBE_TIMEOUT_MS)


@pytest.fixture
def assembler(protocol_resolver: ProtocolResolver) -> CollectibleAssembler:
    return CollectibleAssembler(protocol_resolver=protocol_resolver, placeholder_url=PLACEHOLDER_URL)


@pytest.fixture
def adapter_kwargs(prober, protocol_resolver, assembler) -> dict:
    """Shared collaborators for building adapters directly."""
    return {"prober": prober, "protocol_resolver": protocol_resolver, "assembler": assembler}


@pytest.fixture
def app_config():
    """Provide configuration pinned to the test gateways and timeout."""
    config = create_settings()
    config.probe.timeout_ms = PROBE_TIMEOUT_MS
    config.gateway.ipfs_url = IPFS_GATEWAY
    config.gateway.arweave_url = ARWEAVE_GATEWAY
    config.media.placeholder_image_url = PLACEHOLDER_URL
    config.helius.fetch_json_uri = False
    return config


@pytest.fixture
def registry(app_config, gateway: FakeGateway):
    """Provide a default adapter registry wired to the simulated network."""
    return create_default_registry(app_config, client=gateway.client())


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests - fast, isolated tests"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests - test component interactions"
    )
    config.addinivalue_line(
        "markers", "error_handling: Tests focused on error conditions"
    )
