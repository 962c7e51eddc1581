"""Pytest configuration and fixtures for pousser tests."""

import pytest

from pousser.client import Pousser
from pousser_fixtures import FakeTransport, RecordingSink

# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def transport() -> FakeTransport:
    """Provide a transport that records requests and answers 200 ``{}``."""
    return FakeTransport()


@pytest.fixture
def sink() -> RecordingSink:
    """Provide a log sink that keeps every message."""
    return RecordingSink()


@pytest.fixture
def client(transport: FakeTransport, sink: RecordingSink) -> Pousser:
    """Provide a production client for app 1 wired to the fake transport."""
    return Pousser("app-key", "app-secret", 1, transport=transport, logger=sink)
