"""Shared fixtures."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from nickguard.config.session import SessionConfig
from nickguard.handlers import NickServHandlers
from tests.mocks import MockConnection, mock_queue


@pytest.fixture
def connection() -> MockConnection:
    return MockConnection("Phergie")


@pytest.fixture
def queue() -> MagicMock:
    return mock_queue()


@pytest.fixture
def config() -> SessionConfig:
    return SessionConfig.from_mapping({"password": "password"})


@pytest.fixture
def handlers(config: SessionConfig) -> NickServHandlers:
    return NickServHandlers(config)
