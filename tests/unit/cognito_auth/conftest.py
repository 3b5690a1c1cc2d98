"""Fixtures wiring the Cognito auth client to in-process fakes."""

from __future__ import annotations

import pytest

from cognito_auth import CognitoAuthClient, CognitoConfig
from tests.utils.cognito_stub import CLIENT_ID, POOL_ID, FakeCognitoIdp, FakeSRPFactory


@pytest.fixture
def config() -> CognitoConfig:
    return CognitoConfig(region="us-east-1", user_pool_id=POOL_ID, client_id=CLIENT_ID)


@pytest.fixture
def provider() -> FakeCognitoIdp:
    return FakeCognitoIdp()


@pytest.fixture
def srp() -> FakeSRPFactory:
    return FakeSRPFactory()


@pytest.fixture
def client(config: CognitoConfig, provider: FakeCognitoIdp, srp: FakeSRPFactory):
    instance = CognitoAuthClient(config, provider=provider, srp_factory=srp)
    yield instance
    instance.close()
