from __future__ import annotations

import pytest

from fakes import TEST_CREDENTIALS, FakeTransport, Response
from reddit_stream.clients import AuthConfig, AuthToken, RedditApiClient
from reddit_stream.config import ApiConfig


@pytest.fixture
def authed_config() -> AuthConfig:
    """Pre-authenticated config, token valid for a long time."""
    return AuthConfig(
        credentials=TEST_CREDENTIALS,
        auth_token=AuthToken(expires=4_102_444_800, token="test-token", type="bearer"),
    )


@pytest.fixture
def make_client(authed_config):
    """Build a RedditApiClient wired to a FakeTransport replaying `responses`."""

    def _make(*responses: Response):
        transport = FakeTransport(*responses)
        client = RedditApiClient(authed_config, transport=transport, api_config=ApiConfig())
        return client, transport

    return _make
