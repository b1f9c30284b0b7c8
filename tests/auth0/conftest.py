"""Fixtures shared by the Auth0 key manager tests."""

import httpx
import pytest
from pytest import MonkeyPatch

from auth0_keymanager.auth0.management import ManagementApiAuth
from tests.auth0.auth0_testkit import (
    AUDIENCE,
    MANAGEMENT_CLIENT_ID,
    MANAGEMENT_CLIENT_SECRET,
    RESOURCE_SERVERS_URL,
    TOKEN_ENDPOINT,
    FakeAuth0,
    patch_http_client,
)


@pytest.fixture
def fake_auth0(monkeypatch: MonkeyPatch) -> FakeAuth0:
    fake = FakeAuth0()
    fake.add(
        "POST",
        RESOURCE_SERVERS_URL,
        httpx.Response(201, json={"identifier": AUDIENCE, "name": "API Manager"}),
    )
    patch_http_client(monkeypatch, fake)
    return fake


@pytest.fixture
def management_auth() -> ManagementApiAuth:
    return ManagementApiAuth(
        token_endpoint=TOKEN_ENDPOINT,
        client_id=MANAGEMENT_CLIENT_ID,
        client_secret=MANAGEMENT_CLIENT_SECRET,
        audience=AUDIENCE,
    )


@pytest.fixture
def configuration() -> dict[str, object]:
    return {
        "token_endpoint": TOKEN_ENDPOINT,
        "audience": AUDIENCE,
        "client_id": MANAGEMENT_CLIENT_ID,
        "client_secret": MANAGEMENT_CLIENT_SECRET,
    }
