import logging

import httpx
import pytest

from auth0_keymanager.auth0.dcr import Auth0DCRClient
from auth0_keymanager.auth0.management import ManagementApiAuth
from auth0_keymanager.auth0.models import Auth0ClientInfo
from auth0_keymanager.contracts import (
    InvalidRequestError,
    NotFoundError,
    ProviderRejectedError,
    TransportError,
)
from tests.auth0.auth0_testkit import CLIENTS_URL, MANAGEMENT_TOKEN, FakeAuth0, json_body

CLIENT_RECORD = {
    "name": "alice_app1_PRODUCTION",
    "client_id": "cid-1",
    "client_secret": "secret-1",
    "callbacks": ["https://app.example/cb"],
    "grant_types": ["client_credentials"],
    "app_type": "non_interactive",
    "tenant": "dev-tenant",
}


@pytest.fixture
def dcr_client(fake_auth0: FakeAuth0, management_auth: ManagementApiAuth) -> Auth0DCRClient:
    return Auth0DCRClient(CLIENTS_URL, management_auth, timeout=5.0)


def test_create_posts_client_record(fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient) -> None:
    fake_auth0.add("POST", CLIENTS_URL, httpx.Response(201, json=CLIENT_RECORD))

    created = dcr_client.create(
        Auth0ClientInfo(
            client_name="alice_app1_PRODUCTION",
            redirect_uris=["https://app.example/cb"],
            grant_types=["client_credentials"],
            application_type="non_interactive",
        )
    )

    (call,) = fake_auth0.calls("POST", CLIENTS_URL)
    assert call.headers["Authorization"] == f"Bearer {MANAGEMENT_TOKEN}"
    assert call.headers["Content-Type"] == "application/json"
    assert json_body(call) == {
        "name": "alice_app1_PRODUCTION",
        "callbacks": ["https://app.example/cb"],
        "grant_types": ["client_credentials"],
        "app_type": "non_interactive",
    }
    assert created.client_id == "cid-1"
    assert created.client_secret == "secret-1"
    assert created.snapshot()["tenant"] == "dev-tenant"


def test_create_rejected_payload_raises(fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient) -> None:
    fake_auth0.add(
        "POST",
        CLIENTS_URL,
        httpx.Response(
            400,
            json={
                "statusCode": 400,
                "error": "Bad Request",
                "message": "Payload validation error",
                "errorCode": "invalid_body",
            },
        ),
    )

    with pytest.raises(ProviderRejectedError) as exc_info:
        dcr_client.create(Auth0ClientInfo(client_name="app"))

    assert exc_info.value.status_code == 400
    assert exc_info.value.error == "invalid_body"
    assert "Payload validation error" in str(exc_info.value)


def test_update_patches_client_and_carries_secret(
    fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient
) -> None:
    fake_auth0.add("PATCH", f"{CLIENTS_URL}/cid-1", httpx.Response(200, json=CLIENT_RECORD))

    updated = dcr_client.update(
        "cid-1",
        Auth0ClientInfo(client_name="renamed", client_id="cid-1", client_secret="secret-1"),
    )

    (call,) = fake_auth0.calls("PATCH", f"{CLIENTS_URL}/cid-1")
    assert json_body(call) == {"name": "renamed", "client_secret": "secret-1"}
    assert updated.client_id == "cid-1"


def test_update_unknown_client_raises_not_found(
    fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient
) -> None:
    fake_auth0.add("PATCH", f"{CLIENTS_URL}/missing", httpx.Response(404, json={}))

    with pytest.raises(NotFoundError):
        dcr_client.update("missing", Auth0ClientInfo(client_name="x"))


def test_client_id_is_path_escaped(fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient) -> None:
    fake_auth0.add("GET", f"{CLIENTS_URL}/a%2Fb", httpx.Response(200, json=CLIENT_RECORD))

    dcr_client.retrieve("a/b")

    assert len(fake_auth0.calls("GET", f"{CLIENTS_URL}/a%2Fb")) == 1


def test_delete_client(fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient) -> None:
    fake_auth0.add("DELETE", f"{CLIENTS_URL}/cid-1", httpx.Response(204))

    dcr_client.delete("cid-1")

    assert len(fake_auth0.calls("DELETE", f"{CLIENTS_URL}/cid-1")) == 1


def test_delete_unknown_client_is_tolerated(
    fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient, caplog: pytest.LogCaptureFixture
) -> None:
    fake_auth0.add("DELETE", f"{CLIENTS_URL}/gone", httpx.Response(404, json={}))
    caplog.set_level(logging.WARNING)

    dcr_client.delete("gone")

    assert any("already deleted" in message for message in caplog.messages)


def test_delete_other_failures_raise(fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient) -> None:
    fake_auth0.add("DELETE", f"{CLIENTS_URL}/cid-1", httpx.Response(403, json={}))

    with pytest.raises(ProviderRejectedError) as exc_info:
        dcr_client.delete("cid-1")
    assert exc_info.value.status_code == 403


def test_retrieve_client(fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient) -> None:
    fake_auth0.add("GET", f"{CLIENTS_URL}/cid-1", httpx.Response(200, json=CLIENT_RECORD))

    client = dcr_client.retrieve("cid-1")

    assert client.client_name == "alice_app1_PRODUCTION"
    assert client.redirect_uris == ["https://app.example/cb"]


def test_retrieve_unknown_client_raises_not_found(
    fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient
) -> None:
    fake_auth0.add(
        "GET",
        f"{CLIENTS_URL}/missing",
        httpx.Response(404, json={"statusCode": 404, "message": "The client does not exist"}),
    )

    with pytest.raises(NotFoundError) as exc_info:
        dcr_client.retrieve("missing")
    assert exc_info.value.status_code == 404


def test_regenerate_secret(fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient) -> None:
    fake_auth0.add(
        "POST",
        f"{CLIENTS_URL}/cid-1/rotate-secret",
        httpx.Response(200, json={**CLIENT_RECORD, "client_secret": "secret-2"}),
    )

    rotated = dcr_client.regenerate_secret("cid-1")

    assert rotated.client_secret == "secret-2"
    assert rotated.client_name == "alice_app1_PRODUCTION"


@pytest.mark.parametrize(
    "call",
    [
        lambda c: c.update("", Auth0ClientInfo(client_name="x")),
        lambda c: c.delete(""),
        lambda c: c.retrieve(""),
        lambda c: c.regenerate_secret(""),
    ],
    ids=["update", "delete", "retrieve", "regenerate_secret"],
)
def test_operations_require_client_id(
    fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient, call: object
) -> None:
    with pytest.raises(InvalidRequestError):
        call(dcr_client)  # type: ignore[operator]
    assert fake_auth0.requests == []


def test_transport_failure_raises_transport_error(
    fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient
) -> None:
    fake_auth0.add("GET", f"{CLIENTS_URL}/cid-1", httpx.ReadTimeout("timed out"))

    with pytest.raises(TransportError) as exc_info:
        dcr_client.retrieve("cid-1")
    assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)


def test_invalid_body_raises_transport_error(
    fake_auth0: FakeAuth0, dcr_client: Auth0DCRClient
) -> None:
    fake_auth0.add("GET", f"{CLIENTS_URL}/cid-1", httpx.Response(200, text="<html>"))

    with pytest.raises(TransportError):
        dcr_client.retrieve("cid-1")
