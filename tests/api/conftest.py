import json

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from fastapi.testclient import TestClient

from verifybot.domain.entities import GrantTarget
from verifybot.main import create_app
from verifybot.presentation.dependencies import (
    get_code_store,
    get_grant_target,
    get_notifier,
    get_public_key,
    get_role_gateway,
)
from tests.fakes import FakeCodeStore, FakeNotifier, FakeRoleGateway

TIMESTAMP = "1700000000"


@pytest.fixture()
def signing_key() -> Ed25519PrivateKey:
    return Ed25519PrivateKey.generate()


@pytest.fixture()
def app_and_deps(signing_key):
    app = create_app()
    store = FakeCodeStore()
    role_gateway = FakeRoleGateway(result=True)
    notifier = FakeNotifier()
    public_hex = (
        signing_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw).hex()
    )

    app.dependency_overrides[get_code_store] = lambda: store
    app.dependency_overrides[get_role_gateway] = lambda: role_gateway
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_public_key] = lambda: public_hex
    app.dependency_overrides[get_grant_target] = lambda: GrantTarget(
        guild_id="g1", role_id="r-verified"
    )

    try:
        yield app, store, role_gateway, notifier
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app, _, _, _ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def send(client, signing_key):
    """POST an interaction signed with the test application key."""

    def _send(payload: dict, path: str = "/"):
        body = json.dumps(payload).encode("utf-8")
        signature = signing_key.sign(TIMESTAMP.encode() + body).hex()
        return client.post(
            path,
            content=body,
            headers={
                "Content-Type": "application/json",
                "X-Signature-Ed25519": signature,
                "X-Signature-Timestamp": TIMESTAMP,
            },
        )

    return _send


def member(user_id: str, username: str = "someone", permissions: str = "0") -> dict:
    return {"user": {"id": user_id, "username": username}, "permissions": permissions}


def command(name: str, user_id: str = "U1", permissions: str = "0") -> dict:
    return {
        "type": 2,
        "guild_id": "g1",
        "data": {"name": name},
        "member": member(user_id, permissions=permissions),
    }


def modal_submit(code: str, user_id: str = "U1", custom_id: str = "verify_modal") -> dict:
    return {
        "type": 5,
        "guild_id": "g1",
        "data": {
            "custom_id": custom_id,
            "components": [
                {
                    "type": 1,
                    "components": [
                        {"type": 4, "custom_id": "verification_code", "value": code}
                    ],
                }
            ],
        },
        "member": member(user_id),
    }
