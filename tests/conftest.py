import pytest

from verifybot.domain.entities import Account, GrantTarget
from tests.fakes import FakeCodeStore, FakeNotifier, FakeRoleGateway


@pytest.fixture()
def store():
    return FakeCodeStore()


@pytest.fixture()
def role_gateway():
    return FakeRoleGateway(result=True)


@pytest.fixture()
def role_gateway_down():
    return FakeRoleGateway(result=False)


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def target():
    return GrantTarget(guild_id="g1", role_id="r-verified")


@pytest.fixture()
def u1():
    return Account(id="U1", username="alice")


@pytest.fixture()
def u2():
    return Account(id="U2", username="bob")


@pytest.fixture(autouse=True)
def patch_code(monkeypatch):
    """
    Make the issued code deterministic in all tests.
    You can override in a specific test by re-monkeypatching.
    """
    from verifybot.domain import services as domain_services

    monkeypatch.setattr(domain_services, "generate_verification_code", lambda: "482913")
    yield
