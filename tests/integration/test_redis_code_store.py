import asyncio
import json
from uuid import uuid4

import pytest

from verifybot.application.consume_code import verify_and_consume_code
from verifybot.application.issue_code import issue_verification_code
from verifybot.domain.entities import Account, GrantTarget, KeyLayout
from verifybot.domain.errors import CodeOwnershipMismatch, InvalidOrExpiredCode
from verifybot.infrastructure.redis_cache.code_store import RedisCodeStore
from tests.fakes import FakeRoleGateway


def _keys() -> KeyLayout:
    # isolate each test run from real traffic and from each other
    run = uuid4().hex[:8]
    return KeyLayout(code_prefix=f"test:{run}:code:", account_prefix=f"test:{run}:user:")


@pytest.mark.asyncio
async def test_put_get_delete(redis_client):
    store = RedisCodeStore(redis_client)
    key = f"test:{uuid4()}"

    await store.put(key, "U1", ttl_seconds=30)
    assert await store.get(key) == "U1"
    assert await redis_client.ttl(key) in range(25, 31)

    await store.delete(key)
    assert await store.get(key) is None

    # deleting twice is fine
    await store.delete(key)


@pytest.mark.asyncio
async def test_ttl_expiry_makes_key_absent(redis_client):
    store = RedisCodeStore(redis_client)
    key = f"test:{uuid4()}"

    await store.put(key, "U1", ttl_seconds=1)
    await asyncio.sleep(1.2)

    assert await store.get(key) is None


@pytest.mark.asyncio
async def test_non_positive_ttl_rejected(redis_client):
    store = RedisCodeStore(redis_client)

    with pytest.raises(ValueError):
        await store.put(f"test:{uuid4()}", "U1", ttl_seconds=0)


@pytest.mark.asyncio
async def test_issue_and_consume_against_redis(redis_client):
    store = RedisCodeStore(redis_client)
    keys = _keys()
    u1 = Account(id=f"U1-{uuid4()}")
    u2 = Account(id=f"U2-{uuid4()}")
    target = GrantTarget(guild_id="g1", role_id="r1")
    gateway = FakeRoleGateway(result=True)

    issued = await issue_verification_code(store, u1.id, keys=keys)
    assert json.loads(await redis_client.get(keys.account(u1.id))) == [issued.code]

    with pytest.raises(CodeOwnershipMismatch):
        await verify_and_consume_code(
            store, gateway, u2, issued.code, target, keys=keys
        )
    assert await redis_client.get(keys.code(issued.code)) == u1.id

    await verify_and_consume_code(
        store, gateway, u1, issued.code, target, keys=keys
    )
    assert await redis_client.exists(keys.code(issued.code)) == 0
    assert await redis_client.exists(keys.account(u1.id)) == 0

    with pytest.raises(InvalidOrExpiredCode):
        await verify_and_consume_code(
            store, gateway, u1, issued.code, target, keys=keys
        )
