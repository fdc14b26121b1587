import json

import pytest

from verifybot.application.account_index import (
    forget_outstanding_code,
    load_outstanding_codes,
    track_outstanding_code,
)
from tests.fakes import FakeBrokenIndexStore


@pytest.mark.asyncio
async def test_track_appends_and_refreshes_ttl(store):
    await track_outstanding_code(store, "user:U1", "111111", 600)
    await track_outstanding_code(store, "user:U1", "222222", 600)
    await track_outstanding_code(store, "user:U1", "111111", 600)

    assert json.loads(store.peek("user:U1")) == ["111111", "222222"]

    store.advance(601)
    assert store.peek("user:U1") is None


@pytest.mark.asyncio
async def test_forget_removes_code_and_drops_empty_index(store):
    await track_outstanding_code(store, "user:U1", "111111", 600)
    await track_outstanding_code(store, "user:U1", "222222", 600)

    await forget_outstanding_code(store, "user:U1", "111111", 600)
    assert json.loads(store.peek("user:U1")) == ["222222"]

    await forget_outstanding_code(store, "user:U1", "222222", 600)
    assert store.peek("user:U1") is None


@pytest.mark.asyncio
async def test_unreadable_index_is_treated_as_empty(store):
    await store.put("user:U1", "{not json", 600)
    assert await load_outstanding_codes(store, "user:U1") == []

    await store.put("user:U1", json.dumps({"a": 1}), 600)
    assert await load_outstanding_codes(store, "user:U1") == []

    await store.put("user:U1", json.dumps(["111111", 7]), 600)
    assert await load_outstanding_codes(store, "user:U1") == ["111111"]

    await track_outstanding_code(store, "user:U1", "333333", 600)
    assert json.loads(store.peek("user:U1")) == ["111111", "333333"]


@pytest.mark.asyncio
async def test_index_failures_are_swallowed():
    broken = FakeBrokenIndexStore()

    await track_outstanding_code(broken, "user:U1", "111111", 600)
    await forget_outstanding_code(broken, "user:U1", "111111", 600)

    assert broken.ops == []
