import asyncio

import pytest

from eventquote.core.metrics import registry
from eventquote.schemas.parameters import GlobalParametersData
from eventquote.schemas.quotation import QuotationInput
from eventquote.services.cache import QuotationCache, KEY_PREFIX, invalidate_quotation_cache
from eventquote.services.pricing import compute_quotation


def build_input(body=None) -> QuotationInput:
    return QuotationInput.model_validate(body or {
        "eventType": "A",
        "platform": {"name": "TICKET_PLUS", "percentage": 4},
        "serviceCharge": 10,
        "ticketSectors": [{"name": "General", "variations": [{"name": "E", "price": 100, "quantity": 10}]}],
    })


class CountingCompute:

    def __init__(self, req):
        self.req = req
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return compute_quotation(self.req, GlobalParametersData(), {})


class SlowStore:

    async def get(self, key):
        await asyncio.sleep(1)

    async def set(self, key, value, ex=None):
        await asyncio.sleep(1)


def cache_errors(operation):
    return registry.get_sample_value(
        "cache_errors_total", {"cache": "quotation", "operation": operation}
    ) or 0


async def test_second_identical_call_is_a_hit(fake_redis):
    cache = QuotationCache(fake_redis)
    req = build_input()
    compute = CountingCompute(req)
    key = cache.fingerprint(req, version=1)

    first = await cache.get_or_compute(key, compute)
    second = await cache.get_or_compute(key, compute)

    assert compute.calls == 1
    assert (cache.hits, cache.misses) == (1, 1)
    assert second == first
    assert fake_redis.ttls[key] == 3600


async def test_version_change_recomputes(fake_redis):
    cache = QuotationCache(fake_redis)
    req = build_input()
    compute = CountingCompute(req)

    await cache.get_or_compute(cache.fingerprint(req, 1), compute)
    await cache.get_or_compute(cache.fingerprint(req, 1), compute)
    await cache.get_or_compute(cache.fingerprint(req, 2), compute)

    assert compute.calls == 2


def test_fingerprint_ignores_key_order():
    a = build_input({
        "eventType": "A",
        "serviceCharge": 10,
        "platform": {"percentage": 4, "name": "TICKET_PLUS"},
        "ticketSectors": [{"variations": [{"quantity": 10, "price": 100, "name": "E"}], "name": "General"}],
    })
    b = build_input()
    assert QuotationCache.fingerprint(a, 3) == QuotationCache.fingerprint(b, 3)
    assert QuotationCache.fingerprint(a, 3).startswith(KEY_PREFIX)


def test_fingerprint_includes_employee_costs():
    req = build_input()
    assert QuotationCache.fingerprint(req, 1, {1: 100.0}) != QuotationCache.fingerprint(req, 1, {1: 120.0})


async def test_store_outage_degrades_to_recompute(failing_redis):
    before_get, before_set = cache_errors("get"), cache_errors("set")
    cache = QuotationCache(failing_redis)
    req = build_input()
    compute = CountingCompute(req)
    key = cache.fingerprint(req, 1)

    first = await cache.get_or_compute(key, compute)
    second = await cache.get_or_compute(key, compute)

    assert first == second
    assert compute.calls == 2
    assert cache.hits == 0
    assert cache_errors("get") == before_get + 2
    assert cache_errors("set") == before_set + 2


async def test_timed_out_read_is_a_miss():
    cache = QuotationCache(SlowStore(), timeout=0.01)
    req = build_input()
    compute = CountingCompute(req)

    result = await cache.get_or_compute(cache.fingerprint(req, 1), compute)

    assert result.total_value == 1000
    assert compute.calls == 1
    assert cache.misses == 1


async def test_no_store_always_computes():
    cache = QuotationCache(None)
    req = build_input()
    compute = CountingCompute(req)
    key = cache.fingerprint(req, 1)
    await cache.get_or_compute(key, compute)
    await cache.get_or_compute(key, compute)
    assert compute.calls == 2


async def test_invalidate_only_touches_quotation_keys(fake_redis):
    await fake_redis.set(f"{KEY_PREFIX}a", "1")
    await fake_redis.set(f"{KEY_PREFIX}b", "2")
    await fake_redis.set("rl:1", "3")

    result = await invalidate_quotation_cache(fake_redis)

    assert result == {"success": True, "keys_deleted": 2}
    assert list(fake_redis.data) == ["rl:1"]


async def test_invalidate_reports_failure(failing_redis):
    assert await invalidate_quotation_cache(failing_redis) == {"success": False, "keys_deleted": 0}
    assert await invalidate_quotation_cache(None) == {"success": False, "keys_deleted": 0}


class HangingScanStore:

    async def scan_iter(self, match="*"):
        await asyncio.sleep(1)
        yield f"{KEY_PREFIX}stale"

    async def delete(self, *keys):
        return len(keys)


async def test_invalidate_gives_up_after_timeout():
    before = cache_errors("invalidate")
    result = await invalidate_quotation_cache(HangingScanStore(), timeout=0.01)
    assert result == {"success": False, "keys_deleted": 0}
    assert cache_errors("invalidate") == before + 1
