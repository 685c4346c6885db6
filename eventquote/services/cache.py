"""Quotation result cache with Redis.

Results are keyed by a fingerprint of the validated input, the global
parameters version and the costs of the employee types it references.
The cache is best-effort: any store failure or timeout is a miss.
"""
import asyncio
import json
import logging
from typing import Any, Callable, Mapping, Optional

from eventquote.core.config import settings
from eventquote.core.metrics import cache_hits, cache_misses, cache_errors
from eventquote.schemas.quotation import QuotationInput, QuotationResult
from eventquote.utils.hashing import payload_hash

logger = logging.getLogger(__name__)

CACHE_NAME = "quotation"
KEY_PREFIX = "quotation:"


class QuotationCache:

    def __init__(self, store: Optional[Any], ttl: int = None, timeout: float = None):
        self.store = store
        self.ttl = ttl if ttl is not None else settings.QUOTATION_CACHE_TTL
        self.timeout = timeout if timeout is not None else settings.CACHE_TIMEOUT
        self.hits = 0
        self.misses = 0

    @staticmethod
    def fingerprint(req: QuotationInput, version: int, employee_costs: Mapping[int, float] = None) -> str:
        payload = {
            "input": req.model_dump(mode="json", by_alias=True),
            "version": version,
            "employee_costs": {str(k): v for k, v in sorted((employee_costs or {}).items())},
        }
        return f"{KEY_PREFIX}{payload_hash(payload)}"

    async def _read(self, key: str) -> Optional[QuotationResult]:
        if self.store is None:
            return None
        try:
            cached = await asyncio.wait_for(self.store.get(key), timeout=self.timeout)
            if cached:
                return QuotationResult.model_validate_json(cached)
        except Exception as e:
            cache_errors.labels(cache=CACHE_NAME, operation="get").inc()
            logger.warning(f"Cache retrieval failed: {e!r}")
        return None

    async def _write(self, key: str, result: QuotationResult) -> None:
        if self.store is None:
            return
        try:
            await asyncio.wait_for(
                self.store.set(key, result.model_dump_json(by_alias=True), ex=self.ttl),
                timeout=self.timeout,
            )
        except Exception as e:
            cache_errors.labels(cache=CACHE_NAME, operation="set").inc()
            logger.warning(f"Cache write failed: {e!r}")

    async def get_or_compute(self, key: str, compute: Callable[[], QuotationResult]) -> QuotationResult:
        cached = await self._read(key)
        if cached is not None:
            self.hits += 1
            cache_hits.labels(cache=CACHE_NAME).inc()
            return cached

        self.misses += 1
        cache_misses.labels(cache=CACHE_NAME).inc()
        result = compute()
        await self._write(key, result)
        return result


async def invalidate_quotation_cache(store: Optional[Any], timeout: float = None) -> dict:
    """Delete every cached quotation. Returns ``{"success", "keys_deleted"}``.

    The scan and the delete share one ``CACHE_TIMEOUT`` budget; running out of
    it counts as a failed invalidation.
    """
    if store is None:
        return {"success": False, "keys_deleted": 0}
    timeout = timeout if timeout is not None else settings.CACHE_TIMEOUT

    async def _scan_and_delete() -> list:
        keys = [key async for key in store.scan_iter(match=f"{KEY_PREFIX}*")]
        if keys:
            await store.delete(*keys)
        return keys

    try:
        keys = await asyncio.wait_for(_scan_and_delete(), timeout=timeout)
        logger.info(f"Quotation cache invalidated: {len(keys)} entries removed")
        return {"success": True, "keys_deleted": len(keys)}
    except Exception as e:
        cache_errors.labels(cache=CACHE_NAME, operation="invalidate").inc()
        logger.warning(f"Quotation cache invalidation failed: {e!r}")
        return {"success": False, "keys_deleted": 0}
