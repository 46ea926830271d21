"""
Backing-service clients for the cart core.

- get_supabase(): async Supabase client, used for catalog reads
- get_redis_sync(): blocking Upstash Redis client, used for cart persistence

Both are created on first use and reused for the life of the process.
"""

import os
from typing import Optional

from supabase._async.client import AsyncClient, create_client as acreate_client
from upstash_redis import Redis


_supabase: Optional[AsyncClient] = None
_redis: Optional[Redis] = None


def _require_env(*names: str) -> list[str]:
    """Values of the given env vars; ValueError naming any that are unset."""
    missing = [name for name in names if not os.environ.get(name)]
    if missing:
        raise ValueError(f"{' and '.join(missing)} must be set")
    return [os.environ[name] for name in names]


async def get_supabase() -> AsyncClient:
    """Shared async Supabase client (SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)."""
    global _supabase

    if _supabase is None:
        url, key = _require_env("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY")
        _supabase = await acreate_client(url, key)
    return _supabase


def get_redis_sync() -> Redis:
    """
    Shared Upstash Redis client (UPSTASH_REDIS_REST_URL, UPSTASH_REDIS_REST_TOKEN).

    Cart saves run inline after each reducer step, so this is the blocking
    REST client rather than the asyncio one.
    """
    global _redis

    if _redis is None:
        url, token = _require_env("UPSTASH_REDIS_REST_URL", "UPSTASH_REDIS_REST_TOKEN")
        _redis = Redis(url=url, token=token)
    return _redis


class RedisKeys:
    CART = "cart:"

    @staticmethod
    def cart_key(cart_id: str) -> str:
        return f"{RedisKeys.CART}{cart_id}"


class TTL:
    """Key expiry in seconds."""

    CART = 86400  # 24h, refreshed on every save
