"""
Data Access Layer (DAL) for the golf pool service.

This module provides the factory functions that wire the REST clients to the
pool's table-level store. Each function builds its clients once, from the
configuration it validated at startup.
"""

from typing import Optional

import httpx

from golf_pool.dal.identity_client import IdentityClient
from golf_pool.dal.pool_store import PoolStore
from golf_pool.dal.postgrest_client import OrderBy, PostgrestClient, eq, is_not_null


def get_pool_store(
    base_url: str,
    api_key: str,
    timeout: float = 10.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> PoolStore:
    """
    Factory function to get a pool store bound to one API key.

    Args:
        base_url: Data store base URL
        api_key: Anonymous key for public reads, service role key for writes
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport, used by tests

    Returns:
        PoolStore instance
    """
    return PoolStore(PostgrestClient(base_url, api_key, timeout=timeout, transport=transport))


__all__ = [
    'IdentityClient',
    'OrderBy',
    'PoolStore',
    'PostgrestClient',
    'eq',
    'get_pool_store',
    'is_not_null',
]
