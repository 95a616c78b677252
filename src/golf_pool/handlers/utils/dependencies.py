"""
Service construction for the golf pool handlers.

Handlers load their environment model once, turn it into a PoolService here,
and reuse both for the lifetime of the execution environment.
"""

from typing import Callable, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError

from golf_pool.dal import IdentityClient, get_pool_store
from golf_pool.handlers.models.env_vars import PublicEnvVars
from golf_pool.handlers.utils.errors import ConfigurationError
from golf_pool.handlers.utils.observability import logger
from golf_pool.logic.pool_service import PoolService

EnvT = TypeVar('EnvT', bound=PublicEnvVars)


def load_settings(loader: Callable[[], EnvT]) -> EnvT:
    """
    Run an environment loader, reporting missing or invalid variables as a configuration error.
    """
    try:
        return loader()
    except PydanticValidationError as e:
        names = sorted({str(error['loc'][0]) for error in e.errors() if error.get('loc')})
        logger.error('Invalid function configuration', extra={'variables': names})
        raise ConfigurationError(f"Missing or invalid environment variables: {', '.join(names)}")


def build_pool_service(
    env: PublicEnvVars,
    api_key: Optional[str] = None,
    with_identity: bool = False,
) -> PoolService:
    """
    Build a pool service from validated settings.

    Args:
        env: Validated environment model
        api_key: Key used for data store calls; the anonymous key when omitted
        with_identity: Whether member operations (bearer tokens) are needed

    Returns:
        PoolService instance
    """
    store = get_pool_store(
        env.SUPABASE_URL,
        api_key or env.SUPABASE_ANON_KEY,
        timeout=env.UPSTREAM_TIMEOUT_SECONDS,
    )
    identity = None
    if with_identity:
        identity = IdentityClient(env.SUPABASE_URL, env.SUPABASE_ANON_KEY, timeout=env.UPSTREAM_TIMEOUT_SECONDS)

    return PoolService(store=store, identity=identity, zone=env.timezone)
