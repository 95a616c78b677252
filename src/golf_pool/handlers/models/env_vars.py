"""
Environment variable models for type-safe configuration.

Each Lambda function parses its environment exactly once through
aws-lambda-env-modeler and hands the validated model to the service it builds.
Route code never reads os.environ directly.
"""

from typing import Annotated, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field, field_validator


class PublicEnvVars(BaseModel):
    """Environment variables for the public read-only function."""

    # REST data store base URL (the /rest/v1 and /auth/v1 paths are appended)
    SUPABASE_URL: Annotated[str, Field(
        description='Base URL of the REST data store',
        pattern=r'^https?://',
        min_length=8
    )]

    SUPABASE_ANON_KEY: Annotated[str, Field(
        description='Anonymous API key for the REST data store',
        min_length=1
    )]

    # Wall clock used to decide which week is current
    POOL_TIMEZONE: Annotated[str, Field(
        default='UTC',
        description='IANA time zone in which schedule dates are interpreted'
    )] = 'UTC'

    UPSTREAM_TIMEOUT_SECONDS: Annotated[float, Field(
        default=10.0,
        description='Timeout for data store and identity service calls',
        gt=0,
        le=30
    )] = 10.0

    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='golf-pool',
        description='Service name for AWS Powertools'
    )] = 'golf-pool'

    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    @field_validator('SUPABASE_URL')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/')

    @field_validator('POOL_TIMEZONE')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject zone names the interpreter cannot load."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f'Unknown time zone: {v}')
        return v

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.POOL_TIMEZONE)


class ServiceRoleEnvVars(PublicEnvVars):
    """Environment variables for functions that write with the service role."""

    SUPABASE_SERVICE_ROLE_KEY: Annotated[str, Field(
        description='Service role API key for privileged writes',
        min_length=1
    )]

    # Only the admin-gated routes of the mutate function need it
    ADMIN_TOKEN: Annotated[Optional[str], Field(
        default=None,
        description='Shared secret expected in the x-admin-token header'
    )] = None

    @field_validator('ADMIN_TOKEN')
    @classmethod
    def normalize_admin_token(cls, v: Optional[str]) -> Optional[str]:
        v = (v or '').strip()
        return v or None


class AdminEnvVars(ServiceRoleEnvVars):
    """Environment variables for the admin function."""

    ADMIN_TOKEN: Annotated[str, Field(
        description='Shared secret expected in the x-admin-token header',
        min_length=1
    )]

    @field_validator('ADMIN_TOKEN')
    @classmethod
    def normalize_admin_token(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('ADMIN_TOKEN must not be blank')
        return v


def get_public_env_vars() -> PublicEnvVars:
    """Get typed environment variables for the public function."""
    return get_environment_variables(model=PublicEnvVars)


def get_service_role_env_vars() -> ServiceRoleEnvVars:
    """Get typed environment variables for the auth and mutate functions."""
    return get_environment_variables(model=ServiceRoleEnvVars)


def get_admin_env_vars() -> AdminEnvVars:
    """Get typed environment variables for the admin function."""
    return get_environment_variables(model=AdminEnvVars)
