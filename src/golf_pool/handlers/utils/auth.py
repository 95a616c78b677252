"""
Request authentication helpers.

Two gates exist: a shared admin token sent in ``x-admin-token`` for admin
operations, and a member bearer token that is resolved by the identity service
(see golf_pool.dal.identity_client).
"""

import hmac
from typing import Optional

from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent

from golf_pool.handlers.utils.errors import AuthenticationError, ConfigurationError, ErrorContext
from golf_pool.handlers.utils.observability import logger
from golf_pool.handlers.utils.rest_api_resolver import ADMIN_TOKEN_HEADER, get_header


def admin_token_matches(presented: str, expected: str) -> bool:
    if not presented:
        return False
    return hmac.compare_digest(presented.encode('utf-8'), expected.encode('utf-8'))


def require_admin_token(
    event: APIGatewayProxyEvent,
    expected: Optional[str],
    context: Optional[ErrorContext] = None,
) -> None:
    """
    Reject the request unless it carries the configured admin token.

    Raises:
        ConfigurationError: No admin token is configured for this function
        AuthenticationError: The header is missing or does not match
    """
    if not expected:
        raise ConfigurationError('Missing ADMIN_TOKEN env var', context=context)

    if not admin_token_matches(get_header(event, ADMIN_TOKEN_HEADER), expected):
        logger.warning('Admin token rejected', extra={'path': event.path})
        raise AuthenticationError('Unauthorized', context=context)


def bearer_header(event: APIGatewayProxyEvent) -> str:
    return get_header(event, 'Authorization')
