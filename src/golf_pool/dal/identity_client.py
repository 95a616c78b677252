"""
Client for the external identity service.

The pool never validates tokens itself: the caller's ``Authorization`` header
is passed through to ``/auth/v1/user`` and the account it resolves to is
trusted.
"""

from typing import Optional

import httpx

from golf_pool.handlers.utils.errors import AuthenticationError, UpstreamServiceError
from golf_pool.handlers.utils.observability import logger, tracer
from golf_pool.models.user import AuthenticatedUser

SERVICE_NAME = 'identity'
BEARER_PREFIX = 'Bearer '


class IdentityClient:
    """Resolves bearer tokens to identity accounts."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.http = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/auth/v1",
            headers={'apikey': anon_key},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self.http.close()

    @tracer.capture_method
    def get_user(self, authorization: Optional[str]) -> AuthenticatedUser:
        """
        Resolve the account behind an ``Authorization`` header.

        Args:
            authorization: Raw header value, expected as ``Bearer <token>``

        Returns:
            The authenticated account

        Raises:
            AuthenticationError: No bearer token, or the identity service rejected it
            UpstreamServiceError: The identity service is unreachable or failing
        """
        authorization = (authorization or '').strip()
        if not authorization.startswith(BEARER_PREFIX):
            raise AuthenticationError('Not logged in')

        try:
            response = self.http.get('/user', headers={'Authorization': authorization})
        except httpx.HTTPError as e:
            logger.error('Identity service request failed', extra={'error': str(e)})
            raise UpstreamServiceError(SERVICE_NAME, 502, str(e))

        if response.status_code >= 500:
            raise UpstreamServiceError(SERVICE_NAME, response.status_code, response.text)
        if response.is_error:
            logger.info('Identity service rejected session', extra={'status_code': response.status_code})
            raise AuthenticationError('Invalid session')

        try:
            payload = response.json()
        except ValueError:
            payload = None

        user_id = payload.get('id') if isinstance(payload, dict) else None
        if not user_id:
            raise AuthenticationError('Invalid session')

        return AuthenticatedUser(id=str(user_id), email=payload.get('email'))
