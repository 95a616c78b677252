"""
REST API resolver utility for the golf pool Lambda handlers.

Every function gets its own API Gateway REST resolver with a declarative route
table. The resolver strips the prefixes the function may be reached under, so
routes are declared once (``/leaderboard``) whatever the deployment path.
"""

import json
from typing import Any, Dict, List, Optional, Type, TypeVar

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig
from aws_lambda_powertools.event_handler.exceptions import NotFoundError
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent
from pydantic import BaseModel

from golf_pool.handlers.utils.errors import (
    ErrorContext,
    ValidationError,
    create_api_response,
    create_error_context,
)
from golf_pool.handlers.utils.observability import logger

ModelT = TypeVar('ModelT', bound=BaseModel)

ADMIN_TOKEN_HEADER = 'x-admin-token'

cors_config = CORSConfig(
    allow_origin='*',
    max_age=600,
    allow_headers=['Content-Type', 'Authorization', ADMIN_TOKEN_HEADER],
)


def route_prefixes(function_name: str) -> List[str]:
    """Paths a function is reachable under, most specific first."""
    return [
        f'/.netlify/functions/{function_name}',
        f'/api-{function_name}',
        f'/{function_name}',
    ]


def build_resolver(function_name: str) -> APIGatewayRestResolver:
    """
    Create the resolver for one function.

    Args:
        function_name: Deployment name of the function, e.g. ``public``

    Returns:
        Resolver with CORS, prefix stripping and a JSON 404
    """
    app = APIGatewayRestResolver(cors=cors_config, strip_prefixes=route_prefixes(function_name))

    @app.not_found
    def handle_not_found(exc: NotFoundError):
        logger.info('Route not found', extra={'path': app.current_event.path})
        return create_api_response(404, {'error': {'code': 'ROUTE_NOT_FOUND', 'message': 'Not found'}})

    return app


def get_header(event: APIGatewayProxyEvent, name: str) -> str:
    """Case-insensitive header lookup, stripped; empty when absent."""
    wanted = name.lower()
    for key, value in (event.headers or {}).items():
        if key.lower() == wanted:
            return (value or '').strip()
    return ''


def get_query_param(event: APIGatewayProxyEvent, name: str) -> Optional[str]:
    value = (event.query_string_parameters or {}).get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def request_context(event: APIGatewayProxyEvent, operation: str, **details: Any) -> ErrorContext:
    request_id = event.request_context.request_id if event.request_context else None
    return create_error_context(request_id=request_id or 'unknown', operation=operation, **details)


def decode_body(event: APIGatewayProxyEvent, model: Type[ModelT], context: Optional[ErrorContext] = None) -> ModelT:
    """
    Decode a JSON request body into ``model``.

    Raises:
        ValidationError: The body is not valid UTF-8 JSON
        pydantic.ValidationError: The body does not fit the model
    """
    try:
        payload: Dict[str, Any] = json.loads(event.decoded_body or '{}')
    # Malformed base64, non UTF-8 bytes and bad JSON are all ValueError
    except ValueError:
        raise ValidationError(message='Invalid JSON in request body', context=context)

    return model.model_validate(payload)
