"""
Auth Handler - self-service signup.

Links a logged-in identity account to a player profile, creating the profile
on first join and updating it afterwards.
"""

from functools import lru_cache
from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from golf_pool.handlers.models.env_vars import get_service_role_env_vars
from golf_pool.handlers.utils.auth import bearer_header
from golf_pool.handlers.utils.dependencies import build_pool_service, load_settings
from golf_pool.handlers.utils.errors import create_api_response, handle_service_errors
from golf_pool.handlers.utils.observability import logger, metrics, tracer
from golf_pool.handlers.utils.rest_api_resolver import build_resolver, decode_body, request_context
from golf_pool.logic.pool_service import PoolService
from golf_pool.models.input import JoinRequest

app = build_resolver('auth')


@lru_cache(maxsize=1)
def get_pool_service() -> PoolService:
    settings = load_settings(get_service_role_env_vars)
    return build_pool_service(settings, api_key=settings.SUPABASE_SERVICE_ROLE_KEY, with_identity=True)


@app.post('/join')
@tracer.capture_method
@handle_service_errors
def join() -> Response:
    """Create or update the caller's player profile from ``{name, handicap_index}``."""
    context = request_context(app.current_event, 'join')

    # Body problems are reported before the identity service is called
    request = decode_body(app.current_event, JoinRequest, context=context)

    service = get_pool_service()
    user = service.authenticate(bearer_header(app.current_event))
    output = service.join(user, request)

    logger.info('Player profile saved', extra={'user_id': user.id, 'mode': output.mode})
    return create_api_response(200, output.model_dump(mode='json'))


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)
    tracer.put_annotation('function', 'auth')

    return app.resolve(event, context)
