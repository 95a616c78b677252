"""
Admin Handler - privileged week maintenance.

Every route requires the shared admin token in the ``x-admin-token`` header and
writes with the data store's service role key.
"""

from functools import lru_cache
from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from golf_pool.handlers.models.env_vars import AdminEnvVars, get_admin_env_vars
from golf_pool.handlers.utils.auth import require_admin_token
from golf_pool.handlers.utils.dependencies import build_pool_service, load_settings
from golf_pool.handlers.utils.errors import create_api_response, handle_service_errors
from golf_pool.handlers.utils.observability import logger, metrics, tracer
from golf_pool.handlers.utils.rest_api_resolver import build_resolver, decode_body, request_context
from golf_pool.logic.pool_service import PoolService
from golf_pool.models.input import WeekSelectionRequest

app = build_resolver('admin')


@lru_cache(maxsize=1)
def get_settings() -> AdminEnvVars:
    return load_settings(get_admin_env_vars)


@lru_cache(maxsize=1)
def get_pool_service() -> PoolService:
    settings = get_settings()
    return build_pool_service(settings, api_key=settings.SUPABASE_SERVICE_ROLE_KEY)


@app.post('/reset-week')
@tracer.capture_method
@handle_service_errors
def reset_week() -> Response:
    """Delete every entry of the current week."""
    context = request_context(app.current_event, 'reset_week')
    require_admin_token(app.current_event, get_settings().ADMIN_TOKEN, context=context)

    output = get_pool_service().reset_current_week(context=context)

    logger.info('Reset week completed', extra={'week_id': output.week_id})
    return create_api_response(200, output.model_dump(mode='json'))


@app.post('/recalc')
@tracer.capture_method
@handle_service_errors
def recalc() -> Response:
    """Recompute combined totals for a week (the current week unless ``week_id`` is given)."""
    context = request_context(app.current_event, 'recalc')
    require_admin_token(app.current_event, get_settings().ADMIN_TOKEN, context=context)

    request = decode_body(app.current_event, WeekSelectionRequest, context=context)
    output = get_pool_service().recalculate_week(week_id=request.week_id, context=context)

    return create_api_response(200, output.model_dump(mode='json'))


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)
    tracer.put_annotation('function', 'admin')

    return app.resolve(event, context)
