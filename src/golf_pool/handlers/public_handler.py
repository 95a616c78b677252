"""
Public Handler - read-only endpoints of the golf pool.

Serves the health check, roster, draft list, schedule, current week, season
standings and weekly leaderboard. Reads use the data store's anonymous key.
"""

from functools import lru_cache
from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from golf_pool.handlers.models.env_vars import get_public_env_vars
from golf_pool.handlers.utils.dependencies import build_pool_service, load_settings
from golf_pool.handlers.utils.errors import create_api_response, handle_service_errors
from golf_pool.handlers.utils.observability import logger, metrics, tracer
from golf_pool.handlers.utils.rest_api_resolver import build_resolver, get_query_param
from golf_pool.logic.pool_service import PoolService
from golf_pool.logic.pros import list_pros
from golf_pool.models.output import HealthOutput

app = build_resolver('public')


@lru_cache(maxsize=1)
def get_pool_service() -> PoolService:
    return build_pool_service(load_settings(get_public_env_vars))


def _health(route: str) -> Response:
    output = HealthOutput(route=route, raw_path=app.current_event.path)
    return create_api_response(200, output.model_dump(mode='json', by_alias=True))


@app.get('/')
@handle_service_errors
def root() -> Response:
    return _health('')


@app.get('/health')
@handle_service_errors
def health() -> Response:
    """Health check; answers without touching configuration or the data store."""
    return _health('health')


@app.get('/players')
@tracer.capture_method
@handle_service_errors
def players() -> Response:
    roster = get_pool_service().players()
    return create_api_response(200, [player.model_dump(mode='json', include={'id', 'name'}) for player in roster])


@app.get('/pros')
@handle_service_errors
def pros() -> Response:
    return create_api_response(200, [pro.model_dump(mode='json') for pro in list_pros()])


@app.get('/schedule')
@tracer.capture_method
@handle_service_errors
def schedule() -> Response:
    output = get_pool_service().schedule()
    return create_api_response(200, output.model_dump(mode='json'))


@app.get('/current-week')
@tracer.capture_method
@handle_service_errors
def current_week() -> Response:
    output = get_pool_service().current_week_output()

    logger.info('Current week requested', extra={'week_id': output.week.id if output.week else None})
    return create_api_response(200, output.model_dump(mode='json'))


@app.get('/season-standings')
@tracer.capture_method
@handle_service_errors
def season_standings() -> Response:
    output = get_pool_service().season_standings()
    return create_api_response(200, output.model_dump(mode='json'))


@app.get('/leaderboard')
@tracer.capture_method
@handle_service_errors
def leaderboard() -> Response:
    """
    Weekly leaderboard.

    The optional ``week_id`` query parameter selects the week; without it the
    current week is shown. No scheduled week yields an empty board, not an error.
    """
    week_id = get_query_param(app.current_event, 'week_id')
    output = get_pool_service().leaderboard(week_id=week_id)

    metrics.add_metric(name='LeaderboardRows', unit=MetricUnit.Count, value=len(output.rows))
    return create_api_response(200, output.model_dump(mode='json', by_alias=True))


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Entry point of the public function.

    Args:
        event: API Gateway REST proxy event, reached under any of the function's prefixes
        context: Lambda context object

    Returns:
        API Gateway proxy response
    """
    metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)
    tracer.put_annotation('function', 'public')

    return app.resolve(event, context)
