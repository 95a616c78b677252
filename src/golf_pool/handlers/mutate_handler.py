"""
Mutate Handler - scoring, draft picks and week participation.

Score submission is open; participation and draft picks act on the caller's
own player and need a bearer token; awarding a week needs the admin token.
"""

from functools import lru_cache
from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from golf_pool.handlers.models.env_vars import ServiceRoleEnvVars, get_service_role_env_vars
from golf_pool.handlers.utils.auth import bearer_header, require_admin_token
from golf_pool.handlers.utils.dependencies import build_pool_service, load_settings
from golf_pool.handlers.utils.errors import create_api_response, handle_service_errors
from golf_pool.handlers.utils.observability import logger, metrics, tracer
from golf_pool.handlers.utils.rest_api_resolver import build_resolver, decode_body, request_context
from golf_pool.logic.pool_service import PoolService
from golf_pool.models.input import DraftPickRequest, ParticipateRequest, SubmitScoreRequest, WeekSelectionRequest

app = build_resolver('mutate')


@lru_cache(maxsize=1)
def get_settings() -> ServiceRoleEnvVars:
    return load_settings(get_service_role_env_vars)


@lru_cache(maxsize=1)
def get_pool_service() -> PoolService:
    settings = get_settings()
    return build_pool_service(settings, api_key=settings.SUPABASE_SERVICE_ROLE_KEY, with_identity=True)


@app.post('/participate')
@tracer.capture_method
@handle_service_errors
def participate() -> Response:
    """Join (default) or leave a week: ``{week_id, participate}``."""
    context = request_context(app.current_event, 'participate')
    request = decode_body(app.current_event, ParticipateRequest, context=context)

    service = get_pool_service()
    user = service.authenticate(bearer_header(app.current_event))
    output = service.set_participation(user, request, context=context)

    return create_api_response(200, output.model_dump(mode='json'))


@app.post('/submit-score')
@tracer.capture_method
@handle_service_errors
def submit_score() -> Response:
    """Record a score: ``{week_id, player_id, pro_id, player_to_par, pro_to_par}``."""
    context = request_context(app.current_event, 'submit_score')
    request = decode_body(app.current_event, SubmitScoreRequest, context=context)

    tracer.put_annotation('week_id', str(request.week_id))
    output = get_pool_service().submit_score(request)

    return create_api_response(200, output.model_dump(mode='json'))


@app.post('/draft-pick')
@tracer.capture_method
@handle_service_errors
def draft_pick() -> Response:
    """Draft a professional for the caller: ``{week_id, pro_id}``."""
    context = request_context(app.current_event, 'draft_pick')
    request = decode_body(app.current_event, DraftPickRequest, context=context)

    service = get_pool_service()
    user = service.authenticate(bearer_header(app.current_event))
    output = service.draft_pick(user, request.week_id, request.pro_id, context=context)

    logger.info('Draft pick saved', extra={'user_id': user.id, 'week_id': request.week_id})
    return create_api_response(200, output.model_dump(mode='json'))


@app.post('/award-week-points')
@tracer.capture_method
@handle_service_errors
def award_week_points() -> Response:
    """Record the winner of a week (the current week unless ``week_id`` is given)."""
    context = request_context(app.current_event, 'award_week_points')
    require_admin_token(app.current_event, get_settings().ADMIN_TOKEN, context=context)

    request = decode_body(app.current_event, WeekSelectionRequest, context=context)
    output = get_pool_service().award_week(week_id=request.week_id, context=context)

    return create_api_response(200, output.model_dump(mode='json'))


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)
    tracer.put_annotation('function', 'mutate')

    return app.resolve(event, context)
