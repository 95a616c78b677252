"""Pro Score Handler - score lookup for a drafted professional."""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from golf_pool.handlers.utils.errors import create_api_response, handle_service_errors
from golf_pool.handlers.utils.observability import logger, metrics, tracer
from golf_pool.handlers.utils.rest_api_resolver import build_resolver, get_query_param
from golf_pool.logic.pros import lookup_pro_score

app = build_resolver('proscore')


@app.get('/')
@handle_service_errors
def pro_score() -> Response:
    output = lookup_pro_score(get_query_param(app.current_event, 'pro_id'))
    return create_api_response(200, output.model_dump(mode='json'))


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)
    return app.resolve(event, context)
