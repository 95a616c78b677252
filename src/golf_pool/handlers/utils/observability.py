"""
Powertools logger, tracer and metrics shared by every golf pool function.

The service name is read by Powertools from POWERTOOLS_SERVICE_NAME. Tracing is
switched off with POWERTOOLS_TRACE_DISABLED, which the tests rely on.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

# CloudWatch namespace for request, error and pool counters (ScoreSubmitted, WeekReset, ...)
METRICS_NAMESPACE = 'GolfPool'

logger: Logger = Logger(log_uncaught_exceptions=True)

tracer: Tracer = Tracer()

metrics: Metrics = Metrics(namespace=METRICS_NAMESPACE)
