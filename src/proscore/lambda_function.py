"""
Pro Score Lambda Function - Entry point for the pro score lookup API.

Delegates to golf_pool.handlers.proscore_handler.
"""

from typing import Any, Dict

from aws_lambda_powertools.utilities.typing import LambdaContext

from golf_pool.handlers.proscore_handler import lambda_handler as proscore_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return proscore_handler(event, context)
