"""
Public Lambda Function - Entry point for the read-only pool API.

Delegates to golf_pool.handlers.public_handler.
"""

from typing import Any, Dict

from aws_lambda_powertools.utilities.typing import LambdaContext

from golf_pool.handlers.public_handler import lambda_handler as public_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return public_handler(event, context)
