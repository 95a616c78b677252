"""
Auth Lambda Function - Entry point for the signup API that links a login to a player profile.

Delegates to golf_pool.handlers.auth_handler.
"""

from typing import Any, Dict

from aws_lambda_powertools.utilities.typing import LambdaContext

from golf_pool.handlers.auth_handler import lambda_handler as auth_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return auth_handler(event, context)
