"""
Admin Lambda Function - Entry point for the admin API (week reset and total recalculation).

Delegates to golf_pool.handlers.admin_handler.
"""

from typing import Any, Dict

from aws_lambda_powertools.utilities.typing import LambdaContext

from golf_pool.handlers.admin_handler import lambda_handler as admin_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return admin_handler(event, context)
