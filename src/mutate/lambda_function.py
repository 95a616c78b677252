"""
Mutate Lambda Function - Entry point for the write API (participation, scores, draft picks, week awards).

Delegates to golf_pool.handlers.mutate_handler.
"""

from typing import Any, Dict

from aws_lambda_powertools.utilities.typing import LambdaContext

from golf_pool.handlers.mutate_handler import lambda_handler as mutate_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return mutate_handler(event, context)
