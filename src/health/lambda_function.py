"""
Health Check Lambda Function - Entry point for the health check API.

This module serves as the Lambda function entry point and delegates to
public_data_proxy.handlers.health_handler.
"""

import os
import sys
from typing import Any, Dict

# Add the shared package to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from public_data_proxy.handlers.health_handler import lambda_handler as health_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for the health check API.

    Args:
        event: Lambda event payload (API Gateway event)
        context: Lambda context object

    Returns:
        API Gateway response dictionary
    """
    return health_handler(event, context)
