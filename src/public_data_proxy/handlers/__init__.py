"""
AWS Lambda Handlers Module.

Entry points of the proxy. Each handler module exposes a ``lambda_handler``:

- restaurants_handler: open restaurants of one upstream page (GET, OPTIONS)
- districts_handler: dong names found in a sample of the dataset (GET, OPTIONS)
- health_handler: liveness and configuration readiness (GET)

Handlers own request parsing, configuration loading and the conversion of
errors into the failure envelope; the pipeline itself lives in
``public_data_proxy.logic``.
"""

from public_data_proxy.handlers.utils.observability import logger, metrics, tracer

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
