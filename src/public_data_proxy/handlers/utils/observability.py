"""
Centralized observability utilities for the proxy Lambda handlers.

Every handler and pipeline stage shares these AWS Lambda Powertools instances
so that logs, traces and metrics carry the same service name.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

METRICS_NAMESPACE = 'PublicDataProxy'

# JSON output format, service name set by environment variable "POWERTOOLS_SERVICE_NAME"
logger: Logger = Logger()

# Service name set by environment variable "POWERTOOLS_SERVICE_NAME"
# Disabled by setting POWERTOOLS_TRACE_DISABLED to "true"
tracer: Tracer = Tracer()

# Service name set by environment variable "POWERTOOLS_SERVICE_NAME"
metrics = Metrics(namespace=METRICS_NAMESPACE)
