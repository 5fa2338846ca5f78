"""Execution engine: transport, retry policy and the request loop."""

from docdb_regional.engine.executor import RequestExecutor
from docdb_regional.engine.retry import RetryPolicy
from docdb_regional.engine.transport import HttpxTransport, Transport
from docdb_regional.engine.types import OutboundRequest, Response
from docdb_regional.engine.validators import StatusValidator, expect_status, expect_status_class

__all__ = [
    "HttpxTransport",
    "OutboundRequest",
    "RequestExecutor",
    "Response",
    "RetryPolicy",
    "StatusValidator",
    "Transport",
    "expect_status",
    "expect_status_class",
]
