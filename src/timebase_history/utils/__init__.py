"""Shared utilities."""

from timebase_history.utils.errors import create_error, to_http_error
from timebase_history.utils.health import get_uptime, ServiceHealth, ComponentHealth


__all__ = [
    'create_error',
    'to_http_error',
    'get_uptime',
    'ServiceHealth',
    'ComponentHealth'
]
