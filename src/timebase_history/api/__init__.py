"""Tag history HTTP API."""

from timebase_history.api.history_app import create_history_service, setup_logging
from timebase_history.api.history_service import HistoryService
from timebase_history.api.history_router import router

__all__ = [
    "create_history_service",
    "setup_logging",
    "HistoryService",
    "router",
]
