"""Service health reporting."""

import time
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field


HealthStatus = Literal["ok", "error"]


def get_uptime(started_at: Optional[float]) -> float:
    """Seconds since a `time.monotonic()` start mark, 0.0 when stopped."""
    if started_at is None:
        return 0.0
    return time.monotonic() - started_at


class ComponentHealth(BaseModel):
    """Health of one service dependency."""

    status: HealthStatus
    error: Optional[str] = None

    @classmethod
    def check(cls, ok: bool, error: str) -> "ComponentHealth":
        """Build a component status, carrying `error` only when failing."""
        return cls(status="ok" if ok else "error", error=None if ok else error)


class ServiceHealth(BaseModel):
    """Health of the history service and its Timebase link."""

    status: HealthStatus
    service: str
    version: str
    is_running: bool
    uptime: float = Field(..., ge=0.0, description="Seconds since start")
    timebase_url: str
    timebase_timeout: float = Field(..., description="Timebase request timeout in seconds")
    error: Optional[str] = None
    components: Dict[str, ComponentHealth]

    @property
    def failed_components(self) -> List[str]:
        return [name for name, component in self.components.items() if component.status != "ok"]
