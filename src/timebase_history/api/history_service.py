"""Tag history service implementation."""

import time
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from timebase_history.config import HistoryConfig
from timebase_history.core.alignment import align
from timebase_history.core.lookup import (
    MAX_GRID_POINTS,
    ResampledPoint,
    ResampleMethod,
    grid_size,
    resample,
    value_at,
)
from timebase_history.core.models import AlignedRow, TagMetadata, TagSeries, Value
from timebase_history.exceptions import StateError, ValidationError
from timebase_history.timebase.client import TimebaseClient
from timebase_history.timebase.decoding import time_series
from timebase_history.timebase.models import DataQuery
from timebase_history.utils.health import ComponentHealth, ServiceHealth, get_uptime


class HistoryService:
    """Service answering tag history questions from Timebase data."""

    def __init__(self, config: HistoryConfig, client: Optional[TimebaseClient] = None):
        """Initialize history service.

        Args:
            config: Service configuration
            client: Optional Timebase client, built from config when omitted
        """
        self._service_name = "history"
        self._version = config.version
        self._config = config
        self._client = client
        self._is_running = False
        self._start_time: Optional[float] = None

        logger.info(f"{self._service_name} service initialized")

    @property
    def service_name(self) -> str:
        """Get service name."""
        return self._service_name

    @property
    def version(self) -> str:
        """Get service version."""
        return self._version

    @property
    def is_running(self) -> bool:
        """Get service running state."""
        return self._is_running

    @property
    def uptime(self) -> float:
        """Get service uptime in seconds."""
        return get_uptime(self._start_time)

    @property
    def client(self) -> Optional[TimebaseClient]:
        return self._client

    async def start(self) -> None:
        """Start service.

        Raises:
            StateError: If the service is already running
        """
        if self.is_running:
            raise StateError(f"{self.service_name} service already running")

        if self._client is None:
            self._client = TimebaseClient(
                base_url=self._config.timebase.base_url,
                timeout=self._config.timebase.timeout
            )

        self._is_running = True
        self._start_time = time.monotonic()
        logger.info(f"{self.service_name} service started")

    async def stop(self) -> None:
        """Stop service.

        Raises:
            StateError: If the service is not running
        """
        if not self.is_running:
            raise StateError(f"{self.service_name} service not running")

        self._is_running = False
        self._start_time = None
        logger.info(f"{self.service_name} service stopped")

    async def health(self) -> ServiceHealth:
        """Get service health status."""
        client_ok = self._client is not None
        components = {
            "timebase_client": ComponentHealth.check(client_ok, "Timebase client not initialized")
        }
        overall_ok = self.is_running and client_ok

        return ServiceHealth(
            status="ok" if overall_ok else "error",
            service=self.service_name,
            version=self.version,
            is_running=self.is_running,
            uptime=self.uptime,
            timebase_url=self._config.timebase.base_url,
            timebase_timeout=self._config.timebase.timeout,
            error=None if overall_ok else "Service not running or client missing",
            components=components
        )

    def _check_running(self) -> None:
        if not self.is_running:
            raise StateError(f"{self.service_name} service not running")

    async def fetch_series(
        self,
        dataset: str,
        tag_names: Sequence[str],
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[TagSeries]:
        """Fetch and decode series for the requested tags.

        The result follows `tag_names` order. A tag missing from the
        response becomes an empty series.

        Raises:
            StateError: If the service is not running
            ValidationError: If the query parameters are invalid
            CommunicationError: If the Timebase request fails
            DataError: If the Timebase payload is invalid
        """
        self._check_running()

        try:
            query = DataQuery(dataset=dataset, tag_names=list(tag_names), start=start, end=end)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid data query",
                {"errors": e.errors(include_url=False, include_context=False, include_input=False)}
            )

        response = await self._client.get_data(query)
        by_name = {series.name: series for series in time_series(response)}

        ordered = []
        for name in query.tag_names:
            series = by_name.get(name)
            if series is None:
                logger.warning(f"Tag '{name}' missing from Timebase response for {dataset}")
                series = TagSeries(metadata=TagMetadata(name=name))
            ordered.append(series)
        return ordered

    async def value_at(
        self,
        dataset: str,
        tag_name: str,
        at: datetime,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> Tuple[TagSeries, Optional[Value]]:
        """Get one tag's value at an instant.

        The fetch window ends at `at` unless `end` is given.
        """
        if at.utcoffset() is None:
            raise ValidationError("Timestamp must be timezone-aware", {"at": at.isoformat()})

        series_list = await self.fetch_series(
            dataset, [tag_name], start=start, end=end if end is not None else at
        )
        series = series_list[0]
        return series, value_at(series, at)

    async def resample(
        self,
        dataset: str,
        tag_name: str,
        start: datetime,
        end: datetime,
        interval: timedelta,
        method: ResampleMethod = ResampleMethod.SWEEP
    ) -> Tuple[TagSeries, List[ResampledPoint]]:
        """Resample one tag onto a fixed grid between start and end.

        The grid is checked before anything is fetched.

        Raises:
            ValidationError: If a bound is naive, the interval is not
                positive, or the grid exceeds MAX_GRID_POINTS
        """
        for name, bound in (("start", start), ("end", end)):
            if bound.utcoffset() is None:
                raise ValidationError(
                    f"{name} must be timezone-aware", {name: bound.isoformat()}
                )
        if interval <= timedelta(0):
            raise ValidationError(
                "Interval must be positive",
                {"interval": interval.total_seconds()}
            )
        size = grid_size(start, end, interval)
        if size > MAX_GRID_POINTS:
            raise ValidationError(
                f"Resample grid too large: {size} points",
                {"points": size, "max_points": MAX_GRID_POINTS}
            )

        series_list = await self.fetch_series(dataset, [tag_name], start=start, end=end)
        series = series_list[0]
        points = resample(series, start, end, interval, method=method)

        logger.debug(f"Resampled '{tag_name}' onto {len(points)} grid points")
        return series, points

    async def table(
        self,
        dataset: str,
        tag_names: Sequence[str],
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        emit_final: bool = False
    ) -> Tuple[List[str], List[AlignedRow]]:
        """Align several tags into one change-driven table.

        Rows start at `start` when given, else at the earliest sample.
        """
        series_list = await self.fetch_series(dataset, tag_names, start=start, end=end)
        rows = align(series_list, start=start, emit_final=emit_final)
        return [series.name for series in series_list], rows
