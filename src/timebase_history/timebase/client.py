"""Timebase HTTP client."""

from typing import Optional
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from timebase_history.exceptions import CommunicationError, DataError
from timebase_history.timebase.models import DataQuery, GetDataResponse


DEFAULT_BASE_URL = "http://localhost:4511"
DEFAULT_PORT = 4511
DEFAULT_TIMEOUT = 30.0


class TimebaseClient:
    """Client for the Timebase dataset data endpoint.

    Requests are sent once; failures are reported, not retried.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize Timebase client.

        Args:
            base_url: Server URL, e.g. http://historian:4511
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        try:
            self._base_url = httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise CommunicationError("Invalid base URL", {"base_url": base_url, "error": str(e)})
        if self._base_url.scheme not in ("http", "https") or not self._base_url.host:
            raise CommunicationError("Invalid base URL", {"base_url": base_url})

        self._timeout = timeout
        self._transport = transport
        logger.info(f"Initialized Timebase client for {self._base_url}")

    @classmethod
    def from_host(
        cls,
        host: str,
        port: int = DEFAULT_PORT,
        scheme: str = "http",
        timeout: float = DEFAULT_TIMEOUT
    ) -> "TimebaseClient":
        """Create a client from host parts."""
        return cls(f"{scheme}://{host}:{port}", timeout=timeout)

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def data_url(self, query: DataQuery) -> httpx.URL:
        """Build the data URL for a query.

        Args:
            query: Data query

        Returns:
            Absolute URL including query parameters
        """
        path = f"api/datasets/{quote(query.dataset, safe='')}/data"
        return self._base_url.join(path).copy_merge_params(query.query_params())

    async def get_data(self, query: DataQuery) -> GetDataResponse:
        """Fetch tag data for a query.

        Args:
            query: Data query

        Returns:
            Decoded response

        Raises:
            CommunicationError: If the request fails or the status is not 2xx
            DataError: If the response body is not a valid payload
        """
        url = self.data_url(query)
        logger.info(f"GET {url}")

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Timebase request failed: {str(e)}")
            raise CommunicationError(
                "Timebase request failed",
                {"url": str(url), "error": str(e)}
            )

        if not response.is_success:
            logger.error(f"Timebase request failed with status {response.status_code}")
            raise CommunicationError(
                f"HTTP request failed with status code {response.status_code}",
                {"url": str(url), "status_code": response.status_code}
            )

        try:
            return GetDataResponse.model_validate_json(response.content)
        except PydanticValidationError as e:
            logger.error(f"Invalid Timebase payload: {str(e)}")
            raise DataError(
                "Invalid Timebase payload",
                {
                    "url": str(url),
                    "errors": e.errors(include_url=False, include_context=False, include_input=False)
                }
            )
