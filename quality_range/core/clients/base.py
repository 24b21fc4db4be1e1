"""
Service Client Base
===================

Shared aiohttp plumbing for the platform service clients. Every platform
service answers with a ``{"status", "message", "data"}`` envelope; the helpers
here unwrap it and turn failures into ``ServiceClientError``.
"""

import asyncio
import aiohttp
from typing import Optional, Any, Dict

from quality_range.config.logging import get_logger
from quality_range.config.settings import get_settings
from quality_range.models.schemas import ServiceResult

logger = get_logger(__name__)


class ServiceClientError(Exception):
    """Exception raised when communication with a platform service fails.

    ``status_code`` is the HTTP status; ``envelope_status`` is the business
    status of an envelope reporting failure.
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: Optional[int] = None,
        envelope_status: Optional[int] = None,
    ):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message
        self.status_code = status_code
        self.envelope_status = envelope_status


class ServiceClient:
    """Base client for a platform service reachable over HTTP."""

    service_name = "service"

    def __init__(self, service_url: str, timeout: Optional[float] = None, connect_timeout: Optional[float] = None):
        settings = get_settings()
        self.service_url = service_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.connect_timeout = (
            connect_timeout if connect_timeout is not None else settings.connect_timeout
        )
        self.logger: Any = logger.bind(component=f"{self.service_name}_client")
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout, connect=self.connect_timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the unwrapped envelope ``data``."""
        url = f"{self.service_url}{path}"
        status: Optional[int] = None
        try:
            session = await self._get_session()
            async with session.request(method, url, json=json, params=params) as response:
                status = response.status
                if not 200 <= response.status < 300:
                    error_text = await response.text()
                    self.logger.error(
                        "Service request failed",
                        url=url,
                        status=response.status,
                        response=error_text,
                    )
                    raise ServiceClientError(
                        self.service_name,
                        f"{method} {path} returned {response.status} - {error_text}",
                        status_code=response.status,
                    )
                payload = await response.json(content_type=None)
                result = ServiceResult.model_validate(payload or {})
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error("Service request error", url=url, error=str(e))
            raise ServiceClientError(self.service_name, f"{method} {path} failed: {e}") from e
        except ValueError as e:
            # JSONDecodeError and pydantic ValidationError are both ValueErrors
            self.logger.error("Malformed service response", url=url, error=str(e))
            raise ServiceClientError(
                self.service_name,
                f"{method} {path} returned a malformed response: {e}",
                status_code=status,
            ) from e

        if not result.is_ok:
            self.logger.error(
                "Service returned error status",
                url=url,
                status=result.status,
                message=result.message,
            )
            raise ServiceClientError(
                self.service_name,
                f"{method} {path} returned status {result.status}: {result.message}",
                status_code=response.status,
                envelope_status=result.status,
            )

        self.logger.debug("Service request completed", url=url, has_data=result.data is not None)
        return result.data

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def _post(self, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request("POST", path, json=json, params=params)
