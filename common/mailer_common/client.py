"""Async HTTP client for calling the next stage of the pipeline."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from .config import DownstreamConfig
from .errors import InternalServiceError, ServiceUnavailableError

logger = structlog.get_logger()


class DownstreamClient:
    """POSTs JSON to a downstream service and re-classifies its failures.

    A refused or unresolvable connection becomes
    :class:`ServiceUnavailableError`; any other failure (non-2xx answer,
    timeout, undecodable body) becomes :class:`InternalServiceError`.
    The downstream error body is never passed through.  No retries.
    """

    def __init__(
        self,
        config: DownstreamConfig,
        *,
        service_name: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._service_name = service_name
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._config.url

    async def start(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=self._config.url,
            timeout=httpx.Timeout(self._config.timeout_seconds),
            transport=self._transport,
        )
        logger.info("downstream_client_started", service=self._service_name, base_url=self._config.url)

    async def stop(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            logger.info("downstream_client_stopped", service=self._service_name)

    async def post_json(self, path: str, payload: dict[str, Any], *, failure_message: str) -> dict[str, Any]:
        """POST *payload* to *path* and return the decoded JSON answer."""
        if self._client is None:
            raise AssertionError("Client not started")

        try:
            response = await self._client.post(path, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.ConnectError as exc:
            logger.error("downstream_unavailable", service=self._service_name, path=path, error=str(exc))
            raise ServiceUnavailableError(
                f"{self._service_name.capitalize()} service is not available"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("downstream_request_failed", service=self._service_name, path=path, error=str(exc))
            raise InternalServiceError(failure_message) from exc

        logger.debug(
            "downstream_request_succeeded",
            service=self._service_name,
            path=path,
            status_code=response.status_code,
        )
        return data
