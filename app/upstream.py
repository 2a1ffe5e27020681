"""HTTP client for the upstream GraphQL search service.

One ``httpx.AsyncClient`` is created per application and shared by all
requests; it holds no per-request state. Tests inject an ``httpx`` transport.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

import httpx

from .config import Settings
from .errors import UpstreamError
from .models import UpstreamRequest

logger = logging.getLogger(__name__)

MAX_DETAIL_CHARS = 500


class UpstreamClient:
    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._url = settings.upstream_url
        self._client = httpx.AsyncClient(
            timeout=settings.upstream_timeout_seconds,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {settings.upstream_api_key}",
                "X-Integration-Id": settings.integration_id,
            },
        )

    async def execute(self, request: UpstreamRequest) -> Dict[str, Any]:
        """POST ``request`` and return the ``data`` payload.

        Raises ``UpstreamError`` on transport failure or timeout, a non-2xx
        status, a body that is not JSON, or a payload carrying ``errors``.
        """
        try:
            resp = await self._client.post(self._url, json=request.to_body())
        except httpx.TimeoutException as exc:
            logger.error("Upstream call timed out: %s", exc)
            raise UpstreamError(f"Upstream API timed out: {exc}") from exc
        except httpx.RequestError as exc:
            logger.error("Upstream call failed: %s", exc)
            raise UpstreamError(f"Upstream API unreachable: {exc}") from exc

        if resp.is_error:
            body = resp.text[:MAX_DETAIL_CHARS]
            logger.error("Upstream HTTP %s body=%s", resp.status_code, body)
            raise UpstreamError(
                f"Upstream API error ({resp.status_code}): {body}",
                status=resp.status_code,
                detail=body,
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamError("Upstream API returned a non-JSON body", status=resp.status_code) from exc
        if not isinstance(payload, dict):
            raise UpstreamError("Upstream API returned an unexpected payload", status=resp.status_code)

        # A 200 can still carry GraphQL errors.
        errors = payload.get("errors")
        if errors is not None:
            detail = json.dumps(errors)
            logger.error("Upstream reported errors: %s", detail[:MAX_DETAIL_CHARS])
            raise UpstreamError(f"Upstream API errors: {detail}", status=resp.status_code, detail=detail)

        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise UpstreamError("Upstream API returned an unexpected data payload", status=resp.status_code)
        return data

    async def aclose(self) -> None:
        await self._client.aclose()
