"""Shared fixtures: settings and a scripted upstream GraphQL service."""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from app.config import Settings


class FakeUpstream:
    """Records every outbound request and answers with a scripted response."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"data": {"search": [], "itemRecommendations": []}}
        )
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def reply(self, status_code: int = 200, **kwargs: Any) -> None:
        self.handler = lambda request: httpx.Response(status_code, **kwargs)

    def reply_data(self, data: Dict[str, Any]) -> None:
        self.reply(200, json={"data": data})

    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        upstream_api_key="test-key",
        upstream_url="https://upstream.test/graphql",
        integration_id="integration-123",
        upstream_timeout_seconds=2.0,
    )


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    return FakeUpstream()
