"""Error taxonomy shared by the dispatcher and the HTTP layer."""
from __future__ import annotations

from typing import Dict


class GatewayError(Exception):
    status_code = 500
    error = "Internal error"

    def __init__(self, message: str, *, error: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error

    def to_body(self) -> Dict[str, str]:
        return {"error": self.error, "message": self.message}


class BadRequestError(GatewayError):
    """Malformed or incomplete search intent. No upstream call is made."""

    status_code = 400

    def to_body(self) -> Dict[str, str]:
        return {"error": self.message}


class UpstreamError(GatewayError):
    """Transport failure, non-2xx status or an ``errors`` payload from upstream."""

    status_code = 500
    error = "Failed to fetch search results"

    def __init__(self, message: str, *, status: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail


class NotImplementedFeatureError(GatewayError):
    status_code = 501
    error = "Not implemented"
