"""Pydantic models for request/response payloads."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LIMIT = 15
# upstream takes limit as a GraphQL Int (signed 32-bit)
MAX_LIMIT = 2**31 - 1


class SearchType(str, Enum):
    URL = "url"
    ITEM = "item"
    NLP = "nlp"


class _Intent(BaseModel):
    model_config = ConfigDict(frozen=True)

    limit: int = Field(DEFAULT_LIMIT, gt=0, le=MAX_LIMIT)


class UrlSearch(_Intent):
    type: Literal["url"] = "url"
    url: str = Field(..., min_length=1)


class ItemSearch(_Intent):
    type: Literal["item"] = "item"
    itemId: str = Field(..., min_length=1)


class NlpSearch(_Intent):
    type: Literal["nlp"] = "nlp"
    query: str = Field(..., min_length=1)
    category: Optional[str] = None


SearchIntent = Union[UrlSearch, ItemSearch, NlpSearch]


@dataclass(frozen=True)
class UpstreamRequest:
    """GraphQL document plus variables, sent as the upstream POST body.

    ``result_key`` names the field of the ``data`` payload that holds the records.
    """

    query: str
    variables: Dict[str, Union[str, int, Sequence[str], None]]
    result_key: str

    def to_body(self) -> Dict[str, Any]:
        return {"query": self.query, "variables": dict(self.variables)}


class NormalizedItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    productTitle: str = "-"
    optionId: str = "-"
    colourVariantId: str = "-"
    url: str = ""
    superCategory: str = "-"
    department: str = "-"
    keySection: str = "-"
    preferredCategory: str = "-"


class SearchResponse(BaseModel):
    items: List[NormalizedItem]


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str
    timestamp: str


class BadRequestResponse(BaseModel):
    error: str


class ErrorResponse(BaseModel):
    error: str
    message: str
