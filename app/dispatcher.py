"""Validate search intents, route them upstream and shape the response."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from pydantic import ValidationError

from .errors import BadRequestError, UpstreamError
from .graphql import build_upstream_request
from .models import (
    MAX_LIMIT,
    ItemSearch,
    NlpSearch,
    SearchIntent,
    SearchResponse,
    SearchType,
    UpstreamRequest,
    UrlSearch,
)
from .normalizer import normalize_record
from .url_query import extract_query_from_url

logger = logging.getLogger(__name__)

VALID_TYPES = frozenset(item.value for item in SearchType)
INVALID_TYPE_MESSAGE = 'Invalid search type. Must be "url", "item", or "nlp"'
LIMIT_MESSAGE = f"limit must be a positive integer no greater than {MAX_LIMIT}"

# intent -> (model, required field, message when it is missing)
INTENTS = {
    SearchType.URL: (UrlSearch, "url", "URL is required for URL search"),
    SearchType.ITEM: (ItemSearch, "itemId", "itemId is required for item search"),
    SearchType.NLP: (NlpSearch, "query", "query is required for NLP search"),
}


class SearchBackend(Protocol):
    async def execute(self, request: UpstreamRequest) -> Dict[str, Any]: ...


def _text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str) or not value:
        return None
    return value


def parse_intent(payload: Any) -> SearchIntent:
    """Turn a raw JSON body into one of the three intent models.

    The ``type`` discriminator is checked before anything else; only the field
    required by that intent is read, plus ``limit`` and (for nlp) ``category``.
    """
    if not isinstance(payload, Mapping):
        raise BadRequestError("Request body must be a JSON object")

    kind = payload.get("type")
    if not isinstance(kind, str) or kind not in VALID_TYPES:
        raise BadRequestError(INVALID_TYPE_MESSAGE)
    model, field, missing_message = INTENTS[SearchType(kind)]

    value = _text(payload.get(field))
    if value is None:
        raise BadRequestError(missing_message)

    fields: Dict[str, Any] = {field: value}
    limit = payload.get("limit")
    if isinstance(limit, bool):
        raise BadRequestError(LIMIT_MESSAGE)
    if limit is not None:
        fields["limit"] = limit
    if model is NlpSearch:
        fields["category"] = _text(payload.get("category"))

    try:
        return model.model_validate(fields)
    except ValidationError as exc:
        if any(err["loc"] and err["loc"][0] == "limit" for err in exc.errors()):
            raise BadRequestError(LIMIT_MESSAGE) from exc
        raise BadRequestError(str(exc)) from exc


class IntentDispatcher:
    def __init__(self, backend: SearchBackend) -> None:
        self._backend = backend

    async def search(self, payload: Any) -> SearchResponse:
        intent = parse_intent(payload)
        logger.info("Received search request: type=%s limit=%s", intent.type, intent.limit)

        text_query = None
        if isinstance(intent, UrlSearch):
            text_query = extract_query_from_url(intent.url)
            logger.info("URL search for %s -> query %r", intent.url, text_query)
        elif isinstance(intent, ItemSearch):
            logger.info("Item search for %s", intent.itemId)
        else:
            logger.info("NLP search for %r category=%s", intent.query, intent.category)

        request = build_upstream_request(intent, text_query=text_query)
        data = await self._backend.execute(request)

        records = data.get(request.result_key) or []
        if not isinstance(records, list) or not all(isinstance(rec, Mapping) for rec in records):
            raise UpstreamError(f"Upstream API returned malformed {request.result_key!r} results")

        # Upstream was asked for ``limit`` already; enforce it again after mapping.
        items = [normalize_record(rec) for rec in records][: intent.limit]
        logger.info("Returning %s results", len(items))
        return SearchResponse(items=items)
