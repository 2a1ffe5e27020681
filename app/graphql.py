"""GraphQL documents sent upstream, one per search intent."""
from __future__ import annotations

from .models import ItemSearch, NlpSearch, SearchIntent, UpstreamRequest, UrlSearch

# Every document projects the same fields so one normalizer serves all intents.
RESULT_FIELDS = [
    "itemId",
    "title",
    "url",
    "optionId",
    "colourVariantId",
    "superCategory",
    "department",
    "keySection",
    "preferredCategory",
]
_SELECTION = "\n".join(f"    {name}" for name in RESULT_FIELDS)

SEARCH_KEY = "search"
ITEM_RECOMMENDATIONS_KEY = "itemRecommendations"

TEXT_SEARCH_QUERY = f"""query Search($textQuery: String!, $limit: Int!) {{
  search(textQuery: $textQuery, limit: $limit) {{
{_SELECTION}
  }}
}}"""

CATEGORY_SEARCH_QUERY = f"""query Search($textQuery: String!, $categoryIds: [String!], $limit: Int!) {{
  search(textQuery: $textQuery, categoryIds: $categoryIds, limit: $limit) {{
{_SELECTION}
  }}
}}"""

ITEM_RECOMMENDATIONS_QUERY = f"""query ItemRecommendations($itemId: String!, $limit: Int!) {{
  itemRecommendations(itemId: $itemId, limit: $limit) {{
{_SELECTION}
  }}
}}"""


def build_upstream_request(search: SearchIntent, *, text_query: str | None = None) -> UpstreamRequest:
    """Pick the document for ``search`` and fill in its variables.

    URL searches need ``text_query``, the phrase already derived from the URL.
    """
    if isinstance(search, UrlSearch):
        if text_query is None:
            raise ValueError("URL searches need the text query derived from the URL")
        return UpstreamRequest(
            query=TEXT_SEARCH_QUERY,
            variables={"textQuery": text_query, "limit": search.limit},
            result_key=SEARCH_KEY,
        )
    if isinstance(search, ItemSearch):
        return UpstreamRequest(
            query=ITEM_RECOMMENDATIONS_QUERY,
            variables={"itemId": search.itemId, "limit": search.limit},
            result_key=ITEM_RECOMMENDATIONS_KEY,
        )
    if isinstance(search, NlpSearch):
        # Category names are passed through as ids; upstream id lookup is not done here.
        category_ids = [search.category] if search.category else None
        return UpstreamRequest(
            query=CATEGORY_SEARCH_QUERY,
            variables={"textQuery": search.query, "categoryIds": category_ids, "limit": search.limit},
            result_key=SEARCH_KEY,
        )
    raise TypeError(f"Unsupported search intent: {type(search).__name__}")
