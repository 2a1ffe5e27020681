"""Terminal client that reuses the in-process search gateway."""
from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any, Dict, Iterable, List

import httpx

from app.config import ConfigError, Settings
from app.dispatcher import IntentDispatcher
from app.errors import BadRequestError, GatewayError
from app.models import SearchResponse, SearchType
from app.upstream import UpstreamClient

VALUE_FIELDS = {
    SearchType.URL.value: "url",
    SearchType.ITEM.value: "itemId",
    SearchType.NLP.value: "query",
}


def build_payload(kind: str, value: str, category: str | None = None, limit: int | None = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"type": kind}
    field = VALUE_FIELDS.get(kind)
    if field:
        payload[field] = value
    if category:
        payload["category"] = category
    if limit is not None:
        payload["limit"] = limit
    return payload


async def perform_searches(
    settings: Settings,
    payloads: List[Dict[str, Any]],
    transport: httpx.AsyncBaseTransport | None = None,
) -> List[SearchResponse | GatewayError]:
    client = UpstreamClient(settings, transport=transport)
    dispatcher = IntentDispatcher(client)
    outcomes: List[SearchResponse | GatewayError] = []
    try:
        for payload in payloads:
            try:
                outcomes.append(await dispatcher.search(payload))
            except GatewayError as exc:
                outcomes.append(exc)
    finally:
        await client.aclose()
    return outcomes


def pretty_print_response(payload: Dict[str, Any], outcome: SearchResponse | GatewayError) -> None:
    label = payload.get(VALUE_FIELDS.get(payload.get("type", ""), ""), "")
    if isinstance(outcome, GatewayError):
        print(f"[{payload.get('type')}] {label} | error: {outcome.message}")
        return
    print(f"[{payload.get('type')}] {label} | results: {len(outcome.items)}")
    for idx, item in enumerate(outcome.items, start=1):
        print(
            f"  {idx:02d}. {item.productTitle} | option={item.optionId} | colour={item.colourVariantId} | "
            f"{item.superCategory} / {item.department} / {item.keySection} | {item.url or '-'}"
        )


def read_batch(file_path: Path, limit: int | None = None) -> List[Dict[str, Any]]:
    """Each non-blank line is ``<type> <value>``."""
    payloads = []
    with file_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            kind, _, value = line.partition(" ")
            payloads.append(build_payload(kind, value.strip(), limit=limit))
    return payloads


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CLI client for the search gateway")
    parser.add_argument("type", nargs="?", choices=sorted(VALUE_FIELDS), help="Search intent")
    parser.add_argument("value", nargs="?", help="URL, item id or free-text query")
    parser.add_argument("--category", help="Category for nlp searches")
    parser.add_argument("--limit", type=int, help="Maximum number of results")
    parser.add_argument("--batch", type=Path, help="File with '<type> <value>' lines")
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.batch:
        payloads = read_batch(args.batch, args.limit)
    elif args.type and args.value:
        payloads = [build_payload(args.type, args.value, args.category, args.limit)]
    else:
        parser.error("either TYPE VALUE or --batch is required")

    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        print(f"error: {exc}")
        return 2

    outcomes = asyncio.run(perform_searches(settings, payloads))
    for payload, outcome in zip(payloads, outcomes):
        pretty_print_response(payload, outcome)
    if any(isinstance(outcome, BadRequestError) for outcome in outcomes):
        return 1
    if any(isinstance(outcome, GatewayError) for outcome in outcomes):
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
